"""Panics as a shortcut for returning errors.

raise_panic aborts the current call with an AnnotatedError. The function
meant to stop it catches the exception and hands it to recover_to_error,
which returns the error annotated with the frames it unwound through:

    def load(path):
        try:
            parse(path)  # may call raise_panic deep inside
        except Exception as e:
            return recover_to_error(e)
        return None

Only AnnotatedError is converted. Every other exception is re-raised as is.
"""

import functools
import logging
from typing import NoReturn

from .callsite import capture_all
from .chain import CALLER_DEPTH, AnnotatedError, reason_at
from .frames import format_frames, trim_frames, visible_frames

logger = logging.getLogger(__name__)


def raise_panic(fmt: str, *args) -> NoReturn:
    """Equivalent to raise reason(fmt, *args), located at the caller."""
    raise reason_at(CALLER_DEPTH, fmt, *args)


def recover_to_error(exc: BaseException | None) -> AnnotatedError | None:
    """Convert a caught AnnotatedError into an error carrying its panic trace.

    Returns None for None. Any exception that is not an AnnotatedError is
    re-raised unchanged.
    """
    if exc is None:
        return None
    if not isinstance(exc, AnnotatedError):
        logger.debug(f"Re-raising foreign {type(exc).__name__}: {exc}")
        raise exc

    frames = visible_frames(trim_frames(capture_all(exc)))
    if not frames:
        logger.debug("No panic frames found, returning the error without a trace")
        return exc
    return AnnotatedError(format_frames(frames), wrapped=exc)


def recovered(func):
    """Decorator: return escaping AnnotatedErrors instead of raising them.

    A normal return value passes through, and so does any other exception.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except AnnotatedError as e:
            return recover_to_error(e)

    return wrapper
