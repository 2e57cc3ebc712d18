"""Annotated errors: exceptions tagged with their call site, chained newest-first.

Example usage:

    def parse_port(value):
        if not value.isdigit():
            return reason("port %r is not a number", value)
        ...

    err = parse_port(raw)
    if err is not None:
        return annotate(err, "cannot configure listener %s", name)
"""

import logging

from .callsite import call_site

logger = logging.getLogger(__name__)

# Depth the convenience builders pass on: one level above reason / annotate
CALLER_DEPTH = 2

ERROR_PREFIX = "ERROR: "


class AnnotatedError(Exception):
    """An error message tagged with its location, optionally wrapping an earlier error.

    str() renders this node's message followed by the rendering of everything
    it wraps, one entry per line, newest first.
    """

    def __init__(self, message: str, wrapped: BaseException | None = None):
        super().__init__(message)
        self._message = message
        self._wrapped = wrapped
        # Also shown by the standard traceback printer
        self.__cause__ = wrapped

    @property
    def message(self) -> str:
        return self._message

    @property
    def wrapped(self) -> BaseException | None:
        return self._wrapped

    def unwrap(self) -> BaseException | None:
        """Return the error being annotated, or None."""
        return self._wrapped

    def __str__(self) -> str:
        if self._wrapped is None:
            return self._message
        return f"{self._message}\n{self._wrapped}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._message!r}, wrapped={self._wrapped!r})"


def _safe_repr(value) -> str:
    try:
        return repr(value)
    except Exception:
        return object.__repr__(value)


def format_message(fmt: str, args: tuple) -> str:
    """Apply printf-style formatting without ever raising.

    With no args, fmt is used verbatim (as logging does), so "100%" is safe
    and "%%" is not collapsed.
    """
    if not args:
        return fmt
    try:
        return fmt % args
    except Exception as e:
        # Covers bad format strings as well as arguments whose __str__ raises
        logger.warning(f"Bad format string {fmt!r} for {len(args)} argument(s): {e!r}")
        return f"{fmt} %!(BADFORMAT {', '.join(_safe_repr(a) for a in args)})"


def _located(depth: int, fmt: str, args: tuple) -> str:
    # depth counts from the caller of reason_at / annotate_at; this helper
    # and the builder itself account for the extra level.
    return ERROR_PREFIX + call_site(depth + 1) + format_message(fmt, args)


def reason_at(depth: int, fmt: str, *args) -> AnnotatedError:
    """Return a new error located `depth` levels up.

    depth=1 is the function calling reason_at, depth=2 its caller, etc.
    Formatting follows the % operator, but only when args are given: without
    args fmt is taken literally, so reason("100%%") keeps both percent signs.
    """
    return AnnotatedError(_located(depth, fmt, args))


def annotate_at(
    err: BaseException | None, depth: int, fmt: str, *args
) -> AnnotatedError | None:
    """Wrap err with a message located `depth` levels up. None stays None."""
    if err is None:
        return None
    return AnnotatedError(_located(depth, fmt, args), wrapped=err)


def reason(fmt: str, *args) -> AnnotatedError:
    """Return a new error located at the caller."""
    return reason_at(CALLER_DEPTH, fmt, *args)


def annotate(err: BaseException | None, fmt: str, *args) -> AnnotatedError | None:
    """Wrap err with a message located at the caller. None stays None."""
    return annotate_at(err, CALLER_DEPTH, fmt, *args)
