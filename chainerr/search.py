"""Searching an error chain for a specific error or error type."""

from collections.abc import Iterator
from typing import TypeVar

E = TypeVar("E", bound=BaseException)


def _next_in_chain(err: BaseException) -> BaseException | None:
    unwrap = getattr(err, "unwrap", None)
    if callable(unwrap):
        return unwrap()
    return err.__cause__


def iter_chain(err: BaseException | None) -> Iterator[BaseException]:
    """Yield err and every error it wraps, newest first.

    Follows unwrap() where an error defines it, __cause__ otherwise.
    """
    seen: set[int] = set()
    while err is not None and id(err) not in seen:
        seen.add(id(err))
        yield err
        err = _next_in_chain(err)


def matches(err: BaseException | None, target: BaseException) -> bool:
    """Report whether any error in err's chain matches target.

    An entry matches if it is target, compares equal to it, or defines a
    matches(target) method that returns True.
    """
    for e in iter_chain(err):
        if e is target or e == target:
            return True
        hook = getattr(e, "matches", None)
        if callable(hook) and hook(target):
            return True
    return False


def extract_as(err: BaseException | None, cls: type[E]) -> E | None:
    """Return the first error in err's chain that is an instance of cls, or None."""
    for e in iter_chain(err):
        if isinstance(e, cls):
            return e
    return None
