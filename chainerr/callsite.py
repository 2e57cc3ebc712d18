"""Call-site capture: turning interpreter frames into file/line/function locations."""

import os
import sys
from dataclasses import dataclass, field
from types import FrameType

from .config import get_config

# Location text used when the requested frame does not exist
UNKNOWN_LOCATION = "???: "


@dataclass(frozen=True)
class Frame:
    """One captured stack entry."""

    file: str
    line: int
    function: str  # <module>.<qualname>, e.g. "tests.test_panic.fn_c"
    # co_filename as compiled, regardless of full_paths; empty means same as file
    path: str = field(default="", compare=False)


def qualified_name(module: str | None, qualname: str) -> str:
    """Join a module name and a function qualname the way frames report them."""
    if not module:
        return qualname
    return f"{module}.{qualname}"


def _display_file(filename: str) -> str:
    if get_config().settings.full_paths:
        return filename
    return os.path.basename(filename)


def resolve(frame: FrameType, lineno: int | None = None) -> Frame:
    """Snapshot an interpreter frame.

    Args:
        frame: The live frame object.
        lineno: Line to report instead of frame.f_lineno. Traceback entries
            carry their own line, which is where the exception passed through.
    """
    code = frame.f_code
    return Frame(
        file=_display_file(code.co_filename),
        line=frame.f_lineno if lineno is None else lineno,
        function=qualified_name(frame.f_globals.get("__name__"), code.co_qualname),
        path=code.co_filename,
    )


def call_site(skip: int = 0) -> str:
    """Return "<file>:<line>: <function>() " for a frame above the caller.

    skip=0 is the function calling call_site, skip=1 its caller, and so on.
    Returns UNKNOWN_LOCATION if the stack is not that deep.
    """
    try:
        frame = sys._getframe(skip + 1)
    except ValueError:
        return UNKNOWN_LOCATION
    f = resolve(frame)
    return f"{f.file}:{f.line}: {f.function}() "


def capture_all(exc: BaseException, skip: int = 0) -> list[Frame]:
    """Capture the frames relevant to recovering from exc, innermost first.

    The frames exc unwound through (from its traceback) come first, followed
    by the live stack starting at the caller of capture_all (shifted by skip)
    and running outward.
    """
    limit = get_config().settings.max_frames

    unwound = []
    tb = exc.__traceback__
    while tb is not None:
        unwound.append(resolve(tb.tb_frame, tb.tb_lineno))
        tb = tb.tb_next
    # Tracebacks run outermost first
    unwound.reverse()

    frames = unwound[:limit]
    try:
        frame = sys._getframe(skip + 1)
    except ValueError:
        return frames
    while frame is not None and len(frames) < limit:
        frames.append(resolve(frame))
        frame = frame.f_back
    return frames
