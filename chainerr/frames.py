"""Frame trimming and rendering for converted panics.

Captured frames arrive innermost first. Trimming keeps only the span between
the abort dispatch (raise_panic) and the recovery routine, then flips it so
the trace reads top-down: who called whom, ending at the failure.
"""

from collections.abc import Iterable, Sequence

from .callsite import Frame, qualified_name
from .config import get_config

PANIC_PREFIX = "PANIC: "

# Abort dispatch: everything up to and including it is library internals
PANIC_MARKERS: frozenset[str] = frozenset({
    qualified_name("chainerr.panic", "raise_panic"),
})

# Recovery routines: they and everything outside them are not part of the trace
ENTRY_MARKERS: frozenset[str] = frozenset({
    qualified_name("chainerr.panic", "recover_to_error"),
    qualified_name("chainerr.panic", "recovered.<locals>.wrapper"),
})


def _index_of(frames: Sequence[Frame], markers: frozenset[str]) -> int | None:
    for i, f in enumerate(frames):
        if f.function in markers:
            return i
    return None


def trim_frames(frames: Sequence[Frame]) -> list[Frame]:
    """Keep the frames between the panic and the recovery point, outermost first.

    If a marker is missing, that side is left as is: extra frames are
    preferable to losing real ones.
    """
    kept = list(frames)

    i = _index_of(kept, PANIC_MARKERS)
    if i is not None:
        kept = kept[i + 1:]

    i = _index_of(kept, ENTRY_MARKERS)
    if i is not None:
        kept = kept[:i]

    kept.reverse()
    return kept


def visible_frames(frames: Iterable[Frame]) -> list[Frame]:
    """Drop frames from files matched by the configured ignore_patterns.

    Patterns are matched against the full source path, even with full_paths off.
    """
    frame_filter = get_config().frame_filter
    return [f for f in frames if not frame_filter.is_hidden(f.path or f.file)]


def format_frame(frame: Frame) -> str:
    return f"{PANIC_PREFIX}{frame.file}:{frame.line} {frame.function}()"


def format_frames(frames: Iterable[Frame]) -> str:
    """Render one PANIC: line per frame, in the given order."""
    return "\n".join(format_frame(f) for f in frames)
