"""Chained, source-located errors.

    err = reason("x = %d is negative", x)
    err = annotate(err, "cannot use %d", x)

See chainerr.panic for turning raise_panic aborts back into errors.
"""

from .callsite import Frame, call_site
from .chain import AnnotatedError, annotate, annotate_at, reason, reason_at
from .config import ChainConfig, ChainSettings, ConfigError, configure, get_config
from .frames import format_frames, trim_frames
from .panic import raise_panic, recover_to_error, recovered
from .search import extract_as, iter_chain, matches

__all__ = [
    "AnnotatedError",
    "ChainConfig",
    "ChainSettings",
    "ConfigError",
    "Frame",
    "annotate",
    "annotate_at",
    "call_site",
    "configure",
    "extract_as",
    "format_frames",
    "get_config",
    "iter_chain",
    "matches",
    "raise_panic",
    "reason",
    "reason_at",
    "recover_to_error",
    "recovered",
    "trim_frames",
]
