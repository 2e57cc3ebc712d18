"""Configuration loader for chainerr settings files (.chainerr.yaml)."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

import pathspec
import yaml

logger = logging.getLogger(__name__)

# Environment variable naming a settings file to load on first use
CONFIG_ENV_VAR = "CHAINERR_CONFIG"

DEFAULT_MAX_FRAMES = 64
DEFAULT_FULL_PATHS = True
DEFAULT_IGNORE_PATTERNS: list[str] = []


class ConfigError(Exception):
    """Raised when chainerr configuration is invalid."""

    pass


@dataclass
class ChainSettings:
    # Upper bound on frames captured when converting a panic
    max_frames: int = DEFAULT_MAX_FRAMES

    # Render absolute file paths (False = base name only)
    full_paths: bool = DEFAULT_FULL_PATHS

    # gitwildmatch patterns; matching files are dropped from panic traces
    ignore_patterns: list[str] = field(default_factory=lambda: DEFAULT_IGNORE_PATTERNS.copy())


class FrameFilter:
    """Decides which trace frames are hidden, based on ignore_patterns."""

    def __init__(self, patterns: list[str]):
        self.patterns = list(patterns)
        try:
            self._matcher = pathspec.PathSpec.from_lines("gitwildmatch", self.patterns)
        except (TypeError, ValueError) as e:
            logger.warning(f"Ignoring invalid ignore_patterns {self.patterns!r}: {e}")
            self._matcher = pathspec.PathSpec.from_lines("gitwildmatch", [])

    def is_hidden(self, file: str) -> bool:
        if not self.patterns:
            return False
        return self._matcher.match_file(file)


@dataclass
class ChainConfig:
    settings: ChainSettings

    def __post_init__(self):
        self.frame_filter = FrameFilter(self.settings.ignore_patterns)

    @classmethod
    def load(cls, config_path: Path) -> "ChainConfig":
        """Load config from a .chainerr.yaml file."""
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        try:
            with open(config_path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

        # An empty file is a valid, all-defaults config
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(
                f"Config must be a YAML mapping, got {type(data).__name__}"
            )

        settings_data = data.get("settings", {})
        if not isinstance(settings_data, dict):
            raise ConfigError("settings must be a mapping")

        max_frames = settings_data.get("max_frames", DEFAULT_MAX_FRAMES)
        if isinstance(max_frames, bool) or not isinstance(max_frames, int) or max_frames < 1:
            raise ConfigError(f"max_frames must be a positive integer, got {max_frames!r}")

        full_paths = settings_data.get("full_paths", DEFAULT_FULL_PATHS)
        if not isinstance(full_paths, bool):
            raise ConfigError(f"full_paths must be a boolean, got {full_paths!r}")

        ignore_patterns = settings_data.get("ignore_patterns", DEFAULT_IGNORE_PATTERNS)
        if not isinstance(ignore_patterns, list) or not all(
            isinstance(p, str) for p in ignore_patterns
        ):
            raise ConfigError("ignore_patterns must be a list of strings")

        settings = ChainSettings(
            max_frames=max_frames,
            full_paths=full_paths,
            ignore_patterns=list(ignore_patterns),
        )
        return cls(settings=settings)

    @classmethod
    def default(cls) -> "ChainConfig":
        """Create a config with default settings."""
        return cls(settings=ChainSettings())

    @classmethod
    def from_env(cls) -> "ChainConfig":
        """Load the file named by CHAINERR_CONFIG, or fall back to defaults."""
        path = os.environ.get(CONFIG_ENV_VAR)
        if not path:
            return cls.default()
        logger.debug(f"Loading chainerr config from {path}")
        return cls.load(Path(path))


_active: ChainConfig | None = None


def configure(config: ChainConfig | None) -> None:
    """Install the active config. None resets to lazy loading from the environment."""
    global _active
    _active = config


def get_config() -> ChainConfig:
    """Return the active config, loading it from the environment on first use.

    A missing or invalid CHAINERR_CONFIG file falls back to defaults: error
    construction must never fail because of configuration.
    """
    global _active
    config = _active
    if config is None:
        try:
            config = ChainConfig.from_env()
        except (OSError, ConfigError) as e:
            logger.warning(f"Failed to load chainerr config, using defaults: {e}")
            config = ChainConfig.default()
        _active = config
    return config
