"""Shared pytest fixtures."""

import pytest

from chainerr.config import CONFIG_ENV_VAR, ChainConfig, configure


@pytest.fixture(autouse=True)
def default_config(monkeypatch):
    """Run every test against default settings, regardless of the environment."""
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    config = ChainConfig.default()
    configure(config)
    yield config
    configure(None)


@pytest.fixture
def sample_yaml_config(tmp_path):
    """Create a sample .chainerr.yaml config file."""
    config_content = """
settings:
  max_frames: 32
  full_paths: false
  ignore_patterns: ["*/site-packages/*", "vendored_*.py"]
"""
    config_path = tmp_path / ".chainerr.yaml"
    config_path.write_text(config_content)
    return config_path
