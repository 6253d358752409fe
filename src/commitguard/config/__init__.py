"""Configuration loading, settings source, and schema."""

from commitguard.config.loader import load_config
from commitguard.config.schema import CheckSettings, CommitGuardConfig, ConfigError
from commitguard.config.settings import Settings

__all__ = [
    "CheckSettings",
    "CommitGuardConfig",
    "ConfigError",
    "Settings",
    "load_config",
]
