"""Load and merge configuration from .commitguard.toml, repository YAML, and env vars."""

from __future__ import annotations

import dataclasses
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

import yaml

from commitguard.config.schema import (
    CheckSettings,
    CommitGuardConfig,
    ConfigError,
    JiraConfig,
    OutputConfig,
    UserConfig,
)
from commitguard.config.settings import Settings

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".commitguard.toml"
REPOSITORY_SETTINGS_FILENAME = "commitguard.yaml"


def find_config_file(repo_root: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence, then COMMITGUARD_CONFIG."""
    override = override or os.environ.get("COMMITGUARD_CONFIG")
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = repo_root / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def load_repository_settings(git_dir: Optional[Path]) -> Dict[str, Any]:
    """Read per-repository check overrides from ``<git dir>/commitguard.yaml``."""
    if git_dir is None:
        return {}
    path = git_dir / REPOSITORY_SETTINGS_FILENAME
    if not path.is_file():
        return {}
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a mapping of check options")
    logger.debug("Repository overrides from %s: %s", path, sorted(data))
    return data


def _merge_env_overrides(cfg: CommitGuardConfig, checks: Settings) -> Dict[str, Any]:
    """Apply CI_COMMITGUARD_* environment variable overrides.

    Returns the check options to layer over *checks*.
    """
    overrides: Dict[str, Any] = {}
    if val := os.environ.get("CI_COMMITGUARD_FORMAT"):
        if val in ("terminal", "json"):
            cfg.output.format = val  # type: ignore[assignment]
    if val := os.environ.get("CI_COMMITGUARD_EXCLUDE_USERS"):
        existing = checks.get_string("excludeUsers")
        overrides["excludeUsers"] = f"{existing},{val}" if existing else val
    if val := os.environ.get("CI_COMMITGUARD_JIRA_URL"):
        cfg.jira.url = val
    return overrides


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in data.get(section, {}).items() if k in valid_fields}
    return cls(**filtered)


def load_config(
    repo_root: Path,
    config_override: Optional[str] = None,
    git_dir: Optional[Path] = None,
) -> CommitGuardConfig:
    """Load, validate, and return a CommitGuardConfig."""
    config_path = find_config_file(repo_root, config_override)

    raw: Dict[str, Any] = {} if config_path is None else _parse_toml(config_path)
    checks_raw = raw.get("checks", {})
    if not isinstance(checks_raw, dict):
        raise ConfigError("[checks] must be a table")

    cfg = CommitGuardConfig(
        version=raw.get("version", "1.0"),
        jira=_build_section(raw, JiraConfig, "jira"),
        user=_build_section(raw, UserConfig, "user"),
        output=_build_section(raw, OutputConfig, "output"),
    )

    checks = Settings(checks_raw).merged(load_repository_settings(git_dir))
    cfg.checks = CheckSettings.from_settings(checks.merged(_merge_env_overrides(cfg, checks)))

    if cfg.output.format not in ("terminal", "json"):
        raise ConfigError(f"Invalid output format: {cfg.output.format}")
    return cfg
