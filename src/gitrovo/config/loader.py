"""Load and merge configuration from .git-rovo.toml and env vars."""

from __future__ import annotations

import dataclasses
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from gitrovo.config.schema import (
    LOG_LEVELS,
    OUTPUT_FORMATS,
    GitConfig,
    LoggerConfig,
    OutputConfig,
    RovoConfig,
)

CONFIG_FILENAME = ".git-rovo.toml"


class ConfigError(Exception):
    """Raised for a missing, unparsable or invalid config file."""


def _candidate_paths(repo_root: Optional[Path]) -> List[Path]:
    candidates: List[Path] = []
    if repo_root is not None:
        candidates.append(repo_root / CONFIG_FILENAME)
    home = Path.home()
    candidates.append(home / CONFIG_FILENAME)
    candidates.append(home / ".config" / "git-rovo" / "config.toml")
    return candidates


def find_config_file(
    repo_root: Optional[Path] = None, override: Optional[str] = None
) -> Optional[Path]:
    """Return the first config file found, or None. *override* must exist."""
    if override:
        p = Path(override).expanduser()
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    for candidate in _candidate_paths(repo_root):
        if candidate.is_file():
            return candidate
    return None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Instantiate *cls* from one TOML table. Unknown keys are dropped.

    Each value must have the type of the field's default.
    """
    defaults = {f.name: f.default for f in dataclasses.fields(cls)}
    raw = data.get(section, {})
    if not isinstance(raw, dict):
        raise ConfigError(f"[{section}] must be a table")
    filtered = {k: v for k, v in raw.items() if k in defaults}
    for key, value in filtered.items():
        expected = type(defaults[key])
        # bool is an int subclass; `timeout = true` is still wrong.
        if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
            raise ConfigError(
                f"Invalid {section}.{key} {value!r} (expected {expected.__name__})"
            )
    return cls(**filtered)


def _validate(cfg: RovoConfig) -> None:
    if cfg.logger.level not in LOG_LEVELS:
        raise ConfigError(
            f"Invalid logger.level {cfg.logger.level!r} (expected one of {', '.join(LOG_LEVELS)})"
        )
    if cfg.output.format not in OUTPUT_FORMATS:
        raise ConfigError(
            f"Invalid output.format {cfg.output.format!r} (expected terminal or json)"
        )
    if cfg.git.timeout < 0:
        raise ConfigError("git.timeout must not be negative")


def _merge_env_overrides(cfg: RovoConfig) -> None:
    """Apply GIT_ROVO_* environment variable overrides."""
    if val := os.environ.get("GIT_ROVO_LOG_LEVEL"):
        if val.lower() in LOG_LEVELS:
            cfg.logger.level = val.lower()  # type: ignore[assignment]
    if val := os.environ.get("GIT_ROVO_LOG_FILE"):
        cfg.logger.file_path = val
    if val := os.environ.get("GIT_ROVO_SHOW_UNTRACKED"):
        cfg.git.show_untracked = val.lower() not in ("0", "false", "no")
    if val := os.environ.get("GIT_ROVO_FORMAT"):
        if val in OUTPUT_FORMATS:
            cfg.output.format = val  # type: ignore[assignment]


def load_config(
    repo_root: Optional[Path] = None,
    config_override: Optional[str] = None,
) -> RovoConfig:
    """Load, validate, and return a RovoConfig."""
    config_path = find_config_file(repo_root, config_override)

    if config_path is None:
        cfg = RovoConfig()
    else:
        raw = _parse_toml(config_path)
        cfg = RovoConfig(
            version=str(raw.get("version", "1.0")),
            git=_build_section(raw, GitConfig, "git"),
            logger=_build_section(raw, LoggerConfig, "logger"),
            output=_build_section(raw, OutputConfig, "output"),
            source=config_path,
        )
        _validate(cfg)

    _merge_env_overrides(cfg)
    return cfg
