"""Typed configuration sections loaded from .git-rovo.toml."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, Optional

LogLevel = Literal["debug", "info", "warn", "warning", "error"]
OutputFormat = Literal["terminal", "json"]

LOG_LEVELS = ("debug", "info", "warn", "warning", "error")
OUTPUT_FORMATS = ("terminal", "json")

DEFAULT_LOG_PATH = Path("~/.local/share/git-rovo/git-rovo.log")


@dataclass
class GitConfig:
    show_untracked: bool = True  # include untracked files in `diff`
    timeout: int = 0  # seconds per git invocation; 0 = wait forever
    max_untracked_bytes: int = 1024 * 1024

    def timeout_seconds(self) -> Optional[int]:
        return self.timeout if self.timeout > 0 else None


@dataclass
class LoggerConfig:
    enabled: bool = True
    level: LogLevel = "info"
    file_path: str = ""  # empty = DEFAULT_LOG_PATH

    def resolved_file_path(self) -> Path:
        return Path(self.file_path).expanduser() if self.file_path else DEFAULT_LOG_PATH.expanduser()


@dataclass
class OutputConfig:
    format: OutputFormat = "terminal"


@dataclass
class RovoConfig:
    version: str = "1.0"
    git: GitConfig = field(default_factory=GitConfig)
    logger: LoggerConfig = field(default_factory=LoggerConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    source: Optional[Path] = None  # file the config was read from, if any
