"""Structured JSON-lines logging for git operations and app lifecycle."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from gitrovo.config.schema import LoggerConfig

LOGGER_NAME = "gitrovo"

_LEVELS: Dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

# Attributes every LogRecord carries; anything else came in through `extra`.
_RESERVED = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None)).keys()
) | {"message", "asctime"}


def parse_level(level: str) -> int:
    """Map a config level name to a logging level. Unknown names → INFO."""
    return _LEVELS.get(level.lower(), logging.INFO)


class JsonFormatter(logging.Formatter):
    """Render each record as a single JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "msg": record.getMessage(),
            "source": f"{record.pathname}:{record.lineno}",
        }
        for key, value in vars(record).items():
            if key not in _RESERVED:
                payload[key] = value
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def setup_logging(config: LoggerConfig) -> logging.Logger:
    """Configure the ``gitrovo`` logger from *config* and return it."""
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = False

    if not config.enabled:
        logger.addHandler(logging.NullHandler())
        return logger

    path = Path(config.resolved_file_path()).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, mode="a", encoding="utf-8")
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)
    logger.setLevel(parse_level(config.level))
    return logger


def log_git_operation(
    logger: logging.Logger,
    operation: str,
    args: Sequence[str],
    work_dir: str,
    success: bool,
    output: str,
    error: Optional[BaseException] = None,
) -> None:
    """Record one git invocation with its arguments and captured output."""
    fields: Dict[str, Any] = {
        "operation": operation,
        "git_args": list(args),
        "work_dir": work_dir,
        "success": success,
        "output": output,
    }
    if error is not None:
        fields["error"] = str(error)
        logger.error("Git operation failed", extra=fields)
    else:
        logger.info("Git operation completed", extra=fields)


def log_app_start(logger: logging.Logger, version: str, config_path: Optional[str]) -> None:
    handlers: List[str] = [
        h.baseFilename for h in logger.handlers if isinstance(h, logging.FileHandler)
    ]
    logger.info(
        "Application started",
        extra={
            "version": version,
            "config_path": config_path or "",
            "log_path": handlers[0] if handlers else "",
        },
    )


def log_config_load(
    logger: logging.Logger,
    config_path: Optional[str],
    success: bool,
    error: Optional[BaseException] = None,
) -> None:
    fields: Dict[str, Any] = {"config_path": config_path or "", "success": success}
    if error is not None:
        fields["error"] = str(error)
        logger.error("Configuration loading failed", extra=fields)
    else:
        logger.info("Configuration loaded", extra=fields)
