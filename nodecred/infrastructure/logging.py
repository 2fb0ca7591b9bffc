"""
Centralized Logging

Architectural Intent:
- Provides structured JSON logging for all nodecred components
- Centralizes log configuration on the "nodecred" logger
- Supports configurable log levels via CLI flags (--verbose, --debug)
  or the log_level config setting
"""

import json
import logging
import sys
from datetime import datetime, UTC
from typing import Union


class JSONFormatter(logging.Formatter):
    """Structured JSON log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry)


def resolve_level(level: Union[int, str]) -> int:
    """Translate a level name like "debug" into its logging constant."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def configure_logging(
    level: Union[int, str] = logging.INFO,
    json_format: bool = False,
) -> None:
    """Configure logging for nodecred.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, etc.), as int or name
        json_format: If True, use JSON structured output. Otherwise human-readable.
    """
    level = resolve_level(level)
    root = logging.getLogger("nodecred")
    root.setLevel(level)

    # Remove existing handlers
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)

    if json_format:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        )

    root.addHandler(handler)
