"""
Application logging utilities.

Configures a root logger with a stream handler, level from settings, and a
lightweight JSON-like formatter for structured logs. Values passed through
``extra=`` are included in the payload.
"""

import json
import logging
import sys
from typing import Any, Dict

from .config import get_settings

_RESERVED = set(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}


def _extras(record: logging.LogRecord) -> Dict[str, Any]:
    """Fields attached with ``extra=``, i.e. anything a bare LogRecord does not have."""
    return {k: v for k, v in record.__dict__.items() if k not in _RESERVED and not k.startswith("_")}


class _JsonLikeFormatter(logging.Formatter):
    """One JSON object per line: timestamp, level, logger, message, source location, extras."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for attr in ("pathname", "lineno", "funcName"):
            payload[attr] = getattr(record, attr, None)
        payload.update(_extras(record))
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def _configure_root_logger() -> None:
    """Install the stdout JSON handler on the root logger, replacing any existing handlers. Runs once."""
    settings = get_settings()
    root = logging.getLogger()
    if getattr(root, "_configured_by_app", False):
        return

    for h in list(root.handlers):
        root.removeHandler(h)

    level = getattr(logging, (settings.LOG_LEVEL or "INFO").upper(), logging.INFO)
    root.setLevel(level)

    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(_JsonLikeFormatter())
    root.addHandler(handler)

    setattr(root, "_configured_by_app", True)


# PUBLIC_INTERFACE
def get_logger(name: str = "inventory") -> logging.Logger:
    """Get a configured logger instance.

    Ensures the root logger is configured before returning the named logger.
    """
    _configure_root_logger()
    return logging.getLogger(name)
