"""Structured logging helpers for abi-coder.

The package stays silent unless the host application configures logging or
calls :func:`configure_logging`.  Every encode/decode action is mirrored as a
JSON line on the ``abi_coder.events`` logger so that callers can trace which
fragment a payload was resolved against.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from typing import Any, Dict, Optional

LOGGER_NAME = "abi_coder"
EVENTS_LOGGER_NAME = "abi_coder.events"
LOG_LEVEL_ENV = "ABI_CODER_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"

logging.getLogger(LOGGER_NAME).addHandler(logging.NullHandler())


def get_logger(name: Optional[str] = None) -> logging.Logger:
    if not name:
        return logging.getLogger(LOGGER_NAME)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """Attach a stream handler to the package logger once and return it.

    Without an explicit ``level`` the ``ABI_CODER_LOG_LEVEL`` environment
    variable is used when set.
    """

    level = level or os.getenv(LOG_LEVEL_ENV)
    logger = logging.getLogger(LOGGER_NAME)
    if level:
        logger.setLevel(level.upper())
    if any(isinstance(handler, logging.StreamHandler) for handler in logger.handlers):
        return logger
    formatter = logging.Formatter("%(asctime)s - abi_coder - %(levelname)s - %(message)s")
    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)
    return logger


def _serialise(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()
    return str(value)


def log_event(action: str, *, ok: bool = True, **payload: Any) -> Dict[str, Any]:
    """Emit a JSON record for ``action`` and return it."""

    entry: Dict[str, Any] = {"action": action, "ok": bool(ok), **payload}
    logger = logging.getLogger(EVENTS_LOGGER_NAME)
    level = logging.DEBUG if ok else logging.WARNING
    if logger.isEnabledFor(level):
        logger.log(level, json.dumps(entry, sort_keys=True, default=_serialise))
    return entry


__all__ = [
    "DEFAULT_LOG_LEVEL",
    "EVENTS_LOGGER_NAME",
    "LOGGER_NAME",
    "LOG_LEVEL_ENV",
    "configure_logging",
    "get_logger",
    "log_event",
]
