"""Utility helpers exposed by abi-coder."""

from .artifacts import load_abi_from_file, unwrap_abi
from .logbook import configure_logging, get_logger, log_event

__all__ = [
    "configure_logging",
    "get_logger",
    "load_abi_from_file",
    "log_event",
    "unwrap_abi",
]
