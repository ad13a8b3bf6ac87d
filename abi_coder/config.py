"""Runtime settings resolved from ``.env`` files and the environment.

A :class:`~abi_coder.Coder` never reads the environment on its own; callers
that want environment driven behaviour pass ``settings=load_settings()``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .utils.logbook import DEFAULT_LOG_LEVEL, LOG_LEVEL_ENV

STRICT_NAMES_ENV = "ABI_CODER_STRICT_NAMES"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


def _parse_bool(key: str, raw: Optional[str], default: bool) -> bool:
    if raw is None:
        return default
    lowered = raw.strip().lower()
    if lowered in _TRUTHY:
        return True
    if lowered in _FALSY:
        return False
    raise ValueError(f"Unable to parse boolean value '{raw}' for {key}")


@dataclass(frozen=True)
class Settings:
    """Snapshot of the knobs that influence a :class:`~abi_coder.Coder`."""

    strict_names: bool = False
    log_level: str = DEFAULT_LOG_LEVEL


def load_settings(env_path: Optional[Path] = None) -> Settings:
    """Read settings from the environment.

    When ``env_path`` is given the file is loaded first with
    ``override=False`` so real environment variables still win.  Loading
    writes the file's variables into ``os.environ``.
    """

    if env_path is not None:
        load_dotenv(env_path, override=False)
    return Settings(
        strict_names=_parse_bool(STRICT_NAMES_ENV, os.getenv(STRICT_NAMES_ENV), False),
        log_level=(os.getenv(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL).upper(),
    )


__all__ = ["LOG_LEVEL_ENV", "STRICT_NAMES_ENV", "Settings", "load_settings"]
