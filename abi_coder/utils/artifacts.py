"""Read JSON ABI definitions from disk.

Compiler toolchains emit either a bare ABI list or an artifact object that
carries the list under ``"abi"`` next to bytecode and metadata.  Both shapes
are accepted; only the entries are kept.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Union

from ..errors import InvalidAbi
from .logbook import log_event


def unwrap_abi(payload: Any) -> List[Dict[str, Any]]:
    """Return the fragment records of a bare ABI list or an artifact object."""

    entries = payload.get("abi") if isinstance(payload, dict) else payload
    if not isinstance(entries, list):
        raise InvalidAbi("ABI definition must be a list of JSON objects")
    records = [dict(entry) for entry in entries if isinstance(entry, dict)]
    if len(records) != len(entries):
        raise InvalidAbi("ABI definition contains entries that are not JSON objects")
    if not records:
        raise InvalidAbi("ABI definition is empty")
    return records


def load_abi_from_file(path: Union[str, Path]) -> List[Dict[str, Any]]:
    file_path = Path(path).expanduser()
    if not file_path.exists():
        raise FileNotFoundError(f"ABI file not found: {file_path}")
    try:
        payload = json.loads(file_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise InvalidAbi(f"ABI file {file_path} is not valid JSON") from exc
    records = unwrap_abi(payload)
    log_event("abi_load", path=str(file_path), entries=len(records))
    return records


__all__ = ["load_abi_from_file", "unwrap_abi"]
