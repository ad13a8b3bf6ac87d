"""Selector and topic derivation from canonical signatures."""

from __future__ import annotations

from typing import Union

from eth_utils import encode_hex, keccak
from hexbytes import HexBytes

SELECTOR_LENGTH = 4
TOPIC_LENGTH = 32


def topic_of(signature: str) -> bytes:
    """Return the full 32-byte keccak-256 digest of ``signature``."""

    return keccak(text=signature)


def selector_of(signature: str) -> bytes:
    """Return the 4-byte function/error selector of ``signature``."""

    return topic_of(signature)[:SELECTOR_LENGTH]


def to_bytes(value: Union[bytes, bytearray, str]) -> bytes:
    """Normalise a hex string (any case, ``0x`` optional) or bytes to bytes.

    Odd-length hex is rejected rather than left-padded.
    """

    if isinstance(value, str):
        digits = value[2:] if value.startswith(("0x", "0X")) else value
        if len(digits) % 2:
            raise ValueError(f"hex string {value!r} has an odd number of digits")
        value = "0x" + digits
    return bytes(HexBytes(value))


def to_hex(value: bytes) -> str:
    return encode_hex(value)


__all__ = ["SELECTOR_LENGTH", "TOPIC_LENGTH", "selector_of", "to_bytes", "to_hex", "topic_of"]
