"""Binary codec seam.

The coder never packs bytes itself; it hands canonical type strings and
positional values to an object implementing :class:`AbiCodec`.  By default
that is an :class:`eth_abi.codec.ABICodec` built over eth-abi's standard type
registry.
"""

from __future__ import annotations

from typing import Any, Protocol, Sequence, Tuple

from eth_abi.codec import ABICodec
from eth_abi.registry import registry as default_registry


class AbiCodec(Protocol):
    def encode(self, types: Sequence[str], args: Sequence[Any]) -> bytes:
        ...

    def decode(self, types: Sequence[str], data: bytes) -> Tuple[Any, ...]:
        ...


def build_codec() -> ABICodec:
    """Return a fresh eth-abi codec using the default type registry."""

    return ABICodec(default_registry)


__all__ = ["AbiCodec", "build_codec"]
