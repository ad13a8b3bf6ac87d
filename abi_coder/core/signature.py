"""Canonical type signature rendering."""

from __future__ import annotations

from typing import Iterable, List

from .params import AbiType, DynamicArray, Elementary, FixedArray, Parameter, TupleType


def canonical_type(abi_type: AbiType) -> str:
    """Render ``abi_type`` the way it appears in a canonical signature.

    The same string is what :mod:`eth_abi` accepts as a type, so it doubles as
    the codec type for encoding and decoding.
    """

    if isinstance(abi_type, Elementary):
        return abi_type.tag
    if isinstance(abi_type, TupleType):
        return "(" + ",".join(canonical_types(abi_type.components)) + ")"
    if isinstance(abi_type, FixedArray):
        return f"{canonical_type(abi_type.element)}[{abi_type.arity}]"
    if isinstance(abi_type, DynamicArray):
        return f"{canonical_type(abi_type.element)}[]"
    raise TypeError(f"unsupported ABI type {abi_type!r}")


def canonical_types(params: Iterable[Parameter]) -> List[str]:
    return [canonical_type(param.type) for param in params]


def signature_of(name: str, params: Iterable[Parameter]) -> str:
    """Return ``name(type1,type2,...)``; ``indexed`` flags are ignored."""

    return f"{name}({','.join(canonical_types(params))})"


__all__ = ["canonical_type", "canonical_types", "signature_of"]
