"""Immutable model of ABI parameters and interface fragments.

JSON ABI records are loosely typed: tuples are spelled ``"tuple"`` or
``"tuple[]"`` with a side ``components`` list and everything else is a bare
string.  This module turns those records into a closed set of frozen types
(:class:`Elementary`, :class:`TupleType`, :class:`FixedArray` and
:class:`DynamicArray`) so that unknown type strings are rejected once, when the
registry is built, rather than whenever a signature happens to be rendered.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Mapping, Optional, Tuple, Union

from ..errors import InvalidType

_ARRAY_SUFFIX = re.compile(r"^(?P<inner>.+)\[(?P<arity>\d*)\]$")
_INTEGER = re.compile(r"^(?P<sign>u?)int(?P<bits>\d*)$")
_FIXED_BYTES = re.compile(r"^bytes(?P<size>\d+)$")
_FIXED_POINT = re.compile(r"^(?P<sign>u?)fixed(?:(?P<bits>\d+)x(?P<places>\d+))?$")
_SIMPLE_TYPES = {"address", "bool", "string", "bytes", "function"}


@dataclass(frozen=True)
class Elementary:
    """A non-composite type such as ``uint256``, ``address`` or ``string``."""

    tag: str


@dataclass(frozen=True)
class TupleType:
    """A struct; ``components`` keep their declaration order."""

    components: Tuple["Parameter", ...]


@dataclass(frozen=True)
class FixedArray:
    """``element[arity]`` with a positive, fixed length."""

    element: "AbiType"
    arity: int


@dataclass(frozen=True)
class DynamicArray:
    """``element[]`` whose length is carried in the encoding."""

    element: "AbiType"


AbiType = Union[Elementary, TupleType, FixedArray, DynamicArray]


@dataclass(frozen=True)
class Parameter:
    """One typed slot of a fragment's inputs or outputs."""

    name: str
    type: AbiType
    indexed: bool = False


class FragmentKind(str, Enum):
    """Fragment kinds the registry indexes; ``fallback`` and ``receive`` are skipped."""

    FUNCTION = "function"
    EVENT = "event"
    CONSTRUCTOR = "constructor"
    ERROR = "error"


@dataclass(frozen=True)
class Fragment:
    """A single interface entry.

    ``inputs`` and ``outputs`` are ``None`` when the source record carried no
    list at all, which is distinct from an empty parameter list.
    """

    kind: FragmentKind
    name: Optional[str]
    inputs: Optional[Tuple[Parameter, ...]]
    outputs: Optional[Tuple[Parameter, ...]] = None
    state_mutability: Optional[str] = None
    anonymous: bool = False


# -- elementary types -------------------------------------------------------
def normalise_elementary(tag: str) -> str:
    """Return the canonical spelling of an elementary type or raise."""

    if tag in _SIMPLE_TYPES:
        return tag
    if tag == "byte":
        return "bytes1"
    match = _INTEGER.match(tag)
    if match:
        bits = int(match.group("bits") or 256)
        if bits % 8 or not 8 <= bits <= 256:
            raise InvalidType(f"invalid integer width in type '{tag}'")
        return f"{match.group('sign')}int{bits}"
    match = _FIXED_BYTES.match(tag)
    if match:
        size = int(match.group("size"))
        if not 1 <= size <= 32:
            raise InvalidType(f"invalid byte length in type '{tag}'")
        return f"bytes{size}"
    match = _FIXED_POINT.match(tag)
    if match:
        bits = int(match.group("bits") or 128)
        places = int(match.group("places") or 18)
        if bits % 8 or not 8 <= bits <= 256 or not 0 < places <= 80:
            raise InvalidType(f"invalid fixed-point type '{tag}'")
        return f"{match.group('sign')}fixed{bits}x{places}"
    raise InvalidType(f"unrecognised ABI type '{tag}'")


# -- JSON parsing -----------------------------------------------------------
def parse_type(type_string: str, components: Optional[Iterable[Mapping[str, Any]]] = None) -> AbiType:
    """Parse a JSON ``type`` string (plus ``components`` for tuples)."""

    if not isinstance(type_string, str) or not type_string.strip():
        raise InvalidType("parameter type must be a non-empty string")
    text = type_string.strip()
    match = _ARRAY_SUFFIX.match(text)
    if match:
        element = parse_type(match.group("inner"), components)
        arity = match.group("arity")
        if not arity:
            return DynamicArray(element)
        if int(arity) <= 0:
            raise InvalidType(f"array arity must be positive in type '{type_string}'")
        return FixedArray(element, int(arity))
    if text == "tuple":
        if components is None:
            raise InvalidType("tuple type is missing its 'components' list")
        return TupleType(tuple(parse_parameter(item) for item in components))
    return Elementary(normalise_elementary(text))


def parse_parameter(record: Mapping[str, Any]) -> Parameter:
    if not isinstance(record, Mapping):
        raise InvalidType(f"parameter record must be an object, got {type(record).__name__}")
    components = record.get("components")
    if components is not None and not isinstance(components, (list, tuple)):
        raise InvalidType("'components' must be a list of parameter records")
    return Parameter(
        name=str(record.get("name") or ""),
        type=parse_type(record.get("type", ""), components),
        indexed=bool(record.get("indexed", False)),
    )


def _parse_list(records: Any) -> Optional[Tuple[Parameter, ...]]:
    if records is None:
        return None
    if not isinstance(records, (list, tuple)):
        raise InvalidType("parameter lists must be JSON arrays")
    return tuple(parse_parameter(record) for record in records)


def parse_fragment(record: Mapping[str, Any]) -> Optional[Fragment]:
    """Build a :class:`Fragment`, or return ``None`` for unsupported kinds."""

    try:
        kind = FragmentKind(record.get("type", "function"))
    except ValueError:
        return None
    name = record.get("name")
    return Fragment(
        kind=kind,
        name=None if kind is FragmentKind.CONSTRUCTOR else (str(name) if name else None),
        inputs=_parse_list(record.get("inputs")),
        outputs=_parse_list(record.get("outputs")) if kind is FragmentKind.FUNCTION else None,
        state_mutability=record.get("stateMutability"),
        anonymous=bool(record.get("anonymous", False)),
    )


__all__ = [
    "AbiType",
    "DynamicArray",
    "Elementary",
    "FixedArray",
    "Fragment",
    "FragmentKind",
    "Parameter",
    "TupleType",
    "normalise_elementary",
    "parse_fragment",
    "parse_parameter",
    "parse_type",
]
