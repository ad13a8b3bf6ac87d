"""Conversion between name-addressed value maps and positional sequences.

Top-level parameter names are used as keys.  Two conventions keep the mapping
total:

* a parameter without a name is keyed by its position (an ``int``), so
  unnamed outputs such as ``balanceOf``'s ``uint256`` stay addressable;
* if two top-level parameters share a name, the later value overwrites the
  earlier one in :func:`to_value_map` (last write wins).  Such maps cannot
  round trip; use the positional form for those fragments.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Sequence, Union

from ..errors import NameMismatch, ValueCountMismatch
from .params import Parameter

ValueKey = Union[str, int]
ValueMap = Dict[ValueKey, Any]


def value_key(param: Parameter, position: int) -> ValueKey:
    return param.name if param.name else position


def to_value_map(values: Sequence[Any], params: Sequence[Parameter]) -> ValueMap:
    if len(values) != len(params):
        raise ValueCountMismatch(f"expected {len(params)} values, received {len(values)}")
    result: ValueMap = {}
    for position, (param, value) in enumerate(zip(params, values)):
        result[value_key(param, position)] = value
    return result


def to_values(value_map: Mapping[ValueKey, Any], params: Sequence[Parameter], *, strict: bool = False) -> List[Any]:
    """Order ``value_map`` by declaration.

    Missing keys become ``None`` and are left for the codec to reject, unless
    ``strict`` is set, in which case :class:`NameMismatch` is raised here.
    Keys that match no parameter are always rejected.
    """

    keys = [value_key(param, position) for position, param in enumerate(params)]
    unknown = [key for key in value_map if key not in keys]
    if unknown:
        raise NameMismatch(f"unknown parameter name(s): {', '.join(sorted(map(str, unknown)))}")
    if strict:
        missing = [str(key) for key in keys if key not in value_map]
        if missing:
            raise NameMismatch(f"missing value(s) for: {', '.join(missing)}")
    return [value_map.get(key) for key in keys]


def as_values(values: Union[Mapping[ValueKey, Any], Sequence[Any]], params: Sequence[Parameter], *, strict: bool = False) -> List[Any]:
    """Accept either a value map or a positional sequence and return the latter."""

    if isinstance(values, Mapping):
        return to_values(values, params, strict=strict)
    if isinstance(values, (str, bytes)) or not isinstance(values, Sequence):
        raise TypeError("values must be a mapping or a sequence of positional values")
    if len(values) != len(params):
        raise ValueCountMismatch(f"expected {len(params)} values, received {len(values)}")
    return list(values)


__all__ = ["ValueKey", "ValueMap", "as_values", "to_value_map", "to_values", "value_key"]
