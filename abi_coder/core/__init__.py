"""Fragment resolution, signature derivation and value reshaping."""

from .params import (
    AbiType,
    DynamicArray,
    Elementary,
    FixedArray,
    Fragment,
    FragmentKind,
    Parameter,
    TupleType,
    parse_fragment,
    parse_parameter,
    parse_type,
)
from .registry import FragmentRegistry, fragment_signature
from .selectors import selector_of, to_bytes, to_hex, topic_of
from .signature import canonical_type, canonical_types, signature_of
from .values import as_values, to_value_map, to_values

__all__ = [
    "AbiType",
    "DynamicArray",
    "Elementary",
    "FixedArray",
    "Fragment",
    "FragmentKind",
    "FragmentRegistry",
    "Parameter",
    "TupleType",
    "as_values",
    "canonical_type",
    "canonical_types",
    "fragment_signature",
    "parse_fragment",
    "parse_parameter",
    "parse_type",
    "selector_of",
    "signature_of",
    "to_bytes",
    "to_hex",
    "to_value_map",
    "to_values",
    "topic_of",
]
