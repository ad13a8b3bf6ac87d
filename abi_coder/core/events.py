"""Split event values into topics and data, and merge decoded halves back.

An event's indexed parameters travel as individual 32-byte topics while the
remaining parameters are encoded together as the log data.  Decoding has to
interleave both halves back into declaration order; getting that wrong swaps
values silently because many ABI types share the same encoded width.
"""

from __future__ import annotations

from typing import Any, List, Sequence, Tuple

from eth_utils import keccak

from ..errors import TopicCountMismatch, ValueCountMismatch
from .codec import AbiCodec
from .params import AbiType, DynamicArray, Elementary, FixedArray, Parameter, TupleType
from .signature import canonical_type

_WORD = 32
_BYTE_STRINGS = {"string", "bytes"}


def is_hashed_topic(abi_type: AbiType) -> bool:
    """Return ``True`` when an indexed value is stored as a keccak hash."""

    return not isinstance(abi_type, Elementary) or abi_type.tag in _BYTE_STRINGS


def partition(params: Sequence[Parameter]) -> Tuple[List[Parameter], List[Parameter]]:
    indexed = [param for param in params if param.indexed]
    data = [param for param in params if not param.indexed]
    return indexed, data


def split_event_values(params: Sequence[Parameter], values: Sequence[Any]) -> Tuple[List[Any], List[Any]]:
    """Partition positional ``values`` into (indexed, non-indexed) lists."""

    if len(values) != len(params):
        raise ValueCountMismatch(f"expected {len(params)} values, received {len(values)}")
    indexed: List[Any] = []
    data: List[Any] = []
    for param, value in zip(params, values):
        (indexed if param.indexed else data).append(value)
    return indexed, data


def merge_event_values(
    params: Sequence[Parameter],
    topic_values: Sequence[Any],
    data_values: Sequence[Any],
) -> List[Any]:
    """Reassemble decoded values in the original declaration order."""

    indexed, data = partition(params)
    if len(topic_values) != len(indexed):
        raise TopicCountMismatch(f"expected {len(indexed)} indexed values, received {len(topic_values)}")
    if len(data_values) != len(data):
        raise ValueCountMismatch(f"expected {len(data)} data values, received {len(data_values)}")
    topic_iter = iter(topic_values)
    data_iter = iter(data_values)
    return [next(topic_iter) if param.indexed else next(data_iter) for param in params]


# -- topics -----------------------------------------------------------------
def _raw_bytes(tag: str, value: Any) -> bytes:
    if tag == "string":
        if not isinstance(value, str):
            raise TypeError(f"string value must be str, got {type(value).__name__}")
        return value.encode("utf-8")
    if not isinstance(value, (bytes, bytearray)):
        raise TypeError(f"bytes value must be bytes, got {type(value).__name__}")
    return bytes(value)


def _in_place(codec: AbiCodec, abi_type: AbiType, value: Any) -> bytes:
    # Encoding of a value nested inside an indexed array or struct: no length
    # prefixes or offsets, every member padded to a whole word.
    if isinstance(abi_type, Elementary):
        if abi_type.tag in _BYTE_STRINGS:
            raw = _raw_bytes(abi_type.tag, value)
            return raw + b"\x00" * (-len(raw) % _WORD)
        return codec.encode([abi_type.tag], [value])
    if isinstance(abi_type, TupleType):
        if len(value) != len(abi_type.components):
            raise ValueCountMismatch(f"expected {len(abi_type.components)} tuple members, received {len(value)}")
        return b"".join(_in_place(codec, member.type, item) for member, item in zip(abi_type.components, value))
    if isinstance(abi_type, (FixedArray, DynamicArray)):
        return b"".join(_in_place(codec, abi_type.element, item) for item in value)
    raise TypeError(f"unsupported ABI type {abi_type!r}")


def encode_topic(codec: AbiCodec, param: Parameter, value: Any) -> bytes:
    if isinstance(param.type, Elementary) and param.type.tag in _BYTE_STRINGS:
        return keccak(_raw_bytes(param.type.tag, value))
    if is_hashed_topic(param.type):
        return keccak(_in_place(codec, param.type, value))
    return codec.encode([canonical_type(param.type)], [value])


def encode_topics(codec: AbiCodec, params: Sequence[Parameter], values: Sequence[Any]) -> List[bytes]:
    """Encode one topic per indexed parameter, in declaration order."""

    indexed, _ = partition(params)
    topic_values, _ = split_event_values(params, values)
    return [encode_topic(codec, param, value) for param, value in zip(indexed, topic_values)]


def decode_topics(codec: AbiCodec, params: Sequence[Parameter], topics: Sequence[bytes]) -> List[Any]:
    """Decode topics aligned one-to-one with the indexed parameters.

    Hashed topics cannot be inverted, so they are returned as the raw
    32-byte digest.
    """

    indexed, _ = partition(params)
    if len(topics) != len(indexed):
        raise TopicCountMismatch(f"expected {len(indexed)} indexed topics, received {len(topics)}")
    values: List[Any] = []
    for param, topic in zip(indexed, topics):
        if is_hashed_topic(param.type):
            values.append(bytes(topic))
        else:
            (value,) = codec.decode([canonical_type(param.type)], bytes(topic))
            values.append(value)
    return values


__all__ = [
    "decode_topics",
    "encode_topic",
    "encode_topics",
    "is_hashed_topic",
    "merge_event_values",
    "partition",
    "split_event_values",
]
