"""High level encoder/decoder over a single contract interface."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from .config import Settings
from .core.codec import AbiCodec, build_codec
from .core.events import decode_topics, encode_topics, merge_event_values, partition, split_event_values
from .core.params import Fragment, Parameter
from .core.registry import FragmentRegistry, fragment_signature
from .core.selectors import SELECTOR_LENGTH, selector_of, to_bytes, to_hex, topic_of
from .core.signature import canonical_types
from .core.values import ValueMap, as_values, to_value_map
from .errors import MissingParameters, NotFound
from .utils.artifacts import load_abi_from_file
from .utils.logbook import log_event

HexOrBytes = Union[bytes, str]
Values = Union[Mapping[Any, Any], Sequence[Any]]


@dataclass(frozen=True)
class FunctionData:
    name: str
    inputs: Tuple[Parameter, ...]
    values: Tuple[Any, ...]

    @property
    def value_map(self) -> ValueMap:
        return to_value_map(self.values, self.inputs)


@dataclass(frozen=True)
class FunctionOutputData:
    name: str
    outputs: Tuple[Parameter, ...]
    values: Tuple[Any, ...]

    @property
    def value_map(self) -> ValueMap:
        return to_value_map(self.values, self.outputs)


@dataclass(frozen=True)
class ConstructorData:
    inputs: Tuple[Parameter, ...]
    values: Tuple[Any, ...]

    @property
    def value_map(self) -> ValueMap:
        return to_value_map(self.values, self.inputs)


@dataclass(frozen=True)
class EventData:
    name: str
    inputs: Tuple[Parameter, ...]
    values: Tuple[Any, ...]

    @property
    def value_map(self) -> ValueMap:
        return to_value_map(self.values, self.inputs)


@dataclass(frozen=True)
class ErrorData:
    name: str
    inputs: Tuple[Parameter, ...]
    values: Tuple[Any, ...]

    @property
    def value_map(self) -> ValueMap:
        return to_value_map(self.values, self.inputs)


@dataclass(frozen=True)
class EventEncoding:
    """Log payload: ``topics[0]`` is the event topic unless the event is anonymous."""

    topics: List[str]
    data: str


def _is_selector(text: str) -> bool:
    return text.startswith(("0x", "0X")) and len(text) == 2 + 2 * SELECTOR_LENGTH


def _label(fragment: Fragment) -> str:
    return f"{fragment.kind.value} '{fragment.name}'" if fragment.name else fragment.kind.value


class Coder:
    """Encode and decode calls, results, events and errors for one ABI.

    Values may be supplied positionally or as a mapping keyed by top-level
    parameter name.  Decoded results expose both forms through ``values`` and
    ``value_map``.

    Name-based lookups return the first declaration of an overloaded name.
    To target a specific overload pass its ``0x`` selector to
    :meth:`encode_function` instead.
    """

    def __init__(
        self,
        abi: Sequence[Mapping[str, Any]],
        *,
        codec: Optional[AbiCodec] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self.settings = settings if settings is not None else Settings()
        self.codec: AbiCodec = codec if codec is not None else build_codec()
        self.registry = FragmentRegistry(abi)

    @classmethod
    def from_file(cls, path: Union[str, Path], **kwargs: Any) -> "Coder":
        return cls(load_abi_from_file(path), **kwargs)

    # -- helpers ----------------------------------------------------------
    @contextmanager
    def _logged(self, action: str, **params: Any) -> Iterator[None]:
        try:
            yield
        except Exception as exc:
            log_event(action, ok=False, error=f"{type(exc).__name__}: {exc}", **params)
            raise

    @staticmethod
    def _inputs(fragment: Fragment) -> Tuple[Parameter, ...]:
        if fragment.inputs is None:
            raise MissingParameters(f"{_label(fragment)} has no inputs in ABI")
        return fragment.inputs

    @staticmethod
    def _outputs(fragment: Fragment) -> Tuple[Parameter, ...]:
        if fragment.outputs is None:
            raise MissingParameters(f"{_label(fragment)} has no outputs in ABI")
        return fragment.outputs

    def _encode(self, params: Sequence[Parameter], values: Values) -> bytes:
        positional = as_values(values, params, strict=self.settings.strict_names)
        return self.codec.encode(canonical_types(params), positional)

    def _decode(self, params: Sequence[Parameter], data: bytes) -> Tuple[Any, ...]:
        return tuple(self.codec.decode(canonical_types(params), data))

    def _resolve_function(self, name_or_selector: str) -> Fragment:
        if _is_selector(name_or_selector):
            return self.registry.function_by_selector(name_or_selector)
        return self.registry.function_by_name(name_or_selector)

    def _selector(self, fragment: Fragment) -> bytes:
        self._inputs(fragment)
        return selector_of(fragment_signature(fragment))

    # -- identifiers ------------------------------------------------------
    def get_function_selector(self, name: str) -> str:
        with self._logged("function_selector", name=name):
            return to_hex(self._selector(self.registry.function_by_name(name)))

    def get_error_selector(self, name: str) -> str:
        with self._logged("error_selector", name=name):
            return to_hex(self._selector(self.registry.error_by_name(name)))

    def get_event_topic(self, name: str) -> str:
        with self._logged("event_topic", name=name):
            fragment = self.registry.event_by_name(name)
            self._inputs(fragment)
            return to_hex(topic_of(fragment_signature(fragment)))

    # -- functions --------------------------------------------------------
    def encode_function(self, name: str, values: Values) -> str:
        """Return calldata (selector followed by encoded arguments)."""

        with self._logged("encode_function", name=name):
            fragment = self._resolve_function(name)
            data = self._selector(fragment) + self._encode(self._inputs(fragment), values)
        log_event("encode_function", name=fragment.name, length=len(data))
        return to_hex(data)

    def decode_function(self, data: HexOrBytes) -> FunctionData:
        with self._logged("decode_function"):
            raw = to_bytes(data)
            if len(raw) < SELECTOR_LENGTH:
                raise NotFound("calldata is shorter than a function selector")
            fragment = self.registry.function_by_selector(raw[:SELECTOR_LENGTH])
            inputs = self._inputs(fragment)
            values = self._decode(inputs, raw[SELECTOR_LENGTH:])
        log_event("decode_function", name=fragment.name, selector=raw[:SELECTOR_LENGTH])
        return FunctionData(name=str(fragment.name), inputs=inputs, values=values)

    def encode_function_output(self, name: str, values: Values) -> str:
        with self._logged("encode_function_output", name=name):
            outputs = self._outputs(self.registry.function_by_name(name))
            data = self._encode(outputs, values)
        log_event("encode_function_output", name=name, length=len(data))
        return to_hex(data)

    def decode_function_output(self, name: str, data: HexOrBytes) -> FunctionOutputData:
        with self._logged("decode_function_output", name=name):
            outputs = self._outputs(self.registry.function_by_name(name))
            values = self._decode(outputs, to_bytes(data))
        log_event("decode_function_output", name=name)
        return FunctionOutputData(name=name, outputs=outputs, values=values)

    # -- constructor ------------------------------------------------------
    def encode_constructor(self, values: Values) -> str:
        """Return the encoded constructor arguments (without bytecode)."""

        with self._logged("encode_constructor"):
            inputs = self._inputs(self.registry.constructor_fragment())
            data = self._encode(inputs, values)
        log_event("encode_constructor", length=len(data))
        return to_hex(data)

    def decode_constructor(self, data: HexOrBytes) -> ConstructorData:
        with self._logged("decode_constructor"):
            inputs = self._inputs(self.registry.constructor_fragment())
            values = self._decode(inputs, to_bytes(data))
        log_event("decode_constructor")
        return ConstructorData(inputs=inputs, values=values)

    # -- events -----------------------------------------------------------
    def encode_event(self, name: str, values: Values) -> EventEncoding:
        with self._logged("encode_event", name=name):
            fragment = self.registry.event_by_name(name)
            inputs = self._inputs(fragment)
            positional = as_values(values, inputs, strict=self.settings.strict_names)
            topics = encode_topics(self.codec, inputs, positional)
            if not fragment.anonymous:
                topics.insert(0, topic_of(fragment_signature(fragment)))
            _, data_params = partition(inputs)
            _, data_values = split_event_values(inputs, positional)
            data = self.codec.encode(canonical_types(data_params), data_values)
        log_event("encode_event", name=name, topics=len(topics), length=len(data))
        return EventEncoding(topics=[to_hex(topic) for topic in topics], data=to_hex(data))

    def decode_event(self, topics: Sequence[HexOrBytes], data: HexOrBytes, *, name: Optional[str] = None) -> EventData:
        """Decode a log entry.

        The event is resolved from ``topics[0]``.  Anonymous events carry no
        signature topic, so they can only be decoded by passing ``name``.  When
        ``name`` names a non-anonymous event, ``topics[0]`` must still match it.
        """

        with self._logged("decode_event", name=name):
            raw_topics = [to_bytes(topic) for topic in topics]
            if name is not None:
                fragment = self.registry.event_by_name(name)
            elif raw_topics:
                fragment = self.registry.event_by_topic(raw_topics[0])
            else:
                raise NotFound("log has no topics to resolve an event from")
            inputs = self._inputs(fragment)
            if not fragment.anonymous:
                expected = topic_of(fragment_signature(fragment))
                if not raw_topics or raw_topics[0] != expected:
                    raise NotFound(f"log topic does not match {_label(fragment)} ({to_hex(expected)})")
                raw_topics = raw_topics[1:]
            _, data_params = partition(inputs)
            topic_values = decode_topics(self.codec, inputs, raw_topics)
            data_values = self._decode(data_params, to_bytes(data))
            values = merge_event_values(inputs, topic_values, data_values)
        log_event("decode_event", name=fragment.name)
        return EventData(name=str(fragment.name), inputs=inputs, values=tuple(values))

    # -- errors -----------------------------------------------------------
    def encode_error(self, name: str, values: Values) -> str:
        with self._logged("encode_error", name=name):
            fragment = self.registry.error_by_name(name)
            data = self._selector(fragment) + self._encode(self._inputs(fragment), values)
        log_event("encode_error", name=name, length=len(data))
        return to_hex(data)

    def decode_error(self, data: HexOrBytes) -> ErrorData:
        with self._logged("decode_error"):
            raw = to_bytes(data)
            if len(raw) < SELECTOR_LENGTH:
                raise NotFound("revert data is shorter than an error selector")
            fragment = self.registry.error_by_selector(raw[:SELECTOR_LENGTH])
            inputs = self._inputs(fragment)
            values = self._decode(inputs, raw[SELECTOR_LENGTH:])
        log_event("decode_error", name=fragment.name)
        return ErrorData(name=str(fragment.name), inputs=inputs, values=values)


__all__ = [
    "Coder",
    "ConstructorData",
    "ErrorData",
    "EventData",
    "EventEncoding",
    "FunctionData",
    "FunctionOutputData",
]
