"""Index of interface fragments resolvable by name, selector or topic."""

from __future__ import annotations

from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from ..errors import InvalidAbi, NotFound
from ..utils.logbook import get_logger
from .params import Fragment, FragmentKind, parse_fragment
from .selectors import selector_of, to_bytes, to_hex, topic_of
from .signature import signature_of

logger = get_logger("registry")

HexOrBytes = Union[bytes, str]


def fragment_signature(fragment: Fragment) -> str:
    """Return the canonical signature of a named fragment with inputs."""

    if fragment.name is None or fragment.inputs is None:
        raise ValueError("only named fragments with inputs have a signature")
    return signature_of(fragment.name, fragment.inputs)


class FragmentRegistry:
    """Read-only view over the fragments of one interface description.

    Selectors and topics are hashed once at construction; fragments never
    change afterwards so the indexes cannot go stale.  When two fragments
    share an identifier the first declaration wins, matching a linear scan.
    """

    def __init__(self, abi: Sequence[Mapping[str, Any]]) -> None:
        if not isinstance(abi, (list, tuple)):
            raise InvalidAbi("ABI definition must be a list of JSON objects")
        fragments: List[Fragment] = []
        for position, record in enumerate(abi):
            if not isinstance(record, Mapping):
                raise InvalidAbi(f"ABI entry {position} is not a JSON object")
            fragment = parse_fragment(record)
            if fragment is None:
                logger.debug("Skipping ABI entry %d of type %r", position, record.get("type"))
                continue
            fragments.append(fragment)
        self._fragments: Tuple[Fragment, ...] = tuple(fragments)
        self._selectors: Dict[bytes, Fragment] = {}
        self._error_selectors: Dict[bytes, Fragment] = {}
        self._topics: Dict[bytes, Fragment] = {}
        self._build_indexes()
        logger.debug(
            "Registry built: %d functions, %d events, %d errors",
            len(self.functions()),
            len(self.events()),
            len(self.errors()),
        )

    # -- construction -----------------------------------------------------
    def _build_indexes(self) -> None:
        # Functions are indexed before errors so that a colliding error never
        # shadows a function in the shared selector table.
        for fragment in self.functions() + self.errors():
            if fragment.name is None or fragment.inputs is None:
                continue
            selector = selector_of(fragment_signature(fragment))
            self._selectors.setdefault(selector, fragment)
            if fragment.kind is FragmentKind.ERROR:
                self._error_selectors.setdefault(selector, fragment)
        for fragment in self.events():
            if fragment.anonymous or fragment.name is None or fragment.inputs is None:
                continue
            self._topics.setdefault(topic_of(fragment_signature(fragment)), fragment)

    # -- views ------------------------------------------------------------
    def __iter__(self) -> Iterator[Fragment]:
        return iter(self._fragments)

    def __len__(self) -> int:
        return len(self._fragments)

    def _of_kind(self, kind: FragmentKind) -> List[Fragment]:
        return [fragment for fragment in self._fragments if fragment.kind is kind]

    def functions(self) -> List[Fragment]:
        return self._of_kind(FragmentKind.FUNCTION)

    def events(self) -> List[Fragment]:
        return self._of_kind(FragmentKind.EVENT)

    def errors(self) -> List[Fragment]:
        return self._of_kind(FragmentKind.ERROR)

    # -- lookups ----------------------------------------------------------
    def _first(self, kind: FragmentKind, name: Optional[str] = None) -> Fragment:
        for fragment in self._fragments:
            if fragment.kind is kind and (name is None or fragment.name == name):
                return fragment
        label = kind.value if name is None else f"{kind.value} '{name}'"
        raise NotFound(f"{label} not found in ABI")

    def constructor_fragment(self) -> Fragment:
        return self._first(FragmentKind.CONSTRUCTOR)

    def function_by_name(self, name: str) -> Fragment:
        """Return the first function called ``name``; overloads are not resolved."""

        return self._first(FragmentKind.FUNCTION, name)

    def event_by_name(self, name: str) -> Fragment:
        return self._first(FragmentKind.EVENT, name)

    def error_by_name(self, name: str) -> Fragment:
        return self._first(FragmentKind.ERROR, name)

    def function_by_selector(self, selector: HexOrBytes) -> Fragment:
        """Resolve a 4-byte selector against functions first, then errors."""

        return self._lookup(self._selectors, selector, "function or error with selector")

    def error_by_selector(self, selector: HexOrBytes) -> Fragment:
        return self._lookup(self._error_selectors, selector, "error with selector")

    def event_by_topic(self, topic: HexOrBytes) -> Fragment:
        return self._lookup(self._topics, topic, "event with topic")

    @staticmethod
    def _lookup(index: Dict[bytes, Fragment], key: HexOrBytes, label: str) -> Fragment:
        try:
            raw = to_bytes(key)
        except ValueError as exc:
            raise NotFound(f"{label} {key!r} not found in ABI") from exc
        fragment = index.get(raw)
        if fragment is None:
            raise NotFound(f"{label} {to_hex(raw)} not found in ABI")
        return fragment


__all__ = ["FragmentRegistry", "fragment_signature"]
