from __future__ import annotations

from typing import Any, Dict, List, Sequence, Tuple

import pytest
from eth_abi.exceptions import EncodingError
from eth_utils import keccak, to_checksum_address

from abi_coder import Coder, MissingParameters, NameMismatch, NotFound, Settings, TopicCountMismatch

RECIPIENT = to_checksum_address("0x" + "ab" * 20)
SENDER = to_checksum_address("0x" + "12" * 20)
TRANSFER_TOPIC = "0xddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef"


@pytest.fixture()
def coder(token_abi: List[Dict[str, Any]], settings: Settings) -> Coder:
    return Coder(token_abi, settings=settings)


def _word(value: int) -> str:
    return format(value, "064x")


def test_identifiers(coder: Coder) -> None:
    assert coder.get_function_selector("transfer") == "0xa9059cbb"
    assert coder.get_function_selector("balanceOf") == "0x70a08231"
    assert coder.get_event_topic("Transfer") == TRANSFER_TOPIC
    assert coder.get_error_selector("InsufficientBalance") == "0x" + keccak(
        text="InsufficientBalance(uint256,uint256)"
    )[:4].hex()


def test_selector_lookup_returns_same_function(coder: Coder) -> None:
    selector = coder.get_function_selector("submit")
    assert coder.registry.function_by_selector(selector).name == "submit"


def test_encode_function_calldata_layout(coder: Coder) -> None:
    calldata = coder.encode_function("transfer", [RECIPIENT, 1])
    assert calldata == "0xa9059cbb" + "0" * 24 + RECIPIENT[2:].lower() + _word(1)


def test_encode_function_accepts_value_map(coder: Coder) -> None:
    positional = coder.encode_function("transfer", [RECIPIENT, 10**18])
    named = coder.encode_function("transfer", {"amount": 10**18, "to": RECIPIENT})
    assert named == positional


def test_function_round_trip_with_tuples(coder: Coder) -> None:
    orders = [(1, RECIPIENT), (2, SENDER)]
    calldata = coder.encode_function("submit", {"orders": orders, "limits": [1, 2, 3]})
    decoded = coder.decode_function(calldata)
    assert decoded.name == "submit"
    assert [param.name for param in decoded.inputs] == ["orders", "limits"]
    decoded_orders = decoded.value_map["orders"]
    assert [order[0] for order in decoded_orders] == [1, 2]
    assert [to_checksum_address(order[1]) for order in decoded_orders] == [RECIPIENT, SENDER]
    assert list(decoded.value_map["limits"]) == [1, 2, 3]


def test_overload_targeted_by_selector(coder: Coder) -> None:
    calldata = coder.encode_function("0xb88d4fde", [SENDER, RECIPIENT, 7, b"\x01\x02"])
    assert calldata.startswith("0xb88d4fde")
    decoded = coder.decode_function(calldata)
    assert decoded.name == "safeTransferFrom"
    assert len(decoded.inputs) == 4
    assert decoded.values[2:] == (7, b"\x01\x02")

    by_name = coder.encode_function("safeTransferFrom", [SENDER, RECIPIENT, 7])
    assert by_name.startswith("0x42842e0e")


def test_decode_function_unknown_selector(coder: Coder) -> None:
    with pytest.raises(NotFound):
        coder.decode_function("0xdeadbeef" + _word(1))
    with pytest.raises(NotFound):
        coder.decode_function("0x12")


def test_function_outputs(coder: Coder) -> None:
    encoded = coder.encode_function_output("balanceOf", [42])
    assert encoded == "0x" + _word(42)
    decoded = coder.decode_function_output("balanceOf", encoded)
    assert decoded.values == (42,)
    assert decoded.value_map == {0: 42}

    tag = b"\x11" * 32
    result = coder.decode_function_output("submit", coder.encode_function_output("submit", {"accepted": 2, "tag": tag}))
    assert result.value_map == {"accepted": 2, "tag": tag}


def test_constructor_round_trip(coder: Coder) -> None:
    encoded = coder.encode_constructor({"name": "Token", "symbol": "TKN", "decimals": 18})
    assert encoded.startswith("0x") and not encoded.startswith("0x0x")
    decoded = coder.decode_constructor(encoded)
    assert decoded.values == ("Token", "TKN", 18)
    assert decoded.value_map["symbol"] == "TKN"


def test_transfer_event_encoding(coder: Coder) -> None:
    encoding = coder.encode_event("Transfer", {"from": SENDER, "to": RECIPIENT, "value": 5})
    assert encoding.topics == [
        TRANSFER_TOPIC,
        "0x" + "0" * 24 + SENDER[2:].lower(),
        "0x" + "0" * 24 + RECIPIENT[2:].lower(),
    ]
    assert encoding.data == "0x" + _word(5)


def test_event_round_trip_preserves_declaration_order(coder: Coder) -> None:
    encoding = coder.encode_event("Mixed", {"a": 1, "b": True, "c": RECIPIENT})
    assert len(encoding.topics) == 3
    decoded = coder.decode_event(encoding.topics, encoding.data)
    assert decoded.name == "Mixed"
    assert decoded.values[0] == 1
    assert decoded.values[1] is True
    assert to_checksum_address(decoded.values[2]) == RECIPIENT


def test_event_with_hashed_topics(coder: Coder) -> None:
    encoding = coder.encode_event("Labelled", ["gm", [1, 2], "note"])
    assert encoding.topics[1] == "0x" + keccak(text="gm").hex()
    decoded = coder.decode_event(encoding.topics, encoding.data)
    assert decoded.value_map["label"] == keccak(text="gm")
    assert decoded.value_map["note"] == "note"


def test_anonymous_event_needs_name(coder: Coder) -> None:
    encoding = coder.encode_event("Ping", [RECIPIENT, 9])
    assert len(encoding.topics) == 1
    decoded = coder.decode_event(encoding.topics, encoding.data, name="Ping")
    assert decoded.values[1] == 9
    with pytest.raises(NotFound):
        coder.decode_event(encoding.topics, encoding.data)


def test_decode_event_errors(coder: Coder) -> None:
    with pytest.raises(NotFound):
        coder.decode_event([], "0x")
    encoding = coder.encode_event("Transfer", [SENDER, RECIPIENT, 5])
    with pytest.raises(TopicCountMismatch):
        coder.decode_event(encoding.topics[:2], encoding.data)


def test_decode_event_by_name_checks_signature_topic(coder: Coder) -> None:
    encoding = coder.encode_event("Transfer", [SENDER, RECIPIENT, 5])
    assert coder.decode_event(encoding.topics, encoding.data, name="Transfer").values[2] == 5
    with pytest.raises(NotFound):
        coder.decode_event(encoding.topics, encoding.data, name="Mixed")
    with pytest.raises(NotFound):
        coder.decode_event([], encoding.data, name="Transfer")


def test_custom_error_round_trip(coder: Coder) -> None:
    data = coder.encode_error("InsufficientBalance", {"available": 1, "required": 5})
    decoded = coder.decode_error(data)
    assert decoded.name == "InsufficientBalance"
    assert decoded.value_map == {"available": 1, "required": 5}
    with pytest.raises(NotFound):
        coder.decode_error(coder.encode_function("transfer", [RECIPIENT, 1]))


@pytest.mark.parametrize(
    "call",
    [
        lambda c: c.get_function_selector("mint"),
        lambda c: c.get_event_topic("Approval"),
        lambda c: c.get_error_selector("Unauthorized"),
        lambda c: c.encode_function("mint", []),
        lambda c: c.encode_event("Approval", []),
        lambda c: c.decode_function_output("mint", "0x"),
    ],
)
def test_absent_names_raise_not_found(coder: Coder, call) -> None:
    with pytest.raises(NotFound):
        call(coder)


def test_missing_inputs_and_outputs(settings: Settings) -> None:
    coder = Coder([{"type": "function", "name": "legacy"}, {"type": "constructor"}], settings=settings)
    with pytest.raises(MissingParameters):
        coder.get_function_selector("legacy")
    with pytest.raises(MissingParameters):
        coder.decode_function_output("legacy", "0x")
    with pytest.raises(MissingParameters):
        coder.encode_constructor([])


def test_missing_value_is_forwarded_to_codec(coder: Coder) -> None:
    with pytest.raises(EncodingError):
        coder.encode_function("transfer", {"to": RECIPIENT})


def test_strict_names_fail_before_codec(token_abi: List[Dict[str, Any]]) -> None:
    coder = Coder(token_abi, settings=Settings(strict_names=True))
    with pytest.raises(NameMismatch):
        coder.encode_function("transfer", {"to": RECIPIENT})


def test_injected_codec_is_used(token_abi: List[Dict[str, Any]], settings: Settings) -> None:
    class StubCodec:
        def __init__(self) -> None:
            self.seen: List[Tuple[List[str], List[Any]]] = []

        def encode(self, types: Sequence[str], args: Sequence[Any]) -> bytes:
            self.seen.append((list(types), list(args)))
            return b"\xff"

        def decode(self, types: Sequence[str], data: bytes) -> Tuple[Any, ...]:
            return tuple(range(len(types)))

    stub = StubCodec()
    coder = Coder(token_abi, codec=stub, settings=settings)
    assert coder.encode_function("submit", [[], [1, 2, 3]]) == coder.get_function_selector("submit") + "ff"
    assert stub.seen == [(["(uint256,address)[]", "uint256[3]"], [[], [1, 2, 3]])]
    assert coder.decode_function_output("submit", "0x").values == (0, 1)
