from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Dict, List

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from abi_coder.config import Settings  # noqa: E402


TOKEN_ABI: List[Dict[str, Any]] = [
    {
        "type": "constructor",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "name", "type": "string"},
            {"name": "symbol", "type": "string"},
            {"name": "decimals", "type": "uint8"},
        ],
    },
    {"type": "fallback", "stateMutability": "payable"},
    {
        "type": "function",
        "name": "transfer",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "to", "type": "address"},
            {"name": "amount", "type": "uint256"},
        ],
        "outputs": [{"name": "", "type": "bool"}],
    },
    {
        "type": "function",
        "name": "balanceOf",
        "stateMutability": "view",
        "inputs": [{"name": "owner", "type": "address"}],
        "outputs": [{"name": "", "type": "uint256"}],
    },
    {
        "type": "function",
        "name": "safeTransferFrom",
        "inputs": [
            {"name": "from", "type": "address"},
            {"name": "to", "type": "address"},
            {"name": "tokenId", "type": "uint256"},
        ],
        "outputs": [],
    },
    {
        "type": "function",
        "name": "safeTransferFrom",
        "inputs": [
            {"name": "from", "type": "address"},
            {"name": "to", "type": "address"},
            {"name": "tokenId", "type": "uint256"},
            {"name": "data", "type": "bytes"},
        ],
        "outputs": [],
    },
    {
        "type": "function",
        "name": "submit",
        "inputs": [
            {
                "name": "orders",
                "type": "tuple[]",
                "components": [
                    {"name": "id", "type": "uint256"},
                    {"name": "owner", "type": "address"},
                ],
            },
            {"name": "limits", "type": "uint256[3]"},
        ],
        "outputs": [
            {"name": "accepted", "type": "uint256"},
            {"name": "tag", "type": "bytes32"},
        ],
    },
    {
        "type": "event",
        "name": "Transfer",
        "anonymous": False,
        "inputs": [
            {"name": "from", "type": "address", "indexed": True},
            {"name": "to", "type": "address", "indexed": True},
            {"name": "value", "type": "uint256", "indexed": False},
        ],
    },
    {
        "type": "event",
        "name": "Mixed",
        "inputs": [
            {"name": "a", "type": "uint256", "indexed": True},
            {"name": "b", "type": "bool", "indexed": False},
            {"name": "c", "type": "address", "indexed": True},
        ],
    },
    {
        "type": "event",
        "name": "Labelled",
        "inputs": [
            {"name": "label", "type": "string", "indexed": True},
            {"name": "ids", "type": "uint256[]", "indexed": True},
            {"name": "note", "type": "string", "indexed": False},
        ],
    },
    {
        "type": "event",
        "name": "Ping",
        "anonymous": True,
        "inputs": [
            {"name": "who", "type": "address", "indexed": True},
            {"name": "value", "type": "uint256", "indexed": False},
        ],
    },
    {
        "type": "error",
        "name": "InsufficientBalance",
        "inputs": [
            {"name": "available", "type": "uint256"},
            {"name": "required", "type": "uint256"},
        ],
    },
]


@pytest.fixture()
def token_abi() -> List[Dict[str, Any]]:
    return [dict(entry) for entry in TOKEN_ABI]


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("ABI_CODER_STRICT_NAMES", raising=False)
    monkeypatch.delenv("ABI_CODER_LOG_LEVEL", raising=False)


@pytest.fixture()
def settings() -> Settings:
    return Settings()
