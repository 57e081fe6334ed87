# -*- coding: utf-8 -*-
"""Shared pytest fixtures for unit tests."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

import pytest
from eth_abi import encode
from hexbytes import HexBytes
from web3 import Web3

from kaiafun_mcp.chain.abi import ABIEntry
from kaiafun_mcp.config import Settings

CORE_ADDRESS = "0x1111111111111111111111111111111111111111"
BASE_TOKEN_ADDRESS = "0x2222222222222222222222222222222222222222"
# Well-known development key (Hardhat/Anvil account #0); never funded on Kaia.
TEST_PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"


@pytest.fixture
def wallet() -> str:
    """Signer address used by fakes."""
    return "0x2d27b6e21b3d4d7c9a43fdf58f12345678907706"


@pytest.fixture
def token_address() -> str:
    """Default KaiaFun token address used by tests."""
    return "0x" + "aa" * 20


@pytest.fixture
def tx_hash() -> HexBytes:
    """Stable transaction hash."""
    return HexBytes("0x" + "ab" * 32)


@pytest.fixture
def settings() -> Settings:
    """Settings with contract addresses and a signing key configured."""
    return Settings(
        chain={
            "core_address": CORE_ADDRESS,
            "base_token_address": BASE_TOKEN_ADDRESS,
        },
        wallet={"private_key": TEST_PRIVATE_KEY},
    )


def _signature(shape: ABIEntry) -> str:
    types = ",".join(item["type"] for item in shape["inputs"])
    return f"{shape['name']}({types})"


def _address_topic(value: str) -> HexBytes:
    return HexBytes(b"\x00" * 12 + bytes(HexBytes(value)))


@pytest.fixture
def make_log(tx_hash: HexBytes) -> Callable[..., dict[str, Any]]:
    """Build a raw receipt log for an event shape from its argument values.

    Only address-typed indexed arguments are supported (the KaiaFun events
    index addresses only).
    """

    def _build(
        shape: ABIEntry,
        args: dict[str, Any],
        *,
        log_index: int = 0,
        address: str = CORE_ADDRESS,
        topics: Sequence[HexBytes] | None = None,
        data: bytes | None = None,
    ) -> dict[str, Any]:
        indexed = [item for item in shape["inputs"] if item["indexed"]]
        plain = [item for item in shape["inputs"] if not item["indexed"]]
        if topics is None:
            topics = [Web3.keccak(text=_signature(shape))] + [
                _address_topic(args[item["name"]]) for item in indexed
            ]
        if data is None:
            data = encode([item["type"] for item in plain], [args[item["name"]] for item in plain])
        return {
            "address": Web3.to_checksum_address(address),
            "topics": list(topics),
            "data": HexBytes(data),
            "logIndex": log_index,
            "transactionIndex": 0,
            "transactionHash": tx_hash,
            "blockHash": HexBytes("0x" + "cd" * 32),
            "blockNumber": 100,
        }

    return _build


@pytest.fixture
def trade_args(token_address: str, wallet: str) -> dict[str, Any]:
    """Trade event arguments for a 1 KAIA buy."""
    return {
        "tokenAddress": token_address,
        "sender": wallet,
        "baseIn": 10**18,
        "tokenIn": 0,
        "baseOut": 0,
        "tokenOut": 2500 * 10**18,
        "baseFee": 10**16,
        "instrument": CORE_ADDRESS,
    }


@pytest.fixture
def list_args(token_address: str, wallet: str) -> dict[str, Any]:
    """List event arguments for a FOO listing."""
    return {
        "creator": wallet,
        "tokenAddress": token_address,
        "baseTokenAddress": BASE_TOKEN_ADDRESS,
        "name": "Foo",
        "symbol": "FOO",
        "metadataHash": "QmFooHash",
    }
