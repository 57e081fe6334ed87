# -*- coding: utf-8 -*-
"""Unit tests for AsyncChainClient (web3 replaced by a MagicMock)."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any
from unittest.mock import MagicMock

import pytest
from hexbytes import HexBytes
from web3 import Web3
from web3.exceptions import TimeExhausted

from kaiafun_mcp.chain import abi
from kaiafun_mcp.clients.chain_client import AsyncChainClient
from kaiafun_mcp.config import Settings
from kaiafun_mcp.exceptions import MissingRequiredConfigError, TransactionFailedError


def _account(wallet: str) -> Any:
    return SimpleNamespace(
        address=Web3.to_checksum_address(wallet),
        sign_transaction=MagicMock(return_value=SimpleNamespace(raw_transaction=b"\x02signed")),
    )


def _client(settings: Settings, wallet: str, web3: Any | None = None) -> AsyncChainClient:
    return AsyncChainClient(settings, web3=web3 or MagicMock(), account=_account(wallet))


def test_missing_private_key_is_fatal() -> None:
    with pytest.raises(MissingRequiredConfigError, match="PRIVATE_KEY"):
        AsyncChainClient(Settings(wallet={"private_key": ""}), web3=MagicMock())


def test_account_is_built_from_private_key(settings: Settings) -> None:
    client = AsyncChainClient(settings, web3=MagicMock())

    assert Web3.is_checksum_address(client.address)


def test_configured_chain_id_rebinds_descriptor(settings: Settings, wallet: str) -> None:
    rebound = Settings(chain={**settings.chain.model_dump(), "chain_id": 1001})

    assert _client(settings, wallet).chain.id == 8217
    client = _client(rebound, wallet)
    assert client.chain.id == 1001
    assert client.chain.native_currency.symbol == "KAIA"


async def test_get_balance_defaults_to_signer(settings: Settings, wallet: str) -> None:
    w3 = MagicMock()
    w3.eth.get_balance.return_value = 7
    client = _client(settings, wallet, w3)

    assert await client.get_balance() == 7
    w3.eth.get_balance.assert_called_once_with(Web3.to_checksum_address(wallet))


async def test_submit_transaction_builds_signs_and_sends(settings: Settings, wallet: str) -> None:
    w3 = MagicMock()
    call = MagicMock()
    call.build_transaction.return_value = {"to": "0x", "data": "0x"}
    w3.eth.contract.return_value.functions.__getitem__.return_value.return_value = call
    w3.eth.get_transaction_count.return_value = 5
    w3.eth.send_raw_transaction.return_value = HexBytes("0x" + "ab" * 32)
    client = _client(settings, wallet, w3)

    tx_hash = await client.submit_transaction(
        settings.chain.core_address or "",
        abi.BUY_WITH_ETH,
        ["0x" + "aa" * 20, 0],
        value=10**18,
    )

    assert tx_hash == "0x" + "ab" * 32
    w3.eth.contract.return_value.functions.__getitem__.assert_called_once_with("buyWithETH")
    call.build_transaction.assert_called_once_with(
        {
            "from": Web3.to_checksum_address(wallet),
            "value": 10**18,
            "nonce": 5,
            "chainId": 8217,
        }
    )
    w3.eth.get_transaction_count.assert_called_once_with(Web3.to_checksum_address(wallet), "pending")
    w3.eth.send_raw_transaction.assert_called_once_with(b"\x02signed")


async def test_submit_failure_is_wrapped_verbatim(settings: Settings, wallet: str) -> None:
    w3 = MagicMock()
    w3.eth.contract.side_effect = ValueError("execution reverted: not listed")
    client = _client(settings, wallet, w3)

    with pytest.raises(TransactionFailedError, match="execution reverted: not listed") as excinfo:
        await client.submit_transaction(settings.chain.core_address or "", abi.SELL, [])

    assert isinstance(excinfo.value.cause, ValueError)
    w3.eth.send_raw_transaction.assert_not_called()


async def test_wait_for_receipt_passes_timeouts_and_wraps_errors(settings: Settings, wallet: str) -> None:
    w3 = MagicMock()
    w3.eth.wait_for_transaction_receipt.side_effect = TimeExhausted("not mined in 120s")
    client = _client(settings, wallet, w3)

    with pytest.raises(TransactionFailedError) as excinfo:
        await client.wait_for_receipt("0xabc")

    assert excinfo.value.tx_hash == "0xabc"
    assert "not mined" in str(excinfo.value)
    w3.eth.wait_for_transaction_receipt.assert_called_once_with(
        "0xabc",
        timeout=settings.chain.receipt_timeout_seconds,
        poll_latency=settings.chain.receipt_poll_seconds,
    )


async def test_call_function_runs_view_call(settings: Settings, wallet: str, token_address: str) -> None:
    w3 = MagicMock()
    w3.eth.contract.return_value.functions.__getitem__.return_value.return_value.call.return_value = 18
    client = _client(settings, wallet, w3)

    assert await client.call_function(token_address, abi.ERC20_READ_ABI, "decimals") == 18
    w3.eth.contract.assert_called_once_with(
        address=Web3.to_checksum_address(token_address),
        abi=abi.ERC20_READ_ABI,
    )
