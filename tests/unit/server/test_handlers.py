# -*- coding: utf-8 -*-
"""Unit tests for ToolHandlers (tool dispatch, validation and rendering)."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any
from unittest.mock import AsyncMock

import pytest
from hexbytes import HexBytes
from web3 import Web3

from kaiafun_mcp.chain import KAIA_MAINNET, DecodedEvent
from kaiafun_mcp.clients import BinaryResponse
from kaiafun_mcp.config import Settings
from kaiafun_mcp.exceptions import InsufficientBalanceError, RemoteEndpointError
from kaiafun_mcp.server import TOOL_SPECS, ImageCache, ToolHandlers
from kaiafun_mcp.server.handlers import extension_from_url
from kaiafun_mcp.services.trading import (
    BuyRequest,
    ListResult,
    SellRequest,
    TokenBalance,
    TokenInfo,
    TokenMetadata,
    TradeResult,
)

ONE_KAIA = 10**18
TX_HASH = "0x" + "ab" * 32
TX_LINK = f"https://klaytnscope.com/tx/{TX_HASH}"


def _receipt() -> dict[str, Any]:
    return {"status": 1, "transactionHash": HexBytes(TX_HASH), "logs": []}


def _trading(wallet: str) -> Any:
    return SimpleNamespace(
        chain=KAIA_MAINNET,
        wallet_address=Web3.to_checksum_address(wallet),
        buy=AsyncMock(),
        sell=AsyncMock(),
        list=AsyncMock(),
        upload_image=AsyncMock(return_value="https://cdn.kaiafun.io/u.png"),
        get_native_balance=AsyncMock(return_value=15 * ONE_KAIA // 10),
        get_token_balance=AsyncMock(),
        get_token_info=AsyncMock(),
    )


@pytest.fixture
def trading(wallet: str) -> Any:
    return _trading(wallet)


@pytest.fixture
def http() -> Any:
    return SimpleNamespace(
        get_bytes=AsyncMock(return_value=BinaryResponse(content=b"\x89PNG", content_type="image/png; charset=binary"))
    )


@pytest.fixture
def image_cache() -> ImageCache:
    return ImageCache(maxsize=4)


@pytest.fixture
def handlers(trading: Any, http: Any, image_cache: ImageCache) -> ToolHandlers:
    return ToolHandlers(trading, http, image_cache, Settings())


async def _call(handlers: ToolHandlers, name: str, arguments: dict[str, Any] | None = None) -> str:
    content = await handlers.call(name, arguments)
    assert len(content) == 1
    assert content[0].type == "text"
    return content[0].text


# --- Registry ---


def test_every_tool_has_a_handler_and_object_schema() -> None:
    names = [spec.name for spec in TOOL_SPECS]
    assert len(names) == len(set(names))
    assert {
        "list-token",
        "buy-token",
        "sell-token",
        "get-token-balance",
        "get-wallet-balance",
        "get-wallet-address",
        "upload-image",
        "convert-to-smallest-unit",
        "convert-from-smallest-unit",
        "get-token-url",
        "get-token-info",
    } == set(names)
    for spec in TOOL_SPECS:
        assert callable(getattr(ToolHandlers, spec.handler))
        tool = spec.to_tool()
        assert tool.inputSchema["type"] == "object"


def test_schemas_use_camel_case_argument_names() -> None:
    schemas = {spec.name: spec.input_schema() for spec in TOOL_SPECS}

    assert set(schemas["list-token"]["required"]) == {"name", "symbol", "description", "imageURL"}
    assert set(schemas["buy-token"]["required"]) == {"tokenAddress", "amount"}
    assert "minTokenAmount" in schemas["buy-token"]["properties"]
    assert "isOutputKAIA" in schemas["sell-token"]["properties"]
    assert schemas["get-wallet-address"]["required"] == []


# --- Dispatch / errors ---


async def test_unknown_tool_returns_error_text(handlers: ToolHandlers) -> None:
    assert await _call(handlers, "get-transaction-history") == "Error: Unknown tool: get-transaction-history"


async def test_invalid_arguments_are_rendered_not_raised(handlers: ToolHandlers, trading: Any) -> None:
    text = await _call(handlers, "buy-token", {"tokenAddress": "0x1234", "amount": "1"})

    assert text.startswith("Error buying token: Invalid arguments: tokenAddress")
    trading.buy.assert_not_awaited()


async def test_domain_errors_are_rendered_verbatim(handlers: ToolHandlers, trading: Any) -> None:
    trading.list.side_effect = InsufficientBalanceError(9 * ONE_KAIA, 10 * ONE_KAIA)

    text = await _call(
        handlers,
        "list-token",
        {"name": "Foo", "symbol": "FOO", "description": "d", "imageURL": "https://x/y.png"},
    )

    assert text == f"Error listing token: {InsufficientBalanceError(9 * ONE_KAIA, 10 * ONE_KAIA)}"


# --- Trading tools ---


async def test_buy_token_converts_amounts_and_renders_trade(
    handlers: ToolHandlers,
    trading: Any,
    token_address: str,
) -> None:
    event = DecodedEvent(name="Trade", args={"tokenOut": 2500 * ONE_KAIA})
    trading.buy.return_value = TradeResult(receipt=_receipt(), trade_event=event)

    text = await _call(
        handlers,
        "buy-token",
        {"tokenAddress": token_address, "amount": "1.5", "minTokenAmount": "100"},
    )

    trading.buy.assert_awaited_once_with(
        BuyRequest(token_address=token_address, amount=15 * ONE_KAIA // 10, min_token_amount=100 * ONE_KAIA)
    )
    assert "Successfully bought token!" in text
    assert "Amount Spent: 1.5 KAIA" in text
    assert "Tokens Received: 2500" in text
    assert f"Transaction Hash: {TX_HASH}" in text
    assert f"Explorer: {TX_LINK}" in text


async def test_sell_token_defaults_to_native_output(
    handlers: ToolHandlers,
    trading: Any,
    token_address: str,
) -> None:
    trading.sell.return_value = TradeResult(receipt=_receipt(), trade_event=None)

    text = await _call(handlers, "sell-token", {"tokenAddress": token_address, "amount": "2500"})

    trading.sell.assert_awaited_once_with(
        SellRequest(token_address=token_address, amount=2500 * ONE_KAIA, min_base_amount=0, is_output_kaia=True)
    )
    assert "Amount Sold: 2500 tokens" in text
    assert "KAIA Received" not in text


async def test_list_token_renders_new_token_address(
    handlers: ToolHandlers,
    trading: Any,
    token_address: str,
) -> None:
    event = DecodedEvent(name="List", args={"tokenAddress": Web3.to_checksum_address(token_address)})
    trading.list.return_value = ListResult(receipt=_receipt(), list_event=event)

    text = await _call(
        handlers,
        "list-token",
        {
            "name": "Foo",
            "symbol": "FOO",
            "description": "d",
            "imageURL": "https://x/y.png",
            "twitter": "@foo",
        },
    )

    metadata = trading.list.await_args.args[0]
    assert metadata == TokenMetadata(
        name="Foo", symbol="FOO", description="d", image_url="https://x/y.png", twitter="@foo"
    )
    assert f"Token Address: {Web3.to_checksum_address(token_address)}" in text
    assert f"KaiaFun: https://kaiafun.io/token/{token_address.lower()}" in text


async def test_list_token_keeps_image_url_as_sent(handlers: ToolHandlers, trading: Any) -> None:
    trading.list.return_value = ListResult(receipt=_receipt(), list_event=None)

    await _call(
        handlers,
        "list-token",
        {"name": "Foo", "symbol": "FOO", "description": "d", "imageURL": "https://x.io"},
    )

    assert trading.list.await_args.args[0].image_url == "https://x.io"


async def test_list_token_rejects_non_http_image_url(handlers: ToolHandlers, trading: Any) -> None:
    text = await _call(
        handlers,
        "list-token",
        {"name": "Foo", "symbol": "FOO", "description": "d", "imageURL": "ftp://x.io/y.png"},
    )

    assert text.startswith("Error listing token: Invalid arguments: imageURL")
    trading.list.assert_not_awaited()


async def test_list_token_without_list_event_is_reported_distinctly(
    handlers: ToolHandlers,
    trading: Any,
) -> None:
    trading.list.return_value = ListResult(receipt=_receipt(), list_event=None)

    text = await _call(
        handlers,
        "list-token",
        {"name": "Foo", "symbol": "FOO", "description": "d", "imageURL": "https://x/y.png"},
    )

    assert "Token Address: not found in receipt (check the explorer link)" in text
    assert f"Explorer: {TX_LINK}" in text
    assert "KaiaFun:" not in text


# --- Read tools ---


async def test_wallet_tools(handlers: ToolHandlers, wallet: str) -> None:
    assert await _call(handlers, "get-wallet-balance") == "Wallet Balance: 1.5 KAIA"
    address_text = await _call(handlers, "get-wallet-address", {})
    assert address_text.startswith(f"Wallet Address: {Web3.to_checksum_address(wallet)}")
    assert "https://klaytnscope.com/account/" in address_text


async def test_get_token_balance_formats_with_token_decimals(
    handlers: ToolHandlers,
    trading: Any,
    token_address: str,
) -> None:
    trading.get_token_balance.return_value = TokenBalance(
        token_address=token_address, symbol="USDT", decimals=6, raw=1_234_500
    )

    text = await _call(handlers, "get-token-balance", {"tokenAddress": token_address})

    assert text == f"Token Balance for {token_address}:\nSymbol: USDT\nBalance: 1.2345 USDT"


async def test_get_token_info(handlers: ToolHandlers, trading: Any, token_address: str) -> None:
    trading.get_token_info.return_value = TokenInfo(
        token_address=token_address, name="Foo", symbol="FOO", decimals=18, total_supply=10**9 * ONE_KAIA
    )

    text = await _call(handlers, "get-token-info", {"tokenAddress": token_address})

    assert "Name: Foo" in text
    assert "Total Supply: 1000000000 FOO" in text


async def test_get_token_url_lowercases_address(handlers: ToolHandlers) -> None:
    text = await _call(handlers, "get-token-url", {"tokenAddress": "0xABCDEF0123456789ABCDEF0123456789ABCDEF01"})

    assert text == "Token URL: https://kaiafun.io/token/0xabcdef0123456789abcdef0123456789abcdef01"


async def test_conversion_tools(handlers: ToolHandlers) -> None:
    assert await _call(handlers, "convert-to-smallest-unit", {"amount": "1.5"}) == (
        "1.5 KAIA = 1500000000000000000 wei"
    )
    assert await _call(handlers, "convert-from-smallest-unit", {"amount": "1500000000000000000"}) == (
        "1500000000000000000 wei = 1.5 KAIA"
    )
    error = await _call(handlers, "convert-to-smallest-unit", {"amount": "abc"})
    assert error.startswith("Error converting to smallest unit: Invalid amount")


# --- Upload ---


async def test_upload_image_downloads_uploads_and_caches(
    handlers: ToolHandlers,
    trading: Any,
    http: Any,
    image_cache: ImageCache,
) -> None:
    text = await _call(handlers, "upload-image", {"imageURL": "https://example.com/pics/cat.png"})

    http.get_bytes.assert_awaited_once_with("https://example.com/pics/cat.png")
    content, filename, mime_type = trading.upload_image.await_args.args
    assert content == b"\x89PNG"
    assert filename.endswith(".png")
    assert mime_type == "image/png"
    assert "Uploaded URL: https://cdn.kaiafun.io/u.png" in text

    cached = image_cache.list()
    assert len(cached) == 1
    assert cached[0].filename == filename
    assert image_cache.get(cached[0].uri) == cached[0]
    assert f"Resource URI: {cached[0].uri}" in text


async def test_upload_image_failure_is_reported(
    handlers: ToolHandlers,
    trading: Any,
    image_cache: ImageCache,
) -> None:
    trading.upload_image.return_value = None

    text = await _call(handlers, "upload-image", {"imageURL": "https://example.com/cat"})

    assert text == "Error uploading image: Failed to upload image to KaiaFun server"
    assert image_cache.list() == []


async def test_upload_image_download_failure_is_reported(
    handlers: ToolHandlers,
    http: Any,
    trading: Any,
) -> None:
    http.get_bytes.side_effect = RemoteEndpointError("GET https://example.com/cat failed", status_code=404)

    text = await _call(handlers, "upload-image", {"imageURL": "https://example.com/cat"})

    assert text.startswith("Error uploading image: GET https://example.com/cat failed")
    trading.upload_image.assert_not_awaited()


@pytest.mark.parametrize(
    ("url", "ext"),
    [
        ("https://example.com/a/b.png", "png"),
        ("https://example.com/a/b.jpeg?size=large", "jpeg"),
        ("https://example.com/a/b", "jpg"),
        ("https://example.com/", "jpg"),
    ],
)
def test_extension_from_url(url: str, ext: str) -> None:
    assert extension_from_url(url) == ext
