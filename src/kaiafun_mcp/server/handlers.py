# -*- coding: utf-8 -*-
"""Tool handlers: validate arguments, call the trading client, render text content.

Every failure inside a tool is rendered as ``Error <action>: <message>`` text
content so the agent sees it; nothing raised by a tool reaches the transport.
"""

from __future__ import annotations

import posixpath
import uuid
import structlog
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Dict, List, Optional
from urllib.parse import urlparse

from mcp.types import TextContent
from pydantic import ValidationError
from structlog.contextvars import bound_contextvars

from kaiafun_mcp.exceptions import RemoteEndpointError
from kaiafun_mcp.server.requests import (
    AmountRequest,
    BuyTokenRequest,
    EmptyRequest,
    ListTokenRequest,
    SellTokenRequest,
    TokenAddressRequest,
    ToolRequest,
    UploadImageRequest,
)
from kaiafun_mcp.server.tools import TOOLS_BY_NAME
from kaiafun_mcp.utils import from_smallest_unit, to_smallest_unit

if TYPE_CHECKING:
    from kaiafun_mcp.clients import AsyncHttpClient
    from kaiafun_mcp.config import Settings
    from kaiafun_mcp.server.image_cache import ImageCache
    from kaiafun_mcp.services.trading import TradingClient

DEFAULT_IMAGE_EXTENSION = "jpg"
DEFAULT_IMAGE_MIME_TYPE = "image/jpeg"
MISSING_TOKEN_ADDRESS = "not found in receipt (check the explorer link)"


def format_error(error: BaseException) -> str:
    """Human-readable message for an exception raised inside a tool."""
    if isinstance(error, ValidationError):
        parts = []
        for item in error.errors(include_url=False):
            loc = ".".join(str(p) for p in item.get("loc", ())) or "arguments"
            parts.append(f"{loc}: {item.get('msg', 'invalid value')}")
        return "Invalid arguments: " + "; ".join(parts)
    message = str(error)
    return message or type(error).__name__


def extension_from_url(url: str) -> str:
    """File extension of the URL path without the dot, or ``jpg`` when there is none."""
    try:
        path = urlparse(url).path
    except ValueError:
        return DEFAULT_IMAGE_EXTENSION
    ext = posixpath.splitext(path)[1].lstrip(".")
    return ext or DEFAULT_IMAGE_EXTENSION


def _text(text: str) -> List[TextContent]:
    return [TextContent(type="text", text=text)]


class ToolHandlers:
    """Serves every MCP tool against one TradingClient."""

    def __init__(
        self,
        trading_client: "TradingClient",
        http_client: "AsyncHttpClient",
        image_cache: "ImageCache",
        settings: "Settings",
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._trading = trading_client
        self._http = http_client
        self._images = image_cache
        self._settings = settings
        self._logger = get_logger(logger_name or self.__class__.__name__)

    @property
    def _native_symbol(self) -> str:
        return self._trading.chain.native_currency.symbol

    def _tx_link(self, tx_hash: str) -> str:
        return self._trading.chain.block_explorer.tx_url(tx_hash)

    def token_url(self, token_address: str) -> str:
        base = self._settings.api.web_base_url.rstrip("/")
        return f"{base}/token/{token_address.lower()}"

    async def call(self, name: str, arguments: Optional[Dict[str, Any]]) -> List[TextContent]:
        """Dispatch one tool call by name and return its text content."""
        spec = TOOLS_BY_NAME.get(name)
        if spec is None:
            self._logger.warning("tool_unknown", tool_name=name)
            return _text(f"Error: Unknown tool: {name}")

        handler: Callable[[Any], Awaitable[str]] = getattr(self, spec.handler)
        with bound_contextvars(tool_name=name):
            try:
                request = spec.request_model.model_validate(arguments or {})
                text = await handler(request)
            except ValidationError as e:
                self._logger.info("tool_invalid_arguments", error_count=e.error_count())
                return _text(f"Error {spec.action}: {format_error(e)}")
            except Exception as e:
                self._logger.warning(
                    "tool_failed",
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
                return _text(f"Error {spec.action}: {format_error(e)}")
            self._logger.debug("tool_done")
            return _text(text)

    # --- Trading ---

    async def list_token(self, request: ListTokenRequest) -> str:
        result = await self._trading.list(request.to_metadata())
        token_address = result.token_address or MISSING_TOKEN_ADDRESS
        lines = [
            "Successfully listed new token!",
            f"Name: {request.name}",
            f"Symbol: {request.symbol}",
            f"Token Address: {token_address}",
            f"Transaction Hash: {result.transaction_hash}",
            f"Explorer: {self._tx_link(result.transaction_hash)}",
        ]
        if result.token_address:
            lines.append(f"KaiaFun: {self.token_url(result.token_address)}")
        return "\n".join(lines)

    async def buy_token(self, request: BuyTokenRequest) -> str:
        result = await self._trading.buy(request.to_intent())
        lines = [
            "Successfully bought token!",
            f"Token Address: {request.token_address}",
            f"Amount Spent: {request.amount} {self._native_symbol}",
        ]
        if result.trade_event is not None:
            token_out = result.trade_event.get("tokenOut")
            if token_out is not None:
                lines.append(f"Tokens Received: {from_smallest_unit(token_out)}")
        lines += [
            f"Transaction Hash: {result.transaction_hash}",
            f"Explorer: {self._tx_link(result.transaction_hash)}",
        ]
        return "\n".join(lines)

    async def sell_token(self, request: SellTokenRequest) -> str:
        result = await self._trading.sell(request.to_intent())
        lines = [
            "Successfully sold token!",
            f"Token Address: {request.token_address}",
            f"Amount Sold: {request.amount} tokens",
        ]
        if result.trade_event is not None:
            base_out = result.trade_event.get("baseOut")
            if base_out is not None:
                lines.append(f"{self._native_symbol} Received: {from_smallest_unit(base_out)}")
        lines += [
            f"Transaction Hash: {result.transaction_hash}",
            f"Explorer: {self._tx_link(result.transaction_hash)}",
        ]
        return "\n".join(lines)

    # --- Reads ---

    async def get_token_info(self, request: TokenAddressRequest) -> str:
        info = await self._trading.get_token_info(request.token_address)
        return "\n".join(
            [
                f"Token information for {info.token_address}:",
                f"Name: {info.name}",
                f"Symbol: {info.symbol}",
                f"Decimals: {info.decimals}",
                f"Total Supply: {from_smallest_unit(info.total_supply, info.decimals)} {info.symbol}",
                f"KaiaFun: {self.token_url(info.token_address)}",
            ]
        )

    async def get_token_url(self, request: TokenAddressRequest) -> str:
        return f"Token URL: {self.token_url(request.token_address)}"

    async def get_wallet_balance(self, request: EmptyRequest) -> str:
        balance = await self._trading.get_native_balance()
        return f"Wallet Balance: {from_smallest_unit(balance)} {self._native_symbol}"

    async def get_wallet_address(self, request: EmptyRequest) -> str:
        address = self._trading.wallet_address
        explorer = self._trading.chain.block_explorer.address_url(address)
        return f"Wallet Address: {address}\nExplorer: {explorer}"

    async def get_token_balance(self, request: TokenAddressRequest) -> str:
        balance = await self._trading.get_token_balance(request.token_address)
        return "\n".join(
            [
                f"Token Balance for {request.token_address}:",
                f"Symbol: {balance.symbol}",
                f"Balance: {from_smallest_unit(balance.raw, balance.decimals)} {balance.symbol}",
            ]
        )

    # --- Conversions ---

    async def convert_to_smallest_unit(self, request: AmountRequest) -> str:
        return f"{request.amount} {self._native_symbol} = {to_smallest_unit(request.amount)} wei"

    async def convert_from_smallest_unit(self, request: AmountRequest) -> str:
        return f"{request.amount} wei = {from_smallest_unit(request.amount)} {self._native_symbol}"

    # --- Upload ---

    async def upload_image(self, request: UploadImageRequest) -> str:
        source_url = request.image_url
        downloaded = await self._http.get_bytes(source_url)
        filename = f"{uuid.uuid4()}.{extension_from_url(source_url)}"
        mime_type = (downloaded.content_type or DEFAULT_IMAGE_MIME_TYPE).split(";")[0].strip()
        mime_type = mime_type or DEFAULT_IMAGE_MIME_TYPE

        uploaded_url = await self._trading.upload_image(downloaded.content, filename, mime_type)
        if not uploaded_url:
            raise RemoteEndpointError("Failed to upload image to KaiaFun server")

        image = self._images.add(
            filename=filename,
            mime_type=mime_type,
            content=downloaded.content,
            source_url=source_url,
            uploaded_url=uploaded_url,
        )
        return "\n".join(
            [
                "Successfully uploaded image to KaiaFun!",
                f"Original URL: {source_url}",
                f"Uploaded URL: {uploaded_url}",
                f"Resource URI: {image.uri}",
            ]
        )
