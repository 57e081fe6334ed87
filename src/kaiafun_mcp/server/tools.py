# -*- coding: utf-8 -*-
"""Tool registry: name, description, argument model and handler of each MCP tool."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Type

from mcp.types import Tool

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


@dataclass(frozen=True, slots=True)
class ToolSpec:
    """One tool as advertised to the agent and dispatched by ToolHandlers.

    ``action`` completes the error text ("Error <action>: ...") and
    ``handler`` names the ToolHandlers coroutine that serves the tool.
    """

    name: str
    description: str
    request_model: Type[ToolRequest]
    action: str
    handler: str

    def input_schema(self) -> Dict[str, Any]:
        schema = self.request_model.model_json_schema(by_alias=True)
        schema.pop("title", None)
        schema.setdefault("properties", {})
        schema.setdefault("required", [])
        return schema

    def to_tool(self) -> Tool:
        return Tool(name=self.name, description=self.description, inputSchema=self.input_schema())


TOOL_SPECS: List[ToolSpec] = [
    ToolSpec(
        name="list-token",
        description="List a new token on KaiaFun (requires 10 KAIA to list)",
        request_model=ListTokenRequest,
        action="listing token",
        handler="list_token",
    ),
    ToolSpec(
        name="buy-token",
        description="Buy a KaiaFun token with KAIA",
        request_model=BuyTokenRequest,
        action="buying token",
        handler="buy_token",
    ),
    ToolSpec(
        name="sell-token",
        description="Sell a KaiaFun token for KAIA",
        request_model=SellTokenRequest,
        action="selling token",
        handler="sell_token",
    ),
    ToolSpec(
        name="get-token-info",
        description="Get the name, symbol, decimals and total supply of a token",
        request_model=TokenAddressRequest,
        action="getting token info",
        handler="get_token_info",
    ),
    ToolSpec(
        name="get-token-url",
        description="Get the KaiaFun detail page URL for a token",
        request_model=TokenAddressRequest,
        action="getting token URL",
        handler="get_token_url",
    ),
    ToolSpec(
        name="convert-to-smallest-unit",
        description="Convert a KAIA amount to wei (1 KAIA = 10^18 wei)",
        request_model=AmountRequest,
        action="converting to smallest unit",
        handler="convert_to_smallest_unit",
    ),
    ToolSpec(
        name="convert-from-smallest-unit",
        description="Convert a wei amount to KAIA (10^18 wei = 1 KAIA)",
        request_model=AmountRequest,
        action="converting from smallest unit",
        handler="convert_from_smallest_unit",
    ),
    ToolSpec(
        name="get-wallet-balance",
        description="Get the KAIA balance of the wallet",
        request_model=EmptyRequest,
        action="getting wallet balance",
        handler="get_wallet_balance",
    ),
    ToolSpec(
        name="get-wallet-address",
        description="Get the wallet address being used for transactions",
        request_model=EmptyRequest,
        action="getting wallet address",
        handler="get_wallet_address",
    ),
    ToolSpec(
        name="get-token-balance",
        description="Get the balance of a specific token for the wallet",
        request_model=TokenAddressRequest,
        action="getting token balance",
        handler="get_token_balance",
    ),
    ToolSpec(
        name="upload-image",
        description="Upload an image from a URL to the KaiaFun server and return the new image URL",
        request_model=UploadImageRequest,
        action="uploading image",
        handler="upload_image",
    ),
]

TOOLS_BY_NAME: Dict[str, ToolSpec] = {spec.name: spec for spec in TOOL_SPECS}
