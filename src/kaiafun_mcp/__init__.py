"""KaiaFun MCP server: trading tools for KaiaFun tokens on the Kaia chain."""

from kaiafun_mcp.clients import AsyncChainClient, AsyncHttpClient, KaiaFunApiClient
from kaiafun_mcp.config import get_settings
from kaiafun_mcp.DI import Container
from kaiafun_mcp.services import TradingClient

__version__ = "0.0.1"
__all__ = [
    "AsyncChainClient",
    "AsyncHttpClient",
    "KaiaFunApiClient",
    "Container",
    "TradingClient",
    "get_settings",
]
