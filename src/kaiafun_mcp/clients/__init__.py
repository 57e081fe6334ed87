"""HTTP, KaiaFun API and chain clients."""

from kaiafun_mcp.clients.chain_client import AsyncChainClient
from kaiafun_mcp.clients.http import AsyncHttpClient, BinaryResponse
from kaiafun_mcp.clients.kaiafun_api import KaiaFunApiClient

__all__ = [
    "AsyncChainClient",
    "AsyncHttpClient",
    "BinaryResponse",
    "KaiaFunApiClient",
]
