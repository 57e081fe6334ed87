"""KaiaFun REST API client."""

from kaiafun_mcp.clients.kaiafun_api.kaiafun_api import KaiaFunApiClient

__all__ = ["KaiaFunApiClient"]
