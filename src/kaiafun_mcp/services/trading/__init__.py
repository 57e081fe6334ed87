"""Trading services."""

from __future__ import annotations

from kaiafun_mcp.services.trading.dto import (
    BuyRequest,
    ListResult,
    SellRequest,
    TokenBalance,
    TokenInfo,
    TokenMetadata,
    TradeResult,
)
from kaiafun_mcp.services.trading.trading_client import LISTING_FEE_WEI, TradingClient

__all__ = [
    "LISTING_FEE_WEI",
    "BuyRequest",
    "ListResult",
    "SellRequest",
    "TokenBalance",
    "TokenInfo",
    "TokenMetadata",
    "TradeResult",
    "TradingClient",
]
