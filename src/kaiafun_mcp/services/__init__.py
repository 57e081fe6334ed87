# -*- coding: utf-8 -*-
"""Application services."""

from kaiafun_mcp.services.trading import (
    LISTING_FEE_WEI,
    BuyRequest,
    ListResult,
    SellRequest,
    TokenBalance,
    TokenInfo,
    TokenMetadata,
    TradeResult,
    TradingClient,
)

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
