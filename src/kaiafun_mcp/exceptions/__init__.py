"""Exceptions subpackage."""

from kaiafun_mcp.exceptions.exceptions import (
    InsufficientBalanceError,
    InvalidInputError,
    KaiaFunError,
    MissingRequiredConfigError,
    RateLimitError,
    RemoteEndpointError,
    TransactionFailedError,
    UnsupportedChainError,
)

__all__ = [
    "InsufficientBalanceError",
    "InvalidInputError",
    "KaiaFunError",
    "MissingRequiredConfigError",
    "RateLimitError",
    "RemoteEndpointError",
    "TransactionFailedError",
    "UnsupportedChainError",
]
