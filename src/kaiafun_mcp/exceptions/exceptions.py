"""Custom exceptions for KaiaFun trading and the KaiaFun API."""

from __future__ import annotations


class KaiaFunError(Exception):
    """Base exception for KaiaFun-related errors."""

    pass


class MissingRequiredConfigError(KaiaFunError):
    """Raised when a required configuration value is missing."""

    def __init__(self, setting: str) -> None:
        super().__init__(f"Missing required configuration: {setting}")
        self.setting = setting


class InvalidInputError(KaiaFunError, ValueError):
    """Raised when an operation argument violates a domain constraint (address, amount, ...)."""

    pass


class UnsupportedChainError(KaiaFunError):
    """Raised when the connection is bound to a chain other than the expected network."""

    def __init__(self, expected: int, actual: int | None) -> None:
        super().__init__(f"Unsupported chain: expected chain id {expected}, got {actual}")
        self.expected = expected
        self.actual = actual


class InsufficientBalanceError(KaiaFunError):
    """Raised when the signer's native balance is below the amount an operation requires."""

    def __init__(self, balance: int, required: int) -> None:
        super().__init__(f"Insufficient balance: have {balance} wei, need {required} wei")
        self.balance = balance
        self.required = required


class RemoteEndpointError(KaiaFunError):
    """Raised when a KaiaFun API request fails or returns a malformed body."""

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        status_code: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code
        self.cause = cause


class RateLimitError(RemoteEndpointError):
    """Raised when the API returns HTTP 429 (Too Many Requests)."""

    def __init__(
        self,
        message: str = "Rate limit exceeded (429)",
        *,
        url: str | None = None,
        retry_after: float | None = None,
    ) -> None:
        super().__init__(message, url=url, status_code=429)
        self.retry_after = retry_after


class TransactionFailedError(KaiaFunError):
    """Raised when submitting a transaction or waiting for its receipt fails, or it reverted."""

    def __init__(
        self,
        message: str,
        *,
        tx_hash: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.tx_hash = tx_hash
        self.cause = cause
