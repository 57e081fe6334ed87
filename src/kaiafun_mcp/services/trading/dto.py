"""Requests and results for trading operations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from web3.types import TxReceipt

from kaiafun_mcp.chain import DecodedEvent, to_hex_str
from kaiafun_mcp.exceptions import InvalidInputError
from kaiafun_mcp.utils import is_hex_address


def _require_address(value: str, field_name: str) -> None:
    if not is_hex_address(value):
        raise InvalidInputError(f"Invalid {field_name}: {value!r}")


def _require_positive(value: int, field_name: str) -> None:
    if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
        raise InvalidInputError(f"{field_name} must be a positive integer, got {value!r}")


def _require_non_negative(value: int, field_name: str) -> None:
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        raise InvalidInputError(f"{field_name} must be a non-negative integer, got {value!r}")


@dataclass(frozen=True)
class TokenMetadata:
    """Token metadata stored off-chain before listing."""

    name: str
    symbol: str
    description: str
    image_url: str
    twitter: Optional[str] = None
    telegram: Optional[str] = None
    website: Optional[str] = None

    def validate(self) -> None:
        for field_name in ("name", "symbol", "description", "image_url"):
            value = getattr(self, field_name)
            if not isinstance(value, str) or not value.strip():
                raise InvalidInputError(f"{field_name} is required")

    def to_payload(self, creator: str, timestamp_ms: int) -> dict[str, Any]:
        """Metadata document posted to the API. Social links are included only when set."""
        payload: dict[str, Any] = {
            "name": self.name,
            "symbol": self.symbol,
            "description": self.description,
            "imageURL": self.image_url,
        }
        for key in ("twitter", "telegram", "website"):
            value = getattr(self, key)
            if value:
                payload[key] = value
        payload["creator"] = creator.lower()
        payload["t"] = timestamp_ms
        return payload


@dataclass(frozen=True)
class BuyRequest:
    """Spend ``amount`` wei of native currency on ``token_address``."""

    token_address: str
    amount: int
    min_token_amount: int = 0

    def validate(self) -> None:
        _require_address(self.token_address, "token address")
        _require_positive(self.amount, "amount")
        _require_non_negative(self.min_token_amount, "min_token_amount")


@dataclass(frozen=True)
class SellRequest:
    """Sell ``amount`` smallest units of ``token_address``."""

    token_address: str
    amount: int
    min_base_amount: int = 0
    is_output_kaia: bool = True

    def validate(self) -> None:
        _require_address(self.token_address, "token address")
        _require_positive(self.amount, "amount")
        _require_non_negative(self.min_base_amount, "min_base_amount")


@dataclass(frozen=True)
class TradeResult:
    """Receipt of a buy/sell plus its Trade event (None if it could not be decoded)."""

    receipt: TxReceipt
    trade_event: Optional[DecodedEvent]

    @property
    def transaction_hash(self) -> str:
        return to_hex_str(self.receipt["transactionHash"])


@dataclass(frozen=True)
class ListResult:
    """Receipt of a listing plus its List event (None if it could not be decoded)."""

    receipt: TxReceipt
    list_event: Optional[DecodedEvent]

    @property
    def transaction_hash(self) -> str:
        return to_hex_str(self.receipt["transactionHash"])

    @property
    def token_address(self) -> Optional[str]:
        """Address of the new token; None when the List event is missing or lacks it."""
        if self.list_event is None:
            return None
        return self.list_event.get("tokenAddress")


@dataclass(frozen=True)
class TokenBalance:
    """ERC-20 balance of the signer."""

    token_address: str
    symbol: str
    decimals: int
    raw: int


@dataclass(frozen=True)
class TokenInfo:
    """ERC-20 descriptive fields."""

    token_address: str
    name: str
    symbol: str
    decimals: int
    total_supply: int
