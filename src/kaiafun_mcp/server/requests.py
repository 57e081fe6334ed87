# -*- coding: utf-8 -*-
"""Typed tool arguments.

Each model validates one tool's arguments and is the source of the JSON
Schema advertised for that tool. Field aliases are the camelCase names
agents send (tokenAddress, imageURL, ...).
"""

from __future__ import annotations

from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, HttpUrl, TypeAdapter, ValidationError

from kaiafun_mcp.services.trading import BuyRequest, SellRequest, TokenMetadata
from kaiafun_mcp.utils import ADDRESS_PATTERN, to_smallest_unit

_HTTP_URL = TypeAdapter(HttpUrl)


def _check_http_url(value: str) -> str:
    """Validate as an http(s) URL but keep the string exactly as sent."""
    try:
        _HTTP_URL.validate_python(value)
    except ValidationError:
        raise ValueError("must be a valid http or https URL") from None
    return value


ImageUrl = Annotated[str, AfterValidator(_check_http_url), Field(json_schema_extra={"format": "uri"})]


class ToolRequest(BaseModel):
    """Base for tool argument models. Unknown keys are ignored."""

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        str_strip_whitespace=True,
        frozen=True,
    )


class EmptyRequest(ToolRequest):
    """Tools without arguments."""


class TokenAddressRequest(ToolRequest):
    token_address: str = Field(
        alias="tokenAddress",
        pattern=ADDRESS_PATTERN,
        description="Address of the token",
    )


class ListTokenRequest(ToolRequest):
    name: str = Field(min_length=1, description="Name of the token")
    symbol: str = Field(min_length=1, description="Symbol of the token (ticker)")
    description: str = Field(min_length=1, description="Description of the token")
    image_url: ImageUrl = Field(
        alias="imageURL",
        description="URL to the token image (best if result from the `upload-image` tool)",
    )
    twitter: Optional[str] = Field(default=None, description="Twitter handle (optional)")
    telegram: Optional[str] = Field(default=None, description="Telegram group (optional)")
    website: Optional[str] = Field(default=None, description="Website URL (optional)")

    def to_metadata(self) -> TokenMetadata:
        return TokenMetadata(
            name=self.name,
            symbol=self.symbol,
            description=self.description,
            image_url=self.image_url,
            twitter=self.twitter or None,
            telegram=self.telegram or None,
            website=self.website or None,
        )


class BuyTokenRequest(ToolRequest):
    token_address: str = Field(
        alias="tokenAddress",
        pattern=ADDRESS_PATTERN,
        description="Address of the token to buy",
    )
    amount: str = Field(
        min_length=1,
        description="Amount of KAIA to spend (in KAIA, not wei)",
    )
    min_token_amount: Optional[str] = Field(
        default=None,
        alias="minTokenAmount",
        description="Minimum amount of tokens to receive (optional)",
    )

    def to_intent(self) -> BuyRequest:
        return BuyRequest(
            token_address=self.token_address,
            amount=to_smallest_unit(self.amount),
            min_token_amount=to_smallest_unit(self.min_token_amount) if self.min_token_amount else 0,
        )


class SellTokenRequest(ToolRequest):
    token_address: str = Field(
        alias="tokenAddress",
        pattern=ADDRESS_PATTERN,
        description="Address of the token to sell",
    )
    amount: str = Field(min_length=1, description="Amount of tokens to sell")
    min_base_amount: Optional[str] = Field(
        default=None,
        alias="minBaseAmount",
        description="Minimum amount of KAIA to receive (optional)",
    )
    is_output_kaia: bool = Field(
        default=True,
        alias="isOutputKAIA",
        description="Whether to receive KAIA or WKAIA (optional, defaults to true)",
    )

    def to_intent(self) -> SellRequest:
        return SellRequest(
            token_address=self.token_address,
            amount=to_smallest_unit(self.amount),
            min_base_amount=to_smallest_unit(self.min_base_amount) if self.min_base_amount else 0,
            is_output_kaia=self.is_output_kaia,
        )


class UploadImageRequest(ToolRequest):
    image_url: ImageUrl = Field(
        alias="imageURL",
        description="URL of the image to upload, preferably from a website (not base64 encoded)",
    )


class AmountRequest(ToolRequest):
    amount: str = Field(min_length=1, description="Amount to convert")
