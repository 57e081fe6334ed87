"""Conversion between display amounts and on-chain smallest units."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation, localcontext
from typing import Any

from kaiafun_mcp.exceptions import InvalidInputError

NATIVE_DECIMALS = 18

# Enough digits for any uint256 plus 18 fractional places.
_PRECISION = 100


def to_smallest_unit(amount: Any, decimals: int = NATIVE_DECIMALS) -> int:
    """Convert a display amount (e.g. "1.5") to an integer in smallest units.

    Raises:
        InvalidInputError: If amount is not a finite number or has more
            fractional digits than ``decimals``.
    """
    text = str(amount).strip()
    try:
        value = Decimal(text)
    except InvalidOperation as e:
        raise InvalidInputError(f"Invalid amount: {amount!r}") from e
    if not value.is_finite():
        raise InvalidInputError(f"Invalid amount: {amount!r}")

    with localcontext() as ctx:
        ctx.prec = _PRECISION
        scaled = value.scaleb(decimals)
        if scaled != scaled.to_integral_value():
            raise InvalidInputError(
                f"Amount {text} has more than {decimals} decimal places"
            )
        return int(scaled)


def from_smallest_unit(value: Any, decimals: int = NATIVE_DECIMALS) -> str:
    """Convert an integer amount in smallest units to a display string (e.g. "1.5").

    Trailing fractional zeros are dropped; whole amounts have no decimal point.

    Raises:
        InvalidInputError: If value is not an integer.
    """
    try:
        raw = int(str(value).strip())
    except ValueError as e:
        raise InvalidInputError(f"Invalid integer amount: {value!r}") from e

    with localcontext() as ctx:
        ctx.prec = _PRECISION
        text = format(Decimal(raw).scaleb(-decimals), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text
