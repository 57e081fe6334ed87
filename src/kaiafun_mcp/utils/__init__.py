# -*- coding: utf-8 -*-
"""Utility modules."""

from kaiafun_mcp.utils.units import NATIVE_DECIMALS, from_smallest_unit, to_smallest_unit
from kaiafun_mcp.utils.validation import ADDRESS_PATTERN, is_hex_address, mask_address

__all__ = [
    "ADDRESS_PATTERN",
    "NATIVE_DECIMALS",
    "from_smallest_unit",
    "is_hex_address",
    "mask_address",
    "to_smallest_unit",
]
