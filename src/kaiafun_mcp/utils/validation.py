# -*- coding: utf-8 -*-
"""Address and key helpers shared by request models, services and logs."""

from __future__ import annotations

import re
from typing import Any

ADDRESS_PATTERN = r"^0x[a-fA-F0-9]{40}$"
_ADDRESS_RE = re.compile(ADDRESS_PATTERN)


def is_hex_address(addr: Any) -> bool:
    """Return True if addr is a 0x-prefixed, 40 hex digit address (any letter case)."""
    return isinstance(addr, str) and _ADDRESS_RE.fullmatch(addr) is not None


def mask_address(addr: str | None) -> str:
    """Return a masked wallet address for logging (e.g. 0x1234...abcd)."""
    if not addr or len(addr) < 10:
        return "***"
    return f"{addr[:6]}...{addr[-4:]}"
