# -*- coding: utf-8 -*-
"""Decode contract events out of transaction receipts.

Decoding is delegated to web3.py's contract event codec. A log that does not
match a shape (other event signature, wrong topic count, undecodable data)
is skipped, never raised.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Optional

from eth_abi.exceptions import DecodingError
from web3 import Web3
from web3.exceptions import Web3Exception

from kaiafun_mcp.chain.abi import ABIEntry

# Provider-less instance; only its ABI codec is used.
_CODEC_W3 = Web3()


def to_hex_str(value: Any) -> str:
    """Return a 0x-prefixed hex string for bytes/HexBytes/str values."""
    if isinstance(value, str):
        return value if value.startswith("0x") else "0x" + value
    return Web3.to_hex(value)


@dataclass(frozen=True)
class DecodedEvent:
    """One contract event decoded from a receipt log."""

    name: str
    args: dict[str, Any] = field(default_factory=dict)
    address: Optional[str] = None
    log_index: Optional[int] = None
    transaction_hash: Optional[str] = None

    def get(self, key: str, default: Any = None) -> Any:
        return self.args.get(key, default)


def try_decode(log: Mapping[str, Any], shapes: Sequence[ABIEntry]) -> Optional[DecodedEvent]:
    """Decode a log against the first matching event shape, or return None."""
    for shape in shapes:
        event = _CODEC_W3.eth.contract(abi=[shape]).events[shape["name"]]()
        try:
            decoded = event.process_log(log)
        except (Web3Exception, DecodingError, KeyError, ValueError, TypeError):
            continue
        tx_hash = decoded.get("transactionHash")
        return DecodedEvent(
            name=str(decoded["event"]),
            args=dict(decoded["args"]),
            address=decoded.get("address"),
            log_index=decoded.get("logIndex"),
            transaction_hash=to_hex_str(tx_hash) if tx_hash is not None else None,
        )
    return None


def get_event_from_receipt(
    receipt: Optional[Mapping[str, Any]],
    shapes: Sequence[ABIEntry],
    event_name: str,
) -> Optional[DecodedEvent]:
    """Return the first log in the receipt that decodes to ``event_name``.

    Logs are visited in receipt order. None when the receipt is absent,
    has no logs, or no log decodes to the requested event.
    """
    if receipt is None:
        return None
    logs: Iterable[Mapping[str, Any]] = receipt.get("logs") or []
    for log in logs:
        decoded = try_decode(log, shapes)
        if decoded is not None and decoded.name == event_name:
            return decoded
    return None
