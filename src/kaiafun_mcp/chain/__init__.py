"""Chain descriptors, contract ABIs and receipt event decoding."""

from kaiafun_mcp.chain import abi
from kaiafun_mcp.chain.chain import KAIA_MAINNET, BlockExplorer, ChainDescriptor, NativeCurrency
from kaiafun_mcp.chain.events import DecodedEvent, get_event_from_receipt, to_hex_str, try_decode

__all__ = [
    "KAIA_MAINNET",
    "BlockExplorer",
    "ChainDescriptor",
    "DecodedEvent",
    "NativeCurrency",
    "abi",
    "get_event_from_receipt",
    "to_hex_str",
    "try_decode",
]
