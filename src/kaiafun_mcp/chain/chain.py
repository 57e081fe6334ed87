# -*- coding: utf-8 -*-
"""Static chain descriptors."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class NativeCurrency:
    """Native currency of a chain."""

    name: str
    symbol: str
    decimals: int


@dataclass(frozen=True)
class BlockExplorer:
    """Block explorer used to build transaction and address links."""

    name: str
    url: str

    def tx_url(self, tx_hash: str) -> str:
        return f"{self.url.rstrip('/')}/tx/{tx_hash}"

    def address_url(self, address: str) -> str:
        return f"{self.url.rstrip('/')}/account/{address}"


@dataclass(frozen=True)
class ChainDescriptor:
    """Network id, native currency, RPC endpoints and explorer for one chain."""

    id: int
    name: str
    native_currency: NativeCurrency
    rpc_urls: tuple[str, ...]
    block_explorer: BlockExplorer

    @property
    def default_rpc_url(self) -> str:
        return self.rpc_urls[0]

    def with_id(self, chain_id: int) -> ChainDescriptor:
        """Return a copy bound to another chain id (e.g. a configured override)."""
        return ChainDescriptor(
            id=chain_id,
            name=self.name,
            native_currency=self.native_currency,
            rpc_urls=self.rpc_urls,
            block_explorer=self.block_explorer,
        )


KAIA_MAINNET = ChainDescriptor(
    id=8217,
    name="Kaia",
    native_currency=NativeCurrency(name="Kaia", symbol="KAIA", decimals=18),
    rpc_urls=("https://public-en.node.kaia.io",),
    block_explorer=BlockExplorer(name="Kaiascope", url="https://klaytnscope.com"),
)
