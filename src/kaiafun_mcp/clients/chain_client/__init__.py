# -*- coding: utf-8 -*-
"""Async facade for the Kaia JSON-RPC connection (web3.py) with asyncio.to_thread."""

from kaiafun_mcp.clients.chain_client.chain_client import AsyncChainClient

__all__ = ["AsyncChainClient"]
