# -*- coding: utf-8 -*-
"""
Entry point for the KaiaFun MCP server.

Orchestrates: logging, settings, container, chain id check, MCP stdio server, shutdown.
Tool calls flow: MCP client -> ToolHandlers -> TradingClient -> chain / KaiaFun API.

Run with: kaiafun-mcp  (or python -m kaiafun_mcp.main)
"""
from __future__ import annotations

import asyncio
import sys
import structlog
from typing import Any

from kaiafun_mcp.DI import Container
from kaiafun_mcp.config import get_settings
from kaiafun_mcp.exceptions import MissingRequiredConfigError
from kaiafun_mcp.logging.config import configure_logging
from kaiafun_mcp.server import run_stdio
from kaiafun_mcp.utils import mask_address


async def _check_network(container: Container, logger: Any) -> None:
    """Compare the RPC node's chain id with the bound one. A mismatch is logged, not fatal:
    mutating tools refuse to run on their own."""
    chain_client = container.chain_client()
    try:
        network_chain_id = await chain_client.get_network_chain_id()
    except Exception as e:
        logger.warning(
            "main_chain_id_unavailable",
            error_type=type(e).__name__,
            error_message=str(e),
        )
        return
    if network_chain_id != chain_client.chain.id:
        logger.warning(
            "main_chain_id_mismatch",
            bound_chain_id=chain_client.chain.id,
            network_chain_id=network_chain_id,
        )


async def run() -> None:
    configure_logging()
    logger = structlog.get_logger("main")
    settings = get_settings()
    private_key = (settings.wallet.private_key or "").strip()
    if not private_key:
        logger.error(
            "main_missing_private_key",
            message="PRIVATE_KEY is not set",
        )
        raise MissingRequiredConfigError("PRIVATE_KEY")

    container = Container()
    trading_client = container.trading_client()
    http_client = container.http_client()
    server = container.mcp_server()
    logger.info(
        "main_client_initialized",
        wallet_masked=mask_address(trading_client.wallet_address),
        chain_id=trading_client.chain.id,
    )

    await _check_network(container, logger)

    logger.info("main_server_started", transport="stdio")
    try:
        await run_stdio(server)
    finally:
        await http_client.aclose()
        logger.info("main_shutdown_complete")


def main() -> None:
    try:
        asyncio.run(run())
    except KeyboardInterrupt:
        pass
    except Exception as e:
        structlog.get_logger("main").error(
            "main_fatal_error",
            error_type=type(e).__name__,
            error_message=str(e),
        )
        sys.exit(1)


__all__ = ["run", "main"]

if __name__ == "__main__":
    main()
