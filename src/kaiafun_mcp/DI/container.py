# -*- coding: utf-8 -*-
"""Dependency injection container (dependency-injector)."""

from __future__ import annotations

from dependency_injector import containers, providers

from kaiafun_mcp.config import get_settings
from kaiafun_mcp.clients.chain_client import AsyncChainClient
from kaiafun_mcp.clients.http import AsyncHttpClient
from kaiafun_mcp.clients.kaiafun_api import KaiaFunApiClient
from kaiafun_mcp.server.app import create_server
from kaiafun_mcp.server.handlers import ToolHandlers
from kaiafun_mcp.server.image_cache import ImageCache
from kaiafun_mcp.services.trading import TradingClient


class Container(containers.DeclarativeContainer):
    """Application container. Wires settings, HTTP/chain clients, trading client and MCP server."""

    config = providers.Callable(get_settings)

    http_client = providers.Singleton(
        AsyncHttpClient,
        settings=config,
    )

    kaiafun_api_client = providers.Singleton(
        KaiaFunApiClient,
        http_client=http_client,
        settings=config,
    )

    chain_client = providers.Singleton(
        AsyncChainClient,
        settings=config,
    )

    trading_client = providers.Singleton(
        TradingClient,
        settings=config,
        chain_client=chain_client,
        api_client=kaiafun_api_client,
    )

    image_cache = providers.Singleton(ImageCache)

    tool_handlers = providers.Singleton(
        ToolHandlers,
        trading_client=trading_client,
        http_client=http_client,
        image_cache=image_cache,
        settings=config,
    )

    mcp_server = providers.Singleton(
        create_server,
        handlers=tool_handlers,
        image_cache=image_cache,
    )
