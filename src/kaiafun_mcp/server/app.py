# -*- coding: utf-8 -*-
"""MCP server: registers tool and resource handlers and serves them over stdio."""

from __future__ import annotations

import structlog
from typing import Any, Dict, Iterable, List, Optional

from mcp.server import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.stdio import stdio_server
from mcp.types import Resource, TextContent, Tool
from pydantic import AnyUrl

from kaiafun_mcp.server.handlers import ToolHandlers
from kaiafun_mcp.server.image_cache import ImageCache
from kaiafun_mcp.server.tools import TOOL_SPECS

SERVER_NAME = "kaiafun-mcp"


def create_server(
    handlers: ToolHandlers,
    image_cache: ImageCache,
    *,
    name: str = SERVER_NAME,
    version: Optional[str] = None,
) -> Server:
    """Build the MCP server. Tool calls are routed to ``handlers``; uploaded images
    in ``image_cache`` are listed and readable as resources."""
    app: Server = Server(name, version=version)
    logger = structlog.get_logger("server")

    @app.list_tools()
    async def list_tools() -> List[Tool]:
        logger.debug("server_list_tools")
        return [spec.to_tool() for spec in TOOL_SPECS]

    @app.call_tool()
    async def call_tool(name: str, arguments: Optional[Dict[str, Any]]) -> List[TextContent]:
        return await handlers.call(name, arguments)

    @app.list_resources()
    async def list_resources() -> List[Resource]:
        return [
            Resource(
                uri=AnyUrl(image.uri),
                name=f"Image: {image.filename}",
                description=f"Uploaded image resource ({image.uploaded_url})",
                mimeType=image.mime_type,
            )
            for image in image_cache.list()
        ]

    @app.read_resource()
    async def read_resource(uri: AnyUrl) -> Iterable[ReadResourceContents]:
        image = image_cache.get(str(uri))
        if image is None:
            logger.warning("server_resource_not_found", uri=str(uri))
            raise ValueError(f"Resource not found: {uri}")
        return [ReadResourceContents(content=image.content, mime_type=image.mime_type)]

    return app


async def run_stdio(app: Server) -> None:
    """Serve ``app`` on stdin/stdout until the client disconnects."""
    async with stdio_server() as (read_stream, write_stream):
        await app.run(read_stream, write_stream, app.create_initialization_options())
