"""MCP tool layer."""

from kaiafun_mcp.server.app import create_server, run_stdio
from kaiafun_mcp.server.handlers import ToolHandlers, format_error
from kaiafun_mcp.server.image_cache import CachedImage, ImageCache
from kaiafun_mcp.server.tools import TOOL_SPECS, TOOLS_BY_NAME, ToolSpec

__all__ = [
    "TOOL_SPECS",
    "TOOLS_BY_NAME",
    "CachedImage",
    "ImageCache",
    "ToolHandlers",
    "ToolSpec",
    "create_server",
    "format_error",
    "run_stdio",
]
