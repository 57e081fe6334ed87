"""Logging subpackage."""

from kaiafun_mcp.logging.config import configure_logging

__all__ = ["configure_logging"]
