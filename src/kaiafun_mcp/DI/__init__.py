"""Dependency injection."""

from kaiafun_mcp.DI.container import Container

__all__ = ["Container"]
