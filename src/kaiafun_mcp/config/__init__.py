"""Configuration subpackage."""

from kaiafun_mcp.config.config import (
    ApiSettings,
    AppSettings,
    ChainSettings,
    LoggingSettings,
    Settings,
    WalletSettings,
    get_settings,
)

__all__ = [
    "ApiSettings",
    "AppSettings",
    "ChainSettings",
    "LoggingSettings",
    "Settings",
    "WalletSettings",
    "get_settings",
]
