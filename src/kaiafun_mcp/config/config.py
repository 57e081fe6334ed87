# -*- coding: utf-8 -*-
"""Configuration loaded from environment via Pydantic Settings.

Nested env vars use <section>__<key>, e.g. LOGGING__CONSOLE_LEVEL, CHAIN__RPC_URL.
Each section is itself a BaseSettings, so bare field names (e.g. PRIVATE_KEY)
are read as well.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """General application configuration."""

    model_config = SettingsConfigDict(extra="ignore")

    app_name: str = "kaiafun-mcp"
    service_name: Optional[str] = None
    service_version: Optional[str] = None
    environment: Literal["development", "test", "production"] = "development"


class LoggingSettings(BaseSettings):
    """Structured logging configuration for structlog/stdlib/Logfire."""

    model_config = SettingsConfigDict(extra="ignore")

    console_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    file_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    logfire_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    # Console output goes to stderr; stdout is reserved for the MCP stdio transport.
    log_to_console: bool = True
    log_to_file: bool = False
    log_file_path: str = "logs/kaiafun_mcp.log"
    log_file_when: Literal[
        "S", "M", "H", "D", "W0", "W1", "W2", "W3", "W4", "W5", "W6", "midnight"
    ] = "midnight"
    log_file_interval: int = 1
    log_file_backup_count: int = 30
    log_file_utc: bool = True

    json_format: bool = False

    logfire_enabled: bool = False
    logfire_token: Optional[str] = None


class ApiSettings(BaseSettings):
    """Configuration for the KaiaFun REST API (metadata and image upload)."""

    model_config = SettingsConfigDict(extra="ignore")

    base_url: str = Field(
        default="https://kaiafun.io/api",
        description="KaiaFun API base URL.",
    )
    web_base_url: str = Field(
        default="https://kaiafun.io",
        description="KaiaFun web app base URL (token detail pages).",
    )
    timeout_seconds: float = Field(
        default=30.0,
        ge=1.0,
        le=300.0,
        description="HTTP request timeout in seconds.",
    )
    max_retries: int = Field(
        default=1,
        ge=1,
        le=20,
        description="Attempts per HTTP request. 1 means a single attempt, no retry.",
    )


class ChainSettings(BaseSettings):
    """Chain connection and contract addresses (from env CHAIN__*)."""

    model_config = SettingsConfigDict(extra="ignore")

    rpc_url: Optional[str] = Field(
        default=None,
        description="JSON-RPC endpoint. Defaults to the chain descriptor's first RPC URL.",
    )
    chain_id: int = Field(
        default=8217,
        description="Chain id the connection is bound to (8217 for Kaia mainnet).",
    )
    core_address: Optional[str] = Field(
        default=None,
        description="KaiaFun core contract address (buyWithETH, sell, listWithETH).",
    )
    base_token_address: Optional[str] = Field(
        default=None,
        description="Wrapped native token (WKAIA) address used as the listing base token.",
    )
    request_timeout_seconds: float = Field(default=30.0, ge=1.0, le=300.0)
    receipt_timeout_seconds: float = Field(default=120.0, ge=1.0, le=3600.0)
    receipt_poll_seconds: float = Field(default=0.5, ge=0.1, le=30.0)


class WalletSettings(BaseSettings):
    """Signing wallet (from env PRIVATE_KEY or WALLET__PRIVATE_KEY)."""

    model_config = SettingsConfigDict(extra="ignore")

    private_key: Optional[str] = Field(default=None, description="Wallet private key (hex).")


class Settings(BaseSettings):
    """Root application configuration.

    Groups all sub-configurations so the rest of the code does not
    read environment variables directly. Nested overrides use
    <section>__<key>, e.g. LOGGING__CONSOLE_LEVEL, CHAIN__CORE_ADDRESS.
    """

    model_config = SettingsConfigDict(
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    app: AppSettings = Field(default_factory=AppSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    api: ApiSettings = Field(default_factory=ApiSettings)
    chain: ChainSettings = Field(default_factory=ChainSettings)
    wallet: WalletSettings = Field(default_factory=WalletSettings)

    @classmethod
    def from_env(cls, **overrides: Any) -> Settings:
        """Build settings from environment (and .env), with optional overrides.

        Nested overrides can be passed as nested dicts, e.g.
        from_env(api={"timeout_seconds": 30}).
        """
        return cls(**overrides)


@lru_cache
def get_settings() -> Settings:
    """Return a single cached instance of Settings.

    Typical usage:

        from kaiafun_mcp.config import get_settings

        settings = get_settings()
        rpc_url = settings.chain.rpc_url
    """
    return Settings()
