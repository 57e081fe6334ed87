# -*- coding: utf-8 -*-
"""Logging configuration for structlog + Logfire.

stdout carries the MCP stdio stream, so console logs always go to stderr.
"""

from __future__ import annotations

import logging
import sys
import logfire
import structlog
from typing import Any
from structlog.types import EventDict, Processor
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from kaiafun_mcp.config import AppSettings, LoggingSettings, Settings, get_settings

LOG_LEVEL_TO_LOGFIRE: dict[str, str] = {
    "DEBUG": "debug",
    "INFO": "info",
    "WARNING": "warn",
    "ERROR": "error",
    "CRITICAL": "fatal",
}

# Event keys whose values must never be written out.
SECRET_KEYS = frozenset({"private_key", "privateKey", "raw_transaction", "logfire_token"})


def _level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


def _redact_secrets(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Replace values of SECRET_KEYS with a placeholder."""
    for key in SECRET_KEYS.intersection(event_dict):
        event_dict[key] = "***"
    return event_dict


def _service_context(app_settings: AppSettings) -> Processor:
    """Processor attaching logger name, app/service identity and environment to every log event."""
    identity: dict[str, Any] = {"app_name": app_settings.app_name}
    if app_settings.service_name:
        identity["service_name"] = app_settings.service_name
    if app_settings.service_version:
        identity["service_version"] = app_settings.service_version
    identity["environment"] = app_settings.environment

    def _add_service_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        stdlib_logger = getattr(logger, "_logger", None)
        event_dict["logger"] = (
            getattr(stdlib_logger, "name", None) or getattr(logger, "name", "") or ""
        )
        event_dict.update(identity)
        return event_dict

    return _add_service_context


def _build_handlers(logging_settings: LoggingSettings) -> list[logging.Handler]:
    """stderr console handler and/or timed rotating file handler, per settings."""
    handlers: list[logging.Handler] = []
    if logging_settings.log_to_console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(_level(logging_settings.console_level))
        handlers.append(console_handler)

    if logging_settings.log_to_file:
        log_file_path = Path(logging_settings.log_file_path)
        log_file_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = TimedRotatingFileHandler(
            log_file_path,
            when=logging_settings.log_file_when,
            interval=logging_settings.log_file_interval,
            backupCount=logging_settings.log_file_backup_count,
            encoding="utf-8",
            utc=logging_settings.log_file_utc,
        )
        file_handler.setLevel(_level(logging_settings.file_level))
        handlers.append(file_handler)

    for handler in handlers:
        handler.setFormatter(logging.Formatter("%(message)s"))
    return handlers


def _configure_logfire(settings: Settings) -> None:
    app_settings = settings.app
    logging_settings = settings.logging
    logfire.configure(
        token=logging_settings.logfire_token,
        service_name=app_settings.service_name or app_settings.app_name,
        service_version=app_settings.service_version,
        min_level=LOG_LEVEL_TO_LOGFIRE.get(logging_settings.logfire_level, "info"),  # type: ignore[arg-type]
        environment=app_settings.environment,
        console=False,
    )


def _build_processors(settings: Settings) -> list[Processor]:
    logging_settings = settings.logging
    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _service_context(settings.app),
        _redact_secrets,
    ]
    if logging_settings.logfire_enabled:
        processors.append(logfire.StructlogProcessor())  # type: ignore[arg-type]

    # A file sink forces JSON everywhere; otherwise json_format picks the console renderer.
    if logging_settings.log_to_console or logging_settings.log_to_file:
        if logging_settings.log_to_file or logging_settings.json_format:
            processors.append(structlog.processors.JSONRenderer())
        else:
            processors.append(structlog.dev.ConsoleRenderer(colors=False))
    return processors


def configure_logging(settings: Settings | None = None) -> None:
    """Configure stdlib handlers, optional Logfire and structlog from settings."""
    settings = settings or get_settings()
    logging_settings = settings.logging

    handlers = _build_handlers(logging_settings)
    if handlers:
        logging.basicConfig(
            level=min(handler.level for handler in handlers),
            handlers=handlers,
            force=True,
        )

    if logging_settings.logfire_enabled:
        _configure_logfire(settings)

    structlog.configure(
        processors=_build_processors(settings),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
