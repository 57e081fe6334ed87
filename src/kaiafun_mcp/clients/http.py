# -*- coding: utf-8 -*-
"""Async HTTP client with optional retries and rate-limit handling."""

from __future__ import annotations

import asyncio
import random
import uuid
import aiohttp
import structlog
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional
from structlog.contextvars import bound_contextvars

from kaiafun_mcp.config import Settings
from kaiafun_mcp.exceptions import RateLimitError, RemoteEndpointError


@dataclass(frozen=True)
class BinaryResponse:
    """Raw body of a binary GET plus its content type."""

    content: bytes
    content_type: Optional[str]


class AsyncHttpClient:
    """Async HTTP client for the KaiaFun API and image downloads.

    Injects Settings and optionally an aiohttp.ClientSession. If no session
    is provided, one is created and must be closed via aclose() or used
    as an async context manager. ``settings.api.max_retries`` is the number
    of attempts per request (1 = no retry).
    """

    def __init__(
        self,
        settings: Settings,
        *,
        session: Optional[aiohttp.ClientSession] = None,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the client.

        Args:
            settings: Configuration (timeout, max_retries, etc.).
            session: Optional shared aiohttp session. If None, the client
                creates and owns a session (call aclose() when done).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._settings = settings
        self._session = session
        self._owns_session = session is None
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self._settings.api.timeout_seconds)
            self._session = aiohttp.ClientSession(timeout=timeout)
        return self._session

    async def aclose(self) -> None:
        """Close the session if this client owns it."""
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> AsyncHttpClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    def _backoff_delay(self, attempt: int) -> float:
        """Exponential backoff with jitter, capped at 4 seconds."""
        base = min(4.0, 0.25 * (2**attempt))
        return base + random.uniform(0.0, 0.15)

    async def _request(
        self,
        method: str,
        url: str,
        read: Callable[[aiohttp.ClientResponse], Awaitable[Any]],
        **kwargs: Any,
    ) -> Any:
        """Send one request (with up to max_retries attempts) and return ``read(response)``.

        Raises:
            RateLimitError: If 429 is returned on the last attempt.
            RemoteEndpointError: If the request fails after all attempts.
        """
        op = method.lower()
        request_id = uuid.uuid4().hex[:12]
        max_retries = self._settings.api.max_retries
        last_error: Optional[Exception] = None

        with bound_contextvars(
            http_method=method,
            http_url=url,
            http_request_id=request_id,
            http_max_retries=max_retries,
        ):
            for attempt in range(max_retries):
                is_last = attempt == max_retries - 1
                with bound_contextvars(http_attempt=attempt + 1):
                    try:
                        session = await self._get_session()
                        async with session.request(method, url, **kwargs) as response:
                            if response.status == 429:
                                retry_after: Optional[float] = None
                                header = response.headers.get("Retry-After")
                                if header:
                                    try:
                                        retry_after = float(header)
                                    except ValueError:
                                        pass
                                self._logger.warning(
                                    f"http_{op}_rate_limited",
                                    http_status_code=429,
                                    http_retry_after_seconds=retry_after,
                                )
                                if is_last:
                                    raise RateLimitError(url=url, retry_after=retry_after)
                                if retry_after is not None and retry_after > 0:
                                    await asyncio.sleep(retry_after)
                                else:
                                    await asyncio.sleep(self._backoff_delay(attempt))
                                continue

                            response.raise_for_status()
                            return await read(response)
                    except aiohttp.ClientResponseError as e:
                        last_error = e
                        self._logger.debug(
                            f"http_{op}_attempt_failed",
                            error_type=type(e).__name__,
                            error_message=str(e),
                            http_status_code=getattr(e, "status", None),
                        )
                    except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
                        last_error = e
                        self._logger.debug(
                            f"http_{op}_attempt_failed",
                            error_type=type(e).__name__,
                            error_message=str(e),
                        )
                    if not is_last:
                        await asyncio.sleep(self._backoff_delay(attempt))

            status_code = (
                getattr(last_error, "status", None)
                if isinstance(last_error, aiohttp.ClientResponseError)
                else None
            )
            self._logger.warning(
                f"http_{op}_failed",
                http_status_code=status_code,
                http_attempts=max_retries,
                error_type=type(last_error).__name__ if last_error else None,
                error_message=str(last_error) if last_error else None,
            )
            raise RemoteEndpointError(
                f"{method} {url} failed after {max_retries} attempt(s): {last_error}",
                url=url,
                status_code=status_code,
                cause=last_error,
            ) from last_error

    @staticmethod
    async def _read_json(response: aiohttp.ClientResponse) -> Any:
        # content_type=None: the API does not always label JSON bodies.
        return await response.json(content_type=None)

    @staticmethod
    async def _read_binary(response: aiohttp.ClientResponse) -> BinaryResponse:
        return BinaryResponse(
            content=await response.read(),
            content_type=response.headers.get("Content-Type"),
        )

    async def get_bytes(
        self,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
    ) -> BinaryResponse:
        """Perform a GET request and return the raw body and its content type.

        Raises:
            RemoteEndpointError: If the request fails.
        """
        return await self._request("GET", url, self._read_binary, params=params or {})

    async def post_json(
        self,
        url: str,
        *,
        json: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Perform a POST request with a JSON body and return the parsed JSON response.

        Raises:
            RemoteEndpointError: If the request fails or the body is not JSON.
        """
        return await self._request("POST", url, self._read_json, json=json or {})

    async def post_bytes(
        self,
        url: str,
        data: bytes,
        *,
        content_type: str,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """POST a raw binary body with the given Content-Type and return the parsed JSON response.

        Raises:
            RemoteEndpointError: If the request fails or the body is not JSON.
        """
        return await self._request(
            "POST",
            url,
            self._read_json,
            data=data,
            params=params or {},
            headers={"Content-Type": content_type},
        )
