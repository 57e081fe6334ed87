# -*- coding: utf-8 -*-
"""KaiaFun REST API client (token metadata and image upload)."""

from __future__ import annotations

import structlog
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional, cast
from structlog.contextvars import bound_contextvars

from kaiafun_mcp.clients.kaiafun_api.schema import (
    MetadataRequestSchema,
    MetadataResponseSchema,
    UploadResponseSchema,
)
from kaiafun_mcp.config import Settings
from kaiafun_mcp.exceptions import RemoteEndpointError

if TYPE_CHECKING:
    from kaiafun_mcp.clients.http import AsyncHttpClient


class KaiaFunApiClient:
    """Client for the KaiaFun API (/token/metadata, /upload)."""

    def __init__(
        self,
        http_client: "AsyncHttpClient",
        settings: Settings,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the client.

        Args:
            http_client: Async HTTP client (e.g. AsyncHttpClient).
            settings: Application settings (uses settings.api.base_url).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._http = http_client
        self._settings = settings
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def _base_url(self) -> str:
        return self._settings.api.base_url.rstrip("/")

    async def post_metadata(self, serialized_metadata: str) -> str:
        """Store serialized token metadata and return its content hash.

        Args:
            serialized_metadata: JSON string describing the token.

        Returns:
            The ``hash`` assigned by the API.

        Raises:
            RemoteEndpointError: On request failure or when the response has no hash.
        """
        url = f"{self._base_url()}/token/metadata"
        body: MetadataRequestSchema = {"metadata": serialized_metadata}
        data = await self._http.post_json(url, json=cast(Dict[str, Any], body))
        metadata_hash = cast(MetadataResponseSchema, data).get("hash") if isinstance(data, dict) else None
        if not isinstance(metadata_hash, str) or not metadata_hash:
            self._logger.warning(
                "kaiafun_api_metadata_malformed_response",
                response_type=type(data).__name__,
            )
            raise RemoteEndpointError(
                "Metadata endpoint returned no hash",
                url=url,
            )
        return metadata_hash

    async def upload(self, content: bytes, filename: str, mime_type: str) -> Optional[str]:
        """Upload a binary blob and return the URL assigned to it.

        Any failure (network error, non-2xx status, empty or malformed body)
        is logged and reported as None.
        """
        url = f"{self._base_url()}/upload"
        with bound_contextvars(upload_filename=filename, upload_mime_type=mime_type):
            try:
                data = await self._http.post_bytes(
                    url,
                    content,
                    content_type=mime_type,
                    params={"filename": filename},
                )
            except RemoteEndpointError as e:
                self._logger.warning(
                    "kaiafun_api_upload_failed",
                    http_status_code=e.status_code,
                    error_message=str(e),
                )
                return None

            uploaded = cast(UploadResponseSchema, data).get("url") if isinstance(data, dict) else None
            if not isinstance(uploaded, str) or not uploaded:
                self._logger.warning(
                    "kaiafun_api_upload_malformed_response",
                    response_type=type(data).__name__,
                )
                return None

            self._logger.info("kaiafun_api_upload_done", uploaded_url=uploaded, size_bytes=len(content))
            return uploaded
