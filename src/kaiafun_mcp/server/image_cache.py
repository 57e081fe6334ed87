# -*- coding: utf-8 -*-
"""In-memory cache of uploaded images, exposed as MCP resources."""

from __future__ import annotations

import structlog
from dataclasses import dataclass
from typing import Any, Callable, List, Optional
from cachetools import LRUCache

RESOURCE_URI_PREFIX = "image://kaiafun/"


@dataclass(frozen=True)
class CachedImage:
    """Image bytes kept after a successful upload."""

    uri: str
    filename: str
    mime_type: str
    content: bytes
    source_url: str
    uploaded_url: str


class ImageCache:
    """Resource URI -> uploaded image, LRU-bounded."""

    def __init__(
        self,
        *,
        maxsize: int = 32,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._cache: LRUCache[str, CachedImage] = LRUCache(maxsize=max(1, maxsize))
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def add(
        self,
        *,
        filename: str,
        mime_type: str,
        content: bytes,
        source_url: str,
        uploaded_url: str,
    ) -> CachedImage:
        uri = f"{RESOURCE_URI_PREFIX}{filename}"
        image = CachedImage(
            uri=uri,
            filename=filename,
            mime_type=mime_type,
            content=content,
            source_url=source_url,
            uploaded_url=uploaded_url,
        )
        self._cache[uri] = image
        self._logger.debug("image_cache_add", uri=uri, size_bytes=len(content))
        return image

    def get(self, uri: str) -> Optional[CachedImage]:
        return self._cache.get(uri)

    def list(self) -> List[CachedImage]:
        return list(self._cache.values())
