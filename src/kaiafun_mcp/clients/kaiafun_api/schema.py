"""KaiaFun API request/response types."""

from __future__ import annotations

from typing import TypedDict


class MetadataRequestSchema(TypedDict):
    """POST /token/metadata body. ``metadata`` is a serialized JSON string."""

    metadata: str


class MetadataResponseSchema(TypedDict, total=False):
    """POST /token/metadata response."""

    hash: str


class UploadResponseSchema(TypedDict, total=False):
    """POST /upload response."""

    url: str
