"""Static content-type classification used by the presentation layer."""

from __future__ import annotations

from enum import Enum

TEXT_PLAIN = "text/plain"
DEFAULT_UPLOAD_TYPE = "application/octet-stream"

TEXT_TYPES = frozenset(
    {
        "text/plain",
        "text/html",
        "text/css",
        "text/csv",
        "text/markdown",
        "text/x-python",
        "text/x-c",
        "text/x-shellscript",
        "text/xml",
        "application/json",
        "application/javascript",
        "application/x-sh",
        "application/x-yaml",
        "application/xml",
    }
)

IMAGE_TYPES = frozenset(
    {
        "image/gif",
        "image/jpeg",
        "image/png",
        "image/svg+xml",
        "image/webp",
        "image/bmp",
    }
)

OBJECT_TYPES = frozenset(
    {
        "application/pdf",
        "audio/mpeg",
        "audio/ogg",
        "audio/wav",
        "video/mp4",
        "video/ogg",
        "video/webm",
    }
)


class ContentKind(str, Enum):
    TEXT = "text"
    IMAGE = "image"
    OBJECT = "object"
    OTHER = "other"


def normalize_content_type(content_type: str | None) -> str:
    """Drop parameters such as ``; charset=utf-8`` and lower-case."""
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()


def classify(content_type: str | None) -> ContentKind:
    normalized = normalize_content_type(content_type)
    if normalized in TEXT_TYPES:
        return ContentKind.TEXT
    if normalized in IMAGE_TYPES:
        return ContentKind.IMAGE
    if normalized in OBJECT_TYPES:
        return ContentKind.OBJECT
    return ContentKind.OTHER
