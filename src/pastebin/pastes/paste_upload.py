"""Reading multipart uploads into paste payloads."""

from __future__ import annotations

import logging

from fastapi import UploadFile

from ..config import PasteLimits
from .classify import DEFAULT_UPLOAD_TYPE
from .paste_errors import PasteTooLargeError
from .paste_models import PasteUpload

logger = logging.getLogger(__name__)


async def read_upload(upload: UploadFile, limits: PasteLimits) -> PasteUpload:
    """Stream ``upload`` into memory, aborting once it exceeds the size cap."""
    cap = limits.max_upload_bytes
    chunks: list[bytes] = []
    size = 0
    try:
        while True:
            chunk = await upload.read(limits.chunk_size_bytes)
            if not chunk:
                break
            size += len(chunk)
            if size > cap:
                logger.warning(
                    "paste.upload.too_large",
                    extra={"upload_filename": upload.filename, "size_bytes": size, "limit_bytes": cap},
                )
                raise PasteTooLargeError(size, cap)
            chunks.append(chunk)
    finally:
        await upload.close()

    return PasteUpload(
        data=b"".join(chunks),
        content_type=upload.content_type or DEFAULT_UPLOAD_TYPE,
        filename=upload.filename,
    )
