"""HTTP routes for paste operations."""

from __future__ import annotations

import logging
import re
from urllib.parse import quote

from fastapi import APIRouter, File, Form, HTTPException, Path, Request, UploadFile, status
from fastapi.responses import Response
from starlette.concurrency import run_in_threadpool

from ..config import PasteLimits
from ..exceptions import RepositoryError
from ..pastes.classify import ContentKind
from ..pastes.paste_errors import (
    PasteError,
    PasteNotFoundError,
    PasteTooLargeError,
    PasteValidationError,
)
from ..pastes.paste_models import PasteUpload
from ..pastes.paste_service import PasteService
from ..pastes.paste_upload import read_upload
from .paste_schemas import (
    PasteCreatedSchema,
    PasteDeletedSchema,
    PasteSummarySchema,
    PasteViewSchema,
)

logger = logging.getLogger(__name__)

HTTP_PAYLOAD_TOO_LARGE = 413
PASTE_ID_PATTERN = r"^[A-Za-z0-9_-]+$"
_UNSAFE_FILENAME = re.compile(r"[^A-Za-z0-9_ .()-]")


def _error(status_code: int, reason: str, details: str | None = None) -> HTTPException:
    return HTTPException(
        status_code=status_code,
        detail={"status": "error", "failure_reason": reason, "details": details},
    )


def _not_found() -> HTTPException:
    return _error(status.HTTP_404_NOT_FOUND, "not_found", "paste does not exist")


def content_disposition(title: str, kind: ContentKind) -> str:
    """Build a latin-1 safe header: ASCII ``filename`` plus RFC 5987 ``filename*``."""
    filename = _UNSAFE_FILENAME.sub("_", title).strip() or "paste"
    disposition = "attachment" if kind is ContentKind.OTHER else "inline"
    header = f'{disposition}; filename="{filename}"'
    if title.strip():
        header += f"; filename*=UTF-8''{quote(title.strip(), safe='')}"
    return header


def build_paste_router(
    service: PasteService,
    *,
    limits: PasteLimits,
    history_enabled: bool = True,
) -> APIRouter:
    router = APIRouter(tags=["pastes"])

    @router.post(
        "/api/pastes",
        status_code=status.HTTP_201_CREATED,
        response_model=PasteCreatedSchema,
    )
    async def create_paste(
        request: Request,
        content: str | None = Form(None),
        title: str = Form(""),
        author: str = Form(""),
        hold_seconds: int | None = Form(None),
        file: UploadFile | None = File(None),
    ) -> PasteCreatedSchema:
        payload: str | PasteUpload | None = content
        try:
            if file is not None and file.filename:
                payload = await read_upload(file, limits)
            paste_id = await run_in_threadpool(
                service.create,
                payload,
                title=title,
                author=author,
                hold_seconds=hold_seconds,
            )
        except PasteTooLargeError as exc:
            raise _error(HTTP_PAYLOAD_TOO_LARGE, "too_large", str(exc)) from exc
        except PasteValidationError as exc:
            raise _error(status.HTTP_400_BAD_REQUEST, "invalid_paste", str(exc)) from exc
        except (PasteError, RepositoryError) as exc:
            logger.error("paste.create.failed", extra={"error": str(exc)})
            raise _error(
                status.HTTP_500_INTERNAL_SERVER_ERROR, "create_failed", "could not store paste"
            ) from exc

        return PasteCreatedSchema(
            id=paste_id,
            url=str(request.url_for("read_paste", paste_id=paste_id)),
            raw_url=str(request.url_for("read_raw_paste", paste_id=paste_id)),
        )

    @router.get("/api/pastes", response_model=list[PasteSummarySchema])
    def list_pastes() -> list[PasteSummarySchema]:
        if not history_enabled:
            raise _error(status.HTTP_404_NOT_FOUND, "history_disabled")
        return [
            PasteSummarySchema(
                id=summary.id,
                title=summary.title,
                author=summary.author,
                updated_at=summary.updated_at,
                expires_at=summary.expires_at,
            )
            for summary in service.list_all()
        ]

    @router.get("/api/pastes/{paste_id}", response_model=PasteViewSchema, name="read_paste")
    def read_paste(
        request: Request,
        paste_id: str = Path(..., pattern=PASTE_ID_PATTERN),
    ) -> PasteViewSchema:
        try:
            view = service.fetch(paste_id)
        except PasteNotFoundError as exc:
            raise _not_found() from exc
        except (PasteError, RepositoryError) as exc:
            logger.error("paste.fetch.failed", extra={"paste_id": paste_id, "error": str(exc)})
            raise _error(
                status.HTTP_500_INTERNAL_SERVER_ERROR, "fetch_failed", "could not load paste"
            ) from exc

        return PasteViewSchema(
            id=view.id,
            title=view.title,
            author=view.author,
            content_type=view.content_type,
            kind=view.kind.value,
            updated_at=view.updated_at,
            expires_at=view.expires_at,
            hold_seconds=view.hold_seconds,
            size_bytes=len(view.content),
            text=view.text,
            raw_url=str(request.url_for("read_raw_paste", paste_id=paste_id)),
        )

    @router.get("/raw/{paste_id}", name="read_raw_paste")
    def read_raw_paste(paste_id: str = Path(..., pattern=PASTE_ID_PATTERN)) -> Response:
        try:
            view = service.fetch(paste_id)
        except PasteNotFoundError as exc:
            raise _not_found() from exc
        except (PasteError, RepositoryError) as exc:
            logger.error("paste.raw.failed", extra={"paste_id": paste_id, "error": str(exc)})
            raise _error(
                status.HTTP_500_INTERNAL_SERVER_ERROR, "fetch_failed", "could not load paste"
            ) from exc

        return Response(
            content=view.content,
            media_type=view.content_type,
            headers={"Content-Disposition": content_disposition(view.title, view.kind)},
        )

    @router.delete("/api/pastes/{paste_id}", response_model=PasteDeletedSchema)
    def delete_paste(paste_id: str = Path(..., pattern=PASTE_ID_PATTERN)) -> PasteDeletedSchema:
        try:
            deleted = service.delete(paste_id)
        except RepositoryError as exc:
            logger.error("paste.delete.failed", extra={"paste_id": paste_id, "error": str(exc)})
            raise _error(
                status.HTTP_500_INTERNAL_SERVER_ERROR, "delete_failed", "could not delete paste"
            ) from exc
        return PasteDeletedSchema(id=paste_id, deleted=deleted)

    return router
