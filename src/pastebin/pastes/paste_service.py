"""Create, fetch and delete pastes across the blob and metadata stores."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..config import PasteLimits
from ..exceptions import RepositoryError
from ..media.blob_store import BlobStore
from ..repositories.paste_repository import PasteRepository
from .classify import DEFAULT_UPLOAD_TYPE, TEXT_PLAIN, ContentKind, classify
from .identifiers import IdentifierGenerator
from .paste_errors import (
    BlobStorageError,
    EmptyPasteError,
    InvalidHoldError,
    PasteNotFoundError,
    PasteTooLargeError,
)
from .paste_models import Paste, PasteSummary, PasteUpload, PasteView

UNKNOWN = "unknown"


def _bounded(value: str | None, max_length: int) -> str:
    cleaned = (value or "").strip()
    if not cleaned:
        return UNKNOWN
    return cleaned[:max_length]


@dataclass(slots=True)
class PasteService:
    """Orchestrate the paste lifecycle on top of the two stores."""

    blob_store: BlobStore
    paste_repo: PasteRepository
    id_generator: IdentifierGenerator
    limits: PasteLimits
    log: logging.Logger = field(default_factory=lambda: logging.getLogger(__name__))

    def create(
        self,
        payload: bytes | str | PasteUpload | None,
        *,
        title: str | None = None,
        author: str | None = None,
        hold_seconds: int | None = None,
    ) -> str:
        """Persist a paste and return its new identifier.

        Raw ``bytes``/``str`` payloads are stored as plain text; a
        :class:`PasteUpload` keeps its declared content type and is checked
        against the upload size limit.
        """
        if isinstance(payload, PasteUpload):
            data = payload.data
            content_type = payload.content_type or DEFAULT_UPLOAD_TYPE
            if len(data) > self.limits.max_upload_bytes:
                raise PasteTooLargeError(len(data), self.limits.max_upload_bytes)
        else:
            data = payload.encode("utf-8") if isinstance(payload, str) else (payload or b"")
            content_type = TEXT_PLAIN
        if not data:
            raise EmptyPasteError("paste is empty")

        hold = self.limits.default_hold_seconds if hold_seconds is None else hold_seconds
        if hold < 0:
            raise InvalidHoldError(f"hold duration must be non-negative, got {hold}")
        if hold > self.limits.max_hold_seconds:
            raise InvalidHoldError(
                f"hold duration must be at most {self.limits.max_hold_seconds} seconds, got {hold}"
            )

        paste_id = self.id_generator.reserve()
        try:
            path = self.blob_store.write(paste_id, data)
        except BlobStorageError:
            self.blob_store.delete(paste_id)
            raise

        paste = Paste(
            id=paste_id,
            title=_bounded(title, self.limits.title_max_length),
            author=_bounded(author, self.limits.author_max_length),
            content_type=content_type,
            hold_seconds=hold,
            updated_at=self.paste_repo.now(),
            storage_path=path,
        )
        try:
            self.paste_repo.insert(paste)
        except RepositoryError:
            self.log.critical(
                "paste.create.orphaned_blob",
                extra={"paste_id": paste_id, "path": str(path)},
            )
            raise

        self.log.info(
            "paste.created",
            extra={
                "paste_id": paste_id,
                "content_type": content_type,
                "size_bytes": len(data),
                "hold_seconds": hold,
            },
        )
        return paste_id

    def fetch(self, paste_id: str) -> PasteView:
        record = self.paste_repo.get(paste_id)
        if record is None:
            raise PasteNotFoundError(paste_id)

        try:
            data = self.blob_store.read(paste_id)
        except PasteNotFoundError:
            self.log.warning("paste.fetch.self_heal", extra={"paste_id": paste_id})
            self.delete(paste_id)
            raise

        paste = record.paste
        kind = classify(paste.content_type)
        text = data.decode("utf-8", errors="replace") if kind is ContentKind.TEXT else None
        return PasteView(
            id=paste.id,
            content_type=paste.content_type,
            kind=kind,
            title=paste.title,
            author=paste.author,
            updated_at=paste.updated_at,
            expires_at=record.expires_at,
            hold_seconds=paste.hold_seconds,
            content=data,
            text=text,
        )

    def delete(self, paste_id: str) -> bool:
        """Remove blob then metadata row; returns whether a row existed."""
        try:
            self.blob_store.delete(paste_id)
        except BlobStorageError:
            self.log.exception("paste.delete.blob_failed", extra={"paste_id": paste_id})
        removed = self.paste_repo.delete(paste_id)
        self.log.info("paste.deleted", extra={"paste_id": paste_id, "row_removed": removed})
        return removed

    def list_all(self) -> list[PasteSummary]:
        return self.paste_repo.list_all()
