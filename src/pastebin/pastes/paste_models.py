"""Paste data models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from pathlib import Path

from .classify import ContentKind


@dataclass(slots=True, frozen=True)
class Paste:
    """Stored metadata of a single paste."""

    id: str
    title: str
    author: str
    content_type: str
    hold_seconds: int
    updated_at: datetime
    storage_path: Path

    @property
    def expires_at(self) -> datetime:
        try:
            return self.updated_at + timedelta(seconds=self.hold_seconds)
        except OverflowError:
            # rows written before the hold bound existed
            return datetime.max


@dataclass(slots=True, frozen=True)
class PasteRecord:
    """Paste metadata plus values computed at lookup time."""

    paste: Paste
    elapsed_seconds: int
    expires_at: datetime

    @property
    def is_expired(self) -> bool:
        return self.elapsed_seconds >= self.paste.hold_seconds


@dataclass(slots=True, frozen=True)
class PasteSummary:
    id: str
    title: str
    author: str
    updated_at: datetime
    expires_at: datetime


@dataclass(slots=True, frozen=True)
class PasteUpload:
    """An uploaded file that has already been read into memory."""

    data: bytes
    content_type: str
    filename: str | None = None


@dataclass(slots=True, frozen=True)
class PasteView:
    """Everything a presentation layer needs to render a paste."""

    id: str
    content_type: str
    kind: ContentKind
    title: str
    author: str
    updated_at: datetime
    expires_at: datetime
    hold_seconds: int
    content: bytes
    text: str | None = None
