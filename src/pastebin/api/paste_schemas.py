"""Pydantic schemas for paste responses."""

from datetime import datetime

from pydantic import BaseModel


class PasteCreatedSchema(BaseModel):
    id: str
    url: str
    raw_url: str


class PasteViewSchema(BaseModel):
    id: str
    title: str
    author: str
    content_type: str
    kind: str
    updated_at: datetime
    expires_at: datetime
    hold_seconds: int
    size_bytes: int
    text: str | None = None
    raw_url: str


class PasteSummarySchema(BaseModel):
    id: str
    title: str
    author: str
    updated_at: datetime
    expires_at: datetime


class PasteDeletedSchema(BaseModel):
    id: str
    deleted: bool


class PasteErrorSchema(BaseModel):
    status: str
    failure_reason: str
    details: str | None = None
