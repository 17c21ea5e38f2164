from __future__ import annotations

from datetime import datetime, timedelta
from pathlib import Path

import pytest
from sqlalchemy.orm import Session, sessionmaker

from pastebin.config import PasteLimits, build_session_factory
from pastebin.db.db_init import init_db
from pastebin.media.blob_store import BlobStore
from pastebin.pastes.identifiers import IdentifierGenerator
from pastebin.pastes.paste_service import PasteService
from pastebin.repositories.paste_repository import PasteRepository


class FakeClock:
    """Manually advanced clock returning naive UTC datetimes."""

    def __init__(self, start: datetime | None = None) -> None:
        self.current = start or datetime(2026, 1, 1, 12, 0, 0)

    def __call__(self) -> datetime:
        return self.current

    def advance(self, seconds: float) -> datetime:
        self.current = self.current + timedelta(seconds=seconds)
        return self.current


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def session_factory(tmp_path: Path) -> sessionmaker[Session]:
    engine, factory = build_session_factory(f"sqlite:///{(tmp_path / 'pastes.db').as_posix()}")
    init_db(engine)
    return factory


@pytest.fixture()
def blob_store(tmp_path: Path) -> BlobStore:
    root = tmp_path / "blobs"
    root.mkdir()
    return BlobStore(root)


@pytest.fixture()
def paste_repo(session_factory, clock: FakeClock) -> PasteRepository:
    return PasteRepository(session_factory, clock=clock)


@pytest.fixture()
def limits() -> PasteLimits:
    return PasteLimits(
        default_hold_seconds=3600,
        max_hold_seconds=7 * 24 * 3600,
        max_upload_bytes=1024,
        chunk_size_bytes=64,
        title_max_length=20,
        author_max_length=10,
    )


@pytest.fixture()
def paste_service(blob_store: BlobStore, paste_repo: PasteRepository, limits: PasteLimits) -> PasteService:
    return PasteService(
        blob_store=blob_store,
        paste_repo=paste_repo,
        id_generator=IdentifierGenerator(blob_store),
        limits=limits,
    )
