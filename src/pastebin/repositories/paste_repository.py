"""Persistence layer for paste metadata rows."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import datetime, timezone
from pathlib import Path

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from ..db.db_models import PasteModel
from ..exceptions import handle_sqlalchemy_errors
from ..pastes.paste_models import Paste, PasteRecord, PasteSummary


def utcnow() -> datetime:
    """Naive UTC timestamp, matching what SQLite round-trips."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class PasteRepository:
    """Store one metadata row per paste, keyed by its identifier."""

    def __init__(
        self,
        session_factory: Callable[[], Session],
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._session_factory = session_factory
        self._clock = clock

    def now(self) -> datetime:
        return self._clock()

    def insert(self, paste: Paste) -> None:
        with handle_sqlalchemy_errors(entity="paste"), self._session_factory() as session:
            session.add(
                PasteModel(
                    paste_id=paste.id,
                    title=paste.title,
                    author=paste.author,
                    storage_path=str(paste.storage_path),
                    content_type=paste.content_type,
                    hold_seconds=paste.hold_seconds,
                    updated_at=paste.updated_at,
                )
            )
            session.commit()

    def get(self, paste_id: str, *, now: datetime | None = None) -> PasteRecord | None:
        current = now or self._clock()
        with handle_sqlalchemy_errors(entity="paste"), self._session_factory() as session:
            model = session.scalars(
                select(PasteModel)
                .where(PasteModel.paste_id == paste_id)
                .order_by(PasteModel.updated_at.desc())
                .limit(1)
            ).first()
            if model is None:
                return None
            return self._to_record(self._to_domain(model), current)

    def delete(self, paste_id: str) -> bool:
        with handle_sqlalchemy_errors(entity="paste"), self._session_factory() as session:
            result = session.execute(delete(PasteModel).where(PasteModel.paste_id == paste_id))
            session.commit()
            return bool(result.rowcount)

    def delete_many(self, paste_ids: Iterable[str]) -> int:
        """Remove all rows for ``paste_ids`` in a single statement."""
        ids = list(paste_ids)
        if not ids:
            return 0
        with handle_sqlalchemy_errors(entity="paste"), self._session_factory() as session:
            result = session.execute(delete(PasteModel).where(PasteModel.paste_id.in_(ids)))
            session.commit()
            return int(result.rowcount or 0)

    def list_all(self) -> list[PasteSummary]:
        """Return every paste, most recently updated first."""
        with handle_sqlalchemy_errors(entity="paste"), self._session_factory() as session:
            rows = session.scalars(
                select(PasteModel).order_by(PasteModel.updated_at.desc(), PasteModel.id.desc())
            ).all()
            return [self._to_summary(self._to_domain(row)) for row in rows]

    def list_expired(self, reference_time: datetime | None = None) -> list[PasteRecord]:
        """Return rows whose elapsed time has reached their hold duration."""
        current = reference_time or self._clock()
        with handle_sqlalchemy_errors(entity="paste"), self._session_factory() as session:
            rows = session.scalars(
                select(PasteModel)
                .where(PasteModel.updated_at <= current)
                .order_by(PasteModel.updated_at.asc())
            ).all()
            records = [self._to_record(self._to_domain(row), current) for row in rows]
        return [record for record in records if record.is_expired]

    def known_ids(self) -> set[str]:
        with handle_sqlalchemy_errors(entity="paste"), self._session_factory() as session:
            return set(session.scalars(select(PasteModel.paste_id)).all())

    @staticmethod
    def _to_domain(model: PasteModel) -> Paste:
        return Paste(
            id=model.paste_id,
            title=model.title,
            author=model.author,
            content_type=model.content_type,
            hold_seconds=model.hold_seconds,
            updated_at=model.updated_at,
            storage_path=Path(model.storage_path),
        )

    @staticmethod
    def _to_record(paste: Paste, now: datetime) -> PasteRecord:
        elapsed = int((now - paste.updated_at).total_seconds())
        return PasteRecord(paste=paste, elapsed_seconds=elapsed, expires_at=paste.expires_at)

    @staticmethod
    def _to_summary(paste: Paste) -> PasteSummary:
        return PasteSummary(
            id=paste.id,
            title=paste.title,
            author=paste.author,
            updated_at=paste.updated_at,
            expires_at=paste.expires_at,
        )
