"""Deletion of expired pastes and orphaned blobs."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from ..media.blob_store import BlobStore
from ..repositories.paste_repository import PasteRepository
from .paste_errors import BlobStorageError

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ReapSummary:
    candidates: int
    reaped: list[str]
    failed: list[str]
    orphans_removed: int = 0


def reap_expired_pastes(
    paste_repo: PasteRepository,
    blob_store: BlobStore,
    reference_time: datetime | None = None,
) -> ReapSummary:
    """Delete blobs of expired pastes, then their rows in one batch.

    A row is only dropped once its blob is confirmed gone, so a failed
    unlink leaves the paste for the next cycle.
    """
    now = reference_time or paste_repo.now()
    expired = paste_repo.list_expired(now)
    if not expired:
        logger.info("reaper.cycle.nothing_to_reap")
        return ReapSummary(candidates=0, reaped=[], failed=[])

    confirmed: list[str] = []
    failed: list[str] = []
    for record in expired:
        paste_id = record.paste.id
        try:
            removed = blob_store.delete(paste_id)
        except BlobStorageError as exc:
            failed.append(paste_id)
            logger.warning(
                "reaper.blob_delete_failed",
                extra={"paste_id": paste_id, "error": str(exc)},
            )
            continue
        if not removed:
            logger.debug("reaper.blob_already_gone", extra={"paste_id": paste_id})
        confirmed.append(paste_id)

    paste_repo.delete_many(confirmed)
    logger.info(
        "reaper.cycle.reaped",
        extra={"reaped": len(confirmed), "failed": len(failed), "candidates": len(expired)},
    )
    return ReapSummary(candidates=len(expired), reaped=confirmed, failed=failed)


def sweep_orphan_blobs(
    paste_repo: PasteRepository,
    blob_store: BlobStore,
    *,
    grace_seconds: int,
    reference_time: datetime | None = None,
) -> int:
    """Remove blob files that no metadata row references.

    Files younger than ``grace_seconds`` are skipped so that identifiers
    reserved by in-flight creations survive.
    """
    now = reference_time or paste_repo.now()
    cutoff = (now - timedelta(seconds=grace_seconds)).replace(tzinfo=timezone.utc).timestamp()
    known = paste_repo.known_ids()
    removed = 0
    for path in blob_store.iter_blobs():
        if path.name in known:
            continue
        try:
            if path.stat().st_mtime > cutoff:
                continue
            if blob_store.delete(path.name):
                removed += 1
        except (OSError, BlobStorageError) as exc:
            logger.warning(
                "reaper.orphan_delete_failed",
                extra={"paste_id": path.name, "error": str(exc)},
            )
    if removed:
        logger.info("reaper.orphans.removed", extra={"removed": removed})
    return removed
