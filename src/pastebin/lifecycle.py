"""Lifecycle helpers wiring the reaper as a background task."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime

from .config import ReaperSettings
from .media.blob_store import BlobStore
from .pastes.paste_reaper import ReapSummary, reap_expired_pastes, sweep_orphan_blobs
from .repositories.paste_repository import PasteRepository

logger = logging.getLogger(__name__)


def reap_once(
    *,
    paste_repo: PasteRepository,
    blob_store: BlobStore,
    settings: ReaperSettings,
    now: datetime | None = None,
) -> ReapSummary:
    """Run a single reaper iteration and return what it removed."""

    current = now or paste_repo.now()
    summary = reap_expired_pastes(paste_repo, blob_store, current)
    if settings.orphan_sweep_enabled:
        summary.orphans_removed = sweep_orphan_blobs(
            paste_repo,
            blob_store,
            grace_seconds=settings.orphan_grace_seconds,
            reference_time=current,
        )
    return summary


async def run_periodic_reaper(
    *,
    paste_repo: PasteRepository,
    blob_store: BlobStore,
    settings: ReaperSettings,
    shutdown_event: asyncio.Event,
    clock: Callable[[], datetime] | None = None,
) -> None:
    """Execute reaper cycles every ``settings.interval_seconds`` until shutdown."""

    interval = max(1.0, float(settings.interval_seconds))
    tick = clock or paste_repo.now
    while not shutdown_event.is_set():
        try:
            await asyncio.to_thread(
                reap_once,
                paste_repo=paste_repo,
                blob_store=blob_store,
                settings=settings,
                now=tick(),
            )
        except Exception:
            logger.exception("reaper.cycle.failed")
        try:
            await asyncio.wait_for(shutdown_event.wait(), timeout=interval)
        except asyncio.TimeoutError:
            continue


__all__ = [
    "reap_once",
    "run_periodic_reaper",
]
