"""Cron entry point for reaping expired pastes."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from datetime import datetime

from pastebin.config import load_config
from pastebin.lifecycle import reap_once
from pastebin.logging import configure_logging
from pastebin.media.blob_store import BlobStore
from pastebin.repositories.paste_repository import PasteRepository


@dataclass(slots=True)
class ReapReport:
    expired: int
    reaped: int
    failed: int
    orphans_removed: int
    dry_run: bool


def perform_reap(*, dry_run: bool, reference_time: datetime | None = None) -> ReapReport:
    """Execute one reaper cycle (or just count candidates) and summarise it."""
    config = load_config()
    configure_logging(config.log_level)
    paste_repo = PasteRepository(config.session_factory)
    blob_store = BlobStore(config.storage_root)

    now = reference_time or paste_repo.now()

    if dry_run:
        expired = paste_repo.list_expired(now)
        return ReapReport(
            expired=len(expired), reaped=0, failed=0, orphans_removed=0, dry_run=True
        )

    summary = reap_once(
        paste_repo=paste_repo,
        blob_store=blob_store,
        settings=config.reaper,
        now=now,
    )
    return ReapReport(
        expired=summary.candidates,
        reaped=len(summary.reaped),
        failed=len(summary.failed),
        orphans_removed=summary.orphans_removed,
        dry_run=False,
    )


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Delete pastes whose hold duration elapsed.")
    parser.add_argument("--dry-run", action="store_true", help="Only report counts without deleting.")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv if argv is not None else sys.argv[1:])
    try:
        report = perform_reap(dry_run=args.dry_run)
    except Exception as exc:
        print(f"reap failed: {exc}", file=sys.stderr)
        return 2

    if report.dry_run:
        print(f"reap dry-run, expired={report.expired}", file=sys.stdout)
    else:
        print(
            f"reap done, expired={report.expired}, reaped={report.reaped}, "
            f"failed={report.failed}, orphans_removed={report.orphans_removed}",
            file=sys.stdout,
        )
    return 0 if report.failed == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
