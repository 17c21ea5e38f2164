"""Flat-file storage for paste content."""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

from ..pastes.paste_errors import BlobStorageError, PasteNotFoundError

_SAFE_ID = re.compile(r"^[A-Za-z0-9_-]+$")


@dataclass(slots=True)
class BlobStore:
    """Write, read and delete paste blobs named by identifier under ``root``."""

    root: Path
    log: logging.Logger = field(default_factory=lambda: logging.getLogger(__name__))

    def path_for(self, paste_id: str) -> Path:
        if not _SAFE_ID.match(paste_id):
            raise ValueError(f"invalid paste identifier {paste_id!r}")
        return self.root / paste_id

    def exists(self, paste_id: str) -> bool:
        return self.path_for(paste_id).exists()

    def reserve(self, paste_id: str) -> bool:
        """Atomically create an empty placeholder; False if the path is taken."""
        try:
            with self.path_for(paste_id).open("xb"):
                pass
        except FileExistsError:
            return False
        except OSError as exc:
            raise BlobStorageError(f"cannot reserve blob '{paste_id}': {exc}") from exc
        return True

    def write(self, paste_id: str, data: bytes) -> Path:
        target = self.path_for(paste_id)
        try:
            with target.open("wb") as sink:
                sink.write(data)
                sink.flush()
                os.fsync(sink.fileno())
        except OSError as exc:
            self.log.error(
                "blob.write_failed",
                extra={"paste_id": paste_id, "path": str(target), "error": str(exc)},
            )
            raise BlobStorageError(f"cannot write blob '{paste_id}': {exc}") from exc
        return target

    def read(self, paste_id: str) -> bytes:
        """Return blob bytes; a missing or zero-length file counts as absent."""
        target = self.path_for(paste_id)
        try:
            data = target.read_bytes()
        except FileNotFoundError as exc:
            raise PasteNotFoundError(paste_id) from exc
        except OSError as exc:
            self.log.error(
                "blob.read_failed",
                extra={"paste_id": paste_id, "path": str(target), "error": str(exc)},
            )
            raise BlobStorageError(f"cannot read blob '{paste_id}': {exc}") from exc
        if not data:
            raise PasteNotFoundError(paste_id)
        return data

    def delete(self, paste_id: str) -> bool:
        """Remove the blob; returns False if it was already gone."""
        target = self.path_for(paste_id)
        try:
            target.unlink()
        except FileNotFoundError:
            return False
        except OSError as exc:
            raise BlobStorageError(f"cannot delete blob '{paste_id}': {exc}") from exc
        return True

    def iter_blobs(self) -> Iterator[Path]:
        for entry in self.root.iterdir():
            if entry.is_file() and _SAFE_ID.match(entry.name):
                yield entry
