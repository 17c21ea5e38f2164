"""Short, URL-safe paste identifiers."""

from __future__ import annotations

import base64
import hashlib
import logging
import secrets
import threading
import time
from collections.abc import Callable

from ..media.blob_store import BlobStore
from .paste_errors import IdentifierExhaustedError

logger = logging.getLogger(__name__)

ID_LENGTH = 16
MAX_ATTEMPTS = 100

# "/" and "+" would clash with path separators and URL encoding.
_REMAP = bytes.maketrans(b"/+", b"qQ")


def _default_entropy() -> bytes:
    return f"{time.time_ns()}:{secrets.randbits(64)}".encode()


def encode_identifier(seed: bytes, length: int = ID_LENGTH) -> str:
    digest = hashlib.sha256(seed).digest()
    encoded = base64.b64encode(digest).translate(_REMAP).rstrip(b"=")
    return encoded[:length].decode("ascii")


class IdentifierGenerator:
    """Issue identifiers that do not collide with an existing blob."""

    def __init__(
        self,
        blob_store: BlobStore,
        *,
        entropy: Callable[[], bytes] = _default_entropy,
        length: int = ID_LENGTH,
        max_attempts: int = MAX_ATTEMPTS,
    ) -> None:
        self._blob_store = blob_store
        self._entropy = entropy
        self._length = length
        self._max_attempts = max_attempts
        self._lock = threading.Lock()

    def _candidate(self) -> str:
        return encode_identifier(self._entropy(), self._length)

    def generate(self) -> str:
        """Return an identifier with no blob on disk at the time of the check."""
        for attempt in range(1, self._max_attempts + 1):
            candidate = self._candidate()
            if not self._blob_store.exists(candidate):
                return candidate
            logger.debug("paste.id.collision", extra={"paste_id": candidate, "attempt": attempt})
        raise IdentifierExhaustedError(f"no free identifier after {self._max_attempts} attempts")

    def reserve(self) -> str:
        """Return an identifier whose blob path has been claimed atomically.

        The claimed path holds an empty placeholder until the content is
        written; empty blobs read as absent.
        """
        with self._lock:
            for attempt in range(1, self._max_attempts + 1):
                candidate = self._candidate()
                if not self._blob_store.exists(candidate) and self._blob_store.reserve(candidate):
                    return candidate
                logger.debug(
                    "paste.id.collision", extra={"paste_id": candidate, "attempt": attempt}
                )
        logger.error("paste.id.exhausted", extra={"attempts": self._max_attempts})
        raise IdentifierExhaustedError(f"no free identifier after {self._max_attempts} attempts")
