"""Domain-specific exceptions for paste operations."""

from __future__ import annotations

from ..exceptions import AppError


class PasteError(AppError):
    """Base class for paste-related errors."""


class PasteValidationError(PasteError):
    """Raised when a submission is rejected before any side effect."""


class EmptyPasteError(PasteValidationError):
    """Raised when neither text nor file content was submitted."""


class PasteTooLargeError(PasteValidationError):
    """Raised when an upload exceeds the configured size limit."""

    def __init__(self, size_bytes: int, limit_bytes: int) -> None:
        super().__init__(f"upload of {size_bytes} bytes exceeds limit of {limit_bytes} bytes")
        self.size_bytes = size_bytes
        self.limit_bytes = limit_bytes


class InvalidHoldError(PasteValidationError):
    """Raised when a hold duration is negative."""


class PasteNotFoundError(PasteError):
    """Raised when a paste has no metadata row or its blob is gone."""

    def __init__(self, paste_id: str) -> None:
        super().__init__(f"paste '{paste_id}' does not exist")
        self.paste_id = paste_id


class BlobStorageError(PasteError):
    """Raised when reading or writing a blob file fails."""


class IdentifierExhaustedError(PasteError):
    """Raised when no free identifier was found within the retry cap."""
