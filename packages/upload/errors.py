"""Failures a single upload attempt can end in.

These are plain values carried inside ``Err``; the workflow never raises them.
Each kind surfaces as one human-readable message in the error panel.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True)
class UploadError:
    message: str

    kind: ClassVar[str] = "upload"

    def __str__(self) -> str:
        return self.message


class ValidationError(UploadError):
    """Bad file or missing form field; never reaches a remote service."""

    kind = "validation"


class StorageError(UploadError):
    kind = "storage"


class UrlGenerationError(UploadError):
    kind = "url_generation"


class PersistenceError(UploadError):
    kind = "persistence"


class ClipboardError(UploadError):
    kind = "clipboard"
