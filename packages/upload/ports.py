from __future__ import annotations

from typing import Optional, Protocol

from .models import MetadataRecord, PdfFileRow


class ObjectStore(Protocol):
    """Blob storage bound to one bucket."""

    def upload(
        self,
        path: str,
        data: bytes,
        *,
        content_type: str,
        cache_control_seconds: int,
        overwrite: bool,
    ) -> None: ...

    def public_url(self, path: str) -> Optional[str]: ...


class MetadataStore(Protocol):
    def insert(self, row: PdfFileRow) -> MetadataRecord: ...
