from __future__ import annotations

from dataclasses import asdict
from typing import Optional

import requests

from packages.upload.models import MetadataRecord, PdfFileRow


class MetadataServiceError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class ApiMetadataStore:
    """Client for the ``/pdf_files`` endpoint of the metadata API."""

    def __init__(self, base_url: str, session: Optional[requests.Session] = None, timeout: float = 30) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def insert(self, row: PdfFileRow) -> MetadataRecord:
        resp = self.session.post(f"{self.base_url}/pdf_files", json=asdict(row), timeout=self.timeout)
        if not resp.ok:
            raise MetadataServiceError(_error_detail(resp), status_code=resp.status_code)
        data = resp.json()
        return MetadataRecord(
            id=data["id"],
            filename=data["filename"],
            original_name=data["original_name"],
            name=data["name"],
            year=data["year"],
            type=data["type"],
            file_size=data["file_size"],
            file_url=data["file_url"],
            created_at=data.get("created_at"),
        )


def _error_detail(resp: requests.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        body = None
    detail = body.get("detail") if isinstance(body, dict) else None
    if isinstance(detail, str) and detail:
        return detail
    return f"{resp.status_code} {resp.reason or 'error'}".strip()
