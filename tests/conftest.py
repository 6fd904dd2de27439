import os
import tempfile

# Settings are cached on first use, so the environment is fixed before any app import.
_DB_DIR = tempfile.mkdtemp(prefix="pdf-upload-tests-")
os.environ.setdefault("DATABASE_URL", f"sqlite:///{_DB_DIR}/test.db")
os.environ.setdefault("S3_ENDPOINT_URL", "http://localhost:9000")
os.environ.setdefault("S3_ACCESS_KEY", "minioadmin")
os.environ.setdefault("S3_SECRET_KEY", "minioadmin")
os.environ.setdefault("S3_BUCKET", "pdfs")

from dataclasses import asdict
from typing import Dict, List, Optional

import pytest

from packages.upload.models import MetadataRecord, PdfFileRow


class FakeObjectStore:
    def __init__(self, base_url: Optional[str] = "https://cdn.test/pdfs", fail_with: Optional[Exception] = None) -> None:
        self.base_url = base_url
        self.fail_with = fail_with
        self.objects: Dict[str, bytes] = {}
        self.calls: List[dict] = []

    def upload(self, path, data, *, content_type, cache_control_seconds, overwrite):
        self.calls.append(
            {
                "path": path,
                "content_type": content_type,
                "cache_control_seconds": cache_control_seconds,
                "overwrite": overwrite,
            }
        )
        if self.fail_with is not None:
            raise self.fail_with
        if not overwrite and path in self.objects:
            raise RuntimeError("The resource already exists")
        self.objects[path] = data

    def public_url(self, path):
        if self.base_url is None:
            return None
        return f"{self.base_url}/{path}"


class FakeMetadataStore:
    def __init__(self, fail_with: Optional[Exception] = None) -> None:
        self.fail_with = fail_with
        self.rows: List[PdfFileRow] = []

    def insert(self, row: PdfFileRow) -> MetadataRecord:
        if self.fail_with is not None:
            raise self.fail_with
        self.rows.append(row)
        return MetadataRecord(id=len(self.rows), created_at="2024-05-01T12:00:00+00:00", **asdict(row))


@pytest.fixture
def storage() -> FakeObjectStore:
    return FakeObjectStore()


@pytest.fixture
def metadata() -> FakeMetadataStore:
    return FakeMetadataStore()
