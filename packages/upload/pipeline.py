"""Remote half of an upload: store the blob, resolve its URL, record it.

Each stage returns ``Ok``/``Err``; ``run_upload`` stops at the first ``Err``
so the message always names the stage that failed. An object that was stored
before a later stage failed is left in the bucket.
"""

from __future__ import annotations

import asyncio
import logging

from .errors import PersistenceError, StorageError, UploadError, UrlGenerationError
from .models import PDF_MEDIA_TYPE, MetadataRecord, PdfFileRow, StoredObject, UploadOutcome, UploadRequest
from .ports import MetadataStore, ObjectStore
from .result import Err, Ok, Result


logger = logging.getLogger(__name__)

DEFAULT_CACHE_CONTROL_SECONDS = 3600


async def store_blob(
    storage: ObjectStore,
    request: UploadRequest,
    cache_control_seconds: int = DEFAULT_CACHE_CONTROL_SECONDS,
) -> Result[str, StorageError]:
    try:
        await asyncio.to_thread(
            storage.upload,
            request.path,
            request.file.data,
            content_type=PDF_MEDIA_TYPE,
            cache_control_seconds=cache_control_seconds,
            overwrite=False,
        )
    except Exception as exc:
        logger.warning("upload_store_failed", extra={"path": request.path}, exc_info=True)
        return Err(StorageError(f"Upload error: {exc}"))
    logger.info("upload_stored", extra={"path": request.path, "size": request.file.size})
    return Ok(request.path)


def fetch_public_url(storage: ObjectStore, path: str) -> Result[StoredObject, UrlGenerationError]:
    try:
        url = storage.public_url(path)
    except Exception:
        logger.warning("public_url_failed", extra={"path": path}, exc_info=True)
        url = None
    if not url:
        return Err(UrlGenerationError("Failed to generate public URL"))
    return Ok(StoredObject(path=path, public_url=url))


async def persist_record(
    metadata: MetadataStore,
    request: UploadRequest,
    stored: StoredObject,
) -> Result[MetadataRecord, PersistenceError]:
    row = PdfFileRow(
        filename=stored.path,
        original_name=request.file.name,
        name=request.name,
        year=request.year,
        type=request.type,
        file_size=request.file.size,
        file_url=stored.public_url,
    )
    try:
        record = await asyncio.to_thread(metadata.insert, row)
    except Exception as exc:
        logger.warning("upload_persist_failed", extra={"path": stored.path}, exc_info=True)
        return Err(PersistenceError(f"Database error: {exc}"))
    return Ok(record)


async def run_upload(
    request: UploadRequest,
    storage: ObjectStore,
    metadata: MetadataStore,
    cache_control_seconds: int = DEFAULT_CACHE_CONTROL_SECONDS,
) -> Result[UploadOutcome, UploadError]:
    logger.info("upload_started", extra={"path": request.path, "original_name": request.file.name})

    path = await store_blob(storage, request, cache_control_seconds)
    if isinstance(path, Err):
        return path

    stored = fetch_public_url(storage, path.value)
    if isinstance(stored, Err):
        return stored

    record = await persist_record(metadata, request, stored.value)
    if isinstance(record, Err):
        return record

    logger.info("upload_succeeded", extra={"path": request.path, "record_id": record.value.id})
    return Ok(UploadOutcome(stored=stored.value, record=record.value))
