from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from apps.api.deps.deps import get_db
from apps.api.schemas.pdf_files import PdfFileCreate, PdfFileOut
from apps.api.services.pdf_files import create_pdf_file


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/pdf_files", tags=["pdf_files"])


@router.post("", response_model=PdfFileOut, status_code=status.HTTP_201_CREATED)
def insert_pdf_file(body: PdfFileCreate, db: Session = Depends(get_db)) -> PdfFileOut:
    try:
        row = create_pdf_file(db, body)
    except IntegrityError:
        db.rollback()
        logger.warning("pdf_file_insert_failed", extra={"path": body.filename, "reason": "duplicate"})
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"A record for '{body.filename}' already exists",
        )
    except SQLAlchemyError:
        db.rollback()
        logger.exception("pdf_file_insert_failed", extra={"path": body.filename})
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to save the record")

    logger.info("pdf_file_inserted", extra={"record_id": row.id, "path": row.filename})
    return PdfFileOut.model_validate(row)
