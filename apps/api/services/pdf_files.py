from __future__ import annotations

from sqlalchemy.orm import Session

from apps.api.db.models import PdfFile
from apps.api.schemas.pdf_files import PdfFileCreate


def create_pdf_file(db: Session, body: PdfFileCreate) -> PdfFile:
    """Insert one row and return it with its generated id and timestamp."""
    row = PdfFile(**body.model_dump())
    db.add(row)
    db.commit()
    db.refresh(row)
    return row
