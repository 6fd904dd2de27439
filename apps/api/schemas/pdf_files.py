from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class PdfFileCreate(BaseModel):
    filename: str = Field(..., description="Storage path inside the bucket, e.g., 1718000000000-report.pdf")
    original_name: str = Field(..., description="File name as chosen by the user")
    name: str = Field(..., description="Display name typed in the form")
    year: int
    type: str
    file_size: int = Field(..., description="Size in bytes")
    file_url: str = Field(..., description="Public URL of the stored object")


class PdfFileOut(PdfFileCreate):
    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: datetime
