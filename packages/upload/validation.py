from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from .errors import ValidationError
from .models import MAX_FILE_SIZE, PDF_MEDIA_TYPE, SelectedFile, UploadForm
from .result import Err, Ok, Result


SIZE_UNITS = ("Bytes", "KB", "MB", "GB")

_PDF_SUFFIX = re.compile(r"\.pdf$", re.IGNORECASE)
_UNSAFE_PATH_CHARS = re.compile(r"[^A-Za-z0-9.-]")


@dataclass(frozen=True)
class SubmissionFields:
    file: SelectedFile
    name: str
    year: int
    type: str


def format_file_size(size: int) -> str:
    """Render a byte count in base-1024 units with at most two decimals.

    >>> format_file_size(1536)
    '1.5 KB'
    """
    if size == 0:
        return "0 Bytes"
    exponent = 0
    while exponent < len(SIZE_UNITS) - 1 and size >= 1024 ** (exponent + 1):
        exponent += 1
    value = f"{size / 1024 ** exponent:.2f}".rstrip("0").rstrip(".")
    return f"{value} {SIZE_UNITS[exponent]}"


def strip_pdf_suffix(filename: str) -> str:
    return _PDF_SUFFIX.sub("", filename)


def sanitize_filename(filename: str) -> str:
    return _UNSAFE_PATH_CHARS.sub("_", filename)


def build_storage_path(timestamp_ms: int, filename: str) -> str:
    return f"{timestamp_ms}-{sanitize_filename(filename)}"


def validate_file(file: SelectedFile, max_size: int = MAX_FILE_SIZE) -> Result[SelectedFile, ValidationError]:
    if file.media_type != PDF_MEDIA_TYPE:
        return Err(ValidationError("Only PDF files are accepted."))
    if file.size > max_size:
        megabytes = max_size // (1024 * 1024)
        return Err(ValidationError(f"File too large. Maximum allowed size: {megabytes}MB."))
    return Ok(file)


def validate_submission(
    file: Optional[SelectedFile], form: UploadForm
) -> Result[SubmissionFields, ValidationError]:
    """Check the submit preconditions in order, stopping at the first miss."""
    if file is None:
        return Err(ValidationError("No file selected."))
    name = form.name.strip()
    if not name:
        return Err(ValidationError("Please enter a name for the file."))
    year = form.year.strip()
    if not year or not year.isdecimal():
        return Err(ValidationError("Please select the grade/series."))
    if not form.type:
        return Err(ValidationError("Please select the type."))
    return Ok(SubmissionFields(file=file, name=name, year=int(year), type=form.type))
