import pytest

from packages.upload.errors import ValidationError
from packages.upload.models import MAX_FILE_SIZE, PDF_MEDIA_TYPE, SelectedFile, UploadForm
from packages.upload.result import Err, Ok
from packages.upload.validation import (
    build_storage_path,
    format_file_size,
    sanitize_filename,
    strip_pdf_suffix,
    validate_file,
    validate_submission,
)


@pytest.mark.parametrize(
    "size, expected",
    [
        (0, "0 Bytes"),
        (512, "512 Bytes"),
        (1024, "1 KB"),
        (1536, "1.5 KB"),
        (1048576, "1 MB"),
        (1234567, "1.18 MB"),
        (MAX_FILE_SIZE, "50 MB"),
        (3 * 1024 ** 3, "3 GB"),
        (2048 * 1024 ** 3, "2048 GB"),
    ],
)
def test_format_file_size(size: int, expected: str) -> None:
    assert format_file_size(size) == expected


@pytest.mark.parametrize(
    "name, expected",
    [
        ("Report.pdf", "Report"),
        ("REPORT.PDF", "REPORT"),
        ("notes.pdf.pdf", "notes.pdf"),
        ("archive.pdf.zip", "archive.pdf.zip"),
        ("no-extension", "no-extension"),
    ],
)
def test_strip_pdf_suffix(name: str, expected: str) -> None:
    assert strip_pdf_suffix(name) == expected


def test_storage_path_sanitizes_name() -> None:
    assert build_storage_path(1718000000000, "my report (final).pdf") == "1718000000000-my_report__final_.pdf"
    assert sanitize_filename("prova-1º.bimestre.pdf") == "prova-1_.bimestre.pdf"


def test_validate_file_rejects_non_pdf() -> None:
    result = validate_file(SelectedFile(name="photo.png", media_type="image/png", size=10))
    assert result == Err(ValidationError("Only PDF files are accepted."))


def test_validate_file_rejects_oversize_regardless_of_type() -> None:
    big_pdf = SelectedFile(name="big.pdf", media_type=PDF_MEDIA_TYPE, size=MAX_FILE_SIZE + 1)
    big_png = SelectedFile(name="big.png", media_type="image/png", size=MAX_FILE_SIZE + 1)
    assert isinstance(validate_file(big_pdf), Err)
    assert validate_file(big_pdf).error.message == "File too large. Maximum allowed size: 50MB."
    assert isinstance(validate_file(big_png), Err)


def test_validate_file_accepts_limit() -> None:
    pdf = SelectedFile(name="ok.pdf", media_type=PDF_MEDIA_TYPE, size=MAX_FILE_SIZE)
    assert validate_file(pdf) == Ok(pdf)


def test_validate_submission_checks_in_order() -> None:
    pdf = SelectedFile(name="a.pdf", media_type=PDF_MEDIA_TYPE, size=3, data=b"abc")

    def message(file, form):
        result = validate_submission(file, form)
        assert isinstance(result, Err)
        return result.error.message

    assert message(None, UploadForm()) == "No file selected."
    assert message(pdf, UploadForm(name="   ", year="1", type="exam")) == "Please enter a name for the file."
    assert message(pdf, UploadForm(name="A", year="", type="")) == "Please select the grade/series."
    assert message(pdf, UploadForm(name="A", year="1", type="")) == "Please select the type."


def test_validate_submission_trims_and_converts() -> None:
    pdf = SelectedFile(name="a.pdf", media_type=PDF_MEDIA_TYPE, size=3, data=b"abc")
    result = validate_submission(pdf, UploadForm(name="  Algebra  ", year="2", type="exam"))
    assert isinstance(result, Ok)
    assert result.value.name == "Algebra"
    assert result.value.year == 2
    assert result.value.type == "exam"
