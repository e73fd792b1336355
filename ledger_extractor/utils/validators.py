"""Checks run on statement files and report directories before any work starts."""

import os
from typing import Optional, Sequence

from ledger_extractor.config.settings import (
    MAX_FILE_SIZE_MB,
    SUPPORTED_PDF_FORMATS,
)

# Every PDF starts with this marker, possibly after a few bytes of junk.
PDF_SIGNATURE = b"%PDF-"
SIGNATURE_SEARCH_BYTES = 1024


class ValidationError(Exception):
    """Raised when an input or output location is unusable."""
    pass


def validate_file_path(file_path: str) -> None:
    """Require an existing, readable regular file.

    Raises:
        ValidationError: If the path is empty, missing, not a file or unreadable.
    """
    if not file_path:
        raise ValidationError("File path cannot be empty")

    if not os.path.exists(file_path):
        raise ValidationError(f"File does not exist: {file_path}")

    if not os.path.isfile(file_path):
        raise ValidationError(f"Path is not a file: {file_path}")

    if not os.access(file_path, os.R_OK):
        raise ValidationError(f"File is not readable: {file_path}")


def validate_file_size(file_path: str, max_size_mb: int = MAX_FILE_SIZE_MB) -> None:
    """Reject statements larger than ``max_size_mb`` megabytes."""
    size_mb = os.path.getsize(file_path) / (1024 * 1024)
    if size_mb > max_size_mb:
        raise ValidationError(
            f"File size {size_mb:.2f}MB exceeds maximum allowed size {max_size_mb}MB"
        )


def validate_file_extension(
    file_path: str,
    supported_formats: Sequence[str] = SUPPORTED_PDF_FORMATS
) -> None:
    """Reject files whose extension is not one of ``supported_formats``."""
    ext = os.path.splitext(file_path)[1].lower()
    if ext not in supported_formats:
        raise ValidationError(
            f"File extension '{ext}' not supported. "
            f"Supported formats: {', '.join(supported_formats)}"
        )


def validate_pdf_header(file_path: str) -> None:
    """Require the PDF signature near the start of the file.

    Catches spreadsheets or text exports that were renamed to ``.pdf``
    before pdfplumber tries to decode them.
    """
    with open(file_path, 'rb') as f:
        head = f.read(SIGNATURE_SEARCH_BYTES)

    if PDF_SIGNATURE not in head:
        raise ValidationError(f"File is not a PDF document: {file_path}")


def validate_pdf_file(
    file_path: str,
    max_size_mb: int = MAX_FILE_SIZE_MB,
    supported_formats: Sequence[str] = SUPPORTED_PDF_FORMATS
) -> None:
    """Run every pre-extraction check on a statement file.

    Args:
        file_path: Path to the PDF file.
        max_size_mb: Maximum allowed file size in MB.
        supported_formats: Accepted file extensions.

    Raises:
        ValidationError: If any check fails.
    """
    validate_file_path(file_path)
    validate_file_extension(file_path, supported_formats)
    validate_file_size(file_path, max_size_mb)
    validate_pdf_header(file_path)


def validate_page_count(page_count: Optional[int]) -> None:
    """Reject documents that report no pages.

    An unknown count (metadata could not be read) is accepted; extraction
    will surface any real decoding problem.
    """
    if page_count is not None and page_count < 1:
        raise ValidationError("PDF contains no pages")


def validate_directory_path(dir_path: str) -> None:
    """Make sure reports can be written to ``dir_path``, creating it if needed.

    Raises:
        ValidationError: If the directory cannot be created or written to.
    """
    if not dir_path:
        raise ValidationError("Directory path cannot be empty")

    try:
        os.makedirs(dir_path, exist_ok=True)
    except FileExistsError:
        raise ValidationError(f"Path is not a directory: {dir_path}")
    except OSError as e:
        raise ValidationError(f"Cannot create directory {dir_path}: {str(e)}")

    if not os.access(dir_path, os.W_OK):
        raise ValidationError(f"Directory is not writable: {dir_path}")


def validate_password(password: str) -> None:
    """Require a non-blank string password."""
    if not isinstance(password, str):
        raise ValidationError("Password must be a string")

    if not password.strip():
        raise ValidationError("Password cannot be empty or whitespace only")
