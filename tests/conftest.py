"""Pytest configuration and fixtures for the Ledger Statement Extraction System."""

import os
import tempfile
import shutil
from pathlib import Path
from unittest.mock import Mock, patch
import pytest

from ledger_extractor.config.settings import Settings
from ledger_extractor.layout.models import FinalRow, Fragment


def make_line(y, *tokens):
    """Build fragments for one printed line from (text, x) pairs."""
    return [Fragment(text=text, x=x, y=y) for text, x in tokens]


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path)


@pytest.fixture
def sample_settings(temp_dir):
    """Create sample settings for testing."""
    return Settings(
        pdf_password=None,
        max_retries=3,
        reports_dir=str(temp_dir / "reports"),
        logs_dir=str(temp_dir / "logs"),
        default_password_file=str(temp_dir / "missing_password.txt"),
        log_level="INFO",
    )


@pytest.fixture
def ledger_page():
    """One page: a header, two ledger rows and a footer, in scrambled order."""
    return (
        make_line(700.2, ("Fecha:", 20.0), ("2024-01-31", 60.0))
        + make_line(650.0, ("4002", 10.0), ("Services", 30.0), ("Revenue", 45.0), ("80.00", 95.0))
        + make_line(680.4, ("1001", 10.0), ("Office", 30.0), ("Supplies", 40.0), ("120.00", 50.0))
        + make_line(30.0, ("Page", 10.0), ("1", 30.0), ("of", 40.0), ("1", 60.0))
    )


@pytest.fixture
def two_column_pages():
    """Two pages with debit amounts near x=100 and credit amounts near x=200."""
    page_one = (
        make_line(700.0, ("ACCOUNT", 10.0), ("DESCRIPTION", 40.0), ("DEBIT", 100.0), ("CREDIT", 200.0))
        + make_line(680.0, ("1100-01", 10.0), ("Cash", 40.0), ("1,500.00", 101.0))
        + make_line(665.0, ("2100-01", 10.0), ("Payables", 40.0), ("700.00", 199.0))
    )
    page_two = (
        make_line(700.0, ("5100", 10.0), ("Rent", 40.0), ("300.00", 99.0))
        + make_line(685.0, ("3100", 10.0), ("Capital", 40.0), ("1,100.00", 201.0))
        + make_line(670.0, ("9000", 10.0), ("Suspense", 40.0), ("0.00", 100.0))
    )
    return [page_one, page_two]


@pytest.fixture
def sample_rows():
    """Final rows as produced for a small balanced ledger."""
    return [
        FinalRow("1001", "1001", "Office Supplies", debit=120.0, credit=None),
        FinalRow("1-002", "1002", "Travel", debit=30.5, credit=None),
        FinalRow("4002", "4002", "Services Revenue", debit=None, credit=150.5),
        FinalRow("9000", "9000", "Suspense", debit=None, credit=None),
    ]


@pytest.fixture
def mock_pdfplumber_pdf():
    """Create a mock pdfplumber document with one page of words."""
    mock_page = Mock()
    mock_page.height = 792.0
    mock_page.extract_words.return_value = [
        {"text": "1001", "x0": 10.0, "x1": 30.0, "top": 100.0, "bottom": 110.0},
        {"text": "Supplies", "x0": 40.0, "x1": 80.0, "top": 100.5, "bottom": 110.5},
        {"text": "120.00", "x0": 150.0, "x1": 180.0, "top": 100.0, "bottom": 110.0},
    ]
    mock_pdf = Mock()
    mock_pdf.pages = [mock_page]
    return mock_pdf


@pytest.fixture
def sample_pdf_file(temp_dir):
    """Create a sample PDF file for testing."""
    pdf_file = temp_dir / "ledger.pdf"
    pdf_file.write_bytes(b"%PDF-1.4\n1 0 obj\n<<\n/Type /Catalog\n/Pages 2 0 R\n>>\nendobj\n")
    return str(pdf_file)


@pytest.fixture
def sample_environment(temp_dir):
    """Create sample environment variables for testing."""
    env_vars = {
        "PDF_PASSWORD": "test123",
        "LOG_LEVEL": "DEBUG",
        "REPORTS_DIR": "test_reports",
        "LINE_BUCKET_SIZE": "4",
        "OUTPUT_FILENAME_PREFIX": "Ledger_",
        "MAX_RETRIES": "2",
    }
    with patch.dict(os.environ, env_vars):
        yield env_vars
