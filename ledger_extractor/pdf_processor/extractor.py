"""Positioned text extraction from PDF ledger statements."""

from typing import Any, Dict, Generator, List, Optional

import pdfplumber

from ledger_extractor.config.settings import WORD_X_TOLERANCE, WORD_Y_TOLERANCE
from ledger_extractor.layout.models import Fragment
from ledger_extractor.utils.logger import get_logger


class PDFExtractionError(Exception):
    """Custom exception for PDF extraction errors."""
    pass


class FragmentExtractor:
    """Reads words and their positions from every page of a PDF."""

    def __init__(
        self,
        x_tolerance: float = WORD_X_TOLERANCE,
        y_tolerance: float = WORD_Y_TOLERANCE
    ) -> None:
        """Initialize fragment extractor.

        Args:
            x_tolerance: Horizontal gap below which characters join one word.
            y_tolerance: Vertical offset below which characters share a word.
        """
        self.x_tolerance = x_tolerance
        self.y_tolerance = y_tolerance
        self.logger = get_logger(__name__)

    def word_to_fragment(self, word: Dict[str, Any], page_height: float) -> Fragment:
        """Convert a pdfplumber word into a Fragment.

        pdfplumber measures ``bottom`` from the top edge of the page; the
        fragment's ``y`` is the baseline height above the bottom edge.

        Args:
            word: Word dictionary from ``page.extract_words``.
            page_height: Height of the page the word belongs to.

        Returns:
            Fragment for the word.
        """
        return Fragment(
            text=word["text"],
            x=float(word["x0"]),
            y=float(page_height) - float(word["bottom"]),
        )

    def extract_page_fragments(self, page) -> List[Fragment]:
        """Extract the fragments of a single pdfplumber page."""
        words = page.extract_words(
            x_tolerance=self.x_tolerance,
            y_tolerance=self.y_tolerance,
            keep_blank_chars=False,
        )
        return [self.word_to_fragment(word, page.height) for word in words]

    def iter_pages(
        self,
        pdf_path: str,
        password: Optional[str] = None
    ) -> Generator[List[Fragment], None, None]:
        """Yield the fragments of each page in page order.

        The document is decoded once and pages are read on demand.

        Args:
            pdf_path: Path to PDF file.
            password: Optional password for encrypted PDF.

        Yields:
            List of fragments for each page.

        Raises:
            PDFExtractionError: If the document or a page cannot be decoded.
        """
        try:
            with pdfplumber.open(pdf_path, password=password) as pdf:
                self.logger.info(f"PDF loaded. Total pages: {len(pdf.pages)}")

                for page_num, page in enumerate(pdf.pages, 1):
                    self.logger.info(f"Analyzing page {page_num}...")
                    fragments = self.extract_page_fragments(page)
                    self.logger.debug(f"Extracted {len(fragments)} fragments from page {page_num}")
                    yield fragments

        except PDFExtractionError:
            raise
        except Exception as e:
            raise PDFExtractionError(f"Failed to extract text from PDF: {str(e)}")
