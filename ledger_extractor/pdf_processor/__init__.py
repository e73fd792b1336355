"""PDF access: positioned text extraction and decryption."""

from ledger_extractor.pdf_processor.decryptor import PDFDecryptionError, PDFDecryptor
from ledger_extractor.pdf_processor.extractor import FragmentExtractor, PDFExtractionError

__all__ = ["FragmentExtractor", "PDFDecryptionError", "PDFDecryptor", "PDFExtractionError"]
