"""Password handling and metadata for encrypted ledger statements."""

import os
from typing import Any, Dict, List, Optional

from PyPDF2 import PdfReader
from PyPDF2.errors import PdfReadError

from ledger_extractor.config.settings import DEFAULT_PASSWORD_FILE
from ledger_extractor.utils.logger import get_logger
from ledger_extractor.utils.validators import ValidationError, validate_password


class PDFDecryptionError(Exception):
    """Custom exception for PDF decryption errors."""
    pass


class PDFDecryptor:
    """Checks encryption and finds the password that opens a statement."""

    def __init__(self, password_file: str = DEFAULT_PASSWORD_FILE) -> None:
        """Initialize PDF decryptor.

        Args:
            password_file: File whose first line holds the fallback password.
        """
        self.password_file = password_file
        self.logger = get_logger(__name__)

    def load_default_password(self) -> str:
        """Load default password from file.

        Accepts either a bare password or the form ``password-"secret"``.

        Raises:
            PDFDecryptionError: If password cannot be loaded.
        """
        try:
            if not os.path.exists(self.password_file):
                raise PDFDecryptionError(f"Password file not found: {self.password_file}")

            with open(self.password_file, 'r', encoding='utf-8') as f:
                password_line = f.readline().strip()

            if password_line.startswith('password-'):
                password = password_line[len('password-'):].strip('"')
            else:
                password = password_line

            validate_password(password)
            self.logger.info(f"Loaded default password from {self.password_file}")
            return password

        except (OSError, ValidationError) as e:
            raise PDFDecryptionError(f"Failed to load password: {str(e)}")

    def _open_reader(self, pdf_path: str) -> PdfReader:
        try:
            return PdfReader(pdf_path)
        except PdfReadError as e:
            raise PDFDecryptionError(f"PDF read error: {str(e)}")
        except Exception as e:
            raise PDFDecryptionError(f"Failed to read PDF: {str(e)}")

    def resolve_password(
        self,
        pdf_path: str,
        password: Optional[str] = None,
        use_default: bool = True
    ) -> Optional[str]:
        """Find the password that opens the PDF.

        Args:
            pdf_path: Path to PDF file.
            password: Optional password to try first.
            use_default: Whether to also try the default password file.

        Returns:
            The working password, or None for an unencrypted PDF.

        Raises:
            PDFDecryptionError: If no candidate password works.
        """
        reader = self._open_reader(pdf_path)

        if not reader.is_encrypted:
            self.logger.info(f"PDF {pdf_path} is not encrypted")
            return None

        passwords_to_try: List[str] = []
        if password:
            passwords_to_try.append(password)

        if use_default:
            try:
                default_password = self.load_default_password()
                if default_password not in passwords_to_try:
                    passwords_to_try.append(default_password)
            except PDFDecryptionError:
                self.logger.warning("Could not load default password")

        for candidate in passwords_to_try:
            if reader.decrypt(candidate):
                self.logger.info("Successfully decrypted PDF with password")
                return candidate

        raise PDFDecryptionError("Failed to decrypt PDF with provided passwords")

    def get_pdf_info(self, pdf_path: str, password: Optional[str] = None) -> Dict[str, Any]:
        """Extract document metadata.

        Args:
            pdf_path: Path to PDF file.
            password: Password for an encrypted PDF.

        Returns:
            Dictionary containing PDF metadata.
        """
        reader = self._open_reader(pdf_path)
        if reader.is_encrypted and password:
            reader.decrypt(password)

        try:
            metadata = reader.metadata or {}
            return {
                "title": metadata.get('/Title', ''),
                "author": metadata.get('/Author', ''),
                "creator": metadata.get('/Creator', ''),
                "producer": metadata.get('/Producer', ''),
                "creation_date": metadata.get('/CreationDate', ''),
                "page_count": len(reader.pages),
                "is_encrypted": reader.is_encrypted,
            }

        except Exception as e:
            self.logger.warning(f"Failed to extract PDF metadata: {str(e)}")
            return {"is_encrypted": reader.is_encrypted}
