"""Tests for PDF access modules."""

import pytest
from unittest.mock import Mock, patch
from PyPDF2.errors import PdfReadError

from ledger_extractor.layout.lines import reconstruct_lines
from ledger_extractor.pdf_processor.decryptor import PDFDecryptor, PDFDecryptionError
from ledger_extractor.pdf_processor.extractor import FragmentExtractor, PDFExtractionError


class TestFragmentExtractor:
    """Test cases for FragmentExtractor class."""

    def test_word_to_fragment_flips_vertical_axis(self):
        extractor = FragmentExtractor()
        word = {"text": "120.00", "x0": 150.25, "x1": 180.0, "top": 100.0, "bottom": 110.0}

        fragment = extractor.word_to_fragment(word, 792.0)

        assert fragment.text == "120.00"
        assert fragment.x == 150.25
        assert fragment.y == 682.0

    def test_iter_pages(self, mock_pdfplumber_pdf):
        extractor = FragmentExtractor(x_tolerance=2, y_tolerance=1)

        with patch('ledger_extractor.pdf_processor.extractor.pdfplumber.open') as mock_open:
            mock_open.return_value.__enter__.return_value = mock_pdfplumber_pdf

            pages = list(extractor.iter_pages("ledger.pdf", password="secret"))

        mock_open.assert_called_once_with("ledger.pdf", password="secret")
        mock_pdfplumber_pdf.pages[0].extract_words.assert_called_once_with(
            x_tolerance=2, y_tolerance=1, keep_blank_chars=False
        )
        assert len(pages) == 1
        assert [f.text for f in pages[0]] == ["1001", "Supplies", "120.00"]

    def test_words_with_jitter_form_one_line(self, mock_pdfplumber_pdf):
        extractor = FragmentExtractor()

        fragments = extractor.extract_page_fragments(mock_pdfplumber_pdf.pages[0])
        lines = reconstruct_lines(fragments)

        assert len(lines) == 1
        assert [f.text for f in lines[0]] == ["1001", "Supplies", "120.00"]

    def test_pages_are_read_lazily(self):
        extractor = FragmentExtractor()
        first_page = Mock(height=100.0)
        first_page.extract_words.return_value = []
        second_page = Mock(height=100.0)
        second_page.extract_words.return_value = []
        pdf = Mock(pages=[first_page, second_page])

        with patch('ledger_extractor.pdf_processor.extractor.pdfplumber.open') as mock_open:
            mock_open.return_value.__enter__.return_value = pdf
            pages = extractor.iter_pages("ledger.pdf")

            next(pages)
            assert second_page.extract_words.call_count == 0
            next(pages)
            assert second_page.extract_words.call_count == 1

    def test_corrupted_pdf_raises(self):
        extractor = FragmentExtractor()

        with patch('ledger_extractor.pdf_processor.extractor.pdfplumber.open', side_effect=Exception("Corrupted PDF")):
            with pytest.raises(PDFExtractionError):
                list(extractor.iter_pages("corrupted.pdf"))

    def test_page_failure_raises(self):
        extractor = FragmentExtractor()
        bad_page = Mock(height=100.0)
        bad_page.extract_words.side_effect = ValueError("bad content stream")

        with patch('ledger_extractor.pdf_processor.extractor.pdfplumber.open') as mock_open:
            mock_open.return_value.__enter__.return_value = Mock(pages=[bad_page])

            with pytest.raises(PDFExtractionError, match="bad content stream"):
                list(extractor.iter_pages("ledger.pdf"))


class TestPDFDecryptor:
    """Test cases for PDFDecryptor class."""

    def _reader(self, encrypted=False, accepted=None):
        reader = Mock()
        reader.is_encrypted = encrypted
        reader.decrypt.side_effect = lambda pwd: 1 if pwd == accepted else 0
        reader.pages = [Mock(), Mock()]
        reader.metadata = {"/Title": "General Ledger", "/Producer": "Ledgerly"}
        return reader

    def test_unencrypted_pdf_needs_no_password(self, temp_dir):
        decryptor = PDFDecryptor(str(temp_dir / "none.txt"))

        with patch('ledger_extractor.pdf_processor.decryptor.PdfReader', return_value=self._reader()):
            assert decryptor.resolve_password("ledger.pdf", "ignored") is None

    def test_resolve_explicit_password(self, temp_dir):
        decryptor = PDFDecryptor(str(temp_dir / "none.txt"))
        reader = self._reader(encrypted=True, accepted="secret")

        with patch('ledger_extractor.pdf_processor.decryptor.PdfReader', return_value=reader):
            assert decryptor.resolve_password("ledger.pdf", "secret") == "secret"

    def test_resolve_falls_back_to_default_password_file(self, temp_dir):
        password_file = temp_dir / "password.txt"
        password_file.write_text('password-"110281"\n')
        decryptor = PDFDecryptor(str(password_file))
        reader = self._reader(encrypted=True, accepted="110281")

        with patch('ledger_extractor.pdf_processor.decryptor.PdfReader', return_value=reader):
            assert decryptor.resolve_password("ledger.pdf", "wrong") == "110281"

    def test_wrong_password_raises(self, temp_dir):
        decryptor = PDFDecryptor(str(temp_dir / "none.txt"))
        reader = self._reader(encrypted=True, accepted="secret")

        with patch('ledger_extractor.pdf_processor.decryptor.PdfReader', return_value=reader):
            with pytest.raises(PDFDecryptionError):
                decryptor.resolve_password("ledger.pdf", "wrong")

    def test_unreadable_pdf_raises(self, temp_dir):
        decryptor = PDFDecryptor(str(temp_dir / "none.txt"))

        with patch('ledger_extractor.pdf_processor.decryptor.PdfReader', side_effect=PdfReadError("EOF marker not found")):
            with pytest.raises(PDFDecryptionError):
                decryptor.resolve_password("corrupted.pdf")

    def test_load_default_password_plain_and_missing(self, temp_dir):
        password_file = temp_dir / "password.txt"
        password_file.write_text("plainsecret\n")

        assert PDFDecryptor(str(password_file)).load_default_password() == "plainsecret"

        with pytest.raises(PDFDecryptionError):
            PDFDecryptor(str(temp_dir / "missing.txt")).load_default_password()

    def test_blank_default_password_rejected(self, temp_dir):
        password_file = temp_dir / "password.txt"
        password_file.write_text("   \n")

        with pytest.raises(PDFDecryptionError):
            PDFDecryptor(str(password_file)).load_default_password()

    def test_get_pdf_info(self, temp_dir):
        decryptor = PDFDecryptor(str(temp_dir / "none.txt"))

        with patch('ledger_extractor.pdf_processor.decryptor.PdfReader', return_value=self._reader()):
            info = decryptor.get_pdf_info("ledger.pdf")

        assert info["title"] == "General Ledger"
        assert info["producer"] == "Ledgerly"
        assert info["page_count"] == 2
        assert info["is_encrypted"] is False
