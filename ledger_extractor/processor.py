"""End-to-end processing of ledger statement PDFs into Excel workbooks."""

import os
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from ledger_extractor.config.settings import Settings
from ledger_extractor.excel_generator.converter import ExcelConverter
from ledger_extractor.excel_generator.summarizer import LedgerSummarizer
from ledger_extractor.layout.models import LedgerResult
from ledger_extractor.layout.reconstructor import LedgerReconstructor
from ledger_extractor.pdf_processor.decryptor import PDFDecryptor
from ledger_extractor.pdf_processor.extractor import FragmentExtractor
from ledger_extractor.utils.logger import get_logger
from ledger_extractor.utils.validators import validate_page_count, validate_pdf_file


class LedgerStatementProcessor:
    """Runs validation, extraction, layout inference and export for statements."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        """Initialize the processor.

        Args:
            settings: Optional settings; read from the environment if omitted.
        """
        self.settings = settings or Settings.from_env()
        self.logger = get_logger(__name__)
        self.decryptor = PDFDecryptor(self.settings.default_password_file)
        self.extractor = FragmentExtractor(
            x_tolerance=self.settings.word_x_tolerance,
            y_tolerance=self.settings.word_y_tolerance,
        )
        self.reconstructor = LedgerReconstructor(bucket_size=self.settings.line_bucket_size)
        self.summarizer = LedgerSummarizer()
        self.converter = ExcelConverter(
            sheet_name=self.settings.result_sheet_name,
            filename_prefix=self.settings.output_filename_prefix,
            output_format=self.settings.excel_output_format,
            include_metadata=self.settings.include_metadata,
        )

    def extract_ledger(
        self,
        pdf_path: str,
        password: Optional[str] = None
    ) -> Dict[str, Any]:
        """Validate, decrypt and reconstruct the ledger of one PDF.

        Args:
            pdf_path: Path to the PDF file.
            password: Optional password for encrypted PDF.

        Returns:
            Dictionary with the ``ledger`` result and the ``pdf_info`` metadata.

        Raises:
            ValidationError: If the file is not an acceptable PDF.
            PDFDecryptionError: If the PDF cannot be opened or decrypted.
            PDFExtractionError: If text extraction fails.
        """
        validate_pdf_file(
            pdf_path,
            self.settings.max_file_size_mb,
            self.settings.supported_pdf_formats,
        )

        password = self.decryptor.resolve_password(pdf_path, password or self.settings.pdf_password)
        pdf_info = self.decryptor.get_pdf_info(pdf_path, password)
        validate_page_count(pdf_info.get("page_count"))

        ledger = self.reconstructor.reconstruct(self.extractor.iter_pages(pdf_path, password))
        return {"ledger": ledger, "pdf_info": pdf_info}

    def build_metadata(
        self,
        pdf_path: str,
        ledger: LedgerResult,
        pdf_info: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Collect the key/value pairs written to the metadata sheet."""
        calibration = ledger.calibration
        metadata = {
            "source_file": os.path.basename(pdf_path),
            "processing_date": datetime.now().isoformat(timespec="seconds"),
            "page_count": ledger.page_count,
            "text_lines": ledger.line_count,
            "candidate_rows": ledger.raw_row_count,
            "output_rows": len(ledger.rows),
            "cut_point": round(calibration.cut_point, 2),
            "calibration_mode": calibration.mode.value,
            "debit_median": calibration.debit_median,
            "credit_median": calibration.credit_median,
            "debit_samples": calibration.debit_samples,
            "credit_samples": calibration.credit_samples,
            "degraded": "yes" if ledger.degraded else "no",
            "advisories": ledger.advisories or "none",
        }
        for key, value in (pdf_info or {}).items():
            metadata[f"pdf_{key}"] = value
        return metadata

    def write_report(
        self,
        pdf_path: str,
        ledger: LedgerResult,
        pdf_info: Optional[Dict[str, Any]] = None,
        output_dir: Optional[str] = None,
        filename: Optional[str] = None,
        include_summary: bool = True
    ) -> str:
        """Write the workbook for a reconstructed ledger.

        Returns:
            Path to the generated Excel file.

        Raises:
            ExcelConversionError: If the workbook cannot be written.
            SummaryCalculationError: If totals cannot be computed.
        """
        summary = self.summarizer.generate_summary(ledger.rows) if include_summary else None
        return self.converter.convert_to_excel(
            rows=ledger.rows,
            output_path=output_dir or self.settings.reports_dir,
            filename=filename or self.converter.generate_filename(pdf_path),
            metadata=self.build_metadata(pdf_path, ledger, pdf_info),
            summary_data=summary,
        )

    def process_single_pdf(
        self,
        pdf_path: str,
        password: Optional[str] = None,
        output_dir: Optional[str] = None,
        include_summary: bool = True
    ) -> Optional[str]:
        """Process a single PDF file and generate the Excel report.

        Args:
            pdf_path: Path to the PDF file.
            password: Optional password for encrypted PDF.
            output_dir: Optional output directory for reports.
            include_summary: Whether to add the totals sheet.

        Returns:
            Path to generated Excel file or None if processing failed.
        """
        try:
            self.logger.info(f"Processing PDF: {pdf_path}")

            extraction = self.extract_ledger(pdf_path, password)
            ledger = extraction["ledger"]

            if not ledger.rows:
                self.logger.warning(f"No ledger rows found in {pdf_path}; writing an empty result sheet")
            else:
                self.logger.info(f"Rows extracted: {len(ledger.rows)}")

            output_path = self.write_report(
                pdf_path,
                ledger,
                pdf_info=extraction["pdf_info"],
                output_dir=output_dir,
                include_summary=include_summary,
            )

            self.logger.info(f"Excel report created: {output_path}")
            return output_path

        except Exception as e:
            self.logger.error(f"Processing failed for {pdf_path}: {str(e)}")
            return None

    def process_batch(
        self,
        batch_dir: str,
        password_file: Optional[str] = None,
        output_dir: Optional[str] = None,
        include_summary: bool = True
    ) -> List[str]:
        """Process every PDF in a directory, one after another.

        Args:
            batch_dir: Directory containing PDF files.
            password_file: Optional file of ``filename=password`` lines.
            output_dir: Optional output directory for reports.
            include_summary: Whether to add the totals sheet.

        Returns:
            List of paths to generated Excel files.
        """
        self.logger.info(f"Processing batch directory: {batch_dir}")

        passwords = {}
        if password_file and os.path.exists(password_file):
            with open(password_file, 'r', encoding='utf-8') as f:
                for line in f:
                    line = line.strip()
                    if line and '=' in line:
                        filename, pwd = line.split('=', 1)
                        passwords[filename.strip()] = pwd.strip()

        pdf_files = sorted(Path(batch_dir).glob("*.pdf"))
        if not pdf_files:
            self.logger.warning(f"No PDF files found in {batch_dir}")
            return []

        self.logger.info(f"Found {len(pdf_files)} PDF files")

        successful_reports = []
        for pdf_file in pdf_files:
            report_path = self.process_single_pdf(
                str(pdf_file),
                passwords.get(pdf_file.name),
                output_dir,
                include_summary,
            )
            if report_path:
                successful_reports.append(report_path)

        self.logger.info(f"Successfully processed {len(successful_reports)}/{len(pdf_files)} files")
        return successful_reports
