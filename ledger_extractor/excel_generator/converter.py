"""Excel export of reconstructed ledger rows."""

import os
from typing import Any, Dict, List, Optional

import pandas as pd
from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill, Alignment
from openpyxl.utils import get_column_letter
from openpyxl.utils.dataframe import dataframe_to_rows

from ledger_extractor.config.settings import (
    EXCEL_OUTPUT_FORMAT,
    INCLUDE_METADATA,
    OUTPUT_FILENAME_PREFIX,
    REPORTS_DIR,
    RESULT_SHEET_NAME,
)
from ledger_extractor.layout.models import FinalRow
from ledger_extractor.utils.logger import get_logger
from ledger_extractor.utils.validators import ValidationError, validate_directory_path

RESULT_COLUMNS = ["Account (Original)", "Account (Clean)", "Description", "Debit", "Credit"]
AMOUNT_COLUMNS = {"Debit", "Credit"}


class ExcelConversionError(Exception):
    """Custom exception for Excel conversion errors."""
    pass


class ExcelConverter:
    """Writes ledger rows, metadata and totals to an Excel workbook."""

    def __init__(
        self,
        sheet_name: str = RESULT_SHEET_NAME,
        filename_prefix: str = OUTPUT_FILENAME_PREFIX,
        output_format: str = EXCEL_OUTPUT_FORMAT,
        include_metadata: bool = INCLUDE_METADATA
    ) -> None:
        """Initialize Excel converter.

        Args:
            sheet_name: Title of the result sheet.
            filename_prefix: Prefix for generated file names.
            output_format: Workbook file extension.
            include_metadata: Whether to add the metadata sheet.
        """
        self.sheet_name = sheet_name
        self.filename_prefix = filename_prefix
        self.output_format = output_format
        self.include_metadata = include_metadata
        self.logger = get_logger(__name__)

        self.header_font = Font(bold=True, color="FFFFFF")
        self.header_fill = PatternFill(start_color="366092", end_color="366092", fill_type="solid")
        self.header_alignment = Alignment(horizontal="center", vertical="center")

        self.amount_format = '#,##0.00'

    def generate_filename(self, source_name: str) -> str:
        """Derive the output file name from the source document name.

        ``statement.pdf`` becomes ``Result_statement.xlsx`` with the default
        prefix and format.

        Args:
            source_name: Source document file name or path.

        Returns:
            Output file name.
        """
        stem, _ = os.path.splitext(os.path.basename(source_name))
        return f"{self.filename_prefix}{stem}.{self.output_format}"

    def rows_to_dataframe(self, rows: List[FinalRow]) -> pd.DataFrame:
        """Convert final rows to a DataFrame in output column order."""
        return pd.DataFrame([row.to_dict() for row in rows], columns=RESULT_COLUMNS)

    def _style_header(self, cell) -> None:
        cell.font = self.header_font
        cell.fill = self.header_fill
        cell.alignment = self.header_alignment

    def _auto_size_columns(self, worksheet) -> None:
        for col_idx in range(1, worksheet.max_column + 1):
            max_length = 0
            for row_idx in range(1, worksheet.max_row + 1):
                value = worksheet.cell(row=row_idx, column=col_idx).value
                if value is not None and len(str(value)) > max_length:
                    max_length = len(str(value))

            worksheet.column_dimensions[get_column_letter(col_idx)].width = min(max_length + 2, 50)

    def create_rows_sheet(self, workbook: Workbook, rows_df: pd.DataFrame) -> None:
        """Create the result sheet.

        Missing amounts are written as blank cells.

        Args:
            workbook: Excel workbook object.
            rows_df: DataFrame with ledger rows.
        """
        worksheet = workbook.create_sheet(title=self.sheet_name)

        headers = list(rows_df.columns)
        for col_num, header in enumerate(headers, 1):
            self._style_header(worksheet.cell(row=1, column=col_num, value=header))

        for row_num, row in enumerate(dataframe_to_rows(rows_df, index=False, header=False), 2):
            for col_num, value in enumerate(row, 1):
                if pd.isna(value):
                    value = None
                cell = worksheet.cell(row=row_num, column=col_num, value=value)
                if headers[col_num - 1] in AMOUNT_COLUMNS and value is not None:
                    cell.number_format = self.amount_format

        self._auto_size_columns(worksheet)

        if rows_df.empty:
            self.logger.warning("No ledger rows to write to Excel")
        else:
            self.logger.info(f"Created result sheet with {len(rows_df)} rows")

    def create_metadata_sheet(
        self,
        workbook: Workbook,
        metadata: Dict[str, Any],
        sheet_name: str = "Metadata"
    ) -> None:
        """Create a two-column key/value metadata sheet.

        Args:
            workbook: Excel workbook object.
            metadata: Dictionary with metadata information.
            sheet_name: Name for the sheet.
        """
        worksheet = workbook.create_sheet(title=sheet_name)

        self._style_header(worksheet.cell(row=1, column=1, value="Field"))
        self._style_header(worksheet.cell(row=1, column=2, value="Value"))

        for row_num, (key, value) in enumerate(metadata.items(), 2):
            if isinstance(value, (list, tuple)):
                value = "; ".join(str(item) for item in value)
            worksheet.cell(row=row_num, column=1, value=str(key))
            worksheet.cell(row=row_num, column=2, value="" if value is None else str(value))

        self._auto_size_columns(worksheet)
        self.logger.info(f"Created metadata sheet with {len(metadata)} items")

    def create_summary_sheet(
        self,
        workbook: Workbook,
        summary_data: Dict[str, Any],
        sheet_name: str = "Totals"
    ) -> None:
        """Create the totals sheet with the per-class breakdown.

        Args:
            workbook: Excel workbook object.
            summary_data: Output of ``LedgerSummarizer.generate_summary``.
            sheet_name: Name for the sheet.
        """
        worksheet = workbook.create_sheet(title=sheet_name)

        title_cell = worksheet.cell(row=1, column=1, value="Ledger Totals")
        title_cell.font = Font(bold=True, size=16)
        worksheet.merge_cells(start_row=1, start_column=1, end_row=1, end_column=4)

        overall = [
            ("Rows", summary_data.get("total_rows", 0)),
            ("Debit Rows", summary_data.get("debit_rows", 0)),
            ("Credit Rows", summary_data.get("credit_rows", 0)),
            ("Blank Rows", summary_data.get("blank_rows", 0)),
            ("Total Debits", summary_data.get("total_debits", 0.0)),
            ("Total Credits", summary_data.get("total_credits", 0.0)),
            ("Difference", summary_data.get("difference", 0.0)),
            ("Balanced", "Yes" if summary_data.get("balanced") else "No"),
        ]
        row = 3
        for label, value in overall:
            worksheet.cell(row=row, column=1, value=f"{label}:")
            cell = worksheet.cell(row=row, column=2, value=value)
            if isinstance(value, float):
                cell.number_format = self.amount_format
            row += 1

        row += 1
        for col, header in enumerate(["Account Class", "Rows", "Total Debits", "Total Credits"], 1):
            self._style_header(worksheet.cell(row=row, column=col, value=header))

        for account_class, totals in summary_data.get("by_account_class", {}).items():
            row += 1
            worksheet.cell(row=row, column=1, value=account_class or "(none)")
            worksheet.cell(row=row, column=2, value=totals["rows"])
            worksheet.cell(row=row, column=3, value=totals["total_debits"]).number_format = self.amount_format
            worksheet.cell(row=row, column=4, value=totals["total_credits"]).number_format = self.amount_format

        self._auto_size_columns(worksheet)
        self.logger.info("Created totals sheet")

    def convert_to_excel(
        self,
        rows: List[FinalRow],
        output_path: Optional[str] = None,
        filename: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
        summary_data: Optional[Dict[str, Any]] = None
    ) -> str:
        """Write ledger rows to an Excel file.

        Args:
            rows: Final ledger rows in output order.
            output_path: Optional output directory path.
            filename: Optional filename for output file.
            metadata: Optional metadata to include.
            summary_data: Optional totals to include.

        Returns:
            Path to created Excel file.

        Raises:
            ExcelConversionError: If conversion fails.
        """
        try:
            if output_path is None:
                output_path = REPORTS_DIR

            validate_directory_path(output_path)

            if filename is None:
                filename = self.generate_filename("ledger")

            if not filename.endswith(f".{self.output_format}"):
                filename = f"{filename}.{self.output_format}"

            full_path = os.path.join(output_path, filename)

            rows_df = self.rows_to_dataframe(rows)

            workbook = Workbook()
            if "Sheet" in workbook.sheetnames:
                workbook.remove(workbook["Sheet"])

            self.create_rows_sheet(workbook, rows_df)

            if summary_data:
                self.create_summary_sheet(workbook, summary_data)

            if self.include_metadata and metadata:
                self.create_metadata_sheet(workbook, metadata)

            workbook.save(full_path)
            workbook.close()

            self.logger.info(f"Excel file created successfully: {full_path}")
            return full_path

        except ValidationError as e:
            raise ExcelConversionError(f"Validation error: {str(e)}")
        except Exception as e:
            raise ExcelConversionError(f"Failed to convert to Excel: {str(e)}")
