"""Excel export of reconstructed ledgers."""

from ledger_extractor.excel_generator.converter import ExcelConversionError, ExcelConverter
from ledger_extractor.excel_generator.summarizer import LedgerSummarizer, SummaryCalculationError

__all__ = ["ExcelConversionError", "ExcelConverter", "LedgerSummarizer", "SummaryCalculationError"]
