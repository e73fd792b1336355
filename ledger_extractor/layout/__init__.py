"""Layout inference for ledger statements without explicit table structure."""

from ledger_extractor.layout.amounts import is_amount, parse_amount
from ledger_extractor.layout.calibrator import compute_cut_point, median
from ledger_extractor.layout.classifier import RowAccumulator, classify_line
from ledger_extractor.layout.lines import reconstruct_lines
from ledger_extractor.layout.materializer import materialize_rows
from ledger_extractor.layout.models import (
    CalibrationMode,
    CalibrationResult,
    FinalRow,
    Fragment,
    LedgerResult,
    RawRow,
)
from ledger_extractor.layout.reconstructor import LedgerReconstructor

__all__ = [
    "CalibrationMode",
    "CalibrationResult",
    "FinalRow",
    "Fragment",
    "LedgerReconstructor",
    "LedgerResult",
    "RawRow",
    "RowAccumulator",
    "classify_line",
    "compute_cut_point",
    "is_amount",
    "materialize_rows",
    "median",
    "parse_amount",
    "reconstruct_lines",
]
