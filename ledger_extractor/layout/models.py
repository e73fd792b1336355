"""Value types shared by the layout inference stages."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class Fragment:
    """A positioned text run on one page.

    ``y`` grows upward from the bottom of the page, so larger values sit
    higher on the printed sheet.
    """
    text: str
    x: float
    y: float


@dataclass
class RawRow:
    """A candidate ledger row whose trailing token is an amount."""
    identifier_raw: str
    identifier_clean: str
    description: str
    amount_text: str
    x: float


@dataclass
class FinalRow:
    """A ledger row with its amount assigned to one side."""
    identifier_raw: str
    identifier_clean: str
    description: str
    debit: Optional[float] = None
    credit: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert row to a dictionary keyed by output column name.

        Returns:
            Dictionary representation of the row.
        """
        return {
            "Account (Original)": self.identifier_raw,
            "Account (Clean)": self.identifier_clean,
            "Description": self.description,
            "Debit": self.debit,
            "Credit": self.credit,
        }


class CalibrationMode(Enum):
    """How the debit/credit cut-point was obtained."""
    SPLIT_MEDIANS = "split_medians"
    GLOBAL_MEDIAN = "global_median"


@dataclass
class CalibrationResult:
    """Cut-point for one document plus the evidence behind it."""
    cut_point: float
    mode: CalibrationMode
    debit_median: Optional[float] = None
    credit_median: Optional[float] = None
    debit_samples: int = 0
    credit_samples: int = 0
    advisory: Optional[str] = None

    @property
    def degraded(self) -> bool:
        return self.mode is CalibrationMode.GLOBAL_MEDIAN

    def to_dict(self) -> Dict[str, Any]:
        return {
            "cut_point": self.cut_point,
            "mode": self.mode.value,
            "debit_median": self.debit_median,
            "credit_median": self.credit_median,
            "debit_samples": self.debit_samples,
            "credit_samples": self.credit_samples,
            "advisory": self.advisory,
        }


@dataclass
class LedgerResult:
    """Everything produced for one document."""
    rows: List[FinalRow]
    calibration: CalibrationResult
    advisories: List[str] = field(default_factory=list)
    page_count: int = 0
    raw_row_count: int = 0
    line_count: int = 0

    @property
    def degraded(self) -> bool:
        return bool(self.advisories)
