"""Detection of ledger rows and collection of column calibration samples."""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ledger_extractor.layout.amounts import is_amount
from ledger_extractor.layout.models import Fragment, RawRow

# Leading account digits that hint at the side of the amount.
DEBIT_PREFIXES = frozenset("156")
CREDIT_PREFIXES = frozenset("234")


def clean_identifier(identifier: str) -> str:
    """Strip dash and comma separators from an account identifier."""
    return identifier.replace("-", "").replace(",", "").strip()


def classify_line(line: Sequence[Fragment]) -> Optional[RawRow]:
    """Turn a line into a RawRow if it ends with an amount.

    The first fragment is the identifier, the last is the amount, and
    anything in between is the description. A one-fragment line uses the same
    fragment for both.

    Args:
        line: Fragments of one line, left to right.

    Returns:
        RawRow, or None for headers, footers and free text.
    """
    if not line:
        return None

    first = line[0]
    last = line[-1]
    if not is_amount(last.text):
        return None

    return RawRow(
        identifier_raw=first.text,
        identifier_clean=clean_identifier(first.text),
        description=" ".join(f.text for f in line[1:-1]),
        amount_text=last.text,
        x=last.x,
    )


def side_hint(identifier: str) -> Optional[str]:
    """Return "debit", "credit" or None from the identifier's first character."""
    stripped = identifier.strip()
    if not stripped:
        return None
    if stripped[0] in DEBIT_PREFIXES:
        return "debit"
    if stripped[0] in CREDIT_PREFIXES:
        return "credit"
    return None


@dataclass
class RowAccumulator:
    """Rows and calibration pools gathered across the pages of one document."""
    raw_rows: List[RawRow] = field(default_factory=list)
    debit_pool: List[float] = field(default_factory=list)
    credit_pool: List[float] = field(default_factory=list)
    lines_seen: int = 0

    def add_line(self, line: Sequence[Fragment]) -> Optional[RawRow]:
        """Classify a line and record it when it is a data row."""
        self.lines_seen += 1
        row = classify_line(line)
        if row is None:
            return None

        hint = side_hint(row.identifier_raw)
        if hint == "debit":
            self.debit_pool.append(row.x)
        elif hint == "credit":
            self.credit_pool.append(row.x)

        self.raw_rows.append(row)
        return row

    def add_lines(self, lines: Sequence[Sequence[Fragment]]) -> int:
        """Classify the lines of one page.

        Returns:
            Number of data rows found on the page.
        """
        return sum(1 for line in lines if self.add_line(line) is not None)

    @property
    def row_positions(self) -> List[float]:
        return [row.x for row in self.raw_rows]
