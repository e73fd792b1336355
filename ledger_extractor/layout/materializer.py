"""Assignment of row amounts to the debit or credit column."""

from typing import List, Sequence, Tuple

from ledger_extractor.layout.amounts import parse_amount
from ledger_extractor.layout.models import FinalRow, RawRow

# Identifier fragments that mark page footers and date headers.
EXCLUDED_IDENTIFIER_MARKERS = ("Page", "Fecha")


def is_excluded(row: RawRow) -> bool:
    return any(marker in row.identifier_raw for marker in EXCLUDED_IDENTIFIER_MARKERS)


def materialize_row(row: RawRow, cut_point: float, value: float) -> FinalRow:
    """Place ``value`` left of the cut-point as debit, otherwise as credit.

    Zero is written as a blank on both sides.
    """
    debit = value if row.x < cut_point else 0.0
    credit = value if row.x >= cut_point else 0.0
    return FinalRow(
        identifier_raw=row.identifier_raw,
        identifier_clean=row.identifier_clean,
        description=row.description,
        debit=debit if debit != 0 else None,
        credit=credit if credit != 0 else None,
    )


def materialize_rows(
    raw_rows: Sequence[RawRow],
    cut_point: float
) -> Tuple[List[FinalRow], List[str]]:
    """Build final rows in source order.

    Footer and header artifacts are skipped. Amount text that does not parse
    is treated as zero and reported instead of raised.

    Args:
        raw_rows: Rows from every page, in page then line order.
        cut_point: Debit/credit boundary for the document.

    Returns:
        Tuple of (final rows, advisories).
    """
    rows = []
    advisories = []

    for row in raw_rows:
        if is_excluded(row):
            continue

        value = parse_amount(row.amount_text)
        if value is None:
            advisories.append(
                f"Unparseable amount {row.amount_text!r} for account "
                f"{row.identifier_raw!r}; treated as zero"
            )
            value = 0.0

        rows.append(materialize_row(row, cut_point, value))

    return rows, advisories
