"""Totals and balance checks for reconstructed ledger rows."""

from typing import Any, Dict, List

import pandas as pd

from ledger_extractor.layout.models import FinalRow
from ledger_extractor.utils.logger import get_logger

BALANCE_TOLERANCE = 0.005


class SummaryCalculationError(Exception):
    """Custom exception for summary calculation errors."""
    pass


class LedgerSummarizer:
    """Computes debit/credit totals for a reconstructed ledger."""

    def __init__(self) -> None:
        """Initialize ledger summarizer."""
        self.logger = get_logger(__name__)

    def rows_to_frame(self, rows: List[FinalRow]) -> pd.DataFrame:
        """Build a numeric frame with an account class column.

        The account class is the first character of the cleaned identifier.
        """
        frame = pd.DataFrame(
            [
                {
                    "account_class": row.identifier_clean[:1],
                    "debit": row.debit or 0.0,
                    "credit": row.credit or 0.0,
                }
                for row in rows
            ],
            columns=["account_class", "debit", "credit"],
        )
        return frame.astype({"debit": float, "credit": float})

    def calculate_class_totals(self, frame: pd.DataFrame) -> Dict[str, Dict[str, Any]]:
        """Calculate row count and totals per account class.

        Args:
            frame: Frame from ``rows_to_frame``.

        Returns:
            Dictionary keyed by account class.
        """
        if frame.empty:
            return {}

        grouped = frame.groupby("account_class", sort=True).agg(
            rows=("debit", "size"),
            total_debits=("debit", "sum"),
            total_credits=("credit", "sum"),
        )

        return {
            str(account_class): {
                "rows": int(values["rows"]),
                "total_debits": round(float(values["total_debits"]), 2),
                "total_credits": round(float(values["total_credits"]), 2),
            }
            for account_class, values in grouped.iterrows()
        }

    def generate_summary(self, rows: List[FinalRow]) -> Dict[str, Any]:
        """Generate overall totals and the per-class breakdown.

        Args:
            rows: Final ledger rows.

        Returns:
            Dictionary with counts, totals, difference and balance flag.

        Raises:
            SummaryCalculationError: If totals cannot be computed.
        """
        try:
            frame = self.rows_to_frame(rows)

            total_debits = round(float(frame["debit"].sum()), 2)
            total_credits = round(float(frame["credit"].sum()), 2)
            difference = round(total_debits - total_credits, 2)

            summary = {
                "total_rows": len(frame),
                "debit_rows": int((frame["debit"] != 0).sum()),
                "credit_rows": int((frame["credit"] != 0).sum()),
                "blank_rows": int(((frame["debit"] == 0) & (frame["credit"] == 0)).sum()),
                "total_debits": total_debits,
                "total_credits": total_credits,
                "difference": difference,
                "balanced": abs(difference) < BALANCE_TOLERANCE,
                "by_account_class": self.calculate_class_totals(frame),
            }

            self.logger.info(
                f"Summary: {summary['total_rows']} rows, debits {total_debits:,.2f}, "
                f"credits {total_credits:,.2f}"
            )
            return summary

        except (KeyError, ValueError, TypeError) as e:
            raise SummaryCalculationError(f"Failed to summarize ledger: {str(e)}")
