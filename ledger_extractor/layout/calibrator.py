"""Self-calibrating split between the debit and credit amount columns."""

from typing import Iterable, Sequence

from ledger_extractor.layout.models import CalibrationMode, CalibrationResult


def median(values: Iterable[float]) -> float:
    """Median of ``values``; 0 for an empty input."""
    ordered = sorted(values)
    count = len(ordered)
    if count == 0:
        return 0
    mid = count // 2
    if count % 2:
        return ordered[mid]
    return (ordered[mid - 1] + ordered[mid]) / 2


def compute_cut_point(
    debit_pool: Sequence[float],
    credit_pool: Sequence[float],
    all_positions: Sequence[float]
) -> CalibrationResult:
    """Compute the x coordinate that separates debit and credit amounts.

    With samples on both sides the cut-point is the midpoint of the two
    medians. When either pool is empty it falls back to the median of every
    row's amount position and the result carries an advisory.

    Args:
        debit_pool: Amount x positions of debit-hinted rows.
        credit_pool: Amount x positions of credit-hinted rows.
        all_positions: Amount x positions of all rows.

    Returns:
        CalibrationResult for the document.
    """
    if not debit_pool or not credit_pool:
        if not debit_pool and not credit_pool:
            missing = "debit-side or credit-side"
        elif not debit_pool:
            missing = "debit-side"
        else:
            missing = "credit-side"
        return CalibrationResult(
            cut_point=median(all_positions),
            mode=CalibrationMode.GLOBAL_MEDIAN,
            debit_samples=len(debit_pool),
            credit_samples=len(credit_pool),
            advisory=(
                f"No {missing} calibration samples; "
                f"using median of {len(all_positions)} amount positions"
            ),
        )

    debit_median = median(debit_pool)
    credit_median = median(credit_pool)
    return CalibrationResult(
        cut_point=(debit_median + credit_median) / 2,
        mode=CalibrationMode.SPLIT_MEDIANS,
        debit_median=debit_median,
        credit_median=credit_median,
        debit_samples=len(debit_pool),
        credit_samples=len(credit_pool),
    )
