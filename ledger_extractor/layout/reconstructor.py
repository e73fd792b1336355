"""Two-phase reconstruction of ledger rows from a document's fragments."""

from typing import Iterable

from ledger_extractor.layout.calibrator import compute_cut_point
from ledger_extractor.layout.classifier import RowAccumulator
from ledger_extractor.layout.lines import DEFAULT_BUCKET_SIZE, reconstruct_lines
from ledger_extractor.layout.materializer import materialize_rows
from ledger_extractor.layout.models import Fragment, LedgerResult
from ledger_extractor.utils.logger import get_logger


class LedgerReconstructor:
    """Rebuilds debit/credit rows from positioned text, one document per call."""

    def __init__(self, bucket_size: float = DEFAULT_BUCKET_SIZE) -> None:
        """Initialize reconstructor.

        Args:
            bucket_size: Vertical quantization step used to group lines.
        """
        self.bucket_size = bucket_size
        self.logger = get_logger(__name__)

    def reconstruct(self, pages: Iterable[Iterable[Fragment]]) -> LedgerResult:
        """Reconstruct the ledger of one document.

        Every page is scanned before any row is assigned a side, since the
        cut-point depends on the whole document. Pages are consumed lazily
        and in order, so an exception raised by the page source aborts the
        call before any result exists.

        Args:
            pages: Fragment sequences, one per page, in page order.

        Returns:
            LedgerResult with the final rows, calibration and advisories.
        """
        accumulator = RowAccumulator()
        page_count = 0

        for page_num, fragments in enumerate(pages, 1):
            page_count = page_num
            lines = reconstruct_lines(fragments, self.bucket_size)
            found = accumulator.add_lines(lines)
            self.logger.debug(f"Page {page_num}: {len(lines)} lines, {found} ledger rows")

        calibration = compute_cut_point(
            accumulator.debit_pool,
            accumulator.credit_pool,
            accumulator.row_positions,
        )
        advisories = []
        if calibration.degraded:
            advisories.append(calibration.advisory)
            self.logger.warning(f"Degraded calibration: {calibration.advisory}")
        else:
            self.logger.info(f"Calibration succeeded. Cut point X: {calibration.cut_point:.2f}")

        rows, value_advisories = materialize_rows(accumulator.raw_rows, calibration.cut_point)
        for advisory in value_advisories:
            self.logger.warning(advisory)
        advisories.extend(value_advisories)

        self.logger.info(
            f"Reconstructed {len(rows)} rows from {len(accumulator.raw_rows)} "
            f"candidates across {page_count} pages"
        )

        return LedgerResult(
            rows=rows,
            calibration=calibration,
            advisories=advisories,
            page_count=page_count,
            raw_row_count=len(accumulator.raw_rows),
            line_count=accumulator.lines_seen,
        )
