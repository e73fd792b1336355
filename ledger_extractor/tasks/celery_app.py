"""Celery application and task definitions for ledger statement processing."""

from typing import Any, Dict, Optional

from celery import Celery

from ledger_extractor.config.settings import (
    CELERY_BROKER_URL,
    CELERY_RESULT_BACKEND,
    CELERY_TASK_SERIALIZER,
    CELERY_RESULT_SERIALIZER,
    CELERY_ACCEPT_CONTENT,
    CELERY_TIMEZONE,
    Settings,
    ensure_directories,
)
from ledger_extractor.excel_generator.converter import ExcelConversionError
from ledger_extractor.excel_generator.summarizer import SummaryCalculationError
from ledger_extractor.pdf_processor.decryptor import PDFDecryptionError
from ledger_extractor.pdf_processor.extractor import PDFExtractionError
from ledger_extractor.processor import LedgerStatementProcessor
from ledger_extractor.utils.logger import ProcessingLogger
from ledger_extractor.utils.validators import ValidationError

ensure_directories()

celery_app = Celery(
    "ledger_extractor",
    broker=CELERY_BROKER_URL,
    backend=CELERY_RESULT_BACKEND,
    task_serializer=CELERY_TASK_SERIALIZER,
    result_serializer=CELERY_RESULT_SERIALIZER,
    accept_content=CELERY_ACCEPT_CONTENT,
    timezone=CELERY_TIMEZONE,
)

celery_app.conf.update(
    task_routes={
        "process_ledger_statement": {"queue": "ledger_processing"},
    },
    worker_prefetch_multiplier=1,
    task_acks_late=True,
    worker_max_tasks_per_child=1000,
)

# Errors caused by the input itself; retrying cannot fix them.
PERMANENT_ERRORS = (ValidationError, PDFDecryptionError, PDFExtractionError)


@celery_app.task(bind=True, name="process_ledger_statement")
def process_ledger_statement(
    self,
    pdf_path: str,
    password: Optional[str] = None,
    include_summary: bool = True,
    output_filename: Optional[str] = None
) -> Dict[str, Any]:
    """Reconstruct the ledger of a PDF statement and write the Excel report.

    Args:
        self: Celery task instance.
        pdf_path: Path to PDF file.
        password: Optional PDF password.
        include_summary: Whether to add the totals sheet.
        output_filename: Optional output filename.

    Returns:
        Dictionary with processing results.
    """
    task_id = self.request.id
    settings = Settings.from_env()
    processing_logger = ProcessingLogger(task_id, logs_dir=settings.logs_dir)

    try:
        processing_logger.log_start(pdf_path)
        processor = LedgerStatementProcessor(settings)

        processing_logger.log_progress("Extracting ledger rows...")
        extraction = processor.extract_ledger(pdf_path, password)
        ledger = extraction["ledger"]

        for advisory in ledger.advisories:
            processing_logger.log_advisory(advisory)

        processing_logger.log_progress(
            f"Extracted {len(ledger.rows)} rows from {ledger.page_count} pages "
            f"(cut point {ledger.calibration.cut_point:.2f})"
        )

        processing_logger.log_progress("Generating Excel report...")
        output_path = processor.write_report(
            pdf_path,
            ledger,
            pdf_info=extraction["pdf_info"],
            filename=output_filename,
            include_summary=include_summary,
        )

        processing_logger.log_completion(output_path)
        return {
            "success": True,
            "output_path": output_path,
            "row_count": len(ledger.rows),
            "page_count": ledger.page_count,
            "calibration": ledger.calibration.to_dict(),
            "advisories": ledger.advisories,
            "degraded": ledger.degraded,
            "task_id": task_id,
        }

    except PERMANENT_ERRORS as e:
        processing_logger.log_error(e, "Ledger processing failed")
        return {
            "success": False,
            "error": str(e),
            "task_id": task_id,
            "retries": self.request.retries,
        }

    except (ExcelConversionError, SummaryCalculationError) as e:
        processing_logger.log_error(e, "Report generation failed")

        if self.request.retries < settings.max_retries:
            processing_logger.log_progress(
                f"Retrying task (attempt {self.request.retries + 1}/{settings.max_retries})"
            )
            raise self.retry(
                countdown=settings.retry_delay_seconds,
                max_retries=settings.max_retries,
                exc=e,
            )

        return {
            "success": False,
            "error": str(e),
            "task_id": task_id,
            "retries": self.request.retries,
        }


def get_task_status(task_id: str) -> Dict[str, Any]:
    """Get status of a Celery task.

    Args:
        task_id: ID of the task to check.

    Returns:
        Dictionary with task status information.
    """
    try:
        result = celery_app.AsyncResult(task_id)

        return {
            "task_id": task_id,
            "status": result.status,
            "result": result.result if result.ready() else None,
            "ready": result.ready(),
            "successful": result.successful(),
            "failed": result.failed(),
        }

    except Exception as e:
        return {
            "task_id": task_id,
            "status": "UNKNOWN",
            "error": str(e),
        }


def revoke_task(task_id: str, terminate: bool = False) -> Dict[str, Any]:
    """Revoke a Celery task.

    Args:
        task_id: ID of the task to revoke.
        terminate: Whether to terminate the task if running.

    Returns:
        Dictionary with revocation result.
    """
    try:
        celery_app.control.revoke(task_id, terminate=terminate)
        return {"task_id": task_id, "revoked": True, "terminated": terminate}

    except Exception as e:
        return {"task_id": task_id, "revoked": False, "error": str(e)}
