"""Logging configuration and utilities for ledger extraction."""

import logging
import os
from typing import Optional

from ledger_extractor.config.settings import LOG_LEVEL, LOG_FORMAT, LOGS_DIR


def setup_logger(
    name: str,
    log_file: Optional[str] = None,
    level: str = LOG_LEVEL,
    logs_dir: str = LOGS_DIR,
    log_format: str = LOG_FORMAT
) -> logging.Logger:
    """Set up a logger with console and file handlers.

    Args:
        name: Logger name.
        log_file: Optional log file name. If None, uses logger name.
        level: Logging level.
        logs_dir: Directory that receives the log file.
        log_format: Format string for both handlers.

    Returns:
        Configured logger instance.
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper()))

    # Clear existing handlers to avoid duplicates
    logger.handlers.clear()

    formatter = logging.Formatter(log_format)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file is None:
        log_file = f"{name}.log"

    log_path = os.path.join(logs_dir, log_file)
    os.makedirs(logs_dir, exist_ok=True)

    file_handler = logging.FileHandler(log_path)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Logger name.

    Returns:
        Logger instance.
    """
    return logging.getLogger(name)


class ProcessingLogger:
    """Specialized logger for one statement processing task."""

    def __init__(self, task_id: str, logs_dir: str = LOGS_DIR) -> None:
        """Initialize processing logger.

        Args:
            task_id: Unique identifier for the processing task.
            logs_dir: Directory that receives the task log file.
        """
        self.task_id = task_id
        self.logger = setup_logger(f"processing.{task_id}", logs_dir=logs_dir)

    def log_start(self, file_path: str) -> None:
        """Log processing start."""
        self.logger.info(f"Started processing task {self.task_id} for file: {file_path}")

    def log_progress(self, message: str) -> None:
        """Log processing progress."""
        self.logger.info(f"Task {self.task_id}: {message}")

    def log_advisory(self, message: str) -> None:
        """Log a non-fatal quality warning."""
        self.logger.warning(f"Task {self.task_id}: {message}")

    def log_error(self, error: Exception, context: str = "") -> None:
        """Log processing error.

        Args:
            error: Exception that occurred.
            context: Additional context information.
        """
        error_msg = f"Task {self.task_id}: Error in {context}: {str(error)}"
        self.logger.error(error_msg, exc_info=True)

    def log_completion(self, output_path: str) -> None:
        """Log processing completion."""
        self.logger.info(f"Task {self.task_id}: Completed successfully. Output: {output_path}")
