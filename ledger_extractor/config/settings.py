"""Configuration settings for ledger statement extraction."""

import os
import json
from typing import Dict, Any, Optional, List
from dataclasses import dataclass, asdict, field

SUPPORTED_PDF_FORMATS = [".pdf"]

# Celery Configuration
CELERY_BROKER_URL = os.getenv("CELERY_BROKER_URL", "redis://localhost:6379/0")
CELERY_RESULT_BACKEND = os.getenv("CELERY_RESULT_BACKEND", "redis://localhost:6379/0")
CELERY_TASK_SERIALIZER = "json"
CELERY_RESULT_SERIALIZER = "json"
CELERY_ACCEPT_CONTENT = ["json"]
CELERY_TIMEZONE = "UTC"

# File Paths
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
REPORTS_DIR = os.getenv("REPORTS_DIR", os.path.join(BASE_DIR, "reports"))
LOGS_DIR = os.getenv("LOGS_DIR", os.path.join(BASE_DIR, "logs"))

# Security
DEFAULT_PASSWORD_FILE = os.getenv("DEFAULT_PASSWORD_FILE", "password.txt")
MAX_FILE_SIZE_MB = int(os.getenv("MAX_FILE_SIZE_MB", "100"))

# Logging Configuration
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Excel Output Configuration
EXCEL_OUTPUT_FORMAT = os.getenv("EXCEL_OUTPUT_FORMAT", "xlsx")
INCLUDE_METADATA = os.getenv("INCLUDE_METADATA", "True").lower() == "true"
OUTPUT_FILENAME_PREFIX = os.getenv("OUTPUT_FILENAME_PREFIX", "Result_")
RESULT_SHEET_NAME = os.getenv("RESULT_SHEET_NAME", "Result")

# Layout Configuration
LINE_BUCKET_SIZE = float(os.getenv("LINE_BUCKET_SIZE", "3"))
WORD_X_TOLERANCE = float(os.getenv("WORD_X_TOLERANCE", "3"))
WORD_Y_TOLERANCE = float(os.getenv("WORD_Y_TOLERANCE", "3"))

# Processing Configuration
MAX_RETRIES = int(os.getenv("MAX_RETRIES", "3"))
RETRY_DELAY_SECONDS = int(os.getenv("RETRY_DELAY_SECONDS", "60"))


@dataclass
class Settings:
    """Configuration settings class."""

    pdf_password: Optional[str] = None

    # Output Configuration
    log_level: str = LOG_LEVEL
    log_format: str = LOG_FORMAT
    excel_output_format: str = EXCEL_OUTPUT_FORMAT
    include_metadata: bool = INCLUDE_METADATA
    output_filename_prefix: str = OUTPUT_FILENAME_PREFIX
    result_sheet_name: str = RESULT_SHEET_NAME

    # Layout
    line_bucket_size: float = LINE_BUCKET_SIZE
    word_x_tolerance: float = WORD_X_TOLERANCE
    word_y_tolerance: float = WORD_Y_TOLERANCE

    # File System
    reports_dir: str = REPORTS_DIR
    logs_dir: str = LOGS_DIR

    # Security
    default_password_file: str = DEFAULT_PASSWORD_FILE
    max_file_size_mb: int = MAX_FILE_SIZE_MB
    supported_pdf_formats: List[str] = field(default_factory=lambda: SUPPORTED_PDF_FORMATS.copy())

    # Task retries
    max_retries: int = MAX_RETRIES
    retry_delay_seconds: int = RETRY_DELAY_SECONDS

    @classmethod
    def from_env(cls) -> "Settings":
        """Create Settings from environment variables."""
        return cls(
            pdf_password=os.getenv("PDF_PASSWORD"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", LOG_FORMAT),
            excel_output_format=os.getenv("EXCEL_OUTPUT_FORMAT", "xlsx"),
            include_metadata=os.getenv("INCLUDE_METADATA", "True").lower() == "true",
            output_filename_prefix=os.getenv("OUTPUT_FILENAME_PREFIX", "Result_"),
            result_sheet_name=os.getenv("RESULT_SHEET_NAME", "Result"),
            line_bucket_size=float(os.getenv("LINE_BUCKET_SIZE", "3")),
            word_x_tolerance=float(os.getenv("WORD_X_TOLERANCE", "3")),
            word_y_tolerance=float(os.getenv("WORD_Y_TOLERANCE", "3")),
            reports_dir=os.getenv("REPORTS_DIR", REPORTS_DIR),
            logs_dir=os.getenv("LOGS_DIR", LOGS_DIR),
            default_password_file=os.getenv("DEFAULT_PASSWORD_FILE", "password.txt"),
            max_file_size_mb=int(os.getenv("MAX_FILE_SIZE_MB", "100")),
            max_retries=int(os.getenv("MAX_RETRIES", "3")),
            retry_delay_seconds=int(os.getenv("RETRY_DELAY_SECONDS", "60")),
        )

    def validate(self) -> bool:
        """Validate settings."""
        return (
            self.max_retries >= 0 and
            self.retry_delay_seconds >= 0 and
            self.line_bucket_size > 0 and
            self.word_x_tolerance >= 0 and
            self.word_y_tolerance >= 0 and
            self.max_file_size_mb > 0 and
            len(self.result_sheet_name) > 0
        )

    def get_log_level(self) -> str:
        """Get log level as string."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if self.log_level.upper() in valid_levels:
            return self.log_level.upper()
        return "INFO"

    def create_directories(self) -> None:
        """Create necessary directories."""
        for directory in [self.logs_dir, self.reports_dir]:
            os.makedirs(directory, exist_ok=True)

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Settings":
        """Create settings from dictionary, ignoring unknown keys."""
        known = set(cls.__dataclass_fields__)
        return cls(**{key: value for key, value in data.items() if key in known})


def ensure_directories() -> None:
    """Ensure all required directories exist."""
    for directory in [REPORTS_DIR, LOGS_DIR]:
        os.makedirs(directory, exist_ok=True)


def load_config_from_file(file_path: str) -> Dict[str, Any]:
    """Load configuration from a JSON file."""
    with open(file_path, 'r', encoding='utf-8') as f:
        return json.load(f)


def merge_configs(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge two configuration dictionaries."""
    result = base.copy()
    result.update(override)
    return result
