"""
Logging Configuration Module.

Provides centralized logging setup with a rotating file handler.
Admin contact details (emails, phone numbers) and secrets are masked
before any record is written.
"""

import logging
import re
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional
import sys


# --- Constants ---
LOG_FILENAME = "admin_roster.log"
MAX_BYTES = 5 * 1024 * 1024  # 5 MB
BACKUP_COUNT = 3
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# --- Sensitive Data Patterns ---
SENSITIVE_PATTERNS = [
    # Key-value pairs with sensitive keys (password=xxx, token: xxx)
    (
        re.compile(
            r"(password|secret|token|api_key|apikey|authorization)\s*[:=]\s*['\"]?([^'\"\s&]+)['\"]?",
            re.IGNORECASE
        ),
        r"\1=***"
    ),
    # Bearer tokens in headers
    (
        re.compile(r"(Bearer\s+)([A-Za-z0-9\-_\.]+)", re.IGNORECASE),
        r"\1***"
    ),
    # Email addresses (first 2 chars + *** + @domain)
    (
        re.compile(r"\b([a-zA-Z0-9._%+-]{2})([a-zA-Z0-9._%+-]*)(@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,})\b"),
        r"\1***\3"
    ),
    # Phone numbers such as +1 (555) 123-4567: keep the last 4 digits
    (
        re.compile(r"((?:\+?\d{1,3}[\s.-]?)?\(?\d{2,4}\)?[\s.-]?\d{3,4}[\s.-])(\d{4})\b"),
        r"***\2"
    ),
]


class SensitiveDataFormatter(logging.Formatter):
    """Log formatter that masks secrets, emails and phone numbers."""

    def format(self, record: logging.LogRecord) -> str:
        masked_msg = super().format(record)
        for pattern, replacement in SENSITIVE_PATTERNS:
            masked_msg = pattern.sub(replacement, masked_msg)
        return masked_msg


def get_log_path(log_dir: Optional[Path] = None) -> Path:
    """
    Get the path for the log file, creating its directory.

    Defaults to ``<project root>/logs``.
    """
    logs_dir = log_dir or Path(__file__).resolve().parent.parent / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    return logs_dir / LOG_FILENAME


def setup_logging(log_level: int = logging.INFO, log_dir: Optional[Path] = None) -> None:
    """
    Configure application logging with rotation.

    Args:
        log_level: The logging level (default: logging.INFO).
        log_dir: Directory for the rotating log file.
    """
    log_file_path = get_log_path(log_dir)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Clear existing handlers to avoid duplicates
    root_logger.handlers.clear()

    formatter = SensitiveDataFormatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    file_handler = RotatingFileHandler(
        filename=str(log_file_path),
        maxBytes=MAX_BYTES,
        backupCount=BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setLevel(log_level)
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    root_logger.info(f"Logging initialized. Log file: {log_file_path}")

    # Suppress noisy loggers
    for name in ("watchfiles", "httpx", "httpcore", "uvicorn.access"):
        logging.getLogger(name).setLevel(logging.WARNING)
