"""Logging configuration for selfupdate.

Provides centralized logging with credential redaction so repository
passwords and tokens embedded in URLs are never written to log files.
"""

import logging
import re
import sys
from pathlib import Path
from typing import Optional


# Credential patterns to redact from logs
CREDENTIAL_PATTERNS = [
    # Basic auth embedded in URLs
    (re.compile(r'(https?://)[^/\s:@]+:[^/\s@]+@'), r'\1[REDACTED]@'),
    # Tokens and passwords in query strings or key=value text
    (re.compile(r'((?:token|password|passwd|api_key|apikey)=)[^&\s]+', re.IGNORECASE), r'\1[REDACTED]'),
    # Authorization headers
    (re.compile(r'(authorization["\s:=]+)(?:basic|bearer)?\s*[^\s,}\]]+', re.IGNORECASE), r'\1[REDACTED]'),
]


class CredentialRedactingFormatter(logging.Formatter):
    """Custom formatter that redacts credentials from log messages."""

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record, redacting any credentials."""
        message = super().format(record)
        for pattern, replacement in CREDENTIAL_PATTERNS:
            message = pattern.sub(replacement, message)
        return message


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
    console: bool = True
) -> logging.Logger:
    """
    Configure updater logging with credential redaction.

    Args:
        level: Logging level (default INFO)
        log_file: Optional file path for log output
        console: Whether to output to console (default True)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger("selfupdate")
    logger.setLevel(level)

    # Clear any existing handlers
    logger.handlers.clear()

    formatter = CredentialRedactingFormatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = "selfupdate") -> logging.Logger:
    """
    Get a logger instance.

    Args:
        name: Logger name (default is package logger)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
