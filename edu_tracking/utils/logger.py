"""
Logging utilities.

This module provides logging setup with:
- Configurable log levels and output destinations
- Log rotation for file handlers
- Optional masking of currency amounts (salaries, revenue)
- Structured log format
"""

import logging
import re
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


MASKED_AMOUNT = "••••••••"

# "salary: 140000", "salary=140.000 ₫", "revenue 700,000"
_AMOUNT_PATTERN = re.compile(
    r'((?:salary|revenue|amount)["\']?\s*[:=]?\s*)(\d[\d.,]*(?:\s*₫)?)',
    flags=re.IGNORECASE
)
_CURRENCY_PATTERN = re.compile(r'\d[\d.,]*\s*₫')


def mask_amount(amount: object = None) -> str:
    """
    Mask a currency amount for display or logging.

    Examples:
        >>> mask_amount(140000)
        '•••••••• ₫'
    """
    return f"{MASKED_AMOUNT} ₫"


class SalaryMaskingFilter(logging.Filter):
    """
    Logging filter that masks currency amounts.

    Installed when values are hidden, so that salaries and revenue
    never reach the console or log files.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        """
        Filter and mask amounts in log record.

        Args:
            record: Log record to filter

        Returns:
            Always True (allows all records through after masking)
        """
        message = record.getMessage()
        message = _AMOUNT_PATTERN.sub(lambda m: m.group(1) + MASKED_AMOUNT, message)
        message = _CURRENCY_PATTERN.sub(mask_amount(), message)

        record.msg = message
        record.args = None
        return True


def setup_logger(
    name: str = "edu_tracking",
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    hide_values: bool = False
) -> logging.Logger:
    """
    Set up and configure a logger instance.

    Args:
        name: Logger name (default: "edu_tracking")
        level: Logging level (default: logging.INFO)
        log_file: Optional path to log file for file output
        hide_values: Mask currency amounts in every message

    Returns:
        Configured logger instance

    Examples:
        >>> # Basic console logging
        >>> logger = setup_logger()
        >>> logger.info("Report started")

        >>> # File logging with rotation
        >>> logger = setup_logger(
        ...     level=logging.DEBUG,
        ...     log_file="output/logs/edu_tracking.log"
        ... )
    """
    logger = logging.getLogger(name)

    # Avoid duplicate handlers
    if logger.handlers:
        return logger

    logger.setLevel(level)

    # Define log format
    formatter = logging.Formatter(
        fmt='%(asctime)s [%(levelname)s] %(name)s:%(funcName)s:%(lineno)d %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # File handler with rotation (if log file specified)
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if hide_values:
        # Handler-level so records from child loggers are masked too
        for handler in logger.handlers:
            handler.addFilter(SalaryMaskingFilter())

    return logger
