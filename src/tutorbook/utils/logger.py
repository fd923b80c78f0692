"""
Logging utilities with privacy features.

This module provides logging setup with:
- Configurable log levels and output destinations
- Log rotation for file handlers
- Student contact masking (emails, phone numbers)
- Structured log format
"""

import logging
import re
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


EMAIL_PATTERN = re.compile(r'([a-zA-Z0-9._%+-]+)@([a-zA-Z0-9.-]+\.[a-zA-Z]{2,})')
PHONE_PATTERN = re.compile(
    r"(?<![\d-])(?:\+\d{1,3} ?)?\d{2,3} \d{3} ?\d{3,4}(?![\d-])"
    r"|(?<!\d)\+?\d{10,13}(?!\d)"
)


def mask_email(email: str) -> str:
    """
    Mask email address for safe logging.

    Args:
        email: Email address to mask

    Returns:
        Masked email (e.g., "e***@email.com")

    Examples:
        >>> mask_email("emma.obrien@email.com")
        'e***@email.com'
        >>> mask_email("invalid")
        '***'
    """
    if not email or "@" not in email:
        return "***"

    local, domain = email.split("@", 1)
    masked_local = local[0] + "***" if len(local) > 0 else "***"
    return f"{masked_local}@{domain}"


def mask_phone(phone: str) -> str:
    """
    Mask a phone number, keeping the last two digits.

    Examples:
        >>> mask_phone("087 123 4567")
        '***67'
    """
    digits = re.sub(r'\D', '', phone or "")
    if len(digits) < 2:
        return "***"
    return "***" + digits[-2:]


class ContactDataFilter(logging.Filter):
    """
    Logging filter that masks student contact details.

    Email addresses and phone numbers ("087 123 4567", "+353 87 123 4567",
    "0871234567") are masked before the record is written. Dates and
    times are left alone.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        """
        Mask contact data in a log record.

        Args:
            record: Log record to filter

        Returns:
            Always True (allows all records through after masking)
        """
        message = record.getMessage()

        message = EMAIL_PATTERN.sub(lambda m: mask_email(m.group(0)), message)
        message = PHONE_PATTERN.sub(lambda m: mask_phone(m.group(0)), message)

        record.msg = message
        record.args = None

        return True


def setup_logger(
    name: str = "tutorbook",
    level: int = logging.INFO,
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Set up and configure a logger instance.

    Args:
        name: Logger name (default: "tutorbook")
        level: Logging level (default: logging.INFO)
        log_file: Optional path to log file for file output

    Returns:
        Configured logger instance

    Examples:
        >>> logger = setup_logger()
        >>> logger.info("Application started")

        >>> logger = setup_logger(
        ...     name="tutorbook",
        ...     level=logging.DEBUG,
        ...     log_file="output/logs/tutorbook.log"
        ... )
    """
    logger = logging.getLogger(name)

    # Avoid duplicate handlers
    if logger.handlers:
        logger.setLevel(level)
        return logger

    logger.setLevel(level)

    formatter = logging.Formatter(
        fmt='%(asctime)s [%(levelname)s] %(name)s:%(funcName)s:%(lineno)d %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.addFilter(ContactDataFilter())
    logger.addHandler(console_handler)

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
        file_handler.addFilter(ContactDataFilter())
        logger.addHandler(file_handler)

    return logger
