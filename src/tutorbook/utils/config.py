"""
Configuration management with environment variables.

This module provides centralized configuration management
with validation and type safety.
"""

import os
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


class Config:
    """
    Application configuration manager.

    Loads configuration from environment variables (and a .env file if
    present) and provides validated access to configuration values.

    Attributes:
        data_file: Path of the JSON store
        default_hourly_rate: Rate for new students and orphaned lessons
        default_duration: Lesson length used when none is given
        upcoming_days: Window length of the schedule list view
        preview_days: Window length of the dashboard preview
        preview_count: Number of occurrences shown in the dashboard preview
        currency: ISO currency code used for display
        seed_demo_data: Whether a new store starts with the demo roster
        output_dir: Directory for CSV exports
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Examples:
        >>> config = Config()
        >>> if config.validate():
        ...     print(f"Using data file: {config.data_file}")
    """

    @staticmethod
    def _read_int(name: str, default: str) -> Optional[int]:
        raw = os.getenv(name, default)
        try:
            return int(raw)
        except ValueError:
            return None

    def __init__(self):
        """Initialize configuration by loading environment variables."""
        load_dotenv()

        self._data_file = Path(os.getenv("TUTORBOOK_DATA_FILE", "data/tutoring-data.json"))

        rate = os.getenv("TUTORBOOK_DEFAULT_HOURLY_RATE", "30")
        try:
            self._default_hourly_rate = Decimal(rate)
        except InvalidOperation:
            self._default_hourly_rate = None

        self._default_duration = self._read_int("TUTORBOOK_DEFAULT_DURATION", "60")

        # Schedule views
        self._upcoming_days = self._read_int("TUTORBOOK_UPCOMING_DAYS", "14")
        self._preview_days = self._read_int("TUTORBOOK_PREVIEW_DAYS", "7")
        self._preview_count = self._read_int("TUTORBOOK_PREVIEW_COUNT", "5")

        self._currency = os.getenv("TUTORBOOK_CURRENCY", "EUR").upper()
        self._seed_demo_data = os.getenv("TUTORBOOK_SEED_DEMO_DATA", "false").lower() == "true"

        # Output settings
        self._output_dir = Path(os.getenv("OUTPUT_DIR", "output"))
        self._log_level = os.getenv("LOG_LEVEL", "INFO").upper()

    @property
    def data_file(self) -> Path:
        """Get the JSON store path."""
        return self._data_file

    @data_file.setter
    def data_file(self, value) -> None:
        self._data_file = Path(value)

    @property
    def default_hourly_rate(self) -> Decimal:
        """Get default hourly rate."""
        return self._default_hourly_rate

    @property
    def default_duration(self) -> int:
        """Get default lesson duration in minutes."""
        return self._default_duration

    @property
    def upcoming_days(self) -> int:
        """Get the schedule list window in days."""
        return self._upcoming_days

    @property
    def preview_days(self) -> int:
        """Get the dashboard preview window in days."""
        return self._preview_days

    @property
    def preview_count(self) -> int:
        """Get the number of dashboard preview entries."""
        return self._preview_count

    @property
    def currency(self) -> str:
        """Get display currency code."""
        return self._currency

    @property
    def seed_demo_data(self) -> bool:
        """Get whether a new store is seeded with demo data."""
        return self._seed_demo_data

    @property
    def output_dir(self) -> Path:
        """Get output directory path."""
        return self._output_dir

    @property
    def log_level(self) -> str:
        """Get logging level."""
        return self._log_level

    def validate(self) -> bool:
        """
        Validate configuration values.

        Returns:
            True if all configuration is valid

        Raises:
            ValueError: If validation fails
        """
        errors = []

        if self._default_hourly_rate is None:
            errors.append("TUTORBOOK_DEFAULT_HOURLY_RATE must be a number")
        elif self._default_hourly_rate < 0:
            errors.append("TUTORBOOK_DEFAULT_HOURLY_RATE must not be negative")

        for name, value in [
            ("TUTORBOOK_DEFAULT_DURATION", self._default_duration),
            ("TUTORBOOK_UPCOMING_DAYS", self._upcoming_days),
            ("TUTORBOOK_PREVIEW_DAYS", self._preview_days),
            ("TUTORBOOK_PREVIEW_COUNT", self._preview_count),
        ]:
            if value is None:
                errors.append(f"{name} must be an integer")
            elif value <= 0:
                errors.append(f"{name} must be positive")

        if len(self._currency) != 3 or not self._currency.isalpha():
            errors.append("TUTORBOOK_CURRENCY must be a 3-letter ISO code")

        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if self._log_level not in valid_levels:
            errors.append(
                f"LOG_LEVEL must be one of: {', '.join(valid_levels)}"
            )

        if errors:
            error_msg = "Configuration validation failed:\n  - " + "\n  - ".join(errors)
            raise ValueError(error_msg)

        return True


# Singleton instance
config = Config()
