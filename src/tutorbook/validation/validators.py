"""
Validation framework with Strategy pattern.

This module provides:
- Abstract Validator interface
- ValidationResult for consistent validation reporting
- Shared field checks used by the record validators
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, List, Optional


@dataclass
class ValidationResult:
    """
    Result of data validation.

    Attributes:
        is_valid: Whether validation passed
        errors: List of error messages
        warnings: List of warning messages (non-fatal)
    """

    is_valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def add_error(self, message: str) -> 'ValidationResult':
        """
        Add an error message.

        Args:
            message: Error message to add

        Returns:
            Self for method chaining

        Examples:
            >>> result = ValidationResult(is_valid=True)
            >>> result.add_error("Error 1").add_error("Error 2")
        """
        self.errors.append(message)
        self.is_valid = False
        return self

    def add_warning(self, message: str) -> 'ValidationResult':
        """
        Add a warning message.

        Args:
            message: Warning message to add

        Returns:
            Self for method chaining
        """
        self.warnings.append(message)
        return self

    def check(self, error: Optional[str]) -> 'ValidationResult':
        """Add error if it is not None."""
        if error:
            self.add_error(error)
        return self

    @property
    def has_errors(self) -> bool:
        """Check if there are errors."""
        return len(self.errors) > 0

    @property
    def has_warnings(self) -> bool:
        """Check if there are warnings."""
        return len(self.warnings) > 0

    def error_message(self) -> str:
        """Errors joined into one line, for Result messages."""
        return "; ".join(self.errors)


class Validator(ABC):
    """
    Abstract base class for validators.

    Subclasses implement validate() for one kind of input payload
    (the dictionaries services receive from forms and the CLI).
    """

    @abstractmethod
    def validate(self, data: Any) -> ValidationResult:
        """
        Validate data.

        Args:
            data: Data to validate

        Returns:
            ValidationResult with errors and warnings
        """
        pass

    def validate_required_fields(
        self,
        data: dict,
        required_fields: List[str]
    ) -> List[str]:
        """
        Validate that required fields exist.

        Args:
            data: Dictionary to check
            required_fields: List of required field names

        Returns:
            List of error messages for missing fields
        """
        errors = []
        for name in required_fields:
            if name not in data or data[name] is None or data[name] == "":
                errors.append(f"Missing required field: {name}")
        return errors

    def validate_date_format(
        self,
        date_str: Any,
        field_name: str = "date"
    ) -> Optional[str]:
        """
        Validate date format (YYYY-MM-DD) and that the date exists.

        Args:
            date_str: Date string to validate
            field_name: Name of the field (for error message)

        Returns:
            Error message if invalid, None if valid
        """
        pattern = r'^\d{4}-\d{2}-\d{2}$'
        if not isinstance(date_str, str) or not re.match(pattern, date_str):
            return f"Invalid {field_name} format: {date_str} (expected YYYY-MM-DD)"

        try:
            datetime.strptime(date_str, "%Y-%m-%d")
        except ValueError:
            return f"Invalid {field_name}: {date_str} is not a calendar date"

        return None

    def validate_time_format(
        self,
        time_str: Any,
        field_name: str = "time"
    ) -> Optional[str]:
        """
        Validate 24-hour time format (HH:MM).

        Args:
            time_str: Time string to validate
            field_name: Name of the field (for error message)

        Returns:
            Error message if invalid, None if valid
        """
        pattern = r'^([01]\d|2[0-3]):[0-5]\d$'
        if not isinstance(time_str, str) or not re.match(pattern, time_str):
            return f"Invalid {field_name} format: {time_str} (expected HH:MM)"
        return None

    def _as_number(self, value: Any) -> Optional[Decimal]:
        if isinstance(value, bool):
            return None
        if isinstance(value, (int, float, Decimal)):
            return Decimal(str(value))
        if isinstance(value, str):
            try:
                return Decimal(value)
            except InvalidOperation:
                return None
        return None

    def validate_positive_number(
        self,
        value: Any,
        field_name: str
    ) -> Optional[str]:
        """
        Validate that value is a positive number.

        Args:
            value: Value to validate
            field_name: Name of the field (for error message)

        Returns:
            Error message if invalid, None if valid
        """
        number = self._as_number(value)
        if number is None:
            return f"{field_name} must be a number, got {type(value).__name__}"

        if number <= 0:
            return f"{field_name} must be positive, got {value}"

        return None

    def validate_non_negative_number(
        self,
        value: Any,
        field_name: str
    ) -> Optional[str]:
        """
        Validate that value is a number >= 0.

        Args:
            value: Value to validate
            field_name: Name of the field (for error message)

        Returns:
            Error message if invalid, None if valid
        """
        number = self._as_number(value)
        if number is None:
            return f"{field_name} must be a number, got {type(value).__name__}"

        if number < 0:
            return f"{field_name} must not be negative, got {value}"

        return None

    def validate_email_format(
        self,
        email: str,
        field_name: str = "email"
    ) -> Optional[str]:
        """
        Validate email format.

        Args:
            email: Email string to validate
            field_name: Name of the field (for error message)

        Returns:
            Error message if invalid, None if valid
        """
        pattern = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'
        if not isinstance(email, str) or not re.match(pattern, email):
            return f"Invalid {field_name} format: {email}"
        return None

    def validate_string_length(
        self,
        value: str,
        field_name: str,
        min_length: Optional[int] = None,
        max_length: Optional[int] = None
    ) -> Optional[str]:
        """
        Validate string length.

        Args:
            value: String to validate
            field_name: Name of the field (for error message)
            min_length: Minimum length (optional)
            max_length: Maximum length (optional)

        Returns:
            Error message if invalid, None if valid
        """
        if not isinstance(value, str):
            return f"{field_name} must be a string, got {type(value).__name__}"

        length = len(value)

        if min_length is not None and length < min_length:
            return f"{field_name} must be at least {min_length} characters, got {length}"

        if max_length is not None and length > max_length:
            return f"{field_name} must be at most {max_length} characters, got {length}"

        return None

    def validate_id(self, value: Any, field_name: str) -> Optional[str]:
        """
        Validate a record id (positive integer or its string form).

        Args:
            value: Value to validate
            field_name: Name of the field (for error message)

        Returns:
            Error message if invalid, None if valid
        """
        if isinstance(value, bool):
            return f"{field_name} must be an integer id, got {value!r}"
        try:
            number = int(value)
        except (TypeError, ValueError):
            return f"{field_name} must be an integer id, got {value!r}"
        if number <= 0:
            return f"{field_name} must be positive, got {value}"
        return None
