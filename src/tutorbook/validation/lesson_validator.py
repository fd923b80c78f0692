"""
Lesson data validator.

Validates lesson payloads and business rules.
"""

from typing import Dict, Any

from .validators import Validator, ValidationResult


class LessonValidator(Validator):
    """
    Validator for lesson create/update payloads.

    Validates:
    - Required fields
    - Date format
    - Business rules (duration, rate)

    Examples:
        >>> validator = LessonValidator()
        >>> lesson = {
        ...     "student_id": 1,
        ...     "date": "2024-10-15",
        ...     "duration_minutes": 60,
        ...     "hourly_rate": 35,
        ... }
        >>> result = validator.validate(lesson)
        >>> if result.is_valid:
        ...     print("Lesson data is valid")
    """

    # Business rule constraints
    MIN_DURATION = 15  # minutes
    MAX_DURATION = 180  # minutes

    def __init__(self, require_student: bool = True):
        self.require_student = require_student

    def validate(self, data: Dict[str, Any]) -> ValidationResult:
        """
        Validate lesson data.

        Args:
            data: Lesson data dictionary

        Returns:
            ValidationResult with errors and warnings
        """
        result = ValidationResult(is_valid=True)

        required_fields = ["date"]
        if self.require_student:
            required_fields.insert(0, "student_id")

        for error in self.validate_required_fields(data, required_fields):
            result.add_error(error)

        if not result.is_valid:
            return result

        if self.require_student:
            result.check(self.validate_id(data["student_id"], "student_id"))

        result.check(self.validate_date_format(data["date"], "date"))

        if data.get("duration_minutes") not in (None, ""):
            error = self.validate_positive_number(data["duration_minutes"], "duration_minutes")
            if error:
                result.add_error(error)
            else:
                duration = float(data["duration_minutes"])
                if duration < self.MIN_DURATION:
                    result.add_error(
                        f"Duration too short: {data['duration_minutes']} minutes "
                        f"(minimum: {self.MIN_DURATION})"
                    )
                elif duration > self.MAX_DURATION:
                    result.add_warning(
                        f"Duration unusually long: {data['duration_minutes']} minutes "
                        f"(maximum recommended: {self.MAX_DURATION})"
                    )

        if data.get("hourly_rate") not in (None, ""):
            result.check(self.validate_non_negative_number(data["hourly_rate"], "hourly_rate"))

        return result
