"""
Payment data validator.
"""

from typing import Dict, Any

from .validators import Validator, ValidationResult


class PaymentValidator(Validator):
    """
    Validator for recorded payments.

    Validates:
    - Required fields
    - Date format
    - Positive amount
    - Lesson id list shape
    """

    def validate(self, data: Dict[str, Any]) -> ValidationResult:
        result = ValidationResult(is_valid=True)

        for error in self.validate_required_fields(data, ["student_id", "amount", "date"]):
            result.add_error(error)

        if not result.is_valid:
            return result

        result.check(self.validate_id(data["student_id"], "student_id"))
        result.check(self.validate_positive_number(data["amount"], "amount"))
        result.check(self.validate_date_format(data["date"], "date"))

        lesson_ids = data.get("lesson_ids") or []
        if not isinstance(lesson_ids, (list, tuple)):
            result.add_error(f"lesson_ids must be a list, got {type(lesson_ids).__name__}")
        else:
            for lesson_id in lesson_ids:
                result.check(self.validate_id(lesson_id, "lesson_ids"))

        return result
