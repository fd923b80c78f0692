"""
Student data validator.
"""

from typing import Dict, Any

from .validators import Validator, ValidationResult


class StudentValidator(Validator):
    """
    Validator for student create/update payloads.

    Examples:
        >>> validator = StudentValidator()
        >>> result = validator.validate({"name": "Emma O'Brien", "hourly_rate": 35})
        >>> result.is_valid
        True
    """

    MAX_NAME_LENGTH = 200
    TYPICAL_MAX_RATE = 200

    def validate(self, data: Dict[str, Any]) -> ValidationResult:
        result = ValidationResult(is_valid=True)

        for error in self.validate_required_fields(data, ["name"]):
            result.add_error(error)

        if not result.is_valid:
            return result

        result.check(self.validate_string_length(
            data["name"].strip() if isinstance(data["name"], str) else data["name"],
            "name",
            min_length=1,
            max_length=self.MAX_NAME_LENGTH
        ))

        if data.get("email"):
            result.check(self.validate_email_format(data["email"]))

        if data.get("hourly_rate") not in (None, ""):
            error = self.validate_non_negative_number(data["hourly_rate"], "hourly_rate")
            if error:
                result.add_error(error)
            elif float(data["hourly_rate"]) > self.TYPICAL_MAX_RATE:
                result.add_warning(
                    f"Hourly rate unusually high: {data['hourly_rate']}"
                )

        return result
