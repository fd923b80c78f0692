"""
Input validation for service payloads.
"""

from .validators import ValidationResult, Validator
from .lesson_validator import LessonValidator
from .payment_validator import PaymentValidator
from .schedule_validator import ScheduleExceptionValidator, ScheduleValidator
from .student_validator import StudentValidator

__all__ = [
    "ValidationResult",
    "Validator",
    "LessonValidator",
    "PaymentValidator",
    "ScheduleExceptionValidator",
    "ScheduleValidator",
    "StudentValidator",
]
