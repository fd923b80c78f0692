"""
Data models for students, lessons, payments and schedules.
"""

from .lesson import DEFAULT_DURATION_MINUTES, Lesson
from .payment import Payment
from .result import ErrorKind, Result, ResultStatus
from .schedule import ExceptionAction, Occurrence, Schedule, ScheduleException
from .state import TutoringState
from .student import DEFAULT_HOURLY_RATE, Student

__all__ = [
    "DEFAULT_DURATION_MINUTES",
    "DEFAULT_HOURLY_RATE",
    "ErrorKind",
    "ExceptionAction",
    "Lesson",
    "Occurrence",
    "Payment",
    "Result",
    "ResultStatus",
    "Schedule",
    "ScheduleException",
    "Student",
    "TutoringState",
]
