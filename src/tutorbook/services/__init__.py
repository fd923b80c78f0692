"""
Application services.

Each service works on a StateStorage and returns Result objects.
"""

from .dashboard import DashboardService
from .lessons import LessonService
from .payments import PaymentService
from .schedules import ScheduleService
from .students import StudentService

__all__ = [
    "DashboardService",
    "LessonService",
    "PaymentService",
    "ScheduleService",
    "StudentService",
]
