"""
Tutorbook: lesson scheduling and billing for a single tutor.

Usage:
    >>> from tutorbook.storage import JsonFileStorage
    >>> from tutorbook.services import ScheduleService
    >>>
    >>> schedules = ScheduleService(JsonFileStorage("data/tutoring-data.json"))
    >>> for occurrence in schedules.upcoming(days=14).unwrap():
    ...     print(occurrence.date, occurrence.student_name)
"""

__version__ = "0.1.0"
