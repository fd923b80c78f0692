"""
Schedule, exception and occurrence models.

A Schedule is either a recurring weekly booking or a one-off booking.
Recurring schedules carry per-date exceptions (skip or reschedule).
Occurrences are never stored; they are generated from schedules by
tutorbook.scheduling.occurrences.

Older stored records use a single ``day_of_week`` and may lack
``interval``; from_dict() normalizes them so the rest of the code only
ever sees ``days_of_week`` as a list and an integer interval.
"""

import datetime
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from ..scheduling.calendar_math import (
    DAY_NAMES,
    date_to_string,
    string_to_date,
)


# Named frequencies offered by the schedule form
FREQUENCY_INTERVALS = {
    "weekly": 1,
    "biweekly": 2,
    "monthly": 4,
}


class ExceptionAction(Enum):
    """What an exception does to the occurrence it overrides."""
    SKIP = "skip"
    RESCHEDULE = "reschedule"


def normalize_days(raw: Dict[str, Any]) -> List[str]:
    """
    Read weekday names from either the current or the legacy field.

    Unknown names are dropped and order of first appearance is kept.
    A record with neither field yields an empty list.

    Examples:
        >>> normalize_days({"day_of_week": "Tuesday"})
        ['tuesday']
        >>> normalize_days({"days_of_week": ["friday", "monday", "friday"]})
        ['friday', 'monday']
    """
    days = raw.get("days_of_week")
    if not days:
        single = raw.get("day_of_week")
        days = [single] if single else []
    elif isinstance(days, str):
        days = [days]

    normalized = []
    for day in days:
        name = str(day).strip().lower()
        if name in DAY_NAMES and name not in normalized:
            normalized.append(name)
    return normalized


def normalize_interval(raw: Dict[str, Any]) -> int:
    """
    Read the week interval from ``interval`` or legacy ``frequency``.

    ``frequency`` may be a number or one of the named frequencies.
    Missing values mean weekly. Values that cannot be read are kept as
    given (as int where possible) so validation can reject them.
    """
    value = raw.get("interval")
    if value in (None, ""):
        value = raw.get("frequency")
    if value in (None, ""):
        return 1
    if isinstance(value, str) and value.lower() in FREQUENCY_INTERVALS:
        return FREQUENCY_INTERVALS[value.lower()]
    return int(value)


def _optional_date(value: Any) -> Optional[datetime.date]:
    if value in (None, ""):
        return None
    if isinstance(value, datetime.date):
        return value
    return string_to_date(str(value))


@dataclass
class ScheduleException:
    """
    Override for one original occurrence date of a recurring schedule.

    Attributes:
        date: The original scheduled date being overridden
        action: SKIP or RESCHEDULE
        reschedule_to: New date (RESCHEDULE only)
        reschedule_time: New time of day (optional, RESCHEDULE only)
    """

    date: datetime.date
    action: ExceptionAction
    reschedule_to: Optional[datetime.date] = None
    reschedule_time: Optional[str] = None

    @property
    def is_skip(self) -> bool:
        return self.action == ExceptionAction.SKIP

    @property
    def is_reschedule(self) -> bool:
        return self.action == ExceptionAction.RESCHEDULE

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'ScheduleException':
        """Create an exception from its stored dictionary form."""
        return cls(
            date=_optional_date(d["date"]),
            action=ExceptionAction(str(d.get("action", "")).lower()),
            reschedule_to=_optional_date(d.get("reschedule_to")),
            reschedule_time=d.get("reschedule_time") or None,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the stored dictionary form."""
        return {
            "date": date_to_string(self.date),
            "action": self.action.value,
            "reschedule_to": date_to_string(self.reschedule_to) if self.reschedule_to else None,
            "reschedule_time": self.reschedule_time,
        }


@dataclass
class Schedule:
    """
    A recurring or one-off lesson booking.

    Attributes:
        id: Unique schedule identifier
        student_id: Student the booking is for
        is_recurring: True for weekly recurrence, False for a one-off
        time: Time of day (HH:MM)
        duration_minutes: Lesson duration in minutes
        notes: Free-text notes copied onto materialized lessons
        created_at: Creation timestamp; its week is the recurrence anchor
        date: Booking date (one-off only)
        days_of_week: Lowercase weekday names (recurring only)
        interval: Weeks between occurrences, 1 = every week (recurring only)
        end_date: Last date an occurrence may fall on (recurring only)
        exceptions: Per-date overrides (recurring only)

    Examples:
        >>> schedule = Schedule(
        ...     id=20,
        ...     student_id=2,
        ...     is_recurring=True,
        ...     time="18:00",
        ...     days_of_week=["wednesday"],
        ...     interval=2,
        ...     created_at="2024-01-01T09:00:00Z",
        ... )
    """

    id: int
    student_id: int
    is_recurring: bool
    time: str
    duration_minutes: int = 60
    notes: Optional[str] = None
    created_at: Optional[str] = None
    date: Optional[datetime.date] = None
    days_of_week: List[str] = field(default_factory=list)
    interval: int = 1
    end_date: Optional[datetime.date] = None
    exceptions: List[ScheduleException] = field(default_factory=list)

    def exception_for(self, original: datetime.date) -> Optional[ScheduleException]:
        """Return the exception keyed by an original date, if any."""
        for exc in self.exceptions:
            if exc.date == original:
                return exc
        return None

    def set_exception(self, exception: ScheduleException) -> None:
        """Add an exception, replacing any existing one for the same date."""
        self.exceptions = [e for e in self.exceptions if e.date != exception.date]
        self.exceptions.append(exception)

    def remove_exception(self, original: datetime.date) -> bool:
        """
        Remove the exception for an original date.

        Returns:
            True if an exception was removed
        """
        before = len(self.exceptions)
        self.exceptions = [e for e in self.exceptions if e.date != original]
        return len(self.exceptions) != before

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'Schedule':
        """
        Create a Schedule from its stored dictionary form.

        Legacy field shapes are normalized here.
        """
        is_recurring = bool(d.get("is_recurring", False))
        return cls(
            id=int(d["id"]),
            student_id=int(d["student_id"]),
            is_recurring=is_recurring,
            time=d.get("time") or "",
            duration_minutes=int(d.get("duration_minutes") or 60),
            notes=d.get("notes") or None,
            created_at=d.get("created_at"),
            date=None if is_recurring else _optional_date(d.get("date")),
            days_of_week=normalize_days(d) if is_recurring else [],
            interval=normalize_interval(d) if is_recurring else 1,
            end_date=_optional_date(d.get("end_date")) if is_recurring else None,
            exceptions=[
                ScheduleException.from_dict(e)
                for e in (d.get("exceptions") or [])
            ] if is_recurring else [],
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the stored dictionary form."""
        data = {
            "id": self.id,
            "student_id": self.student_id,
            "is_recurring": self.is_recurring,
            "time": self.time,
            "duration_minutes": self.duration_minutes,
            "notes": self.notes,
            "created_at": self.created_at,
        }
        if self.is_recurring:
            data.update({
                "date": None,
                "days_of_week": list(self.days_of_week),
                "interval": self.interval,
                "end_date": date_to_string(self.end_date) if self.end_date else None,
                "exceptions": [e.to_dict() for e in self.exceptions],
            })
        else:
            data["date"] = date_to_string(self.date) if self.date else None
        return data


@dataclass
class Occurrence:
    """
    One concrete dated instance of a schedule.

    Attributes:
        schedule_id: Schedule this occurrence was generated from
        student_id: Student the lesson is for
        date: Effective date (the new date when rescheduled)
        time: Effective time of day
        duration_minutes: Lesson duration
        notes: Schedule notes
        is_recurring_instance: True when generated from a recurring schedule
        is_rescheduled: True when produced by a reschedule exception
        original_date: Date the occurrence was moved from (rescheduled only)
        student_name: Display name, filled in by the upcoming aggregator
    """

    schedule_id: int
    student_id: int
    date: datetime.date
    time: str
    duration_minutes: int
    notes: Optional[str] = None
    is_recurring_instance: bool = False
    is_rescheduled: bool = False
    original_date: Optional[datetime.date] = None
    student_name: Optional[str] = None

    @property
    def sort_key(self):
        return (self.date, self.time)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a plain dictionary (dates as YYYY-MM-DD)."""
        return {
            "schedule_id": self.schedule_id,
            "student_id": self.student_id,
            "student_name": self.student_name,
            "date": date_to_string(self.date),
            "time": self.time,
            "duration_minutes": self.duration_minutes,
            "notes": self.notes,
            "is_recurring_instance": self.is_recurring_instance,
            "is_rescheduled": self.is_rescheduled,
            "original_date": date_to_string(self.original_date) if self.original_date else None,
        }
