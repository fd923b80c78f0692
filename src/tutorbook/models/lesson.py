"""
Lesson data model.

A Lesson is the historical record of a taught lesson. The hourly rate
is a snapshot taken when the lesson was logged, so later changes to
the student's rate never rewrite past billing.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Optional

from .money import to_decimal, money_to_json, lesson_amount
from .student import DEFAULT_HOURLY_RATE


DEFAULT_DURATION_MINUTES = 60


@dataclass
class Lesson:
    """
    A logged lesson.

    Attributes:
        id: Unique lesson identifier
        student_id: Student the lesson was taught to
        date: Lesson date (YYYY-MM-DD format)
        duration_minutes: Lesson duration in minutes
        hourly_rate: Rate snapshot at the time the lesson was logged
        notes: Free-text notes
        is_paid: Whether the lesson has been paid for
        created_at: Creation timestamp (ISO 8601)

    Examples:
        >>> lesson = Lesson(
        ...     id=7,
        ...     student_id=1,
        ...     date="2024-10-15",
        ...     duration_minutes=90,
        ...     hourly_rate=Decimal("35"),
        ... )
        >>> lesson.amount
        Decimal('52.50')
    """

    id: int
    student_id: int
    date: str
    duration_minutes: int = DEFAULT_DURATION_MINUTES
    hourly_rate: Decimal = DEFAULT_HOURLY_RATE
    notes: Optional[str] = None
    is_paid: bool = False
    created_at: Optional[str] = None

    @property
    def amount(self) -> Decimal:
        """Amount owed: rate * duration / 60."""
        return lesson_amount(self.hourly_rate, self.duration_minutes)

    @property
    def month(self) -> str:
        """Billing month (YYYY-MM)."""
        return self.date[:7]

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'Lesson':
        """Create a Lesson from its stored dictionary form."""
        return cls(
            id=int(d["id"]),
            student_id=int(d["student_id"]),
            date=d["date"],
            duration_minutes=int(d.get("duration_minutes") or DEFAULT_DURATION_MINUTES),
            hourly_rate=to_decimal(d.get("hourly_rate"), 0),
            notes=d.get("notes") or None,
            is_paid=bool(d.get("is_paid", False)),
            created_at=d.get("created_at"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the stored dictionary form."""
        return {
            "id": self.id,
            "student_id": self.student_id,
            "date": self.date,
            "duration_minutes": self.duration_minutes,
            "hourly_rate": money_to_json(self.hourly_rate),
            "notes": self.notes,
            "is_paid": self.is_paid,
            "created_at": self.created_at,
        }
