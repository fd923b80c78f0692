"""
Whole-store state.

The application keeps all records in one blob that is loaded and saved
in full on every operation. TutoringState is the typed in-memory form
of that blob.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .lesson import Lesson
from .payment import Payment
from .schedule import Schedule
from .student import Student


@dataclass
class TutoringState:
    """
    All persisted records.

    Attributes:
        students: Student roster in storage order
        lessons: Logged lessons in storage order
        payments: Recorded payments in storage order
        schedules: Recurring and one-off bookings in storage order
        next_id: Next integer id to hand out (shared by all record types)
    """

    students: List[Student] = field(default_factory=list)
    lessons: List[Lesson] = field(default_factory=list)
    payments: List[Payment] = field(default_factory=list)
    schedules: List[Schedule] = field(default_factory=list)
    next_id: int = 1

    def allocate_id(self) -> int:
        """Hand out the next record id."""
        new_id = self.next_id
        self.next_id += 1
        return new_id

    def find_student(self, student_id: int) -> Optional[Student]:
        return next((s for s in self.students if s.id == student_id), None)

    def find_lesson(self, lesson_id: int) -> Optional[Lesson]:
        return next((l for l in self.lessons if l.id == lesson_id), None)

    def find_payment(self, payment_id: int) -> Optional[Payment]:
        return next((p for p in self.payments if p.id == payment_id), None)

    def find_schedule(self, schedule_id: int) -> Optional[Schedule]:
        return next((s for s in self.schedules if s.id == schedule_id), None)

    def student_name(self, student_id: int, default: str = "Unknown") -> str:
        student = self.find_student(student_id)
        return student.name if student else default

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'TutoringState':
        """
        Create state from the stored blob.

        Missing collections are treated as empty. A missing or stale
        ``nextId`` is raised above the highest id in use.
        """
        state = cls(
            students=[Student.from_dict(s) for s in d.get("students") or []],
            lessons=[Lesson.from_dict(l) for l in d.get("lessons") or []],
            payments=[Payment.from_dict(p) for p in d.get("payments") or []],
            schedules=[Schedule.from_dict(s) for s in d.get("schedules") or []],
            next_id=int(d.get("nextId") or d.get("next_id") or 1),
        )

        used = [r.id for r in state.students + state.lessons + state.payments + state.schedules]
        if used and state.next_id <= max(used):
            state.next_id = max(used) + 1

        return state

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the stored blob."""
        return {
            "students": [s.to_dict() for s in self.students],
            "lessons": [l.to_dict() for l in self.lessons],
            "payments": [p.to_dict() for p in self.payments],
            "schedules": [s.to_dict() for s in self.schedules],
            "nextId": self.next_id,
        }
