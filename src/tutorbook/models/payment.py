"""
Payment data model.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional

from .money import to_decimal, money_to_json


@dataclass
class Payment:
    """
    A payment received from a student.

    Attributes:
        id: Unique payment identifier
        student_id: Paying student
        amount: Amount received
        date: Payment date (YYYY-MM-DD format)
        notes: Free-text notes
        lesson_ids: Lessons settled by this payment
        created_at: Creation timestamp (ISO 8601)
    """

    id: int
    student_id: int
    amount: Decimal
    date: str
    notes: Optional[str] = None
    lesson_ids: List[int] = field(default_factory=list)
    created_at: Optional[str] = None

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'Payment':
        """Create a Payment from its stored dictionary form."""
        return cls(
            id=int(d["id"]),
            student_id=int(d["student_id"]),
            amount=to_decimal(d.get("amount"), 0),
            date=d["date"],
            notes=d.get("notes") or None,
            lesson_ids=[int(i) for i in (d.get("lesson_ids") or [])],
            created_at=d.get("created_at"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the stored dictionary form."""
        return {
            "id": self.id,
            "student_id": self.student_id,
            "amount": money_to_json(self.amount),
            "date": self.date,
            "notes": self.notes,
            "lesson_ids": list(self.lesson_ids),
            "created_at": self.created_at,
        }
