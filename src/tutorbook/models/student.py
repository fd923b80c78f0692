"""
Student data model.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Optional

from .money import to_decimal, money_to_json


DEFAULT_HOURLY_RATE = Decimal("30")


@dataclass
class Student:
    """
    A student on the tutor's roster.

    Attributes:
        id: Unique student identifier
        name: Display name
        email: Contact email (optional)
        phone: Contact phone number (optional)
        notes: Free-text notes
        hourly_rate: Current hourly rate, snapshotted onto new lessons
        created_at: Creation timestamp (ISO 8601)

    Examples:
        >>> student = Student(
        ...     id=1,
        ...     name="Emma O'Brien",
        ...     email="emma.obrien@email.com",
        ...     hourly_rate=Decimal("35"),
        ...     created_at="2024-09-01T10:00:00Z"
        ... )
    """

    id: int
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    notes: Optional[str] = None
    hourly_rate: Decimal = DEFAULT_HOURLY_RATE
    created_at: Optional[str] = None

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'Student':
        """Create a Student from its stored dictionary form."""
        return cls(
            id=int(d["id"]),
            name=d.get("name") or "",
            email=d.get("email") or None,
            phone=d.get("phone") or None,
            notes=d.get("notes") or None,
            hourly_rate=to_decimal(d.get("hourly_rate"), DEFAULT_HOURLY_RATE),
            created_at=d.get("created_at"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the stored dictionary form."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "notes": self.notes,
            "hourly_rate": money_to_json(self.hourly_rate),
            "created_at": self.created_at,
        }
