"""
Student roster service.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List

from ..models.lesson import Lesson
from ..models.money import to_decimal
from ..models.payment import Payment
from ..models.result import ErrorKind, Result
from ..models.student import Student
from ..storage.interfaces import StorageError
from ..validation.student_validator import StudentValidator
from .base import BaseService


logger = logging.getLogger(__name__)


@dataclass
class StudentSummary:
    """A student with lesson and balance counts, as the roster shows it."""

    student: Student
    lesson_count: int = 0
    unpaid_count: int = 0
    unpaid_amount: Decimal = Decimal("0")


@dataclass
class StudentDetail:
    """A student with lessons and payments, newest first."""

    student: Student
    lessons: List[Lesson] = field(default_factory=list)
    payments: List[Payment] = field(default_factory=list)


class StudentService(BaseService):
    """
    Service for the student roster.

    Examples:
        >>> service = StudentService(InMemoryStorage())
        >>> emma = service.create_student({"name": "Emma O'Brien", "hourly_rate": 35}).unwrap()
        >>> [s.student.name for s in service.list_students().unwrap()]
        ["Emma O'Brien"]
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.validator = StudentValidator()

    def list_students(self) -> Result[List[StudentSummary]]:
        """
        Get all students sorted by name, with lesson and unpaid totals.
        """
        try:
            state = self.storage.load_all()
        except StorageError as e:
            logger.error(f"Failed to load students: {e}")
            return Result.failure(str(e), e, ErrorKind.STORAGE)

        summaries = []
        for student in state.students:
            lessons = [l for l in state.lessons if l.student_id == student.id]
            unpaid = [l for l in lessons if not l.is_paid]
            summaries.append(StudentSummary(
                student=student,
                lesson_count=len(lessons),
                unpaid_count=len(unpaid),
                unpaid_amount=sum((l.amount for l in unpaid), Decimal("0")),
            ))

        summaries.sort(key=lambda s: s.student.name.casefold())
        return Result.success(summaries)

    def get_student(self, student_id: int) -> Result[StudentDetail]:
        """
        Get one student with their lessons and payments.

        Returns:
            Result containing StudentDetail, or NOT_FOUND
        """
        try:
            state = self.storage.load_all()
        except StorageError as e:
            logger.error(f"Failed to load student {student_id}: {e}")
            return Result.failure(str(e), e, ErrorKind.STORAGE)

        student = state.find_student(int(student_id))
        if student is None:
            return Result.not_found(f"Student not found: {student_id}")

        lessons = sorted(
            (l for l in state.lessons if l.student_id == student.id),
            key=lambda l: l.date,
            reverse=True
        )
        payments = sorted(
            (p for p in state.payments if p.student_id == student.id),
            key=lambda p: p.date,
            reverse=True
        )
        return Result.success(StudentDetail(student, lessons, payments))

    def create_student(self, data: Dict[str, Any]) -> Result[Student]:
        """
        Add a student to the roster.

        Args:
            data: Payload with name and optional email, phone, notes,
                hourly_rate

        Returns:
            Result containing the new student, or INVALID_INPUT
        """
        validation = self.validator.validate(data)
        if not validation.is_valid:
            return Result.invalid(validation.error_message())
        for warning in validation.warnings:
            logger.warning(f"Student warning: {warning}")

        try:
            state = self.storage.load_all()

            student = Student(
                id=state.allocate_id(),
                name=data["name"].strip(),
                email=data.get("email") or None,
                phone=data.get("phone") or None,
                notes=data.get("notes") or None,
                hourly_rate=to_decimal(data.get("hourly_rate"), self.default_hourly_rate),
                created_at=self._now_iso(),
            )
            state.students.append(student)
            self.storage.save_all(state)

            logger.info(f"Created student {student.id}")
            return Result.success(student, "Student created")

        except StorageError as e:
            logger.error(f"Failed to create student: {e}")
            return Result.failure(str(e), e, ErrorKind.STORAGE)

        except Exception as e:
            logger.error(f"Failed to create student: {e}", exc_info=True)
            return Result.failure(f"Failed to create student: {e}", e)

    def update_student(self, student_id: int, data: Dict[str, Any]) -> Result[Student]:
        """
        Replace a student's details.

        A new hourly rate applies to lessons logged from now on; existing
        lessons keep their rate.
        """
        validation = self.validator.validate(data)
        if not validation.is_valid:
            return Result.invalid(validation.error_message())

        try:
            state = self.storage.load_all()

            student = state.find_student(int(student_id))
            if student is None:
                return Result.not_found(f"Student not found: {student_id}")

            student.name = data["name"].strip()
            student.email = data.get("email") or None
            student.phone = data.get("phone") or None
            student.notes = data.get("notes") or None
            student.hourly_rate = to_decimal(data.get("hourly_rate"), self.default_hourly_rate)

            self.storage.save_all(state)

            logger.info(f"Updated student {student.id}")
            return Result.success(student, "Student updated")

        except StorageError as e:
            logger.error(f"Failed to update student {student_id}: {e}")
            return Result.failure(str(e), e, ErrorKind.STORAGE)

        except Exception as e:
            logger.error(f"Failed to update student {student_id}: {e}", exc_info=True)
            return Result.failure(f"Failed to update student {student_id}: {e}", e)

    def delete_student(self, student_id: int) -> Result[None]:
        """
        Delete a student together with their lessons, payments and schedules.
        """
        try:
            state = self.storage.load_all()

            student_id = int(student_id)
            if state.find_student(student_id) is None:
                return Result.not_found(f"Student not found: {student_id}")

            state.students = [s for s in state.students if s.id != student_id]
            state.lessons = [l for l in state.lessons if l.student_id != student_id]
            state.payments = [p for p in state.payments if p.student_id != student_id]
            state.schedules = [s for s in state.schedules if s.student_id != student_id]

            self.storage.save_all(state)

            logger.info(f"Deleted student {student_id} and their records")
            return Result.success(None, "Student deleted")

        except StorageError as e:
            logger.error(f"Failed to delete student {student_id}: {e}")
            return Result.failure(str(e), e, ErrorKind.STORAGE)

        except Exception as e:
            logger.error(f"Failed to delete student {student_id}: {e}", exc_info=True)
            return Result.failure(f"Failed to delete student {student_id}: {e}", e)
