"""
Lesson logging service.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from ..models.lesson import Lesson
from ..models.money import to_decimal
from ..models.result import ErrorKind, Result
from ..models.state import TutoringState
from ..storage.interfaces import StorageError
from ..validation.lesson_validator import LessonValidator
from .base import BaseService


logger = logging.getLogger(__name__)

EDITABLE_FIELDS = {"date", "duration_minutes", "hourly_rate", "notes", "is_paid"}


@dataclass
class LessonEntry:
    """A lesson with its student's display name."""

    lesson: Lesson
    student_name: str


def lesson_entries(state: TutoringState, lessons: Iterable[Lesson]) -> List[LessonEntry]:
    """Annotate lessons with student names, newest first."""
    entries = [LessonEntry(l, state.student_name(l.student_id)) for l in lessons]
    entries.sort(key=lambda e: e.lesson.date, reverse=True)
    return entries


class LessonService(BaseService):
    """
    Service for logged lessons and their paid status.

    Examples:
        >>> service = LessonService(InMemoryStorage())
        >>> lesson = service.create_lesson({"student_id": 1, "date": "2024-10-15"}).unwrap()
        >>> service.mark_paid(lesson.id).is_success
        True
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.validator = LessonValidator()
        self.update_validator = LessonValidator(require_student=False)

    def list_lessons(
        self,
        student_id: Optional[int] = None,
        unpaid_only: bool = False
    ) -> Result[List[LessonEntry]]:
        """
        Get lessons newest first.

        Args:
            student_id: Only this student's lessons (optional)
            unpaid_only: Only lessons not yet paid

        Returns:
            Result containing LessonEntry items
        """
        try:
            state = self.storage.load_all()
        except StorageError as e:
            logger.error(f"Failed to load lessons: {e}")
            return Result.failure(str(e), e, ErrorKind.STORAGE)

        lessons = state.lessons
        if student_id is not None:
            lessons = [l for l in lessons if l.student_id == int(student_id)]
        if unpaid_only:
            lessons = [l for l in lessons if not l.is_paid]

        return Result.success(lesson_entries(state, lessons))

    def create_lesson(self, data: Dict[str, Any]) -> Result[Lesson]:
        """
        Log a lesson directly (not from a schedule).

        The hourly rate defaults to the student's current rate.

        Returns:
            Result containing the new lesson; NOT_FOUND for an unknown
            student, INVALID_INPUT for a bad payload
        """
        validation = self.validator.validate(data)
        if not validation.is_valid:
            return Result.invalid(validation.error_message())
        for warning in validation.warnings:
            logger.warning(f"Lesson warning: {warning}")

        try:
            state = self.storage.load_all()

            student = state.find_student(int(data["student_id"]))
            if student is None:
                return Result.not_found(f"Student not found: {data['student_id']}")

            lesson = Lesson(
                id=state.allocate_id(),
                student_id=student.id,
                date=data["date"],
                duration_minutes=int(data.get("duration_minutes") or self.default_duration),
                hourly_rate=to_decimal(data.get("hourly_rate"), student.hourly_rate),
                notes=data.get("notes") or None,
                is_paid=False,
                created_at=self._now_iso(),
            )
            state.lessons.append(lesson)
            self.storage.save_all(state)

            logger.info(f"Logged lesson {lesson.id} for student {student.id} on {lesson.date}")
            return Result.success(lesson, "Lesson logged")

        except StorageError as e:
            logger.error(f"Failed to create lesson: {e}")
            return Result.failure(str(e), e, ErrorKind.STORAGE)

        except Exception as e:
            logger.error(f"Failed to create lesson: {e}", exc_info=True)
            return Result.failure(f"Failed to create lesson: {e}", e)

    def update_lesson(self, lesson_id: int, data: Dict[str, Any]) -> Result[Lesson]:
        """
        Edit a lesson's date, duration, rate, notes or paid flag.

        Only keys present in data are changed.
        """
        try:
            state = self.storage.load_all()

            lesson = state.find_lesson(int(lesson_id))
            if lesson is None:
                return Result.not_found(f"Lesson not found: {lesson_id}")

            merged = lesson.to_dict()
            merged.update({k: v for k, v in data.items() if k in EDITABLE_FIELDS})

            validation = self.update_validator.validate(merged)
            if not validation.is_valid:
                return Result.invalid(validation.error_message())

            lesson.date = merged["date"]
            lesson.duration_minutes = int(merged["duration_minutes"])
            lesson.hourly_rate = to_decimal(merged["hourly_rate"], 0)
            lesson.notes = merged.get("notes") or None
            lesson.is_paid = bool(merged.get("is_paid"))

            self.storage.save_all(state)

            logger.info(f"Updated lesson {lesson.id}")
            return Result.success(lesson, "Lesson updated")

        except StorageError as e:
            logger.error(f"Failed to update lesson {lesson_id}: {e}")
            return Result.failure(str(e), e, ErrorKind.STORAGE)

        except Exception as e:
            logger.error(f"Failed to update lesson {lesson_id}: {e}", exc_info=True)
            return Result.failure(f"Failed to update lesson {lesson_id}: {e}", e)

    def delete_lesson(self, lesson_id: int) -> Result[None]:
        """Delete a lesson."""
        try:
            state = self.storage.load_all()

            if state.find_lesson(int(lesson_id)) is None:
                return Result.not_found(f"Lesson not found: {lesson_id}")

            state.lessons = [l for l in state.lessons if l.id != int(lesson_id)]
            self.storage.save_all(state)

            logger.info(f"Deleted lesson {lesson_id}")
            return Result.success(None, "Lesson deleted")

        except StorageError as e:
            logger.error(f"Failed to delete lesson {lesson_id}: {e}")
            return Result.failure(str(e), e, ErrorKind.STORAGE)

        except Exception as e:
            logger.error(f"Failed to delete lesson {lesson_id}: {e}", exc_info=True)
            return Result.failure(f"Failed to delete lesson {lesson_id}: {e}", e)

    def mark_paid(self, lesson_id: int, is_paid: bool = True) -> Result[Lesson]:
        """Set a lesson's paid flag."""
        try:
            state = self.storage.load_all()

            lesson = state.find_lesson(int(lesson_id))
            if lesson is None:
                return Result.not_found(f"Lesson not found: {lesson_id}")

            lesson.is_paid = bool(is_paid)
            self.storage.save_all(state)

            logger.info(f"Lesson {lesson.id} marked {'paid' if lesson.is_paid else 'unpaid'}")
            return Result.success(lesson)

        except StorageError as e:
            logger.error(f"Failed to mark lesson {lesson_id}: {e}")
            return Result.failure(str(e), e, ErrorKind.STORAGE)

        except Exception as e:
            logger.error(f"Failed to mark lesson {lesson_id}: {e}", exc_info=True)
            return Result.failure(f"Failed to mark lesson {lesson_id}: {e}", e)

    def mark_multiple_paid(self, lesson_ids: Iterable[int]) -> Result[int]:
        """
        Mark several lessons paid in one save.

        Unknown ids are ignored.

        Returns:
            Result containing the number of lessons found and marked
        """
        try:
            state = self.storage.load_all()

            wanted = {int(i) for i in lesson_ids}
            updated = 0
            for lesson in state.lessons:
                if lesson.id in wanted:
                    lesson.is_paid = True
                    updated += 1

            missing = len(wanted) - updated
            if missing:
                logger.warning(f"{missing} lesson id(s) not found while marking paid")

            self.storage.save_all(state)
            return Result.success(updated, f"Marked {updated} lesson(s) paid")

        except StorageError as e:
            logger.error(f"Failed to mark lessons paid: {e}")
            return Result.failure(str(e), e, ErrorKind.STORAGE)

        except Exception as e:
            logger.error(f"Failed to mark lessons paid: {e}", exc_info=True)
            return Result.failure(f"Failed to mark lessons paid: {e}", e)
