"""
Schedule service.

Creates and edits schedules, manages their skip/reschedule exceptions,
serves the occurrence feeds and turns an occurrence into a logged
lesson.
"""

import logging
from datetime import date
from typing import Any, Dict, List, Optional

from ..models.lesson import Lesson
from ..models.result import ErrorKind, Result
from ..models.schedule import (
    ExceptionAction,
    Occurrence,
    Schedule,
    ScheduleException,
    normalize_days,
    normalize_interval,
)
from ..scheduling.calendar_math import DateLike, as_date, string_to_date
from ..scheduling.occurrences import is_valid_occurrence_date
from ..scheduling.upcoming import occurrences_between, upcoming_occurrences
from ..storage.interfaces import StorageError
from ..validation.schedule_validator import ScheduleExceptionValidator, ScheduleValidator
from .base import BaseService


logger = logging.getLogger(__name__)


def _to_date(value: DateLike) -> Optional[date]:
    try:
        return as_date(value)
    except (TypeError, ValueError):
        return None


class ScheduleService(BaseService):
    """
    Service for schedules, exceptions and lesson materialization.

    Examples:
        >>> service = ScheduleService(JsonFileStorage("data/tutoring-data.json"))
        >>> result = service.create_schedule({
        ...     "student_id": 2,
        ...     "is_recurring": True,
        ...     "days_of_week": ["wednesday"],
        ...     "interval": 2,
        ...     "time": "18:00",
        ... })
        >>> upcoming = service.upcoming(days=14).unwrap()
    """

    def __init__(self, *args, upcoming_days: int = 14, **kwargs):
        super().__init__(*args, **kwargs)
        self.upcoming_days = upcoming_days
        self.schedule_validator = ScheduleValidator()
        self.exception_validator = ScheduleExceptionValidator()

    def _apply_fields(self, schedule: Schedule, data: Dict[str, Any]) -> None:
        schedule.student_id = int(data["student_id"])
        schedule.is_recurring = bool(data.get("is_recurring"))
        schedule.time = data["time"]
        schedule.duration_minutes = int(data.get("duration_minutes") or self.default_duration)
        schedule.notes = data.get("notes") or None

        if schedule.is_recurring:
            schedule.date = None
            schedule.days_of_week = normalize_days(data)
            schedule.interval = normalize_interval(data)
            schedule.end_date = string_to_date(data["end_date"]) if data.get("end_date") else None
        else:
            schedule.date = string_to_date(data["date"])
            schedule.days_of_week = []
            schedule.interval = 1
            schedule.end_date = None
            schedule.exceptions = []

    def list_schedules(self) -> Result[List[Schedule]]:
        """
        Get all schedules in storage order.

        Returns:
            Result containing the schedules
        """
        try:
            state = self.storage.load_all()
            return Result.success(state.schedules)
        except StorageError as e:
            logger.error(f"Failed to load schedules: {e}")
            return Result.failure(str(e), e, ErrorKind.STORAGE)

    def get_schedule(self, schedule_id: int) -> Result[Schedule]:
        """
        Get one schedule.

        Returns:
            Result containing the schedule, or NOT_FOUND
        """
        try:
            schedule = self.storage.load_all().find_schedule(int(schedule_id))
            if schedule is None:
                return Result.not_found(f"Schedule not found: {schedule_id}")
            return Result.success(schedule)
        except StorageError as e:
            logger.error(f"Failed to load schedule {schedule_id}: {e}")
            return Result.failure(str(e), e, ErrorKind.STORAGE)

    def create_schedule(self, data: Dict[str, Any]) -> Result[Schedule]:
        """
        Create a recurring or one-off schedule.

        The creation timestamp becomes the recurrence anchor, so the
        first occurrence may fall earlier in the same week.

        Args:
            data: Payload with student_id, is_recurring, time and either
                days_of_week/interval/end_date or date

        Returns:
            Result containing the new schedule; INVALID_INPUT or NOT_FOUND
            (unknown student) on failure
        """
        validation = self.schedule_validator.validate(data)
        if not validation.is_valid:
            logger.warning(f"Rejected schedule: {validation.error_message()}")
            return Result.invalid(validation.error_message())
        for warning in validation.warnings:
            logger.warning(f"Schedule warning: {warning}")

        try:
            state = self.storage.load_all()

            if state.find_student(int(data["student_id"])) is None:
                return Result.not_found(f"Student not found: {data['student_id']}")

            schedule = Schedule(
                id=state.allocate_id(),
                student_id=int(data["student_id"]),
                is_recurring=bool(data.get("is_recurring")),
                time=data["time"],
                created_at=self._now_iso(),
            )
            self._apply_fields(schedule, data)

            state.schedules.append(schedule)
            self.storage.save_all(state)

            logger.info(
                f"Created {'recurring' if schedule.is_recurring else 'one-off'} "
                f"schedule {schedule.id} for student {schedule.student_id}"
            )
            return Result.success(schedule, "Schedule created")

        except StorageError as e:
            logger.error(f"Failed to create schedule: {e}")
            return Result.failure(str(e), e, ErrorKind.STORAGE)

        except Exception as e:
            logger.error(f"Failed to create schedule: {e}", exc_info=True)
            return Result.failure(f"Failed to create schedule: {e}", e)

    def update_schedule(self, schedule_id: int, data: Dict[str, Any]) -> Result[Schedule]:
        """
        Replace a schedule's definition.

        The creation timestamp (anchor) is kept. Exceptions are kept while
        the schedule stays recurring and dropped when it becomes one-off.

        Returns:
            Result containing the updated schedule
        """
        validation = self.schedule_validator.validate(data)
        if not validation.is_valid:
            return Result.invalid(validation.error_message())

        try:
            state = self.storage.load_all()

            schedule = state.find_schedule(int(schedule_id))
            if schedule is None:
                return Result.not_found(f"Schedule not found: {schedule_id}")
            if state.find_student(int(data["student_id"])) is None:
                return Result.not_found(f"Student not found: {data['student_id']}")

            self._apply_fields(schedule, data)
            self.storage.save_all(state)

            logger.info(f"Updated schedule {schedule.id}")
            return Result.success(schedule, "Schedule updated")

        except StorageError as e:
            logger.error(f"Failed to update schedule {schedule_id}: {e}")
            return Result.failure(str(e), e, ErrorKind.STORAGE)

        except Exception as e:
            logger.error(f"Failed to update schedule {schedule_id}: {e}", exc_info=True)
            return Result.failure(f"Failed to update schedule {schedule_id}: {e}", e)

    def delete_schedule(self, schedule_id: int) -> Result[None]:
        """
        Delete a schedule and with it all its future occurrences.

        Lessons already logged from it are kept.
        """
        try:
            state = self.storage.load_all()

            if state.find_schedule(int(schedule_id)) is None:
                return Result.not_found(f"Schedule not found: {schedule_id}")

            state.schedules = [s for s in state.schedules if s.id != int(schedule_id)]
            self.storage.save_all(state)

            logger.info(f"Deleted schedule {schedule_id}")
            return Result.success(None, "Schedule deleted")

        except StorageError as e:
            logger.error(f"Failed to delete schedule {schedule_id}: {e}")
            return Result.failure(str(e), e, ErrorKind.STORAGE)

        except Exception as e:
            logger.error(f"Failed to delete schedule {schedule_id}: {e}", exc_info=True)
            return Result.failure(f"Failed to delete schedule {schedule_id}: {e}", e)

    def upcoming(
        self,
        today: Optional[DateLike] = None,
        days: Optional[int] = None
    ) -> Result[List[Occurrence]]:
        """
        Occurrences from today through today + days, sorted by date and time.

        Args:
            today: Calendar today (defaults to the service clock)
            days: Window length (defaults to the configured list window)

        Returns:
            Result containing occurrences annotated with student names
        """
        today = self._today() if today is None else _to_date(today)
        if today is None:
            return Result.invalid("Invalid today date")

        days = self.upcoming_days if days is None else days
        if days < 0:
            return Result.invalid(f"days must be >= 0, got {days}")

        try:
            state = self.storage.load_all()
            return Result.success(
                upcoming_occurrences(state.schedules, state.students, today, days)
            )
        except StorageError as e:
            logger.error(f"Failed to load schedules: {e}")
            return Result.failure(str(e), e, ErrorKind.STORAGE)

    def occurrences_between(
        self,
        window_start: DateLike,
        window_end: DateLike
    ) -> Result[List[Occurrence]]:
        """
        Occurrences for an exact window, as a calendar view shows it.

        Returns:
            Result containing occurrences annotated with student names
        """
        start, end = _to_date(window_start), _to_date(window_end)
        if start is None or end is None:
            return Result.invalid(f"Invalid window: {window_start} .. {window_end}")
        if start > end:
            return Result.invalid(f"Window start {start} is after window end {end}")

        try:
            state = self.storage.load_all()
            return Result.success(
                occurrences_between(state.schedules, state.students, start, end)
            )
        except StorageError as e:
            logger.error(f"Failed to load schedules: {e}")
            return Result.failure(str(e), e, ErrorKind.STORAGE)

    def complete_occurrence(
        self,
        schedule_id: int,
        lesson_date: DateLike,
        notes: Optional[str] = None
    ) -> Result[Lesson]:
        """
        Log an occurrence as a taught lesson.

        The lesson takes the schedule's duration, the student's hourly
        rate as it is now, and the given notes (or the schedule's notes).
        A one-off schedule is removed afterwards; a recurring one carries
        on unchanged.

        Args:
            schedule_id: Schedule the occurrence came from
            lesson_date: Date the lesson actually took place
            notes: Notes for the lesson (optional)

        Returns:
            Result containing the new unpaid lesson, or NOT_FOUND
        """
        day = _to_date(lesson_date)
        if day is None:
            return Result.invalid(f"Invalid lesson date: {lesson_date} (expected YYYY-MM-DD)")

        try:
            state = self.storage.load_all()

            schedule = state.find_schedule(int(schedule_id))
            if schedule is None:
                return Result.not_found(f"Schedule not found: {schedule_id}")

            student = state.find_student(schedule.student_id)
            if student is None:
                logger.warning(
                    f"Schedule {schedule.id} references missing student "
                    f"{schedule.student_id}, using default rate"
                )
            rate = student.hourly_rate if student else self.default_hourly_rate

            lesson = Lesson(
                id=state.allocate_id(),
                student_id=schedule.student_id,
                date=day.isoformat(),
                duration_minutes=schedule.duration_minutes,
                hourly_rate=rate,
                notes=notes or schedule.notes,
                is_paid=False,
                created_at=self._now_iso(),
            )
            state.lessons.append(lesson)

            if not schedule.is_recurring:
                state.schedules = [s for s in state.schedules if s.id != schedule.id]
                logger.info(f"One-off schedule {schedule.id} consumed")

            self.storage.save_all(state)

            logger.info(
                f"Logged lesson {lesson.id} on {lesson.date} from schedule {schedule.id}"
            )
            return Result.success(lesson, "Lesson logged")

        except StorageError as e:
            logger.error(f"Failed to complete schedule {schedule_id}: {e}")
            return Result.failure(str(e), e, ErrorKind.STORAGE)

        except Exception as e:
            logger.error(f"Failed to complete schedule {schedule_id}: {e}", exc_info=True)
            return Result.failure(f"Failed to complete schedule {schedule_id}: {e}", e)

    def add_exception(self, schedule_id: int, data: Dict[str, Any]) -> Result[ScheduleException]:
        """
        Skip or reschedule one occurrence of a recurring schedule.

        An existing exception for the same original date is replaced.

        Args:
            schedule_id: Recurring schedule to modify
            data: Payload with date, action and, for reschedule,
                reschedule_to and optional reschedule_time

        Returns:
            Result containing the stored exception; NOT_FOUND for an
            unknown schedule, INVALID_INPUT for a one-off schedule or a
            malformed payload
        """
        validation = self.exception_validator.validate(data)
        if not validation.is_valid:
            logger.warning(f"Rejected exception: {validation.error_message()}")
            return Result.invalid(validation.error_message())

        try:
            state = self.storage.load_all()

            schedule = state.find_schedule(int(schedule_id))
            if schedule is None:
                return Result.not_found(f"Schedule not found: {schedule_id}")
            if not schedule.is_recurring:
                return Result.invalid(
                    f"Schedule {schedule_id} is not recurring; edit or delete it instead"
                )

            action = ExceptionAction(str(data["action"]).lower())
            exception = ScheduleException(
                date=string_to_date(data["date"]),
                action=action,
                reschedule_to=(
                    string_to_date(data["reschedule_to"])
                    if action == ExceptionAction.RESCHEDULE else None
                ),
                reschedule_time=(
                    data.get("reschedule_time") or None
                    if action == ExceptionAction.RESCHEDULE else None
                ),
            )

            if not is_valid_occurrence_date(schedule, exception.date):
                logger.warning(
                    f"Schedule {schedule.id} has no occurrence on {exception.date}; "
                    f"the exception will have no effect"
                )

            schedule.set_exception(exception)
            self.storage.save_all(state)

            logger.info(
                f"Schedule {schedule.id}: {action.value} on {exception.date}"
                + (f" -> {exception.reschedule_to}" if exception.reschedule_to else "")
            )
            return Result.success(exception, "Exception saved")

        except StorageError as e:
            logger.error(f"Failed to add exception to schedule {schedule_id}: {e}")
            return Result.failure(str(e), e, ErrorKind.STORAGE)

        except Exception as e:
            logger.error(f"Failed to add exception to schedule {schedule_id}: {e}", exc_info=True)
            return Result.failure(f"Failed to add exception to schedule {schedule_id}: {e}", e)

    def remove_exception(self, schedule_id: int, original_date: DateLike) -> Result[bool]:
        """
        Remove the exception for an original date.

        Removing an exception that does not exist is not an error.

        Returns:
            Result containing True if an exception was removed
        """
        day = _to_date(original_date)
        if day is None:
            return Result.invalid(f"Invalid date: {original_date} (expected YYYY-MM-DD)")

        try:
            state = self.storage.load_all()

            schedule = state.find_schedule(int(schedule_id))
            if schedule is None:
                return Result.not_found(f"Schedule not found: {schedule_id}")

            removed = schedule.remove_exception(day)
            if not removed:
                return Result.success(False, f"No exception on {day}")

            self.storage.save_all(state)
            logger.info(f"Schedule {schedule.id}: removed exception on {day}")
            return Result.success(True, "Exception removed")

        except StorageError as e:
            logger.error(f"Failed to remove exception from schedule {schedule_id}: {e}")
            return Result.failure(str(e), e, ErrorKind.STORAGE)

        except Exception as e:
            logger.error(f"Failed to remove exception from schedule {schedule_id}: {e}", exc_info=True)
            return Result.failure(f"Failed to remove exception from schedule {schedule_id}: {e}", e)
