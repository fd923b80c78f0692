"""
Dashboard figures and CSV exports.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd

from ..models.result import ErrorKind, Result
from ..models.schedule import Occurrence
from ..scheduling.calendar_math import DateLike, as_date
from ..scheduling.upcoming import upcoming_occurrences
from ..storage.interfaces import StorageError
from ..utils.file_utils import save_csv
from .base import BaseService
from .lessons import LessonEntry, lesson_entries


logger = logging.getLogger(__name__)

ZERO = Decimal("0")


@dataclass
class DashboardStats:
    """Headline figures for the dashboard."""

    total_students: int
    total_lessons: int
    unpaid_lessons: int
    unpaid_amount: Decimal
    monthly_earnings: Decimal
    monthly_lessons: int


@dataclass
class UnpaidBalance:
    """Outstanding balance of one student."""

    student_id: int
    name: str
    unpaid_count: int = 0
    unpaid_amount: Decimal = ZERO


@dataclass
class MonthlySummary:
    """Lesson totals for one month (YYYY-MM)."""

    month: str
    lesson_count: int = 0
    paid_amount: Decimal = ZERO
    unpaid_amount: Decimal = ZERO
    total_amount: Decimal = ZERO


class DashboardService(BaseService):
    """
    Read-only figures across students, lessons and schedules.

    Examples:
        >>> service = DashboardService(storage, preview_days=7, preview_count=5)
        >>> stats = service.get_stats().unwrap()
        >>> print(stats.unpaid_amount)
    """

    def __init__(self, *args, preview_days: int = 7, preview_count: int = 5, **kwargs):
        super().__init__(*args, **kwargs)
        self.preview_days = preview_days
        self.preview_count = preview_count

    def get_stats(self, today: Optional[DateLike] = None) -> Result[DashboardStats]:
        """
        Totals plus this month's lesson count and paid earnings.

        Args:
            today: Calendar today, selects the current month
        """
        today = self._today() if today is None else as_date(today)
        month = today.strftime("%Y-%m")

        try:
            state = self.storage.load_all()
        except StorageError as e:
            logger.error(f"Failed to load dashboard data: {e}")
            return Result.failure(str(e), e, ErrorKind.STORAGE)

        unpaid = [l for l in state.lessons if not l.is_paid]
        month_lessons = [l for l in state.lessons if l.month == month]

        return Result.success(DashboardStats(
            total_students=len(state.students),
            total_lessons=len(state.lessons),
            unpaid_lessons=len(unpaid),
            unpaid_amount=sum((l.amount for l in unpaid), ZERO),
            monthly_earnings=sum((l.amount for l in month_lessons if l.is_paid), ZERO),
            monthly_lessons=len(month_lessons),
        ))

    def recent_lessons(self, limit: Optional[int] = 10) -> Result[List[LessonEntry]]:
        """The most recent lessons, newest first."""
        try:
            state = self.storage.load_all()
        except StorageError as e:
            logger.error(f"Failed to load lessons: {e}")
            return Result.failure(str(e), e, ErrorKind.STORAGE)

        return Result.success(lesson_entries(state, state.lessons)[:limit])

    def unpaid_by_student(self) -> Result[List[UnpaidBalance]]:
        """Outstanding balances, largest first."""
        try:
            state = self.storage.load_all()
        except StorageError as e:
            logger.error(f"Failed to load lessons: {e}")
            return Result.failure(str(e), e, ErrorKind.STORAGE)

        balances: Dict[int, UnpaidBalance] = {}
        for lesson in state.lessons:
            if lesson.is_paid:
                continue
            balance = balances.setdefault(
                lesson.student_id,
                UnpaidBalance(lesson.student_id, state.student_name(lesson.student_id))
            )
            balance.unpaid_count += 1
            balance.unpaid_amount += lesson.amount

        return Result.success(
            sorted(balances.values(), key=lambda b: b.unpaid_amount, reverse=True)
        )

    def monthly_summary(self, limit: int = 12) -> Result[List[MonthlySummary]]:
        """Per-month lesson totals, most recent month first."""
        try:
            state = self.storage.load_all()
        except StorageError as e:
            logger.error(f"Failed to load lessons: {e}")
            return Result.failure(str(e), e, ErrorKind.STORAGE)

        months: Dict[str, MonthlySummary] = {}
        for lesson in state.lessons:
            summary = months.setdefault(lesson.month, MonthlySummary(lesson.month))
            amount = lesson.amount
            summary.lesson_count += 1
            summary.total_amount += amount
            if lesson.is_paid:
                summary.paid_amount += amount
            else:
                summary.unpaid_amount += amount

        ordered = sorted(months.values(), key=lambda m: m.month, reverse=True)
        return Result.success(ordered[:limit])

    def upcoming_preview(self, today: Optional[DateLike] = None) -> Result[List[Occurrence]]:
        """First few occurrences of the short dashboard window."""
        today = self._today() if today is None else as_date(today)

        try:
            state = self.storage.load_all()
        except StorageError as e:
            logger.error(f"Failed to load schedules: {e}")
            return Result.failure(str(e), e, ErrorKind.STORAGE)

        occurrences = upcoming_occurrences(
            state.schedules, state.students, today, self.preview_days
        )
        return Result.success(occurrences[:self.preview_count])

    def export_lessons_csv(self, filepath: Path) -> Result[Path]:
        """
        Write every lesson with its amount to a CSV file.

        Returns:
            Result containing the written path
        """
        entries = self.recent_lessons(limit=None)
        if entries.is_failure:
            return Result.failure(entries.message, entries.error, entries.kind)

        df = pd.DataFrame(
            [
                {
                    "id": e.lesson.id,
                    "date": e.lesson.date,
                    "student": e.student_name,
                    "duration_minutes": e.lesson.duration_minutes,
                    "hourly_rate": float(e.lesson.hourly_rate),
                    "amount": float(e.lesson.amount),
                    "is_paid": e.lesson.is_paid,
                    "notes": e.lesson.notes or "",
                }
                for e in entries.value
            ],
            columns=[
                "id", "date", "student", "duration_minutes",
                "hourly_rate", "amount", "is_paid", "notes",
            ]
        )

        if not save_csv(df, Path(filepath)):
            return Result.failure(f"Failed to write {filepath}", kind=ErrorKind.STORAGE)

        logger.info(f"Exported {len(df)} lesson(s) to {filepath}")
        return Result.success(Path(filepath))

    def export_monthly_summary_csv(self, filepath: Path, limit: int = 12) -> Result[Path]:
        """
        Write the monthly summary to a CSV file.

        Returns:
            Result containing the written path
        """
        summary = self.monthly_summary(limit=limit)
        if summary.is_failure:
            return Result.failure(summary.message, summary.error, summary.kind)

        df = pd.DataFrame(
            [
                {
                    "month": m.month,
                    "lesson_count": m.lesson_count,
                    "paid_amount": float(m.paid_amount),
                    "unpaid_amount": float(m.unpaid_amount),
                    "total_amount": float(m.total_amount),
                }
                for m in summary.value
            ],
            columns=["month", "lesson_count", "paid_amount", "unpaid_amount", "total_amount"]
        )

        if not save_csv(df, Path(filepath)):
            return Result.failure(f"Failed to write {filepath}", kind=ErrorKind.STORAGE)

        logger.info(f"Exported {len(df)} month(s) to {filepath}")
        return Result.success(Path(filepath))
