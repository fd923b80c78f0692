"""
Unit tests for DashboardService.
"""

import pandas as pd
import pytest
from datetime import date, datetime
from decimal import Decimal

from tutorbook.models.lesson import Lesson
from tutorbook.models.schedule import Schedule
from tutorbook.models.state import TutoringState
from tutorbook.models.student import Student
from tutorbook.services.dashboard import DashboardService
from tutorbook.storage.memory_storage import InMemoryStorage


def fixed_clock():
    return datetime(2024, 10, 14, 8, 0)


@pytest.fixture
def storage():
    state = TutoringState(
        students=[
            Student(id=1, name="Emma O'Brien", hourly_rate=Decimal("35")),
            Student(id=2, name="Liam Murphy", hourly_rate=Decimal("30")),
        ],
        lessons=[
            Lesson(id=10, student_id=1, date="2024-09-30", duration_minutes=60,
                   hourly_rate=Decimal("35"), is_paid=True),
            Lesson(id=11, student_id=1, date="2024-10-07", duration_minutes=90,
                   hourly_rate=Decimal("35"), is_paid=True),
            Lesson(id=12, student_id=1, date="2024-10-09", duration_minutes=60,
                   hourly_rate=Decimal("35")),
            Lesson(id=13, student_id=2, date="2024-10-10", duration_minutes=120,
                   hourly_rate=Decimal("30"), notes="Weekend intensive"),
        ],
        schedules=[
            Schedule(id=20, student_id=1, is_recurring=True, time="16:00",
                     created_at="2024-09-02T09:00:00Z", days_of_week=["tuesday"]),
            Schedule(id=21, student_id=2, is_recurring=True, time="18:00",
                     created_at="2024-09-02T09:00:00Z", days_of_week=["monday", "thursday"]),
        ],
        next_id=30,
    )
    return InMemoryStorage(state)


@pytest.fixture
def service(storage):
    return DashboardService(storage, clock=fixed_clock, preview_days=7, preview_count=3)


class TestStats:
    """Test cases for headline figures."""

    def test_get_stats(self, service):
        stats = service.get_stats().unwrap()

        assert stats.total_students == 2
        assert stats.total_lessons == 4
        assert stats.unpaid_lessons == 2
        assert stats.unpaid_amount == Decimal("95.00")
        assert stats.monthly_lessons == 3
        assert stats.monthly_earnings == Decimal("52.50")

    def test_stats_for_other_month(self, service):
        stats = service.get_stats(today=date(2024, 9, 15)).unwrap()

        assert stats.monthly_lessons == 1
        assert stats.monthly_earnings == Decimal("35.00")

    def test_recent_lessons(self, service):
        assert [e.lesson.id for e in service.recent_lessons(limit=2).unwrap()] == [13, 12]

    def test_unpaid_by_student(self, service):
        balances = service.unpaid_by_student().unwrap()

        assert [(b.name, b.unpaid_count, b.unpaid_amount) for b in balances] == [
            ("Liam Murphy", 1, Decimal("60.00")),
            ("Emma O'Brien", 1, Decimal("35.00")),
        ]

    def test_monthly_summary(self, service):
        months = service.monthly_summary().unwrap()

        assert [m.month for m in months] == ["2024-10", "2024-09"]
        october = months[0]
        assert october.lesson_count == 3
        assert october.paid_amount == Decimal("52.50")
        assert october.unpaid_amount == Decimal("95.00")
        assert october.total_amount == Decimal("147.50")


class TestUpcomingPreview:
    """Test cases for the dashboard preview."""

    def test_preview_is_sliced(self, service):
        preview = service.upcoming_preview().unwrap()

        # Oct 14 .. Oct 21 holds four occurrences; the preview keeps three
        assert [(o.date, o.schedule_id) for o in preview] == [
            (date(2024, 10, 14), 21),
            (date(2024, 10, 15), 20),
            (date(2024, 10, 17), 21),
        ]
        assert preview[0].student_name == "Liam Murphy"


class TestExports:
    """Test cases for CSV exports."""

    def test_export_lessons(self, service, tmp_path):
        path = tmp_path / "exports" / "lessons.csv"

        result = service.export_lessons_csv(path)

        assert result.is_success
        df = pd.read_csv(path)
        assert list(df.columns) == [
            "id", "date", "student", "duration_minutes",
            "hourly_rate", "amount", "is_paid", "notes",
        ]
        assert len(df) == 4
        first = df.iloc[0]
        assert first["id"] == 13
        assert first["student"] == "Liam Murphy"
        assert first["amount"] == 60.0
        assert first["notes"] == "Weekend intensive"

    def test_export_monthly(self, service, tmp_path):
        path = tmp_path / "monthly.csv"

        assert service.export_monthly_summary_csv(path).is_success

        df = pd.read_csv(path)
        assert list(df["month"]) == ["2024-10", "2024-09"]
        assert list(df["total_amount"]) == [147.5, 35.0]
