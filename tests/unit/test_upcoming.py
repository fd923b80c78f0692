"""
Unit tests for the upcoming-lesson feed.
"""

import itertools
import pytest
from datetime import date
from decimal import Decimal

from tutorbook.models.schedule import ExceptionAction, Schedule, ScheduleException
from tutorbook.models.student import Student
from tutorbook.scheduling.upcoming import (
    UNKNOWN_STUDENT,
    UpcomingFeed,
    occurrences_between,
    upcoming_occurrences,
)


TODAY = date(2024, 1, 1)


@pytest.fixture
def students():
    return [
        Student(id=1, name="Emma O'Brien", hourly_rate=Decimal("35")),
        Student(id=2, name="Liam Murphy", hourly_rate=Decimal("35")),
    ]


@pytest.fixture
def schedules():
    return [
        Schedule(
            id=20, student_id=2, is_recurring=True, time="18:00",
            created_at="2024-01-01T09:00:00Z",
            days_of_week=["wednesday"], interval=2,
        ),
        Schedule(
            id=21, student_id=1, is_recurring=True, time="16:00",
            created_at="2024-01-01T09:00:00Z",
            days_of_week=["monday"],
        ),
        Schedule(
            id=22, student_id=3, is_recurring=False, time="10:00",
            created_at="2024-01-01T09:00:00Z", date=date(2024, 1, 8),
        ),
    ]


class TestUpcomingOccurrences:
    """Test cases for upcoming_occurrences()."""

    def test_two_week_window(self, schedules, students):
        result = upcoming_occurrences(schedules, students, TODAY, days=14)

        assert [(o.date, o.time, o.schedule_id) for o in result] == [
            (date(2024, 1, 1), "16:00", 21),
            (date(2024, 1, 3), "18:00", 20),
            (date(2024, 1, 8), "10:00", 22),
            (date(2024, 1, 8), "16:00", 21),
            (date(2024, 1, 15), "16:00", 21),
        ]

    def test_student_names(self, schedules, students):
        result = upcoming_occurrences(schedules, students, TODAY, days=14)

        assert result[0].student_name == "Emma O'Brien"
        assert result[1].student_name == "Liam Murphy"

    def test_missing_student_is_unknown(self, schedules, students):
        result = upcoming_occurrences(schedules, students, TODAY, days=14)

        assert result[2].schedule_id == 22
        assert result[2].student_name == UNKNOWN_STUDENT

    def test_zero_days_is_today_only(self, schedules, students):
        result = upcoming_occurrences(schedules, students, TODAY, days=0)

        assert [o.date for o in result] == [date(2024, 1, 1)]

    def test_reschedule_out_of_window_is_dropped(self, schedules, students):
        schedules[0].exceptions = [ScheduleException(
            date=date(2024, 1, 3),
            action=ExceptionAction.RESCHEDULE,
            reschedule_to=date(2024, 1, 20),
        )]

        result = upcoming_occurrences(schedules, students, TODAY, days=14)

        assert all(o.schedule_id != 20 for o in result)

    def test_reschedule_into_window_is_included(self, schedules, students):
        schedules[0].exceptions = [ScheduleException(
            date=date(2024, 1, 17),
            action=ExceptionAction.RESCHEDULE,
            reschedule_to=date(2024, 1, 12),
            reschedule_time="15:00",
        )]

        result = upcoming_occurrences(schedules, students, TODAY, days=14)
        moved = [o for o in result if o.is_rescheduled]

        assert len(moved) == 1
        assert moved[0].date == date(2024, 1, 12)
        assert moved[0].time == "15:00"
        assert moved[0].original_date == date(2024, 1, 17)
        assert moved[0].student_name == "Liam Murphy"

    def test_ties_keep_schedule_order(self, students):
        schedules = [
            Schedule(id=31, student_id=2, is_recurring=False, time="10:00", date=TODAY),
            Schedule(id=30, student_id=1, is_recurring=False, time="10:00", date=TODAY),
        ]

        result = upcoming_occurrences(schedules, students, TODAY, days=0)

        assert [o.schedule_id for o in result] == [31, 30]

    def test_broken_schedule_is_skipped(self, schedules, students):
        schedules[0].interval = 0

        result = upcoming_occurrences(schedules, students, TODAY, days=14)

        assert len(result) == 4
        assert all(o.schedule_id != 20 for o in result)

    def test_inputs_not_modified(self, schedules, students):
        upcoming_occurrences(schedules, students, TODAY, days=14)

        assert schedules[0].exceptions == []
        assert len(schedules) == 3


class TestOccurrencesBetween:
    """Test cases for explicit windows."""

    def test_month_view(self, schedules, students):
        result = occurrences_between(schedules, students, "2024-01-01", "2024-01-31")

        assert sum(1 for o in result if o.schedule_id == 20) == 3
        assert sum(1 for o in result if o.schedule_id == 21) == 5
        assert sum(1 for o in result if o.schedule_id == 22) == 1

    def test_no_schedules(self, students):
        assert occurrences_between([], students, "2024-01-01", "2024-01-31") == []


class TestUpcomingFeed:
    """Test cases for the restartable feed."""

    def test_window_end(self, schedules, students):
        feed = UpcomingFeed(schedules, students, "2024-01-01", days=7)

        assert feed.window_end == date(2024, 1, 8)

    def test_restartable(self, schedules, students):
        feed = UpcomingFeed(schedules, students, TODAY, days=14)

        first_two = list(itertools.islice(feed, 2))
        everything = list(feed)

        assert len(first_two) == 2
        assert len(everything) == 5
        assert everything[:2] == first_two

    def test_sees_later_changes(self, schedules, students):
        feed = UpcomingFeed(schedules, students, TODAY, days=14)
        before = len(list(feed))

        schedules.pop()

        assert len(list(feed)) == before - 1

    def test_negative_days_rejected(self, schedules, students):
        with pytest.raises(ValueError, match="days must be >= 0"):
            UpcomingFeed(schedules, students, TODAY, days=-1)
