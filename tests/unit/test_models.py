"""
Unit tests for data models and money helpers.
"""

import pytest
from datetime import date
from decimal import Decimal

from tutorbook.models.lesson import Lesson
from tutorbook.models.money import lesson_amount, money_to_json, to_decimal
from tutorbook.models.schedule import (
    ExceptionAction,
    Occurrence,
    Schedule,
    ScheduleException,
    normalize_days,
    normalize_interval,
)
from tutorbook.models.state import TutoringState
from tutorbook.scheduling.upcoming import upcoming_occurrences
from tutorbook.services.seed import seed_state


class TestMoney:
    """Test cases for currency helpers."""

    def test_to_decimal(self):
        assert to_decimal(35.5) == Decimal("35.5")
        assert to_decimal("30") == Decimal("30")
        assert to_decimal(None) is None
        assert to_decimal("", 30) == Decimal("30")

    def test_to_decimal_rejects(self):
        with pytest.raises(ValueError):
            to_decimal("thirty")
        with pytest.raises(ValueError):
            to_decimal(True)

    def test_money_to_json(self):
        assert money_to_json(Decimal("35")) == 35
        assert isinstance(money_to_json(Decimal("35.00")), int)
        assert money_to_json(Decimal("35.5")) == 35.5
        assert money_to_json(None) is None

    @pytest.mark.parametrize("rate,minutes,expected", [
        ("35", 60, "35.00"),
        ("35", 90, "52.50"),
        ("30", 45, "22.50"),
        ("25", 50, "20.83"),
    ])
    def test_lesson_amount(self, rate, minutes, expected):
        assert lesson_amount(Decimal(rate), minutes) == Decimal(expected)

    def test_lesson_properties(self):
        lesson = Lesson(id=1, student_id=1, date="2024-10-15", duration_minutes=90,
                        hourly_rate=Decimal("35"))

        assert lesson.amount == Decimal("52.50")
        assert lesson.month == "2024-10"


class TestScheduleModel:
    """Test cases for Schedule normalization and serialization."""

    def test_normalize_days(self):
        assert normalize_days({"day_of_week": "Tuesday"}) == ["tuesday"]
        assert normalize_days({"days_of_week": ["friday", "Monday", "friday", "x"]}) == ["friday", "monday"]
        assert normalize_days({"days_of_week": [], "day_of_week": "monday"}) == ["monday"]
        assert normalize_days({}) == []

    def test_normalize_interval(self):
        assert normalize_interval({}) == 1
        assert normalize_interval({"interval": 3}) == 3
        assert normalize_interval({"frequency": "biweekly"}) == 2
        assert normalize_interval({"frequency": "monthly"}) == 4
        assert normalize_interval({"interval": "", "frequency": 2}) == 2

    def test_set_exception_replaces(self):
        schedule = Schedule(id=1, student_id=1, is_recurring=True, time="18:00",
                            days_of_week=["wednesday"])
        schedule.set_exception(ScheduleException(date(2024, 1, 17), ExceptionAction.SKIP))
        schedule.set_exception(ScheduleException(
            date(2024, 1, 17), ExceptionAction.RESCHEDULE, reschedule_to=date(2024, 1, 18)
        ))

        assert len(schedule.exceptions) == 1
        assert schedule.exception_for(date(2024, 1, 17)).is_reschedule
        assert schedule.remove_exception(date(2024, 1, 17))
        assert not schedule.remove_exception(date(2024, 1, 17))

    def test_recurring_to_dict(self):
        schedule = Schedule(
            id=20, student_id=2, is_recurring=True, time="18:00",
            created_at="2024-01-01T09:00:00Z", days_of_week=["wednesday"], interval=2,
            end_date=date(2024, 6, 30),
            exceptions=[ScheduleException(date(2024, 1, 17), ExceptionAction.SKIP)],
        )

        data = schedule.to_dict()

        assert data["date"] is None
        assert data["end_date"] == "2024-06-30"
        assert data["exceptions"] == [{
            "date": "2024-01-17", "action": "skip",
            "reschedule_to": None, "reschedule_time": None,
        }]
        assert Schedule.from_dict(data) == schedule

    def test_one_off_ignores_recurrence_fields(self):
        schedule = Schedule.from_dict({
            "id": 5, "student_id": 1, "is_recurring": False, "date": "2024-10-20",
            "time": "11:00", "days_of_week": ["monday"], "exceptions": [
                {"date": "2024-10-20", "action": "skip"},
            ],
        })

        assert schedule.date == date(2024, 10, 20)
        assert schedule.days_of_week == []
        assert schedule.exceptions == []

    def test_occurrence_to_dict(self):
        occurrence = Occurrence(
            schedule_id=20, student_id=2, date=date(2024, 1, 5), time="15:00",
            duration_minutes=60, is_recurring_instance=True, is_rescheduled=True,
            original_date=date(2024, 1, 3), student_name="Liam Murphy",
        )

        data = occurrence.to_dict()

        assert data["date"] == "2024-01-05"
        assert data["original_date"] == "2024-01-03"
        assert data["student_name"] == "Liam Murphy"


class TestTutoringState:
    """Test cases for the whole-store state."""

    def test_allocate_id(self):
        state = TutoringState(next_id=7)

        assert state.allocate_id() == 7
        assert state.allocate_id() == 8
        assert state.next_id == 9

    def test_from_dict_accepts_snake_case_next_id(self):
        assert TutoringState.from_dict({"next_id": 12}).next_id == 12

    def test_empty_blob(self):
        state = TutoringState.from_dict({})

        assert state.students == [] and state.schedules == []
        assert state.next_id == 1
        assert state.to_dict()["nextId"] == 1

    def test_student_name_default(self):
        assert TutoringState().student_name(1) == "Unknown"


class TestSeedState:
    """Test cases for the demo roster."""

    def test_seed_is_relative_to_today(self):
        today = date(2024, 10, 14)
        state = seed_state(today)

        assert [s.name for s in state.students] == ["Emma O'Brien", "Liam Murphy", "Sophie Chen"]
        assert len(state.lessons) == 8
        assert all(l.date < "2024-10-14" for l in state.lessons)
        assert state.next_id == 16

        upcoming = upcoming_occurrences(state.schedules, state.students, today, 7)
        assert upcoming
        assert all(o.student_name != "Unknown" for o in upcoming)
