"""
Unit tests for occurrence generation.

The reference schedule is created on Monday 2024-01-01 and meets every
other Wednesday, so in January it falls on the 3rd, 17th and 31st.
"""

import pytest
from datetime import date

from tutorbook.models.schedule import ExceptionAction, Schedule, ScheduleException
from tutorbook.scheduling.occurrences import generate_occurrences, is_valid_occurrence_date


def dates(occurrences):
    return [o.date for o in occurrences]


def skip(day):
    return ScheduleException(date=day, action=ExceptionAction.SKIP)


def reschedule(day, to, time=None):
    return ScheduleException(
        date=day,
        action=ExceptionAction.RESCHEDULE,
        reschedule_to=to,
        reschedule_time=time,
    )


@pytest.fixture
def biweekly():
    """Every other Wednesday at 18:00, anchored on 2024-01-01."""
    return Schedule(
        id=20,
        student_id=2,
        is_recurring=True,
        time="18:00",
        duration_minutes=60,
        notes="JLPT N3 prep",
        created_at="2024-01-01T09:00:00Z",
        days_of_week=["wednesday"],
        interval=2,
    )


class TestRecurringExpansion:
    """Test cases for plain recurring schedules."""

    def test_biweekly_in_january(self, biweekly):
        occurrences = generate_occurrences(biweekly, "2024-01-01", "2024-01-31")

        assert dates(occurrences) == [date(2024, 1, 3), date(2024, 1, 17), date(2024, 1, 31)]
        for occ in occurrences:
            assert occ.schedule_id == 20
            assert occ.student_id == 2
            assert occ.time == "18:00"
            assert occ.duration_minutes == 60
            assert occ.notes == "JLPT N3 prep"
            assert occ.is_recurring_instance
            assert not occ.is_rescheduled
            assert occ.original_date is None

    def test_accepts_date_objects(self, biweekly):
        occurrences = generate_occurrences(biweekly, date(2024, 1, 1), date(2024, 1, 31))

        assert len(occurrences) == 3

    def test_single_day_window(self, biweekly):
        assert dates(generate_occurrences(biweekly, "2024-01-17", "2024-01-17")) == [date(2024, 1, 17)]
        assert generate_occurrences(biweekly, "2024-01-10", "2024-01-10") == []

    def test_multiple_days_per_week(self):
        schedule = Schedule(
            id=1, student_id=1, is_recurring=True, time="17:30",
            created_at="2024-01-01T09:00:00Z",
            days_of_week=["thursday", "monday"],
        )

        occurrences = generate_occurrences(schedule, "2024-01-01", "2024-01-11")

        assert dates(occurrences) == [
            date(2024, 1, 1), date(2024, 1, 4), date(2024, 1, 8), date(2024, 1, 11),
        ]

    def test_first_occurrence_may_precede_creation_in_same_week(self):
        """Created on a Thursday, a Tuesday lesson that week still counts."""
        schedule = Schedule(
            id=1, student_id=1, is_recurring=True, time="16:00",
            created_at="2024-01-04T12:00:00Z",
            days_of_week=["tuesday"],
        )

        assert dates(generate_occurrences(schedule, "2024-01-01", "2024-01-10")) == [
            date(2024, 1, 2), date(2024, 1, 9),
        ]

    def test_nothing_before_anchor_week(self):
        """Weekly schedule created mid-week: earlier weeks stay empty."""
        schedule = Schedule(
            id=1, student_id=1, is_recurring=True, time="10:00",
            created_at="2024-01-10T08:00:00Z",
            days_of_week=["monday"],
        )

        assert dates(generate_occurrences(schedule, "2024-01-01", "2024-01-31")) == [
            date(2024, 1, 8), date(2024, 1, 15), date(2024, 1, 22), date(2024, 1, 29),
        ]

    def test_four_week_interval(self):
        schedule = Schedule(
            id=1, student_id=1, is_recurring=True, time="10:00",
            created_at="2024-01-01T08:00:00Z",
            days_of_week=["monday"], interval=4,
        )

        assert dates(generate_occurrences(schedule, "2024-01-01", "2024-03-01")) == [
            date(2024, 1, 1), date(2024, 1, 29), date(2024, 2, 26),
        ]

    def test_window_across_year_end(self):
        schedule = Schedule(
            id=1, student_id=1, is_recurring=True, time="10:00",
            created_at="2023-12-04T08:00:00Z",
            days_of_week=["wednesday"], interval=2,
        )

        # Anchor week of Dec 4; Dec 6, Dec 20, Jan 3 are aligned
        assert dates(generate_occurrences(schedule, "2023-12-25", "2024-01-07")) == [date(2024, 1, 3)]

    def test_missing_created_at_uses_legacy_anchor(self):
        """Anchor week of 1970-01-05 puts 2024-01-08 on an even week."""
        schedule = Schedule(
            id=1, student_id=1, is_recurring=True, time="10:00",
            created_at=None,
            days_of_week=["monday"], interval=2,
        )

        assert dates(generate_occurrences(schedule, "2024-01-01", "2024-01-14")) == [date(2024, 1, 8)]

    def test_legacy_day_of_week_record(self):
        schedule = Schedule.from_dict({
            "id": 5,
            "student_id": 1,
            "is_recurring": True,
            "day_of_week": "Tuesday",
            "time": "16:00",
            "created_at": "2024-01-01T00:00:00Z",
        })

        assert schedule.days_of_week == ["tuesday"]
        assert schedule.interval == 1
        assert dates(generate_occurrences(schedule, "2024-01-01", "2024-01-16")) == [
            date(2024, 1, 2), date(2024, 1, 9), date(2024, 1, 16),
        ]

    def test_no_days_yields_nothing(self):
        schedule = Schedule(
            id=1, student_id=1, is_recurring=True, time="10:00",
            created_at="2024-01-01T08:00:00Z", days_of_week=[],
        )

        assert generate_occurrences(schedule, "2024-01-01", "2024-12-31") == []

    def test_idempotent(self, biweekly):
        biweekly.exceptions = [skip(date(2024, 1, 17))]

        first = generate_occurrences(biweekly, "2024-01-01", "2024-01-31")
        second = generate_occurrences(biweekly, "2024-01-01", "2024-01-31")

        assert first == second


class TestEndDate:
    """Test cases for end_date handling."""

    def test_end_date_is_inclusive(self, biweekly):
        biweekly.end_date = date(2024, 1, 17)

        assert dates(generate_occurrences(biweekly, "2024-01-01", "2024-01-31")) == [
            date(2024, 1, 3), date(2024, 1, 17),
        ]

    def test_end_date_before_window(self, biweekly):
        biweekly.end_date = date(2023, 12, 31)

        assert generate_occurrences(biweekly, "2024-01-01", "2024-01-31") == []

    def test_end_date_between_occurrences(self, biweekly):
        biweekly.end_date = date(2024, 1, 16)

        assert dates(generate_occurrences(biweekly, "2024-01-01", "2024-01-31")) == [date(2024, 1, 3)]


class TestExceptions:
    """Test cases for skip and reschedule exceptions."""

    def test_skip_removes_occurrence(self, biweekly):
        biweekly.exceptions = [skip(date(2024, 1, 17))]

        assert dates(generate_occurrences(biweekly, "2024-01-01", "2024-01-31")) == [
            date(2024, 1, 3), date(2024, 1, 31),
        ]

    def test_reschedule_moves_occurrence(self, biweekly):
        biweekly.exceptions = [reschedule(date(2024, 1, 3), date(2024, 1, 5), "15:00")]

        occurrences = generate_occurrences(biweekly, "2024-01-01", "2024-01-31")

        assert dates(occurrences) == [date(2024, 1, 5), date(2024, 1, 17), date(2024, 1, 31)]
        moved = occurrences[0]
        assert moved.time == "15:00"
        assert moved.is_rescheduled
        assert moved.original_date == date(2024, 1, 3)
        assert moved.duration_minutes == 60

    def test_reschedule_without_time_keeps_schedule_time(self, biweekly):
        biweekly.exceptions = [reschedule(date(2024, 1, 17), date(2024, 1, 18))]

        occurrences = generate_occurrences(biweekly, "2024-01-01", "2024-01-31")

        assert occurrences[1].date == date(2024, 1, 18)
        assert occurrences[1].time == "18:00"

    def test_reschedule_into_window_from_outside(self, biweekly):
        """Jan 31 moved to Jan 29 shows up in a window ending Jan 29."""
        biweekly.exceptions = [reschedule(date(2024, 1, 31), date(2024, 1, 29))]

        occurrences = generate_occurrences(biweekly, "2024-01-22", "2024-01-29")

        assert len(occurrences) == 1
        assert occurrences[0].date == date(2024, 1, 29)
        assert occurrences[0].original_date == date(2024, 1, 31)

    def test_reschedule_out_of_window_still_returned(self, biweekly):
        """The generator reports the move; the feed filters by new date."""
        biweekly.exceptions = [reschedule(date(2024, 1, 3), date(2024, 1, 12))]

        occurrences = generate_occurrences(biweekly, "2024-01-01", "2024-01-10")

        assert dates(occurrences) == [date(2024, 1, 12)]
        assert occurrences[0].original_date == date(2024, 1, 3)

    def test_reschedule_after_end_date_is_kept(self, biweekly):
        biweekly.end_date = date(2024, 1, 17)
        biweekly.exceptions = [reschedule(date(2024, 1, 17), date(2024, 1, 20))]

        assert dates(generate_occurrences(biweekly, "2024-01-01", "2024-01-31")) == [
            date(2024, 1, 3), date(2024, 1, 20),
        ]

    def test_skip_on_non_occurrence_has_no_effect(self, biweekly):
        biweekly.exceptions = [skip(date(2024, 1, 10))]

        assert len(generate_occurrences(biweekly, "2024-01-01", "2024-01-31")) == 3

    def test_reschedule_from_non_occurrence_is_ignored(self, biweekly):
        biweekly.exceptions = [reschedule(date(2024, 1, 10), date(2024, 1, 11))]

        assert dates(generate_occurrences(biweekly, "2024-01-01", "2024-01-31")) == [
            date(2024, 1, 3), date(2024, 1, 17), date(2024, 1, 31),
        ]

    def test_duplicate_exceptions_last_wins(self, biweekly):
        biweekly.exceptions = [
            skip(date(2024, 1, 17)),
            reschedule(date(2024, 1, 17), date(2024, 1, 18)),
        ]

        assert dates(generate_occurrences(biweekly, "2024-01-01", "2024-01-31")) == [
            date(2024, 1, 3), date(2024, 1, 18), date(2024, 1, 31),
        ]

    def test_reschedule_without_target_keeps_original(self, biweekly):
        biweekly.exceptions = [
            ScheduleException(date=date(2024, 1, 17), action=ExceptionAction.RESCHEDULE)
        ]

        occurrences = generate_occurrences(biweekly, "2024-01-01", "2024-01-31")

        assert dates(occurrences) == [date(2024, 1, 3), date(2024, 1, 17), date(2024, 1, 31)]
        assert not occurrences[1].is_rescheduled

    def test_sorted_after_reschedule_past_next_occurrence(self, biweekly):
        biweekly.exceptions = [reschedule(date(2024, 1, 3), date(2024, 1, 19))]

        assert dates(generate_occurrences(biweekly, "2024-01-01", "2024-01-31")) == [
            date(2024, 1, 17), date(2024, 1, 19), date(2024, 1, 31),
        ]


class TestOneOff:
    """Test cases for one-off schedules."""

    @pytest.fixture
    def one_off(self):
        return Schedule(
            id=30, student_id=3, is_recurring=False, time="11:00",
            created_at="2024-01-01T09:00:00Z", date=date(2024, 1, 12),
        )

    def test_inside_window(self, one_off):
        occurrences = generate_occurrences(one_off, "2024-01-01", "2024-01-31")

        assert dates(occurrences) == [date(2024, 1, 12)]
        assert not occurrences[0].is_recurring_instance

    def test_outside_window(self, one_off):
        assert generate_occurrences(one_off, "2024-01-13", "2024-01-31") == []

    def test_window_boundaries_inclusive(self, one_off):
        assert len(generate_occurrences(one_off, "2024-01-12", "2024-01-12")) == 1


class TestErrors:
    """Test cases for invalid input."""

    def test_reversed_window_raises(self, biweekly):
        with pytest.raises(ValueError, match="after window end"):
            generate_occurrences(biweekly, "2024-01-31", "2024-01-01")

    def test_zero_interval_raises(self, biweekly):
        biweekly.interval = 0

        with pytest.raises(ValueError, match="interval"):
            generate_occurrences(biweekly, "2024-01-01", "2024-01-31")


class TestIsValidOccurrenceDate:
    """Test cases for occurrence date checks."""

    def test_aligned_dates(self, biweekly):
        assert is_valid_occurrence_date(biweekly, "2024-01-17")
        assert is_valid_occurrence_date(biweekly, date(2024, 1, 31))

    def test_off_week(self, biweekly):
        assert not is_valid_occurrence_date(biweekly, "2024-01-10")
        assert not is_valid_occurrence_date(biweekly, "2024-01-24")

    def test_wrong_weekday(self, biweekly):
        assert not is_valid_occurrence_date(biweekly, "2024-01-18")

    def test_before_anchor_week(self, biweekly):
        assert not is_valid_occurrence_date(biweekly, "2023-12-20")

    def test_after_end_date(self, biweekly):
        biweekly.end_date = date(2024, 1, 20)

        assert is_valid_occurrence_date(biweekly, "2024-01-17")
        assert not is_valid_occurrence_date(biweekly, "2024-01-31")

    def test_one_off(self):
        schedule = Schedule(
            id=1, student_id=1, is_recurring=False, time="11:00", date=date(2024, 1, 12)
        )

        assert is_valid_occurrence_date(schedule, "2024-01-12")
        assert not is_valid_occurrence_date(schedule, "2024-01-13")
