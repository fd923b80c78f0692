"""
Occurrence generation for schedules.

Expands a Schedule into the concrete dated occurrences that fall in a
closed date window. Recurring schedules repeat on their listed weekdays
every ``interval`` weeks, counted from the Monday of the week the
schedule was created in. Exceptions are keyed by the original date:
a skip suppresses that occurrence, a reschedule moves it.

Everything here is a pure function of its arguments. Nothing reads
storage or the clock, so callers may run it as often as they like.
"""

import logging
from datetime import date
from typing import Dict, List, Optional

from ..models.schedule import Occurrence, Schedule, ScheduleException
from .calendar_math import (
    DateLike,
    as_date,
    day_name,
    iter_dates,
    parse_anchor,
    weeks_between_mondays,
)


logger = logging.getLogger(__name__)


def _check_interval(schedule: Schedule) -> None:
    if schedule.interval < 1:
        raise ValueError(
            f"Schedule {schedule.id} has interval {schedule.interval} (must be >= 1)"
        )


def _is_aligned(anchor: date, day: date, interval: int) -> bool:
    weeks_diff = weeks_between_mondays(anchor, day)
    return weeks_diff >= 0 and weeks_diff % interval == 0


def is_valid_occurrence_date(schedule: Schedule, day: DateLike) -> bool:
    """
    Check whether a date is a scheduled (pre-exception) occurrence.

    For a one-off schedule this is simply its booking date. For a
    recurring schedule the date must fall on a listed weekday, in a week
    aligned to the anchor week, and not after the end date.

    Args:
        schedule: Schedule to test against
        day: Candidate date

    Returns:
        True if the schedule would generate an occurrence on day,
        ignoring exceptions

    Raises:
        ValueError: If the schedule's interval is below 1
    """
    day = as_date(day)

    if not schedule.is_recurring:
        return schedule.date == day

    _check_interval(schedule)

    if day_name(day) not in schedule.days_of_week:
        return False
    if schedule.end_date is not None and day > schedule.end_date:
        return False

    return _is_aligned(parse_anchor(schedule.created_at), day, schedule.interval)


def _plain_occurrence(schedule: Schedule, day: date) -> Occurrence:
    return Occurrence(
        schedule_id=schedule.id,
        student_id=schedule.student_id,
        date=day,
        time=schedule.time,
        duration_minutes=schedule.duration_minutes,
        notes=schedule.notes,
        is_recurring_instance=schedule.is_recurring,
    )


def _rescheduled_occurrence(schedule: Schedule, exception: ScheduleException) -> Occurrence:
    return Occurrence(
        schedule_id=schedule.id,
        student_id=schedule.student_id,
        date=exception.reschedule_to,
        time=exception.reschedule_time or schedule.time,
        duration_minutes=schedule.duration_minutes,
        notes=schedule.notes,
        is_recurring_instance=True,
        is_rescheduled=True,
        original_date=exception.date,
    )


def _apply_exception(
    schedule: Schedule,
    day: date,
    exception: Optional[ScheduleException]
) -> Optional[Occurrence]:
    if exception is None:
        return _plain_occurrence(schedule, day)
    if exception.is_skip:
        return None
    if exception.reschedule_to is None:
        # Malformed stored data; the occurrence stays where it was
        logger.warning(
            f"Schedule {schedule.id}: reschedule exception for {day} "
            f"has no target date, ignoring it"
        )
        return _plain_occurrence(schedule, day)
    return _rescheduled_occurrence(schedule, exception)


def generate_occurrences(
    schedule: Schedule,
    window_start: DateLike,
    window_end: DateLike
) -> List[Occurrence]:
    """
    Expand one schedule into occurrences for a closed date window.

    Recurring schedules produce:
    - one occurrence per valid original date inside the window, with
      exceptions applied (a rescheduled one is returned even when its
      new date lies outside the window)
    - one occurrence per reschedule exception whose new date lies inside
      the window and whose original date is valid but outside the window

    Each original date contributes at most one occurrence.

    Args:
        schedule: Schedule to expand
        window_start: First date of the window (inclusive)
        window_end: Last date of the window (inclusive)

    Returns:
        Occurrences sorted by (date, time)

    Raises:
        ValueError: If window_start is after window_end, or the
            schedule's interval is below 1

    Examples:
        >>> schedule = Schedule(
        ...     id=1, student_id=1, is_recurring=True, time="18:00",
        ...     days_of_week=["wednesday"], interval=2,
        ...     created_at="2024-01-01T09:00:00Z",
        ... )
        >>> [o.date.isoformat() for o in generate_occurrences(
        ...     schedule, "2024-01-01", "2024-01-31")]
        ['2024-01-03', '2024-01-17', '2024-01-31']
    """
    window_start = as_date(window_start)
    window_end = as_date(window_end)

    if window_start > window_end:
        raise ValueError(f"Window start {window_start} is after window end {window_end}")

    if not schedule.is_recurring:
        if schedule.date is not None and window_start <= schedule.date <= window_end:
            return [_plain_occurrence(schedule, schedule.date)]
        return []

    _check_interval(schedule)

    if not schedule.days_of_week:
        logger.debug(f"Schedule {schedule.id} is recurring with no weekdays, nothing to generate")
        return []

    anchor = parse_anchor(schedule.created_at)

    # Last write wins when stored data holds duplicates for one date
    by_original: Dict[date, ScheduleException] = {
        exc.date: exc for exc in schedule.exceptions
    }

    by_target: Dict[date, List[ScheduleException]] = {}
    for exc in by_original.values():
        if exc.is_reschedule and exc.reschedule_to is not None:
            if window_start <= exc.reschedule_to <= window_end:
                by_target.setdefault(exc.reschedule_to, []).append(exc)

    generated: Dict[date, Occurrence] = {}

    scan_end = window_end
    if schedule.end_date is not None:
        scan_end = min(window_end, schedule.end_date)

    # Empty when the schedule ended before the window
    for day in iter_dates(window_start, scan_end):
        if day_name(day) not in schedule.days_of_week:
            continue
        if not _is_aligned(anchor, day, schedule.interval):
            continue

        occurrence = _apply_exception(schedule, day, by_original.get(day))
        if occurrence is not None:
            generated[day] = occurrence

    for exceptions in by_target.values():
        for exc in exceptions:
            if exc.date in generated:
                continue
            if window_start <= exc.date <= scan_end:
                # Original was scanned above; its outcome already stands
                continue
            if is_valid_occurrence_date(schedule, exc.date):
                generated[exc.date] = _rescheduled_occurrence(schedule, exc)

    return sorted(generated.values(), key=lambda o: o.sort_key)
