"""
Upcoming-lesson aggregation across all schedules.

Feeds the dashboard preview, the schedule list and the calendar views.
Each view asks for a different window and slices the result; none of
them repeats the expansion logic.
"""

import logging
from dataclasses import replace
from datetime import date, timedelta
from typing import Dict, Iterable, Iterator, List, Sequence

from ..models.schedule import Occurrence, Schedule
from ..models.student import Student
from .calendar_math import DateLike, as_date
from .occurrences import generate_occurrences


logger = logging.getLogger(__name__)

UNKNOWN_STUDENT = "Unknown"


def occurrences_between(
    schedules: Iterable[Schedule],
    students: Iterable[Student],
    window_start: DateLike,
    window_end: DateLike
) -> List[Occurrence]:
    """
    All occurrences whose effective date lies in a closed window.

    Skipped occurrences never appear. Rescheduled occurrences appear on
    their new date when that date is in the window, wherever the
    original date was. Each occurrence is annotated with its student's
    name.

    A schedule whose stored data cannot be expanded (interval below 1)
    is logged and left out instead of failing the whole feed.

    Args:
        schedules: Schedules in storage order
        students: Students used for name lookup
        window_start: First date (inclusive)
        window_end: Last date (inclusive)

    Returns:
        Occurrences sorted by (date, time); ties keep schedule order
    """
    window_start = as_date(window_start)
    window_end = as_date(window_end)

    names: Dict[int, str] = {s.id: s.name for s in students}
    collected: List[Occurrence] = []

    for schedule in schedules:
        try:
            generated = generate_occurrences(schedule, window_start, window_end)
        except ValueError as e:
            logger.warning(f"Skipping schedule {schedule.id}: {e}")
            continue

        for occurrence in generated:
            if not (window_start <= occurrence.date <= window_end):
                continue
            collected.append(
                replace(
                    occurrence,
                    student_name=names.get(schedule.student_id, UNKNOWN_STUDENT)
                )
            )

    # sorted() is stable, so equal (date, time) keep schedule order
    return sorted(collected, key=lambda o: o.sort_key)


class UpcomingFeed:
    """
    Restartable view of upcoming occurrences.

    Every iteration recomputes the window from the inputs; no state is
    cached between iterations. The window runs from ``today`` through
    ``today + days``, both inclusive.

    Examples:
        >>> feed = UpcomingFeed(schedules, students, today=date(2024, 1, 1), days=7)
        >>> first_five = list(itertools.islice(feed, 5))
        >>> everything = list(feed)  # starts over
    """

    def __init__(
        self,
        schedules: Sequence[Schedule],
        students: Sequence[Student],
        today: DateLike,
        days: int = 14
    ):
        if days < 0:
            raise ValueError(f"days must be >= 0, got {days}")

        self.schedules = schedules
        self.students = students
        self.today = as_date(today)
        self.days = days

    @property
    def window_end(self) -> date:
        return self.today + timedelta(days=self.days)

    def __iter__(self) -> Iterator[Occurrence]:
        return iter(
            occurrences_between(
                self.schedules,
                self.students,
                self.today,
                self.window_end
            )
        )


def upcoming_occurrences(
    schedules: Sequence[Schedule],
    students: Sequence[Student],
    today: DateLike,
    days: int = 14
) -> List[Occurrence]:
    """List form of UpcomingFeed."""
    return list(UpcomingFeed(schedules, students, today, days))
