"""
Demo data for a new store.

Three students with a few weeks of lesson history and weekly
schedules, dated relative to today so the dashboard looks alive.
"""

from datetime import date, timedelta
from decimal import Decimal
from typing import Optional

from ..models.lesson import Lesson
from ..models.schedule import Schedule
from ..models.state import TutoringState
from ..models.student import Student


def seed_state(today: Optional[date] = None) -> TutoringState:
    """
    Build the demo state.

    Args:
        today: Date the history is counted back from (default: today)

    Returns:
        A TutoringState with students, lessons and recurring schedules
    """
    today = today or date.today()
    state = TutoringState()

    def ago(days: int) -> str:
        return (today - timedelta(days=days)).isoformat()

    students = [
        ("Emma O'Brien", "emma.obrien@email.com", "087 123 4567", 35,
         "Beginner level. Interested in Japanese for travel."),
        ("Liam Murphy", "liam.m@email.com", "086 234 5678", 35,
         "Intermediate level. Studying for JLPT N3."),
        ("Sophie Chen", "sophie.chen@email.com", "085 345 6789", 30,
         "Heritage speaker, needs help with reading and writing."),
    ]
    for name, email, phone, rate, notes in students:
        state.students.append(Student(
            id=state.allocate_id(),
            name=name,
            email=email,
            phone=phone,
            notes=notes,
            hourly_rate=Decimal(rate),
            created_at=ago(90) + "T10:00:00",
        ))
    emma, liam, sophie = state.students

    history = [
        (emma, 2, 60, False, "Started basic kanji."),
        (liam, 4, 90, False, "Timed JLPT mock test, reviewed keigo."),
        (sophie, 1, 60, False, "Kanji compounds and a short dialogue."),
        (liam, 8, 60, False, "Conversation-only session."),
        (emma, 35, 90, True, "Practical phrases before a Tokyo trip."),
        (liam, 21, 120, True, "Weekend intensive on N3 grammar."),
        (sophie, 28, 120, True, "Double lesson, reading practice."),
        (sophie, 45, 45, True, "Short makeup lesson."),
    ]
    for student, days_ago, minutes, paid, notes in history:
        state.lessons.append(Lesson(
            id=state.allocate_id(),
            student_id=student.id,
            date=ago(days_ago),
            duration_minutes=minutes,
            hourly_rate=student.hourly_rate,
            notes=notes,
            is_paid=paid,
            created_at=ago(days_ago) + "T18:00:00",
        ))

    weekly = [
        (emma, ["tuesday"], 1, "16:00", 60, "Weekly lesson, hiragana/katakana practice"),
        (liam, ["wednesday"], 1, "18:00", 60, "JLPT N3 prep"),
        (liam, ["saturday"], 2, "10:00", 90, "Fortnightly reading intensive"),
        (sophie, ["monday", "thursday"], 1, "17:30", 60, "Kanji and reading focus"),
    ]
    for student, days, interval, time, minutes, notes in weekly:
        state.schedules.append(Schedule(
            id=state.allocate_id(),
            student_id=student.id,
            is_recurring=True,
            time=time,
            duration_minutes=minutes,
            notes=notes,
            created_at=ago(60) + "T09:00:00",
            days_of_week=days,
            interval=interval,
        ))

    return state
