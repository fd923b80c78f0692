"""
Unit tests for the command line.
"""

import json
import pytest

from tutorbook.cli import main


STORE = {
    "students": [
        {"id": 1, "name": "Liam Murphy", "hourly_rate": 35, "created_at": "2024-01-01T09:00:00Z"},
    ],
    "lessons": [
        {"id": 2, "student_id": 1, "date": "2024-01-10", "duration_minutes": 60,
         "hourly_rate": 35, "is_paid": False},
    ],
    "payments": [],
    "schedules": [
        {"id": 20, "student_id": 1, "is_recurring": True, "days_of_week": ["wednesday"],
         "interval": 2, "time": "18:00", "duration_minutes": 60,
         "created_at": "2024-01-01T09:00:00Z"},
    ],
    "nextId": 21,
}


@pytest.fixture
def data_file(tmp_path):
    path = tmp_path / "tutoring-data.json"
    path.write_text(json.dumps(STORE), encoding="utf-8")
    return path


def run(data_file, *args):
    return main(["--data-file", str(data_file), "--today", "2024-01-01", *args])


def stored(data_file):
    return json.loads(data_file.read_text(encoding="utf-8"))


class TestCommands:
    """Test cases for CLI subcommands."""

    def test_upcoming(self, data_file, capsys):
        assert run(data_file, "upcoming", "--days", "14") == 0

        out = capsys.readouterr().out
        assert "Liam Murphy" in out
        assert "6:00 PM" in out

    def test_upcoming_empty(self, data_file, capsys):
        assert run(data_file, "upcoming", "--days", "1") == 0

        assert "No lessons scheduled." in capsys.readouterr().out

    def test_calendar(self, data_file, capsys):
        assert run(data_file, "calendar", "2024-01-01", "2024-01-31") == 0

        assert capsys.readouterr().out.count("Liam Murphy") == 3

    def test_complete(self, data_file, capsys):
        assert run(data_file, "complete", "20", "2024-01-17", "--notes", "Reviewed te-form") == 0

        lesson = stored(data_file)["lessons"][-1]
        assert lesson["date"] == "2024-01-17"
        assert lesson["notes"] == "Reviewed te-form"
        assert "€35.00" in capsys.readouterr().out

    def test_complete_unknown_schedule(self, data_file, capsys):
        assert run(data_file, "complete", "99", "2024-01-17") == 1

        assert "Schedule not found" in capsys.readouterr().out

    def test_skip_reschedule_unskip(self, data_file):
        assert run(data_file, "skip", "20", "2024-01-17") == 0
        assert stored(data_file)["schedules"][0]["exceptions"][0]["action"] == "skip"

        assert run(data_file, "reschedule", "20", "2024-01-17", "2024-01-18", "--time", "15:00") == 0
        exception = stored(data_file)["schedules"][0]["exceptions"][0]
        assert exception["reschedule_to"] == "2024-01-18"
        assert exception["reschedule_time"] == "15:00"

        assert run(data_file, "unskip", "20", "2024-01-17") == 0
        assert stored(data_file)["schedules"][0]["exceptions"] == []

    def test_reschedule_bad_time(self, data_file):
        assert run(data_file, "reschedule", "20", "2024-01-17", "2024-01-18", "--time", "3pm") == 1

    def test_summary(self, data_file, capsys):
        assert run(data_file, "summary") == 0

        out = capsys.readouterr().out
        assert "Unpaid total:" in out
        assert "€35.00" in out
        assert "January 2024" in out

    def test_export(self, data_file, tmp_path):
        output = tmp_path / "out" / "lessons.csv"

        assert run(data_file, "export", "--what", "lessons", "--output", str(output)) == 0
        assert output.exists()

    def test_bad_date_argument(self, data_file):
        with pytest.raises(SystemExit):
            run(data_file, "skip", "20", "17/01/2024")
