"""
Schedule and schedule-exception validators.

A recurring schedule needs at least one weekday and an interval of one
week or more; a one-off needs a date. Exceptions need an action, and a
reschedule needs a target date.
"""

from typing import Dict, Any, List

from ..models.schedule import FREQUENCY_INTERVALS, ExceptionAction
from ..scheduling.calendar_math import DAY_NAMES
from .validators import Validator, ValidationResult


class ScheduleValidator(Validator):
    """
    Validator for schedule create/update payloads.

    Accepts the legacy ``day_of_week`` and ``frequency`` fields as well
    as ``days_of_week`` and ``interval``.

    Examples:
        >>> validator = ScheduleValidator()
        >>> result = validator.validate({
        ...     "student_id": 2,
        ...     "is_recurring": True,
        ...     "days_of_week": ["wednesday"],
        ...     "interval": 2,
        ...     "time": "18:00",
        ... })
        >>> result.is_valid
        True
    """

    MIN_DURATION = 15  # minutes
    MAX_DURATION = 180  # minutes

    def _raw_days(self, data: Dict[str, Any]) -> List[Any]:
        days = data.get("days_of_week")
        if not days:
            single = data.get("day_of_week")
            return [single] if single else []
        if isinstance(days, str):
            return [days]
        return list(days)

    def _validate_recurrence(self, data: Dict[str, Any], result: ValidationResult):
        days = self._raw_days(data)
        if not days:
            result.add_error("Recurring schedule needs at least one day of the week")
        for day in days:
            if not isinstance(day, str) or day.strip().lower() not in DAY_NAMES:
                result.add_error(
                    f"Invalid day of week: {day} "
                    f"(must be one of: {', '.join(DAY_NAMES)})"
                )

        interval = data.get("interval")
        if interval in (None, ""):
            interval = data.get("frequency")
        if interval not in (None, ""):
            if isinstance(interval, str) and interval.lower() in FREQUENCY_INTERVALS:
                pass
            elif isinstance(interval, bool):
                result.add_error(f"Invalid interval: {interval!r}")
            else:
                try:
                    weeks = int(interval)
                except (TypeError, ValueError):
                    result.add_error(f"Invalid interval: {interval!r}")
                else:
                    if weeks != float(interval) or weeks < 1:
                        result.add_error(
                            f"Interval must be a whole number of weeks >= 1, got {interval}"
                        )

        if data.get("end_date"):
            result.check(self.validate_date_format(data["end_date"], "end_date"))

    def validate(self, data: Dict[str, Any]) -> ValidationResult:
        result = ValidationResult(is_valid=True)

        for error in self.validate_required_fields(data, ["student_id", "time"]):
            result.add_error(error)

        if not result.is_valid:
            return result

        result.check(self.validate_id(data["student_id"], "student_id"))
        result.check(self.validate_time_format(data["time"]))

        if data.get("duration_minutes") not in (None, ""):
            error = self.validate_positive_number(data["duration_minutes"], "duration_minutes")
            if error:
                result.add_error(error)
            elif float(data["duration_minutes"]) < self.MIN_DURATION:
                result.add_error(
                    f"Duration too short: {data['duration_minutes']} minutes "
                    f"(minimum: {self.MIN_DURATION})"
                )
            elif float(data["duration_minutes"]) > self.MAX_DURATION:
                result.add_warning(
                    f"Duration unusually long: {data['duration_minutes']} minutes"
                )

        if data.get("is_recurring"):
            self._validate_recurrence(data, result)
        elif not data.get("date"):
            result.add_error("One-off schedule needs a date")
        else:
            result.check(self.validate_date_format(data["date"], "date"))

        return result


class ScheduleExceptionValidator(Validator):
    """
    Validator for skip/reschedule exception payloads.

    Examples:
        >>> validator = ScheduleExceptionValidator()
        >>> validator.validate({"date": "2024-01-17", "action": "skip"}).is_valid
        True
        >>> validator.validate({"date": "2024-01-03", "action": "reschedule"}).is_valid
        False
    """

    VALID_ACTIONS = [a.value for a in ExceptionAction]

    def validate(self, data: Dict[str, Any]) -> ValidationResult:
        result = ValidationResult(is_valid=True)

        for error in self.validate_required_fields(data, ["date", "action"]):
            result.add_error(error)

        if not result.is_valid:
            return result

        result.check(self.validate_date_format(data["date"], "date"))

        action = str(data["action"]).lower()
        if action not in self.VALID_ACTIONS:
            result.add_error(
                f"Invalid action: {data['action']} "
                f"(must be one of: {', '.join(self.VALID_ACTIONS)})"
            )
            return result

        if action == ExceptionAction.RESCHEDULE.value:
            if not data.get("reschedule_to"):
                result.add_error("Reschedule exception needs reschedule_to")
            else:
                result.check(self.validate_date_format(data["reschedule_to"], "reschedule_to"))

            if data.get("reschedule_time"):
                result.check(self.validate_time_format(data["reschedule_time"], "reschedule_time"))

        return result
