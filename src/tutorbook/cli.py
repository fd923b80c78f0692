"""
Tutorbook command line.

Usage:
    tutorbook [--data-file PATH] [--today YYYY-MM-DD] COMMAND ...

Examples:
    # Lessons coming up in the next two weeks
    tutorbook upcoming --days 14

    # Everything scheduled in January
    tutorbook calendar 2024-01-01 2024-01-31

    # Log the Wednesday lesson of schedule 20 as taught
    tutorbook complete 20 2024-01-17 --notes "Reviewed te-form"

    # Skip or move single occurrences of a recurring schedule
    tutorbook skip 20 2024-01-24
    tutorbook reschedule 20 2024-01-31 2024-02-02 --time 15:00
    tutorbook unskip 20 2024-01-24

    # Earnings and balances, CSV exports
    tutorbook summary
    tutorbook export --what lessons --output output/exports/lessons.csv
"""

import sys
import argparse
import logging
from datetime import date
from pathlib import Path
from typing import List, Optional

from .models.result import Result
from .models.schedule import Occurrence
from .scheduling.calendar_math import string_to_date
from .services.dashboard import DashboardService
from .services.schedules import ScheduleService
from .utils.config import config
from .utils.di_container import DIContainer, configure_default_services
from .utils.file_utils import generate_filename
from .utils.formatters import format_currency, format_month, format_time, format_upcoming_date
from .utils.logger import setup_logger


def parse_date_arg(value: str) -> date:
    """argparse type for YYYY-MM-DD arguments."""
    try:
        return string_to_date(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid date '{value}' (expected YYYY-MM-DD)")


def parse_arguments(argv: Optional[List[str]] = None):
    """
    Parse command-line arguments.

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        prog="tutorbook",
        description="Lesson scheduling and billing for a single tutor",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    parser.add_argument(
        "--data-file",
        help="JSON data file (overrides TUTORBOOK_DATA_FILE)"
    )
    parser.add_argument(
        "--today",
        type=parse_date_arg,
        help="Treat this date as today (default: system date)"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Logging level (default: WARNING)"
    )

    commands = parser.add_subparsers(dest="command", required=True)

    upcoming = commands.add_parser("upcoming", help="List upcoming lessons")
    upcoming.add_argument("--days", type=int, help="Window length in days")

    calendar = commands.add_parser("calendar", help="List lessons in a date range")
    calendar.add_argument("start", type=parse_date_arg)
    calendar.add_argument("end", type=parse_date_arg)

    complete = commands.add_parser("complete", help="Log a scheduled lesson as taught")
    complete.add_argument("schedule_id", type=int)
    complete.add_argument("date", type=parse_date_arg)
    complete.add_argument("--notes", help="Lesson notes (default: schedule notes)")

    skip = commands.add_parser("skip", help="Skip one occurrence")
    skip.add_argument("schedule_id", type=int)
    skip.add_argument("date", type=parse_date_arg)

    reschedule = commands.add_parser("reschedule", help="Move one occurrence")
    reschedule.add_argument("schedule_id", type=int)
    reschedule.add_argument("date", type=parse_date_arg, help="Original date")
    reschedule.add_argument("to", type=parse_date_arg, help="New date")
    reschedule.add_argument("--time", help="New time (HH:MM)")

    unskip = commands.add_parser("unskip", help="Remove a skip/reschedule exception")
    unskip.add_argument("schedule_id", type=int)
    unskip.add_argument("date", type=parse_date_arg)

    commands.add_parser("summary", help="Show earnings and outstanding balances")

    export = commands.add_parser("export", help="Export lessons or monthly totals to CSV")
    export.add_argument("--what", choices=["lessons", "monthly"], default="lessons")
    export.add_argument("--output", help="CSV path (default: OUTPUT_DIR/exports/...)")

    return parser.parse_args(argv)


def display_occurrences(occurrences: List[Occurrence], today: date):
    """Print occurrences one per line."""
    if not occurrences:
        print("No lessons scheduled.")
        return

    print("\n" + "=" * 60)
    for occ in occurrences:
        moved = f" (moved from {occ.original_date})" if occ.is_rescheduled else ""
        print(
            f"{format_upcoming_date(occ.date, today):12s} {format_time(occ.time):>8s} | "
            f"{occ.student_name:20s} | {occ.duration_minutes:3d}min | "
            f"#{occ.schedule_id}{moved}"
        )
    print("=" * 60)


def report(result: Result, success_text: str) -> int:
    """Print the outcome of a mutating command and return the exit code."""
    if result.is_failure:
        print(f"ERROR: {result.message}")
        return 1
    print(success_text)
    return 0


def display_summary(dashboard: DashboardService, today: date) -> int:
    """Print headline figures, balances and monthly totals."""
    currency = config.currency

    stats = dashboard.get_stats(today)
    balances = dashboard.unpaid_by_student()
    months = dashboard.monthly_summary()
    for result in (stats, balances, months):
        if result.is_failure:
            print(f"ERROR: {result.message}")
            return 1

    s = stats.value
    print("\n" + "=" * 60)
    print("SUMMARY")
    print("=" * 60)
    print(f"Students:               {s.total_students}")
    print(f"Lessons:                {s.total_lessons}")
    print(f"Lessons this month:     {s.monthly_lessons}")
    print(f"Earned this month:      {format_currency(s.monthly_earnings, currency)}")
    print(f"Unpaid lessons:         {s.unpaid_lessons}")
    print(f"Unpaid total:           {format_currency(s.unpaid_amount, currency)}")

    if balances.value:
        print("\nOutstanding by student:")
        print("-" * 60)
        for b in balances.value:
            print(f"  {b.name:24s} {b.unpaid_count:3d} lesson(s)  {format_currency(b.unpaid_amount, currency)}")

    if months.value:
        print("\nBy month:")
        print("-" * 60)
        for m in months.value:
            print(
                f"  {format_month(m.month):16s} {m.lesson_count:3d} lesson(s)  "
                f"paid {format_currency(m.paid_amount, currency)}  "
                f"unpaid {format_currency(m.unpaid_amount, currency)}"
            )
    print("=" * 60)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main execution function."""
    args = parse_arguments(argv)

    logger = setup_logger("tutorbook", level=getattr(logging, args.log_level))

    try:
        if args.data_file:
            config.data_file = Path(args.data_file)
        config.validate()

        container = DIContainer()
        configure_default_services(container, config)

        schedules: ScheduleService = container.resolve(ScheduleService)
        dashboard: DashboardService = container.resolve(DashboardService)

        today = args.today or date.today()
        logger.info(f"Running '{args.command}' with today={today}")

        if args.command == "upcoming":
            result = schedules.upcoming(today=today, days=args.days)
            if result.is_failure:
                print(f"ERROR: {result.message}")
                return 1
            display_occurrences(result.value, today)
            return 0

        if args.command == "calendar":
            result = schedules.occurrences_between(args.start, args.end)
            if result.is_failure:
                print(f"ERROR: {result.message}")
                return 1
            display_occurrences(result.value, today)
            return 0

        if args.command == "complete":
            result = schedules.complete_occurrence(args.schedule_id, args.date, args.notes)
            text = ""
            if result.is_success:
                lesson = result.value
                text = (
                    f"✓ Logged lesson #{lesson.id} on {lesson.date} "
                    f"({format_currency(lesson.amount, config.currency)})"
                )
            return report(result, text)

        if args.command == "skip":
            result = schedules.add_exception(
                args.schedule_id,
                {"date": args.date.isoformat(), "action": "skip"}
            )
            return report(result, f"✓ Skipping {args.date}")

        if args.command == "reschedule":
            result = schedules.add_exception(
                args.schedule_id,
                {
                    "date": args.date.isoformat(),
                    "action": "reschedule",
                    "reschedule_to": args.to.isoformat(),
                    "reschedule_time": args.time,
                }
            )
            return report(result, f"✓ Moved {args.date} to {args.to}")

        if args.command == "unskip":
            result = schedules.remove_exception(args.schedule_id, args.date)
            return report(result, f"✓ {result.message}")

        if args.command == "summary":
            return display_summary(dashboard, today)

        if args.command == "export":
            if args.what == "lessons":
                path = Path(args.output or config.output_dir / "exports" / generate_filename("lessons", "csv"))
                result = dashboard.export_lessons_csv(path)
            else:
                path = Path(args.output or config.output_dir / "exports" / generate_filename("monthly", "csv"))
                result = dashboard.export_monthly_summary_csv(path)
            return report(result, f"✓ Saved to {path}")

        print(f"ERROR: Unknown command {args.command}")
        return 1

    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        logger.info("Interrupted by user")
        return 130

    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        print(f"\nERROR: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
