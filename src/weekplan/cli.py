"""Command-line interface for the weekplan scheduling engine."""

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Any, Optional

from weekplan.config import get_settings
from weekplan.domain.calendar_math import iso_week_of
from weekplan.domain.errors import ScheduleError
from weekplan.domain.models import format_duration
from weekplan.domain.month_grid import build_month_grid, grid_rows
from weekplan.domain.policies import DefaultWeekRangePolicy, status_policy_for
from weekplan.logging_config import setup_logging
from weekplan.output.payload import PayloadAssembler
from weekplan.output.summary_generator import SummaryGenerator
from weekplan.scheduling.collection import ScheduleCollection
from weekplan.scheduling.week_cursor import WeekCursor
from weekplan.validation.validator import ScheduleValidator

logger = logging.getLogger(__name__)


def _load_records(path: str) -> list[dict[str, Any]]:
    """Read stored schedules from a JSON file.

    The file holds one record, a list of records, or a service response
    with the records under ``data``.
    """
    content = json.loads(Path(path).read_text(encoding="utf-8"))
    if isinstance(content, dict) and "data" in content:
        content = content["data"]
    if isinstance(content, dict):
        return [content]
    return list(content)


def run_week(
    target: Optional[date] = None,
    year: Optional[int] = None,
    week_number: Optional[int] = None,
    locale: str = "fr",
) -> None:
    """Print the dates and neighbours of an ISO week."""
    if year is not None and week_number is not None:
        cursor = WeekCursor(year, week_number)
    else:
        cursor = WeekCursor.current(target)

    print(f"{cursor}: {cursor.label(locale)}")
    for d in cursor.dates:
        print(f"  {d.strftime('%a')} {d.isoformat()}")
    print(f"Previous: {cursor.previous()}  Next: {cursor.next()}")


def run_month(year: int, month: int) -> None:
    """Print the 6-week grid of a month with ISO week numbers."""
    cells = build_month_grid(year, month)
    print(f"{year}-{month:02d}")
    print(" Wk  Mo Tu We Th Fr Sa Su")
    for row in grid_rows(cells):
        _, week_number = iso_week_of(row[0].date)
        days = " ".join(
            f"{cell.date.day:>2}" if cell.in_target_month else " ."
            for cell in row
        )
        print(f" {week_number:>2}  {days}")


def run_validate(path: str, actor_id: Optional[str] = None) -> bool:
    """Validate stored schedules as they would be resubmitted.

    Returns:
        True if every record passes.
    """
    settings = get_settings()
    validator = ScheduleValidator(
        week_policy=DefaultWeekRangePolicy.from_settings(settings),
        status_policy=status_policy_for(settings.status_workflow),
    )
    assembler = PayloadAssembler(validator)

    all_valid = True
    for position, data in enumerate(_load_records(path), start=1):
        try:
            record = assembler.from_wire_payload(data)
        except ScheduleError as exc:
            all_valid = False
            print(f"Record {position}: FAILED")
            print(f"    - {exc}")
            continue

        result = validator.validate(record, actor_id)
        label = (
            f"Record {position} (employee {record.employee_id}, "
            f"week {record.week_number}/{record.year}, "
            f"{format_duration(record.total_weekly_minutes)})"
        )
        if result.is_valid:
            print(f"{label}: PASSED")
        else:
            all_valid = False
            print(f"{label}: FAILED ({len(result.errors)} errors)")
            for error in result.errors:
                print(f"    - {error}")
        for warning in result.warnings:
            print(f"    warning: {warning}")

    return all_valid


def run_summary(
    path: str,
    year: int,
    week_number: int,
    contracts_path: Optional[str] = None,
    output_path: Optional[str] = None,
    locale: str = "fr",
) -> None:
    """Print or save the text summary of a week."""
    assembler = PayloadAssembler()
    collection = ScheduleCollection(assembler.from_wire_records(_load_records(path)))
    records = collection.for_week(year, week_number)
    logger.info("Loaded %s schedules for week %s/%s", len(records), week_number, year)

    contract_hours = None
    if contracts_path:
        contract_hours = {
            str(eid): float(hours)
            for eid, hours in json.loads(
                Path(contracts_path).read_text(encoding="utf-8")
            ).items()
        }

    generator = SummaryGenerator(locale=locale)
    if output_path:
        generator.generate(records, year, week_number, output_path, contract_hours)
        print(f"Summary written to {output_path}")
    else:
        print(generator.generate_to_string(records, year, week_number, contract_hours))


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for CLI."""
    settings = get_settings()

    parser = argparse.ArgumentParser(
        description="weekplan - Weekly Schedule Tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s week                          Show the current ISO week
  %(prog)s week --date 2024-12-31        Show the week containing a date
  %(prog)s week --year 2024 --week 17    Show a given week
  %(prog)s month 2024 9                  Show the September 2024 grid

  %(prog)s validate schedules.json --actor U1
  %(prog)s summary schedules.json --year 2025 --week 10 --contracts contracts.json
        """,
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help=f"Logging level (default: {settings.log_level})",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Week command
    week_parser = subparsers.add_parser("week", help="Show the dates of an ISO week")
    week_parser.add_argument(
        "--date", "-d",
        type=date.fromisoformat,
        help="Any date of the week (default: today)",
    )
    week_parser.add_argument("--year", "-y", type=int, help="ISO week-year")
    week_parser.add_argument("--week", "-w", type=int, help="ISO week number")
    week_parser.add_argument(
        "--locale", "-l",
        type=str,
        default=settings.locale,
        choices=["fr", "en"],
        help=f"Label locale (default: {settings.locale})",
    )

    # Month command
    month_parser = subparsers.add_parser("month", help="Show the calendar grid of a month")
    month_parser.add_argument("year", type=int)
    month_parser.add_argument("month", type=int)

    # Validate command
    validate_parser = subparsers.add_parser(
        "validate",
        help="Validate stored schedules from a JSON file"
    )
    validate_parser.add_argument("file", type=str, help="JSON file of schedules")
    validate_parser.add_argument(
        "--actor", "-a",
        type=str,
        help="Acting user (default: each record's updatedBy)",
    )

    # Summary command
    summary_parser = subparsers.add_parser(
        "summary",
        help="Print the text summary of a week"
    )
    summary_parser.add_argument("file", type=str, help="JSON file of schedules")
    summary_parser.add_argument("--year", "-y", type=int, required=True)
    summary_parser.add_argument("--week", "-w", type=int, required=True)
    summary_parser.add_argument(
        "--contracts", "-c",
        type=str,
        help="JSON file mapping employee ID to weekly contract hours",
    )
    summary_parser.add_argument(
        "--output", "-o",
        type=str,
        help="Output text file path",
    )
    summary_parser.add_argument(
        "--locale", "-l",
        type=str,
        default=settings.locale,
        choices=["fr", "en"],
    )

    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    try:
        if args.command == "week":
            if (args.year is None) != (args.week is None):
                parser.error("--year and --week must be given together")
            run_week(args.date, args.year, args.week, args.locale)
            return 0
        elif args.command == "month":
            run_month(args.year, args.month)
            return 0
        elif args.command == "validate":
            return 0 if run_validate(args.file, args.actor) else 1
        elif args.command == "summary":
            run_summary(
                args.file,
                args.year,
                args.week,
                args.contracts,
                args.output,
                args.locale,
            )
            return 0
        else:
            parser.print_help()
            return 1
    except ScheduleError as exc:
        logger.error("%s", exc)
        print(f"Error: {exc}", file=sys.stderr)
        return 2
    except (OSError, ValueError) as exc:
        # Unreadable file or invalid JSON
        logger.error("%s", exc)
        print(f"Error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
