"""Command-line interface for the Shift Helper scheduling tool."""

import argparse
import json
import sys
from datetime import date, datetime, time, timedelta, timezone
from pathlib import Path
from typing import Optional

from shifthelper.domain.models import (
    AvailableException,
    Employee,
    EmployeeStatus,
    Establishment,
    OperatingHours,
    RecurringDayAvailability,
    UnavailableException,
    WeekSchedule,
)
from shifthelper.domain.timewindow import week_start_for
from shifthelper.errors import InputValidationError
from shifthelper.output.pdf_generator import PDFGenerator
from shifthelper.output.report_generator import ReportGenerator
from shifthelper.scheduling.weekly_scheduler import WeeklyScheduler
from shifthelper.serialization import (
    employees_from_list,
    establishment_from_dict,
    parse_date,
    week_schedule_to_dict,
)
from shifthelper.utils.logger import configure_logging, get_logger
from shifthelper.validation.validator import ScheduleValidator

logger = get_logger(__name__)

EXIT_INPUT_ERROR = 2


def create_sample_establishment() -> Establishment:
    """Create a sample establishment open Monday to Saturday, closed Sunday."""
    open_day = OperatingHours(is_open=True, open_time=time(6, 0), close_time=time(22, 0))
    hours = {0: OperatingHours.closed()}
    for dow in range(1, 7):
        hours[dow] = open_day
    return Establishment(id="est-demo", name="Padaria Central", operating_hours=hours)


def create_sample_employees(
    count: int = 8,
    week_start: Optional[date] = None,
) -> list[Employee]:
    """Create sample employees for testing.

    Args:
        count: Number of employees to create.
        week_start: Sunday of the week the temporary exceptions fall in.
            If None, uses the current week.
    """
    if week_start is None:
        week_start = week_start_for(date.today())

    names = [
        "Ana", "Bruno", "Carla", "Diego", "Eduarda", "Felipe", "Gabriela",
        "Henrique", "Isabela", "João", "Larissa", "Marcos", "Natália", "Otávio",
    ]
    updated_base = datetime(2024, 1, 1, tzinfo=timezone.utc)

    employees = []
    for i in range(count):
        name = names[i % len(names)]
        if i >= len(names):
            name = f"{name} {i // len(names) + 1}"

        recurring = {}
        if i % 4 == 1:
            # Morning person: 06:00 - 14:00 every day
            for dow in range(7):
                recurring[dow] = RecurringDayAvailability(
                    available=True, start_time=time(6, 0), end_time=time(14, 0)
                )
        elif i % 4 == 2:
            # Tuesdays off
            recurring[2] = RecurringDayAvailability(available=False)
        elif i % 4 == 3:
            # Evenings only
            for dow in range(7):
                recurring[dow] = RecurringDayAvailability(
                    available=True, start_time=time(14, 0), end_time=time(23, 0)
                )

        exceptions = ()
        if i % 5 == 4:
            # Away Wednesday and Thursday
            exceptions = (
                UnavailableException(
                    id=f"exc-{i + 1}",
                    start_date=week_start + timedelta(days=3),
                    end_date=week_start + timedelta(days=4),
                    reason="Consulta médica",
                ),
            )
        elif i % 7 == 2:
            # Covers the usual day off this week
            exceptions = (
                AvailableException(
                    id=f"exc-{i + 1}",
                    start_date=week_start + timedelta(days=2),
                    end_date=week_start + timedelta(days=2),
                ),
            )

        employees.append(
            Employee(
                id=f"E{i + 1:03d}",
                name=name,
                status=EmployeeStatus.INACTIVE if i % 9 == 8 else EmployeeStatus.ACTIVE,
                recurring_availability=recurring,
                temporary_availability=exceptions,
                availability_updated_at=updated_base + timedelta(hours=i * 7 % 11),
            )
        )

    return employees


def print_week_summary(
    week: WeekSchedule,
    establishment: Establishment,
    employees: list[Employee],
    stats: dict,
) -> None:
    """Print the schedule summary and validation result."""
    print(f"\nSchedule for {establishment.name}: {week.week_start_date} to {week.week_end_date}")
    print(f"  Employees: {stats['scheduled_employees']}/{stats['active_employees']} "
          f"active scheduled ({stats['total_employees']} total)")
    print(f"  Shifts: {week.total_shifts}")
    print(f"  Assignments: {week.total_assignments}")
    print(f"  Conflicts: {week.total_conflicts}")

    print("\n  Daily breakdown:")
    for day in week.days:
        day_stats = stats["by_day"][day.schedule_date]
        if not day_stats["is_open"]:
            print(f"    {day.schedule_date.strftime('%a %m/%d')}: closed")
            continue
        print(f"    {day.schedule_date.strftime('%a %m/%d')}: "
              f"{day_stats['assignments']} assignments, "
              f"{day_stats['conflicts']} conflicts")

    if stats["unscheduled_employees"]:
        print(f"\n  Not scheduled: {', '.join(stats['unscheduled_employees'])}")

    validator = ScheduleValidator()
    result = validator.validate(week, establishment, employees)
    if result.is_valid:
        print("\n  Validation: PASSED")
    else:
        print(f"\n  Validation: FAILED ({len(result.errors)} errors)")
        for error in result.errors[:5]:
            print(f"    - {error}")
        if len(result.errors) > 5:
            print(f"    ... and {len(result.errors) - 5} more errors")
    for warning in result.warnings:
        print(f"  Warning: {warning}")


def load_input(path: str) -> dict:
    """Read the JSON input document."""
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise InputValidationError(path, f"invalid JSON: {e.msg}") from e
    if not isinstance(data, dict):
        raise InputValidationError(path, "expected object at top level")
    return data


def run_generate(
    input_path: str,
    week: Optional[str] = None,
    json_path: Optional[str] = None,
    pdf_path: Optional[str] = None,
    report_path: Optional[str] = None,
) -> int:
    """Generate a week schedule from a JSON input document."""
    try:
        data = load_input(input_path)
        if week is not None:
            week_start = parse_date(week, "--week")
        else:
            week_start = parse_date(data.get("weekStartDate"), "weekStartDate")
        establishment = establishment_from_dict(data.get("establishment"), "establishment")
        employees = employees_from_list(data.get("employees", []))

        sunday = week_start_for(week_start)
        if sunday != week_start:
            logger.warning(
                "Week start %s is not a Sunday; using %s", week_start, sunday
            )

        scheduler = WeeklyScheduler()
        schedule, stats = scheduler.build_week_with_stats(sunday, establishment, employees)
    except InputValidationError as e:
        print(f"Input error: {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR
    except OSError as e:
        print(f"Cannot read {input_path}: {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    print_week_summary(schedule, establishment, employees, stats)
    write_outputs(schedule, json_path, pdf_path, report_path)
    return 0


def write_outputs(
    week: WeekSchedule,
    json_path: Optional[str] = None,
    pdf_path: Optional[str] = None,
    report_path: Optional[str] = None,
) -> None:
    if json_path:
        Path(json_path).write_text(
            json.dumps(week_schedule_to_dict(week), indent=2, ensure_ascii=False),
            encoding="utf-8",
        )
        print(f"\nSchedule JSON written to {json_path}")

    if report_path:
        ReportGenerator().generate(week, report_path)
        print(f"Report written to {report_path}")

    if pdf_path:
        print(f"\nGenerating PDF: {pdf_path}")
        PDFGenerator().generate(week, pdf_path)
        print("  PDF created successfully!")


def run_demo(employee_count: int = 8, pdf_path: Optional[str] = None) -> None:
    """Run a demo schedule generation for the current week."""
    print(f"Generating demo schedule for {employee_count} employees...")

    week_start = week_start_for(date.today())
    establishment = create_sample_establishment()
    employees = create_sample_employees(employee_count, week_start)

    scheduler = WeeklyScheduler()
    week, stats = scheduler.build_week_with_stats(week_start, establishment, employees)

    print_week_summary(week, establishment, employees, stats)
    print()
    print(ReportGenerator().generate_to_string(week))
    write_outputs(week, pdf_path=pdf_path)


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        description="Shift Helper - Weekly Shift Scheduling Tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s generate input.json                   Schedule the week in input.json
  %(prog)s generate input.json --week 2024-01-14 Override the week start
  %(prog)s generate input.json --json out.json   Write the schedule as JSON
  %(prog)s generate input.json --pdf week.pdf    Generate PDF output

  %(prog)s demo                                  Run demo with 8 employees
  %(prog)s demo --count 12 --pdf demo.pdf        Larger demo with PDF
        """,
    )

    # Shared options
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: $SHIFTHELPER_LOG_LEVEL or WARNING)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Generate command
    generate_parser = subparsers.add_parser(
        "generate",
        parents=[common],
        help="Generate a week schedule from a JSON input file",
    )
    generate_parser.add_argument(
        "input",
        type=str,
        help="JSON file with establishment, employees and weekStartDate",
    )
    generate_parser.add_argument(
        "--week", "-w",
        type=str,
        help="Week start date YYYY-MM-DD (overrides weekStartDate)",
    )
    generate_parser.add_argument(
        "--json", "-j",
        type=str,
        help="Output JSON file path",
    )
    generate_parser.add_argument(
        "--pdf", "-p",
        type=str,
        help="Output PDF file path",
    )
    generate_parser.add_argument(
        "--report", "-r",
        type=str,
        help="Output text report file path",
    )

    # Demo command
    demo_parser = subparsers.add_parser("demo", parents=[common], help="Run demo schedule generation")
    demo_parser.add_argument(
        "--count", "-c",
        type=int,
        default=8,
        help="Number of employees to generate (default: 8)",
    )
    demo_parser.add_argument(
        "--pdf", "-p",
        type=str,
        help="Output PDF file path",
    )

    args = parser.parse_args(argv)
    configure_logging(getattr(args, "log_level", None), force=True)

    if args.command == "generate":
        return run_generate(args.input, args.week, args.json, args.pdf, args.report)
    elif args.command == "demo":
        run_demo(args.count, args.pdf)
        return 0
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
