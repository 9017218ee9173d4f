"""Plain-text week schedule report.

The report lists every day of the week with its shifts and assignees, and
spells out each conflict with the full list of excluded employees.
"""

from pathlib import Path
from typing import Union

from shifthelper.domain.models import DaySchedule, WeekSchedule
from shifthelper.domain.timewindow import format_time_of_day

DAY_NAMES = ["Domingo", "Segunda", "Terça", "Quarta", "Quinta", "Sexta", "Sábado"]


class ReportGenerator:
    """Generates human-readable text reports of a week schedule."""

    def generate(self, week: WeekSchedule, output_path: Union[str, Path]) -> str:
        """Generate the report, save it to a file and return it."""
        content = self._generate_content(week)
        Path(output_path).write_text(content, encoding="utf-8")
        return content

    def generate_to_string(self, week: WeekSchedule) -> str:
        return self._generate_content(week)

    def _generate_content(self, week: WeekSchedule) -> str:
        lines = []

        lines.append("=" * 72)
        lines.append(f"WEEK SCHEDULE - {week.week_start_date} to {week.week_end_date}")
        lines.append("=" * 72)
        lines.append(f"Shifts: {week.total_shifts}")
        lines.append(f"Assignments: {week.total_assignments}")
        lines.append(f"Conflicts: {week.total_conflicts}")

        for day in week.days:
            lines.append("")
            lines.extend(self._day_lines(day))

        lines.append("")
        return "\n".join(lines)

    def _day_lines(self, day: DaySchedule) -> list[str]:
        title = f"{DAY_NAMES[day.day_of_week]} {day.schedule_date}"
        lines = ["-" * 72]
        if not day.is_open:
            lines.append(f"{title}: closed")
            return lines

        hours = ""
        if day.open_time is not None and day.close_time is not None:
            hours = f" ({format_time_of_day(day.open_time)}-{format_time_of_day(day.close_time)})"
        lines.append(f"{title}{hours}")

        for shift in day.shifts:
            names = ", ".join(a.name for a in shift.assignees) or "-"
            flag = "  !" if shift.is_understaffed else ""
            lines.append(
                f"  {shift.shift_label:<12} {format_time_of_day(shift.start_time)}-"
                f"{format_time_of_day(shift.end_time)}  "
                f"[{shift.assigned_count}/{shift.min_employees}] {names}{flag}"
            )

        for conflict in day.conflicts:
            lines.append(
                f"  CONFLICT {conflict.shift_label}: "
                f"{conflict.available} of {conflict.required} required"
            )
            for employee in conflict.unavailable_employees:
                lines.append(f"    - {employee.name} ({employee.id}): {employee.reason}")

        return lines
