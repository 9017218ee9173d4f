"""Weekly scheduler for seven-day schedule generation.

This module provides the WeeklyScheduler class that runs the shift coverage
planner once per date of a week and assembles the results into a
WeekSchedule. Each day starts with a clean slate: assignment state does not
carry over between days.
"""

from datetime import date
from typing import Optional, Sequence

from shifthelper.domain.models import (
    DaySchedule,
    Employee,
    Establishment,
    WeekSchedule,
)
from shifthelper.domain.policies import SchedulerConfig
from shifthelper.domain.timewindow import day_of_week, week_dates
from shifthelper.scheduling.availability import AvailabilityResolver
from shifthelper.scheduling.planner import ShiftCoveragePlanner
from shifthelper.utils.logger import get_logger
from shifthelper.validation.validator import (
    validate_inputs,
    validate_shift_definitions,
)

logger = get_logger(__name__)


class WeeklyScheduler:
    """Builds a week schedule for an establishment.

    The builder is a pure function of its inputs: it never mutates the
    establishment or employees, and two calls with identical inputs produce
    equal schedules.

    Example:
        >>> scheduler = WeeklyScheduler()
        >>> week = scheduler.build_week(date(2024, 1, 14), establishment, employees)
        >>> week.total_conflicts
        2
    """

    def __init__(self, config: Optional[SchedulerConfig] = None):
        """Initialize scheduler with configuration.

        Args:
            config: Default shifts, reason messages and ordering policy.
        """
        self.config = config or SchedulerConfig()
        self.resolver = AvailabilityResolver(messages=self.config.messages)
        self.planner = ShiftCoveragePlanner(
            resolver=self.resolver,
            order_policy=self.config.order_policy,
        )

    def build_week(
        self,
        week_start_date: date,
        establishment: Establishment,
        employees: Sequence[Employee],
    ) -> WeekSchedule:
        """Generate the schedule for the seven dates starting at week_start_date.

        Args:
            week_start_date: First date of the week. Callers normalize it to
                a Sunday; it is not re-derived here.
            establishment: Operating hours and shift definitions.
            employees: All employees; only active ones are assigned.

        Returns:
            WeekSchedule with one DaySchedule per date.

        Raises:
            InputValidationError: If any input is malformed.
        """
        validate_inputs(week_start_date, establishment, employees)
        shift_definitions = establishment.get_shift_definitions(
            self.config.default_shift_definitions
        )
        if establishment.settings.shift_definitions is None:
            validate_shift_definitions(shift_definitions, "defaultShiftDefinitions")

        active_employees = [e for e in employees if e.is_active]
        logger.info(
            "Building week %s for %s: %d active of %d employees, %d shift definitions",
            week_start_date,
            establishment.id,
            len(active_employees),
            len(employees),
            len(shift_definitions),
        )

        days = []
        for schedule_date in week_dates(week_start_date):
            hours = establishment.get_operating_hours(day_of_week(schedule_date))
            plan = self.planner.plan_day(
                schedule_date, hours, shift_definitions, active_employees
            )
            days.append(
                DaySchedule(
                    schedule_date=schedule_date,
                    is_open=hours.is_open,
                    open_time=hours.open_time if hours.is_open else None,
                    close_time=hours.close_time if hours.is_open else None,
                    shifts=plan.shifts,
                    conflicts=plan.conflicts,
                )
            )

        week = WeekSchedule(week_start_date=week_start_date, days=tuple(days))
        logger.info(
            "Week %s for %s: %d shifts, %d assignments, %d conflicts",
            week_start_date,
            establishment.id,
            week.total_shifts,
            week.total_assignments,
            week.total_conflicts,
        )
        return week

    def build_week_with_stats(
        self,
        week_start_date: date,
        establishment: Establishment,
        employees: Sequence[Employee],
    ) -> tuple[WeekSchedule, dict]:
        """Generate the week schedule and return statistics.

        Returns:
            Tuple of (schedule, stats_dict).
        """
        week = self.build_week(week_start_date, establishment, employees)
        stats = self._calculate_stats(week, employees)
        return week, stats

    def _calculate_stats(
        self,
        week: WeekSchedule,
        employees: Sequence[Employee],
    ) -> dict:
        """Calculate schedule statistics."""
        active_ids = [e.id for e in employees if e.is_active]
        scheduled_ids = {
            employee_id
            for day in week.days
            for employee_id in day.assigned_employee_ids()
        }

        by_day = {}
        for day in week.days:
            by_day[day.schedule_date] = {
                "is_open": day.is_open,
                "shifts": len(day.shifts),
                "assignments": day.assignment_count,
                "conflicts": len(day.conflicts),
            }

        return {
            "total_employees": len(employees),
            "active_employees": len(active_ids),
            "scheduled_employees": len(scheduled_ids),
            "unscheduled_employees": [i for i in active_ids if i not in scheduled_ids],
            "total_shifts": week.total_shifts,
            "total_assignments": week.total_assignments,
            "total_conflicts": week.total_conflicts,
            "by_day": by_day,
        }
