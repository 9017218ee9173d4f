"""Shift coverage planning for a single day.

This module assigns employees to a day's shifts up to each shift's minimum
headcount and reports every shift that stays understaffed.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence

from shifthelper.domain.models import (
    AssignedEmployee,
    AssignedShift,
    Employee,
    OperatingHours,
    ShiftConflict,
    ShiftDefinition,
    UnavailableEmployee,
)
from shifthelper.domain.policies import (
    AssignmentOrderPolicy,
    DefaultAssignmentOrderPolicy,
)
from shifthelper.scheduling.availability import AvailabilityResolver
from shifthelper.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ShiftPlan:
    """Result of planning one shift.

    Attributes:
        shift: The shift with its assignees.
        conflict: Conflict report if the shift is understaffed.
        assigned_ids: Employees assigned so far this day, including this shift.
    """

    shift: AssignedShift
    conflict: Optional[ShiftConflict]
    assigned_ids: frozenset[str]


@dataclass(frozen=True)
class DayPlan:
    """Result of planning one day."""

    shifts: tuple[AssignedShift, ...] = ()
    conflicts: tuple[ShiftConflict, ...] = ()
    assigned_ids: frozenset[str] = frozenset()


class ShiftCoveragePlanner:
    """Assigns available employees to a day's shifts.

    Shift definitions are processed in the order given, so earlier
    definitions claim employees first. Within a shift, available employees
    are assigned in the order chosen by the assignment order policy. An
    employee works at most one shift per day.

    Example:
        >>> planner = ShiftCoveragePlanner()
        >>> plan = planner.plan_day(date(2024, 1, 16), hours, shifts, employees)
        >>> [c.shift_label for c in plan.conflicts]
        ['Noite']
    """

    def __init__(
        self,
        resolver: Optional[AvailabilityResolver] = None,
        order_policy: Optional[AssignmentOrderPolicy] = None,
    ):
        self.resolver = resolver or AvailabilityResolver()
        self.order_policy = order_policy or DefaultAssignmentOrderPolicy()

    def plan_day(
        self,
        schedule_date: date,
        operating_hours: OperatingHours,
        shift_definitions: Sequence[ShiftDefinition],
        active_employees: Sequence[Employee],
        already_assigned: frozenset[str] = frozenset(),
    ) -> DayPlan:
        """Plan every shift of a day.

        Args:
            schedule_date: Date being planned.
            operating_hours: Opening hours for this date's day of week.
            shift_definitions: Shifts in priority order.
            active_employees: Employees eligible for assignment.
            already_assigned: IDs that must not be assigned again this day.

        Returns:
            DayPlan with one AssignedShift per definition and the conflicts.
            Closed days yield an empty plan.
        """
        if not operating_hours.is_open:
            logger.debug("%s: closed, nothing to plan", schedule_date)
            return DayPlan(assigned_ids=already_assigned)

        shifts: list[AssignedShift] = []
        conflicts: list[ShiftConflict] = []
        assigned_ids = already_assigned

        for definition in shift_definitions:
            plan = self.plan_shift(
                schedule_date, definition, active_employees, assigned_ids
            )
            shifts.append(plan.shift)
            if plan.conflict is not None:
                conflicts.append(plan.conflict)
            assigned_ids = plan.assigned_ids

        return DayPlan(
            shifts=tuple(shifts),
            conflicts=tuple(conflicts),
            assigned_ids=assigned_ids,
        )

    def plan_shift(
        self,
        schedule_date: date,
        definition: ShiftDefinition,
        employees: Sequence[Employee],
        assigned_ids: frozenset[str] = frozenset(),
    ) -> ShiftPlan:
        """Plan a single shift given who is already working that day.

        Args:
            schedule_date: Date of the shift.
            definition: Shift to staff.
            employees: Candidate employees, in caller order.
            assigned_ids: IDs already assigned to an earlier shift this day.

        Returns:
            ShiftPlan carrying the new set of assigned IDs.
        """
        available: list[Employee] = []
        unavailable: list[UnavailableEmployee] = []

        for employee in employees:
            if employee.id in assigned_ids:
                continue
            decision = self.resolver.resolve(
                employee, schedule_date, definition.time_range
            )
            if decision.available:
                available.append(employee)
            else:
                unavailable.append(
                    UnavailableEmployee(
                        id=employee.id,
                        name=employee.name,
                        reason=decision.reason
                        or self.resolver.messages.generic_unavailable(),
                    )
                )

        ordered = self.order_policy.order(available)
        to_assign = min(definition.min_employees, len(ordered))
        chosen = ordered[:to_assign]

        shift = AssignedShift(
            shift_id=definition.id,
            shift_type=definition.type,
            shift_label=definition.label,
            start_time=definition.start_time,
            end_time=definition.end_time,
            min_employees=definition.min_employees,
            assignees=tuple(AssignedEmployee(id=e.id, name=e.name) for e in chosen),
        )

        conflict = None
        if to_assign < definition.min_employees:
            conflict = ShiftConflict(
                shift_id=definition.id,
                shift_type=definition.type,
                shift_label=definition.label,
                required=definition.min_employees,
                available=to_assign,
                unavailable_employees=tuple(unavailable),
            )
            logger.debug(
                "%s %s: understaffed (%d/%d), %d unavailable",
                schedule_date,
                definition.label,
                to_assign,
                definition.min_employees,
                len(unavailable),
            )

        return ShiftPlan(
            shift=shift,
            conflict=conflict,
            assigned_ids=assigned_ids | {e.id for e in chosen},
        )
