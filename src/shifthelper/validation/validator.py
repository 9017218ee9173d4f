"""Validation of engine inputs and generated schedules.

Input checks fail fast with an InputValidationError naming the offending
field. Schedule checks verify the invariants every generated week must hold
and report them as a ValidationResult.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Optional, Sequence

from shifthelper.domain.models import (
    CustomHoursException,
    Employee,
    Establishment,
    ShiftDefinition,
    WeekSchedule,
)
from shifthelper.errors import InputValidationError


def validate_week_start(week_start_date: Optional[date]) -> None:
    """Reject a missing week start date."""
    if week_start_date is None or week_start_date == "":
        raise InputValidationError("weekStartDate", "is required")
    if not isinstance(week_start_date, date) or isinstance(week_start_date, datetime):
        raise InputValidationError(
            "weekStartDate", f"expected a date, got {week_start_date!r}"
        )


def validate_shift_definitions(
    definitions: Sequence[ShiftDefinition],
    field_name: str = "shiftDefinitions",
) -> None:
    """Reject non-positive headcounts and duplicate IDs."""
    seen: set[str] = set()
    for i, definition in enumerate(definitions):
        path = f"{field_name}[{i}]"
        if not definition.id:
            raise InputValidationError(f"{path}.id", "is required")
        if definition.id in seen:
            raise InputValidationError(f"{path}.id", f"duplicate id {definition.id!r}")
        seen.add(definition.id)
        if definition.min_employees <= 0:
            raise InputValidationError(
                f"{path}.minEmployees",
                f"must be at least 1, got {definition.min_employees}",
            )


def validate_establishment(establishment: Establishment) -> None:
    """Reject out-of-range weekday keys and bad shift definitions."""
    for dow in establishment.operating_hours:
        if not isinstance(dow, int) or not 0 <= dow <= 6:
            raise InputValidationError(
                f"operatingHours[{dow!r}]", "day of week must be 0..6"
            )
    if establishment.settings.shift_definitions is not None:
        validate_shift_definitions(
            establishment.settings.shift_definitions,
            "settings.shiftDefinitions",
        )


def validate_employee(employee: Employee, field_name: str = "employee") -> None:
    """Reject out-of-range weekday keys and inverted exception dates."""
    if not employee.id:
        raise InputValidationError(f"{field_name}.id", "is required")
    for dow in employee.recurring_availability:
        if not isinstance(dow, int) or not 0 <= dow <= 6:
            raise InputValidationError(
                f"{field_name}.recurringAvailability[{dow!r}]",
                "day of week must be 0..6",
            )
    for i, exception in enumerate(employee.temporary_availability):
        path = f"{field_name}.temporaryAvailability[{i}]"
        if exception.end_date < exception.start_date:
            raise InputValidationError(
                f"{path}.endDate",
                f"{exception.end_date} is before startDate {exception.start_date}",
            )
        if isinstance(exception, CustomHoursException) and exception.hours is None:
            raise InputValidationError(f"{path}.hours", "required for custom exceptions")


def validate_inputs(
    week_start_date: Optional[date],
    establishment: Establishment,
    employees: Sequence[Employee],
) -> None:
    """Validate everything a week build consumes, failing on the first error."""
    validate_week_start(week_start_date)
    validate_establishment(establishment)
    for i, employee in enumerate(employees):
        validate_employee(employee, f"employees[{i}]")


class ValidationErrorType(Enum):
    """Types of schedule validation errors."""

    WRONG_DAY_COUNT = "wrong_day_count"
    NON_CONSECUTIVE_DATES = "non_consecutive_dates"
    CLOSED_DAY_HAS_SHIFTS = "closed_day_has_shifts"
    OVER_ASSIGNED = "over_assigned"
    MISSING_CONFLICT = "missing_conflict"
    UNEXPECTED_CONFLICT = "unexpected_conflict"
    DOUBLE_BOOKED = "double_booked"
    UNKNOWN_EMPLOYEE = "unknown_employee"
    INACTIVE_EMPLOYEE = "inactive_employee"


@dataclass
class ValidationError:
    """A single schedule validation error."""

    error_type: ValidationErrorType
    message: str
    schedule_date: Optional[date] = None
    employee_id: Optional[str] = None
    shift_id: Optional[str] = None

    def __str__(self) -> str:
        parts = [f"[{self.error_type.value}]"]
        if self.schedule_date:
            parts.append(f"{self.schedule_date}:")
        if self.employee_id:
            parts.append(f"Employee {self.employee_id}:")
        parts.append(self.message)
        if self.shift_id is not None:
            parts.append(f"(shift {self.shift_id})")
        return " ".join(parts)


@dataclass
class ValidationResult:
    """Result of validating a schedule."""

    is_valid: bool
    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def add_error(self, error: ValidationError) -> None:
        """Add an error and mark as invalid."""
        self.errors.append(error)
        self.is_valid = False

    def add_warning(self, warning: str) -> None:
        """Add a warning (doesn't affect validity)."""
        self.warnings.append(warning)


class ScheduleValidator:
    """Validates generated week schedules against the engine's invariants.

    Example:
        >>> validator = ScheduleValidator()
        >>> result = validator.validate(week, establishment, employees)
        >>> if not result.is_valid:
        ...     for error in result.errors:
        ...         print(error)
    """

    def validate(
        self,
        week: WeekSchedule,
        establishment: Establishment,
        employees: Sequence[Employee],
    ) -> ValidationResult:
        """Validate a complete week schedule.

        Args:
            week: The schedule to validate.
            establishment: Establishment the schedule was built for.
            employees: Employees the schedule was built from.

        Returns:
            ValidationResult with is_valid flag and any errors.
        """
        result = ValidationResult(is_valid=True)
        employees_map = {e.id: e for e in employees}

        self._validate_dates(week, result)

        for day in week.days:
            hours = establishment.get_operating_hours(day.day_of_week)
            if not hours.is_open:
                if day.shifts or day.conflicts:
                    result.add_error(
                        ValidationError(
                            error_type=ValidationErrorType.CLOSED_DAY_HAS_SHIFTS,
                            message="Closed day has shifts or conflicts",
                            schedule_date=day.schedule_date,
                        )
                    )
                continue

            conflict_ids = {c.shift_id for c in day.conflicts}
            for shift in day.shifts:
                if shift.assigned_count > shift.min_employees:
                    result.add_error(
                        ValidationError(
                            error_type=ValidationErrorType.OVER_ASSIGNED,
                            message=(
                                f"{shift.assigned_count} assigned, "
                                f"minimum is {shift.min_employees}"
                            ),
                            schedule_date=day.schedule_date,
                            shift_id=shift.shift_id,
                        )
                    )
                if shift.is_understaffed and shift.shift_id not in conflict_ids:
                    result.add_error(
                        ValidationError(
                            error_type=ValidationErrorType.MISSING_CONFLICT,
                            message="Understaffed shift has no conflict report",
                            schedule_date=day.schedule_date,
                            shift_id=shift.shift_id,
                        )
                    )
                if not shift.is_understaffed and shift.shift_id in conflict_ids:
                    result.add_error(
                        ValidationError(
                            error_type=ValidationErrorType.UNEXPECTED_CONFLICT,
                            message="Fully staffed shift reported as conflict",
                            schedule_date=day.schedule_date,
                            shift_id=shift.shift_id,
                        )
                    )

            self._validate_assignees(day, employees_map, result)

        if week.total_conflicts:
            result.add_warning(
                f"{week.total_conflicts} shift(s) below minimum headcount"
            )

        return result

    def _validate_dates(self, week: WeekSchedule, result: ValidationResult) -> None:
        if len(week.days) != 7:
            result.add_error(
                ValidationError(
                    error_type=ValidationErrorType.WRONG_DAY_COUNT,
                    message=f"Expected 7 days, got {len(week.days)}",
                )
            )
        for i, day in enumerate(week.days):
            expected = week.week_start_date + timedelta(days=i)
            if day.schedule_date != expected:
                result.add_error(
                    ValidationError(
                        error_type=ValidationErrorType.NON_CONSECUTIVE_DATES,
                        message=f"Expected {expected}, got {day.schedule_date}",
                        schedule_date=day.schedule_date,
                    )
                )

    def _validate_assignees(self, day, employees_map, result: ValidationResult) -> None:
        seen: set[str] = set()
        for shift in day.shifts:
            for assignee in shift.assignees:
                employee = employees_map.get(assignee.id)
                if employee is None:
                    result.add_error(
                        ValidationError(
                            error_type=ValidationErrorType.UNKNOWN_EMPLOYEE,
                            message="Unknown employee ID",
                            schedule_date=day.schedule_date,
                            employee_id=assignee.id,
                            shift_id=shift.shift_id,
                        )
                    )
                elif not employee.is_active:
                    result.add_error(
                        ValidationError(
                            error_type=ValidationErrorType.INACTIVE_EMPLOYEE,
                            message=f"Employee status is {employee.status.value}",
                            schedule_date=day.schedule_date,
                            employee_id=assignee.id,
                            shift_id=shift.shift_id,
                        )
                    )
                if assignee.id in seen:
                    result.add_error(
                        ValidationError(
                            error_type=ValidationErrorType.DOUBLE_BOOKED,
                            message="Assigned to more than one shift",
                            schedule_date=day.schedule_date,
                            employee_id=assignee.id,
                            shift_id=shift.shift_id,
                        )
                    )
                seen.add(assignee.id)
