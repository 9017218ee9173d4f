"""Tests for schedule validation and input checks."""

import pytest
from datetime import date, time, timedelta

from shifthelper.domain.models import (
    AssignedEmployee,
    AssignedShift,
    CustomHoursException,
    DaySchedule,
    Employee,
    EmployeeStatus,
    Establishment,
    EstablishmentSettings,
    OperatingHours,
    ShiftConflict,
    ShiftDefinition,
    ShiftType,
    WeekSchedule,
)
from shifthelper.errors import InputValidationError
from shifthelper.validation.validator import (
    ScheduleValidator,
    ValidationErrorType,
    validate_employee,
    validate_establishment,
    validate_shift_definitions,
    validate_week_start,
)

WEEK_START = date(2024, 1, 14)


@pytest.fixture
def establishment():
    """Open every day except Sunday."""
    hours = {0: OperatingHours.closed()}
    for dow in range(1, 7):
        hours[dow] = OperatingHours(True, time(6, 0), time(22, 0))
    return Establishment(id="est-1", name="Loja", operating_hours=hours)


@pytest.fixture
def employees():
    return [
        Employee(id="A", name="Ana"),
        Employee(id="B", name="Bruno"),
        Employee(id="X", name="Xavier", status=EmployeeStatus.INACTIVE),
    ]


@pytest.fixture
def validator():
    return ScheduleValidator()


def make_shift(shift_id: str, min_employees: int, *assignee_ids: str) -> AssignedShift:
    return AssignedShift(
        shift_id=shift_id,
        shift_type=ShiftType.CUSTOM,
        shift_label=shift_id,
        start_time=time(8, 0),
        end_time=time(12, 0),
        min_employees=min_employees,
        assignees=tuple(AssignedEmployee(i, i) for i in assignee_ids),
    )


def make_week(monday: DaySchedule) -> WeekSchedule:
    """A week that is empty except for the given Monday."""
    days = [DaySchedule(WEEK_START, is_open=False)]
    days.append(monday)
    for i in range(2, 7):
        days.append(DaySchedule(WEEK_START + timedelta(days=i), is_open=True))
    return WeekSchedule(week_start_date=WEEK_START, days=tuple(days))


def monday(shifts=(), conflicts=()) -> DaySchedule:
    return DaySchedule(
        WEEK_START + timedelta(days=1),
        is_open=True,
        shifts=tuple(shifts),
        conflicts=tuple(conflicts),
    )


def error_types(result) -> set:
    return {e.error_type for e in result.errors}


class TestScheduleValidator:
    """Tests for ScheduleValidator."""

    def test_valid_week(self, validator, establishment, employees):
        week = make_week(monday([make_shift("s1", 2, "A", "B")]))
        result = validator.validate(week, establishment, employees)
        assert result.is_valid
        assert result.warnings == []

    def test_over_assigned(self, validator, establishment, employees):
        week = make_week(monday([make_shift("s1", 1, "A", "B")]))
        result = validator.validate(week, establishment, employees)
        assert ValidationErrorType.OVER_ASSIGNED in error_types(result)

    def test_missing_conflict(self, validator, establishment, employees):
        week = make_week(monday([make_shift("s1", 2, "A")]))
        result = validator.validate(week, establishment, employees)
        assert ValidationErrorType.MISSING_CONFLICT in error_types(result)

    def test_conflict_present_is_valid_with_warning(self, validator, establishment, employees):
        conflict = ShiftConflict("s1", ShiftType.CUSTOM, "s1", required=2, available=1)
        week = make_week(monday([make_shift("s1", 2, "A")], [conflict]))
        result = validator.validate(week, establishment, employees)
        assert result.is_valid
        assert result.warnings == ["1 shift(s) below minimum headcount"]

    def test_unexpected_conflict(self, validator, establishment, employees):
        conflict = ShiftConflict("s1", ShiftType.CUSTOM, "s1", required=1, available=1)
        week = make_week(monday([make_shift("s1", 1, "A")], [conflict]))
        result = validator.validate(week, establishment, employees)
        assert ValidationErrorType.UNEXPECTED_CONFLICT in error_types(result)

    def test_double_booked(self, validator, establishment, employees):
        week = make_week(monday([make_shift("s1", 1, "A"), make_shift("s2", 1, "A")]))
        result = validator.validate(week, establishment, employees)
        assert ValidationErrorType.DOUBLE_BOOKED in error_types(result)

    def test_unknown_and_inactive(self, validator, establishment, employees):
        week = make_week(monday([make_shift("s1", 1, "Z"), make_shift("s2", 1, "X")]))
        result = validator.validate(week, establishment, employees)
        assert error_types(result) == {
            ValidationErrorType.UNKNOWN_EMPLOYEE,
            ValidationErrorType.INACTIVE_EMPLOYEE,
        }

    def test_closed_day_with_shifts(self, validator, establishment, employees):
        sunday = DaySchedule(WEEK_START, is_open=True, shifts=(make_shift("s1", 1, "A"),))
        week = make_week(monday())
        week = WeekSchedule(WEEK_START, (sunday,) + week.days[1:])
        result = validator.validate(week, establishment, employees)
        assert ValidationErrorType.CLOSED_DAY_HAS_SHIFTS in error_types(result)

    def test_wrong_day_count(self, validator, establishment, employees):
        week = WeekSchedule(WEEK_START, (DaySchedule(WEEK_START, is_open=False),))
        result = validator.validate(week, establishment, employees)
        assert ValidationErrorType.WRONG_DAY_COUNT in error_types(result)

    def test_non_consecutive_dates(self, validator, establishment, employees):
        week = make_week(monday())
        days = list(week.days)
        days[3] = DaySchedule(WEEK_START + timedelta(days=10), is_open=True)
        result = validator.validate(WeekSchedule(WEEK_START, tuple(days)), establishment, employees)
        assert ValidationErrorType.NON_CONSECUTIVE_DATES in error_types(result)

    def test_error_string(self, validator, establishment, employees):
        week = make_week(monday([make_shift("s1", 1, "A"), make_shift("s2", 1, "A")]))
        result = validator.validate(week, establishment, employees)
        text = str(result.errors[0])
        assert text.startswith("[double_booked] 2024-01-15: Employee A:")
        assert text.endswith("(shift s2)")


class TestInputChecks:
    """Tests for fail-fast input validation."""

    def test_week_start_required(self):
        with pytest.raises(InputValidationError):
            validate_week_start(None)
        with pytest.raises(InputValidationError):
            validate_week_start("")

    def test_week_start_must_be_date(self):
        with pytest.raises(InputValidationError):
            validate_week_start("2024-01-14")

    def test_duplicate_shift_ids(self):
        definitions = [
            ShiftDefinition("s", ShiftType.MORNING, "A", time(6, 0), time(14, 0)),
            ShiftDefinition("s", ShiftType.AFTERNOON, "B", time(14, 0), time(22, 0)),
        ]
        with pytest.raises(InputValidationError) as exc_info:
            validate_shift_definitions(definitions)
        assert exc_info.value.field == "shiftDefinitions[1].id"

    def test_negative_min_employees(self):
        definitions = [ShiftDefinition("s", ShiftType.MORNING, "A", time(6, 0), time(14, 0), -1)]
        with pytest.raises(InputValidationError):
            validate_shift_definitions(definitions)

    def test_operating_hours_key_out_of_range(self):
        establishment = Establishment(
            id="e", name="E", operating_hours={8: OperatingHours.closed()}
        )
        with pytest.raises(InputValidationError):
            validate_establishment(establishment)

    def test_empty_custom_shift_list_allowed(self):
        establishment = Establishment(
            id="e", name="E", settings=EstablishmentSettings(shift_definitions=())
        )
        validate_establishment(establishment)

    def test_custom_exception_without_hours(self):
        employee = Employee(
            id="A",
            name="Ana",
            temporary_availability=(
                CustomHoursException("x", WEEK_START, WEEK_START, hours=None),
            ),
        )
        with pytest.raises(InputValidationError) as exc_info:
            validate_employee(employee, "employees[0]")
        assert exc_info.value.field == "employees[0].temporaryAvailability[0].hours"

    def test_employee_id_required(self):
        with pytest.raises(InputValidationError):
            validate_employee(Employee(id="", name="Ana"))
