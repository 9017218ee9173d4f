"""JSON-compatible dict codecs for engine inputs and outputs.

Inbound documents are validated by the schemas in `shifthelper.schemas`; any
malformed field raises InputValidationError with the field path (e.g.
"employees[1].temporaryAvailability[0].startDate"). Outbound documents use
the same camelCase keys, ISO-8601 dates and HH:MM times.
"""

from datetime import date, datetime
from typing import Any, Optional, Sequence

from pydantic import BaseModel, TypeAdapter, ValidationError

from shifthelper.domain.models import (
    AssignedShift,
    DaySchedule,
    Employee,
    Establishment,
    ExceptionType,
    ScheduleRequest,
    ShiftConflict,
    WeekSchedule,
)
from shifthelper.domain.timewindow import format_time_of_day
from shifthelper.errors import InputValidationError
from shifthelper.schemas import (
    EmployeeSchema,
    EstablishmentSchema,
    ScheduleRequestSchema,
)
from shifthelper.validation.validator import (
    validate_employee,
    validate_establishment,
)

# Keys whose entries are addressed by day of week rather than by field name.
_DAY_KEYED_FIELDS = {"operatingHours", "recurringAvailability"}
_EXCEPTION_TAGS = {t.value for t in ExceptionType}

_EMPLOYEE_LIST = TypeAdapter(list[EmployeeSchema])


def field_path(prefix: str, loc: Sequence[Any]) -> str:
    """Render a pydantic error location as a dotted/bracketed field path.

    The discriminator tag pydantic inserts after a list index of tagged
    exceptions is dropped, as is the "[key]" marker of dict-key errors.
    """
    path = prefix
    seen: list = []
    for part in loc:
        if part == "[key]":
            continue
        if (
            len(seen) >= 2
            and seen[-2] == "temporaryAvailability"
            and isinstance(seen[-1], int)
            and part in _EXCEPTION_TAGS
        ):
            seen.append(None)
            continue
        if isinstance(part, int) or (seen and seen[-1] in _DAY_KEYED_FIELDS):
            path = f"{path}[{part}]"
        else:
            path = f"{path}.{part}" if path else str(part)
        seen.append(part)
    return path or "<root>"


def _raise_first(error: ValidationError, prefix: str) -> None:
    first = error.errors()[0]
    raise InputValidationError(field_path(prefix, first["loc"]), first["msg"]) from None


def _validate(schema: type[BaseModel], data: Any, path: str):
    try:
        return schema.model_validate(data)
    except ValidationError as e:
        _raise_first(e, path)


def parse_date(value: Any, field: str = "date") -> date:
    """Parse a strict YYYY-MM-DD string."""
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    if not isinstance(value, str) or len(value) != 10:
        raise InputValidationError(field, f"expected YYYY-MM-DD, got {value!r}")
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise InputValidationError(field, f"invalid date {value!r}") from None


def establishment_from_dict(data: Any, path: str = "") -> Establishment:
    """Decode and validate an establishment document."""
    establishment = _validate(EstablishmentSchema, data, path).to_domain()
    validate_establishment(establishment)
    return establishment


def employee_from_dict(data: Any, path: str = "") -> Employee:
    """Decode and validate an employee document."""
    employee = _validate(EmployeeSchema, data, path).to_domain()
    validate_employee(employee, path or "employee")
    return employee


def employees_from_list(items: Any, path: str = "employees") -> list[Employee]:
    try:
        schemas = _EMPLOYEE_LIST.validate_python(items)
    except ValidationError as e:
        _raise_first(e, path)
    employees = []
    for i, schema in enumerate(schemas):
        employee = schema.to_domain()
        validate_employee(employee, f"{path}[{i}]")
        employees.append(employee)
    return employees


def request_from_dict(data: Any) -> ScheduleRequest:
    """Decode an inbound scheduling request."""
    return _validate(ScheduleRequestSchema, data, "").to_domain()


def _time_or_none(value) -> Optional[str]:
    return format_time_of_day(value) if value is not None else None


def conflict_to_dict(conflict: ShiftConflict) -> dict:
    return {
        "shiftId": conflict.shift_id,
        "shiftType": conflict.shift_type.value,
        "shiftLabel": conflict.shift_label,
        "required": conflict.required,
        "available": conflict.available,
        "unavailableEmployees": [
            {"id": e.id, "name": e.name, "reason": e.reason}
            for e in conflict.unavailable_employees
        ],
    }


def assigned_shift_to_dict(shift: AssignedShift) -> dict:
    return {
        "shiftId": shift.shift_id,
        "shiftType": shift.shift_type.value,
        "shiftLabel": shift.shift_label,
        "startTime": format_time_of_day(shift.start_time),
        "endTime": format_time_of_day(shift.end_time),
        "minEmployees": shift.min_employees,
        "employees": [{"id": a.id, "name": a.name} for a in shift.assignees],
    }


def day_schedule_to_dict(day: DaySchedule) -> dict:
    return {
        "date": day.schedule_date.isoformat(),
        "dayOfWeek": day.day_of_week,
        "isOpen": day.is_open,
        "openTime": _time_or_none(day.open_time),
        "closeTime": _time_or_none(day.close_time),
        "shifts": [assigned_shift_to_dict(s) for s in day.shifts],
        "conflicts": [conflict_to_dict(c) for c in day.conflicts],
    }


def week_schedule_to_dict(week: WeekSchedule) -> dict:
    """Encode a week schedule as a JSON-compatible dict."""
    return {
        "weekStartDate": week.week_start_date.isoformat(),
        "weekEndDate": week.week_end_date.isoformat(),
        "totalShifts": week.total_shifts,
        "totalAssignments": week.total_assignments,
        "totalConflicts": week.total_conflicts,
        "days": [day_schedule_to_dict(d) for d in week.days],
    }


def flatten_shifts(week: WeekSchedule) -> list[dict]:
    """One record per assigned employee, numbered shift-1, shift-2, ...

    This is the flat shift list a persistence layer stores alongside the
    schedule status.
    """
    records = []
    for day in week.days:
        for shift in day.shifts:
            for assignee in shift.assignees:
                records.append(
                    {
                        "id": f"shift-{len(records) + 1}",
                        "employeeId": assignee.id,
                        "employeeName": assignee.name,
                        "date": day.schedule_date.isoformat(),
                        "dayOfWeek": day.day_of_week,
                        "startTime": format_time_of_day(shift.start_time),
                        "endTime": format_time_of_day(shift.end_time),
                        "shiftType": shift.shift_type.value,
                        "shiftLabel": shift.shift_label,
                        "status": "scheduled",
                    }
                )
    return records
