"""Domain models for the scheduling engine.

This module contains the core data structures used throughout the engine:
establishments and their operating hours, shift definitions, employees with
their availability, and the week schedule produced by a run.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Optional, Union

from shifthelper.domain.timewindow import TimeRange, day_of_week


class ShiftType(Enum):
    """Kinds of shift definitions."""

    MORNING = "morning"
    AFTERNOON = "afternoon"
    NIGHT = "night"
    CUSTOM = "custom"


class EmployeeStatus(Enum):
    """Lifecycle status of an employee. Only active employees are scheduled."""

    ACTIVE = "active"
    PENDING = "pending"  # Invited, has not completed onboarding
    INACTIVE = "inactive"


class ExceptionType(Enum):
    """Tag of a temporary availability exception."""

    UNAVAILABLE = "unavailable"
    AVAILABLE = "available"
    CUSTOM = "custom"


@dataclass(frozen=True)
class OperatingHours:
    """Opening hours of an establishment for one day of the week.

    Attributes:
        is_open: Whether the establishment opens on this day.
        open_time: Opening time, if known.
        close_time: Closing time, if known. May be earlier than open_time
            for venues that close after midnight.
    """

    is_open: bool
    open_time: Optional[time] = None
    close_time: Optional[time] = None

    @classmethod
    def closed(cls) -> "OperatingHours":
        """Create operating hours representing a closed day."""
        return cls(is_open=False)


@dataclass(frozen=True)
class ShiftDefinition:
    """A named, recurring time-of-day window with a minimum headcount.

    Attributes:
        id: Unique identifier within the establishment.
        type: Kind of shift.
        label: Display label (e.g. "Manhã").
        start_time: Shift start.
        end_time: Shift end (earlier than start for overnight shifts).
        min_employees: Employees required to fully staff the shift.
    """

    id: str
    type: ShiftType
    label: str
    start_time: time
    end_time: time
    min_employees: int = 1

    @property
    def time_range(self) -> TimeRange:
        """The shift as a TimeRange."""
        return TimeRange(self.start_time, self.end_time)


DEFAULT_SHIFT_DEFINITIONS: tuple[ShiftDefinition, ...] = (
    ShiftDefinition("1", ShiftType.MORNING, "Manhã", time(6, 0), time(14, 0), 2),
    ShiftDefinition("2", ShiftType.AFTERNOON, "Tarde", time(14, 0), time(22, 0), 2),
    ShiftDefinition("3", ShiftType.NIGHT, "Noite", time(22, 0), time(6, 0), 1),
)


@dataclass(frozen=True)
class RecurringDayAvailability:
    """An employee's standing availability for one day of the week.

    Attributes:
        available: False means the employee never works this weekday.
        start_time: Start of the allowed window, if restricted.
        end_time: End of the allowed window, if restricted.
    """

    available: bool
    start_time: Optional[time] = None
    end_time: Optional[time] = None

    @property
    def window(self) -> Optional[TimeRange]:
        """The allowed window, or None when the whole day is allowed."""
        if self.start_time is None or self.end_time is None:
            return None
        return TimeRange(self.start_time, self.end_time)


@dataclass(frozen=True)
class _DatedException:
    """Fields shared by every temporary availability exception.

    Attributes:
        id: Identifier of the exception.
        start_date: First date covered (inclusive).
        end_date: Last date covered (inclusive).
    """

    id: str
    start_date: date
    end_date: date

    def covers(self, d: date) -> bool:
        """Check whether a date falls inside this exception."""
        return self.start_date <= d <= self.end_date


@dataclass(frozen=True)
class UnavailableException(_DatedException):
    """Blocks every shift on the covered dates."""

    reason: Optional[str] = None

    type = ExceptionType.UNAVAILABLE


@dataclass(frozen=True)
class AvailableException(_DatedException):
    """Makes the employee available on the covered dates, overriding recurring days off."""

    reason: Optional[str] = None

    type = ExceptionType.AVAILABLE


@dataclass(frozen=True)
class CustomHoursException(_DatedException):
    """Restricts the employee to a time window on the covered dates."""

    hours: TimeRange
    reason: Optional[str] = None

    type = ExceptionType.CUSTOM


TemporaryAvailabilityException = Union[
    UnavailableException, AvailableException, CustomHoursException
]

RecurringAvailability = dict[int, RecurringDayAvailability]


@dataclass(frozen=True)
class Employee:
    """An employee who can be scheduled.

    Attributes:
        id: Unique identifier.
        name: Display name.
        status: Lifecycle status; only ACTIVE employees take part in assignment.
        recurring_availability: Day of week (0=Sunday) to standing availability.
            A missing day means available all day.
        temporary_availability: Dated exceptions, in stored order. The first
            one covering a date wins.
        availability_updated_at: When availability was last edited. Used as
            the assignment tie-break.
    """

    id: str
    name: str
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    recurring_availability: RecurringAvailability = field(default_factory=dict)
    temporary_availability: tuple[TemporaryAvailabilityException, ...] = ()
    availability_updated_at: Optional[datetime] = None

    @property
    def is_active(self) -> bool:
        return self.status == EmployeeStatus.ACTIVE

    def find_exception(self, d: date) -> Optional[TemporaryAvailabilityException]:
        """First temporary exception covering a date, in stored order."""
        for exception in self.temporary_availability:
            if exception.covers(d):
                return exception
        return None


@dataclass(frozen=True)
class EstablishmentSettings:
    """Manager-controlled settings.

    Attributes:
        shift_definitions: Custom shift templates in priority order. None means
            the built-in three-shift template.
    """

    shift_definitions: Optional[tuple[ShiftDefinition, ...]] = None


@dataclass(frozen=True)
class Establishment:
    """A business whose week is being scheduled.

    Attributes:
        id: Unique identifier.
        name: Display name.
        operating_hours: Day of week (0=Sunday) to opening hours. Missing days
            are closed.
        settings: Manager settings.
    """

    id: str
    name: str
    operating_hours: dict[int, OperatingHours] = field(default_factory=dict)
    settings: EstablishmentSettings = field(default_factory=EstablishmentSettings)

    def get_operating_hours(self, dow: int) -> OperatingHours:
        """Operating hours for a day of week."""
        return self.operating_hours.get(dow, OperatingHours.closed())

    def get_shift_definitions(
        self,
        defaults: tuple[ShiftDefinition, ...] = DEFAULT_SHIFT_DEFINITIONS,
    ) -> tuple[ShiftDefinition, ...]:
        """Configured shift definitions, or the defaults if none are set."""
        if self.settings.shift_definitions is None:
            return tuple(defaults)
        return tuple(self.settings.shift_definitions)


@dataclass(frozen=True)
class AvailabilityDecision:
    """Outcome of resolving one employee against one shift on one date."""

    available: bool
    reason: Optional[str] = None


@dataclass(frozen=True)
class UnavailableEmployee:
    """An employee excluded from a shift, with the reason."""

    id: str
    name: str
    reason: str


@dataclass(frozen=True)
class AssignedEmployee:
    """An employee placed on a shift."""

    id: str
    name: str


@dataclass(frozen=True)
class ShiftConflict:
    """A shift that could not reach its minimum headcount.

    Attributes:
        shift_id: ID of the shift definition.
        shift_type: Kind of shift.
        shift_label: Display label of the shift.
        required: Minimum headcount.
        available: Employees available (and therefore assigned).
        unavailable_employees: Every employee excluded for this shift, with reasons.
    """

    shift_id: str
    shift_type: ShiftType
    shift_label: str
    required: int
    available: int
    unavailable_employees: tuple[UnavailableEmployee, ...] = ()

    @property
    def shortfall(self) -> int:
        """How many more employees the shift needs."""
        return self.required - self.available


@dataclass(frozen=True)
class AssignedShift:
    """One shift on one date and the employees placed on it."""

    shift_id: str
    shift_type: ShiftType
    shift_label: str
    start_time: time
    end_time: time
    min_employees: int
    assignees: tuple[AssignedEmployee, ...] = ()

    @property
    def assigned_count(self) -> int:
        return len(self.assignees)

    @property
    def is_understaffed(self) -> bool:
        return self.assigned_count < self.min_employees

    @property
    def time_range(self) -> TimeRange:
        return TimeRange(self.start_time, self.end_time)


@dataclass(frozen=True)
class DaySchedule:
    """Schedule output for a single date.

    Attributes:
        schedule_date: Date of the schedule.
        is_open: Whether the establishment opens this day.
        open_time: Opening time, if open.
        close_time: Closing time, if open.
        shifts: Shifts in definition order (empty on closed days).
        conflicts: Understaffed shifts (empty on closed days).
    """

    schedule_date: date
    is_open: bool
    open_time: Optional[time] = None
    close_time: Optional[time] = None
    shifts: tuple[AssignedShift, ...] = ()
    conflicts: tuple[ShiftConflict, ...] = ()

    @property
    def day_of_week(self) -> int:
        return day_of_week(self.schedule_date)

    @property
    def assignment_count(self) -> int:
        return sum(s.assigned_count for s in self.shifts)

    def assigned_employee_ids(self) -> list[str]:
        """IDs of every employee working this day, in shift order."""
        return [a.id for s in self.shifts for a in s.assignees]

    def get_shift(self, shift_id: str) -> Optional[AssignedShift]:
        for shift in self.shifts:
            if shift.shift_id == shift_id:
                return shift
        return None


@dataclass(frozen=True)
class WeekSchedule:
    """Schedule output for the seven dates of a week.

    Attributes:
        week_start_date: First date (a Sunday by convention).
        days: One DaySchedule per date, in date order.
    """

    week_start_date: date
    days: tuple[DaySchedule, ...] = ()

    @property
    def week_end_date(self) -> date:
        return self.week_start_date + timedelta(days=6)

    @property
    def total_shifts(self) -> int:
        """Number of shifts across all open days."""
        return sum(len(d.shifts) for d in self.days)

    @property
    def total_assignments(self) -> int:
        """Number of employee-shift placements across the week."""
        return sum(d.assignment_count for d in self.days)

    @property
    def total_conflicts(self) -> int:
        return sum(len(d.conflicts) for d in self.days)

    def get_day(self, d: date) -> Optional[DaySchedule]:
        for day in self.days:
            if day.schedule_date == d:
                return day
        return None

    def get_employee_assignments(self, employee_id: str) -> list[tuple[date, AssignedShift]]:
        """Every (date, shift) pair an employee is placed on."""
        result = []
        for day in self.days:
            for shift in day.shifts:
                if any(a.id == employee_id for a in shift.assignees):
                    result.append((day.schedule_date, shift))
        return result

    def get_weekly_summary(self) -> dict:
        """Get summary statistics for the week."""
        return {
            "week_start_date": self.week_start_date,
            "week_end_date": self.week_end_date,
            "open_days": sum(1 for d in self.days if d.is_open),
            "total_shifts": self.total_shifts,
            "total_assignments": self.total_assignments,
            "total_conflicts": self.total_conflicts,
        }


@dataclass(frozen=True)
class ScheduleRequest:
    """Inbound request to generate a week schedule.

    Attributes:
        week_start_date: First date of the week (a Sunday).
        establishment_id: Establishment to schedule.
    """

    week_start_date: date
    establishment_id: str
