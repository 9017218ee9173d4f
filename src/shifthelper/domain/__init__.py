"""Domain models and business rules for scheduling."""

from shifthelper.domain.models import (
    DEFAULT_SHIFT_DEFINITIONS,
    AssignedEmployee,
    AssignedShift,
    AvailabilityDecision,
    AvailableException,
    CustomHoursException,
    DaySchedule,
    Employee,
    EmployeeStatus,
    Establishment,
    EstablishmentSettings,
    ExceptionType,
    OperatingHours,
    RecurringAvailability,
    RecurringDayAvailability,
    ScheduleRequest,
    ShiftConflict,
    ShiftDefinition,
    ShiftType,
    TemporaryAvailabilityException,
    UnavailableEmployee,
    UnavailableException,
    WeekSchedule,
)
from shifthelper.domain.policies import (
    AssignmentOrderPolicy,
    DefaultAssignmentOrderPolicy,
    EnglishReasonMessages,
    PortugueseReasonMessages,
    ReasonMessages,
    SchedulerConfig,
)
from shifthelper.domain.timewindow import TimeRange

__all__ = [
    # Models
    "DEFAULT_SHIFT_DEFINITIONS",
    "AssignedEmployee",
    "AssignedShift",
    "AvailabilityDecision",
    "AvailableException",
    "CustomHoursException",
    "DaySchedule",
    "Employee",
    "EmployeeStatus",
    "Establishment",
    "EstablishmentSettings",
    "ExceptionType",
    "OperatingHours",
    "RecurringAvailability",
    "RecurringDayAvailability",
    "ScheduleRequest",
    "ShiftConflict",
    "ShiftDefinition",
    "ShiftType",
    "TemporaryAvailabilityException",
    "TimeRange",
    "UnavailableEmployee",
    "UnavailableException",
    "WeekSchedule",
    # Policies
    "AssignmentOrderPolicy",
    "DefaultAssignmentOrderPolicy",
    "EnglishReasonMessages",
    "PortugueseReasonMessages",
    "ReasonMessages",
    "SchedulerConfig",
]
