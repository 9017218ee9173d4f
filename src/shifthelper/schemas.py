"""Request schemas for inbound JSON documents.

Documents use camelCase keys, ISO-8601 dates and HH:MM times. Each schema
validates the raw document and converts it to the frozen domain dataclasses
with `to_domain()`.
"""

from datetime import date, datetime
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from shifthelper.domain.models import (
    AvailableException,
    CustomHoursException,
    Employee,
    EmployeeStatus,
    Establishment,
    EstablishmentSettings,
    OperatingHours,
    RecurringDayAvailability,
    ScheduleRequest,
    ShiftDefinition,
    ShiftType,
    UnavailableException,
)
from shifthelper.domain.timewindow import TimeRange, parse_time_of_day

TIME_OF_DAY_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"

TimeOfDay = Annotated[str, Field(pattern=TIME_OF_DAY_PATTERN)]
DayOfWeek = Annotated[int, Field(ge=0, le=6)]


def _time(value: Optional[str]):
    return parse_time_of_day(value) if value is not None else None


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class OperatingHoursSchema(CamelModel):
    is_open: bool
    open_time: Optional[TimeOfDay] = None
    close_time: Optional[TimeOfDay] = None

    def to_domain(self) -> OperatingHours:
        return OperatingHours(
            is_open=self.is_open,
            open_time=_time(self.open_time),
            close_time=_time(self.close_time),
        )


class ShiftDefinitionSchema(CamelModel):
    id: str = Field(min_length=1)
    type: ShiftType
    label: str = Field(min_length=1)
    start_time: TimeOfDay
    end_time: TimeOfDay
    min_employees: int = Field(default=1, ge=1, strict=True)

    def to_domain(self) -> ShiftDefinition:
        return ShiftDefinition(
            id=self.id,
            type=self.type,
            label=self.label,
            start_time=parse_time_of_day(self.start_time),
            end_time=parse_time_of_day(self.end_time),
            min_employees=self.min_employees,
        )


class EstablishmentSettingsSchema(CamelModel):
    shift_definitions: Optional[list[ShiftDefinitionSchema]] = None


class EstablishmentSchema(CamelModel):
    """Establishment document: operating hours keyed by day of week (0=Sunday)."""

    id: str = Field(min_length=1)
    name: str = ""
    operating_hours: Optional[dict[DayOfWeek, OperatingHoursSchema]] = None
    settings: Optional[EstablishmentSettingsSchema] = None

    def to_domain(self) -> Establishment:
        shift_definitions = None
        if self.settings is not None and self.settings.shift_definitions is not None:
            shift_definitions = tuple(d.to_domain() for d in self.settings.shift_definitions)
        return Establishment(
            id=self.id,
            name=self.name,
            operating_hours={
                dow: hours.to_domain()
                for dow, hours in (self.operating_hours or {}).items()
            },
            settings=EstablishmentSettings(shift_definitions=shift_definitions),
        )


class RecurringDaySchema(CamelModel):
    available: bool
    start_time: Optional[TimeOfDay] = None
    end_time: Optional[TimeOfDay] = None

    @model_validator(mode="after")
    def check_window_complete(self) -> "RecurringDaySchema":
        if (self.start_time is None) != (self.end_time is None):
            raise ValueError("startTime and endTime go together")
        return self

    def to_domain(self) -> RecurringDayAvailability:
        return RecurringDayAvailability(
            available=self.available,
            start_time=_time(self.start_time),
            end_time=_time(self.end_time),
        )


class HoursSchema(CamelModel):
    start_time: TimeOfDay
    end_time: TimeOfDay


class _ExceptionSchema(CamelModel):
    id: str = Field(min_length=1)
    start_date: date
    end_date: date
    reason: Optional[str] = None


class UnavailableExceptionSchema(_ExceptionSchema):
    type: Literal["unavailable"]

    def to_domain(self) -> UnavailableException:
        return UnavailableException(
            self.id, self.start_date, self.end_date, reason=self.reason or None
        )


class AvailableExceptionSchema(_ExceptionSchema):
    type: Literal["available"]

    def to_domain(self) -> AvailableException:
        return AvailableException(
            self.id, self.start_date, self.end_date, reason=self.reason or None
        )


class CustomHoursExceptionSchema(_ExceptionSchema):
    type: Literal["custom"]
    hours: HoursSchema

    def to_domain(self) -> CustomHoursException:
        return CustomHoursException(
            self.id,
            self.start_date,
            self.end_date,
            hours=TimeRange(
                parse_time_of_day(self.hours.start_time),
                parse_time_of_day(self.hours.end_time),
            ),
            reason=self.reason or None,
        )


ExceptionSchema = Annotated[
    Union[UnavailableExceptionSchema, AvailableExceptionSchema, CustomHoursExceptionSchema],
    Field(discriminator="type"),
]


class EmployeeSchema(CamelModel):
    """Employee document with weekly pattern and dated exceptions."""

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    recurring_availability: Optional[dict[DayOfWeek, RecurringDaySchema]] = None
    temporary_availability: Optional[list[ExceptionSchema]] = None
    availability_updated_at: Optional[datetime] = None

    def to_domain(self) -> Employee:
        return Employee(
            id=self.id,
            name=self.name,
            status=self.status,
            recurring_availability={
                dow: day.to_domain()
                for dow, day in (self.recurring_availability or {}).items()
            },
            temporary_availability=tuple(
                e.to_domain() for e in self.temporary_availability or []
            ),
            availability_updated_at=self.availability_updated_at,
        )


class ScheduleRequestSchema(CamelModel):
    week_start_date: date
    establishment_id: str = Field(min_length=1)

    def to_domain(self) -> ScheduleRequest:
        return ScheduleRequest(
            week_start_date=self.week_start_date,
            establishment_id=self.establishment_id,
        )
