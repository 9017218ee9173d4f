"""Availability resolution for a single employee, date and shift.

Temporary exceptions take precedence over the weekly pattern; the first
exception covering the date (in stored order) decides the outcome alone.
"""

from datetime import date
from typing import Optional

from shifthelper.domain.models import (
    AvailabilityDecision,
    AvailableException,
    CustomHoursException,
    Employee,
    TemporaryAvailabilityException,
    UnavailableException,
)
from shifthelper.domain.policies import PortugueseReasonMessages, ReasonMessages
from shifthelper.domain.timewindow import TimeRange, day_of_week, overlaps

AVAILABLE = AvailabilityDecision(available=True)


class AvailabilityResolver:
    """Decides whether an employee can work a shift on a date.

    The resolver is stateless apart from its reason messages, so one
    instance can be shared across threads.

    Example:
        >>> resolver = AvailabilityResolver()
        >>> decision = resolver.resolve(employee, date(2024, 1, 16), shift.time_range)
        >>> decision.available, decision.reason
        (False, 'Indisponível às Terças')
    """

    def __init__(self, messages: Optional[ReasonMessages] = None):
        self.messages = messages or PortugueseReasonMessages()

    def resolve(
        self,
        employee: Employee,
        schedule_date: date,
        shift_range: TimeRange,
    ) -> AvailabilityDecision:
        """Resolve availability for one (employee, date, shift) triple.

        Args:
            employee: Employee to check. Never mutated.
            schedule_date: Calendar date of the shift.
            shift_range: Time range of the shift.

        Returns:
            AvailabilityDecision with a reason when not available.
        """
        exception = employee.find_exception(schedule_date)
        if exception is not None:
            return self._resolve_exception(exception, shift_range)
        return self._resolve_recurring(employee, schedule_date, shift_range)

    def _resolve_exception(
        self,
        exception: TemporaryAvailabilityException,
        shift_range: TimeRange,
    ) -> AvailabilityDecision:
        if isinstance(exception, UnavailableException):
            return AvailabilityDecision(
                available=False,
                reason=exception.reason or self.messages.temporary_unavailable(),
            )
        if isinstance(exception, CustomHoursException):
            if overlaps(shift_range, exception.hours):
                return AVAILABLE
            return AvailabilityDecision(
                available=False,
                reason=self.messages.outside_window(exception.hours),
            )
        if isinstance(exception, AvailableException):
            return AVAILABLE
        raise TypeError(f"Unknown availability exception: {exception!r}")

    def _resolve_recurring(
        self,
        employee: Employee,
        schedule_date: date,
        shift_range: TimeRange,
    ) -> AvailabilityDecision:
        dow = day_of_week(schedule_date)
        recurring = employee.recurring_availability.get(dow)
        if recurring is None:
            return AVAILABLE

        if not recurring.available:
            return AvailabilityDecision(
                available=False,
                reason=self.messages.weekday_unavailable(dow),
            )

        window = recurring.window
        if window is not None and not overlaps(shift_range, window):
            return AvailabilityDecision(
                available=False,
                reason=self.messages.outside_window(window),
            )

        return AVAILABLE
