"""Policy definitions for scheduling rules.

This module contains configurable policies that define the business rules
the engine applies when ordering candidates and explaining exclusions.
Policies are kept separate from the scheduling engine to allow independent
testing and easy modification.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from shifthelper.domain.models import (
    DEFAULT_SHIFT_DEFINITIONS,
    Employee,
    ShiftDefinition,
)
from shifthelper.domain.timewindow import TimeRange


class AssignmentOrderPolicy(ABC):
    """Abstract base class for ordering employees available for a shift."""

    @abstractmethod
    def order(self, employees: list[Employee]) -> list[Employee]:
        """Return employees in the order they should be assigned.

        Implementations must be deterministic and must not mutate the input.
        """
        pass


class ReasonMessages(ABC):
    """Abstract base class for the human-readable exclusion reasons."""

    @abstractmethod
    def temporary_unavailable(self) -> str:
        """Reason for a temporary exception that gives no reason of its own."""
        pass

    @abstractmethod
    def weekday_unavailable(self, day_of_week: int) -> str:
        """Reason for a recurring day off (0=Sunday)."""
        pass

    @abstractmethod
    def outside_window(self, window: TimeRange) -> str:
        """Reason for a shift that falls outside the allowed window."""
        pass

    @abstractmethod
    def generic_unavailable(self) -> str:
        """Fallback reason."""
        pass


@dataclass
class DefaultAssignmentOrderPolicy(AssignmentOrderPolicy):
    """Prefer employees whose availability was configured longest ago.

    Employees without a timestamp sort as the Unix epoch, so they come first.
    Naive timestamps are read as UTC. The sort is stable, so ties keep the
    caller's employee order.
    """

    def order(self, employees: list[Employee]) -> list[Employee]:
        return sorted(employees, key=self._sort_key)

    @staticmethod
    def _sort_key(employee: Employee) -> float:
        updated_at: Optional[datetime] = employee.availability_updated_at
        if updated_at is None:
            return 0.0
        if updated_at.tzinfo is None:
            updated_at = updated_at.replace(tzinfo=timezone.utc)
        return updated_at.timestamp()


@dataclass
class PortugueseReasonMessages(ReasonMessages):
    """Brazilian Portuguese reasons, the product's default locale."""

    weekday_names: tuple[str, ...] = (
        "Domingo", "Segunda", "Terça", "Quarta", "Quinta", "Sexta", "Sábado",
    )

    def temporary_unavailable(self) -> str:
        return "Indisponível (temporário)"

    def weekday_unavailable(self, day_of_week: int) -> str:
        return f"Indisponível às {self.weekday_names[day_of_week]}s"

    def outside_window(self, window: TimeRange) -> str:
        return f"Disponível apenas {window}"

    def generic_unavailable(self) -> str:
        return "Indisponível"


@dataclass
class EnglishReasonMessages(ReasonMessages):
    """English reasons."""

    weekday_names: tuple[str, ...] = (
        "Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday",
    )

    def temporary_unavailable(self) -> str:
        return "Unavailable (temporary)"

    def weekday_unavailable(self, day_of_week: int) -> str:
        return f"Unavailable on {self.weekday_names[day_of_week]}s"

    def outside_window(self, window: TimeRange) -> str:
        return f"Only available {window}"

    def generic_unavailable(self) -> str:
        return "Unavailable"


@dataclass
class SchedulerConfig:
    """Configuration shared by the resolver, planner and week builder.

    Attributes:
        default_shift_definitions: Template used when an establishment has no
            custom shift definitions.
        messages: Source of exclusion reasons.
        order_policy: Ordering of available employees within a shift.
    """

    default_shift_definitions: tuple[ShiftDefinition, ...] = DEFAULT_SHIFT_DEFINITIONS
    messages: ReasonMessages = field(default_factory=PortugueseReasonMessages)
    order_policy: AssignmentOrderPolicy = field(
        default_factory=DefaultAssignmentOrderPolicy
    )
