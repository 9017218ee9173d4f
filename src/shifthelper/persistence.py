"""Schedule persistence adapter interface.

The engine itself never stores anything. Host applications implement
ScheduleRepository against their own storage; InMemoryScheduleRepository is
the reference implementation used by the CLI and tests.
"""

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from datetime import date, datetime
from enum import Enum
from typing import Callable, Optional

from shifthelper.domain.models import WeekSchedule
from shifthelper.errors import ScheduleNotFoundError


class ScheduleStatus(Enum):
    """Publication status of a stored schedule."""

    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


@dataclass(frozen=True)
class StoredSchedule:
    """A week schedule as held by the persistence layer.

    Attributes:
        id: Storage identifier.
        establishment_id: Owning establishment.
        schedule: The generated week.
        status: Publication status.
        created_at: When the schedule was saved.
        published_at: When it was first published, if ever.
    """

    id: str
    establishment_id: str
    schedule: WeekSchedule
    status: ScheduleStatus = ScheduleStatus.DRAFT
    created_at: Optional[datetime] = None
    published_at: Optional[datetime] = None

    @property
    def week_start_date(self) -> date:
        return self.schedule.week_start_date

    @property
    def week_end_date(self) -> date:
        return self.schedule.week_end_date


class ScheduleRepository(ABC):
    """Abstract storage for generated week schedules."""

    @abstractmethod
    def get(self, schedule_id: str) -> Optional[StoredSchedule]:
        """Fetch a schedule by ID."""
        pass

    @abstractmethod
    def get_for_week(
        self, establishment_id: str, week_start_date: date
    ) -> Optional[StoredSchedule]:
        """Fetch the schedule for an establishment's week, if one exists."""
        pass

    @abstractmethod
    def save(
        self,
        establishment_id: str,
        schedule: WeekSchedule,
        status: ScheduleStatus = ScheduleStatus.DRAFT,
    ) -> StoredSchedule:
        """Store a new schedule and return it with its assigned ID."""
        pass

    @abstractmethod
    def get_or_create(
        self,
        establishment_id: str,
        week_start_date: date,
        build: Callable[[], WeekSchedule],
        status: ScheduleStatus = ScheduleStatus.DRAFT,
    ) -> tuple[StoredSchedule, bool]:
        """Return the week's schedule, calling `build` and saving only if none exists.

        The lookup and the save are atomic: concurrent callers for the same
        week get the same stored schedule and `build` runs at most once.

        Returns:
            The stored schedule and whether it was created by this call.
        """
        pass

    @abstractmethod
    def update_status(
        self,
        schedule_id: str,
        status: ScheduleStatus,
        published_at: Optional[datetime] = None,
    ) -> StoredSchedule:
        """Change a schedule's status.

        Raises:
            ScheduleNotFoundError: If the ID is unknown.
        """
        pass

    @abstractmethod
    def delete(self, schedule_id: str) -> None:
        """Remove a schedule.

        Raises:
            ScheduleNotFoundError: If the ID is unknown.
        """
        pass

    @abstractmethod
    def list_for_establishment(
        self, establishment_id: str, limit: int = 10
    ) -> list[StoredSchedule]:
        """Most recent weeks first."""
        pass


class InMemoryScheduleRepository(ScheduleRepository):
    """Thread-safe dict-backed repository. IDs are schedule-1, schedule-2, ..."""

    def __init__(self):
        self._schedules: dict[str, StoredSchedule] = {}
        self._counter = 0
        self._lock = threading.Lock()

    def get(self, schedule_id: str) -> Optional[StoredSchedule]:
        with self._lock:
            return self._schedules.get(schedule_id)

    def get_for_week(
        self, establishment_id: str, week_start_date: date
    ) -> Optional[StoredSchedule]:
        with self._lock:
            return self._find_for_week(establishment_id, week_start_date)

    def save(
        self,
        establishment_id: str,
        schedule: WeekSchedule,
        status: ScheduleStatus = ScheduleStatus.DRAFT,
    ) -> StoredSchedule:
        with self._lock:
            return self._insert(establishment_id, schedule, status)

    def get_or_create(
        self,
        establishment_id: str,
        week_start_date: date,
        build: Callable[[], WeekSchedule],
        status: ScheduleStatus = ScheduleStatus.DRAFT,
    ) -> tuple[StoredSchedule, bool]:
        # build() runs under the lock, so other writers wait for it.
        with self._lock:
            existing = self._find_for_week(establishment_id, week_start_date)
            if existing is not None:
                return existing, False
            return self._insert(establishment_id, build(), status), True

    def _find_for_week(
        self, establishment_id: str, week_start_date: date
    ) -> Optional[StoredSchedule]:
        for stored in self._schedules.values():
            if (
                stored.establishment_id == establishment_id
                and stored.week_start_date == week_start_date
            ):
                return stored
        return None

    def _insert(
        self, establishment_id: str, schedule: WeekSchedule, status: ScheduleStatus
    ) -> StoredSchedule:
        self._counter += 1
        stored = StoredSchedule(
            id=f"schedule-{self._counter}",
            establishment_id=establishment_id,
            schedule=schedule,
            status=status,
            created_at=datetime.now(),
        )
        self._schedules[stored.id] = stored
        return stored

    def update_status(
        self,
        schedule_id: str,
        status: ScheduleStatus,
        published_at: Optional[datetime] = None,
    ) -> StoredSchedule:
        with self._lock:
            stored = self._schedules.get(schedule_id)
            if stored is None:
                raise ScheduleNotFoundError(schedule_id)
            updated = replace(
                stored,
                status=status,
                published_at=published_at or stored.published_at,
            )
            self._schedules[schedule_id] = updated
            return updated

    def delete(self, schedule_id: str) -> None:
        with self._lock:
            if schedule_id not in self._schedules:
                raise ScheduleNotFoundError(schedule_id)
            del self._schedules[schedule_id]

    def list_for_establishment(
        self, establishment_id: str, limit: int = 10
    ) -> list[StoredSchedule]:
        with self._lock:
            matching = [
                s for s in self._schedules.values()
                if s.establishment_id == establishment_id
            ]
        matching.sort(key=lambda s: s.week_start_date, reverse=True)
        return matching[:limit]
