"""Request-level scheduling service.

Turns an inbound request (week start + establishment ID) into a stored draft
schedule: it resolves the establishment snapshot through a directory, runs
the weekly scheduler, and hands the result to a schedule repository.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional, Sequence

from shifthelper.domain.models import (
    Employee,
    Establishment,
    ScheduleRequest,
    WeekSchedule,
)
from shifthelper.errors import EstablishmentNotFoundError, ScheduleNotFoundError
from shifthelper.persistence import (
    ScheduleRepository,
    ScheduleStatus,
    StoredSchedule,
)
from shifthelper.scheduling.weekly_scheduler import WeeklyScheduler
from shifthelper.utils.logger import get_logger

logger = get_logger(__name__)


class EstablishmentDirectory(ABC):
    """Source of establishment and employee snapshots."""

    @abstractmethod
    def get_establishment(self, establishment_id: str) -> Optional[Establishment]:
        pass

    @abstractmethod
    def list_employees(self, establishment_id: str) -> list[Employee]:
        pass


class InMemoryEstablishmentDirectory(EstablishmentDirectory):
    """Directory backed by plain dicts."""

    def __init__(
        self,
        establishments: Sequence[Establishment] = (),
        employees: Optional[dict[str, Sequence[Employee]]] = None,
    ):
        self._establishments = {e.id: e for e in establishments}
        self._employees = {k: list(v) for k, v in (employees or {}).items()}

    def add(self, establishment: Establishment, employees: Sequence[Employee]) -> None:
        self._establishments[establishment.id] = establishment
        self._employees[establishment.id] = list(employees)

    def get_establishment(self, establishment_id: str) -> Optional[Establishment]:
        return self._establishments.get(establishment_id)

    def list_employees(self, establishment_id: str) -> list[Employee]:
        return list(self._employees.get(establishment_id, []))


@dataclass(frozen=True)
class GenerationResult:
    """Outcome of a generate call.

    Attributes:
        stored: The stored schedule.
        created: False if a schedule already existed for that week.
    """

    stored: StoredSchedule
    created: bool


class SchedulingService:
    """Generates, stores and publishes week schedules.

    Example:
        >>> service = SchedulingService(directory, InMemoryScheduleRepository())
        >>> result = service.generate(ScheduleRequest(date(2024, 1, 14), "est-1"))
        >>> service.publish(result.stored.id).status
        <ScheduleStatus.PUBLISHED: 'published'>
    """

    def __init__(
        self,
        directory: EstablishmentDirectory,
        repository: ScheduleRepository,
        scheduler: Optional[WeeklyScheduler] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.directory = directory
        self.repository = repository
        self.scheduler = scheduler or WeeklyScheduler()
        self.clock = clock

    def generate(self, request: ScheduleRequest) -> GenerationResult:
        """Return the existing schedule for the week, or build and save a draft.

        Concurrent calls for the same week resolve to a single stored schedule.

        Raises:
            EstablishmentNotFoundError: If the establishment is unknown.
            InputValidationError: If the snapshot is malformed.
        """

        def build() -> WeekSchedule:
            establishment = self.directory.get_establishment(request.establishment_id)
            if establishment is None:
                raise EstablishmentNotFoundError(request.establishment_id)
            employees = self.directory.list_employees(request.establishment_id)
            return self.scheduler.build_week(
                request.week_start_date, establishment, employees
            )

        stored, created = self.repository.get_or_create(
            request.establishment_id,
            request.week_start_date,
            build,
            ScheduleStatus.DRAFT,
        )
        if created:
            logger.info("Saved draft schedule %s", stored.id)
        else:
            logger.info(
                "Schedule %s already exists for %s week %s",
                stored.id,
                request.establishment_id,
                request.week_start_date,
            )
        return GenerationResult(stored=stored, created=created)

    def publish(self, schedule_id: str) -> StoredSchedule:
        """Promote a schedule to published. Publishing twice is a no-op.

        Raises:
            ScheduleNotFoundError: If the ID is unknown.
        """
        stored = self.repository.get(schedule_id)
        if stored is None:
            raise ScheduleNotFoundError(schedule_id)
        if stored.status == ScheduleStatus.PUBLISHED:
            return stored
        return self.repository.update_status(
            schedule_id, ScheduleStatus.PUBLISHED, published_at=self.clock()
        )
