"""Scheduling engine for generating week schedules."""

from shifthelper.scheduling.availability import AvailabilityResolver
from shifthelper.scheduling.planner import DayPlan, ShiftCoveragePlanner, ShiftPlan
from shifthelper.scheduling.service import (
    EstablishmentDirectory,
    GenerationResult,
    InMemoryEstablishmentDirectory,
    SchedulingService,
)
from shifthelper.scheduling.weekly_scheduler import WeeklyScheduler

__all__ = [
    "AvailabilityResolver",
    "DayPlan",
    "EstablishmentDirectory",
    "GenerationResult",
    "InMemoryEstablishmentDirectory",
    "SchedulingService",
    "ShiftCoveragePlanner",
    "ShiftPlan",
    "WeeklyScheduler",
]
