"""Exception types raised by the scheduling engine."""

from typing import Optional


class ShiftHelperError(Exception):
    """Base class for all scheduling engine errors."""


class InputValidationError(ShiftHelperError, ValueError):
    """Raised when caller input is malformed.

    Attributes:
        field: Path of the offending field (e.g. "shiftDefinitions[0].startTime").
        message: Description of what is wrong with it.
    """

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class EstablishmentNotFoundError(ShiftHelperError, LookupError):
    """Raised when a request names an establishment the directory does not know."""

    def __init__(self, establishment_id: str):
        self.establishment_id = establishment_id
        super().__init__(f"Unknown establishment: {establishment_id}")


class ScheduleNotFoundError(ShiftHelperError, LookupError):
    """Raised when a stored schedule cannot be found."""

    def __init__(self, schedule_id: str, detail: Optional[str] = None):
        self.schedule_id = schedule_id
        message = f"Unknown schedule: {schedule_id}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)
