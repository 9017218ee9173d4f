"""Time-of-day arithmetic for shift and availability windows.

Times are wall-clock `datetime.time` values without timezone. A range whose
end is earlier than its start crosses midnight (e.g. 22:00-06:00).
"""

import re
from dataclasses import dataclass
from datetime import date, time, timedelta

from shifthelper.errors import InputValidationError

MINUTES_PER_DAY = 24 * 60

_TIME_PATTERN = re.compile(r"^(\d{2}):(\d{2})$")


@dataclass(frozen=True)
class TimeRange:
    """A start/end pair of times of day.

    Attributes:
        start: Start time.
        end: End time. If earlier than start, the range ends the next day.
    """

    start: time
    end: time

    @property
    def crosses_midnight(self) -> bool:
        """True if the range ends on the following day."""
        return self.end < self.start

    @property
    def duration_minutes(self) -> int:
        """Length of the range in minutes."""
        start_min, end_min = normalize_overnight(
            to_minutes(self.start), to_minutes(self.end)
        )
        return end_min - start_min

    def __str__(self) -> str:
        return f"{format_time_of_day(self.start)}-{format_time_of_day(self.end)}"


def parse_time_of_day(value: str, field: str = "time") -> time:
    """Parse a strict HH:MM string.

    Args:
        value: Text such as "06:00" or "22:30".
        field: Field name reported if the value is malformed.

    Raises:
        InputValidationError: If the value is not a valid HH:MM time.
    """
    if not isinstance(value, str):
        raise InputValidationError(field, f"expected HH:MM string, got {value!r}")
    match = _TIME_PATTERN.match(value)
    if match is None:
        raise InputValidationError(field, f"expected HH:MM, got {value!r}")
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise InputValidationError(field, f"time out of range: {value!r}")
    return time(hour=hours, minute=minutes)


def format_time_of_day(t: time) -> str:
    """Format a time as HH:MM."""
    return t.strftime("%H:%M")


def to_minutes(t: time) -> int:
    """Minutes from midnight."""
    return t.hour * 60 + t.minute


def normalize_overnight(start_min: int, end_min: int) -> tuple[int, int]:
    """Push the end of an overnight range into the next day.

    Returns (start_min, end_min + 1440) when end_min < start_min, otherwise
    the input unchanged.
    """
    if end_min < start_min:
        return start_min, end_min + MINUTES_PER_DAY
    return start_min, end_min


def overlaps(range1: TimeRange, range2: TimeRange) -> bool:
    """Check whether two ranges share any time.

    Each range is normalized independently, then compared as half-open
    intervals: a range ending at 14:00 and one starting at 14:00 are disjoint.
    A range whose start equals its end is empty and overlaps nothing.
    """
    if range1.start == range1.end or range2.start == range2.end:
        return False
    start1, end1 = normalize_overnight(to_minutes(range1.start), to_minutes(range1.end))
    start2, end2 = normalize_overnight(to_minutes(range2.start), to_minutes(range2.end))
    return start1 < end2 and start2 < end1


def day_of_week(d: date) -> int:
    """Day of week with 0=Sunday .. 6=Saturday."""
    return (d.weekday() + 1) % 7


def week_dates(week_start: date) -> list[date]:
    """The seven consecutive dates starting at week_start."""
    return [week_start + timedelta(days=i) for i in range(7)]


def week_start_for(d: date) -> date:
    """The Sunday on or before d."""
    return d - timedelta(days=day_of_week(d))
