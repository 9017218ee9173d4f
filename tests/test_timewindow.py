"""Tests for time-of-day parsing and overlap arithmetic."""

import pytest
from datetime import date, time

from shifthelper.domain.timewindow import (
    TimeRange,
    day_of_week,
    format_time_of_day,
    normalize_overnight,
    overlaps,
    parse_time_of_day,
    week_dates,
    week_start_for,
)
from shifthelper.errors import InputValidationError


def tr(start: str, end: str) -> TimeRange:
    return TimeRange(parse_time_of_day(start), parse_time_of_day(end))


class TestParseTimeOfDay:
    """Tests for strict HH:MM parsing."""

    def test_valid_times(self):
        assert parse_time_of_day("06:00") == time(6, 0)
        assert parse_time_of_day("23:59") == time(23, 59)
        assert parse_time_of_day("00:00") == time(0, 0)

    @pytest.mark.parametrize("value", ["6:00", "24:00", "12:60", "12-00", "", "12:00:00"])
    def test_malformed_times_rejected(self, value):
        with pytest.raises(InputValidationError):
            parse_time_of_day(value, "startTime")

    def test_error_names_field(self):
        with pytest.raises(InputValidationError) as exc_info:
            parse_time_of_day("25:00", "shifts[0].startTime")
        assert exc_info.value.field == "shifts[0].startTime"

    def test_non_string_rejected(self):
        with pytest.raises(InputValidationError):
            parse_time_of_day(600)

    def test_format(self):
        assert format_time_of_day(time(6, 5)) == "06:05"


class TestTimeRange:
    """Tests for TimeRange helpers."""

    def test_daytime_range(self):
        r = tr("09:00", "17:00")
        assert not r.crosses_midnight
        assert r.duration_minutes == 480
        assert str(r) == "09:00-17:00"

    def test_overnight_range(self):
        r = tr("22:00", "06:00")
        assert r.crosses_midnight
        assert r.duration_minutes == 480

    def test_equal_start_end_is_empty(self):
        assert tr("10:00", "10:00").duration_minutes == 0

    def test_normalize_overnight(self):
        assert normalize_overnight(1320, 360) == (1320, 1800)
        assert normalize_overnight(540, 1020) == (540, 1020)


class TestOverlaps:
    """Tests for overlap detection."""

    def test_overnight_ranges_overlap(self):
        assert overlaps(tr("22:00", "06:00"), tr("23:00", "01:00"))

    def test_touching_ranges_do_not_overlap(self):
        assert not overlaps(tr("09:00", "17:00"), tr("17:00", "18:00"))
        assert not overlaps(tr("06:00", "14:00"), tr("14:00", "22:00"))

    def test_contained_range_overlaps(self):
        assert overlaps(tr("06:00", "14:00"), tr("08:00", "10:00"))

    def test_disjoint_ranges(self):
        assert not overlaps(tr("06:00", "10:00"), tr("14:00", "22:00"))

    def test_evening_window_reaches_overnight_shift(self):
        assert overlaps(tr("22:00", "06:00"), tr("14:00", "23:00"))

    def test_zero_length_range_overlaps_nothing(self):
        assert not overlaps(tr("10:00", "10:00"), tr("06:00", "14:00"))
        assert not overlaps(tr("06:00", "14:00"), tr("10:00", "10:00"))
        assert not overlaps(tr("23:00", "23:00"), tr("22:00", "06:00"))

    def test_early_morning_window_misses_overnight_shift(self):
        # Each range is normalized on its own, so 01:00-05:00 stays on day one.
        assert not overlaps(tr("22:00", "06:00"), tr("01:00", "05:00"))

    @pytest.mark.parametrize(
        "a,b",
        [
            (("22:00", "06:00"), ("23:00", "01:00")),
            (("09:00", "17:00"), ("17:00", "18:00")),
            (("06:00", "14:00"), ("13:00", "15:00")),
            (("20:00", "02:00"), ("10:00", "12:00")),
        ],
    )
    def test_symmetric(self, a, b):
        assert overlaps(tr(*a), tr(*b)) == overlaps(tr(*b), tr(*a))


class TestWeekDates:
    """Tests for day-of-week and week helpers."""

    def test_day_of_week_sunday_is_zero(self):
        assert day_of_week(date(2024, 1, 14)) == 0
        assert day_of_week(date(2024, 1, 16)) == 2
        assert day_of_week(date(2024, 1, 20)) == 6

    def test_week_dates(self):
        dates = week_dates(date(2024, 1, 14))
        assert len(dates) == 7
        assert dates[0] == date(2024, 1, 14)
        assert dates[-1] == date(2024, 1, 20)

    def test_week_start_for(self):
        assert week_start_for(date(2024, 1, 17)) == date(2024, 1, 14)
        assert week_start_for(date(2024, 1, 14)) == date(2024, 1, 14)
        assert week_start_for(date(2024, 1, 20)) == date(2024, 1, 14)
