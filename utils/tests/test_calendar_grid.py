"""Tests for the padded month grid."""

import calendar
from datetime import date, datetime, timedelta

import pytest

from utils.calendar_grid import CalendarGridBuilder, CalendarMonth


class TestCalendarGridBuilder:
    def test_june_2024_sunday_start(self):
        month = CalendarGridBuilder().build(date(2024, 6, 1))

        assert month.anchor == date(2024, 6, 1)
        assert month.start == date(2024, 5, 26)
        assert month.end == date(2024, 7, 6)
        assert len(month) == 42
        assert len(month.weeks) == 6

    def test_anchor_is_normalized_to_first_of_month(self):
        month = CalendarGridBuilder().build(datetime(2024, 5, 17, 15, 0))

        assert month.anchor == date(2024, 5, 1)
        assert month.start == date(2024, 4, 28)
        assert month.end == date(2024, 6, 1)

    def test_monday_start(self):
        month = CalendarGridBuilder(calendar.MONDAY).build(date(2024, 6, 1))

        assert month.start == date(2024, 5, 27)
        assert month.end == date(2024, 6, 30)
        assert month.start.weekday() == calendar.MONDAY

    def test_four_week_month(self):
        # February 2015 starts on Sunday and has 28 days
        month = CalendarGridBuilder().build(date(2015, 2, 1))

        assert len(month.weeks) == 4
        assert month.start == date(2015, 2, 1)
        assert month.end == date(2015, 2, 28)

    @pytest.mark.parametrize("year", [2023, 2024])
    @pytest.mark.parametrize("week_start", [calendar.MONDAY, calendar.SUNDAY])
    def test_every_month_covers_whole_weeks(self, year, week_start):
        builder = CalendarGridBuilder(week_start)
        for month_number in range(1, 13):
            month = builder.build(date(year, month_number, 1))

            assert len(month) % 7 == 0
            assert 28 <= len(month) <= 42
            assert month.start.weekday() == week_start
            assert date(year, month_number, 1) in month
            days = list(month.days)
            assert all(b - a == timedelta(days=1) for a, b in zip(days, days[1:]))

    @pytest.mark.boundary
    @pytest.mark.parametrize("week_start", [-1, 7])
    def test_rejects_bad_week_start(self, week_start):
        with pytest.raises(ValueError):
            CalendarGridBuilder(week_start)


class TestCalendarMonth:
    def test_in_month_and_padding(self):
        month = CalendarGridBuilder().build(date(2024, 6, 1))

        assert month.in_month(date(2024, 6, 15))
        assert not month.in_month(date(2024, 5, 26))
        assert date(2024, 5, 26) in month
        assert date(2024, 7, 7) not in month
        assert "2024-06-01" not in month

    def test_is_immutable(self):
        month = CalendarGridBuilder().build(date(2024, 6, 1))

        with pytest.raises(AttributeError):
            month.anchor = date(2024, 7, 1)  # type: ignore[misc]
        assert isinstance(month, CalendarMonth)
        assert isinstance(month.days, tuple)
