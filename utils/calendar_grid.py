"""
Month grid construction.

A grid is the run of days shown for one month view, padded with days from the
neighbouring months so that it always covers whole weeks.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

from .dates import (
    DEFAULT_WEEK_START,
    end_of_month,
    end_of_week,
    iter_days,
    start_of_month,
    start_of_week,
    to_date,
)

DAYS_PER_WEEK = 7


@dataclass(frozen=True)
class CalendarMonth:
    """A month anchor plus the padded, immutable sequence of days to render."""

    anchor: date
    days: tuple[date, ...]
    week_start: int = DEFAULT_WEEK_START

    @property
    def start(self) -> date:
        return self.days[0]

    @property
    def end(self) -> date:
        return self.days[-1]

    @property
    def weeks(self) -> list[tuple[date, ...]]:
        """The grid split into rows of seven days."""
        return [
            self.days[i : i + DAYS_PER_WEEK] for i in range(0, len(self.days), DAYS_PER_WEEK)
        ]

    def in_month(self, day: date | datetime) -> bool:
        """True if ``day`` belongs to the anchor month rather than the padding."""
        value = to_date(day)
        return (value.year, value.month) == (self.anchor.year, self.anchor.month)

    def __contains__(self, day: object) -> bool:
        if not isinstance(day, date):
            return False
        value = to_date(day)
        return self.start <= value <= self.end

    def __len__(self) -> int:
        return len(self.days)


class CalendarGridBuilder:
    """Builds the padded day sequence for a month."""

    def __init__(self, week_start: int = DEFAULT_WEEK_START):
        if not 0 <= week_start <= 6:
            raise ValueError(f"week_start must be between 0 and 6, got {week_start}")
        self.week_start = week_start

    def build(self, anchor_month: date | datetime) -> CalendarMonth:
        """Return the grid for the month containing ``anchor_month``.

        The grid runs from the first day of the week holding the 1st of the
        month to the last day of the week holding the month's last day, so it
        always spans 4 to 6 full weeks.
        """
        anchor = start_of_month(anchor_month)
        start = start_of_week(anchor, self.week_start)
        end = end_of_week(end_of_month(anchor), self.week_start)
        return CalendarMonth(
            anchor=anchor,
            days=tuple(iter_days(start, end)),
            week_start=self.week_start,
        )
