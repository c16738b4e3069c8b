"""
Utils Package - Core utilities for the appointment calendar
Contains logging, date range and month grid helpers
"""

from .calendar_grid import CalendarGridBuilder, CalendarMonth
from .dates import DEFAULT_WEEK_START, is_same_day, parse_week_start
from .logger import Logger


__all__ = [
    "CalendarGridBuilder",
    "CalendarMonth",
    "DEFAULT_WEEK_START",
    "Logger",
    "is_same_day",
    "parse_week_start",
]
