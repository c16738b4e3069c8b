"""
Appointments utilities

Input helpers shared by the store, the controller and the HTTP layer:
title normalization and tolerant parsing of appointment dates.

Notes:
- Keep logic self-contained; no UI or storage wiring happens here.
- Stored dates may come from older browser-written blobs ("...Z" strings),
  so parsing accepts any ISO-8601 or otherwise parseable date-time text.
"""

from __future__ import annotations

from datetime import date, datetime, time

from dateutil import parser as date_parser

from models.appointment import Appointment


def create_appointment(
    title: str, when: str | date | datetime, description: str = ""
) -> Appointment:
    """Creates and returns an Appointment object."""
    return Appointment(
        title=normalize_event_title(title),
        date=parse_appointment_date(when),
        description=description or "",
    )


def normalize_event_title(title: str) -> str:
    """Return the title with surrounding and repeated whitespace collapsed."""
    return " ".join(title.split())


def parse_appointment_date(value: str | date | datetime) -> datetime:
    """Convert a stored or submitted date value into a naive local datetime.

    Date-only values become midnight of that day. Timezone-aware values are
    converted to local time before the zone is dropped.

    Raises:
        ValueError: If the text cannot be parsed as a date
        TypeError: If the value is not text or a date
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time(0, 0))
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError("Empty date string")
        try:
            parsed = date_parser.isoparse(text)
        except ValueError:
            parsed = date_parser.parse(text)
    else:
        raise TypeError(f"Unsupported date value: {type(value).__name__}")

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def is_valid_date_string(date_str: str) -> bool:
    """Return True if date_str is exactly YYYY-MM-DD and represents a real calendar date."""
    try:
        parsed = datetime.strptime(date_str, "%Y-%m-%d")
        # Enforce exact formatting (rejects non-zero-padded components, whitespace, etc.)
        return date_str == parsed.strftime("%Y-%m-%d")
    except (ValueError, TypeError):
        return False
