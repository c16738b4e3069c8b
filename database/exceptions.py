"""
Error types used across the appointment storage and controller layers.

These are intentionally simple and typed for clear error handling paths.
"""

from __future__ import annotations


class CalendarError(Exception):
    """Base class for appointment calendar errors."""


class BoundsError(CalendarError, IndexError):
    """
    Raised when a positional operation receives a position outside the collection.

    Attributes:
        operation: Name of the store operation that was rejected.
        position: The offending position.
        size: Collection length at the time of the call.
    """

    def __init__(self, operation: str, position: int, size: int) -> None:
        super().__init__(
            f"{operation}: position {position} is out of range for {size} appointment(s)"
        )
        self.operation = operation
        self.position = position
        self.size = size


class AppointmentNotFoundError(CalendarError, LookupError):
    """Raised when no appointment has the requested id."""

    def __init__(self, appointment_id: str) -> None:
        super().__init__(f"No appointment with id {appointment_id!r}")
        self.appointment_id = appointment_id


class DeserializationError(CalendarError, ValueError):
    """Raised when a persisted blob cannot be turned back into appointments."""


class PersistenceWriteError(CalendarError):
    """
    Raised by storage adapters when a blob cannot be written.

    Attributes:
        key: Storage key that was being written.
    """

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(f"Failed to write {key!r}: {reason}")
        self.key = key
        self.reason = reason
