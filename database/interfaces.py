"""
Storage and controller port interfaces.
Protocol-based interfaces so the backing store and the delete confirmation
gate can be swapped without touching controller logic.
"""

from typing import Protocol

from models.appointment import Appointment


class IAppointmentStorage(Protocol):
    """Key-value persistence boundary holding one serialized blob per key."""

    def read(self, key: str) -> str | None:
        """Return the blob stored under ``key``, or None if absent."""
        ...

    def write(self, key: str, blob: str) -> None:
        """Overwrite the blob stored under ``key``.

        Raises:
            PersistenceWriteError: If the blob could not be written.
        """
        ...


class IDeleteConfirmation(Protocol):
    """Interactive yes/no gate consulted before an appointment is deleted."""

    def confirm(self, appointment: Appointment) -> bool:
        """Return True to proceed with deleting ``appointment``."""
        ...
