#!/usr/bin/env python3
"""
Appointment Store
Owns the ordered in-memory appointment collection and its single-blob
persistence.
"""

import json
from collections.abc import Iterator, Sequence
from datetime import date, datetime

from models.appointment import Appointment
from utils.logger import Logger

from .exceptions import (
    AppointmentNotFoundError,
    BoundsError,
    DeserializationError,
    PersistenceWriteError,
)
from .interfaces import IAppointmentStorage

DEFAULT_STORAGE_KEY = "appointments"


def serialize_appointments(appointments: Sequence[Appointment]) -> str:
    """Serialize the collection as a JSON array in collection order."""
    return json.dumps([a.to_dict() for a in appointments], ensure_ascii=False)


def deserialize_appointments(blob: str) -> list[Appointment]:
    """Parse a persisted JSON array back into appointments.

    Raises:
        DeserializationError: If the blob or any record in it is malformed
    """
    try:
        records = json.loads(blob)
    except (TypeError, ValueError) as e:
        raise DeserializationError(f"Blob is not valid JSON: {e}") from e

    if not isinstance(records, list):
        raise DeserializationError(f"Expected a JSON array, got {type(records).__name__}")

    appointments = []
    for index, record in enumerate(records):
        try:
            appointments.append(Appointment.from_dict(record))
        except (TypeError, ValueError, OverflowError) as e:
            raise DeserializationError(f"Record {index} is malformed: {e}") from e
    return appointments


class AppointmentStore:
    """In-memory ordered appointment collection backed by a storage port"""

    def __init__(self, storage: IAppointmentStorage, key: str = DEFAULT_STORAGE_KEY):
        self.storage = storage
        self.key = key
        self.logger = Logger()
        self._appointments: list[Appointment] = []

    # ----- read helpers -----

    @property
    def appointments(self) -> tuple[Appointment, ...]:
        """Read-only snapshot of the collection in order"""
        return tuple(self._appointments)

    def __len__(self) -> int:
        return len(self._appointments)

    def __iter__(self) -> Iterator[Appointment]:
        return iter(tuple(self._appointments))

    def get(self, position: int) -> Appointment:
        self._check_position("get", position)
        return self._appointments[position]

    def index_of(self, appointment_id: str) -> int:
        """Return the current position of the appointment with this id"""
        for position, appointment in enumerate(self._appointments):
            if appointment.id == appointment_id:
                return position
        raise AppointmentNotFoundError(appointment_id)

    def find(self, appointment_id: str) -> Appointment | None:
        for appointment in self._appointments:
            if appointment.id == appointment_id:
                return appointment
        return None

    def positions_on(self, day: date | datetime) -> list[int]:
        """Positions of the appointments falling on ``day``, in collection order"""
        return [i for i, a in enumerate(self._appointments) if a.occurs_on(day)]

    # ----- persistence -----

    def load(self) -> list[Appointment]:
        """Replace the collection with the persisted one; empty when absent or malformed"""
        blob = self.storage.read(self.key)
        if blob is None:
            self._appointments = []
            return []

        try:
            self._appointments = deserialize_appointments(blob)
        except DeserializationError as e:
            self.logger.warning(f"Discarding unreadable appointments under {self.key!r}: {e}")
            self._appointments = []
        else:
            self.logger.info(f"Loaded {len(self._appointments)} appointment(s)")
        return list(self._appointments)

    def save(self) -> bool:
        """Overwrite the persisted blob with the full collection.

        Returns:
            True when written, False when the storage write failed
        """
        try:
            self.storage.write(self.key, serialize_appointments(self._appointments))
        except PersistenceWriteError as e:
            self.logger.error(f"Failed to save appointments: {e}")
            return False
        return True

    # ----- mutations -----

    def insert(self, appointment: Appointment) -> int:
        """Append to the end; returns the new position"""
        self._appointments.append(appointment)
        self.logger.info(f"Inserted appointment: {appointment.id}")
        return len(self._appointments) - 1

    def replace_at(self, position: int, appointment: Appointment) -> Appointment:
        """Overwrite the record at position; returns the replaced record"""
        self._check_position("replace_at", position)
        previous = self._appointments[position]
        self._appointments[position] = appointment
        self.logger.info(f"Replaced appointment at {position}: {previous.id}")
        return previous

    def remove_at(self, position: int) -> Appointment:
        """Delete the record at position, shifting later records left"""
        self._check_position("remove_at", position)
        removed = self._appointments.pop(position)
        self.logger.info(f"Removed appointment at {position}: {removed.id}")
        return removed

    def move_within_collection(self, from_position: int, to_position: int) -> None:
        """Move one record to a new position, keeping the others in relative order"""
        self._check_position("move_within_collection", from_position)
        self._check_position("move_within_collection", to_position)
        if from_position == to_position:
            return
        moved = self._appointments.pop(from_position)
        self._appointments.insert(to_position, moved)
        self.logger.info(f"Moved appointment {moved.id}: {from_position} -> {to_position}")

    def move_within_positions(
        self, positions: Sequence[int], from_index: int, to_index: int
    ) -> None:
        """Rotate the records held in ``positions`` among those slots only.

        ``from_index`` and ``to_index`` index into ``positions``; records in
        all other slots keep their place.
        """
        slots = list(positions)
        for position in slots:
            self._check_position("move_within_positions", position)
        self._check_index("move_within_positions", from_index, len(slots))
        self._check_index("move_within_positions", to_index, len(slots))
        if from_index == to_index:
            return

        subset = [self._appointments[p] for p in slots]
        moved = subset.pop(from_index)
        subset.insert(to_index, moved)
        for position, appointment in zip(slots, subset):
            self._appointments[position] = appointment
        self.logger.info(f"Moved appointment {moved.id} within its day: {from_index} -> {to_index}")

    def _check_position(self, operation: str, position: int) -> None:
        self._check_index(operation, position, len(self._appointments))

    @staticmethod
    def _check_index(operation: str, index: int, size: int) -> None:
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < size:
            raise BoundsError(operation, index, size)
