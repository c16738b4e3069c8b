"""
Appointment model.

One scheduled event on the calendar. Appointments carry a stable ``id`` so
edit/delete targets survive reordering; list position is only used for
display order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

from .base import JsonRecord, ModelSerializationMixin, new_record_id, normalize_text


@dataclass
class Appointment(ModelSerializationMixin):
    """A titled appointment scheduled on a calendar day."""

    title: str
    date: datetime
    description: str = ""
    id: str = field(default_factory=new_record_id)

    def _serialize_for_model(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "date": self.date,
        }

    def _serialize_for_storage(self) -> JsonRecord:
        """Serialize to the persisted record shape: title, description, ISO date."""
        return {
            "title": self.title,
            "description": self.description,
            "date": self.date.isoformat(),
            "id": self.id,
        }

    def to_dict(self) -> JsonRecord:
        """Backward compatibility - returns the storage format."""
        return self._serialize_for_storage()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Appointment:
        """Create an Appointment from a persisted record.

        Raises:
            ValueError: If ``title`` is blank, or ``date`` is missing or cannot be parsed
            TypeError: If ``data`` is not a mapping
        """
        # Imported here to keep models free of utils at import time
        from utils.appointments import parse_appointment_date

        if not isinstance(data, dict):
            raise TypeError(f"Appointment record must be an object, got {type(data).__name__}")

        title = normalize_text(data.get("title"))
        if not title.strip():
            raise ValueError("Appointment record has no title")

        raw_date = data.get("date")
        if raw_date is None:
            raise ValueError("Appointment record has no date")

        record_id = data.get("id")
        return cls(
            title=title,
            description=normalize_text(data.get("description")),
            date=parse_appointment_date(raw_date),
            id=str(record_id) if record_id else new_record_id(),
        )

    def occurs_on(self, day: date | datetime) -> bool:
        """Return True if this appointment falls on the same calendar day as ``day``."""
        from utils.dates import is_same_day

        return is_same_day(self.date, day)

    def copy_with(self, **changes: Any) -> Appointment:
        """Return a copy with the given fields replaced; the id is preserved."""
        values = self._serialize_for_model()
        values.update(changes)
        return Appointment(**values)
