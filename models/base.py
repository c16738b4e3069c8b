"""
Base models and serialization utilities for the appointment calendar.

Provides consistent patterns for model serialization, keeping rich Python
values (datetimes) in the model layer and only flattening them to plain JSON
values in the storage layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any
import uuid


# Type aliases for clarity
JsonValue = dict[str, Any] | list[Any] | str | int | float | bool | None
JsonRecord = dict[str, JsonValue]


class ModelSerializationMixin(ABC):
    """Abstract base class for models with standardized serialization patterns."""

    @abstractmethod
    def _serialize_for_model(self) -> dict[str, Any]:
        """Serialize for model layer (datetimes kept as datetime objects)."""
        raise NotImplementedError

    @abstractmethod
    def _serialize_for_storage(self) -> JsonRecord:
        """Serialize for storage layer (datetimes as ISO-8601 strings)."""
        raise NotImplementedError

    def to_model_dict(self) -> dict[str, Any]:
        """Public API: Get model-layer representation."""
        return self._serialize_for_model()

    def to_storage_dict(self) -> JsonRecord:
        """Public API: Get storage-layer representation with flattened fields."""
        return self._serialize_for_storage()


def new_record_id() -> str:
    """Return a fresh stable identifier for a stored record."""
    return uuid.uuid4().hex


def normalize_text(value: Any) -> str:
    """Normalize an optional text value to a string.

    Args:
        value: Text, None, or any other value

    Returns:
        The value as a string, empty if None
    """
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)
