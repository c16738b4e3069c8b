"""
Lightweight repo-local models for the calendar's storage and controller layers.
Provides minimal DTOs without UI dependencies.
"""

from .appointment import Appointment
from .base import ModelSerializationMixin, new_record_id


__all__ = [
    "Appointment",
    "ModelSerializationMixin",
    "new_record_id",
]
