"""
Shared fixtures and test configuration for the appointment storage and
controller tests
"""

from datetime import datetime

import pytest

from database.appointment_controller import AppointmentController, AutoConfirm
from database.appointment_store import AppointmentStore
from database.exceptions import PersistenceWriteError
from database.storage import MemoryStorage
from models import Appointment

# The controller's "now" in every controller test: a Wednesday
FIXED_NOW = datetime(2024, 5, 1, 9, 0)


def create_test_appointment(
    title: str = "Test Appointment",
    when: datetime = FIXED_NOW,
    description: str = "",
    **kwargs,
) -> Appointment:
    """Factory function to create test appointments"""
    return Appointment(title=title, date=when, description=description, **kwargs)


class FailingStorage(MemoryStorage):
    """Storage whose writes always fail, for persistence-error paths"""

    def write(self, key: str, blob: str) -> None:
        raise PersistenceWriteError(key, "disk full")


class RecordingConfirmation:
    """Confirmation gate that records what it was asked about"""

    def __init__(self, answer: bool):
        self.answer = answer
        self.asked: list[Appointment] = []

    def confirm(self, appointment: Appointment) -> bool:
        self.asked.append(appointment)
        return self.answer


@pytest.fixture
def memory_storage():
    return MemoryStorage()


@pytest.fixture
def store(memory_storage):
    return AppointmentStore(memory_storage)


@pytest.fixture
def populated_store(store):
    """Store holding three appointments, two of them on May 1"""
    for appt in (
        create_test_appointment("Dentist", datetime(2024, 5, 1, 9, 0), id="a"),
        create_test_appointment("Gym", datetime(2024, 5, 2, 18, 0), id="b"),
        create_test_appointment("Lunch", datetime(2024, 5, 1, 12, 0), id="c"),
    ):
        store.insert(appt)
    store.save()
    return store


def make_controller(store: AppointmentStore, confirmation=None) -> AppointmentController:
    controller = AppointmentController(
        store, confirmation=confirmation, clock=lambda: FIXED_NOW
    )
    controller.initialize()
    return controller


@pytest.fixture
def controller(store):
    return make_controller(store, AutoConfirm(True))


@pytest.fixture
def populated_controller(populated_store):
    return make_controller(populated_store, AutoConfirm(True))
