"""
Tests for AppointmentServiceFactory wiring.
"""

import calendar
from datetime import datetime

import pytest

from database.appointment_controller import AppointmentController, AutoConfirm
from database.factory import AppointmentServiceFactory
from database.storage import JsonFileStorage, MemoryStorage, SQLiteStorage


class TestCreateStorage:
    def test_memory(self):
        assert isinstance(AppointmentServiceFactory().create_storage("memory"), MemoryStorage)

    def test_json(self, tmp_path):
        storage = AppointmentServiceFactory().create_storage(" JSON ", tmp_path)

        assert isinstance(storage, JsonFileStorage)
        assert storage.directory == tmp_path

    def test_sqlite_directory_gets_default_file(self, tmp_path):
        storage = AppointmentServiceFactory().create_storage("sqlite", tmp_path)

        assert isinstance(storage, SQLiteStorage)
        assert storage.db_path == tmp_path / "calendar.db"

    def test_sqlite_explicit_file(self, tmp_path):
        storage = AppointmentServiceFactory().create_storage("sqlite", tmp_path / "mine.db")

        assert storage.db_path == tmp_path / "mine.db"

    def test_unknown_backend(self):
        with pytest.raises(ValueError, match="redis"):
            AppointmentServiceFactory().create_storage("redis")


class TestCreateController:
    def test_memory_controller_is_initialized(self):
        controller = AppointmentServiceFactory().create_controller(
            backend="memory", week_start=calendar.MONDAY, confirmation=AutoConfirm()
        )

        assert isinstance(controller, AppointmentController)
        assert controller.appointments == ()
        assert controller.calendar.start.weekday() == calendar.MONDAY
        assert isinstance(controller.confirmation, AutoConfirm)

    @pytest.mark.integration
    @pytest.mark.parametrize("backend", ["json", "sqlite"])
    def test_state_survives_a_new_session(self, tmp_path, backend):
        factory = AppointmentServiceFactory()
        first = factory.create_controller(backend=backend, path=tmp_path, key="cal")
        first.update_pending(title="Dentist", date=datetime(2024, 5, 1, 9))
        assert first.submit().persisted is True

        second = factory.create_controller(backend=backend, path=tmp_path, key="cal")

        assert [a.title for a in second.appointments] == ["Dentist"]
        assert second.appointments[0].id == first.appointments[0].id

    def test_bad_week_start_propagates(self):
        with pytest.raises(ValueError):
            AppointmentServiceFactory().create_controller(backend="memory", week_start=9)
