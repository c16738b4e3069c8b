from __future__ import annotations

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from calendar_api.app import create_app
from calendar_api.settings import Settings
from database.appointment_controller import AppointmentController
from database.appointment_store import AppointmentStore
from database.storage import MemoryStorage

FIXED_NOW = datetime(2024, 5, 1, 9, 0)


@pytest.fixture
def settings(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Settings:
    monkeypatch.setenv("CALENDAR_ENV", "dev")
    monkeypatch.setenv("CALENDAR_EXPOSE_OPENAPI_IN_DEV", "true")
    monkeypatch.setenv("CALENDAR_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setenv("CALENDAR_STORAGE_BACKEND", "memory")
    monkeypatch.delenv("CALENDAR_WEEK_START", raising=False)
    return Settings()


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def controller(storage: MemoryStorage) -> AppointmentController:
    ctrl = AppointmentController(AppointmentStore(storage), clock=lambda: FIXED_NOW)
    ctrl.initialize()
    return ctrl


@pytest.fixture
def client(settings: Settings, controller: AppointmentController) -> TestClient:
    return TestClient(create_app(settings, controller))


def add_appointment(client: TestClient, title: str, when: str, description: str = "") -> dict:
    r = client.post(
        "/appointments", json={"title": title, "description": description, "date": when}
    )
    assert r.status_code == 200, r.text
    return r.json()["appointment"]
