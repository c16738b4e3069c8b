from __future__ import annotations

from fastapi import Request

from database.appointment_controller import AppointmentController


def get_controller(request: Request) -> AppointmentController:
    """Return the session's controller, created once in create_app()."""
    return request.app.state.controller
