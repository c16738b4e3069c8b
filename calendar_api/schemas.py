from __future__ import annotations

from datetime import date, datetime
from typing import Any, cast

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from models.appointment import Appointment
from utils.dates import weekday_name

# -----------------------
# Common types
# -----------------------


class CamelModel(BaseModel):
    """Response/request base: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ErrorResponse(CamelModel):
    status: int
    code: str
    message: str
    error: str
    details: Any | None = None
    endpoint: str
    request_id: str | None = None


# -----------------------
# Appointment DTOs
# -----------------------


class AppointmentOut(CamelModel):
    id: str
    title: str
    description: str
    date: datetime

    @classmethod
    def from_model(cls, appointment: Appointment) -> AppointmentOut:
        return cls(
            id=appointment.id,
            title=appointment.title,
            description=appointment.description,
            date=appointment.date,
        )


class AppointmentSubmit(CamelModel):
    """Form submission; validation of title/date happens in the controller."""

    title: str = Field(default="", max_length=10_000)
    description: str = Field(default="", max_length=100_000)
    date: datetime | None = None


class AppointmentResult(CamelModel):
    appointment: AppointmentOut
    persisted: bool = True
    warnings: list[str] = Field(default_factory=lambda: cast("list[str]", []))


class AppointmentList(CamelModel):
    appointments: list[AppointmentOut]
    count: int


class ReorderRequest(CamelModel):
    from_index: int = Field(..., ge=0)
    to_index: int = Field(..., ge=0)
    day: date | None = Field(
        default=None, description="When set, indexes are positions within that day's list"
    )


# -----------------------
# Deletion DTOs
# -----------------------


class DeletionRequestOut(CamelModel):
    request_id: str
    appointment_id: str
    title: str
    requested_at: datetime


class DeletionDecision(CamelModel):
    confirmed: bool


class DeletionResult(CamelModel):
    deleted: bool
    appointment: AppointmentOut | None = None
    persisted: bool = True
    warnings: list[str] = Field(default_factory=lambda: cast("list[str]", []))


# -----------------------
# Calendar / form DTOs
# -----------------------


class CalendarDay(CamelModel):
    date: date
    in_month: bool
    appointments: list[AppointmentOut]


class CalendarView(CamelModel):
    anchor: date
    week_start: str
    start: date
    end: date
    weeks: int
    days: list[CalendarDay]

    @field_validator("week_start", mode="before")
    @classmethod
    def _weekday_to_name(cls, v: Any) -> Any:
        return weekday_name(v) if isinstance(v, int) else v


class FormState(CamelModel):
    visible: bool
    edit_target: str | None = None
    edit_position: int | None = None
    title: str
    description: str
    date: datetime | str | None = None
