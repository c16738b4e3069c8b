from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query
from starlette import status

from database.appointment_controller import (
    ERR_DECLINED,
    AppointmentController,
    AppointmentInput,
)
from utils.appointments import is_valid_date_string

from ..dependencies import get_controller
from ..errors import VALIDATION_ERROR, ApiError, raise_for_result
from ..schemas import (
    AppointmentList,
    AppointmentOut,
    AppointmentResult,
    AppointmentSubmit,
    DeletionDecision,
    DeletionRequestOut,
    DeletionResult,
    FormState,
    ReorderRequest,
)
from .calendar import form_state

router = APIRouter()


@router.get("/appointments", tags=["appointments"], response_model=AppointmentList)
async def list_appointments(
    day: str | None = Query(default=None, alias="date"),
    controller: AppointmentController = Depends(get_controller),
) -> AppointmentList:
    """
    GET /appointments[?date=YYYY-MM-DD]
    - All appointments in list order, or only those on the given day.
    - Read-only, idempotent.
    """
    if day is None:
        items = list(controller.appointments)
    elif is_valid_date_string(day):
        items = controller.appointments_for_date(date.fromisoformat(day))
    else:
        raise ApiError(
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            "ERR_VALIDATION",
            VALIDATION_ERROR,
            f"date must be YYYY-MM-DD, got {day!r}",
        )
    return AppointmentList(
        appointments=[AppointmentOut.from_model(a) for a in items],
        count=len(items),
    )


@router.post(
    "/appointments",
    tags=["appointments"],
    response_model=AppointmentResult,
    status_code=status.HTTP_200_OK,
)
async def submit_appointment(
    body: AppointmentSubmit,
    controller: AppointmentController = Depends(get_controller),
) -> AppointmentResult:
    """
    POST /appointments
    - Creates an appointment, or updates the one opened with /appointments/{id}/edit.
    - 422 when title is empty or date missing; nothing changes.
    """
    result = raise_for_result(
        controller.submit(
            AppointmentInput(title=body.title, description=body.description, date=body.date)
        )
    )
    return AppointmentResult(
        appointment=AppointmentOut.from_model(result.data),
        persisted=result.persisted,
        warnings=result.warnings,
    )


@router.post("/appointments/reorder", tags=["appointments"], response_model=AppointmentList)
async def reorder_appointments(
    body: ReorderRequest,
    controller: AppointmentController = Depends(get_controller),
) -> AppointmentList:
    """
    POST /appointments/reorder
    - Without `day`: indexes are positions in the whole list.
    - With `day`: indexes are positions within that day's appointments.
    - 409 when an index is out of range.
    """
    if body.day is not None:
        raise_for_result(controller.reorder_within_day(body.day, body.from_index, body.to_index))
        items = controller.appointments_for_date(body.day)
    else:
        raise_for_result(controller.reorder(body.from_index, body.to_index))
        items = controller.appointments
    return AppointmentList(
        appointments=[AppointmentOut.from_model(a) for a in items],
        count=len(items),
    )


@router.post("/appointments/{appointment_id}/edit", tags=["appointments"], response_model=FormState)
async def edit_appointment(
    appointment_id: str,
    controller: AppointmentController = Depends(get_controller),
) -> FormState:
    """POST /appointments/{id}/edit — open the form populated with that appointment."""
    raise_for_result(controller.start_edit(appointment_id))
    return form_state(controller)


@router.post(
    "/appointments/{appointment_id}/delete-request",
    tags=["appointments"],
    response_model=DeletionRequestOut,
    status_code=status.HTTP_201_CREATED,
)
async def request_delete(
    appointment_id: str,
    controller: AppointmentController = Depends(get_controller),
) -> DeletionRequestOut:
    """
    POST /appointments/{id}/delete-request
    - First step of deletion; resolve with POST /deletions/{requestId}.
    """
    request = raise_for_result(controller.request_delete(appointment_id)).data
    return DeletionRequestOut(
        request_id=request.request_id,
        appointment_id=request.appointment_id,
        title=request.title,
        requested_at=request.requested_at,
    )


@router.post("/deletions/{request_id}", tags=["appointments"], response_model=DeletionResult)
async def resolve_delete(
    request_id: str,
    body: DeletionDecision,
    controller: AppointmentController = Depends(get_controller),
) -> DeletionResult:
    """
    POST /deletions/{requestId} {"confirmed": bool}
    - confirmed=true removes the appointment; false leaves everything unchanged.
    """
    result = controller.resolve_delete(request_id, body.confirmed)
    if not result.success and result.error_code == ERR_DECLINED:
        return DeletionResult(deleted=False, appointment=AppointmentOut.from_model(result.data))
    raise_for_result(result)
    return DeletionResult(
        deleted=True,
        appointment=AppointmentOut.from_model(result.data),
        persisted=result.persisted,
        warnings=result.warnings,
    )
