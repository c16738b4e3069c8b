from __future__ import annotations

from fastapi import APIRouter, Depends
from starlette import status

from database.appointment_controller import AppointmentController

from ..dependencies import get_controller
from ..schemas import AppointmentOut, CalendarDay, CalendarView, FormState

router = APIRouter()


def _calendar_view(controller: AppointmentController) -> CalendarView:
    month = controller.calendar
    return CalendarView(
        anchor=month.anchor,
        week_start=month.week_start,
        start=month.start,
        end=month.end,
        weeks=len(month.weeks),
        days=[
            CalendarDay(
                date=day,
                in_month=month.in_month(day),
                appointments=[
                    AppointmentOut.from_model(a) for a in controller.appointments_for_date(day)
                ],
            )
            for day in month.days
        ],
    )


def form_state(controller: AppointmentController) -> FormState:
    pending = controller.pending
    return FormState(
        visible=controller.form_visible,
        edit_target=controller.edit_target,
        edit_position=controller.edit_position,
        title=pending.title,
        description=pending.description,
        date=pending.date,
    )


@router.get("/calendar", tags=["calendar"], response_model=CalendarView)
async def get_calendar(
    controller: AppointmentController = Depends(get_controller),
) -> CalendarView:
    """
    GET /calendar
    - The anchor month's padded grid, each day with its appointments.
    - Read-only, idempotent.
    """
    return _calendar_view(controller)


@router.post("/calendar/prev", tags=["calendar"], response_model=CalendarView)
async def previous_month(
    controller: AppointmentController = Depends(get_controller),
) -> CalendarView:
    controller.navigate_prev()
    return _calendar_view(controller)


@router.post("/calendar/next", tags=["calendar"], response_model=CalendarView)
async def next_month(
    controller: AppointmentController = Depends(get_controller),
) -> CalendarView:
    controller.navigate_next()
    return _calendar_view(controller)


@router.post("/calendar/today", tags=["calendar"], response_model=CalendarView)
async def current_month(
    controller: AppointmentController = Depends(get_controller),
) -> CalendarView:
    controller.go_to_today()
    return _calendar_view(controller)


@router.get("/form", tags=["form"], response_model=FormState)
async def get_form(controller: AppointmentController = Depends(get_controller)) -> FormState:
    return form_state(controller)


@router.post(
    "/form/toggle", tags=["form"], response_model=FormState, status_code=status.HTTP_200_OK
)
async def toggle_form(controller: AppointmentController = Depends(get_controller)) -> FormState:
    """POST /form/toggle — show/hide the form; an edit in progress is kept."""
    controller.toggle_form()
    return form_state(controller)


@router.post("/form/cancel", tags=["form"], response_model=FormState)
async def cancel_form(controller: AppointmentController = Depends(get_controller)) -> FormState:
    controller.cancel_edit()
    return form_state(controller)
