"""
AppointmentController - Orchestrates the month calendar's appointment workflow.
Owns the edit session and pending form input, validates submissions,
mutates the store, persists after every change and keeps the month grid current.
"""

from collections.abc import Callable
from dataclasses import dataclass, field, fields, replace
from datetime import date, datetime
from typing import Any
import uuid

from models.appointment import Appointment
from utils.appointments import create_appointment, parse_appointment_date
from utils.calendar_grid import CalendarGridBuilder, CalendarMonth
from utils.dates import add_months, start_of_month
from utils.logger import Logger

from .appointment_store import AppointmentStore
from .appointment_validator import AppointmentValidator
from .exceptions import AppointmentNotFoundError, BoundsError
from .interfaces import IDeleteConfirmation

# OperationResult.error_code values
ERR_VALIDATION = "validation"
ERR_NOT_FOUND = "not_found"
ERR_BOUNDS = "bounds"
ERR_DECLINED = "declined"

NOT_PERSISTED_WARNING = "Changes were applied but could not be saved"


@dataclass
class OperationResult:
    """Standardized result for controller operations"""

    success: bool
    data: Any = None
    error: str = ""
    error_code: str = ""
    warnings: list[str] = None
    persisted: bool = True

    def __post_init__(self):
        if self.warnings is None:
            self.warnings = []


@dataclass
class AppointmentInput:
    """Pending form input; ``date`` may still be unparsed text"""

    title: str = ""
    description: str = ""
    date: datetime | date | str | None = None


@dataclass
class EditSession:
    """Whether the form is shown and which appointment (by id) it edits"""

    form_visible: bool = False
    edit_target: str | None = None


@dataclass(frozen=True)
class DeletionRequest:
    """First half of the two-step delete protocol"""

    request_id: str
    appointment_id: str
    title: str
    requested_at: datetime = field(default_factory=datetime.now)


class AppointmentController:
    """
    Single entry point for calendar operations.
    Every operation runs to completion and persists before returning.
    """

    def __init__(
        self,
        store: AppointmentStore,
        grid_builder: CalendarGridBuilder | None = None,
        confirmation: IDeleteConfirmation | None = None,
        validator: AppointmentValidator | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self.logger = Logger()
        self.store = store
        self.grid_builder = grid_builder or CalendarGridBuilder()
        self.confirmation = confirmation
        self.validator = validator or AppointmentValidator()
        self._now = clock or datetime.now

        self.session = EditSession()
        self.pending = self._default_input()
        self.anchor_month: date = start_of_month(self._now())
        self.calendar: CalendarMonth = self.grid_builder.build(self.anchor_month)
        self._pending_deletions: dict[str, DeletionRequest] = {}

    def initialize(self) -> CalendarMonth:
        """Load persisted appointments and build the grid for the anchor month"""
        self.store.load()
        return self._rebuild_grid()

    # ----- read side -----

    @property
    def appointments(self) -> tuple[Appointment, ...]:
        return self.store.appointments

    @property
    def form_visible(self) -> bool:
        return self.session.form_visible

    @property
    def edit_target(self) -> str | None:
        return self.session.edit_target

    @property
    def edit_position(self) -> int | None:
        """Current position of the appointment being edited, if any"""
        if self.session.edit_target is None:
            return None
        try:
            return self.store.index_of(self.session.edit_target)
        except AppointmentNotFoundError:
            return None

    def appointments_for_date(self, day: date | datetime) -> list[Appointment]:
        """Appointments on the same calendar day as ``day``, in collection order"""
        return [a for a in self.store if a.occurs_on(day)]

    # ----- form state -----

    def toggle_form(self) -> bool:
        """Flip form visibility; the edit target is left as is"""
        self.session.form_visible = not self.session.form_visible
        return self.session.form_visible

    def start_edit(self, appointment_id: str) -> OperationResult:
        """Open the form populated with an existing appointment"""
        appointment = self.store.find(appointment_id)
        if appointment is None:
            return self._not_found(appointment_id)

        self.session.edit_target = appointment.id
        self.pending = AppointmentInput(
            title=appointment.title,
            description=appointment.description,
            date=appointment.date,
        )
        self.session.form_visible = True
        return OperationResult(success=True, data=appointment)

    def start_edit_at(self, position: int) -> OperationResult:
        try:
            appointment = self.store.get(position)
        except BoundsError as e:
            return OperationResult(success=False, error=str(e), error_code=ERR_BOUNDS)
        return self.start_edit(appointment.id)

    def update_pending(self, **changes: Any) -> AppointmentInput:
        """Change fields of the pending form input.

        Raises:
            TypeError: If a field name is not part of the form
        """
        allowed = {f.name for f in fields(AppointmentInput)}
        unknown = set(changes) - allowed
        if unknown:
            raise TypeError(f"Unknown form fields: {', '.join(sorted(unknown))}")
        self.pending = replace(self.pending, **changes)
        return self.pending

    def cancel_edit(self) -> None:
        """Abandon the current edit and close the form"""
        self.session.edit_target = None
        self.session.form_visible = False
        self.pending = self._default_input()

    # ----- mutations -----

    def submit(self, data: AppointmentInput | None = None) -> OperationResult:
        """
        Create a new appointment, or update the one being edited.

        Invalid input changes nothing and leaves the form open.

        Args:
            data: Form input; defaults to the pending input buffer

        Returns:
            OperationResult with the saved Appointment as data
        """
        data = data if data is not None else self.pending

        when, date_error = self._coerce_date(data.date)
        validation = self.validator.validate(data.title, data.description, when)
        if date_error:
            validation.errors.append(date_error)
            validation.is_valid = False
        if not validation.is_valid:
            return OperationResult(
                success=False,
                error="; ".join(validation.errors),
                error_code=ERR_VALIDATION,
                warnings=validation.warnings,
            )

        appointment = create_appointment(data.title, when, data.description)

        target = self.session.edit_target
        if target is not None:
            try:
                position = self.store.index_of(target)
            except AppointmentNotFoundError:
                return self._not_found(target)
            appointment.id = target
            self.store.replace_at(position, appointment)
            self.session.edit_target = None
        else:
            self.store.insert(appointment)

        persisted = self.store.save()
        self._rebuild_grid()
        self.pending = self._default_input()
        self.session.form_visible = False
        return self._mutation_result(appointment, persisted, validation.warnings)

    def delete(self, appointment_id: str) -> OperationResult:
        """Delete after asking the configured confirmation gate"""
        appointment = self.store.find(appointment_id)
        if appointment is None:
            return self._not_found(appointment_id)
        if self.confirmation is None:
            return OperationResult(
                success=False,
                error="No delete confirmation configured; use request_delete",
                error_code=ERR_DECLINED,
            )
        if not self.confirmation.confirm(appointment):
            return self._declined(appointment)
        return self._remove(appointment_id)

    def delete_at(self, position: int) -> OperationResult:
        try:
            appointment = self.store.get(position)
        except BoundsError as e:
            return OperationResult(success=False, error=str(e), error_code=ERR_BOUNDS)
        return self.delete(appointment.id)

    def request_delete(self, appointment_id: str) -> OperationResult:
        """Start a two-step delete; nothing changes until it is resolved"""
        appointment = self.store.find(appointment_id)
        if appointment is None:
            return self._not_found(appointment_id)

        request = DeletionRequest(
            request_id=uuid.uuid4().hex,
            appointment_id=appointment.id,
            title=appointment.title,
            requested_at=self._now(),
        )
        self._pending_deletions[request.request_id] = request
        return OperationResult(success=True, data=request)

    def resolve_delete(self, request_id: str, confirmed: bool) -> OperationResult:
        """Finish a two-step delete: remove on confirmation, otherwise do nothing"""
        request = self._pending_deletions.pop(request_id, None)
        if request is None:
            return OperationResult(
                success=False,
                error=f"No pending delete request {request_id!r}",
                error_code=ERR_NOT_FOUND,
            )

        appointment = self.store.find(request.appointment_id)
        if appointment is None:
            return self._not_found(request.appointment_id)
        if not confirmed:
            return self._declined(appointment)
        return self._remove(appointment.id)

    def reorder(self, from_position: int, to_position: int) -> OperationResult:
        """Move an appointment within the whole list (drag-drop completion)"""
        try:
            self.store.move_within_collection(from_position, to_position)
        except BoundsError as e:
            return OperationResult(success=False, error=str(e), error_code=ERR_BOUNDS)
        return self._mutation_result(self.store.get(to_position), self.store.save())

    def reorder_within_day(self, day: date | datetime, from_index: int, to_index: int) -> OperationResult:
        """Move an appointment within one day's list, using positions local to that day"""
        positions = self.store.positions_on(day)
        try:
            self.store.move_within_positions(positions, from_index, to_index)
        except BoundsError as e:
            return OperationResult(success=False, error=str(e), error_code=ERR_BOUNDS)
        moved = self.store.get(positions[to_index])
        return self._mutation_result(moved, self.store.save())

    # ----- navigation -----

    def navigate_prev(self) -> CalendarMonth:
        return self.go_to_month(add_months(self.anchor_month, -1))

    def navigate_next(self) -> CalendarMonth:
        return self.go_to_month(add_months(self.anchor_month, 1))

    def go_to_today(self) -> CalendarMonth:
        return self.go_to_month(self._now())

    def go_to_month(self, day: date | datetime) -> CalendarMonth:
        self.anchor_month = start_of_month(day)
        return self._rebuild_grid()

    # ----- internals -----

    def _remove(self, appointment_id: str) -> OperationResult:
        removed = self.store.remove_at(self.store.index_of(appointment_id))
        if self.session.edit_target == appointment_id:
            self.session.edit_target = None
            self.pending = self._default_input()
        self._pending_deletions = {
            rid: req
            for rid, req in self._pending_deletions.items()
            if req.appointment_id != appointment_id
        }
        persisted = self.store.save()
        self._rebuild_grid()
        return self._mutation_result(removed, persisted)

    def _rebuild_grid(self) -> CalendarMonth:
        self.calendar = self.grid_builder.build(self.anchor_month)
        return self.calendar

    def _default_input(self) -> AppointmentInput:
        return AppointmentInput(title="", description="", date=self._now())

    @staticmethod
    def _coerce_date(value: Any) -> tuple[Any, str]:
        if isinstance(value, str):
            try:
                return parse_appointment_date(value), ""
            except (ValueError, OverflowError):
                return value, f"Could not read date {value!r}"
        if isinstance(value, date):
            # datetimes too: aware values are stored as local naive time
            return parse_appointment_date(value), ""
        return value, ""

    def _mutation_result(
        self, appointment: Appointment, persisted: bool, warnings: list[str] | None = None
    ) -> OperationResult:
        warnings = list(warnings or [])
        if not persisted:
            self.logger.warning(f"In-memory appointments differ from storage after {appointment.id}")
            warnings.append(NOT_PERSISTED_WARNING)
        return OperationResult(
            success=True, data=appointment, warnings=warnings, persisted=persisted
        )

    @staticmethod
    def _not_found(appointment_id: str) -> OperationResult:
        return OperationResult(
            success=False,
            error=str(AppointmentNotFoundError(appointment_id)),
            error_code=ERR_NOT_FOUND,
        )

    @staticmethod
    def _declined(appointment: Appointment) -> OperationResult:
        return OperationResult(
            success=False,
            data=appointment,
            error="Delete was not confirmed",
            error_code=ERR_DECLINED,
        )


class AutoConfirm:
    """Confirmation gate that always answers the same way (headless use)"""

    def __init__(self, answer: bool = True):
        self.answer = answer

    def confirm(self, appointment: Appointment) -> bool:
        return self.answer


class CallbackConfirmation:
    """Confirmation gate that delegates to a callable, e.g. a UI dialog"""

    def __init__(self, callback: Callable[[Appointment], bool]):
        self.callback = callback

    def confirm(self, appointment: Appointment) -> bool:
        return bool(self.callback(appointment))
