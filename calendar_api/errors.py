from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any, cast

from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status
from starlette.exceptions import HTTPException as StarletteHTTPException

from database.appointment_controller import (
    ERR_BOUNDS,
    ERR_DECLINED,
    ERR_NOT_FOUND,
    ERR_VALIDATION,
    OperationResult,
)
from database.exceptions import (
    AppointmentNotFoundError,
    BoundsError,
    CalendarError,
)

from .schemas import ErrorResponse

if TYPE_CHECKING:
    from fastapi import FastAPI, Request


log = logging.getLogger("calendar_api.errors")

VALIDATION_ERROR = "Validation Error"
VALIDATION_MESSAGE = "One or more validation errors occurred."

# error_code -> (HTTP status, canonical code, error label)
_RESULT_STATUS: dict[str, tuple[int, str, str]] = {
    ERR_VALIDATION: (status.HTTP_422_UNPROCESSABLE_ENTITY, "ERR_VALIDATION", VALIDATION_ERROR),
    ERR_NOT_FOUND: (status.HTTP_404_NOT_FOUND, "ERR_NOT_FOUND", "Not Found"),
    ERR_BOUNDS: (status.HTTP_409_CONFLICT, "ERR_BOUNDS", "Position Out Of Range"),
    ERR_DECLINED: (status.HTTP_409_CONFLICT, "ERR_DECLINED", "Not Confirmed"),
}


class ApiError(Exception):
    """Raised by routes to return a canonical error response."""

    def __init__(
        self, status_code: int, code: str, error: str, message: str, details: Any = None
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.error = error
        self.message = message
        self.details = details


def raise_for_result(result: OperationResult) -> OperationResult:
    """Return a successful result unchanged, otherwise raise the matching ApiError."""
    if result.success:
        return result
    status_code, code, error = _RESULT_STATUS.get(
        result.error_code,
        (status.HTTP_400_BAD_REQUEST, "ERR_BAD_REQUEST", "Bad Request"),
    )
    details = {"errors": result.error.split("; ")} if result.error_code == ERR_VALIDATION else None
    raise ApiError(status_code, code, error, result.error, details)


def _trace_id_from_request(request: Request) -> str:
    trace_id = request.scope.get("trace_id")
    if isinstance(trace_id, str) and trace_id:
        return trace_id
    header_rid = request.headers.get("X-Request-ID") or request.headers.get("X-Trace-Id")
    return header_rid if isinstance(header_rid, str) else ""


def error_response(
    *,
    request: Request,
    status_code: int,
    code: str,
    error: str,
    message: str,
    details: Any | None = None,
) -> JSONResponse:
    rid = _trace_id_from_request(request)
    body = ErrorResponse(
        status=status_code,
        code=code,
        message=message,
        error=error,
        details=details,
        endpoint=f"{request.method} {request.url.path}",
        request_id=rid or None,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json", by_alias=True))


def _flatten_validation_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    return [
        {
            "loc": [str(x) for x in cast("Iterable[Any]", e.get("loc", []))],
            "msg": str(e.get("msg", "")),
            "type": str(e.get("type", "")),
        }
        for e in cast("Iterable[Mapping[str, Any]]", exc.errors())
    ]


def _log_extra(request: Request, status_code: int) -> dict[str, Any]:
    return {
        "trace_id": _trace_id_from_request(request),
        "path": request.url.path,
        "method": request.method,
        "status": status_code,
    }


def register_exception_handlers(app: FastAPI) -> None:
    """Register API exception handlers producing the canonical error body."""
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(CalendarError, calendar_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


def api_error_handler(request: Request, exc: Exception):
    exc_obj = cast("ApiError", exc)
    log.info(exc_obj.code, extra=_log_extra(request, exc_obj.status_code))
    return error_response(
        request=request,
        status_code=exc_obj.status_code,
        code=exc_obj.code,
        error=exc_obj.error,
        message=exc_obj.message,
        details=exc_obj.details,
    )


def calendar_error_handler(request: Request, exc: Exception):
    if isinstance(exc, AppointmentNotFoundError):
        status_code, code, error = _RESULT_STATUS[ERR_NOT_FOUND]
    elif isinstance(exc, BoundsError):
        status_code, code, error = _RESULT_STATUS[ERR_BOUNDS]
    else:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        code, error = "ERR_INTERNAL", "Internal Error"

    log.warning(type(exc).__name__, extra=_log_extra(request, status_code))
    return error_response(
        request=request,
        status_code=status_code,
        code=code,
        error=error,
        message=str(exc),
    )


def http_exception_handler(request: Request, exc: Exception):
    exc_obj = cast("StarletteHTTPException", exc)
    status_code = exc_obj.status_code or status.HTTP_500_INTERNAL_SERVER_ERROR

    if status_code == status.HTTP_404_NOT_FOUND:
        err, code = "Not Found", "ERR_NOT_FOUND"
    elif status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        err, code = "Method Not Allowed", "ERR_METHOD_NOT_ALLOWED"
    else:
        err = "HTTP Error" if status_code < 500 else "Internal Error"
        code = "ERR_HTTP" if status_code < 500 else "ERR_INTERNAL"

    log.warning("HTTPException", extra=_log_extra(request, status_code))
    return error_response(
        request=request,
        status_code=status_code,
        code=code,
        error=err,
        message=str(exc_obj.detail),
    )


def request_validation_exception_handler(request: Request, exc: Exception):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    errors = _flatten_validation_errors(cast("RequestValidationError", exc))

    log.warning("RequestValidationError", extra=_log_extra(request, status_code))
    return error_response(
        request=request,
        status_code=status_code,
        code="ERR_VALIDATION",
        error=VALIDATION_ERROR,
        message=VALIDATION_MESSAGE,
        details=errors,
    )


def unhandled_exception_handler(request: Request, _exc: Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    log.exception("UnhandledException", extra=_log_extra(request, status_code))
    return error_response(
        request=request,
        status_code=status_code,
        code="ERR_INTERNAL",
        error="Internal Error",
        message="An unexpected error occurred.",
    )
