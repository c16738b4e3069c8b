from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Depends

from database.appointment_controller import AppointmentController

from ..dependencies import get_controller

router = APIRouter()


@router.get("/health", tags=["system"])
async def health(controller: AppointmentController = Depends(get_controller)) -> dict[str, Any]:
    """
    GET /health — Returns:
      {
        "status": "ok",
        "appointments": int,
        "storage": storage adapter class name,
        "time": ISO8601
      }
    """
    return {
        "status": "ok",
        "appointments": len(controller.store),
        "storage": type(controller.store.storage).__name__,
        "time": datetime.now(timezone.utc).isoformat(),
    }
