# api/routes_schedules.py
from fastapi import APIRouter, HTTPException, Depends
from models.schemas import ScheduleCreate
from services.booking_service import BookingService
from core.deps import get_booking_service
from core.response import message
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/add-schedule")
async def add_schedule(
    payload: ScheduleCreate,
    service: BookingService = Depends(get_booking_service),
):
    """
    Add a departure for a driver.

    Request JSON:
    {
      "driverId": "<uuid>",
      "stage": "Kasarani",
      "departureTime": "08:15"
    }
    """
    try:
        if payload.missing_required():
            raise HTTPException(status_code=400, detail="All fields required")
        return await service.add_schedule(payload)
    except HTTPException:
        raise
    except Exception:
        logger.exception("add_schedule failed for payload=%s", payload)
        raise HTTPException(status_code=500, detail="Error adding schedule")


@router.get("/schedules")
async def list_schedules(service: BookingService = Depends(get_booking_service)):
    try:
        return await service.list_schedules()
    except Exception:
        logger.exception("list_schedules failed")
        raise HTTPException(status_code=500, detail="Error fetching schedules")


@router.delete("/delete-schedule/{schedule_id}")
async def delete_schedule(
    schedule_id: str,
    service: BookingService = Depends(get_booking_service),
):
    try:
        await service.delete_schedule(schedule_id)
        return message("Schedule deleted")
    except Exception:
        logger.exception("delete_schedule failed for scheduleId=%s", schedule_id)
        raise HTTPException(status_code=500, detail="Error deleting schedule")
