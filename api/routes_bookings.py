# api/routes_bookings.py
from fastapi import APIRouter, HTTPException, Depends
from models.schemas import BookingCreate
from services.booking_service import BookingService
from core.deps import get_booking_service
from core.response import message
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/create-booking")
async def create_booking(
    payload: BookingCreate,
    service: BookingService = Depends(get_booking_service),
):
    """
    Reserve a seat on a departure.

    Request JSON:
    {
      "scheduleId": "sched-001",
      "passengerName": "Mary",
      "seatNumber": "A1",
      "driverId": "...", "driverName": "...", "busNumber": "...", "stage": "...",
      "departureTime": "...", "phone": "...", "bookingDate": "...", "status": "active"   (optional)
    }

    The schedule is not looked up and the seat is not checked for an existing booking.
    """
    try:
        if payload.missing_required():
            raise HTTPException(status_code=400, detail="All fields required")
        return await service.create_booking(payload)
    except HTTPException:
        raise
    except Exception:
        logger.exception("create_booking failed for scheduleId=%s", payload.schedule_id)
        raise HTTPException(status_code=500, detail="Error creating booking")


@router.get("/bookings")
async def list_bookings(service: BookingService = Depends(get_booking_service)):
    try:
        return await service.list_bookings()
    except Exception:
        logger.exception("list_bookings failed")
        raise HTTPException(status_code=500, detail="Error fetching bookings")


@router.delete("/delete-booking/{booking_id}")
async def delete_booking(
    booking_id: str,
    service: BookingService = Depends(get_booking_service),
):
    try:
        await service.delete_booking(booking_id)
        return message("Booking deleted")
    except Exception:
        logger.exception("delete_booking failed for bookingId=%s", booking_id)
        raise HTTPException(status_code=500, detail="Error deleting booking")
