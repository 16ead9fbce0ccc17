# api/routes_drivers.py
from fastapi import APIRouter, HTTPException, Depends
from models.schemas import RegisterDriverRequest, DriverStatusUpdate
from services.booking_service import BookingService
from core.deps import get_booking_service
from core.response import message
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/register-driver")
async def register_driver(
    payload: RegisterDriverRequest,
    service: BookingService = Depends(get_booking_service),
):
    """
    Register a driver for the route.

    Request JSON:
    {
      "name": "John Mbugua",
      "phone": "+254712345678",
      "route": "Nairobi - Thika",
      "busNumber": "KCC 456"
    }

    Response JSON (Driver):
    {
      "id": "<uuid>",
      "name": "...", "phone": "...", "route": "...", "busNumber": "...",
      "currentLocation": "Nairobi Central",
      "departureTime": "08:00",
      "status": "active",
      "createdAt": "2024-05-01T08:00:00.000Z"
    }
    """
    try:
        if payload.missing_required():
            raise HTTPException(status_code=400, detail="All fields required")
        return await service.register_driver(payload)
    except HTTPException:
        raise
    except Exception:
        logger.exception("register_driver failed for payload=%s", payload)
        raise HTTPException(status_code=500, detail="Error registering driver")


@router.get("/drivers")
async def list_drivers(service: BookingService = Depends(get_booking_service)):
    """All registered drivers, newest first. IDs whose record is missing are skipped."""
    try:
        return await service.list_drivers()
    except Exception:
        logger.exception("list_drivers failed")
        raise HTTPException(status_code=500, detail="Error fetching drivers")


@router.post("/update-driver-status")
async def update_driver_status(
    payload: DriverStatusUpdate,
    service: BookingService = Depends(get_booking_service),
):
    """
    Driver reports current stage and next departure time.

    Request JSON:
    {
      "driverId": "<uuid>",
      "currentLocation": "Ruiru",
      "departureTime": "09:15",
      "driverName": "...", "busNumber": "...", "route": "...", "phone": "..."   (optional)
    }

    Overwrites the driver's status record. The driver does not have to be registered.
    """
    try:
        if payload.missing_required():
            raise HTTPException(status_code=400, detail="All fields required")
        return await service.update_driver_status(payload)
    except HTTPException:
        raise
    except Exception:
        logger.exception("update_driver_status failed for driverId=%s", payload.driver_id)
        raise HTTPException(status_code=500, detail="Error updating driver status")


@router.get("/driver-status/{driver_id}")
async def get_driver_status(
    driver_id: str,
    service: BookingService = Depends(get_booking_service),
):
    try:
        status = await service.get_driver_status(driver_id)
    except Exception:
        logger.exception("get_driver_status failed for driverId=%s", driver_id)
        raise HTTPException(status_code=500, detail="Error fetching driver status")
    if not status:
        raise HTTPException(status_code=404, detail="Driver status not found")
    return status


@router.delete("/delete-driver/{driver_id}")
async def delete_driver(
    driver_id: str,
    service: BookingService = Depends(get_booking_service),
):
    """Removes the driver, its status and its schedules. Its bookings are kept."""
    try:
        await service.delete_driver(driver_id)
        return message("Driver deleted")
    except Exception:
        logger.exception("delete_driver failed for driverId=%s", driver_id)
        raise HTTPException(status_code=500, detail="Error deleting driver")
