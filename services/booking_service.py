# services/booking_service.py
"""
Driver / schedule / booking operations over the Redis tables.

Key layout:
- driver:{id}                 Driver hash            (indexed by `drivers`)
- driver-status:{driverId}    DriverStatus hash      (not indexed)
- driver-updates              driverIds that reported a status (write-only history)
- schedule:{id}               Schedule hash          (indexed by `schedules`)
- booking:{id}                Booking hash           (indexed by `bookings`)
- driver:{driverId}:schedules / driver:{driverId}:bookings   per-driver ID lists

Cascades:
- delete_schedule: record + global entry + owning driver's schedule list entry
- delete_booking:  record + global entry + owning driver's booking list entry
- delete_driver:   record + status record + global entry + every schedule in the
                   driver's list (record and global entry) + the list itself.
                   Bookings are left in place and keep pointing at the driver.

No operation is atomic and nothing checks that referenced IDs exist.
"""
import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from infra.redis_client import RedisClient
from models.route import ORIGIN_STAGE, DEFAULT_DEPARTURE_TIME, DEFAULT_DRIVER_STATUS, STATUS_UPDATED
from models.schemas import RegisterDriverRequest, DriverStatusUpdate, ScheduleCreate, BookingCreate
from services.tables import RecordTable, OwnerIndex

logger = logging.getLogger(__name__)

DRIVER_UPDATES_KEY = "driver-updates"


def utc_timestamp() -> str:
    """ISO-8601 UTC with milliseconds and a Z suffix, e.g. 2024-05-01T08:00:00.000Z."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def new_id() -> str:
    return str(uuid.uuid4())


class BookingService:
    def __init__(self, store: RedisClient):
        self.store = store
        self.drivers = RecordTable(store, "driver", "drivers")
        self.statuses = RecordTable(store, "driver-status")
        self.schedules = RecordTable(store, "schedule", "schedules")
        self.bookings = RecordTable(store, "booking", "bookings")
        self.driver_schedules = OwnerIndex(store, "schedules")
        self.driver_bookings = OwnerIndex(store, "bookings")

    # ------------- DRIVERS -------------
    async def register_driver(self, payload: RegisterDriverRequest) -> dict:
        driver_id = new_id()
        driver = {
            "id": driver_id,
            "name": payload.name,
            "phone": payload.phone,
            "route": payload.route,
            "busNumber": payload.bus_number,
            "currentLocation": ORIGIN_STAGE,
            "departureTime": DEFAULT_DEPARTURE_TIME,
            "status": DEFAULT_DRIVER_STATUS,
            "createdAt": utc_timestamp(),
        }
        stored = await self.drivers.insert(driver_id, driver)
        logger.info("Registered driver %s (%s)", driver_id, payload.bus_number)
        return stored

    async def list_drivers(self) -> list[dict]:
        return await self.drivers.all()

    async def delete_driver(self, driver_id: str):
        await self.store.delete(self.drivers.key(driver_id))
        await self.store.delete(self.statuses.key(driver_id))
        await self.store.lrem(self.drivers.index_key, driver_id)

        schedule_ids = await self.driver_schedules.members(driver_id)
        for schedule_id in schedule_ids:
            await self.store.delete(self.schedules.key(schedule_id))
            await self.store.lrem(self.schedules.index_key, schedule_id)
        await self.driver_schedules.drop(driver_id)
        logger.info("Deleted driver %s and %d schedule(s)", driver_id, len(schedule_ids))

    # ------------- STATUS -------------
    async def update_driver_status(self, payload: DriverStatusUpdate) -> dict:
        status = {
            "driverId": payload.driver_id,
            "driverName": payload.driver_name,
            "busNumber": payload.bus_number,
            "currentLocation": payload.current_location,
            "departureTime": payload.departure_time,
            "route": payload.route,
            "phone": payload.phone,
            "status": STATUS_UPDATED,
            "updatedAt": utc_timestamp(),
        }
        stored = await self.statuses.put(payload.driver_id, status)
        await self.store.lpush(DRIVER_UPDATES_KEY, payload.driver_id)
        return stored

    async def get_driver_status(self, driver_id: str) -> Optional[dict]:
        return await self.statuses.get(driver_id)

    # ------------- SCHEDULES -------------
    async def add_schedule(self, payload: ScheduleCreate) -> dict:
        schedule_id = new_id()
        schedule = {
            "id": schedule_id,
            "driverId": payload.driver_id,
            "stage": payload.stage,
            "departureTime": payload.departure_time,
            "createdAt": utc_timestamp(),
        }
        stored = await self.schedules.insert(schedule_id, schedule)
        await self.driver_schedules.add(payload.driver_id, schedule_id)
        return stored

    async def list_schedules(self) -> list[dict]:
        return await self.schedules.all()

    async def delete_schedule(self, schedule_id: str):
        schedule = await self.schedules.remove(schedule_id)
        if schedule.get("driverId"):
            await self.driver_schedules.discard(schedule["driverId"], schedule_id)

    # ------------- BOOKINGS -------------
    async def create_booking(self, payload: BookingCreate) -> dict:
        booking_id = new_id()
        booking = {
            "id": booking_id,
            "scheduleId": payload.schedule_id,
            "driverId": payload.driver_id,
            "driverName": payload.driver_name,
            "busNumber": payload.bus_number,
            "stage": payload.stage,
            "departureTime": payload.departure_time,
            "passengerName": payload.passenger_name,
            "seatNumber": payload.seat_number,
            "phone": payload.phone,
            "bookingDate": payload.booking_date,
            "status": payload.status,
            "createdAt": utc_timestamp(),
        }
        stored = await self.bookings.insert(booking_id, booking)
        if payload.driver_id:
            await self.driver_bookings.add(payload.driver_id, booking_id)
        logger.info("Booking %s: seat %s on schedule %s", booking_id, payload.seat_number, payload.schedule_id)
        return stored

    async def list_bookings(self) -> list[dict]:
        return await self.bookings.all()

    async def delete_booking(self, booking_id: str):
        booking = await self.bookings.remove(booking_id)
        if booking.get("driverId"):
            await self.driver_bookings.discard(booking["driverId"], booking_id)
