"""
Pure helpers for the Streamlit booking UI (no Streamlit imports, so they are testable).

- SEED_SCHEDULES: five example departures shown before anyone registers. Client-side only.
- merge_schedules(): the list the Schedules / Driver Mgmt tabs render.
- whatsapp_link(): deep link that opens a chat with the driver, message pre-filled.
"""
import re
from typing import Optional
from urllib.parse import quote

from models.route import ROUTE_NAME

SEED_SCHEDULES = [
    {"id": "sched-001", "driverId": "driver-001", "driverName": "John Mbugua", "busNumber": "KCC 456",
     "stage": "Nairobi Central", "departureTime": "06:00", "phone": "+254712345678", "route": ROUTE_NAME},
    {"id": "sched-002", "driverId": "driver-002", "driverName": "Peter Kariuki", "busNumber": "KCA 789",
     "stage": "Roysambu", "departureTime": "07:30", "phone": "+254723456789", "route": ROUTE_NAME},
    {"id": "sched-003", "driverId": "driver-003", "driverName": "David Mwangi", "busNumber": "KCC 123",
     "stage": "Kasarani", "departureTime": "08:15", "phone": "+254734567890", "route": ROUTE_NAME},
    {"id": "sched-004", "driverId": "driver-004", "driverName": "Samuel Kipchoge", "busNumber": "KCB 234",
     "stage": "Ruiru", "departureTime": "09:00", "phone": "+254745678901", "route": ROUTE_NAME},
    {"id": "sched-005", "driverId": "driver-005", "driverName": "James Ochieng", "busNumber": "KCC 567",
     "stage": "Thika Town", "departureTime": "10:30", "phone": "+254756789012", "route": ROUTE_NAME},
]


def phone_digits(phone: Optional[str]) -> str:
    return re.sub(r"[^0-9]", "", phone or "")


def whatsapp_message(schedule: dict) -> str:
    return (
        f"Hi, I would like to book a seat on the bus departing from {schedule.get('stage')} "
        f"at {schedule.get('departureTime')}. Bus number: {schedule.get('busNumber')}"
    )


def whatsapp_link(schedule: dict) -> str:
    # same unreserved set as JavaScript's encodeURIComponent
    text = quote(whatsapp_message(schedule), safe="-_.!~*'()")
    return f"https://wa.me/{phone_digits(schedule.get('phone'))}?text={text}"


def merge_schedules(seed: list[dict], server_schedules: list[dict], drivers: list[dict],
                    overrides: Optional[dict] = None) -> list[dict]:
    """
    Build the displayed schedule list.

    Seed entries come first, then server schedules (oldest first) enriched with
    their driver's name / bus / phone / route. Server schedules whose driver is
    no longer registered are dropped. `overrides` maps driverId ->
    {"stage", "departureTime"} from status updates made in this session.
    """
    overrides = overrides or {}
    by_id = {d.get("id"): d for d in drivers}
    merged = [dict(s) for s in seed]

    for sched in reversed(server_schedules):
        driver = by_id.get(sched.get("driverId"))
        if driver is None:
            continue
        merged.append({
            "id": sched.get("id"),
            "driverId": driver.get("id"),
            "driverName": driver.get("name"),
            "busNumber": driver.get("busNumber"),
            "stage": sched.get("stage"),
            "departureTime": sched.get("departureTime"),
            "phone": driver.get("phone"),
            "route": driver.get("route") or ROUTE_NAME,
        })

    for entry in merged:
        update = overrides.get(entry["driverId"])
        if update:
            entry["stage"] = update.get("stage", entry["stage"])
            entry["departureTime"] = update.get("departureTime", entry["departureTime"])
    return merged


def booking_payload(schedule: dict, passenger_name: str, seat_number: str, booking_date: str) -> dict:
    return {
        "scheduleId": schedule.get("id"),
        "driverId": schedule.get("driverId"),
        "driverName": schedule.get("driverName"),
        "busNumber": schedule.get("busNumber"),
        "stage": schedule.get("stage"),
        "departureTime": schedule.get("departureTime"),
        "passengerName": passenger_name,
        "seatNumber": seat_number,
        "phone": schedule.get("phone"),
        "bookingDate": booking_date,
        "status": "active",
    }


def status_payload(schedule: dict, current_location: str, departure_time: str) -> dict:
    return {
        "driverId": schedule.get("driverId"),
        "driverName": schedule.get("driverName"),
        "busNumber": schedule.get("busNumber"),
        "currentLocation": current_location,
        "departureTime": departure_time,
        "route": schedule.get("route"),
        "phone": schedule.get("phone"),
    }
