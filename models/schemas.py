from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import ClassVar, Optional, Tuple


class RequestModel(BaseModel):
    """
    Request bodies use camelCase on the wire (busNumber, driverId, ...).

    Every field is optional at parse time; routes call missing_required() and
    answer 400 themselves so an empty string counts as missing too.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="ignore",
    )

    REQUIRED: ClassVar[Tuple[str, ...]] = ()

    def missing_required(self) -> list[str]:
        return [name for name in self.REQUIRED if not getattr(self, name)]


class RegisterDriverRequest(RequestModel):
    REQUIRED = ("name", "phone", "route", "bus_number")

    name: Optional[str] = None
    phone: Optional[str] = None
    route: Optional[str] = None
    bus_number: Optional[str] = None


class DriverStatusUpdate(RequestModel):
    REQUIRED = ("driver_id", "current_location", "departure_time")

    driver_id: Optional[str] = None
    driver_name: Optional[str] = None
    bus_number: Optional[str] = None
    current_location: Optional[str] = None
    departure_time: Optional[str] = None
    route: Optional[str] = None
    phone: Optional[str] = None


class ScheduleCreate(RequestModel):
    REQUIRED = ("driver_id", "stage", "departure_time")

    driver_id: Optional[str] = None
    stage: Optional[str] = None
    departure_time: Optional[str] = None


class BookingCreate(RequestModel):
    REQUIRED = ("passenger_name", "seat_number", "schedule_id")

    schedule_id: Optional[str] = None
    driver_id: Optional[str] = None
    driver_name: Optional[str] = None
    bus_number: Optional[str] = None
    stage: Optional[str] = None
    departure_time: Optional[str] = None
    passenger_name: Optional[str] = None
    seat_number: Optional[str] = None
    phone: Optional[str] = None
    booking_date: Optional[str] = None
    status: Optional[str] = None
