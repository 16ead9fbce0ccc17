# core/deps.py
# FastAPI dependencies. The Redis handle is created once in main.py's startup
# hook and parked on app.state; handlers never reach for a module global.
from fastapi import Request

from infra.redis_client import RedisClient
from services.booking_service import BookingService


def get_store(request: Request) -> RedisClient:
    return request.app.state.store


def get_booking_service(request: Request) -> BookingService:
    return BookingService(get_store(request))
