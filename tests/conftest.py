import sys
from pathlib import Path

import fakeredis
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient


# Ensure project root is on sys.path so `api.*` / `services.*` imports work
ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))


from config.settings import Settings
from infra.redis_client import RedisClient
from main import create_app
from services.booking_service import BookingService


@pytest.fixture()
def fake_server():
    """One in-process Redis server per test; flip `.connected` to simulate an outage."""
    return fakeredis.FakeServer()


@pytest.fixture()
def redis_conn(fake_server):
    return fakeredis.FakeAsyncRedis(server=fake_server, decode_responses=True)


@pytest.fixture()
def store(redis_conn):
    return RedisClient(client=redis_conn)


@pytest.fixture()
def service(store):
    return BookingService(store)


@pytest_asyncio.fixture()
async def client(store):
    """Async test client for the booking API, backed by fakeredis."""
    app = create_app(Settings(LOG_LEVEL="WARNING"), store=store)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac


@pytest.fixture()
def driver_payload():
    return {
        "name": "A",
        "phone": "+254700000000",
        "route": "Nairobi - Thika",
        "busNumber": "KAA 001",
    }
