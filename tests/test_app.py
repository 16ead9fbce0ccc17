import pytest

from main import create_app
from config.settings import Settings
from infra.redis_client import RedisClient, StoreUnavailable


@pytest.mark.asyncio
async def test_health_reports_liveness_with_timestamp(client):
    resp = await client.get("/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "Server is running"
    assert body["timestamp"].endswith("Z")
    assert resp.headers.get("X-Request-ID")


@pytest.mark.asyncio
async def test_ready_pings_the_store(client):
    resp = await client.get("/ready")
    assert resp.status_code == 200
    assert resp.json() == {"ready": True}


@pytest.mark.asyncio
async def test_ready_is_503_when_store_is_down(client, fake_server):
    fake_server.connected = False
    resp = await client.get("/ready")
    assert resp.status_code == 503
    assert resp.json()["error"]["code"] == "store_unreachable"


@pytest.mark.asyncio
@pytest.mark.parametrize("method,path,body,message", [
    ("GET", "/drivers", None, "Error fetching drivers"),
    ("GET", "/schedules", None, "Error fetching schedules"),
    ("GET", "/bookings", None, "Error fetching bookings"),
    ("GET", "/driver-status/d1", None, "Error fetching driver status"),
    ("POST", "/register-driver",
     {"name": "A", "phone": "1", "route": "Nairobi - Thika", "busNumber": "KAA 001"}, "Error registering driver"),
    ("POST", "/update-driver-status",
     {"driverId": "d1", "currentLocation": "Ruiru", "departureTime": "09:00"}, "Error updating driver status"),
    ("POST", "/add-schedule", {"driverId": "d1", "stage": "Ruiru", "departureTime": "09:00"}, "Error adding schedule"),
    ("POST", "/create-booking", {"scheduleId": "s1", "passengerName": "M", "seatNumber": "A1"}, "Error creating booking"),
    ("DELETE", "/delete-schedule/s1", None, "Error deleting schedule"),
    ("DELETE", "/delete-booking/b1", None, "Error deleting booking"),
    ("DELETE", "/delete-driver/d1", None, "Error deleting driver"),
])
async def test_store_failure_becomes_generic_500(client, fake_server, method, path, body, message):
    fake_server.connected = False
    resp = await client.request(method, path, json=body)
    assert resp.status_code == 500
    assert resp.json() == {"ok": False, "data": None, "error": {"code": "500", "message": message}}


@pytest.mark.asyncio
async def test_validation_runs_before_touching_the_store(client, fake_server):
    fake_server.connected = False
    resp = await client.post("/register-driver", json={"name": "A"})
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_store_lifecycle(redis_conn):
    store = RedisClient(client=redis_conn)
    await store.connect()
    assert await store.ping() is True
    await store.disconnect()
    with pytest.raises(StoreUnavailable):
        await store.ping()


def test_create_app_builds_store_from_settings():
    app = create_app(Settings(REDIS_URL="redis://example:6380/2", LOG_LEVEL="WARNING"))
    assert app.state.store.url == "redis://example:6380/2"
    assert app.state.store.redis is None
