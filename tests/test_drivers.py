import pytest


@pytest.mark.asyncio
async def test_register_driver_applies_route_defaults(client, driver_payload):
    resp = await client.post("/register-driver", json=driver_payload)
    assert resp.status_code == 200
    driver = resp.json()
    assert driver["id"]
    assert driver["name"] == "A"
    assert driver["busNumber"] == "KAA 001"
    assert driver["currentLocation"] == "Nairobi Central"
    assert driver["departureTime"] == "08:00"
    assert driver["status"] == "active"
    assert driver["createdAt"].endswith("Z")


@pytest.mark.asyncio
async def test_register_driver_generates_fresh_ids(client, driver_payload):
    first = (await client.post("/register-driver", json=driver_payload)).json()
    second = (await client.post("/register-driver", json=driver_payload)).json()
    assert first["id"] != second["id"]


@pytest.mark.asyncio
@pytest.mark.parametrize("missing", ["name", "phone", "route", "busNumber"])
async def test_register_driver_requires_every_field(client, driver_payload, missing):
    payload = dict(driver_payload)
    payload.pop(missing)
    resp = await client.post("/register-driver", json=payload)
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "All fields required"


@pytest.mark.asyncio
async def test_register_driver_treats_empty_string_as_missing(client, driver_payload):
    resp = await client.post("/register-driver", json={**driver_payload, "phone": ""})
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_register_driver_rejects_malformed_body(client):
    resp = await client.post(
        "/register-driver", content=b"not json", headers={"Content-Type": "application/json"}
    )
    assert resp.status_code == 400
    assert resp.json()["ok"] is False


@pytest.mark.asyncio
async def test_list_drivers_returns_every_registration_newest_first(client, driver_payload, service):
    ids = []
    for i in range(3):
        resp = await client.post("/register-driver", json={**driver_payload, "name": f"Driver {i}"})
        ids.append(resp.json()["id"])

    resp = await client.get("/drivers")
    assert resp.status_code == 200
    drivers = resp.json()
    assert [d["id"] for d in drivers] == list(reversed(ids))
    for driver_id in ids:
        assert await service.drivers.get(driver_id) is not None


@pytest.mark.asyncio
async def test_list_drivers_empty(client):
    resp = await client.get("/drivers")
    assert resp.status_code == 200
    assert resp.json() == []


@pytest.mark.asyncio
async def test_update_status_for_unregistered_driver_succeeds(client, redis_conn):
    resp = await client.post(
        "/update-driver-status",
        json={"driverId": "ghost", "currentLocation": "Ruiru", "departureTime": "09:15"},
    )
    assert resp.status_code == 200
    status = resp.json()
    assert status["driverId"] == "ghost"
    assert status["status"] == "updated"
    assert "updatedAt" in status
    # optional fields that were not sent are not stored
    assert "driverName" not in status

    assert await redis_conn.lrange("driver-updates", 0, -1) == ["ghost"]


@pytest.mark.asyncio
async def test_update_status_requires_location_and_time(client):
    resp = await client.post("/update-driver-status", json={"driverId": "d1", "currentLocation": "Ruiru"})
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_status_update_overwrites_and_is_fetchable(client, driver_payload):
    driver = (await client.post("/register-driver", json=driver_payload)).json()
    base = {"driverId": driver["id"], "driverName": "A", "busNumber": "KAA 001", "route": "Nairobi - Thika"}
    await client.post("/update-driver-status", json={**base, "currentLocation": "Roysambu", "departureTime": "08:30"})
    await client.post("/update-driver-status", json={**base, "currentLocation": "Kasarani", "departureTime": "08:45"})

    resp = await client.get(f"/driver-status/{driver['id']}")
    assert resp.status_code == 200
    status = resp.json()
    assert status["currentLocation"] == "Kasarani"
    assert status["departureTime"] == "08:45"

    # the registration record is a separate hash and is left alone
    drivers = (await client.get("/drivers")).json()
    assert drivers[0]["currentLocation"] == "Nairobi Central"


@pytest.mark.asyncio
async def test_status_for_unknown_driver_is_not_found(client):
    resp = await client.get("/driver-status/nobody")
    assert resp.status_code == 404
    assert resp.json()["error"]["message"] == "Driver status not found"


@pytest.mark.asyncio
async def test_delete_driver_removes_schedules_but_orphans_bookings(client, driver_payload, redis_conn):
    """Current behavior: bookings survive their driver's deletion."""
    driver = (await client.post("/register-driver", json=driver_payload)).json()
    driver_id = driver["id"]
    await client.post("/update-driver-status",
                      json={"driverId": driver_id, "currentLocation": "Ruiru", "departureTime": "09:00"})
    schedule = (await client.post("/add-schedule",
                                  json={"driverId": driver_id, "stage": "Ruiru", "departureTime": "09:00"})).json()
    booking = (await client.post("/create-booking", json={
        "scheduleId": schedule["id"], "driverId": driver_id, "passengerName": "Mary", "seatNumber": "A1",
    })).json()

    resp = await client.delete(f"/delete-driver/{driver_id}")
    assert resp.status_code == 200
    assert resp.json() == {"message": "Driver deleted"}

    assert (await client.get("/drivers")).json() == []
    assert (await client.get("/schedules")).json() == []
    assert (await client.get(f"/driver-status/{driver_id}")).status_code == 404
    assert await redis_conn.exists(f"driver:{driver_id}:schedules") == 0

    bookings = (await client.get("/bookings")).json()
    assert [b["id"] for b in bookings] == [booking["id"]]
    assert bookings[0]["driverId"] == driver_id
    assert await redis_conn.lrange(f"driver:{driver_id}:bookings", 0, -1) == [booking["id"]]


@pytest.mark.asyncio
async def test_delete_unknown_driver_still_reports_success(client):
    resp = await client.delete("/delete-driver/nobody")
    assert resp.status_code == 200
