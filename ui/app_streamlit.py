"""
Streamlit UI for the bus booking service (Nairobi - Thika route).

Run:
- streamlit run ui/app_streamlit.py

Tabs: Schedules, Bookings, Driver Mgmt, Register. Talks to the FastAPI backend
(API_URL setting, editable in the sidebar).
"""
import sys
from pathlib import Path

import requests
import streamlit as st

# Ensure project root is on sys.path when launched via `streamlit run ui/app_streamlit.py`
ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from config.settings import settings
from models.route import THIKA_STAGES, ORIGIN_STAGE, DEFAULT_DEPARTURE_TIME
from services.booking_service import utc_timestamp
from ui.helpers import SEED_SCHEDULES, merge_schedules, whatsapp_link, booking_payload, status_payload

API_URL = st.sidebar.text_input("API URL", settings.API_URL, key="api_url").rstrip("/")

# Per-session overlay of driver status updates: driverId -> {"stage", "departureTime"}
if "overrides" not in st.session_state:
    st.session_state["overrides"] = {}


def api_get(path: str) -> list:
    try:
        resp = requests.get(f"{API_URL}{path}", timeout=10)
        resp.raise_for_status()
        return resp.json()
    except requests.exceptions.RequestException as e:
        st.error(f"API Error ({path}): {e}")
        return []


def api_send(method: str, path: str, payload: dict | None = None):
    try:
        resp = requests.request(method, f"{API_URL}{path}", json=payload, timeout=10)
        resp.raise_for_status()
        return resp.json()
    except requests.exceptions.RequestException as e:
        st.error(f"API Error: {e}")
        return None


st.title("🚌 Bus Booking")
st.caption("Thika Superhighway Routes")

drivers = api_get("/drivers")
bookings = api_get("/bookings")
server_schedules = api_get("/schedules")
schedules = merge_schedules(SEED_SCHEDULES, server_schedules, drivers, st.session_state["overrides"])

tab_schedules, tab_bookings, tab_drivers, tab_register = st.tabs(
    ["🕒 Schedules", f"✅ Bookings ({len(bookings)})", "🧭 Driver Mgmt", "➕ Register"]
)


def driver_update_form(schedule: dict, form_key: str):
    """Form to report a driver's current stage and departure time."""
    with st.form(form_key):
        st.markdown(f"**Driver:** {schedule['driverName']} · **Bus:** {schedule['busNumber']} · **Route:** {schedule['route']}")
        current = schedule.get("stage")
        location = st.selectbox(
            "Current Location (Stage)", THIKA_STAGES,
            index=THIKA_STAGES.index(current) if current in THIKA_STAGES else 0,
            key=f"{form_key}_loc",
        )
        departure = st.text_input("Departure Time", schedule.get("departureTime") or "", key=f"{form_key}_time")
        if st.form_submit_button("Update Status"):
            if not location or not departure:
                st.warning("Please fill all fields")
            elif api_send("POST", "/update-driver-status", status_payload(schedule, location, departure)) is not None:
                st.session_state["overrides"][schedule["driverId"]] = {"stage": location, "departureTime": departure}
                st.success("Updated successfully!")
                st.rerun()


# ==================== SCHEDULES ====================
with tab_schedules:
    st.subheader("Available Buses")
    st.caption("Nairobi to Thika Route")
    for schedule in schedules:
        with st.container(border=True):
            col1, col2 = st.columns([3, 1])
            col1.markdown(f"### {schedule['driverName']}\n🚌 {schedule['busNumber']}")
            col2.metric("Departs", schedule["departureTime"])
            st.markdown(f"📍 **{schedule['stage']}** · {schedule['route']}")
            with st.form(f"book_{schedule['id']}"):
                passenger_name = st.text_input("Passenger Name", placeholder="Your name", key=f"pn_{schedule['id']}")
                seat_number = st.text_input("Seat Number", placeholder="e.g., A1, A2", key=f"seat_{schedule['id']}")
                if st.form_submit_button("Quick Book"):
                    if not passenger_name or not seat_number:
                        st.warning("Please fill all fields")
                    elif api_send("POST", "/create-booking",
                                  booking_payload(schedule, passenger_name, seat_number, utc_timestamp())) is not None:
                        st.success("Booking confirmed!")
                        st.rerun()
            st.link_button("💬 WhatsApp", whatsapp_link(schedule))

# ==================== BOOKINGS ====================
with tab_bookings:
    st.subheader("My Bookings")
    st.caption(f"{len(bookings)} Active Booking(s)")
    if not bookings:
        st.info("No active bookings")
    for booking in bookings:
        with st.container(border=True):
            st.markdown(f"✅ **Booking Confirmed** · Passenger: {booking.get('passengerName')}")
            st.markdown(
                f"**Driver:** {booking.get('driverName', '-')}  \n"
                f"**Bus:** {booking.get('busNumber', '-')}  \n"
                f"**Seat:** {booking.get('seatNumber')}  \n"
                f"📍 {booking.get('stage', '-')}  \n"
                f"🕒 {booking.get('departureTime', '-')} Departure"
            )
            if st.button("Cancel booking", key=f"cancel_{booking['id']}"):
                if api_send("DELETE", f"/delete-booking/{booking['id']}") is not None:
                    st.success("Booking cancelled!")
                    st.rerun()

# ==================== DRIVER MANAGEMENT ====================
with tab_drivers:
    st.subheader("Driver Management")
    st.caption("Update location & departure time")

    st.markdown("#### Active Drivers")
    if not schedules:
        st.info("No active drivers")
    for schedule in schedules:
        with st.expander(f"{schedule['driverName']} · 🚌 {schedule['busNumber']} · 📍 {schedule['stage']} · {schedule['departureTime']}"):
            driver_update_form(schedule, f"active_{schedule['id']}")

    st.markdown("#### Registered Drivers")
    if not drivers:
        st.info("No registered drivers")
    for driver in drivers:
        with st.container(border=True):
            st.markdown(
                f"**{driver.get('name')}**  \n📞 {driver.get('phone')}  \n"
                f"🚌 {driver.get('busNumber')}  \n📍 {driver.get('route')}"
            )
            driver_schedule = next((s for s in schedules if s["driverId"] == driver.get("id")), None)
            if driver_schedule:
                st.markdown(f"📍 {driver_schedule['stage']} · 🕒 {driver_schedule['departureTime']}")
                with st.expander("Update"):
                    driver_update_form(driver_schedule, f"registered_{driver['id']}")
            if st.button("Delete driver", key=f"delete_{driver['id']}"):
                if api_send("DELETE", f"/delete-driver/{driver['id']}") is not None:
                    st.session_state["overrides"].pop(driver["id"], None)
                    st.rerun()

# ==================== REGISTER ====================
with tab_register:
    st.subheader("Register New Driver")
    with st.form("register_form", clear_on_submit=True):
        name = st.text_input("Driver Name", placeholder="Enter driver name")
        phone = st.text_input("Phone Number", placeholder="254712345678")
        route = st.text_input("Route", placeholder="e.g., Nairobi - Thika")
        bus_number = st.text_input("Bus Number", placeholder="e.g., KCC 123")
        if st.form_submit_button("➕ Register Driver"):
            if not (name and phone and route and bus_number):
                st.warning("Please fill all fields")
            else:
                new_driver = api_send("POST", "/register-driver",
                                      {"name": name, "phone": phone, "route": route, "busNumber": bus_number})
                if new_driver:
                    # first departure lives on the server so every client sees it
                    api_send("POST", "/add-schedule", {
                        "driverId": new_driver["id"],
                        "stage": ORIGIN_STAGE,
                        "departureTime": DEFAULT_DEPARTURE_TIME,
                    })
                    st.success("Driver registered and added to schedules!")
                    st.rerun()
