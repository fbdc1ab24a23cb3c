import sys

import pytest

from conftest import MONDAY, SUNDAY

APPOINTMENT = {
    "customer_name": "Ana Lopez",
    "customer_phone": "+5215512345678",
    "customer_email": "ana@example.com",
    "service": "Corte & Secado",
    "stylist": "Maria",
    "appointment_date": MONDAY,
    "appointment_time": "2:00 PM",
}


def book(client, **overrides):
    return client.post("/api/appointments", json={**APPOINTMENT, **overrides})


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_services(client):
    response = client.get("/api/services")
    assert response.status_code == 200
    services = response.json()
    assert len(services) == 14
    assert services[0]["name"] == "Retoque de Raiz"


def test_slots_for_stylist(client):
    response = client.get(f"/api/availability/{MONDAY}", params={"stylist": "Maria"})

    assert response.status_code == 200
    body = response.json()
    assert body["date"] == MONDAY
    assert len(body["slots"]) == 15
    assert "6:00 PM" not in body["slots"]


def test_slots_default_to_any_available(client):
    response = client.get(f"/api/availability/{MONDAY}")
    assert response.json()["stylist"] == "Any Available"
    assert len(response.json()["slots"]) == 15


def test_day_off_renders_empty_list(client):
    response = client.get(f"/api/availability/{SUNDAY}", params={"stylist": "Maria"})
    assert response.status_code == 200
    assert response.json()["slots"] == []


def test_bad_date_is_rejected(client):
    assert client.get("/api/availability/03-02-2026").status_code == 400


def test_available_stylists(client):
    book(client)
    response = client.get(f"/api/availability/{MONDAY}/stylists", params={"time": "2:00 pm"})

    assert response.status_code == 200
    assert response.json() == {"date": MONDAY, "time": "2:00 PM", "stylists": ["Paula"]}


def test_available_stylists_bad_time(client):
    response = client.get(f"/api/availability/{MONDAY}/stylists", params={"time": "14:00"})
    assert response.status_code == 400


def test_available_dates(client):
    response = client.get("/api/availability/dates", params={"stylist": "Maria", "days_ahead": 7})
    assert response.status_code == 200
    assert len(response.json()) == 6


def test_book_and_list(client):
    response = book(client)
    assert response.status_code == 201
    created = response.json()
    assert created["stylist"] == "Maria"
    assert created["status"] == "confirmed"

    listed = client.get("/api/appointments", params={"stylist": "Maria", "date": MONDAY}).json()
    assert [a["id"] for a in listed] == [created["id"]]

    slots = client.get(f"/api/availability/{MONDAY}", params={"stylist": "Maria"}).json()["slots"]
    assert "2:00 PM" not in slots


def test_booking_date_with_time_component(client):
    response = book(client, appointment_date=f"{MONDAY}T15:00:00.000Z")
    assert response.status_code == 201
    assert response.json()["appointment_date"] == MONDAY


def test_double_booking_conflict(client):
    assert book(client).status_code == 201
    assert book(client, customer_name="Lucia Perez").status_code == 409


def test_booking_any_available(client):
    assert book(client, stylist="Any Available").json()["stylist"] == "Maria"
    assert book(client, stylist="Any Available").json()["stylist"] == "Paula"
    assert book(client, stylist="Any Available").status_code == 409


def test_booking_bad_time_and_unknown_service(client):
    assert book(client, appointment_time="2pm-ish").status_code == 400
    assert book(client, service="Perm").status_code == 404
    assert book(client, customer_name="A").status_code == 422


def test_reschedule_and_cancel(client):
    appointment_id = book(client).json()["id"]
    book(client, appointment_time="3:00 PM")

    conflict = client.put(f"/api/appointments/{appointment_id}", json={"appointment_time": "3:00 PM"})
    assert conflict.status_code == 409

    moved = client.put(f"/api/appointments/{appointment_id}", json={"appointment_time": "4:00 PM"})
    assert moved.status_code == 200
    assert moved.json()["appointment_time"] == "4:00 PM"

    cancelled = client.post(f"/api/appointments/{appointment_id}/cancel")
    assert cancelled.json()["status"] == "cancelled"
    slots = client.get(f"/api/availability/{MONDAY}", params={"stylist": "Maria"}).json()["slots"]
    assert "4:00 PM" in slots


def test_cancelled_appointment_cannot_take_any_available(client):
    appointment_id = book(client, appointment_time="10:00 AM").json()["id"]
    client.post(f"/api/appointments/{appointment_id}/cancel")

    response = client.put(f"/api/appointments/{appointment_id}", json={"stylist": "Any Available"})
    assert response.status_code == 400
    assert client.get(f"/api/appointments/{appointment_id}").json()["stylist"] == "Maria"


def test_appointment_response_fields(client):
    created = book(client).json()
    assert set(created) == {
        "id", "customer_name", "customer_email", "customer_phone", "service", "stylist",
        "appointment_date", "appointment_time", "status", "notes", "created_at",
    }


def test_delete_appointment(client):
    appointment_id = book(client).json()["id"]

    assert client.delete(f"/api/appointments/{appointment_id}").status_code == 204
    assert client.get(f"/api/appointments/{appointment_id}").status_code == 404
    assert client.delete(f"/api/appointments/{appointment_id}").status_code == 404


# ==================== Staff schedules ====================

def test_list_schedules(client):
    schedules = client.get("/api/staff-schedules").json()
    assert [s["stylist_name"] for s in schedules] == ["Maria", "Paula"]
    assert schedules[0]["break_times"] == [{"start_time": "12:00 PM", "end_time": "1:00 PM"}]


def test_save_schedule(client):
    payload = {
        "stylist_name": "Sofia",
        "working_hours": {"Monday": {"is_working": True, "start_time": "11:00 AM", "end_time": "1:00 PM"}},
        "blocked_dates": [],
        "break_times": [],
    }
    assert client.post("/api/staff-schedules", json=payload).status_code == 200
    assert client.get("/api/staff-schedules/Sofia").json()["stylist_name"] == "Sofia"

    slots = client.get(f"/api/availability/{MONDAY}", params={"stylist": "Sofia"}).json()["slots"]
    assert slots == ["11:00 AM", "11:30 AM", "12:00 PM", "12:30 PM"]


def test_inverted_or_malformed_schedule_is_rejected(client):
    inverted = {
        "stylist_name": "Sofia",
        "working_hours": {"Monday": {"is_working": True, "start_time": "6:00 PM", "end_time": "9:00 AM"}},
    }
    bad_break = {
        "stylist_name": "Sofia",
        "break_times": [{"start_time": "1:00 PM", "end_time": "noon"}],
    }
    bad_day = {
        "stylist_name": "Sofia",
        "working_hours": {"Funday": {"is_working": True, "start_time": "9:00 AM", "end_time": "5:00 PM"}},
    }
    bad_blocked = {"stylist_name": "Sofia", "blocked_dates": ["next friday"]}

    for payload in (inverted, bad_break, bad_day, bad_blocked):
        assert client.post("/api/staff-schedules", json=payload).status_code == 422


def test_blocked_dates_are_stored_as_iso_dates(client):
    payload = {
        "stylist_name": "Maria",
        "working_hours": {"Monday": {"is_working": True, "start_time": "9:00 AM", "end_time": "6:00 PM"}},
        "blocked_dates": [f" {MONDAY} "],
    }
    response = client.post("/api/staff-schedules", json=payload)
    assert response.status_code == 200
    assert response.json()["blocked_dates"] == [MONDAY]
    assert client.get(f"/api/availability/{MONDAY}", params={"stylist": "Maria"}).json()["slots"] == []


@pytest.mark.skipif(sys.version_info < (3, 11), reason="basic ISO dates need Python 3.11")
def test_compact_blocked_date_blocks_the_day(client):
    payload = {
        "stylist_name": "Maria",
        "working_hours": {"Monday": {"is_working": True, "start_time": "9:00 AM", "end_time": "6:00 PM"}},
        "blocked_dates": [MONDAY.replace("-", "")],
    }
    response = client.post("/api/staff-schedules", json=payload)
    assert response.status_code == 200
    assert response.json()["blocked_dates"] == [MONDAY]
    assert client.get(f"/api/availability/{MONDAY}", params={"stylist": "Maria"}).json()["slots"] == []


def test_block_and_unblock_date(client):
    blocked = client.post(f"/api/staff-schedules/Maria/blocked-dates/{MONDAY}")
    assert blocked.status_code == 200
    assert blocked.json()["blocked_dates"] == [MONDAY]

    stylists = client.get(f"/api/availability/{MONDAY}/stylists", params={"time": "10:00 AM"}).json()
    assert stylists["stylists"] == ["Paula"]

    client.delete(f"/api/staff-schedules/Maria/blocked-dates/{MONDAY}")
    stylists = client.get(f"/api/availability/{MONDAY}/stylists", params={"time": "10:00 AM"}).json()
    assert stylists["stylists"] == ["Maria", "Paula"]


def test_delete_schedule(client):
    assert client.delete("/api/staff-schedules/Paula").status_code == 204
    assert client.get("/api/staff-schedules/Paula").status_code == 404
    assert client.post(f"/api/staff-schedules/Paula/blocked-dates/{MONDAY}").status_code == 404
