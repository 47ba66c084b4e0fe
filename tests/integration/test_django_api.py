from __future__ import annotations

import json
import uuid
from decimal import Decimal

import pytest

from adapters.django_api.wiring import get_store
from core.store import base as entities

pytestmark = pytest.mark.django_db(transaction=True)


def _post(client, url: str, body: dict):
    return client.post(url, data=json.dumps(body), content_type="application/json")


def _seed_rooms() -> dict:
    store = get_store()
    return {
        "101": store.insert(entities.ROOMS, {
            "room_number": "101", "name": "Garden", "price": Decimal("80.00"), "capacity": 2}),
        "102": store.insert(entities.ROOMS, {
            "room_number": "102", "name": "Family", "price": Decimal("120.00"), "capacity": 4}),
    }


def _book(client, room_id, check_in="2030-03-10", check_out="2030-03-12"):
    return _post(client, "/v1/reservations", {
        "guest_name": "Ana Silva",
        "room_id": str(room_id),
        "check_in": check_in,
        "check_out": check_out,
        "guests_count": 2,
    })


# ══════════════════════════════════════════════════════════════
# ROOMS
# ══════════════════════════════════════════════════════════════

def test_room_management_flow(client) -> None:
    created = _post(client, "/v1/rooms", {
        "room_number": "201", "name": "Suite", "price": "150.00",
        "capacity": 3, "amenities": ["WiFi", "TV"],
    })
    assert created.status_code == 201
    room = created.json()["data"]
    assert room["status"] == "AVAILABLE"
    assert room["cleaning_status"] == "CLEAN"
    assert created.json()["meta"]["notifications"] == [
        {"kind": "success", "message": "Room created successfully."},
    ]

    duplicate = _post(client, "/v1/rooms", {"room_number": "201", "name": "Copy",
                                            "price": "10"})
    assert duplicate.status_code == 409
    assert duplicate.json()["error"]["code"] == "ROOM_NUMBER_TAKEN"

    updated = _post(client, f"/v1/rooms/{room['id']}", {"price": "170", "capacity": 4})
    assert updated.status_code == 200
    assert Decimal(str(updated.json()["data"]["price"])) == Decimal("170")

    closed = _post(client, f"/v1/rooms/{room['id']}/status", {"status": "OUT_OF_ORDER"})
    assert closed.status_code == 200
    available = client.get("/v1/rooms/available", {"guests": 1}).json()["data"]
    assert available["rooms"] == []
    assert available["empty_reason"] == "NO_ROOMS"

    dirty = _post(client, f"/v1/rooms/{room['id']}/cleaning-status",
                  {"cleaning_status": "DIRTY"})
    assert dirty.json()["data"]["cleaning_status"] == "DIRTY"

    listed = client.get("/v1/rooms", {"cleaning_status": "DIRTY"}).json()["data"]
    assert [r["room_number"] for r in listed] == ["201"]


def test_room_requests_are_validated(client) -> None:
    missing_price = _post(client, "/v1/rooms", {"room_number": "301", "name": "Attic"})
    assert missing_price.status_code == 400
    assert missing_price.json()["error"]["message"] == "price is required."

    bad_capacity = _post(client, "/v1/rooms", {"room_number": "301", "name": "Attic",
                                               "price": "60", "capacity": 0})
    assert bad_capacity.status_code == 400

    unknown = _post(client, f"/v1/rooms/{uuid.uuid4()}/status", {"status": "AVAILABLE"})
    assert unknown.status_code == 404
    assert unknown.json()["error"]["code"] == "ROOM_NOT_FOUND"


# ══════════════════════════════════════════════════════════════
# RESERVATIONS
# ══════════════════════════════════════════════════════════════

def test_create_reservation_returns_201_with_notifications(client) -> None:
    rooms = _seed_rooms()

    response = _book(client, rooms["101"]["id"])

    assert response.status_code == 201
    payload = response.json()
    assert payload["ok"] is True
    assert payload["data"]["status"] == "CONFIRMED"
    assert Decimal(str(payload["data"]["total_amount"])) == Decimal("160")
    code = payload["data"]["confirmation_code"]
    assert payload["meta"]["notifications"] == [
        {"kind": "success", "message": f"Reservation {code} confirmed for Ana Silva."},
    ]
    room = get_store().query(entities.ROOMS, {"room_number": "101"})[0]
    assert room["status"] == "RESERVED"


def test_available_rooms_excludes_booked_room(client) -> None:
    rooms = _seed_rooms()
    _book(client, rooms["101"]["id"])

    response = client.get("/v1/rooms/available", {
        "guests": 2, "check_in": "2030-03-11", "check_out": "2030-03-13",
    })

    assert response.status_code == 200
    data = response.json()["data"]
    assert [r["room_number"] for r in data["rooms"]] == ["102"]
    assert data["empty_reason"] is None


def test_available_rooms_empty_reason(client) -> None:
    _seed_rooms()
    response = client.get("/v1/rooms/available", {"guests": 9})
    data = response.json()["data"]
    assert data["rooms"] == []
    assert data["empty_reason"] == "NO_ROOMS_FOR_GUESTS"


def test_double_booking_is_conflict(client) -> None:
    rooms = _seed_rooms()
    first = _post(client, "/v1/reservations", {
        "guest_name": "Ana", "room_id": str(rooms["101"]["id"]),
        "check_in": "2030-03-10", "check_out": "2030-03-12", "status": "PENDING",
    })
    assert first.status_code == 201

    response = _book(client, rooms["101"]["id"], "2030-03-11", "2030-03-14")

    assert response.status_code == 409
    payload = response.json()
    assert payload["ok"] is False
    assert payload["error"]["code"] == "ROOM_NOT_FREE"
    assert payload["meta"]["notifications"][0]["kind"] == "error"


def test_malformed_booking_is_bad_request(client) -> None:
    rooms = _seed_rooms()
    response = _book(client, rooms["101"]["id"], check_in="10/03/2030")
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "BAD_REQUEST"


def test_invalid_json_body(client) -> None:
    response = client.post("/v1/reservations", data="{not json",
                           content_type="application/json")
    assert response.status_code == 400
    assert response.json()["error"]["message"] == "Request body must be valid JSON."


def test_wrong_method_is_405(client) -> None:
    response = client.get("/v1/reservations")
    assert response.status_code == 405
    assert response.json()["error"]["code"] == "METHOD_NOT_ALLOWED"


def test_cancel_frees_room_and_unknown_is_404(client) -> None:
    rooms = _seed_rooms()
    reservation = _book(client, rooms["101"]["id"]).json()["data"]

    response = client.post(f"/v1/reservations/{reservation['id']}/cancel")
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "CANCELLED"
    assert get_store().query(entities.ROOMS, {"room_number": "101"})[0]["status"] == "AVAILABLE"

    missing = client.post(f"/v1/reservations/{uuid.uuid4()}/cancel")
    assert missing.status_code == 404
    assert missing.json()["error"]["code"] == "RESERVATION_NOT_FOUND"


def test_cancel_accepts_form_post_without_body(client) -> None:
    rooms = _seed_rooms()
    reservation = _book(client, rooms["101"]["id"]).json()["data"]

    response = client.post(f"/v1/reservations/{reservation['id']}/cancel",
                           {"reason": "guest called"})
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "CANCELLED"


def test_day_stay_flag_must_be_boolean(client) -> None:
    rooms = _seed_rooms()
    response = _post(client, "/v1/reservations", {
        "guest_name": "Ana", "room_id": str(rooms["101"]["id"]),
        "check_in": "2030-03-10", "check_out": "2030-03-12",
        "is_day_stay": "false",
    })
    assert response.status_code == 400
    assert response.json()["error"]["message"] == "is_day_stay must be true or false."
    assert get_store().query(entities.RESERVATIONS) == []


def test_booking_keeps_arrival_and_departure_times(client) -> None:
    rooms = _seed_rooms()
    response = _post(client, "/v1/reservations", {
        "guest_name": "Ana", "room_id": str(rooms["101"]["id"]),
        "check_in": "2030-03-10", "check_out": "2030-03-12",
        "is_day_stay": False, "check_in_time": "14:00", "check_out_time": "11:30",
    })
    assert response.status_code == 201
    data = response.json()["data"]
    assert data["check_in_time"] == "14:00:00"
    assert data["check_out_time"] == "11:30:00"


def test_bad_arrival_time_is_bad_request(client) -> None:
    rooms = _seed_rooms()
    response = _post(client, "/v1/reservations", {
        "guest_name": "Ana", "room_id": str(rooms["101"]["id"]),
        "check_in": "2030-03-10", "check_out": "2030-03-12",
        "check_in_time": "2pm",
    })
    assert response.status_code == 400
    assert response.json()["error"]["message"] == "check_in_time must be an HH:MM time."


# ══════════════════════════════════════════════════════════════
# CALENDAR
# ══════════════════════════════════════════════════════════════

def test_calendar_month_and_move(client) -> None:
    rooms = _seed_rooms()
    reservation = _book(client, rooms["101"]["id"]).json()["data"]

    view = client.get("/v1/calendar", {"year": 2030, "month": 3}).json()["data"]
    assert view["days_in_month"] == 31
    row = next(r for r in view["rows"] if r["room_number"] == "101")
    assert [b["start_day"] for b in row["bars"]] == [10]

    moved = _post(client, "/v1/calendar/move", {
        "reservation_id": reservation["id"], "room_code": "102",
        "day": 20, "year": 2030, "month": 3,
    })
    assert moved.status_code == 200
    data = moved.json()
    assert data["data"]["check_in"] == "2030-03-20"
    assert data["data"]["check_out"] == "2030-03-22"
    assert data["meta"]["notifications"] == [
        {"kind": "success", "message": "Dates updated and moved to room 102."},
    ]


def test_calendar_requires_year(client) -> None:
    response = client.get("/v1/calendar", {"month": 3})
    assert response.status_code == 400
    assert response.json()["error"]["message"] == "year is required."


# ══════════════════════════════════════════════════════════════
# PROCUREMENT
# ══════════════════════════════════════════════════════════════

def test_purchase_order_receive_flow(client) -> None:
    supplier = _post(client, "/v1/inventory/suppliers",
                     {"name": "Fresh Farms", "rating": 4}).json()["data"]
    item = _post(client, "/v1/inventory/items", {
        "name": "Rice", "min_stock": 5, "unit_cost": "2.50",
        "supplier_id": supplier["id"],
    }).json()["data"]
    assert item["quantity"] == 0

    created = _post(client, "/v1/purchase-orders", {
        "supplier_id": supplier["id"],
        "lines": [
            {"item_name": "Rice", "quantity": 10, "unit_cost": "2.50", "item_id": item["id"]},
        ],
    })
    assert created.status_code == 201
    order = created.json()["data"]
    assert order["order_number"].startswith("PO-")
    assert order["status"] == "PENDING"

    received = _post(client, f"/v1/purchase-orders/{order['id']}/status",
                     {"status": "RECEIVED"})
    assert received.status_code == 200
    assert received.json()["meta"]["notifications"][0]["message"].endswith(
        "received. 1 item(s) restocked.")

    items = client.get("/v1/inventory/items").json()["data"]
    assert items[0]["quantity"] == 10
    assert items[0]["stock_status"] == "IN_STOCK"

    invoice = get_store().query(entities.INVOICES)[0]
    assert invoice["status"] == "PAID"

    again = _post(client, f"/v1/purchase-orders/{order['id']}/status",
                  {"status": "CANCELLED"})
    assert again.status_code == 409
    assert again.json()["error"]["code"] == "ORDER_TERMINAL"

    stats = client.get("/v1/purchase-orders/stats").json()["data"]
    assert stats["received_orders"] == 1
    assert Decimal(str(stats["total_spent"])) == Decimal("25")


def test_order_without_lines_is_bad_request(client) -> None:
    response = _post(client, "/v1/purchase-orders", {"supplier_id": str(uuid.uuid4())})
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "BAD_REQUEST"


# ══════════════════════════════════════════════════════════════
# REPORTS
# ══════════════════════════════════════════════════════════════

def test_report_summary(client) -> None:
    rooms = _seed_rooms()
    _book(client, rooms["101"]["id"])

    response = client.get("/v1/reports/summary",
                          {"date_from": "2030-03-01", "date_to": "2030-03-31"})
    assert response.status_code == 200
    data = response.json()["data"]
    assert Decimal(str(data["room_revenue"])) == Decimal("160")
    assert data["reservation_count"] == 1

    reversed_period = client.get("/v1/reports/summary",
                                 {"date_from": "2030-03-31", "date_to": "2030-03-01"})
    assert reversed_period.status_code == 409
    assert reversed_period.json()["error"]["code"] == "INVALID_REQUEST"
