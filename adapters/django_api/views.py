"""
PMS Django Adapter Views
========================
Pass-through HTTP views over the engine services.

Each view parses the request into an engine request, calls one service
operation and returns the outcome envelope. Malformed input never
reaches an engine: it is answered with BAD_REQUEST here.
"""

from __future__ import annotations

import json
from datetime import time
from decimal import Decimal, InvalidOperation
from typing import Any

from django.core.serializers.json import DjangoJSONEncoder
from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt

from adapters.django_api.wiring import RequestServices, build_services
from core.commands import ServiceOutcome
from core.http_api.errors import BAD_REQUEST, error_response, outcome_response
from core.time.temporal import parse_local_date
from engines.hotel_reservation.commands import (
    AddonsUpdateRequest,
    AvailabilitySearchRequest,
    BookingRequest,
    RoomCreateRequest,
)
from engines.inventory.commands import ItemCreateRequest, SupplierCreateRequest
from engines.procurement.commands import OrderCreateRequest, OrderLine


# ══════════════════════════════════════════════════════════════
# PARSING
# ══════════════════════════════════════════════════════════════

def _parse_json_body(request: HttpRequest) -> dict[str, Any]:
    """Only JSON bodies are read; form posts carry no operation input."""
    if request.content_type != "application/json" or not request.body:
        return {}
    try:
        parsed = json.loads(request.body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ValueError("Request body must be valid JSON.") from exc
    if not isinstance(parsed, dict):
        raise ValueError("Request body must be a JSON object.")
    return parsed


def _parse_date(value: Any, field_name: str):
    if value is None or value == "":
        return None
    try:
        return parse_local_date(str(value))
    except ValueError as exc:
        raise ValueError(f"{field_name} must be a YYYY-MM-DD date.") from exc


def _parse_int(value: Any, field_name: str, default: int | None = None) -> int:
    if value is None or value == "":
        if default is None:
            raise ValueError(f"{field_name} is required.")
        return default
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{field_name} must be an integer.") from exc


def _parse_decimal(value: Any, field_name: str) -> Decimal:
    if value is None or value == "":
        return Decimal("0")
    try:
        return Decimal(str(value))
    except InvalidOperation as exc:
        raise ValueError(f"{field_name} must be a number.") from exc


def _parse_bool(value: Any, field_name: str, default: bool = False) -> bool:
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ValueError(f"{field_name} must be true or false.")
    return value


def _parse_time(value: Any, field_name: str):
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise ValueError(f"{field_name} must be an HH:MM time.")
    try:
        return time.fromisoformat(value)
    except ValueError as exc:
        raise ValueError(f"{field_name} must be an HH:MM time.") from exc


def _required(body: dict[str, Any], field_name: str) -> Any:
    value = body.get(field_name)
    if value is None or value == "":
        raise ValueError(f"{field_name} is required.")
    return value


# ══════════════════════════════════════════════════════════════
# RESPONSES
# ══════════════════════════════════════════════════════════════

def _json(payload: dict[str, Any], status: int = 200) -> JsonResponse:
    return JsonResponse(payload, status=status, encoder=DjangoJSONEncoder)


def _json_error(code: str, message: str, status: int = 400) -> JsonResponse:
    return _json(error_response(code=code, message=message, details={}), status=status)


def _method_not_allowed() -> JsonResponse:
    return _json_error(
        "METHOD_NOT_ALLOWED",
        "Method not allowed for this endpoint.",
        status=405,
    )


def _status_for(outcome: ServiceOutcome, created: bool) -> int:
    if outcome.is_rejected:
        return 404 if outcome.reason.code.endswith("_NOT_FOUND") else 409
    if outcome.is_failed:
        return 500
    return 201 if created and outcome.data is not None else 200


def _respond(services: RequestServices, outcome: ServiceOutcome, *,
             created: bool = False, data: Any = None) -> JsonResponse:
    meta = {"notifications": [
        {"kind": kind, "message": message}
        for kind, message in services.notifier.messages
    ]}
    payload = outcome_response(outcome, meta=meta)
    if data is not None and outcome.ok:
        payload["data"] = data
    return _json(payload, status=_status_for(outcome, created))


def _dispatch(request: HttpRequest, method: str, call, *,
              created: bool = False) -> JsonResponse:
    """
    ``call(services, body)`` parses and invokes one operation; it returns
    an outcome or an ``(outcome, data)`` pair when the view reshapes data.
    """
    if request.method != method:
        return _method_not_allowed()
    services = build_services()
    try:
        body = _parse_json_body(request) if method == "POST" else {}
        result = call(services, body)
    except (ValueError, KeyError) as exc:
        return _json_error(BAD_REQUEST, str(exc), status=400)
    if isinstance(result, tuple):
        outcome, data = result
        return _respond(services, outcome, data=data)
    return _respond(services, result, created=created)


# ══════════════════════════════════════════════════════════════
# ROOMS
# ══════════════════════════════════════════════════════════════

_ROOM_PRICE_FIELDS = ("weekday_price", "weekend_price", "day_stay_price")


def _parse_amenities(value: Any) -> tuple:
    if value is None:
        return ()
    if not isinstance(value, list) or not all(isinstance(a, str) for a in value):
        raise ValueError("amenities must be a list of strings.")
    return tuple(value)


def _optional_price(value: Any, field_name: str):
    if value is None or value == "":
        return None
    return _parse_decimal(value, field_name)


def _room_request(body: dict[str, Any]) -> RoomCreateRequest:
    return RoomCreateRequest(
        room_number=str(_required(body, "room_number")),
        name=str(body.get("name", "")),
        price=_parse_decimal(_required(body, "price"), "price"),
        floor=_parse_int(body.get("floor"), "floor", default=1),
        description=str(body.get("description", "")),
        weekday_price=_optional_price(body.get("weekday_price"), "weekday_price"),
        weekend_price=_optional_price(body.get("weekend_price"), "weekend_price"),
        day_stay_price=_optional_price(body.get("day_stay_price"), "day_stay_price"),
        capacity=_parse_int(body.get("capacity"), "capacity", default=2),
        amenities=_parse_amenities(body.get("amenities")),
        status=body.get("status", "AVAILABLE"),
        cleaning_status=body.get("cleaning_status", "CLEAN"),
    )


def _room_changes(body: dict[str, Any]) -> dict[str, Any]:
    """Field bounds are left to the engine; only types are coerced here."""
    changes = dict(body)
    if "price" in changes:
        changes["price"] = _parse_decimal(_required(body, "price"), "price")
    for name in _ROOM_PRICE_FIELDS:
        if name in changes:
            changes[name] = _optional_price(changes[name], name)
    for name in ("capacity", "floor"):
        if name in changes:
            changes[name] = _parse_int(changes[name], name)
    if "amenities" in changes:
        changes["amenities"] = _parse_amenities(changes["amenities"])
    return changes


@csrf_exempt
def rooms_view(request: HttpRequest) -> JsonResponse:
    if request.method == "GET":
        return _dispatch(request, "GET", lambda services, body:
                         services.reservations.list_rooms(
                             status=request.GET.get("status") or None,
                             cleaning_status=request.GET.get("cleaning_status") or None))
    return _dispatch(request, "POST", lambda services, body:
                     services.reservations.create_room(_room_request(body)),
                     created=True)


@csrf_exempt
def room_detail_view(request: HttpRequest, room_id) -> JsonResponse:
    return _dispatch(request, "POST", lambda services, body:
                     services.reservations.update_room(room_id, _room_changes(body)))


@csrf_exempt
def room_status_view(request: HttpRequest, room_id) -> JsonResponse:
    return _dispatch(request, "POST", lambda services, body:
                     services.reservations.set_room_status(
                         room_id, _required(body, "status")))


@csrf_exempt
def room_cleaning_status_view(request: HttpRequest, room_id) -> JsonResponse:
    return _dispatch(request, "POST", lambda services, body:
                     services.reservations.set_cleaning_status(
                         room_id, _required(body, "cleaning_status")))


# ══════════════════════════════════════════════════════════════
# RESERVATIONS
# ══════════════════════════════════════════════════════════════

def _available_rooms(services: RequestServices, request: HttpRequest):
    outcome = services.reservations.search_available_rooms(AvailabilitySearchRequest(
        guests=_parse_int(request.GET.get("guests"), "guests", default=1),
        check_in=_parse_date(request.GET.get("check_in"), "check_in"),
        check_out=_parse_date(request.GET.get("check_out"), "check_out"),
    ))
    if not outcome.ok:
        return outcome, None
    result = outcome.data
    return outcome, {
        "rooms": list(result.rooms),
        "empty_reason": result.empty_reason,
        "message": result.message,
    }


def _booking_request(body: dict[str, Any]) -> BookingRequest:
    return BookingRequest(
        guest_name=str(body.get("guest_name", "")),
        check_in=_parse_date(_required(body, "check_in"), "check_in"),
        check_out=_parse_date(_required(body, "check_out"), "check_out"),
        room_id=body.get("room_id") or None,
        guest_email=str(body.get("guest_email", "")),
        phone=str(body.get("phone", "")),
        guests_count=_parse_int(body.get("guests_count"), "guests_count", default=1),
        source=body.get("source", "DIRECT"),
        status=body.get("status", "CONFIRMED"),
        is_day_stay=_parse_bool(body.get("is_day_stay"), "is_day_stay"),
        extra_bed_count=_parse_int(body.get("extra_bed_count"), "extra_bed_count", default=0),
        extra_wood_count=_parse_int(body.get("extra_wood_count"), "extra_wood_count", default=0),
        discount_amount=_parse_decimal(body.get("discount_amount"), "discount_amount"),
        top_up_amount=_parse_decimal(body.get("top_up_amount"), "top_up_amount"),
        notes=str(body.get("notes", "")),
        check_in_time=_parse_time(body.get("check_in_time"), "check_in_time"),
        check_out_time=_parse_time(body.get("check_out_time"), "check_out_time"),
    )


@csrf_exempt
def available_rooms_view(request: HttpRequest) -> JsonResponse:
    return _dispatch(request, "GET",
                     lambda services, body: _available_rooms(services, request))


@csrf_exempt
def reservations_view(request: HttpRequest) -> JsonResponse:
    return _dispatch(request, "POST", lambda services, body:
                     services.reservations.create_reservation(_booking_request(body)),
                     created=True)


@csrf_exempt
def reservation_cancel_view(request: HttpRequest, reservation_id) -> JsonResponse:
    return _dispatch(request, "POST", lambda services, body:
                     services.reservations.cancel_reservation(reservation_id))


@csrf_exempt
def reservation_status_view(request: HttpRequest, reservation_id) -> JsonResponse:
    return _dispatch(request, "POST", lambda services, body:
                     services.reservations.transition_status(
                         reservation_id, _required(body, "status")))


@csrf_exempt
def reservation_addons_view(request: HttpRequest, reservation_id) -> JsonResponse:
    def call(services, body):
        return services.reservations.update_addons(AddonsUpdateRequest(
            reservation_id=reservation_id,
            extra_bed_count=_parse_int(body.get("extra_bed_count"), "extra_bed_count", default=0),
            extra_wood_count=_parse_int(body.get("extra_wood_count"), "extra_wood_count", default=0),
            discount_amount=_parse_decimal(body.get("discount_amount"), "discount_amount"),
            top_up_amount=_parse_decimal(body.get("top_up_amount"), "top_up_amount"),
        ))

    return _dispatch(request, "POST", call)


@csrf_exempt
def front_desk_view(request: HttpRequest) -> JsonResponse:
    return _dispatch(request, "GET", lambda services, body:
                     services.reservations.front_desk_summary(
                         _parse_date(request.GET.get("date"), "date")))


# ══════════════════════════════════════════════════════════════
# CALENDAR
# ══════════════════════════════════════════════════════════════

@csrf_exempt
def calendar_view(request: HttpRequest) -> JsonResponse:
    return _dispatch(request, "GET", lambda services, body:
                     services.calendar.month_view(
                         _parse_int(request.GET.get("year"), "year"),
                         _parse_int(request.GET.get("month"), "month")))


@csrf_exempt
def calendar_move_view(request: HttpRequest) -> JsonResponse:
    return _dispatch(request, "POST", lambda services, body:
                     services.calendar.move_reservation(
                         _required(body, "reservation_id"),
                         body.get("room_code") or None,
                         _parse_int(body.get("day"), "day"),
                         year=_parse_int(body.get("year"), "year"),
                         month=_parse_int(body.get("month"), "month")))


# ══════════════════════════════════════════════════════════════
# INVENTORY
# ══════════════════════════════════════════════════════════════

@csrf_exempt
def inventory_items_view(request: HttpRequest) -> JsonResponse:
    if request.method == "GET":
        return _dispatch(request, "GET", lambda services, body:
                         services.inventory.list_items(
                             category=request.GET.get("category") or None,
                             destination=request.GET.get("destination") or None))

    def call(services, body):
        sell_price = body.get("sell_price")
        return services.inventory.create_item(ItemCreateRequest(
            name=str(body.get("name", "")),
            category=body.get("category", "FOOD"),
            unit=body.get("unit", "pcs"),
            sku=body.get("sku", ""),
            min_stock=_parse_int(body.get("min_stock"), "min_stock", default=0),
            max_stock=_parse_int(body.get("max_stock"), "max_stock", default=100),
            unit_cost=_parse_decimal(body.get("unit_cost"), "unit_cost"),
            sell_price=(None if sell_price in (None, "")
                        else _parse_decimal(sell_price, "sell_price")),
            destination=body.get("destination", "INTERNAL"),
            supplier_id=body.get("supplier_id") or None,
            location=body.get("location", ""),
        ))

    return _dispatch(request, "POST", call, created=True)


@csrf_exempt
def inventory_suppliers_view(request: HttpRequest) -> JsonResponse:
    if request.method == "GET":
        return _dispatch(request, "GET", lambda services, body:
                         services.inventory.list_suppliers())
    return _dispatch(request, "POST", lambda services, body:
                     services.inventory.create_supplier(SupplierCreateRequest(
                         name=str(body.get("name", "")),
                         email=body.get("email", ""),
                         phone=body.get("phone", ""),
                         address=body.get("address", ""),
                         categories=tuple(body.get("categories", ())),
                         rating=_parse_int(body.get("rating"), "rating", default=5),
                     )), created=True)


# ══════════════════════════════════════════════════════════════
# PROCUREMENT
# ══════════════════════════════════════════════════════════════

def _order_line(raw: Any) -> OrderLine:
    if not isinstance(raw, dict):
        raise ValueError("each line must be an object.")
    return OrderLine(
        item_name=str(raw.get("item_name", "")),
        quantity=_parse_int(raw.get("quantity"), "quantity"),
        unit_cost=_parse_decimal(raw.get("unit_cost"), "unit_cost"),
        item_id=raw.get("item_id") or None,
    )


@csrf_exempt
def purchase_orders_view(request: HttpRequest) -> JsonResponse:
    if request.method == "GET":
        return _dispatch(request, "GET", lambda services, body:
                         services.procurement.list_orders(
                             status=request.GET.get("status") or None))

    def call(services, body):
        lines = body.get("lines") or []
        if not isinstance(lines, list):
            raise ValueError("lines must be a list.")
        return services.procurement.create_order(OrderCreateRequest(
            supplier_id=_required(body, "supplier_id"),
            lines=tuple(_order_line(raw) for raw in lines),
            expected_delivery=_parse_date(body.get("expected_delivery"), "expected_delivery"),
            notes=str(body.get("notes", "")),
        ))

    return _dispatch(request, "POST", call, created=True)


@csrf_exempt
def purchase_order_status_view(request: HttpRequest, order_id) -> JsonResponse:
    return _dispatch(request, "POST", lambda services, body:
                     services.procurement.update_status(order_id, _required(body, "status")))


@csrf_exempt
def purchase_order_stats_view(request: HttpRequest) -> JsonResponse:
    return _dispatch(request, "GET", lambda services, body:
                     services.procurement.order_stats())


# ══════════════════════════════════════════════════════════════
# REPORTS
# ══════════════════════════════════════════════════════════════

@csrf_exempt
def reports_summary_view(request: HttpRequest) -> JsonResponse:
    return _dispatch(request, "GET", lambda services, body:
                     services.reporting.financial_summary(
                         _parse_date(request.GET.get("date_from"), "date_from"),
                         _parse_date(request.GET.get("date_to"), "date_to")))
