"""
PMS Hotel Reservation Engine - Request Commands
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from decimal import Decimal
from typing import Any, Optional, Tuple

# ── reservation lifecycle ─────────────────────────────────────
PENDING     = "PENDING"
CONFIRMED   = "CONFIRMED"
CHECKED_IN  = "CHECKED_IN"
CHECKED_OUT = "CHECKED_OUT"
CANCELLED   = "CANCELLED"
NO_SHOW     = "NO_SHOW"

RESERVATION_STATUSES = frozenset({
    PENDING, CONFIRMED, CHECKED_IN, CHECKED_OUT, CANCELLED, NO_SHOW,
})
TERMINAL_STATUSES = frozenset({CHECKED_OUT, CANCELLED, NO_SHOW})

ALLOWED_TRANSITIONS = {
    PENDING:    frozenset({CONFIRMED, NO_SHOW, CANCELLED}),
    CONFIRMED:  frozenset({CHECKED_IN, NO_SHOW, CANCELLED}),
    CHECKED_IN: frozenset({CHECKED_OUT}),
}

VALID_SOURCES = frozenset({
    "DIRECT", "WEBSITE", "BOOKING_COM", "EXPEDIA", "AIRBNB", "WALK_IN",
})

# ── room status ───────────────────────────────────────────────
ROOM_AVAILABLE = "AVAILABLE"
ROOM_OCCUPIED  = "OCCUPIED"
ROOM_RESERVED  = "RESERVED"

# Room status a reservation status leaves the room in.
ROOM_STATUS_FOR = {
    CONFIRMED:   ROOM_RESERVED,
    CHECKED_IN:  ROOM_OCCUPIED,
    CHECKED_OUT: ROOM_AVAILABLE,
    CANCELLED:   ROOM_AVAILABLE,
    NO_SHOW:     ROOM_AVAILABLE,
}


def _money(value: Any, name: str) -> Decimal:
    try:
        amount = Decimal(str(value))
    except ArithmeticError:
        raise ValueError(f"{name} must be a number.") from None
    if amount < 0:
        raise ValueError(f"{name} must be >= 0.")
    return amount


def _count(value: Any, name: str) -> None:
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        raise ValueError(f"{name} must be a non-negative integer.")


@dataclass(frozen=True)
class AvailabilitySearchRequest:
    guests:    int = 1
    check_in:  Optional[date] = None
    check_out: Optional[date] = None

    def __post_init__(self):
        if not isinstance(self.guests, int) or self.guests < 1:
            raise ValueError("guests must be >= 1.")
        if (self.check_in is None) != (self.check_out is None):
            raise ValueError("check_in and check_out must be given together.")

    @property
    def has_dates(self) -> bool:
        return self.check_in is not None


@dataclass(frozen=True)
class BookingRequest:
    """
    Structural checks only. Business rules (non-empty guest name,
    positive nights, room selected) are policies so they surface as
    rejections rather than exceptions.
    """
    guest_name:       str
    check_in:         date
    check_out:        date
    room_id:          Optional[Any] = None
    guest_email:      str = ""
    phone:            str = ""
    guests_count:     int = 1
    source:           str = "DIRECT"
    status:           str = CONFIRMED
    is_day_stay:      bool = False
    extra_bed_count:  int = 0
    extra_wood_count: int = 0
    discount_amount:  Decimal = Decimal("0")
    top_up_amount:    Decimal = Decimal("0")
    notes:            str = ""
    check_in_time:    Optional[time] = None
    check_out_time:   Optional[time] = None

    def __post_init__(self):
        if not isinstance(self.guest_name, str):
            raise ValueError("guest_name must be a string.")
        if not isinstance(self.check_in, date) or not isinstance(self.check_out, date):
            raise ValueError("check_in and check_out must be dates.")
        if not isinstance(self.guests_count, int) or self.guests_count < 1:
            raise ValueError("guests_count must be >= 1.")
        if self.source not in VALID_SOURCES:
            raise ValueError(f"source must be one of {sorted(VALID_SOURCES)}.")
        if self.status not in (PENDING, CONFIRMED):
            raise ValueError("new reservations start PENDING or CONFIRMED.")
        _count(self.extra_bed_count, "extra_bed_count")
        _count(self.extra_wood_count, "extra_wood_count")
        object.__setattr__(self, "discount_amount",
                           _money(self.discount_amount, "discount_amount"))
        object.__setattr__(self, "top_up_amount",
                           _money(self.top_up_amount, "top_up_amount"))


@dataclass(frozen=True)
class AddonsUpdateRequest:
    reservation_id:   Any
    extra_bed_count:  int = 0
    extra_wood_count: int = 0
    discount_amount:  Decimal = Decimal("0")
    top_up_amount:    Decimal = Decimal("0")

    def __post_init__(self):
        if not self.reservation_id:
            raise ValueError("reservation_id must be non-empty.")
        _count(self.extra_bed_count, "extra_bed_count")
        _count(self.extra_wood_count, "extra_wood_count")
        object.__setattr__(self, "discount_amount",
                           _money(self.discount_amount, "discount_amount"))
        object.__setattr__(self, "top_up_amount",
                           _money(self.top_up_amount, "top_up_amount"))


def _optional_money(value: Any, name: str) -> Optional[Decimal]:
    return None if value is None else _money(value, name)


@dataclass(frozen=True)
class RoomCreateRequest:
    room_number:     str
    name:            str
    price:           Decimal
    floor:           int = 1
    description:     str = ""
    weekday_price:   Optional[Decimal] = None
    weekend_price:   Optional[Decimal] = None
    day_stay_price:  Optional[Decimal] = None
    capacity:        int = 2
    amenities:       Tuple[str, ...] = ()
    status:          str = ROOM_AVAILABLE
    cleaning_status: str = CLEAN

    def __post_init__(self):
        if not isinstance(self.room_number, str) or not self.room_number.strip():
            raise ValueError("room_number must be non-empty.")
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValueError("name must be non-empty.")
        if not isinstance(self.floor, int) or self.floor < 1:
            raise ValueError("floor must be >= 1.")
        if not isinstance(self.capacity, int) or self.capacity < 1:
            raise ValueError("capacity must be >= 1.")
        if not isinstance(self.amenities, tuple):
            raise ValueError("amenities must be a tuple.")
        if self.status not in ROOM_STATUSES:
            raise ValueError(f"status must be one of {sorted(ROOM_STATUSES)}.")
        if self.cleaning_status not in CLEANING_STATUSES:
            raise ValueError(
                f"cleaning_status must be one of {sorted(CLEANING_STATUSES)}.")
        object.__setattr__(self, "room_number", self.room_number.strip())
        object.__setattr__(self, "price", _money(self.price, "price"))
        for name in ("weekday_price", "weekend_price", "day_stay_price"):
            object.__setattr__(self, name, _optional_money(getattr(self, name), name))

    def to_fields(self) -> dict:
        return {
            "room_number":     self.room_number,
            "name":            self.name.strip(),
            "floor":           self.floor,
            "description":     self.description,
            "price":           self.price,
            "weekday_price":   self.weekday_price,
            "weekend_price":   self.weekend_price,
            "day_stay_price":  self.day_stay_price,
            "capacity":        self.capacity,
            "amenities":       list(self.amenities),
            "status":          self.status,
            "cleaning_status": self.cleaning_status,
        }
