"""
PMS Hotel Reservation Engine - Policies
=========================================
The overlap predicate plus the policies guarding reservation and room writes.

Stays are half-open ``[check_in, check_out)``: a checkout on the
same day as the next guest's check-in is a turnover, not a clash.
Policies return ``None`` when satisfied, else a RejectionReason.
"""
from __future__ import annotations

from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Mapping, Optional

from core.commands.rejection import ReasonCode, RejectionReason
from core.time.temporal import StayRange, add_days, coerce_date
from engines.hotel_reservation.commands import (
    ALLOWED_TRANSITIONS,
    CANCELLED,
    CHECKED_OUT,
    CLEANING_STATUSES,
    EDITABLE_ROOM_FIELDS,
    NO_SHOW,
    RESERVATION_STATUSES,
    ROOM_AVAILABLE,
    ROOM_CLOSED_STATUSES,
    ROOM_OCCUPIED,
    ROOM_STATUSES,
    TERMINAL_STATUSES,
)

# Statuses that no longer hold the room.
NON_BLOCKING_STATUSES = frozenset({CANCELLED, NO_SHOW, CHECKED_OUT})


# ══════════════════════════════════════════════════════════════
# OVERLAP PREDICATE
# ══════════════════════════════════════════════════════════════

def ranges_overlap(a_in: date, a_out: date, b_in: date, b_out: date) -> bool:
    """Half-open test; an inverted range overlaps nothing."""
    if a_out < a_in or b_out < b_in:
        return False
    return StayRange(a_in, a_out).overlaps(StayRange(b_in, b_out))


def occupied_range(reservation: Mapping[str, Any]) -> Optional[StayRange]:
    """
    Nights a reservation holds, or None for an empty or inverted row.
    A flagged day stay (check-in == check-out) holds its single night.
    """
    check_in = coerce_date(reservation["check_in"])
    check_out = coerce_date(reservation["check_out"])
    if check_out < check_in:
        return None
    stay = StayRange(check_in, check_out)
    if not stay.is_empty:
        return stay
    if reservation.get("is_day_stay"):
        return StayRange(check_in, add_days(check_in, 1))
    return None


def reservation_blocks(reservation: Mapping[str, Any],
                       check_in: date, check_out: date) -> bool:
    """True if ``reservation`` holds its room for any night of the range."""
    if reservation.get("status") in NON_BLOCKING_STATUSES:
        return False
    stay = occupied_range(reservation)
    if stay is None:
        return False
    return ranges_overlap(check_in, check_out, stay.check_in, stay.check_out)


def is_room_free(check_in: date, check_out: date,
                 reservations: Iterable[Mapping[str, Any]],
                 *, ignore_id: Any = None) -> bool:
    """
    ``reservations`` are the existing bookings of one room.
    ``ignore_id`` excludes a reservation from the check, used when it
    is the one being moved.
    """
    for res in reservations:
        if ignore_id is not None and str(res.get("id")) == str(ignore_id):
            continue
        if reservation_blocks(res, check_in, check_out):
            return False
    return True


# ══════════════════════════════════════════════════════════════
# BOOKING POLICIES
# ══════════════════════════════════════════════════════════════

def guest_details_policy(guest_name: str) -> Optional[RejectionReason]:
    if not guest_name or not guest_name.strip():
        return RejectionReason(
            code=ReasonCode.GUEST_DETAILS_MISSING,
            message="Guest name is required.",
            policy_name="guest_details_policy",
        )
    return None


def stay_dates_policy(check_in: date, check_out: date,
                      is_day_stay: bool) -> Optional[RejectionReason]:
    if is_day_stay:
        if check_out != check_in:
            return RejectionReason(
                code=ReasonCode.INVALID_STAY_DATES,
                message="A day stay checks out on its check-in date.",
                policy_name="stay_dates_policy",
            )
        return None
    if check_out <= check_in:
        return RejectionReason(
            code=ReasonCode.INVALID_STAY_DATES,
            message="Check-out must be after check-in.",
            policy_name="stay_dates_policy",
        )
    return None


def room_must_be_bookable_policy(room: Optional[Mapping[str, Any]],
                                 guests: int) -> Optional[RejectionReason]:
    if room is None:
        return RejectionReason(
            code=ReasonCode.ROOM_NOT_FOUND,
            message="Selected room does not exist.",
            policy_name="room_must_be_bookable_policy",
        )
    if room.get("status") != ROOM_AVAILABLE:
        return RejectionReason(
            code=ReasonCode.ROOM_NOT_BOOKABLE,
            message=f"Room {room.get('room_number')} is {room.get('status')}.",
            policy_name="room_must_be_bookable_policy",
        )
    if int(room.get("capacity") or 0) < guests:
        return RejectionReason(
            code=ReasonCode.ROOM_CAPACITY_EXCEEDED,
            message=(f"Room {room.get('room_number')} sleeps at most "
                     f"{room.get('capacity')} guests."),
            policy_name="room_must_be_bookable_policy",
        )
    return None


def room_must_be_free_policy(room_label: str, check_in: date, check_out: date,
                             reservations: Iterable[Mapping[str, Any]],
                             *, ignore_id: Any = None) -> Optional[RejectionReason]:
    """
    A day stay has an empty half-open range, so it is checked as the
    single night it occupies.
    """
    probe_out = check_out if check_out > check_in else add_days(check_in, 1)
    if not is_room_free(check_in, probe_out, reservations, ignore_id=ignore_id):
        return RejectionReason(
            code=ReasonCode.ROOM_NOT_FREE,
            message=f"Room {room_label} is already booked for those dates.",
            policy_name="room_must_be_free_policy",
        )
    return None


# ══════════════════════════════════════════════════════════════
# LIFECYCLE POLICIES
# ══════════════════════════════════════════════════════════════

def reservation_must_exist_policy(
    reservation: Optional[Mapping[str, Any]], reservation_id: Any,
) -> Optional[RejectionReason]:
    if reservation is None:
        return RejectionReason(
            code=ReasonCode.RESERVATION_NOT_FOUND,
            message=f"Reservation '{reservation_id}' not found.",
            policy_name="reservation_must_exist_policy",
        )
    return None


def reservation_must_not_be_terminal_policy(
    reservation: Mapping[str, Any],
) -> Optional[RejectionReason]:
    if reservation.get("status") in TERMINAL_STATUSES:
        return RejectionReason(
            code=ReasonCode.RESERVATION_TERMINAL,
            message=(f"Reservation {reservation.get('confirmation_code')} is "
                     f"already {reservation.get('status')}."),
            policy_name="reservation_must_not_be_terminal_policy",
        )
    return None


def status_transition_policy(current: str, target: str) -> Optional[RejectionReason]:
    if target not in RESERVATION_STATUSES:
        return RejectionReason(
            code=ReasonCode.INVALID_STATUS_TRANSITION,
            message=f"Unknown reservation status '{target}'.",
            policy_name="status_transition_policy",
        )
    if target not in ALLOWED_TRANSITIONS.get(current, frozenset()):
        return RejectionReason(
            code=ReasonCode.INVALID_STATUS_TRANSITION,
            message=f"Cannot move a reservation from {current} to {target}.",
            policy_name="status_transition_policy",
        )
    return None


# ══════════════════════════════════════════════════════════════
# ROOM POLICIES
# ══════════════════════════════════════════════════════════════

def room_must_exist_policy(room: Optional[Mapping[str, Any]],
                           room_id: Any) -> Optional[RejectionReason]:
    if room is None:
        return RejectionReason(
            code=ReasonCode.ROOM_NOT_FOUND,
            message=f"Room '{room_id}' not found.",
            policy_name="room_must_exist_policy",
        )
    return None


def room_number_must_be_unique_policy(
    room_number: str, same_number: Iterable[Mapping[str, Any]],
    *, ignore_id: Any = None,
) -> Optional[RejectionReason]:
    """``same_number`` are the rooms already carrying ``room_number``."""
    for room in same_number:
        if ignore_id is not None and str(room.get("id")) == str(ignore_id):
            continue
        return RejectionReason(
            code=ReasonCode.ROOM_NUMBER_TAKEN,
            message=f"Room number {room_number} is already in use.",
            policy_name="room_number_must_be_unique_policy",
        )
    return None


def room_changes_policy(changes: Mapping[str, Any]) -> Optional[RejectionReason]:
    """Same bounds as a new room: capacity and floor >= 1, prices >= 0."""
    unknown = sorted(set(changes) - EDITABLE_ROOM_FIELDS)
    if unknown:
        return _invalid_room(f"Fields cannot be edited: {', '.join(unknown)}.")
    for name in ("room_number", "name"):
        if name in changes and not str(changes[name] or "").strip():
            return _invalid_room(f"{name} must be non-empty.")
    for name in ("capacity", "floor"):
        if name in changes and not _is_positive_int(changes[name]):
            return _invalid_room(f"{name} must be >= 1.")
    for name in ("price", "weekday_price", "weekend_price", "day_stay_price"):
        if name not in changes:
            continue
        if changes[name] is None and name != "price":
            continue
        if not _is_non_negative_amount(changes[name]):
            return _invalid_room(f"{name} must be >= 0.")
    return None


def room_status_policy(status: str) -> Optional[RejectionReason]:
    if status not in ROOM_STATUSES:
        return RejectionReason(
            code=ReasonCode.INVALID_ROOM_STATUS,
            message=f"Unknown room status '{status}'.",
            policy_name="room_status_policy",
        )
    return None


def cleaning_status_policy(cleaning_status: str) -> Optional[RejectionReason]:
    if cleaning_status not in CLEANING_STATUSES:
        return RejectionReason(
            code=ReasonCode.INVALID_ROOM_STATUS,
            message=f"Unknown cleaning status '{cleaning_status}'.",
            policy_name="cleaning_status_policy",
        )
    return None


def room_closure_policy(room: Mapping[str, Any],
                        target: str) -> Optional[RejectionReason]:
    """An occupied room cannot be taken out of order or out of service."""
    if target in ROOM_CLOSED_STATUSES and room.get("status") == ROOM_OCCUPIED:
        return RejectionReason(
            code=ReasonCode.ROOM_OCCUPIED,
            message=f"Room {room.get('room_number')} has a guest checked in.",
            policy_name="room_closure_policy",
        )
    return None


def _invalid_room(message: str) -> RejectionReason:
    return RejectionReason(
        code=ReasonCode.INVALID_REQUEST,
        message=message,
        policy_name="room_changes_policy",
    )


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 1


def _is_non_negative_amount(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    try:
        return Decimal(str(value)) >= 0
    except InvalidOperation:
        return False
