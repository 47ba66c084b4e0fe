"""
PMS Hotel Reservation Engine - Service
========================================
Room management, booking, cancellation, lifecycle moves and add-on
edits over the record store. Every entry point runs behind the OperationDispatcher
and returns a ServiceOutcome; nothing is cached between calls.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, List, Mapping, Optional

from core.commands import (
    CommandRejected,
    OperationDispatcher,
    ReasonCode,
    RejectionReason,
    ServiceOutcome,
    raise_if_rejected,
)
from core.notifications import Notifier
from core.store import base as entities
from core.store.base import RecordStore, get_one
from core.time.clock import Clock, SystemClock, local_today
from core.time.temporal import coerce_date
from engines.hotel_reservation.availability import filter_bookable_rooms
from engines.hotel_reservation.commands import (
    CANCELLED,
    CHECKED_IN,
    NO_SHOW,
    RESERVATION_STATUSES,
    ROOM_STATUS_FOR,
    AddonsUpdateRequest,
    AvailabilitySearchRequest,
    BookingRequest,
    RoomCreateRequest,
)
from engines.hotel_reservation.policies import (
    cleaning_status_policy,
    guest_details_policy,
    reservation_must_exist_policy,
    reservation_must_not_be_terminal_policy,
    room_changes_policy,
    room_closure_policy,
    room_must_be_bookable_policy,
    room_must_be_free_policy,
    room_must_exist_policy,
    room_number_must_be_unique_policy,
    room_status_policy,
    stay_dates_policy,
    status_transition_policy,
)
from engines.hotel_reservation.pricing import quote_stay

logger = logging.getLogger("pms.reservations")

_BASE36 = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"

_ROOM_REQUIRED = RejectionReason(
    code=ReasonCode.ROOM_REQUIRED,
    message="Please select a room.",
    policy_name="room_required_policy",
)


def to_base36(value: int) -> str:
    if value < 0:
        raise ValueError("value must be >= 0.")
    digits = []
    while True:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
        if value == 0:
            break
    return "".join(reversed(digits))


class HotelReservationService:
    def __init__(self, *, store: RecordStore, notifier: Notifier,
                 clock: Optional[Clock] = None,
                 confirmation_prefix: str = "CNF",
                 hotel_timezone: str = "UTC"):
        self._store      = store
        self._clock      = clock or SystemClock()
        self._prefix     = confirmation_prefix
        self._tz         = hotel_timezone
        self._dispatcher = OperationDispatcher(notifier=notifier)

    # ── helpers ───────────────────────────────────────────────

    def _confirmation_code(self) -> str:
        millis = int(self._clock.now_utc().timestamp() * 1000)
        while True:
            code = f"{self._prefix}-{to_base36(millis)}"
            if not self._store.query(entities.RESERVATIONS,
                                     {"confirmation_code": code}):
                return code
            millis += 1

    def _load(self, reservation_id: Any) -> Dict[str, Any]:
        res = get_one(self._store, entities.RESERVATIONS, reservation_id)
        raise_if_rejected(reservation_must_exist_policy(res, reservation_id))
        return res

    def _sync_room(self, reservation: Dict[str, Any], status: str) -> None:
        room_status = ROOM_STATUS_FOR.get(status)
        if room_status and reservation.get("room_id") is not None:
            self._store.update(entities.ROOMS, reservation["room_id"],
                               {"status": room_status})

    def _reservation_room(self, reservation: Dict[str, Any]) -> Dict[str, Any]:
        if reservation.get("room_id") is None:
            raise CommandRejected(_ROOM_REQUIRED)
        return self._room(reservation["room_id"])

    # ══════════════════════════════════════════════════════════
    # ROOMS
    # ══════════════════════════════════════════════════════════

    def _room(self, room_id: Any) -> Dict[str, Any]:
        room = get_one(self._store, entities.ROOMS, room_id)
        raise_if_rejected(room_must_exist_policy(room, room_id))
        return room

    def list_rooms(self, *, status: Optional[str] = None,
                   cleaning_status: Optional[str] = None) -> ServiceOutcome:
        def run():
            filters: Dict[str, Any] = {}
            if status:
                filters["status"] = status
            if cleaning_status:
                filters["cleaning_status"] = cleaning_status
            return ServiceOutcome.succeeded("", data=self._store.query(
                entities.ROOMS, filters, order_by=("room_number",)))

        return self._dispatcher.dispatch(
            "list_rooms", run, failure_message="Failed to load rooms.",
        )

    def create_room(self, request: RoomCreateRequest) -> ServiceOutcome:
        def run():
            raise_if_rejected(room_number_must_be_unique_policy(
                request.room_number,
                self._store.query(entities.ROOMS, {"room_number": request.room_number}),
            ))
            room = self._store.insert(entities.ROOMS, request.to_fields())
            logger.info("room %s created", room["room_number"])
            return ServiceOutcome.succeeded("Room created successfully.", data=room)

        return self._dispatcher.dispatch(
            "create_room", run, failure_message="Failed to create room.",
        )

    def update_room(self, room_id: Any, changes: Mapping[str, Any]) -> ServiceOutcome:
        def run():
            raise_if_rejected(room_changes_policy(changes))
            room = self._room(room_id)
            fields = dict(changes)
            if "room_number" in fields:
                fields["room_number"] = str(fields["room_number"]).strip()
                raise_if_rejected(room_number_must_be_unique_policy(
                    fields["room_number"],
                    self._store.query(entities.ROOMS,
                                      {"room_number": fields["room_number"]}),
                    ignore_id=room["id"],
                ))
            if "amenities" in fields:
                fields["amenities"] = list(fields["amenities"])
            updated = self._store.update(entities.ROOMS, room["id"], fields)
            return ServiceOutcome.succeeded("Room updated successfully.", data=updated)

        return self._dispatcher.dispatch(
            "update_room", run, failure_message="Failed to update room.",
        )

    def set_room_status(self, room_id: Any, status: str) -> ServiceOutcome:
        """
        Manual toggle. Reservation moves keep overwriting it, so closing
        a room does not touch the stays already booked into it.
        """
        def run():
            raise_if_rejected(room_status_policy(status))
            room = self._room(room_id)
            raise_if_rejected(room_closure_policy(room, status))
            if room.get("status") == status:
                return ServiceOutcome.noop()
            updated = self._store.update(entities.ROOMS, room["id"], {"status": status})
            logger.info("room %s %s → %s", room["room_number"], room.get("status"), status)
            return ServiceOutcome.succeeded(
                f"Room {room['room_number']} is now {status}.", data=updated)

        return self._dispatcher.dispatch(
            "set_room_status", run, failure_message="Failed to update room status.",
        )

    def set_cleaning_status(self, room_id: Any, cleaning_status: str) -> ServiceOutcome:
        def run():
            raise_if_rejected(cleaning_status_policy(cleaning_status))
            room = self._room(room_id)
            updated = self._store.update(entities.ROOMS, room["id"],
                                         {"cleaning_status": cleaning_status})
            return ServiceOutcome.succeeded(
                f"Room {room['room_number']} marked {cleaning_status}.", data=updated)

        return self._dispatcher.dispatch(
            "set_cleaning_status", run,
            failure_message="Failed to update cleaning status.",
        )

    # ══════════════════════════════════════════════════════════
    # AVAILABILITY
    # ══════════════════════════════════════════════════════════

    def search_available_rooms(self, request: AvailabilitySearchRequest) -> ServiceOutcome:
        def run():
            rooms = self._store.query(entities.ROOMS, order_by=("room_number",))
            reservations = (self._store.query(entities.RESERVATIONS)
                            if request.has_dates else [])
            result = filter_bookable_rooms(rooms, request.guests, reservations,
                                           request.check_in, request.check_out)
            return ServiceOutcome.succeeded("", data=result)

        return self._dispatcher.dispatch(
            "search_available_rooms", run,
            failure_message="Failed to load rooms.",
        )

    # ══════════════════════════════════════════════════════════
    # BOOKING
    # ══════════════════════════════════════════════════════════

    def create_reservation(self, request: BookingRequest) -> ServiceOutcome:
        return self._dispatcher.dispatch(
            "create_reservation", lambda: self._create(request),
            failure_message="Failed to create reservation. Please try again.",
        )

    def _create(self, request: BookingRequest) -> ServiceOutcome:
        raise_if_rejected(
            guest_details_policy(request.guest_name),
            stay_dates_policy(request.check_in, request.check_out,
                              request.is_day_stay),
        )
        if request.room_id is None:
            raise CommandRejected(_ROOM_REQUIRED)

        room = get_one(self._store, entities.ROOMS, request.room_id)
        raise_if_rejected(room_must_be_bookable_policy(room, request.guests_count))
        existing = self._store.query(entities.RESERVATIONS,
                                     {"room_id": room["id"]})
        raise_if_rejected(room_must_be_free_policy(
            room["room_number"], request.check_in, request.check_out, existing,
        ))

        quote = quote_stay(
            room, request.check_in, request.check_out, request.is_day_stay,
            extra_bed_count=request.extra_bed_count,
            extra_wood_count=request.extra_wood_count,
            discount_amount=request.discount_amount,
            top_up_amount=request.top_up_amount,
        )
        code = self._confirmation_code()

        with self._store.atomic():
            record = self._store.insert(entities.RESERVATIONS, {
                "confirmation_code": code,
                "guest_name":        request.guest_name.strip(),
                "guest_email":       request.guest_email,
                "phone":             request.phone,
                "room_id":           room["id"],
                "check_in":          request.check_in,
                "check_out":         request.check_out,
                "check_in_time":     request.check_in_time,
                "check_out_time":    request.check_out_time,
                "nights":            quote.nights,
                "guests_count":      request.guests_count,
                "total_amount":      quote.total,
                "status":            request.status,
                "source":            request.source,
                "notes":             request.notes,
                "is_day_stay":       request.is_day_stay,
                "extra_bed_count":   request.extra_bed_count,
                "extra_wood_count":  request.extra_wood_count,
                "discount_amount":   request.discount_amount,
                "top_up_amount":     request.top_up_amount,
            })
            self._sync_room(record, request.status)

        logger.info("reservation %s created room=%s %s..%s",
                    code, room["room_number"], request.check_in, request.check_out)
        return ServiceOutcome.succeeded(
            f"Reservation {code} confirmed for {record['guest_name']}.",
            data=record,
        )

    # ══════════════════════════════════════════════════════════
    # LIFECYCLE
    # ══════════════════════════════════════════════════════════

    def cancel_reservation(self, reservation_id: Any) -> ServiceOutcome:
        """Cancellation keeps the row (lost revenue) and frees the room."""
        return self.transition_status(reservation_id, CANCELLED)

    def transition_status(self, reservation_id: Any, status: str) -> ServiceOutcome:
        def run():
            res = self._load(reservation_id)
            raise_if_rejected(
                reservation_must_not_be_terminal_policy(res),
                status_transition_policy(res["status"], status),
            )
            with self._store.atomic():
                updated = self._store.update(entities.RESERVATIONS, res["id"],
                                             {"status": status})
                self._sync_room(updated, status)
            logger.info("reservation %s %s → %s",
                        res["confirmation_code"], res["status"], status)
            return ServiceOutcome.succeeded(
                _STATUS_MESSAGES[status].format(code=res["confirmation_code"]),
                data=updated,
            )

        return self._dispatcher.dispatch(
            "transition_status", run,
            failure_message="Failed to update reservation status.",
        )

    # ══════════════════════════════════════════════════════════
    # ADD-ONS
    # ══════════════════════════════════════════════════════════

    def update_addons(self, request: AddonsUpdateRequest) -> ServiceOutcome:
        """
        The room charge is rebuilt from the room record, so a total
        that was clamped at zero never skews the new one.
        """
        def run():
            res = self._load(request.reservation_id)
            room = self._reservation_room(res)
            quote = quote_stay(
                room, coerce_date(res["check_in"]), coerce_date(res["check_out"]),
                bool(res.get("is_day_stay")),
                extra_bed_count=request.extra_bed_count,
                extra_wood_count=request.extra_wood_count,
                discount_amount=request.discount_amount,
                top_up_amount=request.top_up_amount,
            )
            updated = self._store.update(entities.RESERVATIONS, res["id"], {
                "extra_bed_count":  request.extra_bed_count,
                "extra_wood_count": request.extra_wood_count,
                "discount_amount":  request.discount_amount,
                "top_up_amount":    request.top_up_amount,
                "total_amount":     quote.total,
            })
            return ServiceOutcome.succeeded("Add-ons updated.", data=updated)

        return self._dispatcher.dispatch(
            "update_addons", run,
            failure_message="Failed to update add-ons.",
        )

    # ══════════════════════════════════════════════════════════
    # FRONT DESK
    # ══════════════════════════════════════════════════════════

    def front_desk_summary(self, today: Optional[date] = None,
                           *, limit: int = 5) -> ServiceOutcome:
        def run():
            day = today or local_today(self._clock, self._tz)
            live = {"status__in": sorted(RESERVATION_STATUSES - {CANCELLED, NO_SHOW})}
            rooms = {str(r["id"]): r["room_number"]
                     for r in self._store.query(entities.ROOMS)}
            arrivals = self._store.query(entities.RESERVATIONS,
                                         {"check_in": day, **live})
            departures = self._store.query(entities.RESERVATIONS,
                                           {"check_out": day, **live})
            in_house = self._store.query(entities.RESERVATIONS,
                                         {"status": CHECKED_IN})
            return ServiceOutcome.succeeded("", data={
                "date":           day,
                "arrivals":       _desk_rows(arrivals[:limit], rooms),
                "departures":     _desk_rows(departures[:limit], rooms),
                "in_house_count": len(in_house),
            })

        return self._dispatcher.dispatch(
            "front_desk_summary", run,
            failure_message="Failed to load today's summary.",
        )


_STATUS_MESSAGES = {
    "CONFIRMED":   "Reservation {code} confirmed.",
    "CHECKED_IN":  "Guest checked in ({code}).",
    "CHECKED_OUT": "Guest checked out ({code}).",
    "CANCELLED":   "Reservation {code} cancelled.",
    "NO_SHOW":     "Reservation {code} marked as no-show.",
}


def _desk_rows(rows: List[Dict[str, Any]], rooms: Dict[str, str]) -> List[dict]:
    return [{
        "id":          r["id"],
        "guest_name":  r["guest_name"],
        "room_number": rooms.get(str(r.get("room_id")), "N/A"),
    } for r in rows]
