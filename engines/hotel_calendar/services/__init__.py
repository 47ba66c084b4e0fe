"""
PMS Hotel Calendar Engine - Drag Rescheduling + Month View
============================================================
Per-gesture state machine:

    idle ──start──▶ dragging ──hover──▶ hovering ──drop──▶ idle
      ▲                 │                   │
      └────cancel───────┴──────cancel───────┘

Drop commits at most ONE reservation update:
- same room and same start column → no-op, the store is not touched
- day shift → check_in and check_out both move by the shift
- room change → room reference (plus dates when they moved)

The controller never mutates local reservation state; after a
failed commit the view simply re-reads the store.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date
from typing import Any, Dict, Optional

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
from core.time.temporal import add_days, days_in_month
from engines.hotel_calendar.layout import CalendarBar, bar_for_month, month_bars
from engines.hotel_reservation.policies import (
    reservation_must_exist_policy,
    room_must_be_free_policy,
)

logger = logging.getLogger("pms.calendar")

IDLE     = "idle"
DRAGGING = "dragging"
HOVERING = "hovering"

MOVE_FAILED_MESSAGE = "Failed to move reservation."


# ══════════════════════════════════════════════════════════════
# DRAG STATE
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class DragState:
    phase:              str = IDLE
    reservation_id:     Any = None
    original_room_code: Optional[str] = None
    original_start_day: Optional[int] = None
    original_end_day:   Optional[int] = None
    original_check_in:  Optional[date] = None
    original_check_out: Optional[date] = None
    target_room_code:   Optional[str] = None
    target_day:         Optional[int] = None

    @property
    def is_idle(self) -> bool:
        return self.phase == IDLE

    @classmethod
    def from_bar(cls, bar: CalendarBar) -> "DragState":
        return cls(
            phase=DRAGGING,
            reservation_id=bar.reservation_id,
            original_room_code=bar.room_code,
            original_start_day=bar.start_day,
            original_end_day=bar.end_day,
            original_check_in=bar.check_in,
            original_check_out=bar.check_out,
        )


@dataclass(frozen=True)
class MovePlan:
    day_shift:     int
    new_check_in:  date
    new_check_out: date
    room_changed:  bool

    @property
    def dates_changed(self) -> bool:
        return self.day_shift != 0


def plan_move(state: DragState, target_room_code: Optional[str],
              target_day: int) -> Optional[MovePlan]:
    """None when the drop lands where the bar started."""
    day_shift = target_day - state.original_start_day
    room_changed = target_room_code != state.original_room_code
    if day_shift == 0 and not room_changed:
        return None
    return MovePlan(
        day_shift=day_shift,
        new_check_in=add_days(state.original_check_in, day_shift),
        new_check_out=add_days(state.original_check_out, day_shift),
        room_changed=room_changed,
    )


def move_message(plan: MovePlan, room_code: Optional[str]) -> str:
    if plan.dates_changed and plan.room_changed:
        return f"Dates updated and moved to room {room_code}."
    if plan.room_changed:
        return f"Moved to room {room_code}."
    return "Dates updated."


# ══════════════════════════════════════════════════════════════
# DRAG CONTROLLER
# ══════════════════════════════════════════════════════════════

class CalendarDragController:
    """Owns exactly one gesture's state; create one per calendar view."""

    def __init__(self, *, store: RecordStore, notifier: Notifier):
        self._store      = store
        self._dispatcher = OperationDispatcher(notifier=notifier)
        self._state      = DragState()

    @property
    def state(self) -> DragState:
        return self._state

    def start(self, bar: CalendarBar) -> DragState:
        self._state = DragState.from_bar(bar)
        return self._state

    def hover(self, room_code: Optional[str], day: int) -> DragState:
        if not self._state.is_idle:
            self._state = replace(self._state, phase=HOVERING,
                                  target_room_code=room_code, target_day=day)
        return self._state

    def cancel(self) -> DragState:
        self._state = DragState()
        return self._state

    def drop(self, room_code: Optional[str], day: int) -> ServiceOutcome:
        state, self._state = self._state, DragState()
        if state.is_idle:
            return ServiceOutcome.noop()
        plan = plan_move(state, room_code, day)
        if plan is None:
            logger.debug("drop on origin for %s, nothing to do", state.reservation_id)
            return ServiceOutcome.noop()
        return self._dispatcher.dispatch(
            "move_reservation",
            lambda: self._commit(state, room_code, plan),
            failure_message=MOVE_FAILED_MESSAGE,
        )

    def _commit(self, state: DragState, room_code: Optional[str],
                plan: MovePlan) -> ServiceOutcome:
        """An unassigned bar dragged along its own row only changes dates."""
        room = None
        if plan.room_changed or room_code is not None:
            room = self._drop_target(room_code)
        if room is not None:
            booked = self._store.query(entities.RESERVATIONS, {"room_id": room["id"]})
            raise_if_rejected(room_must_be_free_policy(
                room_code, plan.new_check_in, plan.new_check_out, booked,
                ignore_id=state.reservation_id,
            ))

        fields: Dict[str, Any] = {}
        if plan.dates_changed:
            fields["check_in"] = plan.new_check_in
            fields["check_out"] = plan.new_check_out
        if plan.room_changed:
            fields["room_id"] = room["id"]
        updated = self._store.update(entities.RESERVATIONS, state.reservation_id, fields)

        logger.info("reservation %s moved shift=%+d room=%s",
                    state.reservation_id, plan.day_shift, room_code)
        return ServiceOutcome.succeeded(move_message(plan, room_code), data=updated)

    def _drop_target(self, room_code: Optional[str]) -> Dict[str, Any]:
        if room_code is None:
            raise CommandRejected(RejectionReason(
                code=ReasonCode.ROOM_REQUIRED,
                message="Drop the reservation on a room row.",
                policy_name="calendar_drop_target_policy",
            ))
        rooms = self._store.query(entities.ROOMS, {"room_number": room_code})
        if not rooms:
            raise CommandRejected(RejectionReason(
                code=ReasonCode.ROOM_NOT_FOUND,
                message=f"Room {room_code} does not exist.",
                policy_name="calendar_drop_target_policy",
            ))
        return rooms[0]


# ══════════════════════════════════════════════════════════════
# CALENDAR SERVICE
# ══════════════════════════════════════════════════════════════

class CalendarService:
    def __init__(self, *, store: RecordStore, notifier: Notifier):
        self._store      = store
        self._notifier   = notifier
        self._dispatcher = OperationDispatcher(notifier=notifier)

    def _room_codes(self) -> Dict[str, str]:
        return {str(r["id"]): r["room_number"]
                for r in self._store.query(entities.ROOMS)}

    def month_view(self, year: int, month: int) -> ServiceOutcome:
        """Every status is shown; cancelled stays keep their bar."""
        if not 1 <= month <= 12:
            raise ValueError("month must be 1-12.")

        def run():
            dim = days_in_month(year, month)
            rooms = self._store.query(entities.ROOMS, order_by=("room_number",))
            reservations = self._store.query(entities.RESERVATIONS, {
                "check_in__lte":  date(year, month, dim),
                "check_out__gte": date(year, month, 1),
            }, order_by=("check_in",))
            codes = {str(r["id"]): r["room_number"] for r in rooms}
            bars = month_bars(reservations, codes, year, month)

            rows = [{
                "room_id":     room["id"],
                "room_number": room["room_number"],
                "name":        room.get("name", ""),
                "floor":       room.get("floor"),
                "status":      room.get("status"),
                "bars":        [b.to_dict() for b in bars
                                if b.room_code == room["room_number"]],
            } for room in rooms]
            return ServiceOutcome.succeeded("", data={
                "year":          year,
                "month":         month,
                "days_in_month": dim,
                "rows":          rows,
                "unassigned":    [b.to_dict() for b in bars if b.room_code is None],
            })

        return self._dispatcher.dispatch(
            "month_view", run, failure_message="Failed to load calendar.",
        )

    def move_reservation(self, reservation_id: Any, room_code: Optional[str],
                         day: int, *, year: int, month: int) -> ServiceOutcome:
        """One whole gesture: pick up the bar shown in (year, month), drop it."""
        def pick_up():
            res = get_one(self._store, entities.RESERVATIONS, reservation_id)
            raise_if_rejected(reservation_must_exist_policy(res, reservation_id))
            code = (self._room_codes().get(str(res["room_id"]))
                    if res.get("room_id") is not None else None)
            bar = bar_for_month(res, code, year, month)
            if bar is None:
                raise CommandRejected(RejectionReason(
                    code=ReasonCode.INVALID_REQUEST,
                    message="Reservation is not shown in this month.",
                    policy_name="calendar_drag_source_policy",
                ))
            return ServiceOutcome.succeeded("", data=bar)

        picked = self._dispatcher.dispatch(
            "move_reservation", pick_up, failure_message=MOVE_FAILED_MESSAGE,
        )
        if not picked.ok:
            return picked

        controller = CalendarDragController(store=self._store, notifier=self._notifier)
        controller.start(picked.data)
        controller.hover(room_code, day)
        return controller.drop(room_code, day)
