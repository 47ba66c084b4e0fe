"""
PMS Hotel Reservation Engine - Room Availability Filter
=========================================================
Pure filter over the room catalog: status, then capacity, then (when
a date range is requested) the overlap predicate against that room's
reservations. Source order is preserved; nothing is ranked.

An empty result is a valid answer. Which stage emptied it is reported
so the caller can tell "no rooms at all", "none for this party size"
and "none for these dates" apart.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from engines.hotel_reservation.commands import ROOM_AVAILABLE
from engines.hotel_reservation.policies import is_room_free

NO_ROOMS            = "NO_ROOMS"
NO_ROOMS_FOR_GUESTS = "NO_ROOMS_FOR_GUESTS"
NO_ROOMS_FOR_DATES  = "NO_ROOMS_FOR_DATES"

EMPTY_STATE_MESSAGES = {
    NO_ROOMS:            "No rooms are available at the moment.",
    NO_ROOMS_FOR_GUESTS: "No rooms can accommodate the requested number of guests.",
    NO_ROOMS_FOR_DATES:  "No rooms are available for the selected dates.",
}


@dataclass(frozen=True)
class AvailabilityResult:
    rooms:        Tuple[Dict[str, Any], ...]
    empty_reason: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not self.rooms

    @property
    def message(self) -> Optional[str]:
        if self.empty_reason is None:
            return None
        return EMPTY_STATE_MESSAGES[self.empty_reason]


def _by_room(reservations: Iterable[Mapping[str, Any]]) -> Dict[str, List[Mapping[str, Any]]]:
    grouped: Dict[str, List[Mapping[str, Any]]] = {}
    for res in reservations:
        room_id = res.get("room_id")
        if room_id is not None:
            grouped.setdefault(str(room_id), []).append(res)
    return grouped


def filter_bookable_rooms(
    rooms: Iterable[Mapping[str, Any]],
    guests: int,
    reservations: Iterable[Mapping[str, Any]],
    check_in: Optional[date] = None,
    check_out: Optional[date] = None,
) -> AvailabilityResult:
    """
    Without a date range the search is date-agnostic (status and
    capacity only) and ``reservations`` is ignored.
    """
    open_rooms = [r for r in rooms if r.get("status") == ROOM_AVAILABLE]
    if not open_rooms:
        return AvailabilityResult(rooms=(), empty_reason=NO_ROOMS)

    sized = [r for r in open_rooms if int(r.get("capacity") or 0) >= guests]
    if not sized:
        return AvailabilityResult(rooms=(), empty_reason=NO_ROOMS_FOR_GUESTS)

    if check_in is None or check_out is None:
        return AvailabilityResult(rooms=tuple(dict(r) for r in sized))

    booked = _by_room(reservations)
    free = [
        r for r in sized
        if is_room_free(check_in, check_out, booked.get(str(r.get("id")), ()))
    ]
    if not free:
        return AvailabilityResult(rooms=(), empty_reason=NO_ROOMS_FOR_DATES)
    return AvailabilityResult(rooms=tuple(dict(r) for r in free))
