"""
PMS Hotel Calendar Engine - Bar Layout
========================================
Projects reservations onto a month grid of ``days_in_month`` columns.

A bar covers the nights a stay occupies: from the check-in day to
the day before checkout. Bars are clipped to the visible month and
omitted when the stay does not touch it. A day stay (or any record
with check_out <= check_in) occupies its check-in day only.

``month`` is 1-12 here; ``is_in_month`` keeps the 0-based index.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Iterable, List, Mapping, Optional

from core.time.temporal import add_days, coerce_date, days_in_month, format_local_date


@dataclass(frozen=True)
class CalendarBar:
    reservation_id: Any
    room_code:      Optional[str]
    start_day:      int
    end_day:        int
    check_in:       date
    check_out:      date
    guest_name:     str = ""
    status:         str = ""
    clipped_start:  bool = False
    clipped_end:    bool = False

    @property
    def span(self) -> int:
        return self.end_day - self.start_day + 1

    def to_dict(self) -> dict:
        return {
            "reservation_id": self.reservation_id,
            "room_code":      self.room_code,
            "start_day":      self.start_day,
            "end_day":        self.end_day,
            "span":           self.span,
            "check_in":       format_local_date(self.check_in),
            "check_out":      format_local_date(self.check_out),
            "guest_name":     self.guest_name,
            "status":         self.status,
            "clipped_start":  self.clipped_start,
            "clipped_end":    self.clipped_end,
        }


def last_occupied_day(check_in: date, check_out: date) -> date:
    if check_out <= check_in:
        return check_in
    return add_days(check_out, -1)


def bar_for_month(reservation: Mapping[str, Any], room_code: Optional[str],
                  year: int, month: int) -> Optional[CalendarBar]:
    check_in = coerce_date(reservation["check_in"])
    check_out = coerce_date(reservation["check_out"])
    last_night = last_occupied_day(check_in, check_out)

    dim = days_in_month(year, month)
    first = date(year, month, 1)
    last = date(year, month, dim)
    if check_in > last or last_night < first:
        return None

    clipped_start = check_in < first
    clipped_end = last_night > last
    return CalendarBar(
        reservation_id=reservation.get("id"),
        room_code=room_code,
        start_day=1 if clipped_start else check_in.day,
        end_day=dim if clipped_end else last_night.day,
        check_in=check_in,
        check_out=check_out,
        guest_name=reservation.get("guest_name", ""),
        status=reservation.get("status", ""),
        clipped_start=clipped_start,
        clipped_end=clipped_end,
    )


def month_bars(reservations: Iterable[Mapping[str, Any]],
               room_codes: Mapping[str, str],
               year: int, month: int) -> List[CalendarBar]:
    """``room_codes`` maps str(room id) to room number; unassigned bars get None."""
    bars = []
    for res in reservations:
        room_id = res.get("room_id")
        code = room_codes.get(str(room_id)) if room_id is not None else None
        bar = bar_for_month(res, code, year, month)
        if bar is not None:
            bars.append(bar)
    return bars
