"""
PMS Core Time - Hotel Calendar Dates
======================================
Pure functions for calendar-date logic.

Hotel dates are calendar days, not instants. A "YYYY-MM-DD" string is
always read as the hotel's local day and never passes through a timezone
conversion, so a stay can never shift by a day between screens.
All functions take explicit arguments - no hidden clock access.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Union

DateLike = Union[date, datetime, str]


# ══════════════════════════════════════════════════════════════
# PARSE / FORMAT
# ══════════════════════════════════════════════════════════════

def parse_local_date(value: str) -> date:
    """Parse a ``YYYY-MM-DD`` string into a local calendar date."""
    year, month, day = (int(part) for part in value.strip()[:10].split("-"))
    return date(year, month, day)


def format_local_date(value: date) -> str:
    """Inverse of parse_local_date: zero-padded ``YYYY-MM-DD``."""
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def coerce_date(value: DateLike) -> date:
    """
    Normalise a stored or submitted date value.

    Records coming back from the ORM carry ``date`` objects, request
    bodies carry strings. A ``datetime`` keeps its calendar day as-is.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value:
        return parse_local_date(value)
    raise ValueError(f"Not a calendar date: {value!r}")


# ══════════════════════════════════════════════════════════════
# ARITHMETIC
# ══════════════════════════════════════════════════════════════

def add_days(value: date, days: int) -> date:
    """Calendar-day arithmetic; ``days`` may be negative."""
    return value + timedelta(days=days)


def nights_between(check_in: date, check_out: date) -> int:
    return (check_out - check_in).days


def days_in_month(year: int, month: int) -> int:
    """Number of days in ``month`` (1-12)."""
    return calendar.monthrange(year, month)[1]


def is_in_month(value: date, year: int, month_index: int) -> bool:
    """``month_index`` is 0-based (January == 0)."""
    return value.year == year and value.month == month_index + 1


# ══════════════════════════════════════════════════════════════
# STAY RANGE - half-open interval [check_in, check_out)
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class StayRange:
    """
    A stay occupies the nights from ``check_in`` up to, but not
    including, ``check_out``. Back-to-back stays therefore share
    a turnover day without overlapping.

    Invariant: check_in <= check_out (enforced at construction).
    """

    check_in: date
    check_out: date

    def __post_init__(self) -> None:
        if self.check_in > self.check_out:
            raise ValueError(
                f"StayRange check_in ({self.check_in}) must be <= "
                f"check_out ({self.check_out})."
            )

    @property
    def is_empty(self) -> bool:
        return self.check_in == self.check_out

    def overlaps(self, other: "StayRange") -> bool:
        return (self.check_in < other.check_out
                and other.check_in < self.check_out)
