"""
PMS Core Time - Public API
============================
Explicit clock protocol and calendar-date helpers.
Doctrine: NO datetime.now() in engine logic.
"""

from core.time.clock import (
    Clock,
    FixedClock,
    SystemClock,
    get_default_clock,
    local_date,
    local_today,
    now_utc,
    set_default_clock,
)
from core.time.temporal import (
    StayRange,
    add_days,
    coerce_date,
    days_in_month,
    format_local_date,
    is_in_month,
    nights_between,
    parse_local_date,
)

__all__ = [
    "Clock",
    "FixedClock",
    "SystemClock",
    "get_default_clock",
    "set_default_clock",
    "now_utc",
    "local_today",
    "local_date",
    "StayRange",
    "add_days",
    "coerce_date",
    "days_in_month",
    "format_local_date",
    "is_in_month",
    "nights_between",
    "parse_local_date",
]
