"""
PMS Reporting Engine - Request Commands
=========================================
Reporting is read-only; the only request shape is the period filter.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from core.time.temporal import coerce_date


@dataclass(frozen=True)
class ReportPeriod:
    """Inclusive date window; either bound may be open."""
    date_from: Optional[date] = None
    date_to: Optional[date] = None

    def __post_init__(self):
        if self.date_from is not None:
            object.__setattr__(self, "date_from", coerce_date(self.date_from))
        if self.date_to is not None:
            object.__setattr__(self, "date_to", coerce_date(self.date_to))

    @property
    def is_open(self) -> bool:
        return self.date_from is None and self.date_to is None

    def contains(self, day: Optional[date]) -> bool:
        if day is None:
            return self.is_open
        day = coerce_date(day)
        if self.date_from is not None and day < self.date_from:
            return False
        if self.date_to is not None and day > self.date_to:
            return False
        return True
