"""
PMS Hotel Reservation Engine - Stay Pricing
=============================================
Single home of the stay-total formula; every call site (booking,
add-on edits, quotes) goes through here.

    base  = day_stay_price (or price) for a day stay, else price * nights
    total = max(0, base + beds*EXTRA_BED_PRICE + wood*EXTRA_WOOD_PRICE
                     - discount + top_up)

Room weekday/weekend prices are carried on the record but not read.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Mapping, Optional

from core.time.temporal import nights_between

EXTRA_BED_PRICE  = Decimal("20")
EXTRA_WOOD_PRICE = Decimal("15")

ZERO = Decimal("0")


def _dec(value: Any) -> Decimal:
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def base_amount(room: Mapping[str, Any], nights: int, is_day_stay: bool) -> Decimal:
    if is_day_stay:
        day_price = room.get("day_stay_price")
        return _dec(day_price if day_price is not None else room.get("price"))
    return _dec(room.get("price")) * nights


def addons_amount(extra_bed_count: int, extra_wood_count: int) -> Decimal:
    return extra_bed_count * EXTRA_BED_PRICE + extra_wood_count * EXTRA_WOOD_PRICE


def compute_total(base: Any, extra_bed_count: int = 0, extra_wood_count: int = 0,
                  discount_amount: Any = 0, top_up_amount: Any = 0) -> Decimal:
    """Never negative; an oversized discount clamps to zero."""
    total = (_dec(base) + addons_amount(extra_bed_count, extra_wood_count)
             - _dec(discount_amount) + _dec(top_up_amount))
    return max(ZERO, total)


@dataclass(frozen=True)
class StayQuote:
    nights:      int
    base_amount: Decimal
    addons:      Decimal
    discount:    Decimal
    top_up:      Decimal
    total:       Decimal

    def to_dict(self) -> dict:
        return {
            "nights": self.nights,
            "base_amount": self.base_amount,
            "addons": self.addons,
            "discount": self.discount,
            "top_up": self.top_up,
            "total": self.total,
        }


def quote_stay(room: Mapping[str, Any], check_in: date, check_out: date,
               is_day_stay: bool = False, *, extra_bed_count: int = 0,
               extra_wood_count: int = 0, discount_amount: Any = 0,
               top_up_amount: Any = 0,
               nights: Optional[int] = None) -> StayQuote:
    if nights is None:
        nights = 0 if is_day_stay else nights_between(check_in, check_out)
    base = base_amount(room, nights, is_day_stay)
    return StayQuote(
        nights=nights,
        base_amount=base,
        addons=addons_amount(extra_bed_count, extra_wood_count),
        discount=_dec(discount_amount),
        top_up=_dec(top_up_amount),
        total=compute_total(base, extra_bed_count, extra_wood_count,
                            discount_amount, top_up_amount),
    )
