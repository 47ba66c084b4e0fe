"""
PMS Procurement Engine - Request Commands
============================================
Typed purchase-order and order-template requests.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Optional, Tuple


# ══════════════════════════════════════════════════════════════
# STATUS CONSTANTS
# ══════════════════════════════════════════════════════════════

DRAFT = "DRAFT"
PENDING = "PENDING"
APPROVED = "APPROVED"
ORDERED = "ORDERED"
RECEIVED = "RECEIVED"
CANCELLED = "CANCELLED"

ORDER_STATUSES = frozenset({DRAFT, PENDING, APPROVED, ORDERED, RECEIVED, CANCELLED})
TERMINAL_ORDER_STATUSES = frozenset({RECEIVED, CANCELLED})
OPEN_ORDER_STATUSES = frozenset({DRAFT, PENDING, APPROVED, ORDERED})

# Orders that count as money committed to suppliers.
COMMITTED_ORDER_STATUSES = frozenset({ORDERED, RECEIVED})

INVOICE_PAYABLE = "PAYABLE"
INVOICE_RECEIVABLE = "RECEIVABLE"
INVOICE_PENDING = "PENDING"
INVOICE_PAID = "PAID"
INVOICE_OVERDUE = "OVERDUE"
INVOICE_CANCELLED = "CANCELLED"


# ══════════════════════════════════════════════════════════════
# REQUEST COMMANDS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class OrderLine:
    """One ordered item. ``item_id`` may be None for free-text lines."""
    item_name: str
    quantity: int
    unit_cost: Decimal
    item_id: Optional[Any] = None

    def __post_init__(self):
        if not self.item_name or not self.item_name.strip():
            raise ValueError("item_name must be non-empty.")
        if not isinstance(self.quantity, int) or self.quantity <= 0:
            raise ValueError("quantity must be positive integer.")
        cost = Decimal(str(self.unit_cost))
        if cost < 0:
            raise ValueError("unit_cost must be >= 0.")
        object.__setattr__(self, "unit_cost", cost)

    @property
    def total(self) -> Decimal:
        return self.quantity * self.unit_cost

    def to_fields(self) -> dict:
        return {
            "item_id": self.item_id,
            "item_name": self.item_name.strip(),
            "quantity": self.quantity,
            "unit_cost": self.unit_cost,
            "total": self.total,
        }

    @classmethod
    def from_record(cls, record: dict) -> "OrderLine":
        return cls(
            item_name=record["item_name"],
            quantity=int(record["quantity"]),
            unit_cost=record["unit_cost"],
            item_id=record.get("item_id"),
        )


def lines_total(lines: Tuple[OrderLine, ...]) -> Decimal:
    return sum((line.total for line in lines), Decimal("0"))


@dataclass(frozen=True)
class OrderCreateRequest:
    """Create a purchase order; it always starts PENDING."""
    supplier_id: Any
    lines: Tuple[OrderLine, ...]
    expected_delivery: Optional[date] = None
    notes: str = ""

    def __post_init__(self):
        if not self.supplier_id:
            raise ValueError("supplier_id must be non-empty.")
        if not isinstance(self.lines, tuple) or len(self.lines) == 0:
            raise ValueError("lines must be non-empty tuple.")
        if not all(isinstance(line, OrderLine) for line in self.lines):
            raise ValueError("lines must contain OrderLine values.")

    @property
    def total_amount(self) -> Decimal:
        return lines_total(self.lines)


@dataclass(frozen=True)
class TemplateCreateRequest:
    """Save a reusable set of order lines for one supplier."""
    name: str
    supplier_id: Any
    lines: Tuple[OrderLine, ...]

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError("name must be non-empty.")
        if not self.supplier_id:
            raise ValueError("supplier_id must be non-empty.")
        if not isinstance(self.lines, tuple) or len(self.lines) == 0:
            raise ValueError("lines must be non-empty tuple.")

    @property
    def total_amount(self) -> Decimal:
        return lines_total(self.lines)
