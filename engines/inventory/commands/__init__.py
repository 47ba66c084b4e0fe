"""
PMS Inventory Engine - Request Commands
=========================================
Typed requests for stock items and suppliers.

Item quantity is deliberately absent from every request: stock starts
at zero and only purchase-order receipts move it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Optional, Tuple


# ══════════════════════════════════════════════════════════════
# CONSTANTS
# ══════════════════════════════════════════════════════════════

OUT_OF_STOCK = "OUT_OF_STOCK"
LOW_STOCK = "LOW_STOCK"
IN_STOCK = "IN_STOCK"

STOCK_STATUSES = (OUT_OF_STOCK, LOW_STOCK, IN_STOCK)

VALID_CATEGORIES = frozenset({
    "FOOD", "BEVERAGE", "HOUSEKEEPING", "LINEN", "MAINTENANCE",
    "OFFICE", "AMENITIES", "SNACKS", "TOILETRIES", "SOUVENIRS",
})
VALID_DESTINATIONS = frozenset({"RESTAURANT", "MINIMARKET", "BOTH", "INTERNAL"})

# Fields an operator may edit on an existing item.
EDITABLE_ITEM_FIELDS = frozenset({
    "name", "sku", "category", "unit", "min_stock", "max_stock",
    "unit_cost", "sell_price", "destination", "supplier_id", "location",
})
EDITABLE_SUPPLIER_FIELDS = frozenset({
    "name", "email", "phone", "address", "categories", "rating",
})

MIN_RATING = 1
MAX_RATING = 5


def _non_negative_money(value: Any, name: str) -> Decimal:
    amount = Decimal(str(value))
    if amount < 0:
        raise ValueError(f"{name} must be >= 0.")
    return amount


# ══════════════════════════════════════════════════════════════
# REQUEST COMMANDS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ItemCreateRequest:
    """Register a stock item. It always starts with quantity 0."""
    name: str
    category: str = "FOOD"
    unit: str = "pcs"
    sku: str = ""
    min_stock: int = 0
    max_stock: int = 100
    unit_cost: Decimal = Decimal("0")
    sell_price: Optional[Decimal] = None
    destination: str = "INTERNAL"
    supplier_id: Optional[Any] = None
    location: str = ""

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError("name must be non-empty.")
        if self.category not in VALID_CATEGORIES:
            raise ValueError(f"category '{self.category}' not valid.")
        if self.destination not in VALID_DESTINATIONS:
            raise ValueError(f"destination '{self.destination}' not valid.")
        if not isinstance(self.min_stock, int) or self.min_stock < 0:
            raise ValueError("min_stock must be a non-negative integer.")
        if not isinstance(self.max_stock, int) or self.max_stock < self.min_stock:
            raise ValueError("max_stock must be an integer >= min_stock.")
        object.__setattr__(self, "unit_cost",
                           _non_negative_money(self.unit_cost, "unit_cost"))
        if self.sell_price is not None:
            object.__setattr__(self, "sell_price",
                               _non_negative_money(self.sell_price, "sell_price"))

    def to_fields(self) -> dict:
        return {
            "name": self.name.strip(),
            "category": self.category,
            "unit": self.unit,
            "sku": self.sku,
            "quantity": 0,
            "min_stock": self.min_stock,
            "max_stock": self.max_stock,
            "unit_cost": self.unit_cost,
            "sell_price": self.sell_price,
            "destination": self.destination,
            "supplier_id": self.supplier_id,
            "location": self.location,
        }


@dataclass(frozen=True)
class SupplierCreateRequest:
    """Rating bounds are a policy, so an out-of-range rating is a rejection."""
    name: str
    email: str = ""
    phone: str = ""
    address: str = ""
    categories: Tuple[str, ...] = field(default_factory=tuple)
    rating: int = MAX_RATING

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError("name must be non-empty.")
        if not isinstance(self.categories, tuple):
            raise ValueError("categories must be a tuple.")
        if not isinstance(self.rating, int):
            raise ValueError("rating must be an integer.")

    def to_fields(self) -> dict:
        return {
            "name": self.name.strip(),
            "email": self.email,
            "phone": self.phone,
            "address": self.address,
            "categories": list(self.categories),
            "rating": self.rating,
            "total_orders": 0,
        }
