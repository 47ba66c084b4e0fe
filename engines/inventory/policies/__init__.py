"""
PMS Inventory Engine - Policies
=================================
Stock status derivation and the validation policies for item and
supplier writes.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional

from core.commands.rejection import ReasonCode, RejectionReason
from engines.inventory.commands import (
    IN_STOCK,
    LOW_STOCK,
    MAX_RATING,
    MIN_RATING,
    OUT_OF_STOCK,
)


def stock_status(quantity: int, min_stock: int) -> str:
    """
    OUT_OF_STOCK at zero, LOW_STOCK at or below the minimum,
    IN_STOCK above it.
    """
    if quantity == 0:
        return OUT_OF_STOCK
    if quantity <= min_stock:
        return LOW_STOCK
    return IN_STOCK


def quantity_is_receipt_only_policy(
    changes: Mapping[str, Any],
) -> Optional[RejectionReason]:
    """Quantity only moves when a purchase order is received."""
    if "quantity" in changes:
        return RejectionReason(
            code=ReasonCode.QUANTITY_RECEIPT_ONLY,
            message=(
                "Quantity starts at 0 and can only be updated by "
                "receiving purchase orders."
            ),
            policy_name="quantity_is_receipt_only_policy",
        )
    return None


def editable_fields_policy(
    changes: Mapping[str, Any],
    editable: Iterable[str],
) -> Optional[RejectionReason]:
    unknown = sorted(set(changes) - set(editable))
    if unknown:
        return RejectionReason(
            code=ReasonCode.INVALID_REQUEST,
            message=f"Fields cannot be edited: {', '.join(unknown)}.",
            policy_name="editable_fields_policy",
        )
    return None


def supplier_rating_policy(rating: Any) -> Optional[RejectionReason]:
    if not isinstance(rating, int) or not MIN_RATING <= rating <= MAX_RATING:
        return RejectionReason(
            code=ReasonCode.INVALID_RATING,
            message=f"Rating must be between {MIN_RATING} and {MAX_RATING}.",
            policy_name="supplier_rating_policy",
        )
    return None


def record_must_exist_policy(
    record: Optional[Mapping[str, Any]],
    code: str,
    label: str,
) -> Optional[RejectionReason]:
    if record is None:
        return RejectionReason(
            code=code,
            message=f"{label} not found.",
            policy_name="record_must_exist_policy",
        )
    return None
