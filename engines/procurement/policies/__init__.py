"""
PMS Procurement Engine - Policies
====================================
Engine-specific validation policies for purchase-order operations.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from core.commands.rejection import ReasonCode, RejectionReason
from engines.procurement.commands import ORDER_STATUSES, TERMINAL_ORDER_STATUSES


def order_must_exist_policy(
    order: Optional[Mapping[str, Any]],
    order_id: Any,
) -> Optional[RejectionReason]:
    if order is None:
        return RejectionReason(
            code=ReasonCode.ORDER_NOT_FOUND,
            message=f"Purchase order '{order_id}' not found.",
            policy_name="order_must_exist_policy",
        )
    return None


def order_status_transition_policy(
    current: str,
    target: str,
    order_number: str = "",
) -> Optional[RejectionReason]:
    """
    Any open order may move to any other status; RECEIVED and
    CANCELLED are final.
    """
    if target not in ORDER_STATUSES:
        return RejectionReason(
            code=ReasonCode.INVALID_STATUS_TRANSITION,
            message=f"Unknown purchase order status '{target}'.",
            policy_name="order_status_transition_policy",
        )
    if current in TERMINAL_ORDER_STATUSES:
        return RejectionReason(
            code=ReasonCode.ORDER_TERMINAL,
            message=(
                f"Order {order_number} is already {current}; "
                f"its status can no longer change."
            ),
            policy_name="order_status_transition_policy",
        )
    return None


def supplier_must_exist_policy(
    supplier: Optional[Mapping[str, Any]],
    supplier_id: Any,
) -> Optional[RejectionReason]:
    if supplier is None:
        return RejectionReason(
            code=ReasonCode.SUPPLIER_NOT_FOUND,
            message=f"Supplier '{supplier_id}' not found.",
            policy_name="supplier_must_exist_policy",
        )
    return None


def template_must_exist_policy(
    template: Optional[Mapping[str, Any]],
    template_id: Any,
) -> Optional[RejectionReason]:
    if template is None:
        return RejectionReason(
            code=ReasonCode.TEMPLATE_NOT_FOUND,
            message=f"Order template '{template_id}' not found.",
            policy_name="template_must_exist_policy",
        )
    return None
