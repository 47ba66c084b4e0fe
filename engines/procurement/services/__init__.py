"""
PMS Procurement Engine - Application Service
===============================================
Purchase-order lifecycle: create (with its payable invoice) → status
moves → receive (stock + invoice cascade), plus reusable templates.

Receiving runs inside ONE ``store.atomic()`` block: the order stamp,
every stock increment and the invoice payment commit together or
not at all. Each item is re-read immediately before its increment.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta
from decimal import Decimal
from typing import Any, Dict, List, Optional

from core.commands import (
    CommandRejected,
    OperationDispatcher,
    ReasonCode,
    RejectionReason,
    ServiceOutcome,
    raise_if_rejected,
)
from core.notifications import Notifier
from core.store import base as entities
from core.store.base import RecordStore, get_one
from core.time.clock import Clock, SystemClock
from core.time.temporal import coerce_date
from engines.procurement.commands import (
    CANCELLED,
    INVOICE_CANCELLED,
    INVOICE_PAID,
    INVOICE_PAYABLE,
    INVOICE_PENDING,
    OPEN_ORDER_STATUSES,
    PENDING,
    RECEIVED,
    OrderCreateRequest,
    OrderLine,
    TemplateCreateRequest,
)
from engines.procurement.policies import (
    order_must_exist_policy,
    order_status_transition_policy,
    supplier_must_exist_policy,
    template_must_exist_policy,
)

logger = logging.getLogger("pms.procurement")

ZERO = Decimal("0")


def _invoice_items(lines) -> List[dict]:
    # JSON column: amounts kept as strings so no precision is lost.
    return [{
        "description": line.item_name,
        "quantity":    line.quantity,
        "unit_price":  str(line.unit_cost),
        "total":       str(line.total),
    } for line in lines]


class ProcurementService:
    def __init__(self, *, store: RecordStore, notifier: Notifier,
                 clock: Optional[Clock] = None,
                 order_prefix: str = "PO",
                 invoice_prefix: str = "INV",
                 payable_terms_days: int = 30):
        self._store          = store
        self._clock          = clock or SystemClock()
        self._order_prefix   = order_prefix
        self._invoice_prefix = invoice_prefix
        self._terms          = timedelta(days=payable_terms_days)
        self._dispatcher     = OperationDispatcher(notifier=notifier)

    # ── helpers ───────────────────────────────────────────────

    def _next_number(self, entity: str, field: str, prefix: str, width: int) -> str:
        stem = f"{prefix}-{self._clock.now_utc().year}-"
        taken = {r[field] for r in self._store.query(entity)
                 if str(r.get(field, "")).startswith(stem)}
        seq = len(taken) + 1
        while f"{stem}{seq:0{width}d}" in taken:
            seq += 1
        return f"{stem}{seq:0{width}d}"

    def _order(self, order_id: Any) -> Dict[str, Any]:
        order = get_one(self._store, entities.PURCHASE_ORDERS, order_id)
        raise_if_rejected(order_must_exist_policy(order, order_id))
        return order

    def _supplier(self, supplier_id: Any) -> Dict[str, Any]:
        supplier = get_one(self._store, entities.SUPPLIERS, supplier_id)
        raise_if_rejected(supplier_must_exist_policy(supplier, supplier_id))
        return supplier

    def _check_items(self, lines) -> None:
        for line in lines:
            if line.item_id is None:
                continue
            if get_one(self._store, entities.INVENTORY_ITEMS, line.item_id) is None:
                raise CommandRejected(RejectionReason(
                    code=ReasonCode.ITEM_NOT_FOUND,
                    message=f"Inventory item for '{line.item_name}' not found.",
                    policy_name="order_lines_policy",
                ))

    def _lines(self, order_id: Any) -> List[Dict[str, Any]]:
        return self._store.query(entities.PURCHASE_ORDER_ITEMS,
                                 {"order_id": order_id}, order_by=("created_at",))

    # ══════════════════════════════════════════════════════════
    # ORDERS
    # ══════════════════════════════════════════════════════════

    def list_orders(self, *, status: Optional[str] = None) -> ServiceOutcome:
        def run():
            filters = {"status": status} if status else {}
            orders = self._store.query(entities.PURCHASE_ORDERS, filters,
                                       order_by=("-created_at",))
            return ServiceOutcome.succeeded("", data=[
                {**order, "lines": self._lines(order["id"])} for order in orders
            ])

        return self._dispatcher.dispatch(
            "list_orders", run, failure_message="Failed to load purchase orders.",
        )

    def create_order(self, request: OrderCreateRequest) -> ServiceOutcome:
        return self._dispatcher.dispatch(
            "create_order", lambda: self._create_order(request),
            failure_message="Failed to create purchase order.",
        )

    def _create_order(self, request: OrderCreateRequest) -> ServiceOutcome:
        supplier = self._supplier(request.supplier_id)
        self._check_items(request.lines)

        total = request.total_amount
        order_number = self._next_number(entities.PURCHASE_ORDERS, "order_number",
                                         self._order_prefix, 3)
        invoice_number = self._next_number(entities.INVOICES, "invoice_number",
                                           self._invoice_prefix, 4)
        today = self._clock.now_utc().date()

        with self._store.atomic():
            invoice = self._store.insert(entities.INVOICES, {
                "invoice_number":     invoice_number,
                "invoice_type":       INVOICE_PAYABLE,
                "customer_or_vendor": supplier["name"],
                "amount":             total,
                "due_date":           today + self._terms,
                "status":             INVOICE_PENDING,
                "items":              _invoice_items(request.lines),
            })
            order = self._store.insert(entities.PURCHASE_ORDERS, {
                "order_number":      order_number,
                "supplier_id":       supplier["id"],
                "supplier_name":     supplier["name"],
                "status":            PENDING,
                "total_amount":      total,
                "expected_delivery": request.expected_delivery,
                "notes":             request.notes,
                "invoice_id":        invoice["id"],
            })
            lines = [
                self._store.insert(entities.PURCHASE_ORDER_ITEMS,
                                   {"order_id": order["id"], **line.to_fields()})
                for line in request.lines
            ]
            fresh = get_one(self._store, entities.SUPPLIERS, supplier["id"])
            self._store.update(entities.SUPPLIERS, supplier["id"], {
                "total_orders": int(fresh.get("total_orders") or 0) + 1,
            })

        logger.info("order %s created supplier=%s total=%s invoice=%s",
                    order_number, supplier["name"], total, invoice_number)
        return ServiceOutcome.succeeded(
            f"Purchase order {order_number} created.",
            data={**order, "lines": lines},
        )

    def update_status(self, order_id: Any, status: str) -> ServiceOutcome:
        def run():
            order = self._order(order_id)
            raise_if_rejected(order_status_transition_policy(
                order["status"], status, order["order_number"]))
            if status == order["status"]:
                return ServiceOutcome.noop()
            if status == RECEIVED:
                return self._receive(order)

            with self._store.atomic():
                updated = self._store.update(entities.PURCHASE_ORDERS, order["id"],
                                             {"status": status})
                if status == CANCELLED:
                    self._cancel_invoice(order)
            return ServiceOutcome.succeeded(
                f"Order {order['order_number']} marked {status.lower()}.",
                data=updated,
            )

        return self._dispatcher.dispatch(
            "update_order_status", run,
            failure_message="Failed to update order status.",
        )

    def receive_order(self, order_id: Any) -> ServiceOutcome:
        return self.update_status(order_id, RECEIVED)

    def _cancel_invoice(self, order: Dict[str, Any]) -> None:
        invoice = get_one(self._store, entities.INVOICES, order.get("invoice_id"))
        if invoice is not None and invoice["status"] == INVOICE_PENDING:
            self._store.update(entities.INVOICES, invoice["id"],
                               {"status": INVOICE_CANCELLED})

    def _receive(self, order: Dict[str, Any]) -> ServiceOutcome:
        now = self._clock.now_utc()
        restocked = 0
        with self._store.atomic():
            updated = self._store.update(entities.PURCHASE_ORDERS, order["id"], {
                "status":      RECEIVED,
                "received_at": now,
            })
            for line in self._lines(order["id"]):
                item = get_one(self._store, entities.INVENTORY_ITEMS, line.get("item_id"))
                if item is None:
                    continue
                self._store.update(entities.INVENTORY_ITEMS, item["id"], {
                    "quantity":       int(item.get("quantity") or 0) + int(line["quantity"]),
                    "last_restocked": now,
                })
                restocked += 1
            invoice = get_one(self._store, entities.INVOICES, order.get("invoice_id"))
            if invoice is not None:
                self._store.update(entities.INVOICES, invoice["id"], {
                    "status":  INVOICE_PAID,
                    "paid_at": now,
                })

        logger.info("order %s received, %d item(s) restocked",
                    order["order_number"], restocked)
        return ServiceOutcome.succeeded(
            f"Order {order['order_number']} received. "
            f"{restocked} item(s) restocked.",
            data=updated,
        )

    # ══════════════════════════════════════════════════════════
    # TEMPLATES
    # ══════════════════════════════════════════════════════════

    def list_templates(self) -> ServiceOutcome:
        def run():
            templates = self._store.query(entities.ORDER_TEMPLATES,
                                          order_by=("-created_at",))
            return ServiceOutcome.succeeded("", data=[
                {**t, "lines": self._template_lines(t["id"])} for t in templates
            ])

        return self._dispatcher.dispatch(
            "list_templates", run, failure_message="Failed to load templates.",
        )

    def _template_lines(self, template_id: Any) -> List[Dict[str, Any]]:
        return self._store.query(entities.ORDER_TEMPLATE_ITEMS,
                                 {"template_id": template_id},
                                 order_by=("created_at",))

    def create_template(self, request: TemplateCreateRequest) -> ServiceOutcome:
        def run():
            supplier = self._supplier(request.supplier_id)
            self._check_items(request.lines)
            with self._store.atomic():
                template = self._store.insert(entities.ORDER_TEMPLATES, {
                    "name":          request.name.strip(),
                    "supplier_id":   supplier["id"],
                    "supplier_name": supplier["name"],
                    "total_amount":  request.total_amount,
                })
                lines = [
                    self._store.insert(entities.ORDER_TEMPLATE_ITEMS,
                                       {"template_id": template["id"], **line.to_fields()})
                    for line in request.lines
                ]
            return ServiceOutcome.succeeded(f"Template '{template['name']}' saved.",
                                            data={**template, "lines": lines})

        return self._dispatcher.dispatch(
            "create_template", run, failure_message="Failed to save template.",
        )

    def delete_template(self, template_id: Any) -> ServiceOutcome:
        def run():
            template = get_one(self._store, entities.ORDER_TEMPLATES, template_id)
            raise_if_rejected(template_must_exist_policy(template, template_id))
            with self._store.atomic():
                for line in self._template_lines(template["id"]):
                    self._store.delete(entities.ORDER_TEMPLATE_ITEMS, line["id"])
                self._store.delete(entities.ORDER_TEMPLATES, template["id"])
            return ServiceOutcome.succeeded(f"Template '{template['name']}' deleted.",
                                            data={"id": template["id"]})

        return self._dispatcher.dispatch(
            "delete_template", run, failure_message="Failed to delete template.",
        )

    def order_from_template(self, template_id: Any, *,
                            expected_delivery: Optional[date] = None,
                            notes: str = "") -> ServiceOutcome:
        def run():
            template = get_one(self._store, entities.ORDER_TEMPLATES, template_id)
            raise_if_rejected(template_must_exist_policy(template, template_id))
            lines = tuple(OrderLine.from_record(r)
                          for r in self._template_lines(template["id"]))
            return self._create_order(OrderCreateRequest(
                supplier_id=template["supplier_id"],
                lines=lines,
                expected_delivery=expected_delivery,
                notes=notes or f"From template: {template['name']}",
            ))

        return self._dispatcher.dispatch(
            "order_from_template", run,
            failure_message="Failed to create purchase order.",
        )

    # ══════════════════════════════════════════════════════════
    # STATS
    # ══════════════════════════════════════════════════════════

    def order_stats(self, today: Optional[date] = None) -> ServiceOutcome:
        def run():
            day = today or self._clock.now_utc().date()
            orders = self._store.query(entities.PURCHASE_ORDERS)

            def this_month(value) -> bool:
                if value is None:
                    return False
                d = coerce_date(value)
                return d.year == day.year and d.month == day.month

            received = [o for o in orders if o["status"] == RECEIVED]
            spent = sum((Decimal(str(o["total_amount"])) for o in received), ZERO)
            return ServiceOutcome.succeeded("", data={
                "total_orders":        len(orders),
                "pending_orders":      sum(1 for o in orders
                                           if o["status"] in OPEN_ORDER_STATUSES),
                "received_orders":     len(received),
                "cancelled_orders":    sum(1 for o in orders if o["status"] == CANCELLED),
                "total_spent":         spent,
                "average_order_value": (spent / len(received)) if received else ZERO,
                "orders_this_month":   sum(1 for o in orders if this_month(o.get("created_at"))),
                "spent_this_month":    sum((Decimal(str(o["total_amount"]))
                                            for o in received
                                            if this_month(o.get("received_at"))), ZERO),
            })

        return self._dispatcher.dispatch(
            "order_stats", run, failure_message="Failed to load order stats.",
        )
