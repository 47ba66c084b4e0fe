"""
PMS Inventory Engine - Application Service
=============================================
Stock items and suppliers over the record store.

Stock status is never stored; it is derived on every read with
``stock_status`` so no call site can drift from the thresholds.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Dict, Mapping, Optional

from core.commands import (
    OperationDispatcher,
    ReasonCode,
    ServiceOutcome,
    raise_if_rejected,
)
from core.notifications import Notifier
from core.store import base as entities
from core.store.base import RecordStore, get_one
from engines.inventory.commands import (
    EDITABLE_ITEM_FIELDS,
    EDITABLE_SUPPLIER_FIELDS,
    IN_STOCK,
    LOW_STOCK,
    OUT_OF_STOCK,
    STOCK_STATUSES,
    ItemCreateRequest,
    SupplierCreateRequest,
)
from engines.inventory.policies import (
    editable_fields_policy,
    quantity_is_receipt_only_policy,
    record_must_exist_policy,
    stock_status,
    supplier_rating_policy,
)

logger = logging.getLogger("pms.inventory")


def annotate_item(item: Mapping[str, Any]) -> Dict[str, Any]:
    row = dict(item)
    row["stock_status"] = stock_status(int(row.get("quantity") or 0),
                                       int(row.get("min_stock") or 0))
    return row


class InventoryService:
    def __init__(self, *, store: RecordStore, notifier: Notifier):
        self._store = store
        self._dispatcher = OperationDispatcher(notifier=notifier)

    def _item(self, item_id: Any) -> Dict[str, Any]:
        item = get_one(self._store, entities.INVENTORY_ITEMS, item_id)
        raise_if_rejected(record_must_exist_policy(
            item, ReasonCode.ITEM_NOT_FOUND, "Inventory item"))
        return item

    def _supplier(self, supplier_id: Any) -> Dict[str, Any]:
        supplier = get_one(self._store, entities.SUPPLIERS, supplier_id)
        raise_if_rejected(record_must_exist_policy(
            supplier, ReasonCode.SUPPLIER_NOT_FOUND, "Supplier"))
        return supplier

    # ══════════════════════════════════════════════════════════
    # ITEMS
    # ══════════════════════════════════════════════════════════

    def list_items(self, *, category: Optional[str] = None,
                   destination: Optional[str] = None) -> ServiceOutcome:
        def run():
            filters: Dict[str, Any] = {}
            if category:
                filters["category"] = category
            if destination:
                # BOTH items are stocked for either outlet.
                filters["destination__in"] = [destination, "BOTH"]
            rows = self._store.query(entities.INVENTORY_ITEMS, filters,
                                     order_by=("name",))
            return ServiceOutcome.succeeded("", data=[annotate_item(r) for r in rows])

        return self._dispatcher.dispatch(
            "list_items", run, failure_message="Failed to load inventory.",
        )

    def create_item(self, request: ItemCreateRequest) -> ServiceOutcome:
        def run():
            if request.supplier_id is not None:
                self._supplier(request.supplier_id)
            item = self._store.insert(entities.INVENTORY_ITEMS, request.to_fields())
            logger.info("item %s registered", item["id"])
            return ServiceOutcome.succeeded(f"{item['name']} added to inventory.",
                                            data=annotate_item(item))

        return self._dispatcher.dispatch(
            "create_item", run, failure_message="Failed to add item.",
        )

    def update_item(self, item_id: Any, changes: Mapping[str, Any]) -> ServiceOutcome:
        def run():
            raise_if_rejected(
                quantity_is_receipt_only_policy(changes),
                editable_fields_policy(changes, EDITABLE_ITEM_FIELDS),
            )
            self._item(item_id)
            if changes.get("supplier_id") is not None:
                self._supplier(changes["supplier_id"])
            item = self._store.update(entities.INVENTORY_ITEMS, item_id, dict(changes))
            return ServiceOutcome.succeeded(f"{item['name']} updated.",
                                            data=annotate_item(item))

        return self._dispatcher.dispatch(
            "update_item", run, failure_message="Failed to update item.",
        )

    def delete_item(self, item_id: Any) -> ServiceOutcome:
        def run():
            item = self._item(item_id)
            self._store.delete(entities.INVENTORY_ITEMS, item["id"])
            return ServiceOutcome.succeeded(f"{item['name']} removed.",
                                            data={"id": item["id"]})

        return self._dispatcher.dispatch(
            "delete_item", run, failure_message="Failed to delete item.",
        )

    def low_stock_items(self) -> ServiceOutcome:
        def run():
            rows = [annotate_item(r) for r in self._store.query(
                entities.INVENTORY_ITEMS, order_by=("name",))]
            return ServiceOutcome.succeeded("", data=[
                r for r in rows if r["stock_status"] in (LOW_STOCK, OUT_OF_STOCK)
            ])

        return self._dispatcher.dispatch(
            "low_stock_items", run, failure_message="Failed to load inventory.",
        )

    def stock_overview(self) -> ServiceOutcome:
        def run():
            rows = [annotate_item(r) for r in self._store.query(entities.INVENTORY_ITEMS)]
            counts = {status: 0 for status in STOCK_STATUSES}
            value = Decimal("0")
            for row in rows:
                counts[row["stock_status"]] += 1
                value += int(row.get("quantity") or 0) * Decimal(str(row.get("unit_cost") or 0))
            return ServiceOutcome.succeeded("", data={
                "total_items":  len(rows),
                "in_stock":     counts[IN_STOCK],
                "low_stock":    counts[LOW_STOCK],
                "out_of_stock": counts[OUT_OF_STOCK],
                "stock_value":  value,
            })

        return self._dispatcher.dispatch(
            "stock_overview", run, failure_message="Failed to load inventory.",
        )

    # ══════════════════════════════════════════════════════════
    # SUPPLIERS
    # ══════════════════════════════════════════════════════════

    def list_suppliers(self) -> ServiceOutcome:
        def run():
            return ServiceOutcome.succeeded("", data=self._store.query(
                entities.SUPPLIERS, order_by=("name",)))

        return self._dispatcher.dispatch(
            "list_suppliers", run, failure_message="Failed to load suppliers.",
        )

    def create_supplier(self, request: SupplierCreateRequest) -> ServiceOutcome:
        def run():
            raise_if_rejected(supplier_rating_policy(request.rating))
            supplier = self._store.insert(entities.SUPPLIERS, request.to_fields())
            return ServiceOutcome.succeeded(f"Supplier {supplier['name']} added.",
                                            data=supplier)

        return self._dispatcher.dispatch(
            "create_supplier", run, failure_message="Failed to add supplier.",
        )

    def update_supplier(self, supplier_id: Any,
                        changes: Mapping[str, Any]) -> ServiceOutcome:
        def run():
            raise_if_rejected(
                editable_fields_policy(changes, EDITABLE_SUPPLIER_FIELDS),
                supplier_rating_policy(changes["rating"]) if "rating" in changes else None,
            )
            self._supplier(supplier_id)
            fields = dict(changes)
            if "categories" in fields:
                fields["categories"] = list(fields["categories"])
            supplier = self._store.update(entities.SUPPLIERS, supplier_id, fields)
            return ServiceOutcome.succeeded(f"Supplier {supplier['name']} updated.",
                                            data=supplier)

        return self._dispatcher.dispatch(
            "update_supplier", run, failure_message="Failed to update supplier.",
        )

    def delete_supplier(self, supplier_id: Any) -> ServiceOutcome:
        def run():
            supplier = self._supplier(supplier_id)
            self._store.delete(entities.SUPPLIERS, supplier["id"])
            return ServiceOutcome.succeeded(f"Supplier {supplier['name']} removed.",
                                            data={"id": supplier["id"]})

        return self._dispatcher.dispatch(
            "delete_supplier", run, failure_message="Failed to delete supplier.",
        )
