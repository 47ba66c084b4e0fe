"""
PMS Inventory Engine Tests
===========================
Tests cover:
- Stock status thresholds
- Item CRUD and the receipt-only quantity rule
- Supplier CRUD and rating bounds
- Stock overview
"""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from core.commands import ReasonCode
from core.notifications import ERROR, SUCCESS, RecordingNotifier
from core.store import base as entities
from core.store.base import get_one
from core.store.memory import InMemoryRecordStore
from core.time.clock import FixedClock
from engines.inventory.commands import (
    IN_STOCK,
    LOW_STOCK,
    OUT_OF_STOCK,
    ItemCreateRequest,
    SupplierCreateRequest,
)
from engines.inventory.policies import stock_status
from engines.inventory.services import InventoryService, annotate_item

NOW = datetime(2025, 3, 1, 9, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def env():
    store = InMemoryRecordStore(clock=FixedClock(NOW))
    notifier = RecordingNotifier()
    return InventoryService(store=store, notifier=notifier), store, notifier


def _supplier(svc, name="Fresh Farms", rating=4):
    return svc.create_supplier(SupplierCreateRequest(
        name=name, categories=("FOOD",), rating=rating)).data


# ══════════════════════════════════════════════════════════════
# STOCK STATUS
# ══════════════════════════════════════════════════════════════

class TestStockStatus:
    @pytest.mark.parametrize("quantity,min_stock,expected", [
        (0, 5, OUT_OF_STOCK),
        (0, 0, OUT_OF_STOCK),
        (1, 5, LOW_STOCK),
        (5, 5, LOW_STOCK),
        (6, 5, IN_STOCK),
        (1, 0, IN_STOCK),
    ])
    def test_thresholds(self, quantity, min_stock, expected):
        assert stock_status(quantity, min_stock) == expected

    def test_annotate_does_not_mutate(self):
        item = {"quantity": 3, "min_stock": 5}
        row = annotate_item(item)
        assert row["stock_status"] == LOW_STOCK
        assert "stock_status" not in item


# ══════════════════════════════════════════════════════════════
# REQUESTS
# ══════════════════════════════════════════════════════════════

class TestItemCreateRequest:
    def test_quantity_always_starts_at_zero(self):
        fields = ItemCreateRequest(name="Rice", min_stock=5).to_fields()
        assert fields["quantity"] == 0

    def test_invalid_category(self):
        with pytest.raises(ValueError, match="category"):
            ItemCreateRequest(name="Rice", category="GADGETS")

    def test_max_below_min(self):
        with pytest.raises(ValueError, match="max_stock"):
            ItemCreateRequest(name="Rice", min_stock=10, max_stock=5)

    def test_negative_cost(self):
        with pytest.raises(ValueError, match="unit_cost"):
            ItemCreateRequest(name="Rice", unit_cost=Decimal("-1"))


# ══════════════════════════════════════════════════════════════
# ITEMS
# ══════════════════════════════════════════════════════════════

class TestItems:
    def test_create_item(self, env):
        svc, _, notifier = env
        outcome = svc.create_item(ItemCreateRequest(name=" Rice ", min_stock=5,
                                                    unit_cost=Decimal("2.50")))
        assert outcome.ok
        assert outcome.data["name"] == "Rice"
        assert outcome.data["quantity"] == 0
        assert outcome.data["stock_status"] == OUT_OF_STOCK
        assert notifier.last() == (SUCCESS, "Rice added to inventory.")

    def test_create_item_unknown_supplier(self, env):
        svc, store, _ = env
        outcome = svc.create_item(ItemCreateRequest(name="Rice", supplier_id="nope"))
        assert outcome.reason.code == ReasonCode.SUPPLIER_NOT_FOUND
        assert store.count(entities.INVENTORY_ITEMS) == 0

    def test_quantity_edit_rejected(self, env):
        svc, store, notifier = env
        item = svc.create_item(ItemCreateRequest(name="Rice")).data
        outcome = svc.update_item(item["id"], {"quantity": 50})

        assert outcome.reason.code == ReasonCode.QUANTITY_RECEIPT_ONLY
        assert get_one(store, entities.INVENTORY_ITEMS, item["id"])["quantity"] == 0
        assert notifier.last()[0] == ERROR

    def test_unknown_field_rejected(self, env):
        svc, _, _ = env
        item = svc.create_item(ItemCreateRequest(name="Rice")).data
        outcome = svc.update_item(item["id"], {"last_restocked": NOW})
        assert outcome.reason.code == ReasonCode.INVALID_REQUEST

    def test_update_item(self, env):
        svc, _, _ = env
        item = svc.create_item(ItemCreateRequest(name="Rice")).data
        outcome = svc.update_item(item["id"], {"min_stock": 8, "location": "Store A"})
        assert outcome.ok
        assert outcome.data["min_stock"] == 8

    def test_update_missing_item(self, env):
        svc, _, _ = env
        assert svc.update_item("missing", {"name": "X"}).reason.code == ReasonCode.ITEM_NOT_FOUND

    def test_delete_item(self, env):
        svc, store, _ = env
        item = svc.create_item(ItemCreateRequest(name="Rice")).data
        assert svc.delete_item(item["id"]).ok
        assert store.count(entities.INVENTORY_ITEMS) == 0

    def test_list_filters(self, env):
        svc, _, _ = env
        svc.create_item(ItemCreateRequest(name="Cola", category="BEVERAGE",
                                          destination="MINIMARKET"))
        svc.create_item(ItemCreateRequest(name="Water", category="BEVERAGE",
                                          destination="BOTH"))
        svc.create_item(ItemCreateRequest(name="Rice", destination="RESTAURANT"))

        names = lambda outcome: [r["name"] for r in outcome.data]
        assert names(svc.list_items()) == ["Cola", "Rice", "Water"]
        assert names(svc.list_items(category="BEVERAGE")) == ["Cola", "Water"]
        assert names(svc.list_items(destination="RESTAURANT")) == ["Rice", "Water"]

    def test_low_stock_and_overview(self, env):
        svc, store, _ = env
        empty = svc.create_item(ItemCreateRequest(name="Rice", min_stock=5,
                                                  unit_cost=Decimal("2"))).data
        low = svc.create_item(ItemCreateRequest(name="Soap", min_stock=5,
                                                unit_cost=Decimal("1.5"))).data
        full = svc.create_item(ItemCreateRequest(name="Tea", min_stock=5,
                                                 unit_cost=Decimal("3"))).data
        store.update(entities.INVENTORY_ITEMS, low["id"], {"quantity": 4})
        store.update(entities.INVENTORY_ITEMS, full["id"], {"quantity": 10})

        low_names = [r["name"] for r in svc.low_stock_items().data]
        assert low_names == ["Rice", "Soap"]

        overview = svc.stock_overview().data
        assert overview["total_items"] == 3
        assert (overview["in_stock"], overview["low_stock"], overview["out_of_stock"]) == (1, 1, 1)
        assert overview["stock_value"] == Decimal("36")
        assert empty["quantity"] == 0


# ══════════════════════════════════════════════════════════════
# SUPPLIERS
# ══════════════════════════════════════════════════════════════

class TestSuppliers:
    def test_create_supplier(self, env):
        svc, _, notifier = env
        supplier = _supplier(svc)
        assert supplier["total_orders"] == 0
        assert supplier["categories"] == ["FOOD"]
        assert notifier.last() == (SUCCESS, "Supplier Fresh Farms added.")

    @pytest.mark.parametrize("rating", [0, 6])
    def test_rating_bounds(self, env, rating):
        svc, store, _ = env
        outcome = svc.create_supplier(SupplierCreateRequest(name="X", rating=rating))
        assert outcome.reason.code == ReasonCode.INVALID_RATING
        assert store.count(entities.SUPPLIERS) == 0

    def test_update_supplier(self, env):
        svc, _, _ = env
        supplier = _supplier(svc)
        outcome = svc.update_supplier(supplier["id"], {"rating": 5, "categories": ("FOOD", "SNACKS")})
        assert outcome.data["rating"] == 5
        assert outcome.data["categories"] == ["FOOD", "SNACKS"]

    def test_update_supplier_bad_rating(self, env):
        svc, _, _ = env
        supplier = _supplier(svc)
        assert svc.update_supplier(supplier["id"], {"rating": 9}).reason.code == \
            ReasonCode.INVALID_RATING

    def test_total_orders_not_editable(self, env):
        svc, _, _ = env
        supplier = _supplier(svc)
        assert svc.update_supplier(supplier["id"], {"total_orders": 9}).reason.code == \
            ReasonCode.INVALID_REQUEST

    def test_list_and_delete(self, env):
        svc, _, _ = env
        _supplier(svc, "Zeta Linen")
        alpha = _supplier(svc, "Alpha Foods")
        assert [s["name"] for s in svc.list_suppliers().data] == ["Alpha Foods", "Zeta Linen"]
        assert svc.delete_supplier(alpha["id"]).ok
        assert svc.delete_supplier(alpha["id"]).reason.code == ReasonCode.SUPPLIER_NOT_FOUND
