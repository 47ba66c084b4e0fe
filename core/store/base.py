"""
PMS Record Store - Collaborator Contract
==========================================
The hosted relational backend is consumed as an opaque CRUD service.
Engines depend on this protocol only; they never import the ORM.

Records are plain dicts keyed by column name (foreign keys by their
``<name>_id`` column). Filters use Django lookup syntax so the same
filter dict works against the ORM and the in-memory store.
"""

from __future__ import annotations

from typing import Any, ContextManager, Dict, Iterable, List, Mapping, Optional, Protocol


# ══════════════════════════════════════════════════════════════
# ENTITY NAMES
# ══════════════════════════════════════════════════════════════

ROOMS = "rooms"
RESERVATIONS = "reservations"
INVENTORY_ITEMS = "inventory_items"
SUPPLIERS = "suppliers"
PURCHASE_ORDERS = "purchase_orders"
PURCHASE_ORDER_ITEMS = "purchase_order_items"
INVOICES = "invoices"
ORDER_TEMPLATES = "order_templates"
ORDER_TEMPLATE_ITEMS = "order_template_items"

ENTITIES = frozenset({
    ROOMS, RESERVATIONS, INVENTORY_ITEMS, SUPPLIERS,
    PURCHASE_ORDERS, PURCHASE_ORDER_ITEMS, INVOICES,
    ORDER_TEMPLATES, ORDER_TEMPLATE_ITEMS,
})

# Lookup suffixes understood by every store implementation.
LOOKUPS = frozenset({"in", "gte", "lte", "gt", "lt", "isnull"})

Record = Dict[str, Any]


# ══════════════════════════════════════════════════════════════
# ERRORS
# ══════════════════════════════════════════════════════════════

class StoreError(Exception):
    """Any failure of the persistence collaborator."""


class UnknownEntity(StoreError):
    pass


class RecordNotFound(StoreError):
    def __init__(self, entity: str, record_id: Any):
        super().__init__(f"{entity} record '{record_id}' not found.")
        self.entity = entity
        self.record_id = record_id


# ══════════════════════════════════════════════════════════════
# PROTOCOL
# ══════════════════════════════════════════════════════════════

class RecordStore(Protocol):
    """
    query  - all records of a type, optionally filtered/ordered; never
             raises on an empty result.
    insert - server assigns ``id`` and ``created_at``; returns the record.
    update - mutates the named fields only; returns the full record.
    delete - removes one record.
    atomic - all writes inside the block commit together or not at all.
    """

    def query(
        self,
        entity: str,
        filters: Optional[Mapping[str, Any]] = None,
        *,
        order_by: Iterable[str] = (),
    ) -> List[Record]:
        ...  # pragma: no cover

    def insert(self, entity: str, fields: Mapping[str, Any]) -> Record:
        ...  # pragma: no cover

    def update(self, entity: str, record_id: Any,
               fields: Mapping[str, Any]) -> Record:
        ...  # pragma: no cover

    def delete(self, entity: str, record_id: Any) -> None:
        ...  # pragma: no cover

    def atomic(self) -> ContextManager[None]:
        ...  # pragma: no cover


def get_one(store: RecordStore, entity: str, record_id: Any) -> Optional[Record]:
    """Fetch a single record by id, or None."""
    if record_id is None:
        return None
    rows = store.query(entity, {"id": record_id})
    return rows[0] if rows else None


def split_lookup(key: str) -> tuple[str, str]:
    """``'check_in__lte'`` → ``('check_in', 'lte')``; bare keys are ``exact``."""
    field, sep, lookup = key.rpartition("__")
    if sep and lookup in LOOKUPS:
        return field, lookup
    return key, "exact"
