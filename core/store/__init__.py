"""
PMS Record Store - Public API
===============================
The persistence collaborator every engine talks to.
The ORM-backed implementation lives in core.store.django_store and is
imported only by adapters, so engines stay importable without Django.
"""

from core.store.base import (
    ENTITIES,
    INVENTORY_ITEMS,
    INVOICES,
    ORDER_TEMPLATE_ITEMS,
    ORDER_TEMPLATES,
    PURCHASE_ORDER_ITEMS,
    PURCHASE_ORDERS,
    RESERVATIONS,
    ROOMS,
    SUPPLIERS,
    Record,
    RecordNotFound,
    RecordStore,
    StoreError,
    UnknownEntity,
    get_one,
)
from core.store.memory import InMemoryRecordStore

__all__ = [
    "ENTITIES",
    "INVENTORY_ITEMS",
    "INVOICES",
    "ORDER_TEMPLATE_ITEMS",
    "ORDER_TEMPLATES",
    "PURCHASE_ORDER_ITEMS",
    "PURCHASE_ORDERS",
    "RESERVATIONS",
    "ROOMS",
    "SUPPLIERS",
    "Record",
    "RecordNotFound",
    "RecordStore",
    "StoreError",
    "UnknownEntity",
    "get_one",
    "InMemoryRecordStore",
]
