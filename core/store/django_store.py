"""
PMS Record Store - Django ORM Implementation
==============================================
Relational backend for the record-store contract.

Every ORM failure is re-raised as StoreError so engines only ever
handle one persistence error type. ``atomic()`` is Django's
``transaction.atomic``; nested blocks become savepoints.
"""

from __future__ import annotations

import logging
from typing import Any, ContextManager, Iterable, List, Mapping, Optional

from django.core.exceptions import ValidationError
from django.db import DatabaseError, transaction

from core.store import base
from core.store.base import Record, RecordNotFound, StoreError, UnknownEntity
from core.store.models import (
    InventoryItem,
    Invoice,
    OrderTemplate,
    OrderTemplateItem,
    PurchaseOrder,
    PurchaseOrderItem,
    Reservation,
    Room,
    Supplier,
)

logger = logging.getLogger("pms.store")

MODEL_BY_ENTITY = {
    base.ROOMS: Room,
    base.RESERVATIONS: Reservation,
    base.INVENTORY_ITEMS: InventoryItem,
    base.SUPPLIERS: Supplier,
    base.PURCHASE_ORDERS: PurchaseOrder,
    base.PURCHASE_ORDER_ITEMS: PurchaseOrderItem,
    base.INVOICES: Invoice,
    base.ORDER_TEMPLATES: OrderTemplate,
    base.ORDER_TEMPLATE_ITEMS: OrderTemplateItem,
}

_BACKEND_ERRORS = (DatabaseError, ValidationError)


class DjangoRecordStore:
    """Record store over the Django ORM."""

    def _model(self, entity: str):
        model = MODEL_BY_ENTITY.get(entity)
        if model is None:
            raise UnknownEntity(f"Unknown entity '{entity}'.")
        return model

    def _fetch(self, model, record_id: Any) -> Record:
        return dict(model.objects.filter(pk=record_id).values().get())

    def query(
        self,
        entity: str,
        filters: Optional[Mapping[str, Any]] = None,
        *,
        order_by: Iterable[str] = (),
    ) -> List[Record]:
        model = self._model(entity)
        try:
            qs = model.objects.filter(**dict(filters or {}))
            ordering = list(order_by)
            if ordering:
                qs = qs.order_by(*ordering)
            return [dict(row) for row in qs.values()]
        except _BACKEND_ERRORS as exc:
            logger.error("query %s failed: %s", entity, exc)
            raise StoreError(f"Failed to query {entity}.") from exc

    def insert(self, entity: str, fields: Mapping[str, Any]) -> Record:
        model = self._model(entity)
        try:
            obj = model.objects.create(**dict(fields))
            return self._fetch(model, obj.pk)
        except _BACKEND_ERRORS as exc:
            logger.error("insert %s failed: %s", entity, exc)
            raise StoreError(f"Failed to insert {entity}.") from exc

    def update(self, entity: str, record_id: Any,
               fields: Mapping[str, Any]) -> Record:
        model = self._model(entity)
        try:
            updated = model.objects.filter(pk=record_id).update(**dict(fields))
            if not updated:
                raise RecordNotFound(entity, record_id)
            return self._fetch(model, record_id)
        except _BACKEND_ERRORS as exc:
            logger.error("update %s id=%s failed: %s", entity, record_id, exc)
            raise StoreError(f"Failed to update {entity}.") from exc

    def delete(self, entity: str, record_id: Any) -> None:
        model = self._model(entity)
        try:
            deleted, _ = model.objects.filter(pk=record_id).delete()
        except _BACKEND_ERRORS as exc:
            logger.error("delete %s id=%s failed: %s", entity, record_id, exc)
            raise StoreError(f"Failed to delete {entity}.") from exc
        if not deleted:
            raise RecordNotFound(entity, record_id)

    def atomic(self) -> ContextManager[None]:
        return transaction.atomic()
