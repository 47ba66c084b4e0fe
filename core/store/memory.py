"""
PMS Record Store - In-Memory Implementation
=============================================
Dict-backed store used by tests and local wiring.

Follows the same contract as the ORM store: insertion order is the
default ordering, records handed out are copies, and ``atomic()``
restores a snapshot when the block raises.
"""

from __future__ import annotations

import copy
import logging
import threading
import uuid
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional

from core.store.base import ENTITIES, Record, RecordNotFound, UnknownEntity, split_lookup
from core.time.clock import Clock, SystemClock

logger = logging.getLogger("pms.store")


def _matches(record: Record, key: str, expected: Any) -> bool:
    field, lookup = split_lookup(key)
    value = record.get(field)
    if lookup == "exact":
        return _same(value, expected)
    if lookup == "in":
        return any(_same(value, candidate) for candidate in expected)
    if lookup == "isnull":
        return (value is None) == bool(expected)
    if value is None:
        return False
    if lookup == "gte":
        return value >= expected
    if lookup == "lte":
        return value <= expected
    if lookup == "gt":
        return value > expected
    return value < expected


def _same(value: Any, expected: Any) -> bool:
    # ids may be held as UUID objects or as their string form
    if isinstance(value, uuid.UUID) or isinstance(expected, uuid.UUID):
        return str(value) == str(expected)
    return value == expected


def _sort(rows: List[Record], order_by: Iterable[str]) -> List[Record]:
    for key in reversed(list(order_by)):
        descending = key.startswith("-")
        field = key.lstrip("-")
        rows.sort(
            key=lambda r: (r.get(field) is None, r.get(field)),
            reverse=descending,
        )
    return rows


class InMemoryRecordStore:
    """Simple in-memory record store for testing and bootstrap."""

    def __init__(
        self,
        *,
        clock: Optional[Clock] = None,
        id_factory: Optional[Callable[[], Any]] = None,
    ) -> None:
        self._clock = clock or SystemClock()
        self._id_factory = id_factory or (lambda: str(uuid.uuid4()))
        self._tables: Dict[str, Dict[str, Record]] = {name: {} for name in ENTITIES}
        self._lock = threading.RLock()

    def _table(self, entity: str) -> Dict[str, Record]:
        table = self._tables.get(entity)
        if table is None:
            raise UnknownEntity(f"Unknown entity '{entity}'.")
        return table

    # ── reads ─────────────────────────────────────────────────

    def query(
        self,
        entity: str,
        filters: Optional[Mapping[str, Any]] = None,
        *,
        order_by: Iterable[str] = (),
    ) -> List[Record]:
        with self._lock:
            rows = [
                copy.deepcopy(r) for r in self._table(entity).values()
                if all(_matches(r, k, v) for k, v in (filters or {}).items())
            ]
        return _sort(rows, order_by)

    # ── writes ────────────────────────────────────────────────

    def insert(self, entity: str, fields: Mapping[str, Any]) -> Record:
        with self._lock:
            table = self._table(entity)
            record = dict(fields)
            record.setdefault("id", self._id_factory())
            record.setdefault("created_at", self._clock.now_utc())
            table[str(record["id"])] = record
            logger.debug("insert %s id=%s", entity, record["id"])
            return copy.deepcopy(record)

    def update(self, entity: str, record_id: Any,
               fields: Mapping[str, Any]) -> Record:
        with self._lock:
            record = self._table(entity).get(str(record_id))
            if record is None:
                raise RecordNotFound(entity, record_id)
            record.update(fields)
            logger.debug("update %s id=%s fields=%s", entity, record_id, sorted(fields))
            return copy.deepcopy(record)

    def delete(self, entity: str, record_id: Any) -> None:
        with self._lock:
            if self._table(entity).pop(str(record_id), None) is None:
                raise RecordNotFound(entity, record_id)
            logger.debug("delete %s id=%s", entity, record_id)

    @contextmanager
    def atomic(self) -> Iterator[None]:
        with self._lock:
            snapshot = copy.deepcopy(self._tables)
            try:
                yield
            except BaseException:
                self._tables = snapshot
                logger.debug("atomic block rolled back")
                raise

    # ── testing helpers ───────────────────────────────────────

    def count(self, entity: str) -> int:
        with self._lock:
            return len(self._table(entity))

    def truncate(self) -> None:
        with self._lock:
            for table in self._tables.values():
                table.clear()
