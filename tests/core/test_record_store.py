"""
Tests for the in-memory record store and its lookup semantics.
"""

from datetime import date, datetime, timezone

import pytest

from core.store import base as entities
from core.store.base import RecordNotFound, UnknownEntity, get_one, split_lookup
from core.store.memory import InMemoryRecordStore
from core.time.clock import FixedClock

NOW = datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def store():
    return InMemoryRecordStore(clock=FixedClock(NOW))


class TestSplitLookup:
    def test_bare_field_is_exact(self):
        assert split_lookup("check_in") == ("check_in", "exact")

    def test_known_suffix(self):
        assert split_lookup("check_in__lte") == ("check_in", "lte")

    def test_unknown_suffix_stays_in_field(self):
        assert split_lookup("room__number") == ("room__number", "exact")


class TestInMemoryRecordStore:
    def test_insert_assigns_id_and_created_at(self, store):
        room = store.insert(entities.ROOMS, {"room_number": "101"})
        assert room["id"]
        assert room["created_at"] == NOW

    def test_returned_records_are_copies(self, store):
        room = store.insert(entities.ROOMS, {"room_number": "101", "amenities": ["tv"]})
        room["amenities"].append("minibar")
        assert get_one(store, entities.ROOMS, room["id"])["amenities"] == ["tv"]

    def test_filters(self, store):
        store.insert(entities.RESERVATIONS, {"status": "CONFIRMED", "check_in": date(2025, 3, 1)})
        store.insert(entities.RESERVATIONS, {"status": "CANCELLED", "check_in": date(2025, 3, 5)})
        store.insert(entities.RESERVATIONS, {"status": "PENDING", "check_in": date(2025, 3, 9)})

        assert len(store.query(entities.RESERVATIONS, {"status": "CONFIRMED"})) == 1
        assert len(store.query(entities.RESERVATIONS,
                               {"status__in": ["CONFIRMED", "PENDING"]})) == 2
        assert len(store.query(entities.RESERVATIONS,
                               {"check_in__gte": date(2025, 3, 5)})) == 2
        assert len(store.query(entities.RESERVATIONS,
                               {"check_in__lt": date(2025, 3, 5)})) == 1

    def test_isnull(self, store):
        store.insert(entities.RESERVATIONS, {"room_id": None})
        store.insert(entities.RESERVATIONS, {"room_id": "r-1"})
        assert len(store.query(entities.RESERVATIONS, {"room_id__isnull": True})) == 1
        assert len(store.query(entities.RESERVATIONS, {"room_id__isnull": False})) == 1

    def test_order_by(self, store):
        for number in ("201", "101", "102"):
            store.insert(entities.ROOMS, {"room_number": number})
        asc = [r["room_number"] for r in store.query(entities.ROOMS, order_by=("room_number",))]
        desc = [r["room_number"] for r in store.query(entities.ROOMS, order_by=("-room_number",))]
        assert asc == ["101", "102", "201"]
        assert desc == ["201", "102", "101"]

    def test_update_touches_named_fields_only(self, store):
        room = store.insert(entities.ROOMS, {"room_number": "101", "status": "AVAILABLE"})
        updated = store.update(entities.ROOMS, room["id"], {"status": "RESERVED"})
        assert updated["status"] == "RESERVED"
        assert updated["room_number"] == "101"

    def test_update_missing_raises(self, store):
        with pytest.raises(RecordNotFound):
            store.update(entities.ROOMS, "missing", {"status": "RESERVED"})

    def test_delete(self, store):
        room = store.insert(entities.ROOMS, {"room_number": "101"})
        store.delete(entities.ROOMS, room["id"])
        assert get_one(store, entities.ROOMS, room["id"]) is None
        with pytest.raises(RecordNotFound):
            store.delete(entities.ROOMS, room["id"])

    def test_unknown_entity(self, store):
        with pytest.raises(UnknownEntity):
            store.query("guests")

    def test_get_one_with_none_id(self, store):
        assert get_one(store, entities.ROOMS, None) is None

    def test_atomic_commits(self, store):
        with store.atomic():
            store.insert(entities.ROOMS, {"room_number": "101"})
        assert store.count(entities.ROOMS) == 1

    def test_atomic_rolls_back_on_error(self, store):
        room = store.insert(entities.ROOMS, {"room_number": "101", "status": "AVAILABLE"})
        with pytest.raises(RuntimeError):
            with store.atomic():
                store.update(entities.ROOMS, room["id"], {"status": "OCCUPIED"})
                store.insert(entities.ROOMS, {"room_number": "102"})
                raise RuntimeError("halfway")
        assert store.count(entities.ROOMS) == 1
        assert get_one(store, entities.ROOMS, room["id"])["status"] == "AVAILABLE"

    def test_truncate(self, store):
        store.insert(entities.ROOMS, {"room_number": "101"})
        store.truncate()
        assert store.count(entities.ROOMS) == 0
