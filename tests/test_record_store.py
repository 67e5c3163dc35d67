"""
MongoRecordStore against a minimal stand-in for a Motor collection.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone

import pytest
from bson import ObjectId
from pymongo.errors import ServerSelectionTimeoutError

from contact_api.core.errors import PersistenceError
from contact_api.db.record_store import MongoRecordStore, serialize_record


class FakeResult:
    def __init__(self, inserted_id=None, deleted_count=0):
        self.inserted_id = inserted_id
        self.deleted_count = deleted_count


class FakeCursor:
    def __init__(self, docs):
        self.docs = docs

    def sort(self, key, direction):
        self.docs = sorted(self.docs, key=lambda d: d[key], reverse=direction < 0)
        return self

    async def to_list(self, length=None):
        return list(self.docs)


class FakeCollection:
    def __init__(self):
        self.docs = []
        self.down = False

    def _check(self):
        if self.down:
            raise ServerSelectionTimeoutError("localhost:27017: connection refused")

    async def insert_one(self, doc):
        self._check()
        doc["_id"] = ObjectId()
        self.docs.append(dict(doc))
        return FakeResult(inserted_id=doc["_id"])

    def find(self, query):
        self._check()
        return FakeCursor(self.docs)

    async def delete_one(self, query):
        self._check()
        before = len(self.docs)
        self.docs = [d for d in self.docs if d["_id"] != query["_id"]]
        return FakeResult(deleted_count=before - len(self.docs))


@pytest.fixture
def collection():
    return FakeCollection()


@pytest.fixture
def mongo_store(collection):
    return MongoRecordStore(collection)


def test_insert_adds_created_at_and_returns_id(mongo_store, collection):
    document = {"name": "Jane", "email": "jane@example.com", "phone": "555", "message": "Hi"}
    record_id = asyncio.run(mongo_store.insert(document))

    assert ObjectId.is_valid(record_id)
    stored = collection.docs[0]
    assert isinstance(stored["created_at"], datetime)
    assert stored["name"] == "Jane"
    assert "_id" not in document


def test_list_all_orders_newest_first_and_serializes(mongo_store, collection):
    for day in (1, 3, 2):
        collection.docs.append({
            "_id": ObjectId(),
            "name": f"day {day}",
            "created_at": datetime(2026, 1, day, tzinfo=timezone.utc),
        })

    records = asyncio.run(mongo_store.list_all())

    assert [r["name"] for r in records] == ["day 3", "day 2", "day 1"]
    assert records[0]["created_at"] == "2026-01-03T00:00:00+00:00"
    assert all(isinstance(r["id"], str) and "_id" not in r for r in records)


def test_delete_by_id(mongo_store, collection):
    record_id = asyncio.run(mongo_store.insert({"name": "Jane"}))

    assert asyncio.run(mongo_store.delete_by_id(record_id)) == 1
    assert asyncio.run(mongo_store.delete_by_id(record_id)) == 0
    assert collection.docs == []


def test_delete_malformed_id_matches_nothing(mongo_store, collection):
    asyncio.run(mongo_store.insert({"name": "Jane"}))

    assert asyncio.run(mongo_store.delete_by_id("not-an-object-id")) == 0
    assert len(collection.docs) == 1


@pytest.mark.parametrize("operation", [
    lambda s: s.insert({"name": "Jane"}),
    lambda s: s.list_all(),
    lambda s: s.delete_by_id(str(ObjectId())),
])
def test_mongo_errors_become_persistence_errors(mongo_store, collection, operation):
    collection.down = True
    with pytest.raises(PersistenceError) as excinfo:
        asyncio.run(operation(mongo_store))
    assert "connection refused" in excinfo.value.message


def test_serialize_naive_datetime_as_utc():
    record = serialize_record({"_id": "abc", "created_at": datetime(2026, 5, 1, 12, 30)})
    assert record == {"id": "abc", "created_at": "2026-05-01T12:30:00+00:00"}
