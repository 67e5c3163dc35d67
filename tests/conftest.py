"""
Shared fixtures: an in-memory record store and a recording notifier wired into
the real FastAPI app through a dependency override. No MongoDB or network.
"""

from __future__ import annotations

import itertools
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from contact_api.api.v1.endpoints.contact import get_contact_handler
from contact_api.core.contact_handler import ContactSubmissionHandler
from contact_api.core.errors import PersistenceError
from contact_api.core.notifier import NotifierResult
from contact_api.main import app


class InMemoryRecordStore:
    def __init__(self):
        self.records = {}
        self.inserts = []
        self.fail_with = None
        self._ids = itertools.count(1)
        self._clock = datetime(2026, 1, 1, tzinfo=timezone.utc)

    def _check(self):
        if self.fail_with:
            raise PersistenceError(self.fail_with)

    async def insert(self, document):
        self._check()
        record_id = str(next(self._ids))
        self._clock += timedelta(seconds=1)
        self.inserts.append(dict(document))
        self.records[record_id] = {"id": record_id, **document, "created_at": self._clock}
        return record_id

    async def list_all(self):
        self._check()
        ordered = sorted(self.records.values(), key=lambda r: r["created_at"], reverse=True)
        return [{**r, "created_at": r["created_at"].isoformat()} for r in ordered]

    async def delete_by_id(self, record_id):
        self._check()
        return 1 if self.records.pop(record_id, None) else 0


class RecordingNotifier:
    def __init__(self):
        self.calls = []
        self.fail = False

    async def notify(self, submission):
        self.calls.append(submission)
        if self.fail:
            return NotifierResult(delivered=False, error="connection refused")
        return NotifierResult(delivered=True, status_code=200)


@pytest.fixture
def store():
    return InMemoryRecordStore()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def handler(notifier, store):
    return ContactSubmissionHandler(notifier, store)


@pytest.fixture
def app_client(handler):
    app.dependency_overrides[get_contact_handler] = lambda: handler
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_contact_handler, None)


@pytest.fixture
def valid_form():
    return {
        "name": "Jane Doe",
        "email": "jane@example.com",
        "phone": "555-1234",
        "message": "Hello",
    }
