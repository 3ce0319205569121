# shared fixtures for backend api tests
# provides mock db, sample practitioner/session/stats documents, a fixed clock, and httpx test client

import json
from datetime import datetime
from unittest.mock import MagicMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from bloom.main import app
from bloom.services.db import get_db
from bloom.dependencies import get_clock


# test ids
PRACTITIONER_ID = "11111111-2222-3333-4444-555555555555"
CLIENT_JK_ID = "client-jk"
CLIENT_AR_ID = "client-ar"
CLIENT_SP_ID = "client-sp"

# fixed "now" for router tests: 11:00 am on a wednesday
NOW = datetime(2025, 6, 11, 11, 0)
TODAY = NOW.replace(hour=0, minute=0)


# sample documents (as they'd appear from mongodb)

PRACTITIONER_DOC = {
    "_id": PRACTITIONER_ID,
    "display_name": "Dr. Zoe Semmler",
    "email": "zoe@bloom.example",
    "specializations": json.dumps(["Anxiety", "Trauma"]),
    "timezone": None,
}

CLIENT_DOCS = [
    {
        "_id": CLIENT_JK_ID,
        "practitioner_id": PRACTITIONER_ID,
        "initials": "JK",
        "first_name": "Jordan",
        "last_name": "Kim",
        "presenting_issues": json.dumps(["anxiety", "work stress"]),
        "mhcp_remaining_sessions": 6,
        "mhcp_total_sessions": 10,
        "relationship_months": 4,
    },
    {
        "_id": CLIENT_AR_ID,
        "practitioner_id": PRACTITIONER_ID,
        "initials": None,
        "first_name": "Alex",
        "last_name": "Rivera",
        "presenting_issues": "[not json",
        "mhcp_remaining_sessions": None,
        "mhcp_total_sessions": None,
        "relationship_months": None,
    },
    {
        "_id": CLIENT_SP_ID,
        "practitioner_id": PRACTITIONER_ID,
        "initials": "SP",
        "first_name": "Sam",
        "last_name": "Patel",
        "presenting_issues": json.dumps(["grief"]),
        "mhcp_remaining_sessions": 2,
        "mhcp_total_sessions": 10,
        "relationship_months": 12,
    },
]

SESSION_DOCS = [
    {
        "_id": "session-0900",
        "practitioner_id": PRACTITIONER_ID,
        "client_id": CLIENT_JK_ID,
        "scheduled_start_time": TODAY.replace(hour=9),
        "session_number": 5,
        "status": "completed",
        "location_type": "in-person",
    },
    {
        "_id": "session-1300",
        "practitioner_id": PRACTITIONER_ID,
        "client_id": CLIENT_SP_ID,
        "scheduled_start_time": TODAY.replace(hour=13),
        "session_number": 12,
        "status": "scheduled",
        "location_type": "telehealth",
    },
    {
        "_id": "session-1030",
        "practitioner_id": PRACTITIONER_ID,
        "client_id": CLIENT_AR_ID,
        "scheduled_start_time": TODAY.replace(hour=10, minute=30),
        "session_number": 3,
        "status": "scheduled",
        "location_type": None,
    },
    # different day, must not show up
    {
        "_id": "session-tomorrow",
        "practitioner_id": PRACTITIONER_ID,
        "client_id": CLIENT_JK_ID,
        "scheduled_start_time": datetime(2025, 6, 12, 9, 0),
        "session_number": 6,
        "status": "scheduled",
        "location_type": "in-person",
    },
    # client record missing, dropped by the join
    {
        "_id": "session-orphan",
        "practitioner_id": PRACTITIONER_ID,
        "client_id": "client-deleted",
        "scheduled_start_time": TODAY.replace(hour=15),
        "session_number": 1,
        "status": "scheduled",
        "location_type": "in-person",
    },
]

WEEKLY_DOC = {
    "practitioner_id": PRACTITIONER_ID,
    "week_start": datetime(2025, 6, 9),
    "week_end": datetime(2025, 6, 15),
    "completed_sessions": 12,
    "scheduled_sessions": 8,
    "total_sessions": 22,
    "weekly_session_target": None,
    "earned_revenue": "2640.00",
    "weekly_revenue_target": "6000.00",
    "no_shows": 1,
    "cancellations": 2,
}

MONTHLY_DOC = {
    "practitioner_id": PRACTITIONER_ID,
    "earned_revenue": "3000.00",
    "projected_revenue": "1500.50",
    "monthly_revenue_target": None,
    "completed_sessions": 14,
    "scheduled_sessions": 9,
    "avg_session_value": None,
    "medicare_revenue": "2000",
    "private_revenue": "1000",
    "dva_revenue": None,
    "workcover_revenue": "n/a",
    "ndis_revenue": 0,
}

UPCOMING_DOC = {
    "practitioner_id": PRACTITIONER_ID,
    "tomorrow_sessions": 5,
    "remaining_this_week": 8,
    "next_week_sessions": 21,
}

MHCP_DOC = {"practitioner_id": PRACTITIONER_ID, "clients_mhcp_ending": 3}

SYNC_DOC = {
    "practitioner_id": PRACTITIONER_ID,
    "is_connected": False,
    "last_successful_sync": datetime(2025, 6, 11, 8, 0),
    "last_sync_attempt": datetime(2025, 6, 11, 10, 55),
    "last_error_message": "Upstream rate limit exceeded",
    "pending_changes": 4,
    "updated_at": datetime(2025, 6, 11, 10, 55),
}


# async cursor mock

class AsyncCursorMock:
    """mock for motor's async cursor: supports async for and chained methods"""

    def __init__(self, data=None):
        self._data = data or []
        self._index = 0

    def sort(self, *args, **kwargs):
        return self

    def skip(self, n):
        self._data = self._data[n:]
        return self

    def limit(self, n):
        self._data = self._data[:n]
        return self

    def __aiter__(self):
        self._index = 0
        return self

    async def __anext__(self):
        if self._index >= len(self._data):
            raise StopAsyncIteration
        item = self._data[self._index]
        self._index += 1
        return item

    async def to_list(self, length=None):
        if length is not None:
            return self._data[:length]
        return self._data


class MockCollection:
    """mock for a motor collection with async methods"""

    def __init__(self, data=None):
        self._data = data or []
        self.inserted = []

    def find(self, query=None, projection=None):
        # basic query filtering
        results = self._data
        if query:
            results = [d for d in results if self._matches(d, query)]
        return AsyncCursorMock(results)

    async def find_one(self, query=None, projection=None):
        if not query:
            return self._data[0] if self._data else None
        for doc in self._data:
            if self._matches(doc, query):
                return doc
        return None

    async def insert_one(self, doc):
        self._data.append(doc)
        self.inserted.append(doc)
        result = MagicMock()
        result.inserted_id = doc.get("_id")
        return result

    async def update_one(self, query, update, upsert=False):
        result = MagicMock()
        result.modified_count = 0
        for doc in self._data:
            if self._matches(doc, query):
                doc.update(update.get("$set", {}))
                result.modified_count = 1
                return result
        if upsert:
            doc = dict(query)
            doc.update(update.get("$set", {}))
            self._data.append(doc)
        return result

    async def create_index(self, *args, **kwargs):
        return "mock_index"

    def _matches(self, doc, query):
        """basic mongodb query matching for tests"""
        for key, value in query.items():
            doc_val = doc.get(key)
            if isinstance(value, dict):
                for op, operand in value.items():
                    if op == "$in" and doc_val not in operand:
                        return False
                    if op == "$gte" and (doc_val is None or doc_val < operand):
                        return False
                    if op == "$lt" and (doc_val is None or doc_val >= operand):
                        return False
            elif doc_val != value:
                return False
        return True


class MockDatabase:
    """mock database that mimics the Database class"""

    def __init__(self):
        self.practitioners = MockCollection([PRACTITIONER_DOC.copy()])
        self.clients = MockCollection([doc.copy() for doc in CLIENT_DOCS])
        self.sessions = MockCollection([doc.copy() for doc in SESSION_DOCS])
        self.weekly_stats = MockCollection([WEEKLY_DOC.copy()])
        self.monthly_stats = MockCollection([MONTHLY_DOC.copy()])
        self.upcoming_stats = MockCollection([UPCOMING_DOC.copy()])
        self.mhcp_ending_soon = MockCollection([MHCP_DOC.copy()])
        self.sync_status = MockCollection([SYNC_DOC.copy()])

    async def connect(self):
        pass

    async def close(self):
        pass


@pytest.fixture
def mock_db():
    """create a fresh mock database for each test"""
    return MockDatabase()


@pytest.fixture
def empty_db():
    """a practitioner with nothing synced yet: no sessions, no views"""
    database = MockDatabase()
    for name in ("clients", "sessions", "weekly_stats", "monthly_stats",
                 "upcoming_stats", "mhcp_ending_soon", "sync_status"):
        setattr(database, name, MockCollection([]))
    return database


def _client_for(database):
    async def override_get_db():
        return database

    def override_get_clock():
        return lambda: NOW

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = override_get_clock
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest_asyncio.fixture
async def client(mock_db):
    """httpx async test client with mocked db and clock fixed at NOW"""
    async with _client_for(mock_db) as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def empty_client(empty_db):
    async with _client_for(empty_db) as ac:
        yield ac
    app.dependency_overrides.clear()
