"""Shared test fixtures for blogclient tests."""

import uuid
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from blogclient.core.errors import DuplicateEmail, StoreReadFailure, StoreWriteFailure
from blogclient.repositories.session_cache import LocalSessionCache
from blogclient.schemas.session import ActiveSession, SessionRecord
from blogclient.schemas.user import UserRecord
from blogclient.services.session_manager import SessionManager


# ─────────────────────────────────────────────────────────────────
# In-memory record store
# ─────────────────────────────────────────────────────────────────


class FakeUserRepository:
    """Dict-backed stand-in for UserRepository."""

    def __init__(self):
        self.rows: dict[uuid.UUID, UserRecord] = {}
        self.fail_writes = False

    async def get_by_id(self, user_id):
        return self.rows.get(user_id)

    async def get_by_email(self, email):
        return next((u for u in self.rows.values() if u.email == email), None)

    async def create(self, *, email, password_digest, full_name, gender=None, age=None, role="EDITOR"):
        if await self.get_by_email(email) is not None:
            raise DuplicateEmail()
        now = datetime.now(timezone.utc)
        record = UserRecord(
            id=uuid.uuid4(),
            email=email,
            password_digest=password_digest,
            full_name=full_name,
            gender=gender,
            age=age,
            role=role,
            created_at=now,
            updated_at=now,
        )
        self.rows[record.id] = record
        return record

    async def update(self, user_id, changes):
        if self.fail_writes:
            raise StoreWriteFailure("Update user failed: offline")
        if user_id not in self.rows:
            raise StoreWriteFailure("Update user failed: user not found")
        record = self.rows[user_id].model_copy(update=changes)
        self.rows[user_id] = record
        return record

    async def delete(self, user_id):
        self.rows.pop(user_id, None)


class FakeSessionRepository:
    """Dict-backed stand-in for SessionRepository, joined with the users fake."""

    def __init__(self, users: FakeUserRepository):
        self.users = users
        self.rows: dict[str, SessionRecord] = {}
        self.fail_reads = False
        self.fail_writes = False

    async def create(self, session):
        if self.fail_writes:
            raise StoreWriteFailure("Create session failed: offline")
        self.rows[session.token] = session
        return session

    async def get_active(self, token, now=None):
        if self.fail_reads:
            raise StoreReadFailure("Validate session failed: offline")
        row = self.rows.get(token)
        if row is None or not row.is_valid(now):
            return None
        user = self.users.rows.get(row.user_id)
        if user is None:
            return None
        return ActiveSession(**row.model_dump(), user=user.stripped())

    async def stamp_logout(self, token, when=None):
        if self.fail_writes:
            raise StoreWriteFailure("Stamp logout failed: offline")
        row = self.rows.get(token)
        if row is None or row.logout_time is not None:
            return False
        self.rows[token] = row.model_copy(update={"logout_time": when})
        return True

    async def list_for_user(self, user_id, limit=20):
        if self.fail_reads:
            raise StoreReadFailure("List sessions failed: offline")
        rows = [r for r in self.rows.values() if r.user_id == user_id]
        return sorted(rows, key=lambda r: r.created_at, reverse=True)[:limit]


class Clock:
    """Controllable clock passed to SessionManager; starts at the real time."""

    def __init__(self):
        self.now = datetime.now(timezone.utc).replace(microsecond=0)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


# ─────────────────────────────────────────────────────────────────
# Fixtures
# ─────────────────────────────────────────────────────────────────


@pytest.fixture
def clock():
    return Clock()


@pytest.fixture
def user_repo():
    return FakeUserRepository()


@pytest.fixture
def session_repo(user_repo):
    return FakeSessionRepository(user_repo)


@pytest.fixture
def cache_path(tmp_path):
    return tmp_path / "device" / "session.json"


@pytest.fixture
def make_manager(user_repo, session_repo, cache_path, clock):
    """
    Build a SessionManager on the shared store and device cache.

    Calling it again simulates an application restart: fresh in-memory
    context, same durable state.
    """

    def _make(path=None):
        return SessionManager(
            users=user_repo,
            sessions=session_repo,
            cache=LocalSessionCache(path or cache_path),
            clock=clock,
        )

    return _make


@pytest.fixture
def manager(make_manager):
    return make_manager()


# ─────────────────────────────────────────────────────────────────
# Supabase query chain
# ─────────────────────────────────────────────────────────────────


@pytest.fixture
def mock_query():
    query = MagicMock()
    # Builder methods return the builder itself; only execute() is awaited.
    for name in ("select", "insert", "update", "delete", "eq", "is_", "gt", "order", "limit"):
        getattr(query, name).return_value = query
    query.execute = AsyncMock(return_value=MagicMock(data=[]))
    return query


@pytest.fixture
def mock_client(mock_query):
    client = MagicMock()
    client.table.return_value = mock_query
    return client


@pytest.fixture
def sample_user_row():
    return {
        "id": str(uuid.uuid4()),
        "email": "a@x.com",
        "password_digest": "0" * 64,
        "full_name": "Alice",
        "gender": None,
        "age": None,
        "role": "EDITOR",
        "created_at": "2026-10-17T09:00:00+00:00",
        "updated_at": "2026-10-17T09:00:00+00:00",
    }
