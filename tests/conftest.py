# tests/conftest.py

"""
Pytest configuration and shared fixtures for testing.

The row and object stores are replaced by in-memory fakes that honour the
same filter semantics as core.row_store.RowStore (None = IS NULL, list = IN).
"""

import itertools
from collections import defaultdict
from datetime import datetime, timedelta, timezone
from typing import Generator, Optional

import pytest
from fastapi.testclient import TestClient

from main import create_app
from core.errors import StoreError
from core.object_store import StoredObject
from core.row_store import RowStore
from core.rate_limiter import reset_rate_limits
from dependencies.auth import SessionContext, get_current_user
from dependencies.stores import get_object_store, get_row_store


# ============================================================
# In-memory row store
# ============================================================
def _matches(row: dict, filters: Optional[dict]) -> bool:
    for column, value in (filters or {}).items():
        actual = row.get(column)
        if value is None:
            if actual is not None:
                return False
        elif isinstance(value, (list, tuple, set, frozenset)):
            if actual not in value:
                return False
        elif actual != value:
            return False
    return True


class InMemoryRowStore:
    def __init__(self):
        self.tables = defaultdict(list)
        self.failures = set()
        self.calls = []
        # PostgREST max_rows: each select returns at most this many rows
        self.max_rows = None
        self._ids = itertools.count(1)
        self._ticks = itertools.count(1)
        self._epoch = datetime(2026, 1, 1, tzinfo=timezone.utc)

    # -- test helpers --------------------------------------
    def fail(self, operation: str, table: str):
        self.failures.add((operation, table))

    def _check(self, operation: str, table: str):
        self.calls.append((operation, table))
        if (operation, table) in self.failures:
            raise StoreError()

    def _timestamp(self) -> str:
        return (self._epoch + timedelta(seconds=next(self._ticks))).isoformat()

    def seed(self, table: str, **row) -> dict:
        row.setdefault("id", f"{table}-{next(self._ids)}")
        row.setdefault("created_at", self._timestamp())
        self.tables[table].append(row)
        return dict(row)

    # -- RowStore interface --------------------------------
    def select(
        self,
        table,
        filters=None,
        order="created_at",
        desc=True,
        limit=None,
        columns="*",
        offset=None,
        ilike_any=None,
    ):
        self._check("select", table)
        rows = [dict(r) for r in self.tables[table] if _matches(r, filters)]
        if ilike_any:
            rows = [
                r for r in rows
                if any(term.lower() in str(r.get(column) or "").lower() for column, term in ilike_any.items())
            ]
        if order:
            rows.sort(key=lambda r: str(r.get(order) or ""), reverse=desc)
        if offset:
            rows = rows[offset:]
        if limit is not None:
            rows = rows[:limit]
        if self.max_rows is not None:
            rows = rows[:self.max_rows]
        if columns != "*":
            wanted = [c.strip() for c in columns.split(",")]
            rows = [{c: r.get(c) for c in wanted} for r in rows]
        return rows

    select_all = RowStore.select_all

    def get(self, table, row_id, filters=None):
        rows = self.select(table, {"id": row_id, **(filters or {})}, order=None, limit=1)
        return rows[0] if rows else None

    def count(self, table, filters=None):
        self._check("count", table)
        return sum(1 for r in self.tables[table] if _matches(r, filters))

    def insert(self, table, row):
        self._check("insert", table)
        return self.seed(table, **dict(row))

    def insert_many(self, table, rows):
        rows = list(rows)
        if not rows:
            return []
        self._check("insert", table)
        return [self.seed(table, **dict(r)) for r in rows]

    def update(self, table, row_id, patch, expect=None):
        self._check("update", table)
        updated = []
        for row in self.tables[table]:
            if row.get("id") == row_id and _matches(row, expect):
                row.update(patch)
                updated.append(dict(row))
        return updated

    def delete(self, table, row_id):
        self._check("delete", table)
        self.tables[table] = [r for r in self.tables[table] if r.get("id") != row_id]


# ============================================================
# In-memory object store
# ============================================================
class InMemoryObjectStore:
    def __init__(self):
        self.objects = {}
        self.fail_put = False
        self.fail_delete = False

    def put(self, path, data, content_type=None, last_modified=None):
        if self.fail_put:
            raise StoreError()
        self.objects[path] = StoredObject(
            path=path,
            size=len(data),
            last_modified=last_modified or datetime.now(timezone.utc),
        )

    def delete(self, path):
        if self.fail_delete:
            raise StoreError()
        self.objects.pop(path, None)

    def list(self, prefix):
        return [o for p, o in sorted(self.objects.items()) if p.startswith(prefix)]


# ============================================================
# Sessions
# ============================================================
def make_context(
    user_id: str = "user-1",
    role: str = "direction",
    tenant_id: Optional[str] = "school-1",
) -> SessionContext:
    return SessionContext(
        user_id=user_id,
        auth_user_id=f"auth-{user_id}",
        role=role,
        tenant_id=tenant_id,
        display_name=f"Test {role}",
        email=f"{user_id}@ecole.ci",
    )


@pytest.fixture
def ctx_factory():
    return make_context


@pytest.fixture
def store() -> InMemoryRowStore:
    return InMemoryRowStore()


@pytest.fixture
def objects() -> InMemoryObjectStore:
    return InMemoryObjectStore()


# ============================================================
# Application
# ============================================================
@pytest.fixture(scope="function")
def app(store, objects):
    """Create a test FastAPI application wired to the in-memory stores."""
    application = create_app()
    application.dependency_overrides[get_row_store] = lambda: store
    application.dependency_overrides[get_object_store] = lambda: objects
    yield application
    application.dependency_overrides = {}


@pytest.fixture(scope="function")
def client(app) -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def login_as(app):
    """Make every request run as the given session."""
    def _login(ctx: SessionContext) -> SessionContext:
        app.dependency_overrides[get_current_user] = lambda: ctx
        return ctx
    return _login


@pytest.fixture(autouse=True)
def reset_limits():
    """Reset rate limits before each test."""
    reset_rate_limits()
    yield
    reset_rate_limits()
