"""
Bookmarks API — Test Configuration (conftest.py)
=================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixtures:
    ├── store:        InMemoryBookmarkStore (fresh per test)
    ├── fixed_clock:  deterministic clock for the service
    ├── test_app:     FastAPI app with the Record Store dependency overridden
    └── test_client:  HTTPX AsyncClient for API endpoint testing
"""

import itertools
import os
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

# Override settings for testing BEFORE any app imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from bookmarks_api.models.bookmark import Bookmark
from bookmarks_api.repositories.interfaces import BookmarkPage
from bookmarks_api.schemas.bookmark import PageParams


# ══════════════════════════════════════════════════════════════════════════
# In-Memory Record Store
# ══════════════════════════════════════════════════════════════════════════

class InMemoryBookmarkStore:
    """
    BookmarkStore fake backed by a dict.

    Ids come from a counter and are never reused, like the database sequence.
    `writes` records every mutating call so tests can assert that rejected
    requests never reached the store.
    """

    def __init__(self) -> None:
        self._rows: Dict[int, Bookmark] = {}
        self._ids = itertools.count(1)
        self.writes: List[str] = []

    async def insert(self, bookmark: Bookmark) -> Bookmark:
        bookmark.id = next(self._ids)
        self._rows[bookmark.id] = bookmark
        self.writes.append("insert")
        return bookmark

    async def find_by_id(self, bookmark_id: int) -> Optional[Bookmark]:
        return self._rows.get(bookmark_id)

    async def find_all_paged(self, params: PageParams) -> BookmarkPage:
        rows = sorted(self._rows.values(), key=lambda b: b.id)
        # Stable sorts applied last-clause-first give multi-key ordering
        for order in reversed(params.sort):
            rows.sort(
                key=lambda b: _sort_key(getattr(b, order.attribute)),
                reverse=order.descending,
            )
        items = rows[params.offset:params.offset + params.size]
        return BookmarkPage(items=items, page=params.page, size=params.size, total=len(rows))

    async def save(self, bookmark: Bookmark) -> Bookmark:
        self._rows[bookmark.id] = bookmark
        self.writes.append("save")
        return bookmark

    async def delete(self, bookmark: Bookmark) -> None:
        del self._rows[bookmark.id]
        self.writes.append("delete")

    def __len__(self) -> int:
        return len(self._rows)


def _sort_key(value):
    # NULLs first, as PostgreSQL does for ascending order
    return (value is not None, value)


# ══════════════════════════════════════════════════════════════════════════
# Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def store() -> InMemoryBookmarkStore:
    return InMemoryBookmarkStore()


@pytest.fixture
def fixed_clock():
    """
    Clock that advances one minute per call, starting 2024-01-15T12:00Z.

    Lets tests tell created_at and updated_at apart without sleeping.
    """
    ticks = itertools.count()
    start = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)
    return lambda: start + timedelta(minutes=next(ticks))


@pytest.fixture
def test_app(store):
    """A fresh app whose Record Store dependency is the in-memory fake."""
    from bookmarks_api.main import create_app
    from bookmarks_api.services.bookmark_service import get_bookmark_store

    app = create_app()
    app.dependency_overrides[get_bookmark_store] = lambda: store
    yield app
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def test_client(test_app):
    """
    HTTPX AsyncClient routed straight into the app (no server needed).

    Usage:
        async def test_get(test_client):
            response = await test_client.get("/api/bookmarks/1")
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
