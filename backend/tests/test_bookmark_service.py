"""
Bookmarks API — Bookmark Service Unit Tests
============================================

What:  Tests for BookmarkService business logic (list, get, create, update, delete).
How:   Uses the in-memory Record Store from conftest.py (no database).

What we test:
    ✅ Create stamps created_at and inserts once
    ✅ Empty title/url returns VALIDATION and never touches the store
    ✅ Get/update/delete of a missing id returns NOT_FOUND
    ✅ Update replaces fields and stamps updated_at
    ✅ List returns page metadata
"""

from unittest.mock import AsyncMock

import pytest

from bookmarks_api.schemas.bookmark import PageParams
from bookmarks_api.services.bookmark_service import BookmarkService
from bookmarks_api.services.results import ErrorKind, FieldError


class TestBookmarkServiceCreate:
    """Tests for create."""

    @pytest.mark.asyncio
    async def test_create_success(self, store, fixed_clock):
        service = BookmarkService(store, clock=fixed_clock)

        result = await service.create("My Bookmark", "https://example.com")

        assert result.ok
        assert result.value.id == 1
        assert result.value.title == "My Bookmark"
        assert result.value.url == "https://example.com"
        assert result.value.created_at.isoformat() == "2024-01-15T12:00:00+00:00"
        assert result.value.updated_at is None
        assert store.writes == ["insert"]

    @pytest.mark.asyncio
    async def test_create_empty_title_rejected(self, store):
        service = BookmarkService(store)

        result = await service.create("", "https://example.com")

        assert not result.ok
        assert result.error.kind == ErrorKind.VALIDATION
        assert result.error.fields == [FieldError("title", "Title is required")]
        assert store.writes == []

    @pytest.mark.asyncio
    async def test_create_both_fields_missing_reports_both(self, store):
        service = BookmarkService(store)

        result = await service.create(None, "")

        assert [f.field for f in result.error.fields] == ["title", "url"]
        assert len(store) == 0

    @pytest.mark.asyncio
    async def test_create_never_calls_store_on_validation_failure(self):
        mock_store = AsyncMock()
        service = BookmarkService(mock_store)

        await service.create("Title", "")

        mock_store.insert.assert_not_awaited()
        mock_store.find_by_id.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_ids_are_not_reused_after_delete(self, store):
        service = BookmarkService(store)
        first = (await service.create("a", "https://a.example")).value
        await service.delete(first.id)

        second = (await service.create("b", "https://b.example")).value

        assert second.id != first.id


class TestBookmarkServiceGet:
    """Tests for get."""

    @pytest.mark.asyncio
    async def test_get_found(self, store):
        service = BookmarkService(store)
        created = (await service.create("Docs", "https://docs.example")).value

        result = await service.get(created.id)

        assert result.ok
        assert result.value.id == created.id
        assert result.value.title == "Docs"

    @pytest.mark.asyncio
    async def test_get_not_found(self, store):
        service = BookmarkService(store)

        result = await service.get(9999)

        assert not result.ok
        assert result.error.kind == ErrorKind.NOT_FOUND
        assert result.error.message == "Bookmark not found"


class TestBookmarkServiceUpdate:
    """Tests for update."""

    @pytest.mark.asyncio
    async def test_update_replaces_fields_and_stamps_updated_at(self, store, fixed_clock):
        service = BookmarkService(store, clock=fixed_clock)
        created = (await service.create("Initial Title", "https://example.com")).value

        result = await service.update(created.id, "Updated Title", "https://updated-url.com")

        assert result.ok
        assert result.value.title == "Updated Title"
        assert result.value.url == "https://updated-url.com"
        assert result.value.created_at == created.created_at
        assert result.value.updated_at > created.created_at
        assert store.writes == ["insert", "save"]

    @pytest.mark.asyncio
    async def test_update_not_found(self, store):
        service = BookmarkService(store)

        result = await service.update(42, "Title", "https://example.com")

        assert result.error.kind == ErrorKind.NOT_FOUND
        assert store.writes == []

    @pytest.mark.asyncio
    async def test_update_validation_leaves_record_untouched(self, store):
        service = BookmarkService(store)
        created = (await service.create("Keep", "https://keep.example")).value

        result = await service.update(created.id, "", "https://changed.example")

        assert result.error.kind == ErrorKind.VALIDATION
        stored = (await service.get(created.id)).value
        assert stored.title == "Keep"
        assert stored.url == "https://keep.example"
        assert stored.updated_at is None

    @pytest.mark.asyncio
    async def test_update_validation_checked_before_lookup(self, store):
        service = BookmarkService(store)

        result = await service.update(9999, "", "")

        assert result.error.kind == ErrorKind.VALIDATION


class TestBookmarkServiceDelete:
    """Tests for delete."""

    @pytest.mark.asyncio
    async def test_delete_removes_record(self, store):
        service = BookmarkService(store)
        created = (await service.create("Gone", "https://gone.example")).value

        result = await service.delete(created.id)

        assert result.ok
        assert result.value is None
        assert (await service.get(created.id)).error.kind == ErrorKind.NOT_FOUND

    @pytest.mark.asyncio
    async def test_delete_not_found(self, store):
        service = BookmarkService(store)

        result = await service.delete(123)

        assert result.error.kind == ErrorKind.NOT_FOUND
        assert "delete" not in store.writes


class TestBookmarkServiceList:
    """Tests for list with pagination."""

    @pytest.mark.asyncio
    async def test_list_empty(self, store):
        service = BookmarkService(store)

        result = await service.list(PageParams(page=0, size=20))

        assert result.value.content == []
        assert result.value.total_elements == 0
        assert result.value.total_pages == 0
        assert result.value.first is True
        assert result.value.last is True
        assert result.value.empty is True

    @pytest.mark.asyncio
    async def test_list_second_page(self, store):
        service = BookmarkService(store)
        for i in range(5):
            await service.create(f"Bookmark {i}", f"https://example.com/{i}")

        result = await service.list(PageParams(page=1, size=2))

        page = result.value
        assert [b.title for b in page.content] == ["Bookmark 2", "Bookmark 3"]
        assert page.number == 1
        assert page.total_elements == 5
        assert page.total_pages == 3
        assert page.number_of_elements == 2
        assert page.first is False
        assert page.last is False

    @pytest.mark.asyncio
    async def test_list_newest_first(self, store, fixed_clock):
        service = BookmarkService(store, clock=fixed_clock)
        for title in ("old", "middle", "new"):
            await service.create(title, "https://example.com")

        params = PageParams.from_query(sort=["createdAt,desc"])
        result = await service.list(params)

        assert [b.title for b in result.value.content] == ["new", "middle", "old"]
