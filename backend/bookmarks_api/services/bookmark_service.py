"""
Bookmarks API — Bookmark Service (Business Logic)
==================================================

What:  List, get, create, update and delete bookmarks.
Why:   Keeps validation, timestamp stamping and not-found handling out of the
       HTTP layer.
How:   Depends only on the BookmarkStore protocol, injected at construction.
       Every operation returns a Result; the routes map it to HTTP.
Who:   Built per request by get_bookmark_service() and called by
       routes/bookmarks.py.

Operation flow:
    create:  validate → stamp created_at → store.insert
    update:  validate → store.find_by_id → replace fields, stamp updated_at → store.save
    delete:  store.find_by_id → store.delete
    get:     store.find_by_id → BookmarkInfo projection
    list:    store.find_all_paged → PageResponse

Validation runs before any store call, so a rejected payload never touches
the store (and an invalid update of a missing id reports the validation
problem, not the 404).

Concurrency:
    update/delete load then write without a lock. Two concurrent updates of
    the same id can overwrite each other; the last save wins.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from bookmarks_api.database import get_db_session
from bookmarks_api.models.bookmark import Bookmark
from bookmarks_api.repositories.interfaces import BookmarkPage, BookmarkStore
from bookmarks_api.repositories.sqlalchemy_store import SqlAlchemyBookmarkStore
from bookmarks_api.schemas.bookmark import (
    BookmarkInfo,
    BookmarkResponse,
    PageParams,
    PageResponse,
)
from bookmarks_api.services.results import Result, ServiceError
from bookmarks_api.services.validation import validate_bookmark_fields

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class BookmarkService:
    """
    Business logic layer for bookmark operations.

    Args:
        store: Record Store the service reads from and writes to
        clock: Source of timestamps for created_at/updated_at
    """

    def __init__(
        self,
        store: BookmarkStore,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._store = store
        self._clock = clock

    async def list(self, params: PageParams) -> Result[PageResponse]:
        page = await self._store.find_all_paged(params)
        return Result.success(self._to_page_response(page))

    async def get(self, bookmark_id: int) -> Result[BookmarkInfo]:
        bookmark = await self._store.find_by_id(bookmark_id)
        if bookmark is None:
            return Result.failure(ServiceError.not_found())
        return Result.success(BookmarkInfo.model_validate(bookmark))

    async def create(
        self, title: Optional[str], url: Optional[str]
    ) -> Result[BookmarkResponse]:
        """
        Validate and insert a new bookmark.

        Returns:
            Result with the stored bookmark (id assigned), or a VALIDATION
            error listing every empty field. Nothing is inserted on failure.
        """
        field_errors = validate_bookmark_fields(title, url)
        if field_errors:
            return Result.failure(ServiceError.validation(field_errors))

        bookmark = Bookmark(title=title, url=url, created_at=self._clock())
        saved = await self._store.insert(bookmark)
        logger.info("Bookmark %s created", saved.id)
        return Result.success(BookmarkResponse.model_validate(saved))

    async def update(
        self, bookmark_id: int, title: Optional[str], url: Optional[str]
    ) -> Result[BookmarkResponse]:
        """
        Replace title/url of an existing bookmark and stamp updated_at.

        Returns:
            Result with the updated bookmark, a VALIDATION error (checked
            first, store untouched), or NOT_FOUND.
        """
        field_errors = validate_bookmark_fields(title, url)
        if field_errors:
            return Result.failure(ServiceError.validation(field_errors))

        bookmark = await self._store.find_by_id(bookmark_id)
        if bookmark is None:
            return Result.failure(ServiceError.not_found())

        bookmark.title = title
        bookmark.url = url
        bookmark.updated_at = self._clock()

        saved = await self._store.save(bookmark)
        logger.info("Bookmark %s updated", bookmark_id)
        return Result.success(BookmarkResponse.model_validate(saved))

    async def delete(self, bookmark_id: int) -> Result[None]:
        bookmark = await self._store.find_by_id(bookmark_id)
        if bookmark is None:
            return Result.failure(ServiceError.not_found())

        await self._store.delete(bookmark)
        logger.info("Bookmark %s deleted", bookmark_id)
        return Result.success()

    @staticmethod
    def _to_page_response(page: BookmarkPage) -> PageResponse:
        return PageResponse(
            content=[BookmarkResponse.model_validate(b) for b in page.items],
            number=page.page,
            size=page.size,
            total_elements=page.total,
            total_pages=page.total_pages,
            number_of_elements=len(page.items),
            first=page.is_first,
            last=page.is_last,
            empty=not page.items,
        )


# ── Dependency Factories ──────────────────────────────────────────────────
# Tests replace get_bookmark_store through app.dependency_overrides.

def get_bookmark_store(
    db: AsyncSession = Depends(get_db_session),
) -> BookmarkStore:
    """FastAPI DI factory for the request-scoped Record Store."""
    return SqlAlchemyBookmarkStore(db)


def get_bookmark_service(
    store: BookmarkStore = Depends(get_bookmark_store),
) -> BookmarkService:
    """FastAPI DI factory for BookmarkService."""
    return BookmarkService(store)
