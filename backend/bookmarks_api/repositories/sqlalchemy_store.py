"""
Bookmarks API — SQLAlchemy Record Store
========================================

What:  BookmarkStore implementation over an async SQLAlchemy session.
How:   Uses the request-scoped session from get_db_session(). Writes are
       flushed (so ids are assigned immediately) and committed by the session
       dependency when the request succeeds.

Error Handling:
    SQLAlchemyError is logged with context and wrapped in DatabaseError,
    which the global handler renders as a generic 500.

Query plans:
    find_by_id:      primary key lookup
    find_all_paged:  SELECT ... ORDER BY <sort | id> LIMIT :size OFFSET :offset
                     plus SELECT count(*) for the page metadata
"""

import logging
from typing import Optional

from sqlalchemy import asc, desc, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bookmarks_api.exceptions import DatabaseError
from bookmarks_api.models.bookmark import Bookmark
from bookmarks_api.repositories.interfaces import BookmarkPage
from bookmarks_api.schemas.bookmark import PageParams

logger = logging.getLogger(__name__)


class SqlAlchemyBookmarkStore:
    """Relational Record Store for bookmarks."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def insert(self, bookmark: Bookmark) -> Bookmark:
        try:
            self._session.add(bookmark)
            await self._session.flush()  # Assigns the autoincrement id
        except SQLAlchemyError as e:
            logger.error("Database error inserting bookmark: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save the bookmark. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e
        logger.debug("Inserted bookmark %s", bookmark.id)
        return bookmark

    async def find_by_id(self, bookmark_id: int) -> Optional[Bookmark]:
        try:
            return await self._session.get(Bookmark, bookmark_id)
        except SQLAlchemyError as e:
            logger.error("Database error fetching bookmark %s: %s", bookmark_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the bookmark. Please try again.",
                context={"bookmark_id": bookmark_id},
            ) from e

    async def find_all_paged(self, params: PageParams) -> BookmarkPage:
        query = select(Bookmark)
        for order in params.sort:
            column = getattr(Bookmark, order.attribute)
            query = query.order_by(desc(column) if order.descending else asc(column))
        # id as the final tiebreaker keeps pages stable for equal sort keys
        query = query.order_by(asc(Bookmark.id))
        query = query.limit(params.size).offset(params.offset)

        try:
            result = await self._session.execute(query)
            items = list(result.scalars().all())

            count_result = await self._session.execute(
                select(func.count()).select_from(Bookmark)
            )
            total = count_result.scalar() or 0
        except SQLAlchemyError as e:
            logger.error("Database error listing bookmarks: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve bookmarks. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e

        return BookmarkPage(items=items, page=params.page, size=params.size, total=total)

    async def save(self, bookmark: Bookmark) -> Bookmark:
        try:
            self._session.add(bookmark)
            await self._session.flush()
        except SQLAlchemyError as e:
            logger.error("Database error updating bookmark %s: %s", bookmark.id, str(e))
            raise DatabaseError(
                message="Could not update the bookmark. Please try again.",
                context={"bookmark_id": bookmark.id},
            ) from e
        return bookmark

    async def delete(self, bookmark: Bookmark) -> None:
        try:
            await self._session.delete(bookmark)
            await self._session.flush()
        except SQLAlchemyError as e:
            logger.error("Database error deleting bookmark %s: %s", bookmark.id, str(e))
            raise DatabaseError(
                message="Could not delete the bookmark. Please try again.",
                context={"bookmark_id": bookmark.id},
            ) from e
