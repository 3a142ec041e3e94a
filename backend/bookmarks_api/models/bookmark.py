"""
Bookmarks API — Bookmark SQLAlchemy Model
==========================================

What:  ORM model representing the `bookmarks` table.
Who:   Used by the Record Store implementations, the service, and Alembic.

Table Design:
    - Integer autoincrement primary key: assigned by the database, never
      reused (sqlite_autoincrement keeps SQLite from recycling rowids)
    - title / url: NOT NULL; emptiness is rejected before any insert
    - created_at: stamped by the service on create
    - updated_at: NULL until the first update, then stamped on every update

Timestamps:
    Both columns are timezone-aware on PostgreSQL. SQLite stores them as text
    without an offset and reads them back naive; BookmarkResponse re-attaches
    UTC, so the API always emits "Z" timestamps.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import BigInteger, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from bookmarks_api.database import Base


class Bookmark(Base):
    """
    A saved link.

    Lifecycle:
        1. Created by BookmarkService.create (created_at stamped)
        2. Mutated only by BookmarkService.update (title/url replaced,
           updated_at refreshed)
        3. Removed by BookmarkService.delete (hard delete)
    """

    __tablename__ = "bookmarks"

    # BIGINT on PostgreSQL; plain INTEGER on SQLite so it aliases the rowid
    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
        comment="Server-assigned identifier",
    )

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Display title",
    )

    url: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Bookmarked URL",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        comment="When this bookmark was created (UTC)",
    )

    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
        comment="When this bookmark was last updated (UTC), NULL if never",
    )

    __table_args__ = {"sqlite_autoincrement": True}

    def __repr__(self) -> str:
        return f"<Bookmark(id={self.id}, title='{self.title}', url='{self.url}')>"
