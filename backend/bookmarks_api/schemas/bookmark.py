"""
Bookmarks API — Pydantic Request/Response Schemas
==================================================

What:  Pydantic models defining the API contract.
Why:   Automatic serialization and OpenAPI doc generation.
How:   FastAPI uses these models to parse request bodies, serialize responses,
       and generate Swagger/OpenAPI documentation.

Wire naming:
    Attributes are snake_case in Python and camelCase on the wire
    (created_at ↔ createdAt). FastAPI serializes response models by alias.

Design Decision:
    The request payload accepts missing/null fields on purpose. Emptiness is
    checked by services/validation.py so that a missing title and an empty
    title both produce the same 400 response with a field message, instead of
    FastAPI's generic schema error.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

from bookmarks_api.config import settings

logger = logging.getLogger(__name__)

# Largest signed 64-bit value; ids and row offsets are BIGINT in the database
MAX_BIGINT = 2**63 - 1

_CAMEL_CONFIG = {
    "alias_generator": to_camel,
    "populate_by_name": True,
    "from_attributes": True,
}


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class BookmarkPayload(BaseModel):
    """Body of POST /api/bookmarks and PUT /api/bookmarks/{id}."""
    title: Optional[str] = Field(default=None, description="Bookmark title (required, non-empty)")
    url: Optional[str] = Field(default=None, description="Bookmark URL (required, non-empty)")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class BookmarkResponse(BaseModel):
    """
    What:  Full bookmark representation.
    Who:   Returned by POST (201), PUT (200) and as list page items.
    """
    id: int = Field(description="Server-assigned identifier")
    title: str = Field(description="Bookmark title")
    url: str = Field(description="Bookmark URL")
    created_at: datetime = Field(description="Creation timestamp (UTC ISO 8601)")
    updated_at: Optional[datetime] = Field(
        default=None,
        description="Last update timestamp (UTC ISO 8601), null if never updated"
    )

    model_config = _CAMEL_CONFIG

    @field_validator("created_at", "updated_at")
    @classmethod
    def assume_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        """SQLite hands back naive datetimes; every stored timestamp is UTC."""
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


class BookmarkInfo(BookmarkResponse):
    """
    What:  Read projection of a bookmark.
    Who:   Returned by GET /api/bookmarks/{id}.

    Same fields as BookmarkResponse; kept as its own type so the read path can
    diverge from the write path without touching either contract.
    """


class PageResponse(BaseModel):
    """
    What:  One page of bookmarks plus pagination metadata.
    Who:   Returned by GET /api/bookmarks.

    Page numbers are zero-based.
    """
    content: List[BookmarkResponse] = Field(description="Bookmarks on this page")
    number: int = Field(description="Zero-based page index")
    size: int = Field(description="Requested page size")
    total_elements: int = Field(description="Total number of bookmarks")
    total_pages: int = Field(description="Total number of pages")
    number_of_elements: int = Field(description="Number of bookmarks on this page")
    first: bool = Field(description="Whether this is the first page")
    last: bool = Field(description="Whether this is the last page")
    empty: bool = Field(description="Whether this page has no bookmarks")

    model_config = _CAMEL_CONFIG


# ══════════════════════════════════════════════════════════════════════════
# Query Parameter Models
# ══════════════════════════════════════════════════════════════════════════


class SortOrder(BaseModel):
    """One `property,direction` sort clause, resolved to a model attribute."""
    attribute: str
    descending: bool = False


# Wire property name → Bookmark attribute
SORTABLE_PROPERTIES = {
    "id": "id",
    "title": "title",
    "url": "url",
    "createdAt": "created_at",
    "created_at": "created_at",
    "updatedAt": "updated_at",
    "updated_at": "updated_at",
}


def parse_sort(values: List[str]) -> List[SortOrder]:
    """
    Parses `sort` query values such as `createdAt,desc` or `title`.

    Unknown properties are dropped (logged at DEBUG); a direction other than
    asc/desc falls back to ascending. `?sort=title,desc&sort=id` produces two
    clauses, applied in order.
    """
    orders: List[SortOrder] = []
    for raw in values:
        parts = [p.strip() for p in raw.split(",") if p.strip()]
        if not parts:
            continue
        attribute = SORTABLE_PROPERTIES.get(parts[0])
        if attribute is None:
            logger.debug("Ignoring unknown sort property '%s'", parts[0])
            continue
        descending = len(parts) > 1 and parts[1].lower() == "desc"
        orders.append(SortOrder(attribute=attribute, descending=descending))
    return orders


class PageParams(BaseModel):
    """
    What:  Pagination and ordering constraints handed to the Record Store.

    Bounds handling (clamping, never rejecting):
        page < 0              → 0
        size < 1              → settings.default_page_size
        size > max_page_size  → settings.max_page_size
        page * size > MAX_BIGINT → largest page whose offset still fits
    Empty sort → insertion order (id ascending).
    """
    page: int = 0
    size: int = 20
    sort: List[SortOrder] = Field(default_factory=list)

    @property
    def offset(self) -> int:
        return self.page * self.size

    @classmethod
    def from_query(
        cls,
        page: Optional[int] = None,
        size: Optional[int] = None,
        sort: Optional[List[str]] = None,
    ) -> "PageParams":
        if page is None or page < 0:
            page = 0
        if size is None or size < 1:
            size = settings.default_page_size
        size = min(size, settings.max_page_size)
        page = min(page, MAX_BIGINT // size)
        return cls(page=page, size=size, sort=parse_sort(sort or []))


# ══════════════════════════════════════════════════════════════════════════
# Error / Health Response Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """404 / 500 body: {"error": "Bookmark not found"}."""
    error: str = Field(description="Human-readable error description")


class FieldErrorModel(BaseModel):
    field: str = Field(description="Offending request field")
    message: str = Field(description="What is wrong with it")


class ValidationErrorResponse(BaseModel):
    """400 body with one entry per failed field."""
    error: str = Field(default="Validation failed")
    fields: List[FieldErrorModel] = Field(default_factory=list)


class HealthResponse(BaseModel):
    """
    What:  Health check response showing service and database status.
    Who:   Returned by GET /health for monitoring and load balancer checks.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
