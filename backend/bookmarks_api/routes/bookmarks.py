"""
Bookmarks API — Bookmark Route Handlers
========================================

What:  CRUD and paged listing under /api/bookmarks.
How:   Extracts path/query/body data, calls BookmarkService, and turns the
       returned Result into an HTTP response.

Result → HTTP:
    ok (list/get/update)   → 200 with body
    ok (create)            → 201, Location: <absolute URL of the new bookmark>
    ok (delete)            → 204, no body
    NOT_FOUND              → NotFoundError   → 404 {"error": "Bookmark not found"}
    VALIDATION             → ValidationError → 400 {"error": ..., "fields": [...]}

The exceptions are raised here, at the boundary, and rendered by the global
handlers in main.py.
"""

import logging
from typing import List, Optional, TypeVar

from fastapi import APIRouter, Depends, Path, Query, Request, Response, status

from bookmarks_api.exceptions import NotFoundError, ValidationError
from bookmarks_api.schemas.bookmark import (
    MAX_BIGINT,
    BookmarkInfo,
    BookmarkPayload,
    BookmarkResponse,
    ErrorResponse,
    PageParams,
    PageResponse,
    ValidationErrorResponse,
)
from bookmarks_api.services.bookmark_service import BookmarkService, get_bookmark_service
from bookmarks_api.services.results import ErrorKind, Result

logger = logging.getLogger(__name__)

T = TypeVar("T")

router = APIRouter(prefix="/api/bookmarks", tags=["Bookmarks"])

# Ids are BIGINT; anything outside the signed 64-bit range is a 400, never a store call
BookmarkId = Path(
    ge=-MAX_BIGINT - 1,
    le=MAX_BIGINT,
    description="Bookmark identifier",
)


def unwrap(result: Result[T], resource_id: Optional[int] = None) -> T:
    """Returns the result value or raises the exception for its error kind."""
    if result.ok:
        return result.value
    error = result.error
    logger.debug("Service returned %s for bookmark %s", error.kind.value, resource_id)
    if error.kind == ErrorKind.NOT_FOUND:
        raise NotFoundError(message=error.message, resource_id=resource_id)
    if error.kind == ErrorKind.VALIDATION:
        raise ValidationError(
            message=error.message,
            fields=[{"field": f.field, "message": f.message} for f in error.fields],
        )
    raise RuntimeError(f"Unhandled service error kind: {error.kind}")


@router.get(
    "",
    response_model=PageResponse,
    summary="List bookmarks with pagination",
    description=(
        "Returns one zero-based page of bookmarks. `sort` takes `property[,asc|desc]` "
        "and may repeat; without it bookmarks come back in insertion order."
    ),
)
async def list_bookmarks(
    response: Response,
    page: int = Query(default=0, description="Zero-based page index (negative → 0)"),
    size: Optional[int] = Query(default=None, description="Page size (clamped to 1..max)"),
    sort: List[str] = Query(default=[], description="e.g. createdAt,desc"),
    service: BookmarkService = Depends(get_bookmark_service),
) -> PageResponse:
    params = PageParams.from_query(page=page, size=size, sort=sort)
    result = unwrap(await service.list(params))
    response.headers["X-Total-Count"] = str(result.total_elements)
    return result


@router.get(
    "/{bookmark_id}",
    response_model=BookmarkInfo,
    responses={404: {"description": "Bookmark not found", "model": ErrorResponse}},
    summary="Get a single bookmark by ID",
)
async def get_bookmark(
    bookmark_id: int = BookmarkId,
    service: BookmarkService = Depends(get_bookmark_service),
) -> BookmarkInfo:
    return unwrap(await service.get(bookmark_id), resource_id=bookmark_id)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=BookmarkResponse,
    responses={400: {"description": "Empty title or url", "model": ValidationErrorResponse}},
    summary="Create a bookmark",
)
async def create_bookmark(
    payload: BookmarkPayload,
    request: Request,
    response: Response,
    service: BookmarkService = Depends(get_bookmark_service),
) -> BookmarkResponse:
    """
    Create a bookmark from `{title, url}`.

    The Location header points at GET /api/bookmarks/{id} for the new record,
    built from the incoming request's base URL.
    """
    bookmark = unwrap(await service.create(payload.title, payload.url))
    response.headers["Location"] = str(
        request.url_for("get_bookmark", bookmark_id=bookmark.id)
    )
    return bookmark


@router.put(
    "/{bookmark_id}",
    response_model=BookmarkResponse,
    responses={
        400: {"description": "Empty title or url", "model": ValidationErrorResponse},
        404: {"description": "Bookmark not found", "model": ErrorResponse},
    },
    summary="Replace a bookmark's title and url",
)
async def update_bookmark(
    payload: BookmarkPayload,
    bookmark_id: int = BookmarkId,
    service: BookmarkService = Depends(get_bookmark_service),
) -> BookmarkResponse:
    result = await service.update(bookmark_id, payload.title, payload.url)
    return unwrap(result, resource_id=bookmark_id)


@router.delete(
    "/{bookmark_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={404: {"description": "Bookmark not found", "model": ErrorResponse}},
    summary="Delete a bookmark",
)
async def delete_bookmark(
    bookmark_id: int = BookmarkId,
    service: BookmarkService = Depends(get_bookmark_service),
) -> Response:
    unwrap(await service.delete(bookmark_id), resource_id=bookmark_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
