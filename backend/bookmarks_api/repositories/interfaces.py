from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Optional, Protocol

from bookmarks_api.models.bookmark import Bookmark
from bookmarks_api.schemas.bookmark import PageParams


@dataclass
class BookmarkPage:
    """A bounded slice of the bookmark collection plus its position."""

    items: List[Bookmark] = field(default_factory=list)
    page: int = 0
    size: int = 20
    total: int = 0

    @property
    def total_pages(self) -> int:
        if self.size <= 0:
            return 0
        return math.ceil(self.total / self.size)

    @property
    def is_first(self) -> bool:
        return self.page == 0

    @property
    def is_last(self) -> bool:
        return self.page + 1 >= self.total_pages


class BookmarkStore(Protocol):
    """Record Store contract consumed by BookmarkService.

    Implementations assign ids on insert and never reuse them. Failures
    surface as DatabaseError.
    """

    async def insert(self, bookmark: Bookmark) -> Bookmark:  # pragma: no cover - Protocol
        ...

    async def find_by_id(self, bookmark_id: int) -> Optional[Bookmark]:  # pragma: no cover - Protocol
        ...

    async def find_all_paged(self, params: PageParams) -> BookmarkPage:  # pragma: no cover - Protocol
        ...

    async def save(self, bookmark: Bookmark) -> Bookmark:  # pragma: no cover - Protocol
        """Persists changes to an already-stored bookmark."""
        ...

    async def delete(self, bookmark: Bookmark) -> None:  # pragma: no cover - Protocol
        ...
