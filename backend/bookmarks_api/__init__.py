"""
Bookmarks API — Application Package Initializer
================================================

What: Marks the `bookmarks_api` directory as a Python package.
Who:  Used by Alembic, pytest, and uvicorn (`uvicorn bookmarks_api.main:app`).

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP status codes, headers
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Validation, timestamps, results
    ├─────────────────────────────────────┤
    │     Repositories (Record Store)     │  ← BookmarkStore protocol + SQL store
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    └─────────────────────────────────────┘

    The service only knows the BookmarkStore protocol; the concrete store is
    injected per request, so tests can swap in an in-memory fake.
"""

__version__ = "1.0.0"
