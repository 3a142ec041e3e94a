"""
Bookmarks API — Record Store Layer
===================================

What:  Persistence behind a protocol the service depends on.

Inventory:
    - interfaces.py:        BookmarkStore protocol and the BookmarkPage value
    - sqlalchemy_store.py:  SqlAlchemyBookmarkStore over an AsyncSession

BookmarkService methods only talk to the BookmarkStore protocol. The FastAPI
dependency factories next to it in services/bookmark_service.py wire the SQL
store per request (get_bookmark_store); route tests override that dependency
with an in-memory fake.
"""
