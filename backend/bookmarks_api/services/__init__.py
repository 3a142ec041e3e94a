# Services package init
"""
Bookmarks API — Services Layer
===============================

Service Inventory:
    - BookmarkService (bookmark_service.py): list/get/create/update/delete
    - validation.py: explicit field checks run before any mutation
    - results.py: Result / ServiceError / ErrorKind returned by the service

Services depend on the BookmarkStore protocol only and never raise for
expected outcomes; the routes decide the HTTP status.
"""
