# Routes package init
"""
Bookmarks API — API Routes Package
===================================

Route Inventory:
    - bookmarks.py:  GET    /api/bookmarks          (paged list)
                     GET    /api/bookmarks/{id}     (single bookmark)
                     POST   /api/bookmarks          (create)
                     PUT    /api/bookmarks/{id}     (update)
                     DELETE /api/bookmarks/{id}     (delete)
    - health.py:     GET    /health                 (service health check)

Routes stay thin: read the request, call the service, map the Result to a
status code and headers.
"""
