# Middleware package init
"""
Bookmarks API — Middleware Package
===================================

Middleware Chain (order matters):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    Request ID runs first so the access log line and every error handler can
    read the correlation ID from request_id_var.
"""
