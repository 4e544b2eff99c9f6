"""
Product Catalog Backend: Middleware Package
===========================================

Middleware Chain:
    Request → [Request ID] → [Logging] → Route Handler

    Request ID runs first so the access log line carries the correlation id;
    the id is echoed in the X-Request-ID response header.
"""
