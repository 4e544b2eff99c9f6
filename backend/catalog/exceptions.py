"""
Product Catalog Backend: Exception Hierarchy
============================================

What:  Application exceptions raised by routes and services.
How:   Each exception carries a client-safe `message` and a `context` dict
       that is logged but never returned. Global handlers in `main.py`
       turn them into `{"error": message}` responses.

Exception Hierarchy:
    CatalogError (base)      → 500 Internal Server Error
    ├── ValidationError      → 400 Bad Request
    ├── NotFoundError        → 404 Not Found
    └── DatabaseError        → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class CatalogError(Exception):
    """
    Base exception for all catalog application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    status_code = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred.",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(CatalogError):
    """
    Raised when client input cannot be parsed.

    When:    Malformed product id, non-numeric price filter, bad JSON body.
    HTTP:    400 Bad Request
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed.",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(CatalogError):
    """
    Raised when a by-id operation matches or affects zero rows.

    HTTP:    404 Not Found
    """

    status_code = 404

    def __init__(
        self,
        resource: str = "Product",
        resource_id: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource} not found.", context=ctx)
        self.resource_id = resource_id


class DatabaseError(CatalogError):
    """
    Raised when a statement fails for any reason other than a missing row.

    What:    Connection loss, driver error, result that does not map to a Product.
    HTTP:    500 Internal Server Error

    The message is always one of the static per-operation messages; driver
    details go into `context` for the server log only.
    """

    def __init__(
        self,
        message: str = "A database error occurred.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
