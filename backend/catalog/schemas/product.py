"""
Product Catalog Backend: Pydantic Request/Response Schemas
==========================================================

What:  The API contract for the product endpoints.
How:   FastAPI serializes responses through these models; the update handler
       decodes its body with `ProductPayload.model_validate_json`.

Schemas stay separate from the ORM model so the wire format does not
follow the table definition automatically.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class ProductResponse(BaseModel):
    """
    A single product as returned by GET /product, GET /products and PUT /product.

    Example:
        {"id": 1, "name": "Widget", "category": "Tools", "price": 9.99}
    """
    id: int = Field(description="Product identifier assigned by the database")
    name: str = Field(description="Product name")
    category: str = Field(description="Product category")
    price: float = Field(description="Unit price")

    model_config = {"from_attributes": True}


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class ProductPayload(BaseModel):
    """
    Body of PUT /product: the full replacement for name, category and price.

    Omitted fields, and fields sent as `null`, take the defaults below and
    overwrite the stored value. Types are strict (a string price is rejected,
    an integer price is accepted) and `NaN`/`Infinity` are refused. Unknown
    keys, including `id`, are ignored.
    """
    name: str = ""
    category: str = ""
    price: float = 0.0

    model_config = ConfigDict(strict=True, extra="ignore", allow_inf_nan=False)

    @field_validator("name", "category", "price", mode="before")
    @classmethod
    def null_as_default(cls, v: Any, info: ValidationInfo) -> Any:
        """Treats an explicit `null` like an omitted field."""
        if v is None:
            return cls.model_fields[info.field_name].default
        return v


class ProductFilters(BaseModel):
    """Parsed filters for GET /products. `None` means the filter is inactive."""
    name: Optional[str] = None
    category: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None


# ══════════════════════════════════════════════════════════════════════════
# Error / Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Body of every 4xx/5xx response.

    Example:
        {"error": "Invalid product ID."}
    """
    error: str = Field(description="Human-readable error message")


class HealthResponse(BaseModel):
    """Returned by GET /health."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
