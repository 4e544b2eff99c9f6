"""
Product Catalog Backend: Product Route Handlers
===============================================

What:  GET /product, GET /products, PUT /product, DELETE /product.
How:   Each handler parses its own query/body input (so malformed values
       produce 400 with our messages, not FastAPI's 422), then delegates the
       single statement to ProductService. Errors are raised as application
       exceptions and rendered by the global handlers in `main.py`.
"""

import logging
import re
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, Response
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.database import get_db_session
from catalog.exceptions import ValidationError
from catalog.schemas.product import (
    ErrorResponse,
    ProductFilters,
    ProductPayload,
    ProductResponse,
)
from catalog.services.product_service import ProductService, product_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Products"])

# Optionally signed ASCII decimal integer
_PRODUCT_ID_RE = re.compile(r"[+-]?[0-9]+")
_INT64_MIN, _INT64_MAX = -(2**63), 2**63 - 1
# Signed ASCII decimal with optional fraction and exponent
_PRICE_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")

_ERRORS_BY_ID = {
    400: {"description": "Invalid product ID or body", "model": ErrorResponse},
    404: {"description": "Product not found", "model": ErrorResponse},
    500: {"description": "Server error", "model": ErrorResponse},
}


def get_product_service() -> ProductService:
    return product_service


# ══════════════════════════════════════════════════════════════════════════
# Input parsing
# ══════════════════════════════════════════════════════════════════════════

def parse_product_id(raw: Optional[str]) -> int:
    """
    Parse the `id` query parameter.

    Accepts an optionally signed run of decimal digits that fits in 64 bits.
    Missing, empty or anything else raises ValidationError.
    """
    if raw is None or not _PRODUCT_ID_RE.fullmatch(raw):
        raise ValidationError(message="Invalid product ID.", field="id")
    value = int(raw)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise ValidationError(message="Invalid product ID.", field="id")
    return value


def parse_price(raw: Optional[str], field: str, message: str) -> Optional[float]:
    """
    Parse an optional price filter; absent or empty means no filter.

    Only plain decimal notation is accepted: no whitespace, digit
    separators, non-ASCII digits, NaN or infinities.
    """
    if raw is None or raw == "":
        return None
    if not _PRICE_RE.fullmatch(raw):
        raise ValidationError(message=message, field=field)
    return float(raw)


def parse_payload(body: bytes) -> ProductPayload:
    try:
        return ProductPayload.model_validate_json(body)
    except PydanticValidationError as e:
        logger.warning("Rejected update body (%d errors)", e.error_count())
        raise ValidationError(message="Failed to parse request body.", field="body")


# ══════════════════════════════════════════════════════════════════════════
# Handlers
# ══════════════════════════════════════════════════════════════════════════

@router.get(
    "/product",
    response_model=ProductResponse,
    responses=_ERRORS_BY_ID,
    summary="Get a single product by id",
)
async def get_product(
    product_id: Optional[str] = Query(default=None, alias="id", description="Product id"),
    db: AsyncSession = Depends(get_db_session),
    service: ProductService = Depends(get_product_service),
) -> ProductResponse:
    pid = parse_product_id(product_id)
    return await service.get_product(db, pid)


@router.get(
    "/products",
    response_model=List[ProductResponse],
    responses={
        400: {"description": "Non-numeric price filter", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Search products",
    description=(
        "Returns every product matching all supplied filters. `name` is a substring "
        "match, `category` an exact match, `min_price`/`max_price` inclusive bounds. "
        "An empty array is returned when nothing matches."
    ),
)
async def search_products(
    name: Optional[str] = Query(default=None, description="Substring of the product name"),
    category: Optional[str] = Query(default=None, description="Exact category"),
    min_price: Optional[str] = Query(default=None, description="Inclusive lower price bound"),
    max_price: Optional[str] = Query(default=None, description="Inclusive upper price bound"),
    db: AsyncSession = Depends(get_db_session),
    service: ProductService = Depends(get_product_service),
) -> List[ProductResponse]:
    filters = ProductFilters(
        name=name or None,
        category=category or None,
        min_price=parse_price(min_price, "min_price", "Invalid minimum price."),
        max_price=parse_price(max_price, "max_price", "Invalid maximum price."),
    )
    return await service.search_products(db, filters)


@router.put(
    "/product",
    response_model=ProductResponse,
    responses=_ERRORS_BY_ID,
    summary="Replace a product's name, category and price",
    description=(
        "Full replace: fields missing from the body or sent as null are stored as their defaults "
        "(empty string, 0). The response echoes the submitted product."
    ),
)
async def update_product(
    request: Request,
    product_id: Optional[str] = Query(default=None, alias="id", description="Product id"),
    db: AsyncSession = Depends(get_db_session),
    service: ProductService = Depends(get_product_service),
) -> ProductResponse:
    pid = parse_product_id(product_id)
    payload = parse_payload(await request.body())
    return await service.update_product(db, pid, payload)


@router.delete(
    "/product",
    status_code=204,
    response_class=Response,
    responses=_ERRORS_BY_ID,
    summary="Delete a product",
)
async def delete_product(
    product_id: Optional[str] = Query(default=None, alias="id", description="Product id"),
    db: AsyncSession = Depends(get_db_session),
    service: ProductService = Depends(get_product_service),
) -> Response:
    pid = parse_product_id(product_id)
    await service.delete_product(db, pid)
    return Response(status_code=204)
