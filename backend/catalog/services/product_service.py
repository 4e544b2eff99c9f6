"""
Product Catalog Backend: Product Service (Data Access Layer)
============================================================

What:  The four statements this service ever issues against `products`:
       select-by-id, select-with-filters, update-by-id, delete-by-id.
How:   SQLAlchemy constructs; every value reaches the driver as a bound
       parameter. Each method takes the request's AsyncSession and runs
       exactly one statement on it.
Who:   Called by the route handlers in `routes/products.py`.

Error handling:
    Zero rows on a by-id operation  → NotFoundError  (404)
    Anything the driver raises      → logged here, re-raised as DatabaseError (500)
                                      carrying the static per-operation message
"""

import logging
from typing import List

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.exceptions import DatabaseError, NotFoundError
from catalog.models.product import Product
from catalog.schemas.product import ProductFilters, ProductPayload, ProductResponse

logger = logging.getLogger(__name__)


class ProductService:
    """
    Stateless data access for products.

    Responsibilities:
        - get_product():      single row by id
        - search_products():  rows matching any subset of the four filters
        - update_product():   full replace of name/category/price by id
        - delete_product():   remove one row by id
    """

    async def get_product(self, db: AsyncSession, product_id: int) -> ProductResponse:
        """
        Retrieve a single product by id.

        Raises:
            NotFoundError: No row has this id (→ 404)
            DatabaseError: Query failed or the row does not map to a Product (→ 500)
        """
        try:
            result = await db.execute(select(Product).where(Product.id == product_id))
            product = result.scalar_one_or_none()

            if product is None:
                raise NotFoundError(resource_id=product_id)

            return ProductResponse.model_validate(product)

        except NotFoundError:
            raise
        except Exception as e:
            logger.error("Database error fetching product %s: %s", product_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to retrieve product.",
                context={"product_id": product_id, "error_type": type(e).__name__},
            )

    def build_search_query(self, filters: ProductFilters):
        """
        Build the SELECT for a filtered search.

        Each active filter contributes one condition holding its own bound
        value, so the statement binds exactly as many parameters as there
        are active filters. Conditions are ANDed; no filters selects every row.
        """
        conditions = []
        if filters.name is not None:
            conditions.append(Product.name.like(f"%{filters.name}%"))
        if filters.category is not None:
            conditions.append(Product.category == filters.category)
        if filters.min_price is not None:
            conditions.append(Product.price >= filters.min_price)
        if filters.max_price is not None:
            conditions.append(Product.price <= filters.max_price)

        query = select(Product)
        if conditions:
            query = query.where(*conditions)
        return query.order_by(Product.id)

    async def search_products(
        self, db: AsyncSession, filters: ProductFilters
    ) -> List[ProductResponse]:
        """
        List products matching the given filters.

        Returns an empty list when nothing matches.

        Raises:
            DatabaseError: Query failed (→ 500)
        """
        try:
            result = await db.execute(self.build_search_query(filters))
            return [ProductResponse.model_validate(p) for p in result.scalars().all()]

        except Exception as e:
            logger.error("Database error searching products: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to retrieve products.",
                context={"filters": filters.model_dump(), "error_type": type(e).__name__},
            )

    async def update_product(
        self, db: AsyncSession, product_id: int, payload: ProductPayload
    ) -> ProductResponse:
        """
        Replace name, category and price of one product.

        Every column is written, including ones the client left at their
        defaults. The return value echoes the request; the row is not re-read.

        Raises:
            NotFoundError: No row has this id (→ 404)
            DatabaseError: Statement or commit failed (→ 500)
        """
        try:
            result = await db.execute(
                update(Product)
                .where(Product.id == product_id)
                .values(name=payload.name, category=payload.category, price=payload.price)
                .execution_options(synchronize_session=False)
            )
            await db.commit()

            if result.rowcount == 0:
                raise NotFoundError(resource_id=product_id)

            logger.info("Product %s updated", product_id)
            return ProductResponse(id=product_id, **payload.model_dump())

        except NotFoundError:
            raise
        except Exception as e:
            logger.error("Database error updating product %s: %s", product_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to update product.",
                context={"product_id": product_id, "error_type": type(e).__name__},
            )

    async def delete_product(self, db: AsyncSession, product_id: int) -> None:
        """
        Delete one product by id.

        Raises:
            NotFoundError: No row has this id (→ 404)
            DatabaseError: Statement or commit failed (→ 500)
        """
        try:
            result = await db.execute(
                delete(Product)
                .where(Product.id == product_id)
                .execution_options(synchronize_session=False)
            )
            await db.commit()

            if result.rowcount == 0:
                raise NotFoundError(resource_id=product_id)

            logger.info("Product %s deleted", product_id)

        except NotFoundError:
            raise
        except Exception as e:
            logger.error("Database error deleting product %s: %s", product_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to delete product.",
                context={"product_id": product_id, "error_type": type(e).__name__},
            )


product_service = ProductService()
