"""
Product Catalog Backend: Product SQLAlchemy Model
=================================================

What:  ORM mapping of the `products` table.
Who:   Queried by ProductService; created in tests via `Base.metadata`.

The table is owned by the database: rows are inserted out of band and ids
are assigned by the store. This service only reads, replaces and deletes.
"""

from sqlalchemy import BigInteger, Numeric, Text
from sqlalchemy.orm import Mapped, mapped_column

from catalog.database import Base


class Product(Base):
    """
    One row of the products table.

    Query patterns:
        - Get by id:     SELECT ... WHERE id = :id        (primary key)
        - Search:        SELECT ... WHERE <0..4 filters>  ORDER BY id
        - Replace:       UPDATE ... SET name, category, price WHERE id = :id
        - Delete:        DELETE ... WHERE id = :id
    """

    __tablename__ = "products"

    # bound as int8: the handlers accept any 64-bit id
    id: Mapped[int] = mapped_column(BigInteger, primary_key=True)

    name: Mapped[str] = mapped_column(Text, nullable=False)

    category: Mapped[str] = mapped_column(Text, nullable=False)

    # numeric column read back as float (asyncpg would otherwise hand out Decimal)
    price: Mapped[float] = mapped_column(Numeric(asdecimal=False), nullable=False)

    def __repr__(self) -> str:
        return (
            f"<Product(id={self.id}, name='{self.name}', "
            f"category='{self.category}', price={self.price})>"
        )
