"""Product database table model."""

from decimal import Decimal

from sqlmodel import Field

from src.catalog.entities._base import EntityTable


class ProductTable(EntityTable, table=True):
    """Database persistence model for products."""

    __tablename__ = "products"

    name: str = Field(max_length=255, nullable=False)
    price: Decimal = Field(max_digits=12, decimal_places=2, nullable=False)
    stock: int = Field(default=0, nullable=False)
    category_id: int = Field(foreign_key="categories.id", nullable=False, index=True)
