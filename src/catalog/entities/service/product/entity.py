"""Entity: Product."""

from decimal import Decimal

from pydantic import Field

from src.catalog.entities._base import Entity


class Product(Entity):
    """A sellable item that belongs to exactly one category.

    ``category_name`` is denormalized from the referenced category on reads;
    it is never written back to storage.
    """

    name: str = Field(default="", description="Product name")
    price: Decimal = Field(default=Decimal("0"), description="Unit price")
    stock: int = Field(default=0, description="Units in stock")
    category_id: int = Field(default=0, description="Identity of the owning category")
    category_name: str = Field(default="", description="Name of the owning category")
