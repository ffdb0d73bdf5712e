"""Entity package: Product."""

from .entity import Product
from .repository import InMemoryProductRepository, SqlProductRepository
from .table import ProductTable

__all__ = [
    "InMemoryProductRepository",
    "Product",
    "ProductTable",
    "SqlProductRepository",
]
