"""Entities organized by business concept.

Each entity has its own package containing:
- entity.py: Domain model
- table.py: Database persistence model
- repository.py: In-memory and relational data access
"""

from .service.category import Category, CategoryTable
from .service.product import Product, ProductTable

__all__ = [
    "Category",
    "CategoryTable",
    "Product",
    "ProductTable",
]
