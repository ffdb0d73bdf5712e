"""Entity package: Category."""

from .entity import Category
from .repository import InMemoryCategoryRepository, SqlCategoryRepository
from .table import CategoryTable

__all__ = [
    "Category",
    "CategoryTable",
    "InMemoryCategoryRepository",
    "SqlCategoryRepository",
]
