"""Repository contracts and the shared backend plumbing."""

from .base import CategoryRepository, ProductRepository, Repository
from .memory import InMemoryRepository, ReadWriteLock
from .sql import SqlRepository

__all__ = [
    "CategoryRepository",
    "InMemoryRepository",
    "ProductRepository",
    "ReadWriteLock",
    "Repository",
    "SqlRepository",
]
