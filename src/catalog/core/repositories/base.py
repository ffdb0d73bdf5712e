"""Repository contracts shared by the in-memory and relational backends."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, TypeVar

from pydantic import BaseModel

from src.catalog.core.context import ExecutionContext

if TYPE_CHECKING:
    from src.catalog.entities.service.category.entity import Category
    from src.catalog.entities.service.product.entity import Product

T = TypeVar("T", bound=BaseModel)


class Repository(Protocol[T]):
    """Capability set every entity repository provides.

    Implementations never hand out references into their own storage: each
    returned entity is a fresh copy.
    """

    def create(self, entity: T, ctx: ExecutionContext) -> T:
        """Persist a new entity, assigning identity and timestamps."""
        ...

    def update(self, entity: T, ctx: ExecutionContext) -> T:
        """Replace an existing entity, keeping its identity and creation time.

        Raises:
            NotFoundError: No entity with ``entity.id`` exists.
        """
        ...

    def delete(self, entity_id: int, ctx: ExecutionContext) -> None:
        """Remove an entity.

        Raises:
            NotFoundError: No entity with ``entity_id`` exists.
        """
        ...

    def find_by_id(self, entity_id: int, ctx: ExecutionContext) -> T:
        """Raises NotFoundError when absent."""
        ...

    def find_all(self, ctx: ExecutionContext) -> list[T]:
        """All entities ordered by identity ascending."""
        ...

    def count_by_id(self, entity_id: int, ctx: ExecutionContext) -> int:
        """Existence probe: 1 when the entity exists, otherwise 0."""
        ...


class CategoryRepository(Repository["Category"], Protocol):
    pass


class ProductRepository(Repository["Product"], Protocol):
    def count_by_category_id(self, category_id: int, ctx: ExecutionContext) -> int:
        """Number of products referencing ``category_id``."""
        ...
