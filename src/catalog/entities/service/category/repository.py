"""Category repositories: in-memory and relational."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

from sqlalchemy import delete, func
from sqlmodel import select

from src.catalog.core.context import ExecutionContext
from src.catalog.core.errors import ConstraintError, NotFoundError
from src.catalog.core.repositories import InMemoryRepository, SqlRepository
from src.catalog.entities.service.category.entity import Category
from src.catalog.entities.service.category.table import CategoryTable

ReferenceCounter = Callable[[int, ExecutionContext], int]


class InMemoryCategoryRepository(InMemoryRepository[Category]):
    """Category store held in process memory.

    Deleting a category that products still reference fails with
    ``ConstraintError`` once a reference counter is registered, mirroring the
    foreign key of the relational schema.
    """

    entity_name = "category"

    def __init__(self) -> None:
        super().__init__()
        self._reference_counters: list[ReferenceCounter] = []

    def register_reference_counter(self, counter: ReferenceCounter) -> None:
        self._reference_counters.append(counter)

    def _check_delete(self, entity_id: int, ctx: ExecutionContext) -> None:
        for counter in self._reference_counters:
            if counter(entity_id, ctx):
                raise ConstraintError(f"category {entity_id} is still referenced")


class SqlCategoryRepository(SqlRepository):
    """Category store backed by the ``categories`` table."""

    entity_name = "category"

    @staticmethod
    def _to_entity(row: CategoryTable) -> Category:
        return Category.model_validate(row, from_attributes=True)

    def create(self, entity: Category, ctx: ExecutionContext) -> Category:
        now = datetime.now(UTC)
        row = CategoryTable(
            name=entity.name,
            description=entity.description,
            created_at=now,
            updated_at=now,
        )
        with self._session(ctx) as session:
            session.add(row)
            session.flush()
            session.refresh(row)
            return self._to_entity(row)

    def update(self, entity: Category, ctx: ExecutionContext) -> Category:
        with self._session(ctx, entity.id) as session:
            # Existence probe: distinguishes "no such row" from "nothing changed".
            row = session.get(CategoryTable, entity.id)
            if row is None:
                raise NotFoundError(self.entity_name, entity.id)
            row.name = entity.name
            row.description = entity.description
            row.updated_at = datetime.now(UTC)
            session.add(row)
            session.flush()
            session.refresh(row)
            return self._to_entity(row)

    def delete(self, entity_id: int, ctx: ExecutionContext) -> None:
        with self._session(ctx, entity_id) as session:
            result = session.execute(delete(CategoryTable).where(CategoryTable.id == entity_id))
            if result.rowcount == 0:
                raise NotFoundError(self.entity_name, entity_id)

    def find_by_id(self, entity_id: int, ctx: ExecutionContext) -> Category:
        with self._session(ctx, entity_id) as session:
            statement = select(CategoryTable).where(CategoryTable.id == entity_id)
            return self._to_entity(session.exec(statement).one())

    def find_all(self, ctx: ExecutionContext) -> list[Category]:
        with self._session(ctx) as session:
            statement = select(CategoryTable).order_by(CategoryTable.id)
            return [self._to_entity(row) for row in session.exec(statement).all()]

    def count_by_id(self, entity_id: int, ctx: ExecutionContext) -> int:
        with self._session(ctx, entity_id) as session:
            statement = (
                select(func.count()).select_from(CategoryTable).where(CategoryTable.id == entity_id)
            )
            return int(session.exec(statement).one())
