"""Product repositories: in-memory and relational."""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import delete, func
from sqlmodel import Session, select

from src.catalog.core.context import ExecutionContext
from src.catalog.core.errors import ConstraintError, NotFoundError
from src.catalog.core.repositories import CategoryRepository, InMemoryRepository, SqlRepository
from src.catalog.entities.service.category.table import CategoryTable
from src.catalog.entities.service.product.entity import Product
from src.catalog.entities.service.product.table import ProductTable


class InMemoryProductRepository(InMemoryRepository[Product]):
    """Product store held in process memory.

    Category references are checked against the category repository on every
    write, and the category name is filled in on every read, so the in-memory
    backend behaves like the relational join.
    """

    entity_name = "product"

    def __init__(self, categories: CategoryRepository) -> None:
        super().__init__()
        self._categories = categories

    def _check_write(self, entity: Product, ctx: ExecutionContext) -> None:
        if not self._categories.count_by_id(entity.category_id, ctx):
            raise ConstraintError(f"category {entity.category_id} does not exist")

    def _decorate(self, entity: Product, ctx: ExecutionContext) -> Product:
        try:
            entity.category_name = self._categories.find_by_id(entity.category_id, ctx).name
        except NotFoundError:
            entity.category_name = ""
        return entity

    def count_by_category_id(self, category_id: int, ctx: ExecutionContext) -> int:
        ctx.check()
        with self._lock.read():
            return sum(1 for item in self._items if item.category_id == category_id)


class SqlProductRepository(SqlRepository):
    """Product store backed by the ``products`` table, joined to ``categories``."""

    entity_name = "product"

    @staticmethod
    def _joined():
        return select(ProductTable, CategoryTable.name).join(
            CategoryTable, ProductTable.category_id == CategoryTable.id
        )

    @staticmethod
    def _to_entity(row: ProductTable, category_name: str) -> Product:
        product = Product.model_validate(row, from_attributes=True)
        product.category_name = category_name
        return product

    def _load(self, session: Session, entity_id: int) -> Product:
        statement = self._joined().where(ProductTable.id == entity_id)
        row, category_name = session.exec(statement).one()
        return self._to_entity(row, category_name)

    def create(self, entity: Product, ctx: ExecutionContext) -> Product:
        now = datetime.now(UTC)
        row = ProductTable(
            name=entity.name,
            price=entity.price,
            stock=entity.stock,
            category_id=entity.category_id,
            created_at=now,
            updated_at=now,
        )
        with self._session(ctx) as session:
            session.add(row)
            session.flush()
            return self._load(session, row.id)

    def update(self, entity: Product, ctx: ExecutionContext) -> Product:
        with self._session(ctx, entity.id) as session:
            # Existence probe: distinguishes "no such row" from "nothing changed".
            row = session.get(ProductTable, entity.id)
            if row is None:
                raise NotFoundError(self.entity_name, entity.id)
            row.name = entity.name
            row.price = entity.price
            row.stock = entity.stock
            row.category_id = entity.category_id
            row.updated_at = datetime.now(UTC)
            session.add(row)
            session.flush()
            return self._load(session, entity.id)

    def delete(self, entity_id: int, ctx: ExecutionContext) -> None:
        with self._session(ctx, entity_id) as session:
            result = session.execute(delete(ProductTable).where(ProductTable.id == entity_id))
            if result.rowcount == 0:
                raise NotFoundError(self.entity_name, entity_id)

    def find_by_id(self, entity_id: int, ctx: ExecutionContext) -> Product:
        with self._session(ctx, entity_id) as session:
            return self._load(session, entity_id)

    def find_all(self, ctx: ExecutionContext) -> list[Product]:
        with self._session(ctx) as session:
            statement = self._joined().order_by(ProductTable.id)
            return [self._to_entity(row, name) for row, name in session.exec(statement).all()]

    def count_by_id(self, entity_id: int, ctx: ExecutionContext) -> int:
        with self._session(ctx, entity_id) as session:
            statement = (
                select(func.count()).select_from(ProductTable).where(ProductTable.id == entity_id)
            )
            return int(session.exec(statement).one())

    def count_by_category_id(self, category_id: int, ctx: ExecutionContext) -> int:
        with self._session(ctx) as session:
            statement = (
                select(func.count())
                .select_from(ProductTable)
                .where(ProductTable.category_id == category_id)
            )
            return int(session.exec(statement).one())
