"""Schema management helpers built on the SQLModel metadata."""

from sqlmodel import SQLModel

from src.catalog.core.services.database.db_session import DbSessionService


class DbManageService:
    def __init__(self, database: DbSessionService):
        self._database = database

    def create_all(self) -> None:
        """Create all catalog tables (development and tests; production uses migrations)."""
        from src.catalog.entities.service.category import CategoryTable  # noqa: F401
        from src.catalog.entities.service.product import ProductTable  # noqa: F401

        SQLModel.metadata.create_all(self._database.engine)

    def drop_all(self) -> None:
        SQLModel.metadata.drop_all(self._database.engine)
