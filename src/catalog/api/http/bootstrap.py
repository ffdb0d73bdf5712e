"""Composition root: picks the repository backend and wires the services.

This is the only module that knows about every concrete implementation;
services only see the repository protocols.
"""

from typing import TYPE_CHECKING

from src.catalog.api.http.app_data import ApplicationDependencies
from src.catalog.core.services.category_service import CategoryService
from src.catalog.core.services.database.db_session import DbSessionService
from src.catalog.core.services.product_service import ProductService
from src.catalog.entities.service.category import (
    InMemoryCategoryRepository,
    SqlCategoryRepository,
)
from src.catalog.entities.service.product import (
    InMemoryProductRepository,
    SqlProductRepository,
)
from src.catalog.runtime.config.config_data import ConfigData

if TYPE_CHECKING:
    from loguru import Logger


class DatabaseUnavailableError(RuntimeError):
    """The configured database could not be reached at startup."""


def bootstrap(
    config: ConfigData,
    log: "Logger",
    database: DbSessionService | None = None,
) -> ApplicationDependencies:
    """Build the application dependency graph.

    A relational backend is used when ``database`` is given or the
    configuration names a database host; otherwise everything runs in memory.
    """
    if database is None and config.database.enabled:
        database = DbSessionService(config, log)
        if not database.health_check():
            database.close()
            raise DatabaseUnavailableError(
                f"unable to reach database at {config.database.host or config.database.url}"
            )

    if database is not None:
        log.info("Using relational repositories", backend=database.dialect)
        category_repo = SqlCategoryRepository(database)
        product_repo = SqlProductRepository(database)
    else:
        log.info("Using in-memory repositories")
        memory_categories = InMemoryCategoryRepository()
        memory_products = InMemoryProductRepository(memory_categories)
        memory_categories.register_reference_counter(memory_products.count_by_category_id)
        category_repo, product_repo = memory_categories, memory_products

    return ApplicationDependencies(
        config=config,
        log=log,
        category_service=CategoryService(category_repo, log),
        product_service=ProductService(product_repo, log),
        database_service=database,
    )
