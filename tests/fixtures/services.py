"""Repository, service and client fixtures for testing."""

from __future__ import annotations

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from src.catalog.api.http.app import create_app
from src.catalog.core.services.category_service import CategoryService
from src.catalog.core.services.database import DbSessionService
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

__all__ = [
    "category_service",
    "client",
    "memory_repositories",
    "product_service",
    "repositories",
    "sql_client",
    "sql_repositories",
]


@pytest.fixture
def memory_repositories() -> tuple[InMemoryCategoryRepository, InMemoryProductRepository]:
    """In-memory repositories wired together the way bootstrap wires them."""
    categories = InMemoryCategoryRepository()
    products = InMemoryProductRepository(categories)
    categories.register_reference_counter(products.count_by_category_id)
    return categories, products


@pytest.fixture
def sql_repositories(
    database: DbSessionService,
) -> tuple[SqlCategoryRepository, SqlProductRepository]:
    return SqlCategoryRepository(database), SqlProductRepository(database)


@pytest.fixture(params=["memory", "sqlite"])
def repositories(request: pytest.FixtureRequest):
    """Run a test against both repository backends."""
    if request.param == "memory":
        return request.getfixturevalue("memory_repositories")
    return request.getfixturevalue("sql_repositories")


@pytest.fixture
def category_service(repositories, log) -> CategoryService:
    categories, _ = repositories
    return CategoryService(categories, log)


@pytest.fixture
def product_service(repositories, log) -> ProductService:
    _, products = repositories
    return ProductService(products, log)


@pytest.fixture
def client(memory_config: ConfigData) -> Generator[TestClient]:
    """Test client for an application running on in-memory repositories."""
    with TestClient(create_app(memory_config)) as test_client:
        yield test_client


@pytest.fixture
def sql_client(
    sqlite_config: ConfigData, database: DbSessionService
) -> Generator[TestClient]:
    """Test client for an application running on the SQLite repositories."""
    with TestClient(create_app(sqlite_config, database=database)) as test_client:
        yield test_client
