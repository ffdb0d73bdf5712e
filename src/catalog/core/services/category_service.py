"""Category use cases: validation, orchestration and error mapping."""

from __future__ import annotations

from typing import TYPE_CHECKING

from src.catalog.core.context import ExecutionContext
from src.catalog.core.errors import (
    ConstraintError,
    NotFoundError,
    RepositoryError,
    UseCaseError,
)
from src.catalog.core.models.category import (
    CategoryResponse,
    CreateCategoryRequest,
    UpdateCategoryRequest,
)
from src.catalog.core.models.converter import (
    categories_to_responses,
    category_to_response,
)
from src.catalog.core.repositories import CategoryRepository
from src.catalog.entities.service.category.entity import Category

if TYPE_CHECKING:
    from loguru import Logger

NAME_REQUIRED = "Name is required"
CATEGORY_NOT_FOUND = "Category not found"


class CategoryService:
    """Business rules for categories on top of a category repository."""

    def __init__(self, repository: CategoryRepository, log: Logger) -> None:
        self.repository = repository
        self._log = log.bind(component="category_service")

    def _require(self, category_id: int, ctx: ExecutionContext, operation: str) -> Category:
        """Existence probe shared by update, delete and get."""
        try:
            return self.repository.find_by_id(category_id, ctx)
        except NotFoundError as e:
            self._log.warning("Category not found", operation=operation, id=category_id)
            raise UseCaseError.not_found(CATEGORY_NOT_FOUND) from e
        except RepositoryError as e:
            self._log.error(
                "Failed to load category: {}", e, operation=operation, id=category_id
            )
            raise UseCaseError.internal("Failed to retrieve category") from e

    def create(self, request: CreateCategoryRequest, ctx: ExecutionContext) -> CategoryResponse:
        if not request.name.strip():
            self._log.warning("Create category failed: name is required")
            raise UseCaseError.bad_request(NAME_REQUIRED)

        category = Category(name=request.name, description=request.description)
        try:
            category = self.repository.create(category, ctx)
        except RepositoryError as e:
            self._log.error("Failed to create category: {}", e)
            raise UseCaseError.internal("Failed to create category") from e

        self._log.info("Category created", id=category.id, name=category.name)
        return category_to_response(category)

    def update(self, request: UpdateCategoryRequest, ctx: ExecutionContext) -> CategoryResponse:
        if not request.name.strip():
            self._log.warning("Update category failed: name is required", id=request.id)
            raise UseCaseError.bad_request(NAME_REQUIRED)

        category = self._require(request.id, ctx, "update")
        category.name = request.name
        category.description = request.description

        try:
            category = self.repository.update(category, ctx)
        except NotFoundError as e:
            # Deleted between the probe and the write
            self._log.warning("Category vanished during update", id=request.id)
            raise UseCaseError.not_found(CATEGORY_NOT_FOUND) from e
        except RepositoryError as e:
            self._log.error("Failed to update category: {}", e, id=request.id)
            raise UseCaseError.internal("Failed to update category") from e

        self._log.info("Category updated", id=category.id, name=category.name)
        return category_to_response(category)

    def delete(self, category_id: int, ctx: ExecutionContext) -> None:
        self._require(category_id, ctx, "delete")

        try:
            self.repository.delete(category_id, ctx)
        except NotFoundError as e:
            self._log.warning("Category vanished during delete", id=category_id)
            raise UseCaseError.not_found(CATEGORY_NOT_FOUND) from e
        except ConstraintError as e:
            self._log.warning("Category still referenced by products", id=category_id)
            raise UseCaseError.bad_request("Category still has products") from e
        except RepositoryError as e:
            self._log.error("Failed to delete category: {}", e, id=category_id)
            raise UseCaseError.internal("Failed to delete category") from e

        self._log.info("Category deleted", id=category_id)

    def get(self, category_id: int, ctx: ExecutionContext) -> CategoryResponse:
        category = self._require(category_id, ctx, "get")
        self._log.debug("Category retrieved", id=category.id)
        return category_to_response(category)

    def list(self, ctx: ExecutionContext) -> list[CategoryResponse]:
        try:
            categories = self.repository.find_all(ctx)
        except RepositoryError as e:
            self._log.error("Failed to list categories: {}", e)
            raise UseCaseError.internal("Failed to retrieve categories") from e

        self._log.debug("Categories listed", count=len(categories))
        return categories_to_responses(categories)
