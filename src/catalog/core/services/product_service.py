"""Product use cases: validation, orchestration and error mapping."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

from src.catalog.core.context import ExecutionContext
from src.catalog.core.errors import (
    ConstraintError,
    NotFoundError,
    RepositoryError,
    UseCaseError,
)
from src.catalog.core.models.converter import product_to_response, products_to_responses
from src.catalog.core.models.product import (
    CreateProductRequest,
    ProductResponse,
    UpdateProductRequest,
)
from src.catalog.core.repositories import ProductRepository
from src.catalog.entities.service.product.entity import Product

if TYPE_CHECKING:
    from loguru import Logger

INVALID_PRODUCT = "Invalid product data"
PRODUCT_NOT_FOUND = "Product not found"
UNKNOWN_CATEGORY = "Category does not exist"

# Column limits: price NUMERIC(12, 2), stock INTEGER, category_id BIGINT
PRICE_STEP = Decimal("0.01")
PRICE_LIMIT = Decimal("10000000000")
STOCK_MAX = 2**31 - 1
ID_MAX = 2**63 - 1


class ProductService:
    """Business rules for products on top of a product repository."""

    def __init__(self, repository: ProductRepository, log: Logger) -> None:
        self.repository = repository
        self._log = log.bind(component="product_service")

    def _validate(self, request: CreateProductRequest, operation: str) -> None:
        problem = None
        if not request.name.strip():
            problem = "empty name"
        elif request.price <= 0 or request.price >= PRICE_LIMIT:
            problem = "invalid price"
        elif request.price != request.price.quantize(PRICE_STEP):
            problem = "price has more than two decimal places"
        elif not 0 <= request.stock <= STOCK_MAX:
            problem = "invalid stock"
        elif not 0 < request.category_id <= ID_MAX:
            problem = "invalid category_id"

        if problem is not None:
            self._log.warning(
                "{} product failed: {}", operation.capitalize(), problem, operation=operation
            )
            raise UseCaseError.bad_request(INVALID_PRODUCT)

    def create(self, request: CreateProductRequest, ctx: ExecutionContext) -> ProductResponse:
        self._validate(request, "create")

        product = Product(
            name=request.name,
            price=request.price,
            stock=request.stock,
            category_id=request.category_id,
        )
        try:
            product = self.repository.create(product, ctx)
        except ConstraintError as e:
            self._log.warning("Create product failed: unknown category", category_id=request.category_id)
            raise UseCaseError.bad_request(UNKNOWN_CATEGORY) from e
        except RepositoryError as e:
            self._log.error("Failed to create product: {}", e)
            raise UseCaseError.internal("Failed to create product") from e

        self._log.info("Product created", id=product.id, name=product.name)
        return product_to_response(product)

    def get(self, product_id: int, ctx: ExecutionContext) -> ProductResponse:
        try:
            product = self.repository.find_by_id(product_id, ctx)
        except NotFoundError as e:
            self._log.warning("Get product not found", id=product_id)
            raise UseCaseError.not_found(PRODUCT_NOT_FOUND) from e
        except RepositoryError as e:
            self._log.error("Failed to get product: {}", e, id=product_id)
            raise UseCaseError.internal("Failed to retrieve product") from e

        self._log.debug("Product retrieved", id=product_id)
        return product_to_response(product)

    def list(self, ctx: ExecutionContext) -> list[ProductResponse]:
        try:
            products = self.repository.find_all(ctx)
        except RepositoryError as e:
            self._log.error("Failed to list products: {}", e)
            raise UseCaseError.internal("Failed to retrieve products") from e

        self._log.debug("Products listed", count=len(products))
        return products_to_responses(products)

    def update(self, request: UpdateProductRequest, ctx: ExecutionContext) -> ProductResponse:
        self._validate(request, "update")

        product = Product(
            id=request.id,
            name=request.name,
            price=request.price,
            stock=request.stock,
            category_id=request.category_id,
        )
        try:
            product = self.repository.update(product, ctx)
        except NotFoundError as e:
            self._log.warning("Update product not found", id=request.id)
            raise UseCaseError.not_found(PRODUCT_NOT_FOUND) from e
        except ConstraintError as e:
            self._log.warning(
                "Update product failed: unknown category",
                id=request.id,
                category_id=request.category_id,
            )
            raise UseCaseError.bad_request(UNKNOWN_CATEGORY) from e
        except RepositoryError as e:
            self._log.error("Failed to update product: {}", e, id=request.id)
            raise UseCaseError.internal("Failed to update product") from e

        self._log.info("Product updated", id=product.id)
        return product_to_response(product)

    def delete(self, product_id: int, ctx: ExecutionContext) -> None:
        try:
            self.repository.delete(product_id, ctx)
        except NotFoundError as e:
            self._log.warning("Delete product not found", id=product_id)
            raise UseCaseError.not_found(PRODUCT_NOT_FOUND) from e
        except RepositoryError as e:
            self._log.error("Failed to delete product: {}", e, id=product_id)
            raise UseCaseError.internal("Failed to delete product") from e

        self._log.info("Product deleted", id=product_id)
