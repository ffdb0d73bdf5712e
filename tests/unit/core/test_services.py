"""Unit tests for the category and product services."""

from decimal import Decimal
from unittest.mock import Mock

import pytest

from src.catalog.core.errors import ErrorKind, StorageError, UseCaseError
from src.catalog.core.models import (
    CreateCategoryRequest,
    CreateProductRequest,
    UpdateCategoryRequest,
    UpdateProductRequest,
)
from src.catalog.core.services.category_service import CategoryService
from src.catalog.core.services.product_service import ProductService


def _assert_kind(exc_info: pytest.ExceptionInfo[UseCaseError], kind: ErrorKind, message: str):
    assert exc_info.value.kind is kind
    assert exc_info.value.message == message


class TestCategoryService:
    def test_create_returns_response(self, category_service: CategoryService, ctx):
        response = category_service.create(
            CreateCategoryRequest(name="Electronics", description="Electronic devices"), ctx
        )

        assert response.id > 0
        assert response.name == "Electronics"
        assert response.description == "Electronic devices"

    @pytest.mark.parametrize("name", ["", "   ", "\t\n"])
    def test_create_blank_name_is_bad_request(self, category_service: CategoryService, ctx, name):
        with pytest.raises(UseCaseError) as exc_info:
            category_service.create(CreateCategoryRequest(name=name), ctx)

        _assert_kind(exc_info, ErrorKind.BAD_REQUEST, "Name is required")
        assert category_service.list(ctx) == []

    def test_update_changes_fields(self, category_service: CategoryService, ctx):
        created = category_service.create(CreateCategoryRequest(name="Old"), ctx)

        updated = category_service.update(
            UpdateCategoryRequest(id=created.id, name="New", description="Desc"), ctx
        )

        assert updated.id == created.id
        assert updated.name == "New"
        assert category_service.get(created.id, ctx).description == "Desc"

    def test_update_blank_name_is_bad_request_without_mutation(
        self, category_service: CategoryService, ctx
    ):
        created = category_service.create(CreateCategoryRequest(name="Keep"), ctx)

        with pytest.raises(UseCaseError) as exc_info:
            category_service.update(UpdateCategoryRequest(id=created.id, name=" "), ctx)

        _assert_kind(exc_info, ErrorKind.BAD_REQUEST, "Name is required")
        assert category_service.get(created.id, ctx).name == "Keep"

    def test_update_missing_is_not_found(self, category_service: CategoryService, ctx):
        with pytest.raises(UseCaseError) as exc_info:
            category_service.update(UpdateCategoryRequest(id=999, name="Ghost"), ctx)

        _assert_kind(exc_info, ErrorKind.NOT_FOUND, "Category not found")
        assert category_service.list(ctx) == []

    def test_delete_then_get_is_not_found(self, category_service: CategoryService, ctx):
        created = category_service.create(CreateCategoryRequest(name="Gone"), ctx)

        category_service.delete(created.id, ctx)

        with pytest.raises(UseCaseError) as exc_info:
            category_service.get(created.id, ctx)
        _assert_kind(exc_info, ErrorKind.NOT_FOUND, "Category not found")

    def test_delete_missing_is_not_found(self, category_service: CategoryService, ctx):
        with pytest.raises(UseCaseError) as exc_info:
            category_service.delete(5, ctx)

        _assert_kind(exc_info, ErrorKind.NOT_FOUND, "Category not found")

    def test_delete_category_with_products_is_bad_request(
        self, category_service: CategoryService, product_service: ProductService, ctx
    ):
        category = category_service.create(CreateCategoryRequest(name="Busy"), ctx)
        product_service.create(
            CreateProductRequest(name="Item", price=Decimal("1.00"), stock=1, category_id=category.id),
            ctx,
        )

        with pytest.raises(UseCaseError) as exc_info:
            category_service.delete(category.id, ctx)

        _assert_kind(exc_info, ErrorKind.BAD_REQUEST, "Category still has products")
        assert category_service.get(category.id, ctx).name == "Busy"

    def test_list_counts_after_creates_and_deletes(self, category_service: CategoryService, ctx):
        ids = [category_service.create(CreateCategoryRequest(name=f"c{i}"), ctx).id for i in range(4)]
        category_service.delete(ids[0], ctx)

        assert [c.id for c in category_service.list(ctx)] == ids[1:]

    def test_storage_failure_is_internal(self, log, ctx):
        repository = Mock()
        repository.find_all.side_effect = StorageError("connection lost")
        service = CategoryService(repository, log)

        with pytest.raises(UseCaseError) as exc_info:
            service.list(ctx)

        _assert_kind(exc_info, ErrorKind.INTERNAL, "Failed to retrieve categories")
        assert isinstance(exc_info.value.__cause__, StorageError)


class TestProductService:
    @pytest.fixture
    def category_id(self, category_service: CategoryService, ctx) -> int:
        return category_service.create(CreateCategoryRequest(name="Electronics"), ctx).id

    def _request(self, category_id: int | None = None, /, **overrides) -> CreateProductRequest:
        values = {"name": "Laptop", "price": Decimal("999.99"), "stock": 5, "category_id": category_id}
        values.update(overrides)
        return CreateProductRequest(**values)

    def test_create_returns_response_with_category(
        self, product_service: ProductService, category_id: int, ctx
    ):
        response = product_service.create(self._request(category_id), ctx)

        assert response.id > 0
        assert response.name == "Laptop"
        assert response.price == pytest.approx(999.99)
        assert response.stock == 5
        assert response.category.id == category_id
        assert response.category.name == "Electronics"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"name": ""},
            {"name": "  "},
            {"price": Decimal("0")},
            {"price": Decimal("-1.50")},
            {"price": Decimal("0.001")},
            {"price": Decimal("10000000000")},
            {"stock": -1},
            {"stock": 2**31},
            {"category_id": 0},
            {"category_id": -3},
            {"category_id": 2**63},
        ],
    )
    def test_create_invalid_data_is_bad_request(
        self, product_service: ProductService, category_id: int, ctx, overrides
    ):
        with pytest.raises(UseCaseError) as exc_info:
            product_service.create(self._request(category_id, **overrides), ctx)

        _assert_kind(exc_info, ErrorKind.BAD_REQUEST, "Invalid product data")
        assert product_service.list(ctx) == []

    def test_create_zero_stock_is_allowed(
        self, product_service: ProductService, category_id: int, ctx
    ):
        assert product_service.create(self._request(category_id, stock=0), ctx).stock == 0

    def test_json_float_price_keeps_its_decimal_digits(
        self, product_service: ProductService, category_id: int, ctx
    ):
        request = CreateProductRequest(name="Pen", price=19.99, stock=1, category_id=category_id)

        assert request.price == Decimal("19.99")
        assert product_service.create(request, ctx).price == pytest.approx(19.99)

    @pytest.mark.parametrize("price", [Decimal("0.01"), Decimal("19.90"), Decimal("9999999999.99")])
    def test_create_accepts_two_decimal_prices(
        self, product_service: ProductService, category_id: int, ctx, price
    ):
        assert product_service.create(self._request(category_id, price=price), ctx).price == pytest.approx(float(price))

    def test_create_unknown_category_is_bad_request(self, product_service: ProductService, ctx):
        with pytest.raises(UseCaseError) as exc_info:
            product_service.create(self._request(category_id=999), ctx)

        _assert_kind(exc_info, ErrorKind.BAD_REQUEST, "Category does not exist")

    def test_get_missing_is_not_found(self, product_service: ProductService, ctx):
        with pytest.raises(UseCaseError) as exc_info:
            product_service.get(404, ctx)

        _assert_kind(exc_info, ErrorKind.NOT_FOUND, "Product not found")

    def test_update_changes_fields(self, product_service: ProductService, category_id: int, ctx):
        created = product_service.create(self._request(category_id), ctx)

        updated = product_service.update(
            UpdateProductRequest(
                id=created.id, name="Laptop Pro", price=Decimal("1299.00"), stock=2, category_id=category_id
            ),
            ctx,
        )

        assert updated.name == "Laptop Pro"
        assert updated.price == pytest.approx(1299.0)
        assert product_service.get(created.id, ctx).stock == 2

    def test_update_missing_is_not_found(self, product_service: ProductService, category_id: int, ctx):
        with pytest.raises(UseCaseError) as exc_info:
            product_service.update(
                UpdateProductRequest(id=999, name="x", price=Decimal("1"), stock=0, category_id=category_id),
                ctx,
            )

        _assert_kind(exc_info, ErrorKind.NOT_FOUND, "Product not found")

    def test_update_invalid_data_is_bad_request_without_mutation(
        self, product_service: ProductService, category_id: int, ctx
    ):
        created = product_service.create(self._request(category_id), ctx)

        with pytest.raises(UseCaseError) as exc_info:
            product_service.update(
                UpdateProductRequest(id=created.id, name="", price=Decimal("1"), stock=0, category_id=category_id),
                ctx,
            )

        _assert_kind(exc_info, ErrorKind.BAD_REQUEST, "Invalid product data")
        assert product_service.get(created.id, ctx).name == "Laptop"

    def test_delete_then_get_is_not_found(
        self, product_service: ProductService, category_id: int, ctx
    ):
        created = product_service.create(self._request(category_id), ctx)

        product_service.delete(created.id, ctx)

        with pytest.raises(UseCaseError) as exc_info:
            product_service.get(created.id, ctx)
        _assert_kind(exc_info, ErrorKind.NOT_FOUND, "Product not found")

    def test_delete_missing_is_not_found(self, product_service: ProductService, ctx):
        with pytest.raises(UseCaseError) as exc_info:
            product_service.delete(1, ctx)

        _assert_kind(exc_info, ErrorKind.NOT_FOUND, "Product not found")

    def test_storage_failure_is_internal(self, log, ctx):
        repository = Mock()
        repository.find_by_id.side_effect = StorageError("timeout")
        service = ProductService(repository, log)

        with pytest.raises(UseCaseError) as exc_info:
            service.get(1, ctx)

        _assert_kind(exc_info, ErrorKind.INTERNAL, "Failed to retrieve product")
