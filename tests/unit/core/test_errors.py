"""Unit tests for the error hierarchy."""

from src.catalog.core.errors import (
    ConstraintError,
    ErrorKind,
    NotFoundError,
    RepositoryError,
    StorageError,
    UseCaseError,
)


class TestRepositoryErrors:
    def test_not_found_carries_entity_and_id(self):
        error = NotFoundError("category", 7)

        assert error.entity == "category"
        assert error.entity_id == 7
        assert str(error) == "category 7 not found"

    def test_hierarchy(self):
        for cls in (NotFoundError, ConstraintError, StorageError):
            assert issubclass(cls, RepositoryError)


class TestUseCaseError:
    def test_factories_set_kind(self):
        assert UseCaseError.bad_request("x").kind is ErrorKind.BAD_REQUEST
        assert UseCaseError.not_found("x").kind is ErrorKind.NOT_FOUND
        assert UseCaseError.internal("x").kind is ErrorKind.INTERNAL

    def test_message_is_exposed(self):
        error = UseCaseError.not_found("Category not found")

        assert error.message == "Category not found"
        assert str(error) == "Category not found"
