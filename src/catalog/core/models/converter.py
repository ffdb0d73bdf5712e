"""Conversions from domain entities to API response models."""

from src.catalog.core.models.category import CategoryResponse
from src.catalog.core.models.product import CategoryRef, ProductResponse
from src.catalog.entities.service.category.entity import Category
from src.catalog.entities.service.product.entity import Product


def category_to_response(category: Category) -> CategoryResponse:
    return CategoryResponse(
        id=category.id,
        name=category.name,
        description=category.description,
        created_at=category.created_at,
        updated_at=category.updated_at,
    )


def categories_to_responses(categories: list[Category]) -> list[CategoryResponse]:
    return [category_to_response(category) for category in categories]


def product_to_response(product: Product) -> ProductResponse:
    return ProductResponse(
        id=product.id,
        name=product.name,
        price=float(product.price),
        stock=product.stock,
        category=CategoryRef(id=product.category_id, name=product.category_name),
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


def products_to_responses(products: list[Product]) -> list[ProductResponse]:
    return [product_to_response(product) for product in products]
