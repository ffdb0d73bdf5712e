"""API request/response models and entity converters."""

from .category import CategoryResponse, CreateCategoryRequest, UpdateCategoryRequest
from .product import (
    CategoryRef,
    CreateProductRequest,
    ProductResponse,
    UpdateProductRequest,
)
from .web import WebResponse

__all__ = [
    "CategoryRef",
    "CategoryResponse",
    "CreateCategoryRequest",
    "CreateProductRequest",
    "ProductResponse",
    "UpdateCategoryRequest",
    "UpdateProductRequest",
    "WebResponse",
]
