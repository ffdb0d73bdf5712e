"""Route table: binds method and path to the router handlers."""

from fastapi import FastAPI

from src.catalog.api.http.routers import health
from src.catalog.api.http.routers.service import category, product


def setup_routes(app: FastAPI) -> None:
    """Register every router on the application.

    ====== ========================= ===========================
    Method Path                      Handler
    ====== ========================= ===========================
    GET    /health                   health.health
    GET    /health/database          health.health_database
    POST   /api/categories           category.create_category
    GET    /api/categories           category.list_categories
    GET    /api/categories/{id}      category.get_category
    PUT    /api/categories/{id}      category.update_category
    DELETE /api/categories/{id}      category.delete_category
    POST   /api/products             product.create_product
    GET    /api/products             product.list_products
    GET    /api/products/{id}        product.get_product
    PUT    /api/products/{id}        product.update_product
    DELETE /api/products/{id}        product.delete_product
    ====== ========================= ===========================
    """
    app.include_router(health.router, prefix="/health")
    app.include_router(category.router, prefix="/api/categories")
    app.include_router(product.router, prefix="/api/products")
