"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from fastapi import Request

from src.catalog.api.http.app_data import ApplicationDependencies
from src.catalog.core.context import ExecutionContext
from src.catalog.core.services.category_service import CategoryService
from src.catalog.core.services.product_service import ProductService

if TYPE_CHECKING:
    from loguru import Logger


def get_app_dependencies(request: Request) -> ApplicationDependencies:
    """Get the dependency graph built at startup."""
    return request.app.state.app_dependencies


def get_logger(request: Request) -> Logger:
    """Get the application logger."""
    return get_app_dependencies(request).log


def get_category_service(request: Request) -> CategoryService:
    """Get the category service instance."""
    return get_app_dependencies(request).category_service


def get_product_service(request: Request) -> ProductService:
    """Get the product service instance."""
    return get_app_dependencies(request).product_service


def get_execution_context(request: Request) -> Iterator[ExecutionContext]:
    """Derive a deadline-bound execution context from the inbound request.

    The context is cancelled during dependency teardown, after the handler
    has returned. Handlers are sync and run in the threadpool, so a client
    disconnect does not interrupt a call already in flight; the deadline is
    what bounds that work.
    """
    timeout = get_app_dependencies(request).config.app.request_timeout_seconds
    ctx = ExecutionContext.with_timeout(timeout)
    try:
        yield ctx
    finally:
        ctx.cancel()
