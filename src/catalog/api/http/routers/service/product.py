"""Product API router with CRUD operations."""

from fastapi import APIRouter, Depends, status
from starlette.responses import JSONResponse

from src.catalog.api.http.deps import get_execution_context, get_product_service
from src.catalog.api.http.responses import parse_id, write_json
from src.catalog.core.context import ExecutionContext
from src.catalog.core.models.product import CreateProductRequest, UpdateProductRequest
from src.catalog.core.services.product_service import ProductService

router = APIRouter(tags=["products"])


@router.post("", status_code=status.HTTP_201_CREATED)
def create_product(
    request: CreateProductRequest,
    service: ProductService = Depends(get_product_service),
    ctx: ExecutionContext = Depends(get_execution_context),
) -> JSONResponse:
    """Create a new product."""
    return write_json(status.HTTP_201_CREATED, service.create(request, ctx))


@router.get("")
def list_products(
    service: ProductService = Depends(get_product_service),
    ctx: ExecutionContext = Depends(get_execution_context),
) -> JSONResponse:
    """List all products."""
    return write_json(status.HTTP_200_OK, service.list(ctx))


@router.get("/{item_id}")
def get_product(
    item_id: str,
    service: ProductService = Depends(get_product_service),
    ctx: ExecutionContext = Depends(get_execution_context),
) -> JSONResponse:
    """Get a product by ID."""
    return write_json(status.HTTP_200_OK, service.get(parse_id(item_id, "product"), ctx))


@router.put("/{item_id}")
def update_product(
    item_id: str,
    request: UpdateProductRequest,
    service: ProductService = Depends(get_product_service),
    ctx: ExecutionContext = Depends(get_execution_context),
) -> JSONResponse:
    """Update a product."""
    request.id = parse_id(item_id, "product")
    return write_json(status.HTTP_200_OK, service.update(request, ctx))


@router.delete("/{item_id}")
def delete_product(
    item_id: str,
    service: ProductService = Depends(get_product_service),
    ctx: ExecutionContext = Depends(get_execution_context),
) -> JSONResponse:
    """Delete a product."""
    service.delete(parse_id(item_id, "product"), ctx)
    return write_json(status.HTTP_200_OK, True)
