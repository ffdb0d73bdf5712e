"""Category API router with CRUD operations."""

from fastapi import APIRouter, Depends, status
from starlette.responses import JSONResponse

from src.catalog.api.http.deps import get_category_service, get_execution_context
from src.catalog.api.http.responses import parse_id, write_json
from src.catalog.core.context import ExecutionContext
from src.catalog.core.models.category import CreateCategoryRequest, UpdateCategoryRequest
from src.catalog.core.services.category_service import CategoryService

router = APIRouter(tags=["categories"])


@router.post("", status_code=status.HTTP_201_CREATED)
def create_category(
    request: CreateCategoryRequest,
    service: CategoryService = Depends(get_category_service),
    ctx: ExecutionContext = Depends(get_execution_context),
) -> JSONResponse:
    """Create a new category."""
    return write_json(status.HTTP_201_CREATED, service.create(request, ctx))


@router.get("")
def list_categories(
    service: CategoryService = Depends(get_category_service),
    ctx: ExecutionContext = Depends(get_execution_context),
) -> JSONResponse:
    """List all categories ordered by id."""
    return write_json(status.HTTP_200_OK, service.list(ctx))


@router.get("/{item_id}")
def get_category(
    item_id: str,
    service: CategoryService = Depends(get_category_service),
    ctx: ExecutionContext = Depends(get_execution_context),
) -> JSONResponse:
    """Get a category by ID."""
    category_id = parse_id(item_id, "category")
    return write_json(status.HTTP_200_OK, service.get(category_id, ctx))


@router.put("/{item_id}")
def update_category(
    item_id: str,
    request: UpdateCategoryRequest,
    service: CategoryService = Depends(get_category_service),
    ctx: ExecutionContext = Depends(get_execution_context),
) -> JSONResponse:
    """Update a category."""
    request.id = parse_id(item_id, "category")
    return write_json(status.HTTP_200_OK, service.update(request, ctx))


@router.delete("/{item_id}")
def delete_category(
    item_id: str,
    service: CategoryService = Depends(get_category_service),
    ctx: ExecutionContext = Depends(get_execution_context),
) -> JSONResponse:
    """Delete a category."""
    service.delete(parse_id(item_id, "category"), ctx)
    return write_json(status.HTTP_200_OK, True)
