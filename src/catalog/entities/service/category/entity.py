"""Entity: Category."""

from pydantic import Field

from src.catalog.entities._base import Entity


class Category(Entity):
    """A named grouping that products belong to."""

    name: str = Field(default="", description="Category name")
    description: str = Field(default="", description="Free-form description")
