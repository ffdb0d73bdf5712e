"""Request and response models for categories."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CreateCategoryRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = Field(default="")
    description: str = Field(default="")


class UpdateCategoryRequest(CreateCategoryRequest):
    id: int = Field(default=0, exclude=True)


class CategoryResponse(BaseModel):
    id: int
    name: str
    description: str
    created_at: datetime
    updated_at: datetime
