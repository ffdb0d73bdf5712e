"""Request and response models for products."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CreateProductRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = Field(default="")
    price: Decimal = Field(default=Decimal("0"))
    stock: int = Field(default=0)
    category_id: int = Field(default=0)

    @field_validator("price", mode="before")
    @classmethod
    def _price_from_json_number(cls, value):
        # JSON numbers arrive as floats; go through repr so 19.99 stays 19.99
        if isinstance(value, float):
            return Decimal(repr(value))
        return value


class UpdateProductRequest(CreateProductRequest):
    id: int = Field(default=0, exclude=True)


class CategoryRef(BaseModel):
    id: int
    name: str


class ProductResponse(BaseModel):
    id: int
    name: str
    price: float
    stock: int
    category: CategoryRef
    created_at: datetime
    updated_at: datetime
