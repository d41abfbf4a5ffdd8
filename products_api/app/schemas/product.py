"""
Pydantic models for product data.

``Product`` is the record kept in the store and returned by the API.
``ProductIn`` is the body accepted by create and replace requests.  Its
validators run before pydantic's own type coercion, so a string price
or a ``true`` stock is rejected instead of converted, and each broken
rule carries its own message.  The response models wrap products in
the envelope used by every successful response (``success: true`` plus
``data``).
"""

import math
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_core import PydanticCustomError

NAME_ERROR = "Name is required and must be a non-empty string"
PRICE_ERROR = "Price is required and must be a non-negative number"
CATEGORY_ERROR = "Category is required and must be a non-empty string"
STOCK_ERROR = "Stock is required and must be a non-negative integer"

FIELD_ERRORS = {
    "name": NAME_ERROR,
    "price": PRICE_ERROR,
    "category": CATEGORY_ERROR,
    "stock": STOCK_ERROR,
}


def _is_number(value: Any) -> bool:
    # bool is a subclass of int but true/false are not numbers here
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_finite(value: Any) -> bool:
    try:
        return math.isfinite(value)
    except OverflowError:
        # integers too large for a float
        return False


class ProductIn(BaseModel):
    """Schema for creating or replacing a product."""

    name: str = Field(..., examples=["Laptop"])
    price: float = Field(..., examples=[999.99])
    category: str = Field(..., examples=["Electronics"])
    stock: int = Field(..., examples=[50])
    description: Optional[str] = Field(None, examples=["High-performance laptop"])

    @field_validator("name", "category", mode="before")
    @classmethod
    def validate_text(cls, v, info):
        if not isinstance(v, str) or not v.strip():
            raise PydanticCustomError("product_field", FIELD_ERRORS[info.field_name])
        return v

    @field_validator("price", mode="before")
    @classmethod
    def validate_price(cls, v):
        if not _is_number(v) or not _is_finite(v) or v < 0:
            raise PydanticCustomError("product_field", PRICE_ERROR)
        return v

    @field_validator("stock", mode="before")
    @classmethod
    def validate_stock(cls, v):
        if not _is_number(v) or v < 0:
            raise PydanticCustomError("product_field", STOCK_ERROR)
        if isinstance(v, float) and not v.is_integer():
            raise PydanticCustomError("product_field", STOCK_ERROR)
        return int(v)

    @field_validator("description", mode="before")
    @classmethod
    def coerce_description(cls, v):
        if v is None or isinstance(v, str):
            return v
        return str(v)


class Product(BaseModel):
    """A single product record."""

    id: int = Field(..., ge=1, examples=[1])
    name: str = Field(..., examples=["Laptop"])
    price: float = Field(..., ge=0, examples=[999.99])
    category: str = Field(..., examples=["Electronics"])
    stock: int = Field(..., ge=0, examples=[50])
    description: str = Field("", examples=["High-performance laptop"])


class SortField(str, Enum):
    """Fields a product listing may be sorted by."""

    ID = "id"
    NAME = "name"
    PRICE = "price"
    CATEGORY = "category"
    STOCK = "stock"
    DESCRIPTION = "description"


class ProductResponse(BaseModel):
    success: bool = True
    data: Product


class ProductMutationResponse(ProductResponse):
    """Envelope for create, update and delete responses."""

    message: str


class ProductListResponse(BaseModel):
    """One page of a product listing."""

    success: bool = True
    count: int = Field(..., description="Number of products on this page")
    total: int = Field(..., description="Number of products matching the filters")
    page: int
    totalPages: int
    data: List[Product]


class ApiDirectory(BaseModel):
    """Body of ``GET /``: a short description of the available endpoints."""

    message: str
    version: str
    endpoints: Dict[str, str]
