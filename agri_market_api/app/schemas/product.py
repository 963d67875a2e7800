"""
Pydantic models for product listings.

Prices, quantities and ratings are ``Decimal`` values; they travel
over JSON as strings (``"45"``) exactly as the client expects.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from pydantic import Field, field_validator

from .base import CamelModel, reject_null


class ProductCategory(str, Enum):
    VEGETABLES = "vegetables"
    FRUITS = "fruits"
    GRAINS = "grains"
    ORGANIC = "organic"


class ProductBase(CamelModel):
    farmer_id: int = Field(..., examples=[1])
    title: str = Field(..., min_length=1, examples=["Fresh Tomatoes"])
    description: str = Field("", examples=["Organically grown, rich in flavor and nutrients"])
    category: ProductCategory = Field(..., examples=["vegetables"])
    price: Decimal = Field(..., examples=["45"])
    unit: str = Field(..., examples=["kg"])
    quantity: Decimal = Field(..., examples=["500"])
    images: Optional[List[str]] = None
    location: Optional[str] = None
    is_certified: bool = False
    is_organic: bool = False
    is_premium: bool = False
    rating: Optional[Decimal] = None


class ProductCreate(ProductBase):
    """Schema for listing a new product."""


class ProductUpdate(CamelModel):
    """Partial update of a product.

    ``id`` and ``created_at`` are not updatable.
    """

    farmer_id: Optional[int] = None
    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[ProductCategory] = None
    price: Optional[Decimal] = None
    unit: Optional[str] = None
    quantity: Optional[Decimal] = None
    images: Optional[List[str]] = None
    location: Optional[str] = None
    is_certified: Optional[bool] = None
    is_organic: Optional[bool] = None
    is_premium: Optional[bool] = None
    rating: Optional[Decimal] = None

    @field_validator("farmer_id", "title", "description", "category", "price", "unit", "quantity")
    @classmethod
    def not_null(cls, v):
        return reject_null(v)


class ProductRead(ProductBase):
    id: int
    created_at: datetime
