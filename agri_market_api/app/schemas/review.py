"""
Pydantic schemas for product and service reviews.

A review is attached to a product or to a service.  Ratings are
checked here, at the API boundary; the storage layer stores whatever
integer it is given.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from .base import CamelModel


class ReviewCreate(CamelModel):
    """Schema for creating a new review."""

    user_id: int
    product_id: Optional[int] = None
    service_id: Optional[int] = None
    rating: int = Field(..., ge=1, le=5, description="Rating from 1 to 5")
    comment: Optional[str] = Field(None, description="Optional textual comment")

    @field_validator("comment")
    @classmethod
    def sanitize_comment(cls, v: Optional[str]) -> Optional[str]:
        """Trim whitespace from the comment and enforce a maximum length."""
        if v is None:
            return None
        v = v.strip()
        if len(v) > 1000:
            raise ValueError("Comment must be 1000 characters or fewer")
        return v


class ReviewRead(CamelModel):
    """Schema for reading a review."""

    id: int
    user_id: int
    product_id: Optional[int] = None
    service_id: Optional[int] = None
    rating: int
    comment: Optional[str] = None
    created_at: datetime
