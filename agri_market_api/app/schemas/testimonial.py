"""Pydantic schemas for testimonials shown on the landing page."""

from datetime import datetime

from pydantic import Field

from .base import CamelModel


class TestimonialCreate(CamelModel):
    user_id: int
    content: str = Field(..., min_length=1)
    rating: int = Field(..., ge=1, le=5)
    is_approved: bool = False


class TestimonialRead(TestimonialCreate):
    # Storage returns whatever rating it holds; bounds apply on input only.
    rating: int
    id: int
    created_at: datetime
