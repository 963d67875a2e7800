"""
Testimonial endpoints.

Only approved testimonials are ever listed.  New submissions are
stored unapproved unless the payload says otherwise.
"""

from typing import List

from fastapi import APIRouter, Depends, status

from agri_market_api.app.api.v1.errors import storage_errors
from agri_market_api.app.schemas.testimonial import TestimonialCreate, TestimonialRead
from agri_market_api.app.storage import Storage, get_storage

router = APIRouter()


@router.get("", response_model=List[TestimonialRead])
def list_testimonials(storage: Storage = Depends(get_storage)) -> List[TestimonialRead]:
    with storage_errors("Failed to get testimonials"):
        return storage.get_approved_testimonials()


@router.post("", response_model=TestimonialRead, status_code=status.HTTP_201_CREATED)
def create_testimonial(
    testimonial: TestimonialCreate,
    storage: Storage = Depends(get_storage),
) -> TestimonialRead:
    with storage_errors("Failed to create testimonial"):
        return storage.create_testimonial(testimonial)
