"""Response schema for the seeding endpoint."""

from typing import List

from .base import CamelModel
from .product import ProductRead
from .service import ServiceRead
from .testimonial import TestimonialRead
from .user import UserPublic


class SeedData(CamelModel):
    users: List[UserPublic]
    products: List[ProductRead]
    services: List[ServiceRead]
    testimonials: List[TestimonialRead]


class SeedResult(CamelModel):
    message: str
    data: SeedData
