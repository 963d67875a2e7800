"""
Top-level router for version 1 of the API.

This router aggregates the per-entity routers under a unified prefix.
When new endpoints are added, update this file to include their
routers.
"""

from fastapi import APIRouter

from .endpoints import (
    orders,
    products,
    reviews,
    seed,
    services,
    testimonials,
    users,
)

router = APIRouter()

router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(products.router, prefix="/products", tags=["products"])
router.include_router(services.router, prefix="/services", tags=["services"])
router.include_router(orders.router, prefix="/orders", tags=["orders"])
router.include_router(reviews.router, prefix="/reviews", tags=["reviews"])
router.include_router(testimonials.router, prefix="/testimonials", tags=["testimonials"])
router.include_router(seed.router, prefix="/seed", tags=["seed"])
