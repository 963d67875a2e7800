"""Shared fixtures: fresh storage backends, API clients and payload helpers."""

import pytest
from fastapi.testclient import TestClient

from agri_market_api.app.main import create_app
from agri_market_api.app.schemas.order import OrderCreate
from agri_market_api.app.schemas.product import ProductCreate
from agri_market_api.app.schemas.review import ReviewCreate
from agri_market_api.app.schemas.service import ServiceCreate
from agri_market_api.app.schemas.testimonial import TestimonialCreate
from agri_market_api.app.schemas.user import UserCreate
from agri_market_api.app.storage import DatabaseStorage, MemStorage


# ---------------------------------------------------------------------------
# Backends
# ---------------------------------------------------------------------------


@pytest.fixture
def mem_storage() -> MemStorage:
    return MemStorage()


@pytest.fixture
def db_storage(tmp_path) -> DatabaseStorage:
    return DatabaseStorage(str(tmp_path / "test.db"))


@pytest.fixture(params=["memory", "database"])
def storage(request, tmp_path):
    """Every contract test runs once per backend."""
    if request.param == "memory":
        return MemStorage()
    return DatabaseStorage(str(tmp_path / "contract.db"))


@pytest.fixture
def client(storage) -> TestClient:
    return TestClient(create_app(storage=storage))


# ---------------------------------------------------------------------------
# Payload helpers
# ---------------------------------------------------------------------------


def user_payload(**overrides) -> UserCreate:
    fields = {
        "username": "sharma_farms",
        "email": "sharma@example.com",
        "password": "secret",
        "full_name": "Sharma Organic Farms",
        "role": "farmer",
    }
    fields.update(overrides)
    return UserCreate(**fields)


def product_payload(farmer_id: int, **overrides) -> ProductCreate:
    fields = {
        "farmer_id": farmer_id,
        "title": "Fresh Tomatoes",
        "description": "Organically grown, rich in flavor and nutrients",
        "category": "vegetables",
        "price": "45",
        "unit": "kg",
        "quantity": "500",
    }
    fields.update(overrides)
    return ProductCreate(**fields)


def service_payload(provider_id: int, **overrides) -> ServiceCreate:
    fields = {
        "provider_id": provider_id,
        "title": "Fast Transport Services",
        "description": "Reliable and quick transportation of agricultural products",
        "service_type": "transportation",
        "price": "1500",
        "pricing_unit": "per trip",
    }
    fields.update(overrides)
    return ServiceCreate(**fields)


def order_payload(buyer_id: int, farmer_id: int, product_id: int, **overrides) -> OrderCreate:
    fields = {
        "buyer_id": buyer_id,
        "farmer_id": farmer_id,
        "product_id": product_id,
        "quantity": "10",
        "total_price": "450",
        "shipping_address": "12 Market Street, Pune",
    }
    fields.update(overrides)
    return OrderCreate(**fields)


def review_payload(user_id: int, **overrides) -> ReviewCreate:
    fields = {"user_id": user_id, "rating": 4, "comment": "Good produce"}
    fields.update(overrides)
    return ReviewCreate(**fields)


def create_testimonial_payload(user_id: int, **overrides) -> TestimonialCreate:
    fields = {"user_id": user_id, "content": "Sold my whole harvest here", "rating": 5}
    fields.update(overrides)
    return TestimonialCreate(**fields)


@pytest.fixture
def farmer(storage):
    return storage.create_user(user_payload())


@pytest.fixture
def buyer(storage):
    return storage.create_user(
        user_payload(username="buyer_one", email="buyer@example.com", role="buyer", full_name="Buyer One")
    )
