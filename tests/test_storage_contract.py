"""Behaviour every storage backend must share (runs against both)."""

from decimal import Decimal

import pytest

from agri_market_api.app.schemas.product import ProductUpdate
from agri_market_api.app.schemas.service import ServiceUpdate
from agri_market_api.app.schemas.user import UserUpdate
from tests.conftest import (
    create_testimonial_payload,
    order_payload,
    product_payload,
    review_payload,
    service_payload,
    user_payload,
)


# ---------------------------------------------------------------------------
# Marketplace walk-through
# ---------------------------------------------------------------------------


class TestProductLifecycle:
    def test_create_filter_update_delete(self, storage) -> None:
        user = storage.create_user(user_payload())
        assert user.id == 1

        product = storage.create_product(product_payload(user.id))
        assert product.id == 1
        assert product.created_at is not None
        assert product.is_certified is False
        assert product.is_organic is False
        assert product.is_premium is False

        found = storage.get_products(category="vegetables", search_term="tomato")
        assert [p.id for p in found] == [product.id]

        updated = storage.update_product(1, ProductUpdate(price="50"))
        assert updated.price == Decimal("50")
        assert updated.title == "Fresh Tomatoes"

        assert storage.delete_product(1) is True
        assert storage.get_product(1) is None


# ---------------------------------------------------------------------------
# Identifiers and round trips
# ---------------------------------------------------------------------------


class TestIdentifiers:
    def test_ids_strictly_increase(self, storage, farmer) -> None:
        ids = [storage.create_product(product_payload(farmer.id)).id for _ in range(5)]
        assert ids == sorted(ids)
        assert len(set(ids)) == 5

    def test_ids_not_reused_after_delete(self, storage, farmer) -> None:
        first = storage.create_product(product_payload(farmer.id))
        storage.delete_product(first.id)
        second = storage.create_product(product_payload(farmer.id))
        assert second.id > first.id

    def test_each_entity_has_its_own_sequence(self, storage, farmer) -> None:
        product = storage.create_product(product_payload(farmer.id))
        service = storage.create_service(service_payload(farmer.id))
        assert product.id == 1
        assert service.id == 1


class TestRoundTrip:
    def test_user(self, storage) -> None:
        payload = user_payload(phone="9876543210", city="Mumbai", bio="Organic since 1995")
        created = storage.create_user(payload)
        fetched = storage.get_user(created.id)
        assert fetched == created
        assert fetched.model_dump(exclude={"id"}) == payload.model_dump()

    def test_product(self, storage, farmer) -> None:
        payload = product_payload(
            farmer.id,
            images=["a.jpg", "b.jpg"],
            location="Mumbai, Maharashtra",
            is_organic=True,
            rating="4.8",
        )
        created = storage.create_product(payload)
        fetched = storage.get_product(created.id)
        assert fetched == created
        assert fetched.model_dump(exclude={"id", "created_at"}) == payload.model_dump()
        assert fetched.images == ["a.jpg", "b.jpg"]

    def test_service(self, storage, farmer) -> None:
        created = storage.create_service(service_payload(farmer.id))
        assert storage.get_service(created.id) == created

    def test_order_defaults(self, storage, farmer, buyer) -> None:
        product = storage.create_product(product_payload(farmer.id))
        order = storage.create_order(order_payload(buyer.id, farmer.id, product.id))
        assert order.status == "pending"
        assert order.payment_status is False
        assert storage.get_order(order.id) == order

    def test_returned_records_are_copies(self, storage, farmer) -> None:
        created = storage.create_product(product_payload(farmer.id, images=["a.jpg"]))
        created.images.append("tampered.jpg")
        created.title = "Tampered"
        fetched = storage.get_product(created.id)
        assert fetched.images == ["a.jpg"]
        assert fetched.title == "Fresh Tomatoes"


# ---------------------------------------------------------------------------
# Partial updates and absent markers
# ---------------------------------------------------------------------------


class TestUpdates:
    def test_partial_update_preserves_other_fields(self, storage, farmer) -> None:
        original = storage.create_product(product_payload(farmer.id, location="Pune"))
        storage.update_product(original.id, ProductUpdate(quantity="250", is_premium=True))
        after = storage.get_product(original.id)
        assert after.quantity == Decimal("250")
        assert after.is_premium is True
        changed = {"quantity", "is_premium"}
        assert after.model_dump(exclude=changed) == original.model_dump(exclude=changed)

    def test_empty_update_returns_record_unchanged(self, storage, farmer) -> None:
        original = storage.create_product(product_payload(farmer.id))
        assert storage.update_product(original.id, ProductUpdate()) == original

    def test_update_can_clear_optional_field(self, storage, farmer) -> None:
        original = storage.create_product(product_payload(farmer.id, location="Pune"))
        updated = storage.update_product(original.id, ProductUpdate(location=None))
        assert updated.location is None

    def test_update_user_keeps_role(self, storage, farmer) -> None:
        updated = storage.update_user(farmer.id, UserUpdate(city="Nashik"))
        assert updated.city == "Nashik"
        assert updated.role == "farmer"
        assert updated.username == farmer.username

    def test_update_service(self, storage, farmer) -> None:
        service = storage.create_service(service_payload(farmer.id))
        updated = storage.update_service(service.id, ServiceUpdate(availability="Weekends"))
        assert updated.availability == "Weekends"
        assert updated.title == service.title

    def test_order_status_accepts_any_transition(self, storage, farmer, buyer) -> None:
        product = storage.create_product(product_payload(farmer.id))
        order = storage.create_order(order_payload(buyer.id, farmer.id, product.id))
        assert storage.update_order_status(order.id, "delivered").status == "delivered"
        assert storage.update_order_status(order.id, "pending").status == "pending"
        assert storage.get_order(order.id).quantity == order.quantity


class TestNotFound:
    def test_lookups_return_none(self, storage) -> None:
        assert storage.get_user(42) is None
        assert storage.get_user_by_username("nobody") is None
        assert storage.get_user_by_email("nobody@example.com") is None
        assert storage.get_product(42) is None
        assert storage.get_service(42) is None
        assert storage.get_order(42) is None

    def test_updates_on_missing_ids_return_none(self, storage) -> None:
        assert storage.update_user(42, UserUpdate(city="X")) is None
        assert storage.update_product(42, ProductUpdate(title="X")) is None
        assert storage.update_product(42, ProductUpdate()) is None
        assert storage.update_service(42, ServiceUpdate(title="X")) is None
        assert storage.update_order_status(42, "shipped") is None

    def test_deletes_on_missing_ids_return_false(self, storage, farmer) -> None:
        product = storage.create_product(product_payload(farmer.id))
        assert storage.delete_product(999) is False
        assert storage.delete_service(999) is False
        assert storage.get_products() == [product]

    def test_double_delete(self, storage, farmer) -> None:
        service = storage.create_service(service_payload(farmer.id))
        assert storage.delete_service(service.id) is True
        assert storage.delete_service(service.id) is False


# ---------------------------------------------------------------------------
# Filtering, ordering and limits
# ---------------------------------------------------------------------------


@pytest.fixture
def catalogue(storage, farmer):
    """Four products across two categories, created oldest to newest."""
    return [
        storage.create_product(product_payload(farmer.id, title="Fresh Tomatoes", category="vegetables")),
        storage.create_product(
            product_payload(
                farmer.id,
                title="Green Chillies",
                description="Hot, pairs well with TOMATO chutney",
                category="vegetables",
            )
        ),
        storage.create_product(
            product_payload(farmer.id, title="Tomato Seeds", description="Heirloom", category="organic")
        ),
        storage.create_product(
            product_payload(farmer.id, title="Basmati Rice", description="Long grain", category="grains")
        ),
    ]


class TestProductQueries:
    def test_newest_first(self, storage, catalogue) -> None:
        assert [p.id for p in storage.get_products()] == [p.id for p in reversed(catalogue)]

    def test_category_filter(self, storage, catalogue) -> None:
        found = storage.get_products(category="vegetables")
        assert {p.title for p in found} == {"Fresh Tomatoes", "Green Chillies"}

    def test_search_matches_title_or_description_case_insensitively(self, storage, catalogue) -> None:
        found = storage.get_products(search_term="ToMaTo")
        assert {p.title for p in found} == {"Fresh Tomatoes", "Green Chillies", "Tomato Seeds"}

    def test_filters_are_conjunctive(self, storage, catalogue) -> None:
        found = storage.get_products(category="vegetables", search_term="tomato")
        assert {p.title for p in found} == {"Fresh Tomatoes", "Green Chillies"}
        assert storage.get_products(category="grains", search_term="tomato") == []

    def test_search_folds_non_ascii_case(self, storage, farmer) -> None:
        apples = storage.create_product(
            product_payload(farmer.id, title="ÄPFEL aus Tirol", description="Süß", category="fruits")
        )
        storage.create_product(product_payload(farmer.id, title="Birnen", description="Grün"))
        assert storage.get_products(search_term="äpfel") == [apples]
        assert storage.get_products(search_term="SÜSS") == [apples]

    def test_search_treats_wildcards_literally(self, storage, catalogue) -> None:
        assert storage.get_products(search_term="%") == []
        assert storage.get_products(search_term="_") == []

    def test_limit_applies_after_ordering(self, storage, catalogue) -> None:
        found = storage.get_products(limit=2)
        assert [p.id for p in found] == [catalogue[3].id, catalogue[2].id]

    def test_limit_applies_after_filtering(self, storage, catalogue) -> None:
        found = storage.get_products(limit=1, search_term="tomato")
        assert [p.title for p in found] == ["Tomato Seeds"]

    def test_zero_limit_means_no_limit(self, storage, catalogue) -> None:
        assert len(storage.get_products(limit=0)) == 4

    def test_negative_limit_means_no_limit(self, storage, catalogue) -> None:
        assert len(storage.get_products(limit=-1)) == 4

    def test_products_by_farmer(self, storage, catalogue, buyer) -> None:
        other = storage.create_product(product_payload(buyer.id, title="Mangoes", category="fruits"))
        assert [p.id for p in storage.get_products_by_farmer(buyer.id)] == [other.id]
        assert len(storage.get_products_by_farmer(catalogue[0].farmer_id)) == 4


class TestOtherQueries:
    def test_services_by_type_and_limit(self, storage, farmer) -> None:
        truck = storage.create_service(service_payload(farmer.id))
        tractor = storage.create_service(
            service_payload(farmer.id, title="Tractor Hire", service_type="equipment_rental")
        )
        soil = storage.create_service(
            service_payload(farmer.id, title="Soil Testing", service_type="advisory")
        )
        assert [s.id for s in storage.get_services()] == [soil.id, tractor.id, truck.id]
        assert [s.id for s in storage.get_services(service_type="equipment_rental")] == [tractor.id]
        assert [s.id for s in storage.get_services(limit=1)] == [soil.id]
        assert [s.id for s in storage.get_services_by_provider(farmer.id)] == [soil.id, tractor.id, truck.id]

    def test_users_by_role(self, storage, farmer, buyer) -> None:
        provider = storage.create_user(
            user_payload(username="fast_logistics", email="logistics@example.com", role="service_provider")
        )
        assert [u.id for u in storage.get_users_by_role("farmer")] == [farmer.id]
        assert [u.id for u in storage.get_users_by_role("service_provider")] == [provider.id]
        assert [u.id for u in storage.list_users()] == [farmer.id, buyer.id, provider.id]

    def test_user_lookup_by_username_and_email(self, storage, farmer) -> None:
        assert storage.get_user_by_username("sharma_farms") == farmer
        assert storage.get_user_by_email("sharma@example.com") == farmer

    def test_orders_by_buyer_and_farmer(self, storage, farmer, buyer) -> None:
        product = storage.create_product(product_payload(farmer.id))
        first = storage.create_order(order_payload(buyer.id, farmer.id, product.id))
        second = storage.create_order(order_payload(buyer.id, farmer.id, product.id, quantity="3"))
        assert [o.id for o in storage.get_orders_by_buyer(buyer.id)] == [second.id, first.id]
        assert [o.id for o in storage.get_orders_by_farmer(farmer.id)] == [second.id, first.id]
        assert storage.get_orders_by_buyer(farmer.id) == []

    def test_reviews_for_product_and_service(self, storage, farmer, buyer) -> None:
        product = storage.create_product(product_payload(farmer.id))
        service = storage.create_service(service_payload(farmer.id))
        on_product = storage.create_review(review_payload(buyer.id, product_id=product.id))
        on_service = storage.create_review(review_payload(buyer.id, service_id=service.id, rating=2))
        assert storage.get_reviews_for_product(product.id) == [on_product]
        assert storage.get_reviews_for_service(service.id) == [on_service]
        assert on_product.service_id is None

    def test_only_approved_testimonials_are_listed(self, storage, farmer) -> None:
        storage.create_testimonial(create_testimonial_payload(farmer.id))
        approved = storage.create_testimonial(create_testimonial_payload(farmer.id, is_approved=True))
        assert storage.get_approved_testimonials() == [approved]
