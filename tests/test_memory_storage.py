"""Behaviour specific to the in-process backend."""

import threading

from agri_market_api.app.core.security import verify_password
from agri_market_api.app.schemas.review import ReviewCreate
from agri_market_api.app.storage import MemStorage
from agri_market_api.app.storage.seed import SAMPLE_PASSWORD
from tests.conftest import product_payload, user_payload


# ---------------------------------------------------------------------------
# Isolation
# ---------------------------------------------------------------------------


class TestIsolation:
    def test_instances_do_not_share_records(self) -> None:
        first, second = MemStorage(), MemStorage()
        user = first.create_user(user_payload())
        assert second.get_user(user.id) is None
        assert second.list_users() == []

    def test_instances_have_independent_id_sequences(self) -> None:
        first, second = MemStorage(), MemStorage()
        first.create_user(user_payload())
        first.create_user(user_payload(username="other", email="other@example.com"))
        assert second.create_user(user_payload()).id == 1


# ---------------------------------------------------------------------------
# Seeding
# ---------------------------------------------------------------------------


class TestSeeded:
    def test_unseeded_by_default(self) -> None:
        storage = MemStorage()
        assert storage.list_users() == []
        assert storage.get_products() == []

    def test_seed_populates_demo_dataset(self) -> None:
        storage = MemStorage(seed=True)
        assert len(storage.list_users()) == 4
        assert len(storage.get_users_by_role("farmer")) == 3
        assert len(storage.get_users_by_role("service_provider")) == 1
        assert len(storage.get_products()) == 4
        assert len(storage.get_services()) == 1
        assert len(storage.get_approved_testimonials()) == 2

    def test_seeded_products_point_at_seeded_farmers(self) -> None:
        storage = MemStorage(seed=True)
        farmer_ids = {u.id for u in storage.get_users_by_role("farmer")}
        assert {p.farmer_id for p in storage.get_products()} <= farmer_ids

    def test_seeded_passwords_are_hashed(self) -> None:
        storage = MemStorage(seed=True)
        user = storage.get_user_by_username("sharma_farms")
        assert user.password != SAMPLE_PASSWORD
        assert verify_password(SAMPLE_PASSWORD, user.password)


# ---------------------------------------------------------------------------
# Constraints the database enforces and this backend does not
# ---------------------------------------------------------------------------


class TestNoConstraints:
    def test_duplicate_username_is_accepted(self, mem_storage) -> None:
        first = mem_storage.create_user(user_payload())
        second = mem_storage.create_user(user_payload())
        assert first.id != second.id
        # lookup returns the earliest match
        assert mem_storage.get_user_by_username("sharma_farms").id == first.id

    def test_dangling_owner_is_accepted(self, mem_storage) -> None:
        product = mem_storage.create_product(product_payload(farmer_id=999))
        assert mem_storage.get_product(product.id).farmer_id == 999

    def test_out_of_range_rating_is_stored(self, mem_storage) -> None:
        review = ReviewCreate.model_construct(
            user_id=1, product_id=None, service_id=None, rating=9, comment=None
        )
        assert mem_storage.create_review(review).rating == 9


# ---------------------------------------------------------------------------
# Concurrency
# ---------------------------------------------------------------------------


class TestConcurrency:
    def test_concurrent_creates_get_distinct_ids(self, mem_storage) -> None:
        ids = []
        ids_lock = threading.Lock()

        def worker() -> None:
            for _ in range(25):
                product = mem_storage.create_product(product_payload(farmer_id=1))
                with ids_lock:
                    ids.append(product.id)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(ids) == 200
        assert sorted(ids) == list(range(1, 201))
        assert len(mem_storage.get_products()) == 200
