"""
Volatile storage backend.

``MemStorage`` keeps every entity in a dict keyed by id, with one id
counter per entity type.  Reads are linear scans, which is fine for
the demo and test sizes this backend is meant for.  All state lives on
the instance, so independent instances never share records or id
sequences.

Unlike the database backend, ``MemStorage`` does not enforce unique
usernames/emails or foreign keys.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel

from ..schemas.order import OrderCreate, OrderRead
from ..schemas.product import ProductCreate, ProductRead, ProductUpdate
from ..schemas.review import ReviewCreate, ReviewRead
from ..schemas.service import ServiceCreate, ServiceRead, ServiceUpdate
from ..schemas.testimonial import TestimonialCreate, TestimonialRead
from ..schemas.user import UserCreate, UserRead, UserUpdate
from .base import Storage

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=BaseModel)


@dataclass
class _Collection(Generic[R]):
    """Records of one entity type keyed by id, plus its id counter.

    Every method runs under the owning storage's lock.  Records handed
    out are deep copies.
    """

    name: str
    lock: threading.RLock
    rows: Dict[int, R] = field(default_factory=dict)
    next_id: int = 1

    def insert(self, build: Callable[[int], R]) -> R:
        with self.lock:
            record_id = self.next_id
            self.next_id += 1
            record = build(record_id)
            self.rows[record_id] = record
            logger.debug("Stored %s %s", self.name, record_id)
            return record.model_copy(deep=True)

    def get(self, record_id: int) -> Optional[R]:
        with self.lock:
            record = self.rows.get(record_id)
            return record.model_copy(deep=True) if record is not None else None

    def find(self, predicate: Callable[[R], bool]) -> Optional[R]:
        with self.lock:
            for record in self.rows.values():
                if predicate(record):
                    return record.model_copy(deep=True)
            return None

    def select(
        self,
        predicate: Optional[Callable[[R], bool]] = None,
        *,
        newest_first: bool = True,
        limit: Optional[int] = None,
    ) -> List[R]:
        with self.lock:
            # ids grow with creation time, so reverse insertion order is newest first
            records = reversed(self.rows.values()) if newest_first else self.rows.values()
            result = [r for r in records if predicate is None or predicate(r)]
            if limit and limit > 0:
                result = result[:limit]
            return [r.model_copy(deep=True) for r in result]

    def update(self, record_id: int, changes: Dict[str, Any]) -> Optional[R]:
        with self.lock:
            record = self.rows.get(record_id)
            if record is None:
                return None
            updated = record.model_copy(update=changes, deep=True)
            self.rows[record_id] = updated
            return updated.model_copy(deep=True)

    def delete(self, record_id: int) -> bool:
        with self.lock:
            return self.rows.pop(record_id, None) is not None


def _now() -> datetime:
    return datetime.now(timezone.utc)


class MemStorage(Storage):
    """In-process implementation of :class:`Storage`.

    Parameters
    ----------
    seed : bool
        Populate the store with the demonstration dataset (farmers, a
        service provider, products, a service and testimonials) on
        construction.
    """

    def __init__(self, seed: bool = False) -> None:
        # one lock for every collection and counter
        self._lock = threading.RLock()
        self._users: _Collection[UserRead] = _Collection("user", self._lock)
        self._products: _Collection[ProductRead] = _Collection("product", self._lock)
        self._services: _Collection[ServiceRead] = _Collection("service", self._lock)
        self._orders: _Collection[OrderRead] = _Collection("order", self._lock)
        self._reviews: _Collection[ReviewRead] = _Collection("review", self._lock)
        self._testimonials: _Collection[TestimonialRead] = _Collection("testimonial", self._lock)
        if seed:
            from .seed import seed_storage

            seed_storage(self)

    # Users

    def get_user(self, user_id: int) -> Optional[UserRead]:
        return self._users.get(user_id)

    def get_user_by_username(self, username: str) -> Optional[UserRead]:
        return self._users.find(lambda u: u.username == username)

    def get_user_by_email(self, email: str) -> Optional[UserRead]:
        return self._users.find(lambda u: u.email == email)

    def create_user(self, data: UserCreate) -> UserRead:
        return self._users.insert(lambda i: UserRead(id=i, **data.model_dump()))

    def update_user(self, user_id: int, data: UserUpdate) -> Optional[UserRead]:
        return self._users.update(user_id, data.changes())

    def get_users_by_role(self, role: str) -> List[UserRead]:
        return self._users.select(lambda u: u.role == role, newest_first=False)

    def list_users(self) -> List[UserRead]:
        return self._users.select(newest_first=False)

    # Products

    def create_product(self, data: ProductCreate) -> ProductRead:
        return self._products.insert(
            lambda i: ProductRead(id=i, created_at=_now(), **data.model_dump())
        )

    def get_product(self, product_id: int) -> Optional[ProductRead]:
        return self._products.get(product_id)

    def get_products(
        self,
        *,
        limit: Optional[int] = None,
        category: Optional[str] = None,
        search_term: Optional[str] = None,
    ) -> List[ProductRead]:
        needle = search_term.casefold() if search_term else None

        def matches(p: ProductRead) -> bool:
            if category and p.category != category:
                return False
            if needle and needle not in p.title.casefold() and needle not in p.description.casefold():
                return False
            return True

        return self._products.select(matches, limit=limit)

    def get_products_by_farmer(self, farmer_id: int) -> List[ProductRead]:
        return self._products.select(lambda p: p.farmer_id == farmer_id)

    def update_product(self, product_id: int, data: ProductUpdate) -> Optional[ProductRead]:
        return self._products.update(product_id, data.changes())

    def delete_product(self, product_id: int) -> bool:
        return self._products.delete(product_id)

    # Services

    def create_service(self, data: ServiceCreate) -> ServiceRead:
        return self._services.insert(
            lambda i: ServiceRead(id=i, created_at=_now(), **data.model_dump())
        )

    def get_service(self, service_id: int) -> Optional[ServiceRead]:
        return self._services.get(service_id)

    def get_services(
        self,
        *,
        limit: Optional[int] = None,
        service_type: Optional[str] = None,
    ) -> List[ServiceRead]:
        return self._services.select(
            lambda s: not service_type or s.service_type == service_type,
            limit=limit,
        )

    def get_services_by_provider(self, provider_id: int) -> List[ServiceRead]:
        return self._services.select(lambda s: s.provider_id == provider_id)

    def update_service(self, service_id: int, data: ServiceUpdate) -> Optional[ServiceRead]:
        return self._services.update(service_id, data.changes())

    def delete_service(self, service_id: int) -> bool:
        return self._services.delete(service_id)

    # Orders

    def create_order(self, data: OrderCreate) -> OrderRead:
        return self._orders.insert(
            lambda i: OrderRead(id=i, created_at=_now(), **data.model_dump())
        )

    def get_order(self, order_id: int) -> Optional[OrderRead]:
        return self._orders.get(order_id)

    def get_orders_by_buyer(self, buyer_id: int) -> List[OrderRead]:
        return self._orders.select(lambda o: o.buyer_id == buyer_id)

    def get_orders_by_farmer(self, farmer_id: int) -> List[OrderRead]:
        return self._orders.select(lambda o: o.farmer_id == farmer_id)

    def update_order_status(self, order_id: int, status: str) -> Optional[OrderRead]:
        return self._orders.update(order_id, {"status": status})

    # Reviews

    def create_review(self, data: ReviewCreate) -> ReviewRead:
        return self._reviews.insert(
            lambda i: ReviewRead(id=i, created_at=_now(), **data.model_dump())
        )

    def get_reviews_for_product(self, product_id: int) -> List[ReviewRead]:
        return self._reviews.select(lambda r: r.product_id == product_id)

    def get_reviews_for_service(self, service_id: int) -> List[ReviewRead]:
        return self._reviews.select(lambda r: r.service_id == service_id)

    # Testimonials

    def create_testimonial(self, data: TestimonialCreate) -> TestimonialRead:
        return self._testimonials.insert(
            lambda i: TestimonialRead(id=i, created_at=_now(), **data.model_dump())
        )

    def get_approved_testimonials(self) -> List[TestimonialRead]:
        return self._testimonials.select(lambda t: t.is_approved)
