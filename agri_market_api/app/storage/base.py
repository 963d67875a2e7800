"""
Abstract storage contract shared by every backend.

``Storage`` lists every persistence operation the route layer uses.
Two implementations satisfy it with the same observable behaviour:
``MemStorage`` (volatile, in-process) and ``DatabaseStorage``
(durable, SQLite).  Exactly one instance is active per application,
chosen by ``create_storage``.

Rules every backend follows:

* Lookups return the record or ``None``; a missing row is never an
  exception.
* ``create_*`` takes a validated ``XCreate`` model and returns the
  materialized ``XRead`` record with its generated ``id`` and
  ``created_at``.
* ``update_*`` overlays only the fields the caller explicitly set on
  the ``XUpdate`` model.  Unknown ids give ``None``; an empty update
  returns the record unchanged.
* ``delete_*`` returns ``True`` if a row was removed, ``False`` if
  there was none.
* Lists of timestamped records are ordered newest first (creation
  time, then id, descending); users are listed in id order.
  ``limit`` is applied after filtering and ordering; ``None``, zero or
  a negative value means no limit.
* Returned records are copies; mutating them does not touch storage.
* Driver and constraint errors propagate unchanged.  Nothing retries.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from ..schemas.order import OrderCreate, OrderRead
from ..schemas.product import ProductCreate, ProductRead, ProductUpdate
from ..schemas.review import ReviewCreate, ReviewRead
from ..schemas.service import ServiceCreate, ServiceRead, ServiceUpdate
from ..schemas.testimonial import TestimonialCreate, TestimonialRead
from ..schemas.user import UserCreate, UserRead, UserUpdate


class Storage(ABC):
    """Persistence operations for users, products, services, orders,
    reviews and testimonials."""

    # Users

    @abstractmethod
    def get_user(self, user_id: int) -> Optional[UserRead]: ...

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[UserRead]: ...

    @abstractmethod
    def get_user_by_email(self, email: str) -> Optional[UserRead]: ...

    @abstractmethod
    def create_user(self, data: UserCreate) -> UserRead: ...

    @abstractmethod
    def update_user(self, user_id: int, data: UserUpdate) -> Optional[UserRead]: ...

    @abstractmethod
    def get_users_by_role(self, role: str) -> List[UserRead]: ...

    @abstractmethod
    def list_users(self) -> List[UserRead]: ...

    # Products

    @abstractmethod
    def create_product(self, data: ProductCreate) -> ProductRead: ...

    @abstractmethod
    def get_product(self, product_id: int) -> Optional[ProductRead]: ...

    @abstractmethod
    def get_products(
        self,
        *,
        limit: Optional[int] = None,
        category: Optional[str] = None,
        search_term: Optional[str] = None,
    ) -> List[ProductRead]:
        """List products.

        ``category`` is an exact match; ``search_term`` is a
        case-insensitive substring of the title or the description.
        Both filters must hold when both are given.
        """

    @abstractmethod
    def get_products_by_farmer(self, farmer_id: int) -> List[ProductRead]: ...

    @abstractmethod
    def update_product(self, product_id: int, data: ProductUpdate) -> Optional[ProductRead]: ...

    @abstractmethod
    def delete_product(self, product_id: int) -> bool: ...

    # Services

    @abstractmethod
    def create_service(self, data: ServiceCreate) -> ServiceRead: ...

    @abstractmethod
    def get_service(self, service_id: int) -> Optional[ServiceRead]: ...

    @abstractmethod
    def get_services(
        self,
        *,
        limit: Optional[int] = None,
        service_type: Optional[str] = None,
    ) -> List[ServiceRead]: ...

    @abstractmethod
    def get_services_by_provider(self, provider_id: int) -> List[ServiceRead]: ...

    @abstractmethod
    def update_service(self, service_id: int, data: ServiceUpdate) -> Optional[ServiceRead]: ...

    @abstractmethod
    def delete_service(self, service_id: int) -> bool: ...

    # Orders

    @abstractmethod
    def create_order(self, data: OrderCreate) -> OrderRead: ...

    @abstractmethod
    def get_order(self, order_id: int) -> Optional[OrderRead]: ...

    @abstractmethod
    def get_orders_by_buyer(self, buyer_id: int) -> List[OrderRead]: ...

    @abstractmethod
    def get_orders_by_farmer(self, farmer_id: int) -> List[OrderRead]: ...

    @abstractmethod
    def update_order_status(self, order_id: int, status: str) -> Optional[OrderRead]: ...

    # Reviews

    @abstractmethod
    def create_review(self, data: ReviewCreate) -> ReviewRead: ...

    @abstractmethod
    def get_reviews_for_product(self, product_id: int) -> List[ReviewRead]: ...

    @abstractmethod
    def get_reviews_for_service(self, service_id: int) -> List[ReviewRead]: ...

    # Testimonials

    @abstractmethod
    def create_testimonial(self, data: TestimonialCreate) -> TestimonialRead: ...

    @abstractmethod
    def get_approved_testimonials(self) -> List[TestimonialRead]: ...
