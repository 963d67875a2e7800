"""
Durable storage backend on SQLite.

``DatabaseStorage`` translates every :class:`Storage` operation into a
single parameterized statement.  Writes use ``INSERT/UPDATE/DELETE ...
RETURNING *`` so the affected row comes back from the same statement:
no read-after-write, and "row was affected" simply means "a row was
returned".  Each statement is atomic on its own, so there is no manual
transaction handling beyond the commit in ``get_cursor``.

Constraint violations (duplicate username/email, dangling foreign
keys) surface as ``sqlite3.IntegrityError`` and are not caught here.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence, TypeVar

from ..core.db import get_cursor, init_db
from ..schemas.order import OrderCreate, OrderRead
from ..schemas.product import ProductCreate, ProductRead, ProductUpdate
from ..schemas.review import ReviewCreate, ReviewRead
from ..schemas.service import ServiceCreate, ServiceRead, ServiceUpdate
from ..schemas.testimonial import TestimonialCreate, TestimonialRead
from ..schemas.user import UserCreate, UserRead, UserUpdate
from .base import Storage

logger = logging.getLogger(__name__)

T = TypeVar("T")

NEWEST_FIRST = "created_at DESC, id DESC"


def _encode(value: Any) -> Any:
    """Convert a model value into something sqlite3 can bind."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, list):
        return json.dumps(value)
    return value


def _row_to_user(row: sqlite3.Row) -> UserRead:
    return UserRead.model_validate(dict(row))


def _row_to_product(row: sqlite3.Row) -> ProductRead:
    data = dict(row)
    if data["images"] is not None:
        data["images"] = json.loads(data["images"])
    return ProductRead.model_validate(data)


def _row_to_service(row: sqlite3.Row) -> ServiceRead:
    return ServiceRead.model_validate(dict(row))


def _row_to_order(row: sqlite3.Row) -> OrderRead:
    return OrderRead.model_validate(dict(row))


def _row_to_review(row: sqlite3.Row) -> ReviewRead:
    return ReviewRead.model_validate(dict(row))


def _row_to_testimonial(row: sqlite3.Row) -> TestimonialRead:
    return TestimonialRead.model_validate(dict(row))


class DatabaseStorage(Storage):
    """SQLite implementation of :class:`Storage`.

    A new connection is opened for every operation (see
    ``core.db.get_connection``), so one instance can be shared by all
    request threads.

    Parameters
    ----------
    db_path : Optional[str]
        Database file; defaults to ``settings.database_url``.
    """

    def __init__(self, db_path: Optional[str] = None) -> None:
        self.db_path = db_path
        init_db(db_path)

    # Statement helpers

    def _write(
        self, sql: str, params: Sequence[Any], parse: Callable[[sqlite3.Row], T]
    ) -> Optional[T]:
        with get_cursor(self.db_path) as cursor:
            # fetch everything before the commit in get_cursor
            rows = cursor.execute(sql, [_encode(p) for p in params]).fetchall()
        return parse(rows[0]) if rows else None

    def _insert(
        self, table: str, values: Dict[str, Any], parse: Callable[[sqlite3.Row], T]
    ) -> T:
        columns = ", ".join(values)
        placeholders = ", ".join("?" for _ in values)
        record = self._write(
            f"INSERT INTO {table} ({columns}) VALUES ({placeholders}) RETURNING *",
            list(values.values()),
            parse,
        )
        logger.info("Created %s %s", table, getattr(record, "id", None))
        return record

    def _update(
        self,
        table: str,
        record_id: int,
        changes: Dict[str, Any],
        parse: Callable[[sqlite3.Row], T],
    ) -> Optional[T]:
        if changes:
            assignments = ", ".join(f"{column} = ?" for column in changes)
            params = [*changes.values(), record_id]
        else:
            # an empty overlay still has to report whether the row exists
            assignments = "id = id"
            params = [record_id]
        return self._write(
            f"UPDATE {table} SET {assignments} WHERE id = ? RETURNING *", params, parse
        )

    def _delete(self, table: str, record_id: int) -> bool:
        deleted = self._write(
            f"DELETE FROM {table} WHERE id = ? RETURNING id", [record_id], lambda row: row["id"]
        )
        if deleted is not None:
            logger.info("Deleted %s %s", table, record_id)
        return deleted is not None

    def _select(
        self,
        table: str,
        parse: Callable[[sqlite3.Row], T],
        where: Optional[List[str]] = None,
        params: Optional[List[Any]] = None,
        order_by: str = NEWEST_FIRST,
        limit: Optional[int] = None,
    ) -> List[T]:
        query = f"SELECT * FROM {table}"
        params = [_encode(p) for p in params or []]
        if where:
            query += " WHERE " + " AND ".join(where)
        query += f" ORDER BY {order_by}"
        if limit and limit > 0:
            query += " LIMIT ?"
            params.append(limit)
        with get_cursor(self.db_path) as cursor:
            rows = cursor.execute(query, params).fetchall()
        return [parse(row) for row in rows]

    def _select_one(
        self, table: str, parse: Callable[[sqlite3.Row], T], column: str, value: Any
    ) -> Optional[T]:
        rows = self._select(table, parse, [f"{column} = ?"], [value], order_by="id", limit=1)
        return rows[0] if rows else None

    # Users

    def get_user(self, user_id: int) -> Optional[UserRead]:
        return self._select_one("users", _row_to_user, "id", user_id)

    def get_user_by_username(self, username: str) -> Optional[UserRead]:
        return self._select_one("users", _row_to_user, "username", username)

    def get_user_by_email(self, email: str) -> Optional[UserRead]:
        return self._select_one("users", _row_to_user, "email", email)

    def create_user(self, data: UserCreate) -> UserRead:
        return self._insert("users", data.model_dump(), _row_to_user)

    def update_user(self, user_id: int, data: UserUpdate) -> Optional[UserRead]:
        return self._update("users", user_id, data.changes(), _row_to_user)

    def get_users_by_role(self, role: str) -> List[UserRead]:
        return self._select("users", _row_to_user, ["role = ?"], [role], order_by="id")

    def list_users(self) -> List[UserRead]:
        return self._select("users", _row_to_user, order_by="id")

    # Products

    def create_product(self, data: ProductCreate) -> ProductRead:
        return self._insert("products", data.model_dump(), _row_to_product)

    def get_product(self, product_id: int) -> Optional[ProductRead]:
        return self._select_one("products", _row_to_product, "id", product_id)

    def get_products(
        self,
        *,
        limit: Optional[int] = None,
        category: Optional[str] = None,
        search_term: Optional[str] = None,
    ) -> List[ProductRead]:
        where: List[str] = []
        params: List[Any] = []
        if category:
            where.append("category = ?")
            params.append(category)
        if search_term:
            # casefold() is registered on every connection by core.db
            where.append("(instr(casefold(title), ?) > 0 OR instr(casefold(description), ?) > 0)")
            needle = search_term.casefold()
            params.extend([needle, needle])
        return self._select("products", _row_to_product, where, params, limit=limit)

    def get_products_by_farmer(self, farmer_id: int) -> List[ProductRead]:
        return self._select("products", _row_to_product, ["farmer_id = ?"], [farmer_id])

    def update_product(self, product_id: int, data: ProductUpdate) -> Optional[ProductRead]:
        return self._update("products", product_id, data.changes(), _row_to_product)

    def delete_product(self, product_id: int) -> bool:
        return self._delete("products", product_id)

    # Services

    def create_service(self, data: ServiceCreate) -> ServiceRead:
        return self._insert("services", data.model_dump(), _row_to_service)

    def get_service(self, service_id: int) -> Optional[ServiceRead]:
        return self._select_one("services", _row_to_service, "id", service_id)

    def get_services(
        self,
        *,
        limit: Optional[int] = None,
        service_type: Optional[str] = None,
    ) -> List[ServiceRead]:
        where: List[str] = []
        params: List[Any] = []
        if service_type:
            where.append("service_type = ?")
            params.append(service_type)
        return self._select("services", _row_to_service, where, params, limit=limit)

    def get_services_by_provider(self, provider_id: int) -> List[ServiceRead]:
        return self._select("services", _row_to_service, ["provider_id = ?"], [provider_id])

    def update_service(self, service_id: int, data: ServiceUpdate) -> Optional[ServiceRead]:
        return self._update("services", service_id, data.changes(), _row_to_service)

    def delete_service(self, service_id: int) -> bool:
        return self._delete("services", service_id)

    # Orders

    def create_order(self, data: OrderCreate) -> OrderRead:
        return self._insert("orders", data.model_dump(), _row_to_order)

    def get_order(self, order_id: int) -> Optional[OrderRead]:
        return self._select_one("orders", _row_to_order, "id", order_id)

    def get_orders_by_buyer(self, buyer_id: int) -> List[OrderRead]:
        return self._select("orders", _row_to_order, ["buyer_id = ?"], [buyer_id])

    def get_orders_by_farmer(self, farmer_id: int) -> List[OrderRead]:
        return self._select("orders", _row_to_order, ["farmer_id = ?"], [farmer_id])

    def update_order_status(self, order_id: int, status: str) -> Optional[OrderRead]:
        return self._update("orders", order_id, {"status": status}, _row_to_order)

    # Reviews

    def create_review(self, data: ReviewCreate) -> ReviewRead:
        return self._insert("reviews", data.model_dump(), _row_to_review)

    def get_reviews_for_product(self, product_id: int) -> List[ReviewRead]:
        return self._select("reviews", _row_to_review, ["product_id = ?"], [product_id])

    def get_reviews_for_service(self, service_id: int) -> List[ReviewRead]:
        return self._select("reviews", _row_to_review, ["service_id = ?"], [service_id])

    # Testimonials

    def create_testimonial(self, data: TestimonialCreate) -> TestimonialRead:
        return self._insert("testimonials", data.model_dump(), _row_to_testimonial)

    def get_approved_testimonials(self) -> List[TestimonialRead]:
        return self._select("testimonials", _row_to_testimonial, ["is_approved = 1"])
