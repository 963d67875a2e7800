"""
SQLite database integration and simple migration system.

This module provides functions for obtaining a database connection
(``get_connection``), a cursor context manager that commits on exit
(``get_cursor``) and ``init_db`` which applies migrations.  It uses
SQLite as a lightweight embedded database; to switch to another DBMS
you would replace connection logic and adapt SQL syntax accordingly.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from decimal import Decimal
from typing import Iterator, Optional

from .config import BASE_DIR, settings

logger = logging.getLogger(__name__)

# Prices, quantities and ratings are exact decimals; SQLite has no
# decimal type so they are stored as their canonical text form.
sqlite3.register_adapter(Decimal, str)

# Millisecond-resolution UTC timestamp used as the default for every
# ``created_at`` column so that "newest first" ordering is stable.
_NOW = "(strftime('%Y-%m-%dT%H:%M:%fZ', 'now'))"

MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: Initial marketplace schema
    (
        1,
        f"""
        CREATE TABLE IF NOT EXISTS users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            username TEXT NOT NULL UNIQUE,
            password TEXT NOT NULL,
            email TEXT NOT NULL UNIQUE,
            phone TEXT,
            full_name TEXT NOT NULL,
            role TEXT NOT NULL,
            address TEXT,
            city TEXT,
            state TEXT,
            profile_image TEXT,
            bio TEXT
        );

        CREATE TABLE IF NOT EXISTS products (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            farmer_id INTEGER NOT NULL,
            title TEXT NOT NULL,
            description TEXT NOT NULL,
            category TEXT NOT NULL,
            price TEXT NOT NULL,
            unit TEXT NOT NULL,
            quantity TEXT NOT NULL,
            images TEXT,
            location TEXT,
            is_certified INTEGER DEFAULT 0,
            is_organic INTEGER DEFAULT 0,
            is_premium INTEGER DEFAULT 0,
            rating TEXT,
            created_at TEXT NOT NULL DEFAULT {_NOW},
            FOREIGN KEY(farmer_id) REFERENCES users(id)
        );

        CREATE TABLE IF NOT EXISTS services (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            provider_id INTEGER NOT NULL,
            title TEXT NOT NULL,
            description TEXT NOT NULL,
            service_type TEXT NOT NULL,
            price TEXT,
            pricing_unit TEXT,
            location TEXT,
            availability TEXT,
            rating TEXT,
            created_at TEXT NOT NULL DEFAULT {_NOW},
            FOREIGN KEY(provider_id) REFERENCES users(id)
        );

        CREATE TABLE IF NOT EXISTS orders (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            buyer_id INTEGER NOT NULL,
            farmer_id INTEGER NOT NULL,
            product_id INTEGER NOT NULL,
            quantity TEXT NOT NULL,
            total_price TEXT NOT NULL,
            status TEXT NOT NULL DEFAULT 'pending',
            payment_status INTEGER NOT NULL DEFAULT 0,
            shipping_address TEXT NOT NULL,
            created_at TEXT NOT NULL DEFAULT {_NOW},
            FOREIGN KEY(buyer_id) REFERENCES users(id),
            FOREIGN KEY(farmer_id) REFERENCES users(id),
            FOREIGN KEY(product_id) REFERENCES products(id)
        );

        CREATE TABLE IF NOT EXISTS reviews (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id INTEGER NOT NULL,
            product_id INTEGER,
            service_id INTEGER,
            rating INTEGER NOT NULL,
            comment TEXT,
            created_at TEXT NOT NULL DEFAULT {_NOW},
            FOREIGN KEY(user_id) REFERENCES users(id),
            FOREIGN KEY(product_id) REFERENCES products(id),
            FOREIGN KEY(service_id) REFERENCES services(id)
        );

        CREATE TABLE IF NOT EXISTS testimonials (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id INTEGER NOT NULL,
            content TEXT NOT NULL,
            rating INTEGER NOT NULL,
            is_approved INTEGER NOT NULL DEFAULT 0,
            created_at TEXT NOT NULL DEFAULT {_NOW},
            FOREIGN KEY(user_id) REFERENCES users(id)
        );
        """,
    ),
    # Migration 2: indices on owner columns used by the filtered list queries
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_products_farmer_id ON products(farmer_id);
        CREATE INDEX IF NOT EXISTS idx_products_category ON products(category);
        CREATE INDEX IF NOT EXISTS idx_services_provider_id ON services(provider_id);
        CREATE INDEX IF NOT EXISTS idx_orders_buyer_id ON orders(buyer_id);
        CREATE INDEX IF NOT EXISTS idx_orders_farmer_id ON orders(farmer_id);
        CREATE INDEX IF NOT EXISTS idx_reviews_product_id ON reviews(product_id);
        CREATE INDEX IF NOT EXISTS idx_reviews_service_id ON reviews(service_id);
        CREATE INDEX IF NOT EXISTS idx_users_role ON users(role);
        """,
    ),
]


def _casefold(value: Optional[str]) -> Optional[str]:
    return value.casefold() if value is not None else None


def get_database_path(db_url: Optional[str] = None) -> str:
    """Compute the path to the SQLite database file.

    If the url (``settings.database_url`` by default) is an absolute
    path, use it directly.  Otherwise resolve it relative to the
    project root.
    """
    db_url = db_url or settings.database_url
    if os.path.isabs(db_url):
        return db_url
    return str((BASE_DIR / db_url).resolve())


def get_connection(db_path: Optional[str] = None) -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    The connection uses a row factory to access columns by name and
    enables foreign key enforcement, which SQLite leaves off by
    default on every new connection.  It also registers ``casefold()``
    so text search folds case the same way Python does (SQLite's own
    ``lower()`` and ``LIKE`` only fold ASCII).
    """
    conn = sqlite3.connect(get_database_path(db_path))
    conn.row_factory = sqlite3.Row
    conn.create_function("casefold", 1, _casefold, deterministic=True)
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


@contextmanager
def get_cursor(db_path: Optional[str] = None) -> Iterator[sqlite3.Cursor]:
    """Context manager that yields a cursor, commits and closes the connection on exit.

    If the block raises, the implicit transaction is rolled back and
    the exception propagates unchanged.
    """
    conn = get_connection(db_path)
    try:
        yield conn.cursor()
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def init_db(db_path: Optional[str] = None) -> None:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version, and applies any new migrations defined in
    ``MIGRATIONS``.  If you add a new migration, append it with an
    incremented version number.
    """
    with get_cursor(db_path) as cursor:
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
        )
        cursor.execute("SELECT MAX(version) as version FROM migrations")
        row = cursor.fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                logger.info("Applying migration %s", version)
                cursor.executescript(sql)
                cursor.execute(
                    "INSERT INTO migrations (version) VALUES (?)", (version,)
                )
                current_version = version
