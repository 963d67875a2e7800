#!/usr/bin/env python3
"""
Seed an Agri Market SQLite database with the demonstration dataset.

Creates the schema if needed, then inserts 3 farmer accounts, 1 service
provider, 4 products, 1 transportation service and 2 testimonials.
All sample accounts use the password ``password123``.

This is NOT idempotent: running it a second time against the same
database fails on the duplicate usernames and inserts nothing.

Usage:
    python seed_database.py --db ./agri_market.db
"""

import argparse
import logging
import sqlite3
import sys

from agri_market_api.app.core.logging_config import setup_logging
from agri_market_api.app.storage import DatabaseStorage, seed_storage


def main() -> None:
    ap = argparse.ArgumentParser(description="Seed the Agri Market database (SQLite).")
    ap.add_argument("--db", help="Path to SQLite DB file (default: DATABASE_URL setting)")
    ap.add_argument("--log-level", default="INFO", help="Logging level (default: INFO)")
    args = ap.parse_args()

    setup_logging(args.log_level)
    storage = DatabaseStorage(args.db)
    try:
        data = seed_storage(storage)
    except sqlite3.IntegrityError as e:
        logging.getLogger(__name__).error("Seeding failed, database already seeded? (%s)", e)
        sys.exit(1)

    print("[+] Database seeded successfully")
    for key, records in data.items():
        print(f"    - {len(records)} {key}")


if __name__ == "__main__":
    main()
