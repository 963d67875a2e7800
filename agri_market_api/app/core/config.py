"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields.  A
``.env`` file in the project root, if present, is loaded before the
settings are instantiated so local development does not require
exporting variables by hand.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# project root (the directory holding ``agri_market_api/``)
BASE_DIR = Path(__file__).resolve().parent.parent.parent.parent
load_dotenv(BASE_DIR / ".env")


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Agri Market API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = _env_flag("DEBUG", "false")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Which storage backend serves the API: ``database`` (SQLite, durable)
    # or ``memory`` (volatile, for demos and tests).
    storage_backend: str = os.getenv("STORAGE_BACKEND", "database")

    # Path to the SQLite database file.  If a relative path is provided,
    # it is resolved relative to the project root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "agri_market.db")

    # Populate the in-memory backend with the demonstration dataset on
    # construction.  Ignored by the database backend, which is seeded
    # through ``POST /api/seed`` or ``seed_database.py``.
    seed_sample_data: bool = _env_flag("SEED_SAMPLE_DATA", "true")


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
