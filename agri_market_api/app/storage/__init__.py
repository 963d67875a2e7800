"""
Storage layer: the ``Storage`` contract and its two backends.

``create_storage`` is the one place where the backend is chosen;
the application keeps the instance on ``app.state.storage`` and
endpoints receive it through the ``get_storage`` dependency.
"""

import logging
from typing import Optional

from fastapi import Request

from ..core.config import Settings, settings as default_settings
from .base import Storage
from .database import DatabaseStorage
from .memory import MemStorage
from .seed import seed_storage

logger = logging.getLogger(__name__)

BACKENDS = ("database", "memory")


def create_storage(config: Optional[Settings] = None) -> Storage:
    """Build the storage backend named by ``config.storage_backend``.

    Raises ``ValueError`` for an unknown backend name.
    """
    config = config or default_settings
    backend = config.storage_backend.lower()
    if backend == "memory":
        logger.info("Using in-memory storage (seeded: %s)", config.seed_sample_data)
        return MemStorage(seed=config.seed_sample_data)
    if backend == "database":
        logger.info("Using SQLite storage at %s", config.database_url)
        return DatabaseStorage(config.database_url)
    raise ValueError(
        f"Unknown storage backend {config.storage_backend!r}; expected one of {BACKENDS}"
    )


def get_storage(request: Request) -> Storage:
    """FastAPI dependency returning the application's storage backend."""
    return request.app.state.storage


__all__ = [
    "Storage",
    "MemStorage",
    "DatabaseStorage",
    "create_storage",
    "get_storage",
    "seed_storage",
]
