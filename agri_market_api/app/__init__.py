"""
Application package initializer.

The application is organised into ``core`` (configuration, database,
logging, password hashing), ``schemas`` (pydantic models),
``storage`` (the storage contract and its in-memory and SQLite
backends) and ``api`` (versioned FastAPI routers).
"""

from .main import app, create_app  # noqa: F401
