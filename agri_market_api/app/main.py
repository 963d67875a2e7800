"""
Main entrypoint for the Agri Market API.

This module assembles the FastAPI application, sets up logging and
includes the versioned router under ``/api``.  The ``create_app``
function builds and configures the app, which is then instantiated at
module import time as ``app``.  Run it with uvicorn, e.g.::

    uvicorn agri_market_api.app.main:app --reload

The storage backend is chosen once, by ``create_storage``, when the
application starts.  Tests pass their own backend to ``create_app``.
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request

from .api.v1.router import router as v1_router
from .core.config import Settings, settings as default_settings
from .core.logging_config import setup_logging
from .storage import Storage, create_storage

logger = logging.getLogger(__name__)


def create_app(storage: Optional[Storage] = None, config: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    storage : Optional[Storage]
        Backend to serve from.  If omitted, one is built from
        ``config`` on startup.
    config : Optional[Settings]
        Settings to use instead of the module-level ``settings``.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    config = config or default_settings
    # Initialise logging before anything else so that startup can log.
    setup_logging(config.log_level, config.log_file or None)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if getattr(app.state, "storage", None) is None:
            app.state.storage = create_storage(config)
        yield

    app = FastAPI(
        title=config.project_name,
        version=config.api_version,
        debug=config.debug,
        lifespan=lifespan,
    )
    if storage is not None:
        app.state.storage = storage

    @app.middleware("http")
    async def log_api_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        if request.url.path.startswith("/api"):
            elapsed_ms = (time.perf_counter() - start) * 1000
            logger.info(
                "%s %s %s in %.0fms",
                request.method,
                request.url.path,
                response.status_code,
                elapsed_ms,
            )
        return response

    app.include_router(v1_router, prefix="/api")
    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
