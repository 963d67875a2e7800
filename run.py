"""Launch the Agri Market API with uvicorn.

Host and port are read from the ``HOST`` and ``PORT`` environment
variables (defaults ``0.0.0.0`` and ``5000``).  The storage backend,
database path and log level come from the settings in
``agri_market_api.app.core.config`` (see ``.env``).

Usage:
    python run.py
"""
import os

from uvicorn import Config, Server

from agri_market_api.app.core.config import settings


def main() -> None:
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "5000"))
    config = Config(
        app="agri_market_api.app.main:app",
        host=host,
        port=port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
    Server(config).run()


if __name__ == "__main__":
    try:
        main()
    except (KeyboardInterrupt, SystemExit):
        pass
