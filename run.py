"""Entry point for the Vegetable Market Prices API.

This script builds the application from environment variables and
serves it with Uvicorn.  It is intended to be executed from the project
root, for example under Docker, where you only specify a single Python
file to run.

Required variables are ``DATABASE_URL`` (path to the SQLite file) and
``JWT_SECRET``.  ``HOST``, ``PORT`` and ``ENVIRONMENT`` are optional.

Usage:
    python run.py
"""
import asyncio
import logging
import sys

from uvicorn import Config, Server

from vegetable_market_api.app.core.config import ConfigurationError, Settings


async def run_api(settings: Settings) -> None:
    """Start the API using Uvicorn on the configured host and port.

    Uvicorn imports the application from ``main``, which builds it from
    the same environment ``settings`` was validated against.
    """
    config = Config(
        app="vegetable_market_api.app.main:app",
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level="info",
    )
    server = Server(config)
    logging.getLogger(__name__).info("Server running on port %s", settings.port)
    await server.serve()


def main() -> None:
    try:
        settings = Settings.from_env()
    except ConfigurationError as exc:
        logging.basicConfig(level=logging.INFO)
        logging.error("%s", exc)
        sys.exit(1)
    asyncio.run(run_api(settings))


if __name__ == "__main__":
    main()
