"""Entry point for the Products API.

Starts the FastAPI application with Uvicorn.  Host and port are read
from the ``HOST`` and ``PORT`` environment variables (or a ``.env``
file in the same directory); defaults are ``0.0.0.0`` and ``3000``.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from products_api.app.core.config import settings
from products_api.app.main import app

logger = logging.getLogger("products_api")


async def run_api() -> None:
    """Serve the API until interrupted."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
        access_log=False,
    )
    server = Server(config)
    logger.info("Server is running on port %s", settings.port)
    logger.info("API available at http://localhost:%s/api/products", settings.port)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(run_api())
    except (KeyboardInterrupt, SystemExit):
        pass
