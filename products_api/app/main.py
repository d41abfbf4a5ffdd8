"""
Main entrypoint for the Products API.

This module assembles the FastAPI application, sets up logging,
registers the error handlers and includes the API router.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``.  Run it with uvicorn,
e.g.::

    uvicorn products_api.app.main:app --port 3000

or via ``python run.py``, which reads the port from ``PORT``.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request

from .api.router import router
from .core.config import Settings, settings as default_settings
from .core.errors import add_exception_handlers
from .core.logging_config import setup_logging
from .core.store import ProductStore, create_seeded_store

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, store: Optional[ProductStore] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use.  Defaults to the settings read from the
        environment at import time.
    store : Optional[ProductStore]
        Record store owned by the application.  Defaults to a new
        store holding the seed products, so every application gets its
        own isolated data.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings
    setup_logging(settings.log_level, settings.log_file)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)
    app.state.settings = settings
    app.state.store = store if store is not None else create_seeded_store()

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info("%s %s", request.method, request.url.path)
        return await call_next(request)

    add_exception_handlers(app)
    app.include_router(router)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
