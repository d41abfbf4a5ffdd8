"""FastAPI dependencies giving handlers access to application state."""

from fastapi import Request

from .store import ProductStore


def get_store(request: Request) -> ProductStore:
    """Return the store owned by the running application."""
    return request.app.state.store
