"""
Shared fixtures for the Products API tests.

Every test gets its own application and its own seeded store, so
mutations made by one test are never visible to another.
"""

import pytest
from fastapi.testclient import TestClient

from products_api.app.core.config import Settings
from products_api.app.core.store import create_seeded_store
from products_api.app.main import create_app

TEST_API_KEY = "test-api-key"


@pytest.fixture
def settings():
    return Settings(api_key=TEST_API_KEY, log_level="INFO")


@pytest.fixture
def store():
    return create_seeded_store()


@pytest.fixture
def app(settings, store):
    return create_app(settings=settings, store=store)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def auth_headers():
    return {"x-api-key": TEST_API_KEY}


@pytest.fixture
def new_product():
    """A valid product payload."""
    return {
        "name": "Tablet",
        "price": 499.5,
        "category": "Electronics",
        "stock": 20,
        "description": "10-inch tablet",
    }
