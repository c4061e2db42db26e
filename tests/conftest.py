"""
Shared test fixtures for the villa API test suite.
"""

import pytest
from fastapi.testclient import TestClient

from villa_api.app.core.config import Settings
from villa_api.app.core.store import VillaStore
from villa_api.app.main import create_app
from villa_api.app.services.villa_service import VillaService


@pytest.fixture
def store():
    return VillaStore()


@pytest.fixture
def service(store):
    return VillaService(store)


@pytest.fixture
def app(store):
    return create_app(Settings(seed_villas=False), store=store)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def pool_view():
    """A valid villa payload."""
    return {"name": "Pool View", "sqft": 100, "occupancy": 4}
