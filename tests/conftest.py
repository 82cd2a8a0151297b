"""
Shared fixtures: an application per test with its own registry and a photo
cache directory under tmp_path.
"""

import pytest
from fastapi.testclient import TestClient

from inventory_service.api.main import create_app
from inventory_service.core.config import Settings
from inventory_service.services.photo_store import PhotoStore
from inventory_service.services.registry import InventoryRegistry


@pytest.fixture
def cache_dir(tmp_path):
    return tmp_path / "cache"


@pytest.fixture
def settings(cache_dir):
    return Settings(CACHE_DIR=str(cache_dir), LOG_LEVEL="WARNING")


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    """TestClient with the lifespan run, so the cache directory exists."""
    with TestClient(app) as c:
        yield c


@pytest.fixture
def registry():
    return InventoryRegistry()


@pytest.fixture
def photo_store(cache_dir):
    return PhotoStore(cache_dir)


@pytest.fixture
def register(client):
    """Helper posting the registration form; returns the response."""

    def _register(name="Widget", description=None, photo=None):
        data = {}
        if name is not None:
            data["inventory_name"] = name
        if description is not None:
            data["description"] = description
        files = {"photo": photo} if photo is not None else None
        return client.post("/register", data=data, files=files)

    return _register
