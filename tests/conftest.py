# Shared fixtures: an app bound to a temporary storage root.
# Created: 2026-10-18

import pytest
from fastapi.testclient import TestClient

from filestore.api.serve import create_app
from filestore.config import Settings

TOKEN = "test-token-123"


@pytest.fixture
def storage_root(tmp_path):
    return tmp_path / "data"


@pytest.fixture
def settings(storage_root):
    return Settings(token=TOKEN, storage_root=storage_root)


@pytest.fixture
def test_app(settings):
    return create_app(settings)


@pytest.fixture
def client(test_app):
    return TestClient(test_app)


@pytest.fixture
def auth():
    return {"Authorization": TOKEN}


@pytest.fixture
def token():
    return TOKEN
