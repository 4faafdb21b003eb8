"""Fixtures for API tests against the full application."""

import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from shared.config import get_settings


@pytest.fixture
def app(container, settings):
    """Application wired to the test container and settings."""
    app = create_app()
    app.dependency_overrides[get_settings] = lambda: settings
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app, follow_redirects=False)
