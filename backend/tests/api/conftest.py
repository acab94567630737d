"""Fixtures for API tests."""

import pytest
from fastapi.testclient import TestClient

from api import app
from api.dependencies import BrowserContext, get_browser_context


@pytest.fixture
def context(storage, session_store, repository) -> BrowserContext:
    """Browser context backed by the in-memory fakes."""
    return BrowserContext(storage, session_store=session_store, profile_repository=repository)


@pytest.fixture
def client(context):
    """Test client whose requests all come from the same fake browser."""
    app.dependency_overrides[get_browser_context] = lambda: context
    yield TestClient(app, follow_redirects=False)
    app.dependency_overrides.clear()
