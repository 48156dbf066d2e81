import os

import pytest

# app.app resolves settings at import time
os.environ.setdefault("OPENROUTER_API_KEY", "test-key")


@pytest.fixture
def api_client():
    """TestClient with the upstream client dependency cleared after each test."""
    from fastapi.testclient import TestClient

    from app.app import app

    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()
