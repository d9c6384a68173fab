"""
API test fixtures.

The app is created without entering its lifespan, so no database is touched
unless a test overrides get_async_db.
"""

import pytest
from fastapi.testclient import TestClient

from invoice_extractor.api.main import create_app


@pytest.fixture
def client():
    app = create_app()
    yield TestClient(app)
    app.dependency_overrides.clear()
