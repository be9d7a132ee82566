"""Backend test configuration: isolated SQLite database and relaxed limits."""

import os
import sys
import tempfile

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(__file__))))

# Must be set before backend.config is imported
_TEST_DB_DIR = tempfile.mkdtemp(prefix="dividerforge-test-")
os.environ.setdefault("DIVIDERFORGE_DATABASE_URL", f"sqlite:///{os.path.join(_TEST_DB_DIR, 'test.db')}")
os.environ.setdefault("RATE_LIMIT_PER_MINUTE", "10000")
os.environ.setdefault("SEARCH_RATE_LIMIT_PER_MINUTE", "10000")


@pytest.fixture
def client():
    """TestClient with the app lifespan (table creation) running."""
    from fastapi.testclient import TestClient
    from backend.main import app

    with TestClient(app) as test_client:
        yield test_client
