"""
Shared fixtures.

Every test gets its own freshly seeded Store; the API client is wired to it
through FastAPI's dependency overrides, so tests never touch the module-level
store the running app uses.
"""

import pytest
from fastapi.testclient import TestClient

from rideseat.db.store import Store, get_store
from rideseat.main import app
from rideseat.seed import run as run_seed


@pytest.fixture
def store() -> Store:
    return run_seed(Store())


@pytest.fixture
def client(store: Store):
    app.dependency_overrides[get_store] = lambda: store
    # no context manager: the lifespan would reseed the module-level store
    yield TestClient(app)
    app.dependency_overrides.clear()
