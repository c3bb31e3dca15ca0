"""
Pytest configuration for Casa Futura tests
"""
import os
import sys
from datetime import date
from pathlib import Path

import pytest

# Ensure casafutura is importable
sys.path.insert(0, str(Path(__file__).parent.parent))

# Settings are read at import time
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("AUTH_SECRET_KEY", "test-secret")


TODAY = date(2024, 11, 1)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def manager_record():
    from casafutura.core.security import get_password_hash

    return {
        "id": "manager-1",
        "name": "Gestore",
        "email": "gestore@cittafutura.it",
        "passwordHash": get_password_hash("password-gestore"),
        "role": "manager",
    }


@pytest.fixture
def store(manager_record):
    """Seeded in-memory collections plus one manager account."""
    from casafutura.storage.memory import MemoryStore

    return MemoryStore(initial={"users.json": [manager_record]})


@pytest.fixture
def client(store, today):
    from fastapi.testclient import TestClient

    from casafutura.api.deps import get_today
    from casafutura.main import app
    from casafutura.storage.factory import get_store

    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_today] = lambda: today
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def manager_headers():
    from casafutura.core.security import create_access_token

    token = create_access_token(data={"sub": "manager-1", "role": "manager"})
    return {"Authorization": f"Bearer {token}"}
