"""
Shared fixtures.

Every test gets its own SQLite file under ``tmp_path``; the API fixtures
run the application's lifespan through ``TestClient`` so the datastore is
opened and the service catalogue seeded exactly as in production.
"""

import json
import os

# Importing booking_api.main builds the module-level app, which needs a secret
os.environ.setdefault("ACCESS_TOKEN_SECRET", "test-secret")

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from booking_api.core.security import TokenService
from booking_api.core.setting import Settings
from booking_api.db.session import Datastore
from booking_api.main import create_app

TEST_SECRET = "test-secret"

SEED_SERVICES = [
    {
        "name": "Full Car Repair",
        "price": 200.0,
        "description": "Complete inspection and repair of engine, brakes and suspension",
        "img": "https://example.com/img/repair.jpg",
    },
    {
        "name": "Engine Oil Change",
        "price": 45.5,
        "description": "Oil and filter replacement",
        "facility": [{"name": "Synthetic oil", "details": "5W-30"}],
    },
]


@pytest.fixture
def seed_file(tmp_path):
    path = tmp_path / "services.json"
    path.write_text(json.dumps(SEED_SERVICES), encoding="utf-8")
    return path


@pytest.fixture
def settings(tmp_path, seed_file):
    return Settings(
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'api.db'}",
        ACCESS_TOKEN_SECRET=TEST_SECRET,
        SERVICES_SEED_FILE=str(seed_file),
    )


@pytest.fixture
def client(settings):
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def token_service():
    return TokenService(TEST_SECRET)


@pytest_asyncio.fixture
async def datastore(tmp_path):
    store = Datastore(f"sqlite+aiosqlite:///{tmp_path / 'unit.db'}")
    await store.connect()
    yield store
    await store.dispose()
