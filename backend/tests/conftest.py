"""
Repairs API — Test Configuration (conftest.py)
===============================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every fixture builds fresh objects, so no test sees another test's
       creates or deletes.

Fixtures:
    ├── seed_repairs:   the six shipped seed records
    ├── seeded_store:   RepairStore holding the seed records
    ├── empty_store:    RepairStore with nothing in it
    ├── service:        a RepairService
    ├── test_settings:  Settings with no BASE_URL and no static directory
    └── test_client:    HTTPX AsyncClient bound to an app serving `seeded_store`
"""

import json
import os
from typing import List

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Set before any repairs_api import reads the environment
os.environ["LOG_LEVEL"] = "WARNING"
os.environ.pop("BASE_URL", None)

from repairs_api.config import DEFAULT_SEED_PATH, Settings  # noqa: E402
from repairs_api.models.repair import Repair  # noqa: E402
from repairs_api.services.repair_service import RepairService  # noqa: E402
from repairs_api.store import RepairStore  # noqa: E402


@pytest.fixture
def seed_repairs() -> List[Repair]:
    raw = json.loads(DEFAULT_SEED_PATH.read_text(encoding="utf-8"))
    return [Repair.model_validate(item) for item in raw]


@pytest.fixture
def seeded_store(seed_repairs) -> RepairStore:
    return RepairStore(seed_repairs)


@pytest.fixture
def empty_store() -> RepairStore:
    return RepairStore()


@pytest.fixture
def service() -> RepairService:
    return RepairService()


@pytest.fixture
def new_repair_body() -> dict:
    """A valid POST /repairs body (wire field names)."""
    return {
        "title": "Windshield replacement",
        "description": "Replace the cracked windshield and recalibrate the rain sensor.",
        "assignedTo": "Karin Blair",
        "date": "2023-06-01",
        "image": "https://example.com/windshield.jpg",
    }


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    return Settings(
        base_url="",
        static_dir=tmp_path / "no-static-here",
        seed_on_startup=False,
    )


@pytest_asyncio.fixture
async def test_client(seeded_store, test_settings):
    """
    HTTPX AsyncClient talking to a fresh app instance.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from repairs_api.main import create_app

    app = create_app(store=seeded_store, config=test_settings)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
