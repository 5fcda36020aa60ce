"""
Shared fixtures for the contracts API tests.

The application is exercised with in-memory storage, a fixed generation date
and zero pacing delays so streamed output is deterministic and fast.
"""

import os
from datetime import date, datetime, timedelta, timezone

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["OPENAI_API_KEY"] = ""
os.environ["CONTRACT_STORAGE_BACKEND"] = "memory"

import pytest
from fastapi.testclient import TestClient

from app.domain.generation.generators import BoilerplateContractGenerator
from app.domain.generation.pipeline import GenerationPipeline, get_generation_pipeline
from app.domain.identity.schemas import VendorIdentity, VendorType
from app.main import app
from app.storage import InMemoryContractStorage, get_contract_storage

GENERATED_ON = date(2026, 10, 19)
TEST_PASSWORD = "password123"


class FakeClock:
    """Deterministic clock advancing a fixed step on every call"""

    def __init__(self, start: datetime = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc), step_ms: int = 0):
        self.current = start
        self.step = timedelta(milliseconds=step_ms)

    def __call__(self) -> datetime:
        now = self.current
        self.current = self.current + self.step
        return now

    def advance(self, **kwargs) -> None:
        self.current = self.current + timedelta(**kwargs)


@pytest.fixture
def storage():
    return InMemoryContractStorage()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def photographer():
    return VendorIdentity(
        id="1", email="photographer@test.com", name="Sarah Johnson", vendorType=VendorType.PHOTOGRAPHER
    )


@pytest.fixture
def caterer():
    return VendorIdentity(
        id="2", email="caterer@test.com", name="Mike Chen", vendorType=VendorType.CATERER
    )


@pytest.fixture
def boilerplate_pipeline():
    return GenerationPipeline(
        fallback=BoilerplateContractGenerator(chunk_size=100, delay=0, generated_on=GENERATED_ON)
    )


@pytest.fixture
def test_app(storage, boilerplate_pipeline):
    """Application with in-memory storage and a boilerplate-only pipeline"""
    app.dependency_overrides[get_contract_storage] = lambda: storage
    app.dependency_overrides[get_generation_pipeline] = lambda: boilerplate_pipeline
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(test_app):
    return TestClient(test_app)


@pytest.fixture
def auth_headers(client):
    """Bearer headers for the photographer test account"""
    response = client.post(
        "/api/auth/login", json={"email": "photographer@test.com", "password": TEST_PASSWORD}
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}
