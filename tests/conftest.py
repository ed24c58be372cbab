"""
Test configuration and fixtures for the blood bank registry.
Provides an isolated in-memory database per test, an HTTP client wired to
it, and payload factories for donors and hospitals.
"""

import os
import sys
from pathlib import Path
from typing import AsyncGenerator
from uuid import uuid4

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Add the project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Override environment variables before the app reads its settings
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", TEST_DATABASE_URL)
os.environ.setdefault("LOG_TO_FILE", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from app.db.base import Base  # noqa: E402
from app.dependencies import get_db  # noqa: E402
from app.main import app  # noqa: E402


@pytest.fixture
async def test_engine():
    """Fresh in-memory database for each test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create a database session for service-level tests."""
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory) -> AsyncGenerator[httpx.AsyncClient, None]:
    """HTTP client talking to the app in-process, with get_db pointed at the test database."""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as test_client:
        yield test_client
    app.dependency_overrides.clear()


# --- Data Factories ---


class TestDataFactory:
    """Factory for registration payloads as the web forms submit them."""

    __test__ = False

    @staticmethod
    def unique_email(prefix: str = "test") -> str:
        return f"{prefix}_{uuid4().hex[:8]}@example.com"

    @staticmethod
    def donor_payload(**overrides) -> dict:
        payload = {
            "name": "Jane Doe",
            "age": 30,
            "gender": "female",
            "bloodGroup": "O-",
            "phone": "9876543210",
            "email": "jane@x.com",
            "address": "1 Main St",
            "city": "Metropolis",
            "state": "NY",
            "ageConfirmation": True,
            "medicalQuestions": {},
        }
        payload.update(overrides)
        return payload

    @staticmethod
    def hospital_payload(**overrides) -> dict:
        payload = {
            "name": "City General Hospital",
            "email": TestDataFactory.unique_email("hospital"),
            "phone": "5551234567",
            "address": "200 Health Ave",
            "city": "Gotham",
            "state": "NJ",
            "contactPerson": "Dr. Leslie Thompkins",
            "blood_group": "AB+",
            "unit": "4",
        }
        payload.update(overrides)
        return payload


MEDICAL_FLAGS = [
    "recentIllness",
    "heartCondition",
    "bloodPressure",
    "diabetes",
    "hepatitis",
    "hiv",
    "medication",
    "surgery",
    "pregnancy",
    "vaccination",
]


def assert_validation_error(response, field_name: str = None):
    """Assert response is a 400 validation error, optionally naming a field."""
    assert response.status_code == 400
    data = response.json()
    assert "errors" in data
    if field_name:
        assert field_name in [error["field"] for error in data["errors"]]
    return data
