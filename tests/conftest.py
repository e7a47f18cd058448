"""Pytest configuration and fixtures for concierge.

HTTP tests run against concierge.main:app with the in-memory document store
and in-memory photo storage, so no Firestore project or bucket is needed.
All imports use concierge.*.
"""

import os

os.environ["DATABASE_BACKEND"] = "memory"
os.environ["STORAGE_BACKEND"] = "memory"

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from concierge.core.config import get_settings  # noqa: E402
from concierge.core.limiter import limiter  # noqa: E402

get_settings.cache_clear()

from concierge.infrastructure.external.storage.memory_storage import (  # noqa: E402
    MemoryStorageService,
)
from concierge.infrastructure.firebase.client import init_memory_store  # noqa: E402
from concierge.infrastructure.firebase.memory_client import MemoryFirestoreClient  # noqa: E402
from concierge.infrastructure.firebase.repositories.company_repo_firestore import (  # noqa: E402
    FirestoreCompanyRepository,
)
from concierge.main import app  # noqa: E402

TEST_COMPANY_ID = "company1"
OTHER_COMPANY_ID = "company2"


@pytest.fixture
def store() -> MemoryFirestoreClient:
    """Fresh in-memory document store installed as the app's client."""
    client = init_memory_store()
    client.clear()
    return client


@pytest.fixture
def storage() -> MemoryStorageService:
    """In-memory photo storage attached to app.state (lifespan does not run under ASGITransport)."""
    service = MemoryStorageService(bucket="test-bucket")
    app.state.storage = service
    yield service
    app.state.storage = None


@pytest.fixture
async def client(store: MemoryFirestoreClient, storage: MemoryStorageService) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI). Rate limit counters start empty."""
    limiter.reset()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def company(store: MemoryFirestoreClient) -> str:
    """Seed two active companies; return the id requests act on."""
    repo = FirestoreCompanyRepository(store)
    await repo.create(TEST_COMPANY_ID, "Concierge One")
    await repo.create(OTHER_COMPANY_ID, "Concierge Two")
    return TEST_COMPANY_ID


@pytest.fixture
def admin_headers(company: str) -> dict[str, str]:
    """Gateway headers for an admin of the seeded company."""
    return {
        "X-Company-ID": company,
        "X-User-ID": "user-admin",
        "X-User-Email": "admin@example.com",
        "X-User-Role": "admin",
    }


@pytest.fixture
def agent_headers(company: str) -> dict[str, str]:
    """Gateway headers for a non-admin agent of the seeded company."""
    return {
        "X-Company-ID": company,
        "X-User-ID": "user-agent",
        "X-User-Email": "agent@example.com",
        "X-User-Role": "agent",
    }
