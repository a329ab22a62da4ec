"""API test fixtures.

Provides an async HTTP client wired to the FastAPI app with the DI container
overridden to use fakes. Available to all colocated API tests under api/.

Pattern:
    1. Override get_container -> returns test_container (real services, fake repos)
    2. Override get_db        -> returns the AsyncMock session
    3. Authenticate with ``Authorization: Bearer <token>`` using the tokens
       seeded on the fake verifier (see TOKENS)
    4. Test hits the endpoint, asserts on HTTP response + fake state
"""

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from lorekeeper.api.deps import get_container, get_db
from lorekeeper.domains.resources.tests.conftest import ADMIN, MODERATOR, OTHER, OWNER

API_PREFIX = "/api/v1"

TOKENS = {
    "owner-token": OWNER,
    "other-token": OTHER,
    "admin-token": ADMIN,
    "mod-token": MODERATOR,
}


def bearer(token: str) -> dict:
    """Authorization header for a seeded token."""
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def client(test_container, fake_token_verifier, db):
    """Async HTTP client with faked DI container and session."""
    from lorekeeper.main import app

    for token, caller in TOKENS.items():
        fake_token_verifier.seed(token, caller)

    app.dependency_overrides[get_container] = lambda: test_container
    app.dependency_overrides[get_db] = lambda: db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url=f"http://test{API_PREFIX}") as ac:
        yield ac

    app.dependency_overrides.clear()
