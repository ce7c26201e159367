"""Integration-test fixtures.

httpx's ASGITransport does not run the app lifespan, so each test installs
its own TradingPlatform (in-memory store, default quote table) on
``app.state`` before issuing requests.
"""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from config.settings import settings
from src.bootstrap import TradingPlatform
from src.main import app
from src.pt_quote.infrastructure.static_source import StaticQuoteSource
from src.pt_storage.infrastructure.memory_store import MemoryBlobStore

ADMIN_PASSWORD = "admin-pass-1"


@pytest.fixture
async def api_platform() -> AsyncGenerator[TradingPlatform, None]:
    platform = TradingPlatform(
        store=MemoryBlobStore(),
        quote_source=StaticQuoteSource(),
        hash_rounds=4,
    )
    await platform.start(admin_email=settings.ADMIN_EMAIL, admin_password=ADMIN_PASSWORD)
    app.state.platform = platform
    yield platform
    await platform.close()


@pytest.fixture
async def client(api_platform: TradingPlatform) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def _register_and_login(
    client: AsyncClient, email: str = "alice@example.com", password: str = "secret1"
) -> dict[str, str]:
    """Register a user and return Authorization headers for it."""
    await client.post("/api/v1/auth/register", json={
        "name": "Alice",
        "email": email,
        "password": password,
        "confirm_password": password,
    })
    resp = await client.post("/api/v1/auth/login", json={"email": email, "password": password})
    token = resp.json()["data"]["access_token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def auth_headers(client: AsyncClient) -> dict[str, str]:
    return await _register_and_login(client)


@pytest.fixture
async def admin_headers(client: AsyncClient) -> dict[str, str]:
    resp = await client.post(
        "/api/v1/auth/login",
        json={"email": settings.ADMIN_EMAIL, "password": ADMIN_PASSWORD},
    )
    return {"Authorization": f"Bearer {resp.json()['data']['access_token']}"}
