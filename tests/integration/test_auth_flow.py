"""Integration tests for register/login over the HTTP surface (in-memory store)."""

from httpx import AsyncClient

from src.bootstrap import TradingPlatform
from src.pt_common.enums import AccountStatus


def _registration(email: str = "alice@example.com", password: str = "secret1") -> dict[str, str]:
    return {"name": "Alice", "email": email, "password": password, "confirm_password": password}


class TestRegister:
    async def test_register_success(self, client: AsyncClient) -> None:
        resp = await client.post("/api/v1/auth/register", json=_registration())
        assert resp.status_code == 201
        body = resp.json()
        assert body["code"] == 0
        assert body["data"]["email"] == "alice@example.com"
        assert body["data"]["user_id"].startswith("user_")
        assert "request_id" in body
        assert "X-Request-ID" in resp.headers

    async def test_register_duplicate_email(self, client: AsyncClient) -> None:
        await client.post("/api/v1/auth/register", json=_registration())
        resp = await client.post("/api/v1/auth/register", json=_registration("ALICE@example.com"))
        assert resp.status_code == 409
        assert resp.json()["code"] == 1002

    async def test_register_short_password(self, client: AsyncClient) -> None:
        resp = await client.post("/api/v1/auth/register", json=_registration(password="abc"))
        assert resp.status_code == 422

    async def test_register_password_mismatch(self, client: AsyncClient) -> None:
        resp = await client.post(
            "/api/v1/auth/register",
            json={**_registration(), "confirm_password": "different"},
        )
        assert resp.status_code == 422


class TestLogin:
    async def test_login_success(self, client: AsyncClient) -> None:
        await client.post("/api/v1/auth/register", json=_registration())
        resp = await client.post(
            "/api/v1/auth/login", json={"email": "alice@example.com", "password": "secret1"}
        )
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["token_type"] == "Bearer"
        assert data["user"]["email"] == "alice@example.com"

    async def test_login_wrong_password(self, client: AsyncClient) -> None:
        await client.post("/api/v1/auth/register", json=_registration())
        resp = await client.post(
            "/api/v1/auth/login", json={"email": "alice@example.com", "password": "nope"}
        )
        assert resp.status_code == 401
        assert resp.json()["code"] == 1003

    async def test_login_unknown_email_same_error(self, client: AsyncClient) -> None:
        resp = await client.post(
            "/api/v1/auth/login", json={"email": "ghost@example.com", "password": "secret1"}
        )
        assert resp.status_code == 401
        assert resp.json()["code"] == 1003

    async def test_blocked_user_cannot_log_in(
        self, client: AsyncClient, api_platform: TradingPlatform
    ) -> None:
        await client.post("/api/v1/auth/register", json=_registration())
        account = api_platform.accounts.find_by_email("alice@example.com")
        assert account is not None
        await api_platform.set_account_status(account.id, AccountStatus.BLOCKED)

        resp = await client.post(
            "/api/v1/auth/login", json={"email": "alice@example.com", "password": "secret1"}
        )
        assert resp.status_code == 403
        assert resp.json()["code"] == 1004


class TestProtectedEndpoints:
    async def test_missing_token(self, client: AsyncClient) -> None:
        resp = await client.get("/api/v1/portfolio/value")
        assert resp.status_code == 401

    async def test_garbage_token(self, client: AsyncClient) -> None:
        resp = await client.get(
            "/api/v1/portfolio/value", headers={"Authorization": "Bearer not.a.token"}
        )
        assert resp.status_code == 401

    async def test_blocking_revokes_existing_token(
        self,
        client: AsyncClient,
        api_platform: TradingPlatform,
        auth_headers: dict[str, str],
    ) -> None:
        account = api_platform.accounts.find_by_email("alice@example.com")
        await api_platform.set_account_status(account.id, AccountStatus.BLOCKED)  # type: ignore[union-attr]

        resp = await client.get("/api/v1/portfolio/value", headers=auth_headers)
        assert resp.status_code == 403

    async def test_deleted_account_token_rejected(
        self,
        client: AsyncClient,
        api_platform: TradingPlatform,
        auth_headers: dict[str, str],
    ) -> None:
        account = api_platform.accounts.find_by_email("alice@example.com")
        await api_platform.delete_account(account.id)  # type: ignore[union-attr]

        resp = await client.get("/api/v1/portfolio/value", headers=auth_headers)
        assert resp.status_code == 401


async def test_health(client: AsyncClient) -> None:
    resp = await client.get("/health")
    assert resp.json()["status"] == "ok"


class TestRequestId:
    async def test_client_request_id_is_echoed(self, client: AsyncClient) -> None:
        resp = await client.post(
            "/api/v1/auth/register",
            json=_registration(),
            headers={"X-Request-ID": "client-trace-42"},
        )
        assert resp.headers["X-Request-ID"] == "client-trace-42"
        assert resp.json()["request_id"] == "client-trace-42"

    async def test_error_response_carries_request_id(self, client: AsyncClient) -> None:
        resp = await client.get("/api/v1/quotes/ZZZZ", headers={"X-Request-ID": "lookup-1"})
        assert resp.status_code == 404
        assert resp.json()["request_id"] == "lookup-1"
