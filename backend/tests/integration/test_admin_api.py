"""Integration tests for the auth and admin endpoints over ASGI."""

import pytest
from httpx import ASGITransport, AsyncClient

from portfolio.application.services import AdminDashboard, AdminSessionRegistry
from portfolio.application.services.entity_catalog import load_entity_catalog
from portfolio.infrastructure.dependencies import get_admin_registry, get_auth_provider, get_table_gateway
from portfolio.infrastructure.memory import InMemoryAuthProvider
from portfolio.infrastructure.notifications.notification_log import NotificationLog, StaticConfirmer
from portfolio.main import app
from tests.fakes import FakeObjectStore, RecordingGateway, work_row

EMAIL = "admin@example.com"
PASSWORD = "secret123"


@pytest.fixture
def gateway():
    gateway = RecordingGateway({
        "works": [work_row(id="w1", title="Cafe site", created_at="2024-01-01T00:00:00+00:00")],
        "brands": [{"id": "x1", "name": "Acme"}],
        "contact_submissions": [
            {
                "id": "m1",
                "name": "Ada",
                "email": "ada@example.com",
                "subject": "Logo",
                "message": "Hello",
                "read": False,
            }
        ],
    })
    provider = InMemoryAuthProvider()
    store = FakeObjectStore(failing={b"too-big"})

    def build(session):
        return AdminDashboard(
            load_entity_catalog(), gateway, NotificationLog(), StaticConfirmer(False), object_store=store
        )

    registry = AdminSessionRegistry(build)
    app.dependency_overrides[get_table_gateway] = lambda: gateway
    app.dependency_overrides[get_auth_provider] = lambda: provider
    app.dependency_overrides[get_admin_registry] = lambda: registry
    yield gateway
    app.dependency_overrides.clear()


def _client() -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


async def _sign_in(client: AsyncClient) -> dict[str, str]:
    response = await client.post("/api/v1/auth/sign-up", json={"email": EMAIL, "password": PASSWORD})
    assert response.status_code == 201
    response = await client.post("/api/v1/auth/sign-in", json={"email": EMAIL, "password": PASSWORD})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


# ── Auth ──


@pytest.mark.asyncio
async def test_admin_requires_bearer_token(gateway):
    async with _client() as client:
        response = await client.get("/api/v1/admin")
        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

        response = await client.get("/api/v1/admin", headers={"Authorization": "Bearer forged"})
        assert response.status_code == 401


@pytest.mark.asyncio
async def test_sign_up_creates_profile_and_sign_out_revokes(gateway):
    async with _client() as client:
        headers = await _sign_in(client)
        assert gateway.rows("profiles")[0]["username"] == "admin"

        session = await client.get("/api/v1/auth/session", headers=headers)
        assert session.json()["user"]["email"] == EMAIL

        assert (await client.post("/api/v1/auth/sign-out", headers=headers)).status_code == 204
        assert (await client.get("/api/v1/auth/session", headers=headers)).status_code == 401


@pytest.mark.asyncio
async def test_wrong_password_is_401(gateway):
    async with _client() as client:
        await _sign_in(client)
        response = await client.post("/api/v1/auth/sign-in", json={"email": EMAIL, "password": "nope-nope"})
        assert response.status_code == 401


# ── Dashboard ──


@pytest.mark.asyncio
async def test_dashboard_summary_and_search(gateway):
    async with _client() as client:
        headers = await _sign_in(client)

        summary = (await client.get("/api/v1/admin", headers=headers)).json()
        assert summary["stats"]["works"] == 1
        assert summary["stats"]["unread"] == 1
        assert "contact_submissions" in summary["entities"]

        await client.put("/api/v1/admin/search", json={"search": "cafe"}, headers=headers)
        works = (await client.get("/api/v1/admin/entities/works", headers=headers)).json()
        assert [w["id"] for w in works["items"]] == ["w1"]
        brands = (await client.get("/api/v1/admin/entities/brands", headers=headers)).json()
        assert brands["items"] == []

        types = (await client.get("/api/v1/admin/entities", headers=headers)).json()
        works_type = next(t for t in types if t["name"] == "works")
        assert works_type["accepts_uploads"] is True


@pytest.mark.asyncio
async def test_unknown_entity_is_404(gateway):
    async with _client() as client:
        headers = await _sign_in(client)
        response = await client.get("/api/v1/admin/entities/testimonials", headers=headers)
        assert response.status_code == 404


# ── Form workflow ──


@pytest.mark.asyncio
async def test_create_work_with_images(gateway):
    async with _client() as client:
        headers = await _sign_in(client)
        base = "/api/v1/admin/entities/works/form"

        opened = await client.post(base, headers=headers)
        assert opened.json()["state"] == "creating"

        patched = await client.patch(
            base,
            json={"values": {"title": "Bakery", "category": "Web", "technologies": "Vue, Vite"}},
            headers=headers,
        )
        assert patched.json()["draft"]["title"] == "Bakery"

        upload = await client.post(
            f"{base}/assets",
            files=[
                ("files", ("a.png", b"aaa", "image/png")),
                ("files", ("huge.png", b"too-big", "image/png")),
            ],
            headers=headers,
        )
        body = upload.json()
        assert len(body["urls"]) == 1
        assert body["failures"][0]["filename"] == "huge.png"
        assert [n["severity"] for n in body["notifications"]] == ["success", "error"]
        assert body["form"]["draft"]["images"] == body["urls"]

        submitted = (await client.post(f"{base}/submit", headers=headers)).json()
        assert submitted["ok"] is True
        assert submitted["form"]["state"] == "closed"
        assert submitted["notifications"][0]["description"] == "Work created successfully"

    insert = gateway.calls_of("insert")[-1][2]
    assert insert["technologies"] == ["Vue", "Vite"]
    assert insert["image_url"] == body["urls"][0]


@pytest.mark.asyncio
async def test_edit_and_failed_submit_keeps_form_open(gateway):
    async with _client() as client:
        headers = await _sign_in(client)
        base = "/api/v1/admin/entities/works/form"

        opened = (await client.post(f"{base}/edit/w1", headers=headers)).json()
        assert opened["state"] == "editing" and opened["entity_id"] == "w1"

        gateway.fail["update"] = "permission denied"
        result = (await client.post(f"{base}/submit", headers=headers)).json()
        assert result["ok"] is False
        assert result["form"]["state"] == "editing"
        assert result["notifications"][0]["description"] == "Failed to save work"

        del gateway.fail["update"]
        assert (await client.post(f"{base}/submit", headers=headers)).json()["ok"] is True


@pytest.mark.asyncio
async def test_form_errors_map_to_status_codes(gateway):
    async with _client() as client:
        headers = await _sign_in(client)
        base = "/api/v1/admin/entities/skills/form"

        assert (await client.post(f"{base}/submit", headers=headers)).status_code == 409
        assert (await client.post(f"{base}/edit/missing", headers=headers)).status_code == 404

        await client.post(base, headers=headers)
        bad_field = await client.patch(base, json={"values": {"id": "x"}}, headers=headers)
        assert bad_field.status_code == 422

        cancelled = await client.delete(base, headers=headers)
        assert cancelled.json()["state"] == "closed"


@pytest.mark.asyncio
async def test_delete_requires_confirmation(gateway):
    async with _client() as client:
        headers = await _sign_in(client)
        url = "/api/v1/admin/entities/brands/items/x1"

        refused = (await client.delete(url, headers=headers)).json()
        assert refused["ok"] is False
        assert gateway.calls_of("delete") == []

        confirmed = (await client.delete(url, params={"confirm": "true"}, headers=headers)).json()
        assert confirmed["ok"] is True
        assert confirmed["notifications"][0]["description"] == "Brand deleted successfully"

        stats = (await client.get("/api/v1/admin/stats", headers=headers)).json()
        assert stats["brands"] == 0


# ── Inbox ──


@pytest.mark.asyncio
async def test_inbox_reply_marks_read(gateway):
    async with _client() as client:
        headers = await _sign_in(client)

        inbox = (await client.get("/api/v1/admin/messages", headers=headers)).json()
        assert [m["id"] for m in inbox["unread"]] == ["m1"]

        empty = await client.post("/api/v1/admin/messages/m1/reply", json={"text": "  "}, headers=headers)
        assert empty.status_code == 422

        reply = (await client.post(
            "/api/v1/admin/messages/m1/reply", json={"text": "Thanks!"}, headers=headers
        )).json()
        assert reply["ok"] is True
        assert reply["notifications"][-1]["description"] == "Reply sent to ada@example.com"

        inbox = (await client.get("/api/v1/admin/messages", headers=headers)).json()
        assert inbox["unread"] == [] and [m["id"] for m in inbox["read"]] == ["m1"]

        unread = (await client.put(
            "/api/v1/admin/messages/m1/read", json={"read": False}, headers=headers
        )).json()
        assert unread["notifications"][0]["description"] == "Message marked as unread"

        history = (await client.get("/api/v1/admin/notifications", headers=headers)).json()
        assert len(history) == 3
