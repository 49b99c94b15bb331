# Copyright (c) 2026 WPMCP Contributors. All Rights Reserved.
"""Unit tests for the REST API: tenant management, health, metrics, MCP Apps."""

import uuid

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from wpmcp.core.metrics import platform_metrics
from wpmcp.main import create_app

from conftest import ORIGIN_A


@pytest.fixture
def app(db_engine, test_settings, fake_wordpress):
    return create_app(test_settings, wordpress=fake_wordpress)


@pytest_asyncio.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c


async def _create(client, url=ORIGIN_A, **body):
    return await client.post("/api/mcp-servers", json={"wordpressUrl": url, **body})


class TestMcpServersAPI:
    @pytest.mark.asyncio
    async def test_create(self, client):
        resp = await _create(client)
        assert resp.status_code == 201
        data = resp.json()
        assert data["slug"] == "alpha-blog"
        assert data["wordpressUrl"] == ORIGIN_A
        assert data["siteName"] == "Alpha Blog"
        assert data["postCount"] == 25
        assert data["status"] == "active"
        assert data["connectionEndpoint"] == "http://gateway.test/api/s/alpha-blog/mcp"
        assert data["featured"] is False
        uuid.UUID(data["id"])
        assert "X-Trace-Id" in resp.headers

    @pytest.mark.asyncio
    async def test_create_with_slug(self, client):
        resp = await _create(client, slug="my-alpha")
        assert resp.status_code == 201
        assert resp.json()["slug"] == "my-alpha"

    @pytest.mark.asyncio
    async def test_create_duplicate(self, client):
        assert (await _create(client)).status_code == 201
        resp = await _create(client, url="alpha.example.com/")
        assert resp.status_code == 409
        body = resp.json()
        assert body["code"] == "MCP_SERVER_EXISTS"
        assert "trace_id" in body

    @pytest.mark.asyncio
    async def test_create_unreachable_site(self, client):
        resp = await _create(client, url="https://nowhere.example.net")
        assert resp.status_code == 400
        assert resp.json()["code"] == "INVALID_WORDPRESS_SITE"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [
            {},
            {"wordpressUrl": ""},
            {"wordpressUrl": "not a url"},
            {"wordpressUrl": ORIGIN_A, "slug": "Bad Slug"},
        ],
    )
    async def test_create_validation(self, client, fake_wordpress, body):
        resp = await client.post("/api/mcp-servers", json=body)
        assert resp.status_code == 400
        assert resp.json()["code"] == "VALIDATION_ERROR"
        assert fake_wordpress.calls == []

    @pytest.mark.asyncio
    async def test_list_get_delete(self, client):
        created = (await _create(client)).json()

        listed = await client.get("/api/mcp-servers")
        assert [s["slug"] for s in listed.json()] == ["alpha-blog"]

        one = await client.get(f"/api/mcp-servers/{created['id']}")
        assert one.status_code == 200
        assert one.json()["id"] == created["id"]

        deleted = await client.delete(f"/api/mcp-servers/{created['id']}")
        assert deleted.status_code == 204

        missing = await client.get(f"/api/mcp-servers/{created['id']}")
        assert missing.status_code == 404
        assert missing.json()["code"] == "MCP_SERVER_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_list_featured(self, client):
        await _create(client)
        resp = await client.get("/api/mcp-servers", params={"featured": "true"})
        assert resp.status_code == 200
        assert resp.json() == []

    @pytest.mark.asyncio
    async def test_delete_missing(self, client):
        resp = await client.delete(f"/api/mcp-servers/{uuid.uuid4()}")
        assert resp.status_code == 404

    @pytest.mark.asyncio
    async def test_bad_uuid(self, client):
        resp = await client.get("/api/mcp-servers/not-a-uuid")
        assert resp.status_code == 400

    @pytest.mark.asyncio
    async def test_sync(self, client, fake_wordpress):
        created = (await _create(client)).json()
        fake_wordpress.unreachable.add(ORIGIN_A)

        resp = await client.post(f"/api/mcp-servers/{created['id']}/sync")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "error"
        assert data["siteName"] == "Alpha Blog"


class TestObservabilityAPI:
    @pytest.mark.asyncio
    async def test_health(self, client):
        resp = await client.get("/api/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "healthy"
        assert data["database"] == "connected"
        assert "timestamp" in data

    @pytest.mark.asyncio
    async def test_metrics(self, client):
        platform_metrics.reset()
        await client.post("/api/s/ghost/mcp", json={})
        resp = await client.get("/api/metrics")
        assert resp.status_code == 200
        assert resp.json()["counters"]["mcp_not_found"] == 1


class TestMcpAppsAPI:
    @pytest.fixture
    def app(self, db_engine, test_settings, fake_wordpress, tmp_path):
        (tmp_path / "assets").mkdir()
        (tmp_path / "posts-list.html").write_text("<html>list</html>")
        (tmp_path / "assets" / "app.js").write_text("console.log(1)")
        (tmp_path / "secret.txt").write_text("nope")
        cfg = test_settings.model_copy(update={"MCP_APPS_DIST": str(tmp_path)})
        return create_app(cfg, wordpress=fake_wordpress)

    @pytest.mark.asyncio
    async def test_serve_app(self, client):
        resp = await client.get("/api/mcp-apps/posts-list")
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/html")
        assert "list" in resp.text

    @pytest.mark.asyncio
    async def test_unbuilt_app(self, client):
        resp = await client.get("/api/mcp-apps/post-detail")
        assert resp.status_code == 404
        assert resp.json()["code"] == "MCP_APP_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_unknown_app(self, client):
        assert (await client.get("/api/mcp-apps/secret")).status_code == 404

    @pytest.mark.asyncio
    async def test_asset(self, client):
        resp = await client.get("/api/mcp-apps/assets/app.js")
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("application/javascript")

    @pytest.mark.asyncio
    async def test_asset_traversal(self, client):
        resp = await client.get("/api/mcp-apps/assets/..%2Fsecret.txt")
        assert resp.status_code == 404
