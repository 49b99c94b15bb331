# Copyright (c) 2026 WPMCP Contributors. All Rights Reserved.

"""
Shared test fixtures for all WPMCP tests.
"""

from __future__ import annotations

import asyncio
from typing import Dict, List, Optional, Tuple

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from wpmcp.core.config import GatewaySettings
from wpmcp.core.tenant import TenantContext
from wpmcp.storage.database import Base, override_engine_for_test
from wpmcp.storage.models import McpServer
from wpmcp.wordpress.client import PostNotFoundError, WordPressError, normalize_url
from wpmcp.wordpress.types import (
    ListPostsParams,
    ListPostsResponse,
    Pagination,
    PostDetail,
    PostListItem,
    SiteValidation,
)

ORIGIN_A = "https://alpha.example.com"
ORIGIN_B = "https://beta.example.org"


# ── Fake WordPress Client ────────────────────────────────────


class FakeWordPress:
    """
    In-memory stand-in for WordPressClient.

    Each origin has a fixed post set; posts are dicts with ``id``,
    ``categories`` and ``tags``. Every call is recorded with its origin.
    """

    def __init__(self):
        self.sites: Dict[str, Dict] = {}
        self.unreachable: set = set()
        self.delays: Dict[str, float] = {}
        self.calls: List[Tuple[str, str]] = []

    def add_site(self, origin: str, name: str, posts: Optional[List[Dict]] = None) -> None:
        self.sites[normalize_url(origin)] = {"name": name, "posts": posts or []}

    async def _enter(self, op: str, origin: str) -> Dict:
        self.calls.append((op, origin))
        delay = self.delays.get(origin)
        if delay:
            await asyncio.sleep(delay)
        if origin in self.unreachable or origin not in self.sites:
            raise WordPressError("Unable to connect to the WordPress site. Please check the URL and try again.")
        return self.sites[origin]

    async def validate(self, wordpress_url: str) -> SiteValidation:
        origin = normalize_url(wordpress_url)
        try:
            site = await self._enter("validate", origin)
        except WordPressError as e:
            return SiteValidation(is_valid=False, error_message=str(e))
        return SiteValidation(
            is_valid=True,
            site_name=site["name"],
            site_description=f"{site['name']} description",
            post_count=len(site["posts"]),
        )

    async def fetch_posts(self, wordpress_url: str, params: ListPostsParams) -> ListPostsResponse:
        site = await self._enter("fetch_posts", wordpress_url)
        posts = site["posts"]
        if params.categories:
            posts = [p for p in posts if set(p.get("categories", [])) & set(params.categories)]
        if params.tags:
            posts = [p for p in posts if set(p.get("tags", [])) & set(params.tags)]
        if params.search:
            posts = [p for p in posts if params.search.lower() in p.get("title", "").lower()]

        total = len(posts)
        total_pages = max(1, -(-total // params.per_page))
        start = (params.page - 1) * params.per_page
        page = posts[start:start + params.per_page]
        return ListPostsResponse(
            items=[
                PostListItem(
                    id=p["id"],
                    title=p.get("title", f"Post {p['id']}"),
                    excerpt="",
                    date="2026-01-01T00:00:00",
                    slug=f"post-{p['id']}",
                    link=f"{wordpress_url}/?p={p['id']}",
                )
                for p in page
            ],
            pagination=Pagination(
                page=params.page,
                per_page=params.per_page,
                total=total,
                total_pages=total_pages,
                has_next_page=params.page < total_pages,
                has_previous_page=params.page > 1,
            ),
        )

    async def fetch_post(self, wordpress_url: str, post_id: int) -> PostDetail:
        site = await self._enter("fetch_post", wordpress_url)
        for p in site["posts"]:
            if p["id"] == post_id:
                return PostDetail(
                    id=post_id,
                    title=p.get("title", f"Post {post_id}"),
                    content=p.get("content", "<p>Body</p>"),
                    excerpt="",
                    date="2026-01-01T00:00:00",
                    modified="2026-01-02T00:00:00",
                    slug=f"post-{post_id}",
                    link=f"{wordpress_url}/?p={post_id}",
                )
        raise PostNotFoundError(post_id)

    def origins_for(self, op: str) -> List[str]:
        return [origin for name, origin in self.calls if name == op]

    async def close(self) -> None:
        pass


def sample_posts(count: int = 25) -> List[Dict]:
    """Posts 1..count; category = id % 3, tag = 5 for even ids."""
    return [
        {
            "id": i,
            "title": f"Post {i}",
            "categories": [i % 3],
            "tags": [5] if i % 2 == 0 else [7],
        }
        for i in range(1, count + 1)
    ]


# ── Fixtures ─────────────────────────────────────────────────


@pytest.fixture
def fake_wordpress() -> FakeWordPress:
    wp = FakeWordPress()
    wp.add_site(ORIGIN_A, "Alpha Blog", sample_posts())
    wp.add_site(ORIGIN_B, "Beta News", sample_posts(3))
    return wp


@pytest.fixture
def test_settings() -> GatewaySettings:
    return GatewaySettings(
        _env_file=None,
        BASE_URL="http://gateway.test",
        API_BASE_URL="http://gateway.test",
        DB_AUTO_CREATE=False,
        MCP_STATELESS=True,
        MCP_JSON_RESPONSE=True,
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def tenant_a() -> TenantContext:
    return TenantContext(wordpress_url=ORIGIN_A, slug="alpha-blog", tenant_id="t-a", site_name="Alpha Blog")


@pytest.fixture
def tenant_b() -> TenantContext:
    return TenantContext(wordpress_url=ORIGIN_B, slug="beta-news", tenant_id="t-b", site_name="Beta News")


@pytest_asyncio.fixture
async def db_engine():
    """SQLite in-memory engine injected as the gateway's database."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    override_engine_for_test(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine):
    from wpmcp.storage.database import get_session_factory

    async with get_session_factory()() as session:
        yield session


async def insert_server(session, slug: str, wordpress_url: str, **fields) -> McpServer:
    server = McpServer(slug=slug, wordpress_url=wordpress_url, **fields)
    session.add(server)
    await session.commit()
    return server
