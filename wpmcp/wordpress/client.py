# Copyright (c) 2026 WPMCP Contributors. All Rights Reserved.

"""
WordPress Content Client — stateless HTTP client over the WP REST API.

Every call takes the WordPress origin explicitly; the client itself holds
no tenant state and is shared by all tenants and requests.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional
from urllib.parse import urlsplit

import httpx

from wpmcp.core.metrics import platform_metrics
from wpmcp.wordpress.text import strip_html
from wpmcp.wordpress.types import (
    AuthorRef,
    FeaturedImage,
    ListPostsParams,
    ListPostsResponse,
    Pagination,
    PostDetail,
    PostListItem,
    SiteValidation,
    TermRef,
)

logger = logging.getLogger("wpmcp.wordpress")

API_PATH = "/wp-json/wp/v2"
CONNECT_ERROR_MESSAGE = (
    "Unable to connect to the WordPress site. Please check the URL and try again."
)


class WordPressError(Exception):
    """Upstream failure with a message safe to show to users and agents."""


class PostNotFoundError(WordPressError):
    def __init__(self, post_id: int):
        self.post_id = post_id
        super().__init__(f"Post with ID {post_id} not found")


def normalize_url(url: str) -> str:
    """Trim, default the scheme to https and drop trailing slashes."""
    normalized = (url or "").strip()
    if not normalized.startswith(("http://", "https://")):
        normalized = f"https://{normalized}"
    return normalized.rstrip("/")


def is_valid_site_url(url: str) -> bool:
    """True for an http(s) URL with a dotted host (or localhost) and no spaces."""
    if not url or any(ch.isspace() for ch in url):
        return False
    parts = urlsplit(url)
    if parts.scheme not in ("http", "https"):
        return False
    host = parts.hostname or ""
    return host == "localhost" or ("." in host and not host.startswith(".") and not host.endswith("."))


def api_base(wordpress_url: str) -> str:
    return f"{normalize_url(wordpress_url)}{API_PATH}"


def _rendered(obj: Dict[str, Any], key: str) -> str:
    value = obj.get(key)
    if isinstance(value, dict):
        return value.get("rendered") or ""
    return value or ""


def _int_header(resp: httpx.Response, name: str, default: int) -> int:
    try:
        return int(resp.headers.get(name, default))
    except (TypeError, ValueError):
        return default


class WordPressClient:
    """
    Async WordPress REST API client.

    Usage:
        client = WordPressClient(timeout=30.0)
        listing = await client.fetch_posts("https://example.com", ListPostsParams())
    """

    def __init__(
        self,
        timeout: float = 30.0,
        validate_timeout: float = 10.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._timeout = timeout
        self._validate_timeout = validate_timeout
        self._client = http_client or httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=True,
            headers={"Accept": "application/json"},
        )

    # ── Transport ─────────────────────────────────────────────

    async def _request(
        self,
        method: str,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> httpx.Response:
        platform_metrics.inc("wordpress_requests")
        try:
            return await self._client.request(
                method, url, params=params, timeout=timeout or self._timeout,
            )
        except httpx.TimeoutException as e:
            logger.warning("WordPress request timed out: %s %s", method, url)
            raise WordPressError(
                f"The WordPress site did not respond in time ({url})."
            ) from e
        except httpx.RequestError as e:
            logger.warning("WordPress request failed: %s %s: %s", method, url, e)
            raise WordPressError(CONNECT_ERROR_MESSAGE) from e

    @staticmethod
    def _json(resp: httpx.Response) -> Any:
        try:
            return resp.json()
        except ValueError as e:
            raise WordPressError(
                "The site returned a malformed response instead of WordPress REST API JSON."
            ) from e

    async def _fetch_optional(self, url: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """Best-effort lookup used for post enrichment; None on any failure."""
        try:
            resp = await self._request("GET", url, params=params)
            if resp.status_code != 200:
                return None
            return self._json(resp)
        except WordPressError as e:
            logger.warning("Optional lookup failed: %s: %s", url, e)
            return None

    # ── Validation ────────────────────────────────────────────

    async def validate(self, wordpress_url: str) -> SiteValidation:
        """Probe the site root API and the post count."""
        origin = normalize_url(wordpress_url)
        try:
            info = await self._fetch_site_info(origin)
            post_count = await self._count_posts(origin)
        except WordPressError as e:
            logger.warning("WordPress validation failed for %s: %s", origin, e)
            return SiteValidation(is_valid=False, error_message=str(e))

        return SiteValidation(
            is_valid=True,
            site_name=info["name"],
            site_description=info["description"],
            post_count=post_count,
        )

    async def _fetch_site_info(self, origin: str) -> Dict[str, Any]:
        resp = await self._request("GET", f"{origin}/wp-json", timeout=self._validate_timeout)
        if resp.status_code != 200:
            raise WordPressError(
                f"Failed to fetch site info: {resp.status_code} {resp.reason_phrase}"
            )
        data = self._json(resp)
        if not isinstance(data, dict) or ("namespaces" not in data and "name" not in data):
            raise WordPressError("The site does not expose the WordPress REST API.")
        return {
            "name": data.get("name") or "Unknown Site",
            "description": data.get("description") or "",
        }

    async def _count_posts(self, origin: str) -> int:
        resp = await self._request(
            "HEAD",
            f"{origin}{API_PATH}/posts",
            params={"per_page": 1},
            timeout=self._validate_timeout,
        )
        if resp.status_code != 200:
            logger.warning("Failed to count posts for %s: %s", origin, resp.status_code)
            return 0
        return _int_header(resp, "X-WP-Total", 0)

    # ── Posts ─────────────────────────────────────────────────

    async def fetch_posts(self, wordpress_url: str, params: ListPostsParams) -> ListPostsResponse:
        """
        List posts with search/filter support.

        WordPress applies OR within ``categories`` and within ``tags`` and
        AND between the two, which is exactly the listing contract.
        """
        query: Dict[str, Any] = {
            "page": params.page,
            "per_page": params.per_page,
            "_embed": "wp:featuredmedia",
        }
        if params.search:
            query["search"] = params.search
        if params.categories:
            query["categories"] = ",".join(str(c) for c in params.categories)
        if params.tags:
            query["tags"] = ",".join(str(t) for t in params.tags)

        resp = await self._request("GET", f"{api_base(wordpress_url)}/posts", params=query)
        if resp.status_code != 200:
            raise WordPressError(
                f"Failed to fetch posts: {resp.status_code} {resp.reason_phrase}"
            )
        posts = self._json(resp)
        if not isinstance(posts, list):
            raise WordPressError("Unexpected posts payload from WordPress.")

        total = _int_header(resp, "X-WP-Total", len(posts))
        total_pages = _int_header(resp, "X-WP-TotalPages", 1)
        return ListPostsResponse(
            items=[self._to_list_item(p) for p in posts],
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
        """Fetch one post with author, featured image and terms resolved in parallel."""
        base = api_base(wordpress_url)
        resp = await self._request("GET", f"{base}/posts/{post_id}")
        if resp.status_code == 404:
            raise PostNotFoundError(post_id)
        if resp.status_code != 200:
            raise WordPressError(
                f"Failed to fetch post: {resp.status_code} {resp.reason_phrase}"
            )
        post = self._json(resp)
        if not isinstance(post, dict):
            raise WordPressError("Unexpected post payload from WordPress.")

        author, media, categories, tags = await asyncio.gather(
            self._fetch_optional(f"{base}/users/{post.get('author')}") if post.get("author") else _none(),
            self._fetch_optional(f"{base}/media/{post.get('featured_media')}") if post.get("featured_media") else _none(),
            self._fetch_terms(base, "categories", post.get("categories") or []),
            self._fetch_terms(base, "tags", post.get("tags") or []),
        )

        return PostDetail(
            id=post["id"],
            title=strip_html(_rendered(post, "title")),
            content=_rendered(post, "content"),
            excerpt=strip_html(_rendered(post, "excerpt")),
            date=post.get("date") or "",
            modified=post.get("modified") or "",
            slug=post.get("slug") or "",
            link=post.get("link") or "",
            author=AuthorRef(id=author["id"], name=author.get("name") or "") if isinstance(author, dict) and "id" in author else None,
            featured_image=(
                FeaturedImage(url=media["source_url"], alt=strip_html(_rendered(media, "title")))
                if isinstance(media, dict) and media.get("source_url")
                else None
            ),
            categories=categories,
            tags=tags,
        )

    async def _fetch_terms(self, base: str, taxonomy: str, ids: List[int]) -> List[TermRef]:
        if not ids:
            return []
        data = await self._fetch_optional(
            f"{base}/{taxonomy}",
            params={"include": ",".join(str(i) for i in ids), "per_page": min(len(ids), 100)},
        )
        if not isinstance(data, list):
            return []
        return [TermRef(id=t["id"], name=t.get("name") or "") for t in data if isinstance(t, dict) and "id" in t]

    @staticmethod
    def _to_list_item(post: Dict[str, Any]) -> PostListItem:
        embedded = post.get("_embedded") or {}
        media = (embedded.get("wp:featuredmedia") or [None])[0]
        featured_url = media.get("source_url") if isinstance(media, dict) else None
        return PostListItem(
            id=post["id"],
            title=strip_html(_rendered(post, "title")),
            excerpt=strip_html(_rendered(post, "excerpt")),
            date=post.get("date") or "",
            slug=post.get("slug") or "",
            link=post.get("link") or "",
            featured_image_url=featured_url,
        )

    # ── Lifecycle ─────────────────────────────────────────────

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()


async def _none() -> None:
    return None
