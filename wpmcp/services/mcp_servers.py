# Copyright (c) 2026 WPMCP Contributors. All Rights Reserved.

"""
Tenant Directory — registration, lookup, sync and removal of WordPress sites.

Uniqueness of ``slug`` and ``wordpress_url`` is enforced by the table's
unique indexes. Losing an insert race on the URL surfaces as
DuplicateSiteError; losing it on the slug re-derives the slug.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from wpmcp.api.errors import (
    DuplicateSiteError,
    InvalidSiteError,
    SlugConflictError,
    TenantNotFoundError,
)
from wpmcp.api.schemas import McpServerInfo
from wpmcp.core.tenant import TenantContext
from wpmcp.services.slugs import base_slug, ensure_unique_slug
from wpmcp.storage.models import McpServer, McpServerStatus
from wpmcp.storage.repositories import McpServerRepository
from wpmcp.wordpress.client import WordPressClient, normalize_url
from wpmcp.wordpress.types import SiteValidation

logger = logging.getLogger("wpmcp.directory")

INSERT_ATTEMPTS = 3


def connection_endpoint(base_url: str, slug: str) -> str:
    return f"{base_url.rstrip('/')}/api/s/{slug}/mcp"


def to_server_info(server: McpServer, base_url: str) -> McpServerInfo:
    return McpServerInfo(
        id=server.id,
        slug=server.slug,
        wordpress_url=server.wordpress_url,
        site_name=server.site_name,
        status=server.status,
        post_count=server.post_count,
        created_at=server.created_at.isoformat(),
        connection_endpoint=connection_endpoint(base_url, server.slug),
        featured=bool(server.featured),
    )


class McpServerService:
    def __init__(self, db: AsyncSession, wordpress: WordPressClient, base_url: str):
        self.repo = McpServerRepository(db)
        self.db = db
        self.wordpress = wordpress
        self.base_url = base_url

    # ── Lookup ────────────────────────────────────────────────

    async def find_by_slug(self, slug: str) -> Optional[McpServer]:
        return await self.repo.get_by_slug(slug)

    async def resolve_tenant(self, slug: str) -> Optional[TenantContext]:
        server = await self.repo.get_by_slug(slug)
        return TenantContext.from_server(server) if server else None

    async def find_all(self, featured: Optional[bool] = None) -> List[McpServerInfo]:
        servers = await self.repo.list(featured=featured)
        return [to_server_info(s, self.base_url) for s in servers]

    async def find_one(self, server_id: uuid.UUID) -> McpServerInfo:
        return to_server_info(await self._get_or_404(server_id), self.base_url)

    async def _get_or_404(self, server_id: uuid.UUID) -> McpServer:
        server = await self.repo.get(server_id)
        if server is None:
            raise TenantNotFoundError(str(server_id))
        return server

    # ── Mutations ─────────────────────────────────────────────

    async def create(self, wordpress_url: str, slug: Optional[str] = None) -> McpServerInfo:
        """Validate the live site, derive a unique slug and persist the tenant."""
        normalized = normalize_url(wordpress_url)

        if await self.repo.get_by_url(normalized):
            raise DuplicateSiteError(normalized)

        validation = await self.wordpress.validate(normalized)
        if not validation.is_valid:
            raise InvalidSiteError(validation.error_message, normalized)

        base = base_slug(normalized, requested=slug, site_name=validation.site_name)
        server = await self._insert(normalized, base, validation)

        logger.info(
            "Registered MCP server %s for %s", server.slug, normalized,
            extra={"tenant_slug": server.slug, "tenant_id": str(server.id)},
        )
        return to_server_info(server, self.base_url)

    async def _insert(self, normalized: str, base: str, validation: SiteValidation) -> McpServer:
        """
        Insert with a freshly derived slug. A unique violation means either
        the URL was registered concurrently (409) or another site took the
        slug first, in which case the slug is derived again.
        """
        for attempt in range(1, INSERT_ATTEMPTS + 1):
            unique = await ensure_unique_slug(base, self.repo.slug_exists)
            server = McpServer(
                slug=unique,
                wordpress_url=normalized,
                site_name=validation.site_name,
                site_description=validation.site_description,
                post_count=validation.post_count,
                status=McpServerStatus.ACTIVE.value,
            )
            try:
                return await self.repo.add(server)
            except IntegrityError as e:
                await self.db.rollback()
                if await self.repo.get_by_url(normalized):
                    logger.warning("Concurrent registration lost for %s", normalized)
                    raise DuplicateSiteError(normalized) from e
                logger.warning(
                    "Slug %s taken concurrently (attempt %d/%d): %s",
                    unique, attempt, INSERT_ATTEMPTS, e.orig,
                )
        raise SlugConflictError(base)

    async def delete(self, server_id: uuid.UUID) -> None:
        if not await self.repo.delete(server_id):
            raise TenantNotFoundError(str(server_id))
        logger.info("Deleted MCP server %s", server_id, extra={"tenant_id": str(server_id)})

    async def sync(self, server_id: uuid.UUID) -> McpServerInfo:
        """
        Re-probe the site. On failure only status/last_error change; the
        previously stored descriptive fields are kept.
        """
        server = await self._get_or_404(server_id)
        validation = await self.wordpress.validate(server.wordpress_url)

        if validation.is_valid:
            server.site_name = validation.site_name
            server.site_description = validation.site_description
            server.post_count = validation.post_count
            server.status = McpServerStatus.ACTIVE.value
            server.last_error = None
        else:
            server.status = McpServerStatus.ERROR.value
            server.last_error = validation.error_message or "Unknown validation error"
            logger.warning(
                "Sync failed for %s: %s", server.slug, server.last_error,
                extra={"tenant_slug": server.slug, "tenant_id": str(server.id)},
            )

        server.last_sync_at = datetime.now(timezone.utc)
        await self.repo.save(server)
        return to_server_info(server, self.base_url)
