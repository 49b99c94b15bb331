# Copyright (c) 2026 WPMCP Contributors. All Rights Reserved.

"""
Repository Layer — typed access to the tenant table.

Each repository takes an AsyncSession; committing is the caller's job.
"""

from __future__ import annotations

import uuid
from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from wpmcp.storage.models import McpServer


class McpServerRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, server_id: uuid.UUID) -> Optional[McpServer]:
        result = await self.db.execute(
            select(McpServer).where(McpServer.id == server_id)
        )
        return result.scalar_one_or_none()

    async def get_by_slug(self, slug: str) -> Optional[McpServer]:
        result = await self.db.execute(
            select(McpServer).where(McpServer.slug == slug)
        )
        return result.scalar_one_or_none()

    async def get_by_url(self, wordpress_url: str) -> Optional[McpServer]:
        result = await self.db.execute(
            select(McpServer).where(McpServer.wordpress_url == wordpress_url)
        )
        return result.scalar_one_or_none()

    async def slug_exists(self, slug: str) -> bool:
        result = await self.db.execute(
            select(McpServer.id).where(McpServer.slug == slug)
        )
        return result.first() is not None

    async def list(self, featured: Optional[bool] = None) -> List[McpServer]:
        """List servers, newest first, optionally filtered on ``featured``."""
        stmt = select(McpServer).order_by(McpServer.created_at.desc())
        if featured is not None:
            stmt = stmt.where(McpServer.featured == featured)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def add(self, server: McpServer) -> McpServer:
        """Insert and flush so unique-constraint violations surface here."""
        self.db.add(server)
        await self.db.flush()
        return server

    async def save(self, server: McpServer) -> McpServer:
        await self.db.flush()
        return server

    async def delete(self, server_id: uuid.UUID) -> bool:
        result = await self.db.execute(
            delete(McpServer).where(McpServer.id == server_id)
        )
        return result.rowcount > 0
