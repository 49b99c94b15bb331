# Copyright (c) 2026 WPMCP Contributors. All Rights Reserved.

"""
API Dependencies — FastAPI dependency injection.
"""

from __future__ import annotations

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from wpmcp.core.context import get_platform_context
from wpmcp.services.mcp_servers import McpServerService
from wpmcp.storage.database import get_db


async def get_mcp_server_service(db: AsyncSession = Depends(get_db)) -> McpServerService:
    """Tenant directory bound to this request's DB session."""
    ctx = get_platform_context()
    return McpServerService(db, ctx.wordpress, ctx.settings.BASE_URL)
