# Copyright (c) 2026 WPMCP Contributors. All Rights Reserved.

"""
Protocol Engine — capability the tenant router delegates MCP requests to.

The router only needs three verb handlers and a lifespan hook. The
implementation here drives the mcp SDK's streamable HTTP session manager;
any compliant engine can replace it without touching router or tools.
"""

from __future__ import annotations

import logging
from typing import AsyncContextManager, Protocol

from mcp.server.fastmcp import FastMCP
from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
from starlette.types import Receive, Scope, Send

from wpmcp.core.tenant import TenantContext

logger = logging.getLogger("wpmcp.engine")


class ProtocolEngine(Protocol):
    """
    Handles one HTTP request of the MCP streamable HTTP transport.

    ``scope`` already carries the bound tenant in its state; ``tenant`` is
    passed alongside for engines that want it explicitly.
    """

    async def handle_post(self, scope: Scope, receive: Receive, send: Send, tenant: TenantContext) -> None:
        ...

    async def handle_get(self, scope: Scope, receive: Receive, send: Send, tenant: TenantContext) -> None:
        ...

    async def handle_delete(self, scope: Scope, receive: Receive, send: Send, tenant: TenantContext) -> None:
        ...

    def running(self) -> AsyncContextManager[None]:
        ...


class StreamableHttpEngine:
    """ProtocolEngine backed by ``StreamableHTTPSessionManager``."""

    def __init__(self, session_manager: StreamableHTTPSessionManager):
        self._session_manager = session_manager

    @classmethod
    def from_fastmcp(cls, mcp: FastMCP) -> "StreamableHttpEngine":
        # streamable_http_app() creates the server's session manager
        mcp.streamable_http_app()
        return cls(mcp.session_manager)

    async def _handle(self, scope: Scope, receive: Receive, send: Send, tenant: TenantContext) -> None:
        logger.debug("MCP %s for %s", scope["method"], tenant.slug, extra=tenant.log_extra)
        await self._session_manager.handle_request(scope, receive, send)

    async def handle_post(self, scope, receive, send, tenant):
        await self._handle(scope, receive, send, tenant)

    async def handle_get(self, scope, receive, send, tenant):
        await self._handle(scope, receive, send, tenant)

    async def handle_delete(self, scope, receive, send, tenant):
        await self._handle(scope, receive, send, tenant)

    def running(self) -> AsyncContextManager[None]:
        """Must be entered for the app's lifetime before the first request."""
        return self._session_manager.run()
