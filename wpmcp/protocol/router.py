# Copyright (c) 2026 WPMCP Contributors. All Rights Reserved.

"""
Tenant Router — binds every MCP request at ``/api/s/{slug}/mcp`` to its tenant.

Per request:
  1. resolve the slug through the tenant directory (Resolved | NotFound)
  2. NotFound → 404 JSON-RPC error; the protocol engine is never invoked
  3. Resolved → copy the ASGI scope with the TenantContext in its state
  4. hand the bound scope to the engine's handler for the HTTP verb

The router never catches errors raised by the engine or the tools.
The tenant lives only in the per-request scope copy, so the shared
FastMCP server and tool instances carry no tenant state.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, Optional, Protocol, Union

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from starlette.responses import JSONResponse
from starlette.types import Receive, Scope, Send

from wpmcp.core.metrics import platform_metrics
from wpmcp.core.tenant import TenantContext, bind_tenant
from wpmcp.protocol.engine import ProtocolEngine
from wpmcp.services.slugs import is_valid_slug
from wpmcp.storage.database import get_session_factory
from wpmcp.storage.repositories import McpServerRepository

logger = logging.getLogger("wpmcp.router")

# JSON-RPC error code used by MCP for unknown resources
NOT_FOUND_CODE = -32002

Handler = Callable[[Scope, Receive, Send, TenantContext], Awaitable[None]]


@dataclass(frozen=True)
class Resolved:
    tenant: TenantContext


@dataclass(frozen=True)
class NotFound:
    slug: str


Resolution = Union[Resolved, NotFound]


class TenantResolver(Protocol):
    async def resolve(self, slug: str) -> Resolution:
        ...


class DirectoryResolver:
    """Resolves slugs against the tenant table, one short session per lookup."""

    def __init__(self, session_factory: Optional[async_sessionmaker[AsyncSession]] = None):
        self._session_factory = session_factory

    async def resolve(self, slug: str) -> Resolution:
        if not is_valid_slug(slug):
            return NotFound(slug)
        factory = self._session_factory or get_session_factory()
        async with factory() as db:
            server = await McpServerRepository(db).get_by_slug(slug)
        if server is None:
            return NotFound(slug)
        return Resolved(TenantContext.from_server(server))


def not_found_response(slug: str) -> JSONResponse:
    return JSONResponse(
        {
            "jsonrpc": "2.0",
            "id": None,
            "error": {
                "code": NOT_FOUND_CODE,
                "message": f"MCP server with slug '{slug}' not found",
            },
        },
        status_code=404,
    )


class TenantRouter:
    """Raw ASGI endpoint: one resolver, three delegating verb handlers."""

    def __init__(self, resolver: TenantResolver, engine: ProtocolEngine):
        self.resolver = resolver
        self.engine = engine
        self._handlers: Dict[str, Handler] = {
            "POST": engine.handle_post,
            "GET": engine.handle_get,
            "DELETE": engine.handle_delete,
        }

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        slug = (scope.get("path_params") or {}).get("slug", "")
        handler = self._handlers.get(scope["method"])
        if handler is None:
            response = JSONResponse(
                {"detail": "Method Not Allowed"},
                status_code=405,
                headers={"Allow": ", ".join(self._handlers)},
            )
            await response(scope, receive, send)
            return

        resolution = await self.resolver.resolve(slug)
        if isinstance(resolution, NotFound):
            platform_metrics.inc("mcp_not_found")
            logger.info("Unknown MCP server slug: %s", slug, extra={"tenant_slug": slug})
            await not_found_response(slug)(scope, receive, send)
            return

        tenant = resolution.tenant
        platform_metrics.inc("mcp_requests")
        platform_metrics.inc(f"mcp_requests:{tenant.slug}")
        logger.debug(
            "Routing MCP %s to %s (%s)", scope["method"], tenant.slug, tenant.wordpress_url,
            extra=tenant.log_extra,
        )
        await handler(bind_tenant(scope, tenant), receive, send, tenant)
