# Copyright (c) 2026 WPMCP Contributors. All Rights Reserved.

"""
WPMCP Application Entry Point.

FastAPI app with lifespan, middleware, the tenant management API and the
tenant-routed MCP endpoint ``/api/s/{slug}/mcp``.

Run: uvicorn wpmcp.main:app --host 0.0.0.0 --port 3000
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from wpmcp import __version__
from wpmcp.api.errors import APIError, api_error_handler, validation_error_handler
from wpmcp.api.health import router as health_router
from wpmcp.api.mcp_apps import router as mcp_apps_router
from wpmcp.api.mcp_servers import router as mcp_servers_router
from wpmcp.api.middleware import TraceMiddleware
from wpmcp.core.config import GatewaySettings, settings as default_settings
from wpmcp.core.context import init_platform_context
from wpmcp.core.logging import setup_logging
from wpmcp.protocol.router import DirectoryResolver, TenantResolver, TenantRouter
from wpmcp.storage.database import close_db, create_all_tables
from wpmcp.wordpress.client import WordPressClient

logger = logging.getLogger("wpmcp.main")

MCP_ROUTE = "/api/s/{slug}/mcp"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage startup/shutdown of gateway resources."""
    ctx = app.state.platform
    if ctx.settings.DB_AUTO_CREATE:
        await create_all_tables()
    async with ctx.engine.running():
        logger.info("[WPMCP] Gateway ready")
        yield
    await ctx.wordpress.close()
    await close_db()
    logger.info("[WPMCP] Shutdown complete")


def create_app(
    cfg: Optional[GatewaySettings] = None,
    wordpress: Optional[WordPressClient] = None,
    resolver: Optional[TenantResolver] = None,
) -> FastAPI:
    cfg = cfg or default_settings
    setup_logging(cfg.LOG_LEVEL)
    ctx = init_platform_context(cfg, wordpress)

    app = FastAPI(
        title="WPMCP",
        description="Multi-tenant gateway exposing WordPress sites as MCP servers",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.platform = ctx

    # ── Middleware ───────────────────────────────────────────
    app.add_middleware(TraceMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Mcp-Session-Id", "X-Trace-Id"],
    )

    # ── Error Handlers ──────────────────────────────────────
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    # ── Routes ──────────────────────────────────────────────
    app.include_router(mcp_servers_router, prefix="/api")
    app.include_router(mcp_apps_router, prefix="/api")
    app.include_router(health_router, prefix="/api")
    app.add_route(
        MCP_ROUTE,
        TenantRouter(resolver or DirectoryResolver(), ctx.engine),
        methods=["POST", "GET", "DELETE"],
        include_in_schema=False,
    )
    return app


app = create_app()
