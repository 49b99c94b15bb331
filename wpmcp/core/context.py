# Copyright (c) 2026 WPMCP Contributors. All Rights Reserved.

"""
Platform Context — Singleton that holds the process-wide components.

Initialized once when the app is built, read by API routes and the
tenant router. Holds no per-tenant or per-request state.
"""

from __future__ import annotations

from typing import Optional

from mcp.server.fastmcp import FastMCP

from wpmcp.core.config import GatewaySettings
from wpmcp.protocol.engine import ProtocolEngine, StreamableHttpEngine
from wpmcp.protocol.server import build_mcp_server
from wpmcp.wordpress.client import WordPressClient


class PlatformContext:
    """Shared WordPress client, MCP server and protocol engine."""

    def __init__(
        self,
        settings: GatewaySettings,
        wordpress: WordPressClient,
        mcp: FastMCP,
        engine: ProtocolEngine,
    ) -> None:
        self.settings = settings
        self.wordpress = wordpress
        self.mcp = mcp
        self.engine = engine


# ── Global singleton ────────────────────────────────────────

_ctx: Optional[PlatformContext] = None


def init_platform_context(
    settings: GatewaySettings,
    wordpress: Optional[WordPressClient] = None,
) -> PlatformContext:
    global _ctx
    wordpress = wordpress or WordPressClient(
        timeout=settings.WORDPRESS_TIMEOUT,
        validate_timeout=settings.WORDPRESS_VALIDATE_TIMEOUT,
    )
    mcp = build_mcp_server(settings, wordpress)
    _ctx = PlatformContext(settings, wordpress, mcp, StreamableHttpEngine.from_fastmcp(mcp))
    return _ctx


def get_platform_context() -> PlatformContext:
    if _ctx is None:
        raise RuntimeError("PlatformContext not initialized. Call init_platform_context() first.")
    return _ctx
