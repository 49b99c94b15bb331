# Copyright (c) 2026 WPMCP Contributors. All Rights Reserved.

"""
MCP Server — the single FastMCP instance shared by every tenant.
"""

from __future__ import annotations

from mcp.server.fastmcp import FastMCP
from mcp.server.transport_security import TransportSecuritySettings

from wpmcp.core.config import GatewaySettings
from wpmcp.protocol.apps import register_app_resources
from wpmcp.protocol.tools import register_post_tools
from wpmcp.wordpress.client import WordPressClient

INSTRUCTIONS = (
    "Read-only access to one WordPress site. Use list_posts to browse or search "
    "posts and get_post to read a post in full."
)


def build_mcp_server(cfg: GatewaySettings, wordpress: WordPressClient) -> FastMCP:
    mcp = FastMCP(
        name=cfg.MCP_SERVER_NAME,
        instructions=INSTRUCTIONS,
        stateless_http=cfg.MCP_STATELESS,
        json_response=cfg.MCP_JSON_RESPONSE,
        transport_security=TransportSecuritySettings(
            enable_dns_rebinding_protection=cfg.MCP_DNS_REBINDING_PROTECTION,
            allowed_hosts=cfg.MCP_ALLOWED_HOSTS,
        ),
    )
    register_post_tools(mcp, wordpress)
    register_app_resources(mcp, cfg.API_BASE_URL)
    return mcp
