# Copyright (c) 2026 WPMCP Contributors. All Rights Reserved.

"""
MCP App Resources — UI shells that MCP hosts render in an iframe.

Each resource returns a small HTML page embedding the bundled app served
by the gateway at ``{API_BASE_URL}/api/mcp-apps/{app}``.
"""

from __future__ import annotations

from html import escape

from mcp.server.fastmcp import FastMCP

MCP_APP_MIME_TYPE = "text/html;profile=mcp-app"
POSTS_LIST_UI_RESOURCE_URI = "ui://wordpress/posts-list"
POST_DETAIL_UI_RESOURCE_URI = "ui://wordpress/post-detail"

MCP_APPS = {
    "posts-list": "WordPress Posts List",
    "post-detail": "WordPress Post Detail",
}


def build_app_html(api_base_url: str, app_name: str, title: str) -> str:
    app_url = f"{api_base_url.rstrip('/')}/api/mcp-apps/{app_name}"
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{escape(title)}</title>
  <style>
    * {{ margin: 0; padding: 0; box-sizing: border-box; }}
    html, body, iframe {{ width: 100%; height: 100%; border: none; }}
  </style>
</head>
<body>
  <iframe src="{escape(app_url)}" allow="clipboard-write"></iframe>
</body>
</html>"""


def register_app_resources(mcp: FastMCP, api_base_url: str) -> None:
    @mcp.resource(
        POSTS_LIST_UI_RESOURCE_URI,
        name="WordPress Posts List UI",
        description="Interactive UI for browsing WordPress posts with search and pagination",
        mime_type=MCP_APP_MIME_TYPE,
    )
    def posts_list_ui() -> str:
        return build_app_html(api_base_url, "posts-list", MCP_APPS["posts-list"])

    @mcp.resource(
        POST_DETAIL_UI_RESOURCE_URI,
        name="WordPress Post Detail UI",
        description="Interactive UI for viewing full WordPress post content and metadata",
        mime_type=MCP_APP_MIME_TYPE,
    )
    def post_detail_ui() -> str:
        return build_app_html(api_base_url, "post-detail", MCP_APPS["post-detail"])
