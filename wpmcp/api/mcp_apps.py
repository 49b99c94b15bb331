# Copyright (c) 2026 WPMCP Contributors. All Rights Reserved.

"""
MCP Apps API — serves the built MCP App bundles loaded by MCP hosts.

Route: /api/mcp-apps/{app_name} (posts-list, post-detail) and their assets.
"""

from __future__ import annotations

import logging
from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import FileResponse

from wpmcp.api.errors import APIError
from wpmcp.core.context import get_platform_context
from wpmcp.protocol.apps import MCP_APPS

logger = logging.getLogger("wpmcp.api.mcp_apps")

router = APIRouter(prefix="/mcp-apps", tags=["mcp-apps"])

CONTENT_TYPES = {
    "js": "application/javascript",
    "css": "text/css",
    "json": "application/json",
    "svg": "image/svg+xml",
    "png": "image/png",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "woff": "font/woff",
    "woff2": "font/woff2",
}


def _dist_dir() -> Path:
    return Path(get_platform_context().settings.MCP_APPS_DIST).resolve()


def _not_found(message: str) -> APIError:
    return APIError(code="MCP_APP_NOT_FOUND", message=message, status_code=404)


@router.get("/{app_name}")
async def serve_app(app_name: str):
    if app_name not in MCP_APPS:
        logger.warning("Invalid app name requested: %s", app_name)
        raise _not_found(f"MCP App '{app_name}' not found")

    html_path = _dist_dir() / f"{app_name}.html"
    if not html_path.is_file():
        logger.error("App HTML not found: %s", html_path)
        raise _not_found(f"MCP App '{app_name}' not found. Make sure to build the mcp-apps package.")
    return FileResponse(html_path, media_type="text/html")


@router.get("/assets/{file_name}")
async def serve_asset(file_name: str):
    assets_dir = _dist_dir() / "assets"
    asset_path = (assets_dir / file_name).resolve()
    if assets_dir not in asset_path.parents or not asset_path.is_file():
        logger.warning("Asset not found: %s", file_name)
        raise _not_found(f"Asset '{file_name}' not found")

    ext = asset_path.suffix.lstrip(".").lower()
    return FileResponse(asset_path, media_type=CONTENT_TYPES.get(ext, "application/octet-stream"))
