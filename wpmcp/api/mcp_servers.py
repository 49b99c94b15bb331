# Copyright (c) 2026 WPMCP Contributors. All Rights Reserved.

"""
MCP Servers API — register, list, inspect, sync and delete tenants.
"""

from __future__ import annotations

import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from wpmcp.api.deps import get_mcp_server_service
from wpmcp.api.schemas import CreateMcpServerRequest, McpServerInfo
from wpmcp.services.mcp_servers import McpServerService

router = APIRouter(prefix="/mcp-servers", tags=["mcp-servers"])


@router.post("", response_model=McpServerInfo, status_code=status.HTTP_201_CREATED)
async def create_mcp_server(
    req: CreateMcpServerRequest,
    service: McpServerService = Depends(get_mcp_server_service),
):
    """Validate a WordPress site and register it as a tenant."""
    return await service.create(req.wordpress_url, slug=req.slug)


@router.get("", response_model=List[McpServerInfo])
async def list_mcp_servers(
    featured: Optional[bool] = Query(None),
    service: McpServerService = Depends(get_mcp_server_service),
):
    return await service.find_all(featured=featured)


@router.get("/{server_id}", response_model=McpServerInfo)
async def get_mcp_server(
    server_id: uuid.UUID,
    service: McpServerService = Depends(get_mcp_server_service),
):
    return await service.find_one(server_id)


@router.delete("/{server_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_mcp_server(
    server_id: uuid.UUID,
    service: McpServerService = Depends(get_mcp_server_service),
):
    await service.delete(server_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{server_id}/sync", response_model=McpServerInfo)
async def sync_mcp_server(
    server_id: uuid.UUID,
    service: McpServerService = Depends(get_mcp_server_service),
):
    """Re-probe the WordPress site and refresh the stored metadata."""
    return await service.sync(server_id)
