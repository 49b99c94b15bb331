# Copyright (c) 2026 WPMCP Contributors. All Rights Reserved.

"""
Observability API — health check and metrics.
"""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter

from wpmcp.core.metrics import platform_metrics
from wpmcp.storage.database import ping_db

router = APIRouter(tags=["observability"])


@router.get("/health")
async def health_check():
    database = "connected" if await ping_db() else "disconnected"
    return {
        "status": "healthy" if database == "connected" else "degraded",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "database": database,
    }


@router.get("/metrics")
async def get_metrics():
    """Return current gateway metrics."""
    return platform_metrics.snapshot()
