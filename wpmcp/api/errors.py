# Copyright (c) 2026 WPMCP Contributors. All Rights Reserved.

"""
API Error Handling — Unified error structure.
"""

from __future__ import annotations

import uuid
from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


class APIError(Exception):
    """Base API error with structured response."""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 400,
        details: Optional[Dict[str, Any]] = None,
        trace_id: Optional[str] = None,
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.trace_id = trace_id
        super().__init__(message)


class TenantNotFoundError(APIError):
    def __init__(self, key: str, field: str = "ID"):
        super().__init__(
            code="MCP_SERVER_NOT_FOUND",
            message=f"MCP server with {field} '{key}' not found",
            status_code=404,
        )


class DuplicateSiteError(APIError):
    def __init__(self, wordpress_url: str):
        super().__init__(
            code="MCP_SERVER_EXISTS",
            message="An MCP server for this WordPress URL already exists",
            status_code=409,
            details={"wordpressUrl": wordpress_url},
        )


class SlugConflictError(APIError):
    def __init__(self, base_slug: str):
        super().__init__(
            code="MCP_SERVER_SLUG_CONFLICT",
            message="Could not reserve a unique slug for this site, please retry",
            status_code=409,
            details={"slug": base_slug},
        )


class InvalidSiteError(APIError):
    def __init__(self, message: str, wordpress_url: str):
        super().__init__(
            code="INVALID_WORDPRESS_SITE",
            message=message or "Invalid WordPress URL",
            status_code=400,
            details={"wordpressUrl": wordpress_url},
        )


def _trace_id(request: Request, fallback: Optional[str] = None) -> str:
    return fallback or getattr(request.state, "trace_id", None) or str(uuid.uuid4())


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Global exception handler for APIError."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "code": exc.code,
            "message": exc.message,
            "trace_id": _trace_id(request, exc.trace_id),
            "details": exc.details,
        },
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Boundary validation failures are client errors (400), not 422."""
    errors = jsonable_encoder(exc.errors(), custom_encoder={Exception: str})
    message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    return JSONResponse(
        status_code=400,
        content={
            "code": "VALIDATION_ERROR",
            "message": message,
            "trace_id": _trace_id(request),
            "details": {"errors": errors},
        },
    )
