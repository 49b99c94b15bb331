# Copyright (c) 2026 WPMCP Contributors. All Rights Reserved.

"""
Tenant Context — request-scoped binding of a tenant to one MCP request.

The router builds one TenantContext per inbound request and stores it in
that request's own ASGI scope state. Everything downstream (protocol
engine, tools) reads it back from the request object it was handed, so
shared singletons never hold tenant identity.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, MutableMapping, Optional

TENANT_STATE_KEY = "tenant"


@dataclass(frozen=True)
class TenantContext:
    """Immutable tenant identity for request-scoped operations."""

    wordpress_url: str
    slug: str
    tenant_id: str
    site_name: Optional[str] = None

    def __post_init__(self):
        if not self.wordpress_url:
            raise ValueError("wordpress_url must not be empty")
        if not self.slug:
            raise ValueError("slug must not be empty")

    @classmethod
    def from_server(cls, server: Any) -> "TenantContext":
        """Build a context from a persisted McpServer record."""
        return cls(
            wordpress_url=server.wordpress_url,
            slug=server.slug,
            tenant_id=str(server.id),
            site_name=server.site_name,
        )

    @property
    def log_extra(self) -> dict:
        return {"tenant_slug": self.slug, "tenant_id": self.tenant_id}

    def __repr__(self) -> str:
        return f"TenantContext(slug={self.slug!r}, url={self.wordpress_url!r})"


def bind_tenant(scope: MutableMapping[str, Any], tenant: TenantContext) -> dict:
    """
    Return a copy of ``scope`` whose state carries ``tenant``.

    The incoming scope and its state dict are left untouched; the copy
    belongs to this request alone.
    """
    bound = dict(scope)
    state = dict(scope.get("state") or {})
    state[TENANT_STATE_KEY] = tenant
    bound["state"] = state
    return bound


def tenant_from_scope(scope: MutableMapping[str, Any]) -> Optional[TenantContext]:
    state = scope.get("state") or {}
    tenant = state.get(TENANT_STATE_KEY)
    return tenant if isinstance(tenant, TenantContext) else None


def tenant_from_request(request: Any) -> Optional[TenantContext]:
    """Read the bound tenant from a Starlette request (None if unbound)."""
    if request is None:
        return None
    scope = getattr(request, "scope", None)
    if scope is None:
        return None
    return tenant_from_scope(scope)
