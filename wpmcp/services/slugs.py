# Copyright (c) 2026 WPMCP Contributors. All Rights Reserved.

"""Slug derivation for tenant endpoints (``/api/s/{slug}/mcp``)."""

from __future__ import annotations

import re
from typing import Awaitable, Callable, Optional
from urllib.parse import urlsplit

SLUG_MAX_LENGTH = 50
SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"
FALLBACK_SLUG = "site"

_SLUG_RE = re.compile(SLUG_PATTERN)
_NON_SLUG_RE = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    """Lowercase; runs of anything outside [a-z0-9] become one hyphen."""
    slug = _NON_SLUG_RE.sub("-", (text or "").lower()).strip("-")
    return slug[:SLUG_MAX_LENGTH].strip("-")


def is_valid_slug(slug: str) -> bool:
    return bool(slug) and len(slug) <= SLUG_MAX_LENGTH and bool(_SLUG_RE.match(slug))


def base_slug(wordpress_url: str, requested: Optional[str] = None, site_name: Optional[str] = None) -> str:
    """Pick the slug base: requested slug, else site name, else hostname."""
    for candidate in (requested, site_name):
        slug = slugify(candidate or "")
        if slug:
            return slug
    host = (urlsplit(wordpress_url).hostname or "").removeprefix("www.")
    return slugify(host) or FALLBACK_SLUG


async def ensure_unique_slug(base: str, exists: Callable[[str], Awaitable[bool]]) -> str:
    """Return ``base`` or the first free ``base-1``, ``base-2``, ..."""
    slug = base
    counter = 1
    while await exists(slug):
        suffix = f"-{counter}"
        slug = f"{base[:SLUG_MAX_LENGTH - len(suffix)].rstrip('-')}{suffix}"
        counter += 1
    return slug
