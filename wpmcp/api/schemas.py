# Copyright (c) 2026 WPMCP Contributors. All Rights Reserved.

"""
REST Schemas — request/response bodies of the tenant management API.
"""

from __future__ import annotations

import uuid
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from wpmcp.services.slugs import SLUG_MAX_LENGTH, SLUG_PATTERN
from wpmcp.wordpress.client import is_valid_site_url, normalize_url


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreateMcpServerRequest(_CamelModel):
    wordpress_url: str = Field(min_length=1, max_length=700)
    slug: Optional[str] = Field(default=None, max_length=SLUG_MAX_LENGTH, pattern=SLUG_PATTERN)

    @field_validator("wordpress_url")
    @classmethod
    def _check_url(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("WordPress URL is required")
        if not is_valid_site_url(normalize_url(value)):
            raise ValueError("Please provide a valid URL")
        return value.strip()


class McpServerInfo(_CamelModel):
    id: uuid.UUID
    slug: str
    wordpress_url: str
    site_name: Optional[str] = None
    status: str
    post_count: Optional[int] = None
    created_at: str
    connection_endpoint: str
    featured: bool = False
