# Copyright (c) 2026 WPMCP Contributors. All Rights Reserved.

"""
WordPress DTOs — normalized shapes returned by WordPressClient.

Serialized with camelCase keys (``by_alias=True``) so structured tool
payloads match what the MCP Apps and the UI consume.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 10
MAX_PER_PAGE = 100


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


class ListPostsParams(_CamelModel):
    """Validated listing query; bounds are checked before any network call."""

    page: int = Field(default=DEFAULT_PAGE, ge=1)
    per_page: int = Field(default=DEFAULT_PER_PAGE, ge=1, le=MAX_PER_PAGE)
    search: Optional[str] = None
    categories: Optional[List[int]] = None
    tags: Optional[List[int]] = None


class PostListItem(_CamelModel):
    id: int
    title: str
    excerpt: str
    date: str
    slug: str
    link: str
    featured_image_url: Optional[str] = None


class Pagination(_CamelModel):
    page: int
    per_page: int
    total: int
    total_pages: int
    has_next_page: bool
    has_previous_page: bool


class ListPostsResponse(_CamelModel):
    items: List[PostListItem]
    pagination: Pagination


class AuthorRef(_CamelModel):
    id: int
    name: str


class FeaturedImage(_CamelModel):
    url: str
    alt: str = ""


class TermRef(_CamelModel):
    id: int
    name: str


class PostDetail(_CamelModel):
    id: int
    title: str
    content: str
    excerpt: str
    date: str
    modified: str
    slug: str
    link: str
    author: Optional[AuthorRef] = None
    featured_image: Optional[FeaturedImage] = None
    categories: List[TermRef] = Field(default_factory=list)
    tags: List[TermRef] = Field(default_factory=list)


class SiteValidation(_CamelModel):
    """Outcome of probing a WordPress origin."""

    is_valid: bool
    site_name: Optional[str] = None
    site_description: Optional[str] = None
    post_count: Optional[int] = None
    error_message: Optional[str] = None
