# Copyright (c) 2026 WPMCP Contributors. All Rights Reserved.

"""
Result Formatting — plain-text fallbacks for tool results.

The full data always travels as the structured payload, so these are
summaries and never repeat post bodies.
"""

from __future__ import annotations

from datetime import datetime

from wpmcp.wordpress.types import ListPostsResponse, PostDetail

NO_POSTS_MESSAGE = "No posts found matching your criteria."


def _short_date(value: str) -> str:
    try:
        return datetime.fromisoformat(value).date().isoformat()
    except (TypeError, ValueError):
        return value or ""


def posts_list_text(listing: ListPostsResponse, site_name: str = "") -> str:
    if not listing.items:
        return NO_POSTS_MESSAGE
    p = listing.pagination
    source = f" from {site_name}" if site_name else ""
    lines = [
        f"Found {len(listing.items)} posts{source}. "
        f"Page {p.page} of {p.total_pages} ({p.total} total posts)."
    ]
    lines.extend(f"- [ID: {post.id}] {post.title}" for post in listing.items)
    return "\n".join(lines)


def post_detail_text(post: PostDetail) -> str:
    meta = []
    if post.author:
        meta.append(f"Author: {post.author.name}")
    meta.append(f"Date: {_short_date(post.date)}")
    meta.append(f"Link: {post.link}")
    if post.categories:
        meta.append("Categories: " + ", ".join(c.name for c in post.categories))
    if post.tags:
        meta.append("Tags: " + ", ".join(t.name for t in post.tags))
    if post.featured_image:
        meta.append(f"Featured Image: {post.featured_image.url}")

    return f"# {post.title}\n\n" + "\n".join(meta)
