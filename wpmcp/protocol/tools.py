# Copyright (c) 2026 WPMCP Contributors. All Rights Reserved.

"""
MCP Tools — list_posts and get_post.

One instance of each tool serves every tenant. Tools never hold an
origin: each call receives the TenantContext bound to its own HTTP
request and passes its ``wordpress_url`` to the shared WordPressClient.
Every failure is returned as an ``isError`` tool result.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from typing import Annotated, Any, Dict, List, Optional

from mcp.server.fastmcp import Context, FastMCP
from mcp.types import CallToolResult, TextContent, ToolAnnotations
from pydantic import Field, ValidationError

from wpmcp.core.metrics import platform_metrics
from wpmcp.core.tenant import TenantContext, tenant_from_request
from wpmcp.protocol.formatting import post_detail_text, posts_list_text
from wpmcp.wordpress.client import WordPressClient, WordPressError
from wpmcp.wordpress.types import MAX_PER_PAGE, ListPostsParams

logger = logging.getLogger("wpmcp.tools")

MISSING_TENANT_MESSAGE = (
    "No WordPress site is bound to this request. "
    "Connect through a tenant endpoint of the form /api/s/{slug}/mcp."
)

_READ_ONLY = ToolAnnotations(
    readOnlyHint=True,
    destructiveHint=False,
    idempotentHint=True,
    openWorldHint=True,
)


def error_result(message: str) -> CallToolResult:
    return CallToolResult(content=[TextContent(type="text", text=message)], isError=True)


def success_result(text: str, payload: Dict[str, Any]) -> CallToolResult:
    return CallToolResult(
        content=[TextContent(type="text", text=text)],
        structuredContent=payload,
        isError=False,
    )


def tenant_from_context(ctx: Optional[Context]) -> Optional[TenantContext]:
    """Tenant bound to the HTTP request that carried this tool call."""
    if ctx is None:
        return None
    try:
        request = ctx.request_context.request
    except (AttributeError, ValueError, LookupError):
        # outside of a request
        return None
    return tenant_from_request(request)


def _site(tenant: TenantContext) -> Dict[str, Any]:
    return {"slug": tenant.slug, "name": tenant.site_name, "url": tenant.wordpress_url}


class BaseTool(ABC):
    """
    Shared, stateless tool handler.

    Subclasses set the class-level metadata and implement execute().
    run() is the boundary: it checks the tenant, times the call and turns
    exceptions into error results.
    """

    name: str = ""
    title: str = ""
    description: str = ""
    error_prefix: str = "Error"

    def __init__(self, wordpress: WordPressClient):
        self.wordpress = wordpress

    @abstractmethod
    async def execute(self, tenant: TenantContext, arguments: Dict[str, Any]) -> CallToolResult:
        ...

    async def run(self, tenant: Optional[TenantContext], arguments: Dict[str, Any]) -> CallToolResult:
        if tenant is None:
            logger.error("Tool %s called without a bound tenant", self.name)
            return error_result(MISSING_TENANT_MESSAGE)

        platform_metrics.inc(f"tool_calls:{self.name}")
        start = time.time()
        try:
            return await self.execute(tenant, arguments)
        except ValidationError as e:
            platform_metrics.inc(f"tool_errors:{self.name}")
            return error_result(f"Invalid arguments for {self.name}: {e.errors()[0]['msg']}")
        except WordPressError as e:
            platform_metrics.inc(f"tool_errors:{self.name}")
            logger.warning("%s failed: %s", self.name, e, extra=tenant.log_extra)
            return error_result(f"{self.error_prefix}: {e}")
        except Exception as e:
            platform_metrics.inc(f"tool_errors:{self.name}")
            logger.exception("%s crashed", self.name, extra=tenant.log_extra)
            return error_result(f"{self.error_prefix}: {e}")
        finally:
            platform_metrics.observe(f"tool_latency:{self.name}", (time.time() - start) * 1000)


class PostsListTool(BaseTool):
    name = "list_posts"
    title = "List WordPress Posts"
    description = (
        "Lists posts from the WordPress site with optional search, category and tag filtering. "
        "Filtering logic: OR within the same taxonomy type (categories or tags), "
        "AND across different types."
    )
    error_prefix = "Error fetching posts"

    async def execute(self, tenant, arguments):
        params = ListPostsParams.model_validate(arguments)
        logger.info("Listing posts page=%d", params.page, extra=tenant.log_extra)
        listing = await self.wordpress.fetch_posts(tenant.wordpress_url, params)
        return success_result(
            posts_list_text(listing, tenant.site_name or ""),
            {"site": _site(tenant), **listing.to_payload()},
        )


class PostDetailTool(BaseTool):
    name = "get_post"
    title = "Get WordPress Post"
    description = (
        "Retrieves the full content and metadata of a specific WordPress post by ID. "
        "Returns title, HTML content, date, author, featured image, categories and tags."
    )
    error_prefix = "Error fetching post"

    async def execute(self, tenant, arguments):
        post_id = arguments.get("postId")
        if not isinstance(post_id, int) or isinstance(post_id, bool) or post_id < 1:
            return error_result("postId must be a positive integer")
        logger.info("Fetching post %d", post_id, extra=tenant.log_extra)
        post = await self.wordpress.fetch_post(tenant.wordpress_url, post_id)
        return success_result(
            post_detail_text(post),
            {"site": _site(tenant), **post.to_payload()},
        )


def register_post_tools(mcp: FastMCP, wordpress: WordPressClient) -> List[BaseTool]:
    """
    Register the shared tool instances with the MCP server.

    Wrapper parameter names are the tools' wire argument names (camelCase,
    e.g. ``perPage``, ``postId``), matching what MCP clients and Apps send.
    """
    posts_list = PostsListTool(wordpress)
    post_detail = PostDetailTool(wordpress)

    @mcp.tool(
        name=posts_list.name,
        title=posts_list.title,
        description=posts_list.description,
        annotations=_READ_ONLY,
        structured_output=False,
    )
    async def list_posts(
        page: Annotated[int, Field(ge=1, description="Page number (1-indexed)")] = 1,
        perPage: Annotated[
            int, Field(ge=1, le=MAX_PER_PAGE, description="Number of posts per page (max 100)")
        ] = 10,
        search: Annotated[
            Optional[str], Field(description="Search query to filter posts by title or content")
        ] = None,
        categories: Annotated[
            Optional[List[int]], Field(description="Category IDs to filter by (OR logic within)")
        ] = None,
        tags: Annotated[
            Optional[List[int]], Field(description="Tag IDs to filter by (OR logic within)")
        ] = None,
        ctx: Context = None,
    ) -> CallToolResult:
        return await posts_list.run(
            tenant_from_context(ctx),
            {
                "page": page,
                "perPage": perPage,
                "search": search,
                "categories": categories,
                "tags": tags,
            },
        )

    @mcp.tool(
        name=post_detail.name,
        title=post_detail.title,
        description=post_detail.description,
        annotations=_READ_ONLY,
        structured_output=False,
    )
    async def get_post(
        postId: Annotated[int, Field(gt=0, description="The WordPress post ID to retrieve")],
        ctx: Context = None,
    ) -> CallToolResult:
        return await post_detail.run(tenant_from_context(ctx), {"postId": postId})

    return [posts_list, post_detail]
