"""Confluence FastMCP server instance and tool definitions."""

import json
import logging
from typing import Annotated

from fastmcp import Context, FastMCP
from pydantic import Field

from mcp_atlassian_agent.servers.dependencies import (
    get_atlassian_service,
    get_identity,
)
from mcp_atlassian_agent.utils.decorators import check_write_access

logger = logging.getLogger(__name__)

confluence_mcp = FastMCP(
    name="Confluence MCP Service",
    instructions="Provides tools for searching, reading and creating Confluence Cloud pages.",
)


@confluence_mcp.tool(tags={"confluence", "read"})
async def search_pages(
    ctx: Context,
    cql: Annotated[
        str,
        Field(
            description=(
                "CQL query string (Confluence Query Language). Examples:\n"
                '- Pages in a space: "type=page AND space=DEV"\n'
                '- Title match: "title ~ \\"Release notes\\""\n'
                '- Recently modified: "lastModified > now(\\"-7d\\")"'
            )
        ),
    ],
) -> str:
    """Search Confluence pages using Confluence Query Language (CQL).

    Args:
        ctx: The FastMCP context.
        cql: The CQL query.

    Returns:
        JSON string with a list of page summaries.

    Raises:
        ConfluenceSearchError: If the search fails.
    """
    service = await get_atlassian_service(ctx)
    identity = await get_identity(ctx)
    pages = service.search_confluence_pages(identity, cql)
    return json.dumps(
        [page.to_simplified_dict() for page in pages], indent=2, ensure_ascii=False
    )


@confluence_mcp.tool(tags={"confluence", "read"})
async def get_page_content(
    ctx: Context,
    page_id: Annotated[
        str, Field(description="Confluence page ID (numeric, e.g. '123456789')")
    ],
) -> str:
    """Get Confluence page content by page ID.

    Args:
        ctx: The FastMCP context.
        page_id: Confluence page ID.

    Returns:
        The page body as markdown text, or an
        "Error fetching Confluence page content: ..." message.
    """
    service = await get_atlassian_service(ctx)
    identity = await get_identity(ctx)
    return service.get_confluence_page_content(identity, page_id)


@confluence_mcp.tool(tags={"confluence", "write"})
@check_write_access
async def create_page(
    ctx: Context,
    space_id: Annotated[
        str,
        Field(
            description="The numeric ID of the space (NOT the space key like 'DEV')"
        ),
    ],
    title: Annotated[str, Field(description="The title of the page")],
    content: Annotated[
        str,
        Field(
            description="The page body in Confluence storage format (HTML, e.g. '<p>Hello</p>')"
        ),
    ],
) -> str:
    """Create a new Confluence page. REQUIRES a numeric spaceId (not spaceKey). Content must be in HTML storage format.

    Args:
        ctx: The FastMCP context.
        space_id: The numeric space id.
        title: The page title.
        content: The body in storage format.

    Returns:
        Confirmation with the page id and link, or an
        "Error creating page: ..." message.

    Raises:
        ValueError: If in read-only mode.
    """
    service = await get_atlassian_service(ctx)
    identity = await get_identity(ctx)
    return service.create_confluence_page(identity, space_id, title, content)
