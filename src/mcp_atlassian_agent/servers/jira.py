"""Jira FastMCP server instance and tool definitions."""

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

jira_mcp = FastMCP(
    name="Jira MCP Service",
    instructions="Provides tools for reading and editing Jira Cloud issues.",
)


@jira_mcp.tool(tags={"jira", "read"})
async def get_issue(
    ctx: Context,
    issue_id: Annotated[
        str, Field(description="Jira issue key or id (e.g., 'PROJ-123')")
    ],
) -> str:
    """Get Jira issue details by issue ID (e.g., PROJ-123).

    Args:
        ctx: The FastMCP context.
        issue_id: Jira issue key or id.

    Returns:
        Markdown block with key, summary, status, priority, assignee and
        description, or an "Error fetching issue: ..." message.
    """
    service = await get_atlassian_service(ctx)
    identity = await get_identity(ctx)
    return service.get_issue(identity, issue_id)


@jira_mcp.tool(tags={"jira", "write"})
@check_write_access
async def create_issue(
    ctx: Context,
    project_key: Annotated[
        str, Field(description="The key of the project (e.g., 'PROJ')")
    ],
    summary: Annotated[str, Field(description="Summary/title of the issue")],
    issue_type: Annotated[
        str, Field(description="Issue type name (e.g., 'Task', 'Bug', 'Story')")
    ],
    description: Annotated[
        str, Field(description="(Optional) Issue description", default="")
    ] = "",
) -> str:
    """Create a new Jira issue. Requires project key, summary, and issue type (e.g., Task, Bug).

    Args:
        ctx: The FastMCP context.
        project_key: The project key.
        summary: The issue summary.
        issue_type: The issue type name.
        description: Optional description.

    Returns:
        Confirmation with the new issue key and id, or an
        "Error creating issue: ..." message.

    Raises:
        ValueError: If in read-only mode.
    """
    service = await get_atlassian_service(ctx)
    identity = await get_identity(ctx)
    return service.create_issue(
        identity, project_key, summary, issue_type, description=description or None
    )


@jira_mcp.tool(tags={"jira", "write"})
@check_write_access
async def update_issue_summary(
    ctx: Context,
    issue_key: Annotated[str, Field(description="Jira issue key (e.g., 'PROJ-123')")],
    new_summary: Annotated[str, Field(description="The new summary text")],
) -> str:
    """Update an existing Jira issue summary.

    Args:
        ctx: The FastMCP context.
        issue_key: Jira issue key.
        new_summary: The new summary.

    Returns:
        Confirmation naming the issue, or an "Error updating issue: ..." message.

    Raises:
        ValueError: If in read-only mode.
    """
    service = await get_atlassian_service(ctx)
    identity = await get_identity(ctx)
    return service.update_issue_summary(identity, issue_key, new_summary)
