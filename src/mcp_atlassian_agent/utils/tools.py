"""Tool filtering helpers."""

import logging
import os

logger = logging.getLogger("mcp-atlassian-agent.utils.tools")


def get_enabled_tools() -> list[str] | None:
    """Get the list of enabled tools from the ENABLED_TOOLS environment variable.

    The variable holds a comma-separated list of tool names; whitespace around
    names is stripped and empty entries are ignored.

    Returns:
        List of enabled tool names, or None when every tool is enabled.

    Examples:
        ENABLED_TOOLS="jira_get_issue, confluence_search_pages"
            -> ["jira_get_issue", "confluence_search_pages"]
        ENABLED_TOOLS=" , " -> None
    """
    enabled_tools_str = os.getenv("ENABLED_TOOLS")
    if not enabled_tools_str:
        logger.debug("ENABLED_TOOLS environment variable not set or empty.")
        return None

    tools = [tool.strip() for tool in enabled_tools_str.split(",")]
    tools = [tool for tool in tools if tool]
    logger.debug(f"Parsed enabled tools from environment: {tools}")
    return tools or None


def should_include_tool(tool_name: str, enabled_tools: list[str] | None) -> bool:
    """Check if a tool passes the enabled tools filter."""
    if enabled_tools is None:
        return True
    return tool_name in enabled_tools
