"""Server implementations for the Atlassian agent tools."""

from .confluence import confluence_mcp
from .jira import jira_mcp
from .main import main_mcp

__all__ = ["jira_mcp", "confluence_mcp", "main_mcp"]
