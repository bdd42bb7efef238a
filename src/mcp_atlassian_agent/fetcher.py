"""Combined Jira and Confluence fetcher."""

from .confluence import PagesMixin, SearchMixin
from .jira import IssuesMixin


class AtlassianFetcher(IssuesMixin, SearchMixin, PagesMixin):
    """
    The main entry point for Atlassian Cloud operations.

    All HTTP operations take an access token as their first argument and
    raise on failure; turning failures into tool results is left to
    :class:`mcp_atlassian_agent.service.AtlassianService`.
    """
