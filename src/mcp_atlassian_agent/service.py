"""Agent-facing tool operations.

Each method takes the caller's identity explicitly, resolves the access token
once, runs one fetcher operation and renders the outcome as text.

Failures are reported, not raised: every operation returns
``"Error <doing x>: <message>"`` instead of throwing, with the exception of
:meth:`AtlassianService.search_confluence_pages`, which wraps the failure in
``ConfluenceSearchError`` and raises it so the invoking layer handles it.
"""

import logging

from .exceptions import ConfluenceSearchError
from .fetcher import AtlassianFetcher
from .models.confluence import ConfluencePageSummary
from .tokens import TokenProvider

logger = logging.getLogger("mcp-atlassian-agent.service")

ERROR_FETCHING_ISSUE = "Error fetching issue"
ERROR_CREATING_ISSUE = "Error creating issue"
ERROR_UPDATING_ISSUE = "Error updating issue"
ERROR_SEARCHING_PAGES = "Error searching Confluence pages"
ERROR_FETCHING_PAGE = "Error fetching Confluence page content"
ERROR_CREATING_PAGE = "Error creating page"


def format_error(label: str, error: Exception) -> str:
    return f"{label}: {error}"


class AtlassianService:
    """Jira and Confluence tools bound to a fetcher and a token provider."""

    def __init__(self, fetcher: AtlassianFetcher, token_provider: TokenProvider) -> None:
        self.fetcher = fetcher
        self.token_provider = token_provider

    def get_issue(self, identity: str, issue_id: str) -> str:
        """Get Jira issue details by issue ID (e.g., PROJ-123)."""
        try:
            token = self.token_provider.get_token(identity)
            issue = self.fetcher.get_issue(token, issue_id)
            return issue.to_markdown()
        except Exception as e:
            logger.error(f"Error fetching issue {issue_id}: {e}", exc_info=True)
            return format_error(ERROR_FETCHING_ISSUE, e)

    def create_issue(
        self,
        identity: str,
        project_key: str,
        summary: str,
        issue_type: str,
        description: str | None = None,
    ) -> str:
        """Create a new Jira issue from a project key, summary and issue type."""
        try:
            token = self.token_provider.get_token(identity)
            created = self.fetcher.create_issue(
                token, project_key, summary, issue_type, description=description
            )
            return f"Successfully created issue: {created.key} (ID: {created.id})"
        except Exception as e:
            logger.error(f"Error creating issue in {project_key}: {e}", exc_info=True)
            return format_error(ERROR_CREATING_ISSUE, e)

    def update_issue_summary(
        self, identity: str, issue_key: str, new_summary: str
    ) -> str:
        """Update an existing Jira issue summary."""
        try:
            token = self.token_provider.get_token(identity)
            self.fetcher.update_issue_summary(token, issue_key, new_summary)
            return f"Successfully updated summary for issue: {issue_key}"
        except Exception as e:
            logger.error(f"Error updating issue {issue_key}: {e}", exc_info=True)
            return format_error(ERROR_UPDATING_ISSUE, e)

    def search_confluence_pages(
        self, identity: str, cql: str
    ) -> list[ConfluencePageSummary]:
        """Search Confluence pages using Confluence Query Language (CQL).

        Raises:
            ConfluenceSearchError: On any failure, carrying the original message
        """
        try:
            token = self.token_provider.get_token(identity)
            return self.fetcher.search_pages(token, cql)
        except Exception as e:
            logger.error(f"Error searching Confluence with '{cql}': {e}", exc_info=True)
            raise ConfluenceSearchError(format_error(ERROR_SEARCHING_PAGES, e)) from e

    def get_confluence_page_content(self, identity: str, page_id: str) -> str:
        """Get Confluence page content by page ID."""
        try:
            token = self.token_provider.get_token(identity)
            page = self.fetcher.get_page_content(token, page_id)
            return page.content
        except Exception as e:
            logger.error(f"Error fetching Confluence page {page_id}: {e}", exc_info=True)
            return format_error(ERROR_FETCHING_PAGE, e)

    def create_confluence_page(
        self, identity: str, space_id: str, title: str, content: str
    ) -> str:
        """Create a new Confluence page in a numeric space id from storage-format HTML."""
        try:
            token = self.token_provider.get_token(identity)
            page = self.fetcher.create_page(token, space_id, title, content)
            return f"Page Created Successfully! ID: {page.id}\nLink: {page.link}"
        except Exception as e:
            logger.error(f"Error creating page '{title}': {e}", exc_info=True)
            return format_error(ERROR_CREATING_PAGE, e)
