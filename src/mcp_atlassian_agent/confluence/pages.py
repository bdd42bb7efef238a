"""Module for Confluence page operations (v2 pages API)."""

import logging
from typing import Any

from ..client import AtlassianClient
from ..models.confluence import ConfluencePageContent, CreatedPage

logger = logging.getLogger("mcp-atlassian-agent.confluence.pages")


class PagesMixin(AtlassianClient):
    """Mixin for Confluence page operations.

    Unlike the Jira calls, these check the HTTP status themselves and report
    4xx/5xx answers as ``AtlassianApiError`` carrying the status and body.
    """

    def get_page_content(self, access_token: str, page_id: str) -> ConfluencePageContent:
        """
        Get a page with its storage-format body converted to summary text.

        Args:
            access_token: The caller's OAuth access token
            page_id: The numeric page id

        Returns:
            ConfluencePageContent with both the raw HTML and the summary text

        Raises:
            TenantResolutionError: If the token grants access to no site
            AtlassianApiError: If Confluence answers with a 4xx/5xx status
            ValueError: If the response is not a JSON object
        """
        tenant = self.resolve_tenant(access_token)
        confluence = self.confluence_api(tenant)

        response = confluence.get(
            f"wiki/api/v2/pages/{page_id}",
            params={"body-format": "storage"},
            headers=self.auth_headers(access_token),
            advanced_mode=True,
        )
        page_data = self.checked_json(response)
        if not isinstance(page_data, dict):
            msg = f"Unexpected response for page {page_id}"
            raise ValueError(msg)

        page = ConfluencePageContent.from_api_response(page_data)
        page.content = self.preprocessor.html_to_summary(page.raw_html)
        return page

    def create_page(
        self, access_token: str, space_id: str, title: str, body: str
    ) -> CreatedPage:
        """
        Create a new page in a space.

        Args:
            access_token: The caller's OAuth access token
            space_id: The numeric space id (not the space key)
            title: The page title
            body: The page body in storage format (XHTML)

        Returns:
            The created page's id and links

        Raises:
            TenantResolutionError: If the token grants access to no site
            AtlassianApiError: If Confluence answers with a 4xx/5xx status
            ValueError: If the response is not a JSON object
        """
        payload: dict[str, Any] = {
            "spaceId": space_id,
            "status": "current",
            "title": title,
            "body": {"representation": "storage", "value": body},
        }

        tenant = self.resolve_tenant(access_token)
        confluence = self.confluence_api(tenant)
        response = confluence.post(
            "wiki/api/v2/pages",
            data=payload,
            headers=self.auth_headers(access_token),
            advanced_mode=True,
        )
        result = self.checked_json(response)
        if not isinstance(result, dict):
            msg = f"Unexpected response when creating page '{title}'"
            raise ValueError(msg)

        page = CreatedPage.from_api_response(result)
        logger.info(f"Created page {page.id} in space {space_id}")
        return page
