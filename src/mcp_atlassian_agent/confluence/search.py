"""Module for Confluence CQL search operations."""

import logging

from ..client import AtlassianClient
from ..models.confluence import ConfluencePageSummary, ConfluenceSearchResult

logger = logging.getLogger("mcp-atlassian-agent.confluence.search")


class SearchMixin(AtlassianClient):
    """Mixin for Confluence search operations."""

    def search_pages(
        self, access_token: str, cql: str
    ) -> list[ConfluencePageSummary]:
        """
        Search content using Confluence Query Language.

        The CQL string is sent as-is (URL-encoded as a query parameter) with
        ``expand=space`` so each hit carries its space key and name.

        Args:
            access_token: The caller's OAuth access token
            cql: The CQL query (e.g. 'type=page AND space=DEV')

        Returns:
            Page summaries in the order Confluence returned them

        Raises:
            TenantResolutionError: If the token grants access to no site
            HTTPError: If Confluence rejects the query
            ValueError: If the response is not JSON
        """
        tenant = self.resolve_tenant(access_token)
        confluence = self.confluence_api(tenant)

        response = confluence.get(
            "wiki/rest/api/content/search",
            params={"cql": cql, "expand": "space"},
            headers=self.auth_headers(access_token),
        )
        if not isinstance(response, dict | list):
            msg = f"Unexpected response for CQL search: {type(response).__name__}"
            raise ValueError(msg)

        search_result = ConfluenceSearchResult.from_api_response(response)
        logger.debug(
            f"CQL search returned {len(search_result.results)} of {search_result.total_size} results"
        )
        return search_result.results
