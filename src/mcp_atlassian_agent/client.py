"""Base client for the Atlassian Cloud gateway (api.atlassian.com)."""

import logging
from typing import Any

from atlassian import Confluence, Jira
from requests import Response, Session
from requests.exceptions import RequestException

from .config import AtlassianConfig
from .exceptions import AtlassianApiError, TenantResolutionError
from .models import Tenant
from .preprocessing import ConfluencePreprocessor
from .utils.ssl import configure_ssl_verification

logger = logging.getLogger("mcp-atlassian-agent.client")

ACCESSIBLE_RESOURCES_PATH = "/oauth/token/accessible-resources"
JSON_HEADERS = {"Accept": "application/json", "Content-Type": "application/json"}


class AtlassianClient:
    """Shared HTTP plumbing for every Jira and Confluence operation.

    One instance (and therefore one :class:`requests.Session`) is meant to
    live for the whole process. Access tokens are never stored on the
    session; each call passes its own ``Authorization`` header, so concurrent
    callers with different tokens can share the connection pool.
    """

    config: AtlassianConfig
    preprocessor: ConfluencePreprocessor

    def __init__(
        self, config: AtlassianConfig | None = None, session: Session | None = None
    ) -> None:
        """Initialize the client.

        Args:
            config: Optional configuration object (will use env vars if not provided)
            session: Optional pre-built session, mainly for tests
        """
        self.config = config or AtlassianConfig.from_env()
        self.session = session or Session()

        if self.config.proxies:
            self.session.proxies.update(self.config.proxies)
            logger.debug(f"Configured proxies: {list(self.config.proxies)}")

        configure_ssl_verification(
            url=self.config.api_url,
            session=self.session,
            ssl_verify=self.config.ssl_verify,
        )
        self.preprocessor = ConfluencePreprocessor()

    @staticmethod
    def auth_headers(access_token: str) -> dict[str, str]:
        return {**JSON_HEADERS, "Authorization": f"Bearer {access_token}"}

    def resolve_tenant(self, access_token: str) -> Tenant:
        """Discover the cloud site the token grants access to.

        Calls the accessible-resources endpoint once and returns both the
        cloud id and the site URL of the first entry.

        Args:
            access_token: The caller's OAuth access token

        Returns:
            The first accessible Tenant

        Raises:
            TenantResolutionError: If the request fails, the body is not a
                JSON array, or the array is empty
        """
        url = f"{self.config.api_url}{ACCESSIBLE_RESOURCES_PATH}"
        try:
            response = self.session.get(
                url,
                headers=self.auth_headers(access_token),
                timeout=self.config.timeout,
                verify=self.config.ssl_verify,
            )
            response.raise_for_status()
            resources = response.json()
        except RequestException as e:
            raise TenantResolutionError(
                f"Failed to fetch accessible resources: {e}"
            ) from e
        except ValueError as e:
            raise TenantResolutionError(
                f"Accessible resources response is not valid JSON: {e}"
            ) from e

        if not isinstance(resources, list):
            raise TenantResolutionError(
                "Accessible resources response is not a list of sites."
            )
        if not resources:
            raise TenantResolutionError(
                "No accessible Atlassian resources found for this user."
            )

        first = resources[0]
        tenant = Tenant.from_api_response(first if isinstance(first, dict) else {})
        if not tenant.id:
            raise TenantResolutionError(
                "First accessible resource does not carry a cloud id."
            )
        if len(resources) > 1:
            logger.debug(
                f"Token grants access to {len(resources)} sites; using the first ({tenant.url})"
            )
        logger.debug(f"Resolved tenant {tenant.id} ({tenant.url})")
        return tenant

    def jira_api(self, tenant: Tenant) -> Jira:
        """Jira REST wrapper rooted at ``/ex/jira/{cloudId}`` on the shared session."""
        return Jira(
            url=f"{self.config.api_url}/ex/jira/{tenant.id}",
            session=self.session,
            cloud=True,
            verify_ssl=self.config.ssl_verify,
            timeout=self.config.timeout,
        )

    def confluence_api(self, tenant: Tenant) -> Confluence:
        """Confluence REST wrapper rooted at ``/ex/confluence/{cloudId}``."""
        return Confluence(
            url=f"{self.config.api_url}/ex/confluence/{tenant.id}",
            session=self.session,
            cloud=True,
            verify_ssl=self.config.ssl_verify,
            timeout=self.config.timeout,
        )

    @staticmethod
    def checked_json(response: Response) -> Any:
        """Return the JSON body of a response, failing on 4xx/5xx statuses.

        Raises:
            AtlassianApiError: If the status code is 400 or above
            ValueError: If the body is not valid JSON
        """
        if response.status_code >= 400:
            raise AtlassianApiError(response.status_code, response.text)
        return response.json()
