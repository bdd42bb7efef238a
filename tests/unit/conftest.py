"""Shared fixtures for the unit tests."""

from unittest.mock import MagicMock, patch

import pytest
from fixtures.atlassian_mocks import MOCK_ACCESS_TOKEN, MOCK_CLOUD_ID, MOCK_SITE_URL

from mcp_atlassian_agent.config import AtlassianConfig
from mcp_atlassian_agent.fetcher import AtlassianFetcher
from mcp_atlassian_agent.models import Tenant


@pytest.fixture
def atlassian_config():
    """Return an AtlassianConfig pointing at the public gateway."""
    return AtlassianConfig(identity="alice", access_token=MOCK_ACCESS_TOKEN)


@pytest.fixture
def mock_session():
    """A stand-in for the shared requests.Session."""
    session = MagicMock()
    session.proxies = {}
    return session


@pytest.fixture
def tenant():
    return Tenant(id=MOCK_CLOUD_ID, url=MOCK_SITE_URL)


@pytest.fixture
def fetcher(atlassian_config, mock_session, tenant):
    """An AtlassianFetcher whose tenant lookup is stubbed out."""
    fetcher = AtlassianFetcher(config=atlassian_config, session=mock_session)
    with patch.object(fetcher, "resolve_tenant", return_value=tenant):
        yield fetcher


@pytest.fixture
def mock_jira():
    """Patch the atlassian-python-api Jira class used by the client."""
    with patch("mcp_atlassian_agent.client.Jira") as mock:
        yield mock.return_value


@pytest.fixture
def mock_confluence():
    """Patch the atlassian-python-api Confluence class used by the client."""
    with patch("mcp_atlassian_agent.client.Confluence") as mock:
        yield mock.return_value
