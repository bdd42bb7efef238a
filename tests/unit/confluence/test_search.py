"""Tests for the Confluence SearchMixin."""

import pytest
from fixtures.atlassian_mocks import MOCK_ACCESS_TOKEN, MOCK_CQL_SEARCH_RESPONSE
from requests.exceptions import HTTPError

from mcp_atlassian_agent.models import ConfluencePageSummary


def test_search_pages(fetcher, mock_confluence):
    mock_confluence.get.return_value = MOCK_CQL_SEARCH_RESPONSE

    results = fetcher.search_pages(MOCK_ACCESS_TOKEN, "type=page AND space=DEV")

    assert len(results) == 2
    assert all(isinstance(r, ConfluencePageSummary) for r in results)
    first = results[0]
    assert first.id == "123456789"
    assert first.title == "Release notes 2.4"
    assert first.space_key == "DEV"
    assert first.space_name == "Development"
    assert first.url == (
        "https://example.atlassian.net/wiki/spaces/DEV/pages/123456789/Release+notes+2.4"
    )
    assert results[1].type == "blogpost"


def test_cql_passed_through_unchanged(fetcher, mock_confluence):
    mock_confluence.get.return_value = MOCK_CQL_SEARCH_RESPONSE
    cql = 'title ~ "roadmap" AND space = "DEV" ORDER BY lastmodified DESC'

    fetcher.search_pages(MOCK_ACCESS_TOKEN, cql)

    args, kwargs = mock_confluence.get.call_args
    assert args[0] == "wiki/rest/api/content/search"
    assert kwargs["params"] == {"cql": cql, "expand": "space"}
    assert kwargs["headers"]["Authorization"] == f"Bearer {MOCK_ACCESS_TOKEN}"


def test_empty_results(fetcher, mock_confluence):
    mock_confluence.get.return_value = {"results": [], "size": 0}

    assert fetcher.search_pages(MOCK_ACCESS_TOKEN, "type=page") == []


def test_unexpected_response_type(fetcher, mock_confluence):
    mock_confluence.get.return_value = "not json"

    with pytest.raises(ValueError, match="Unexpected response"):
        fetcher.search_pages(MOCK_ACCESS_TOKEN, "type=page")


def test_http_error_propagates(fetcher, mock_confluence):
    mock_confluence.get.side_effect = HTTPError("400 Client Error: Bad Request")

    with pytest.raises(HTTPError):
        fetcher.search_pages(MOCK_ACCESS_TOKEN, "type=")
