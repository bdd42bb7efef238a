"""Tests for the Confluence PagesMixin."""

import pytest
from fixtures.atlassian_mocks import (
    MOCK_ACCESS_TOKEN,
    MOCK_CREATE_PAGE_RESPONSE,
    MOCK_PAGE_RESPONSE,
)
from fixtures.responses import make_response

from mcp_atlassian_agent.exceptions import AtlassianApiError


class TestGetPageContent:
    def test_get_page_content(self, fetcher, mock_confluence):
        mock_confluence.get.return_value = make_response(json_data=MOCK_PAGE_RESPONSE)

        page = fetcher.get_page_content(MOCK_ACCESS_TOKEN, "123456789")

        assert page.id == "123456789"
        assert page.title == "Release notes 2.4"
        assert page.space_id == "98306"
        assert page.raw_html.startswith("<h1>Release 2.4</h1>")
        assert "# Release 2.4" in page.content
        assert "@user_5b10ac8d82e05b22cc7d4ef5" in page.content
        assert "Faster search" in page.content

    def test_requests_storage_body(self, fetcher, mock_confluence):
        mock_confluence.get.return_value = make_response(json_data=MOCK_PAGE_RESPONSE)

        fetcher.get_page_content(MOCK_ACCESS_TOKEN, "123456789")

        args, kwargs = mock_confluence.get.call_args
        assert args[0] == "wiki/api/v2/pages/123456789"
        assert kwargs["params"] == {"body-format": "storage"}
        assert kwargs["advanced_mode"] is True

    def test_error_status(self, fetcher, mock_confluence):
        mock_confluence.get.return_value = make_response(
            status_code=404, text='{"errors":[{"title":"Not Found"}]}'
        )

        with pytest.raises(AtlassianApiError) as exc_info:
            fetcher.get_page_content(MOCK_ACCESS_TOKEN, "1")

        assert str(exc_info.value) == (
            'Status: 404, body: {"errors":[{"title":"Not Found"}]}'
        )

    def test_page_without_body(self, fetcher, mock_confluence):
        mock_confluence.get.return_value = make_response(
            json_data={"id": "5", "title": "Empty"}
        )

        page = fetcher.get_page_content(MOCK_ACCESS_TOKEN, "5")

        assert page.raw_html == ""
        assert page.content == ""


class TestCreatePage:
    def test_create_page(self, fetcher, mock_confluence):
        mock_confluence.post.return_value = make_response(
            json_data=MOCK_CREATE_PAGE_RESPONSE
        )

        page = fetcher.create_page(
            MOCK_ACCESS_TOKEN, "98306", "Meeting notes", "<p>Agenda</p>"
        )

        assert page.id == "223344"
        assert page.link == (
            "https://example.atlassian.net/wiki/spaces/DEV/pages/223344/Meeting+notes"
        )

    def test_payload(self, fetcher, mock_confluence):
        mock_confluence.post.return_value = make_response(
            json_data=MOCK_CREATE_PAGE_RESPONSE
        )

        fetcher.create_page(MOCK_ACCESS_TOKEN, "98306", "Meeting notes", "<p>Agenda</p>")

        args, kwargs = mock_confluence.post.call_args
        assert args[0] == "wiki/api/v2/pages"
        assert kwargs["data"] == {
            "spaceId": "98306",
            "status": "current",
            "title": "Meeting notes",
            "body": {"representation": "storage", "value": "<p>Agenda</p>"},
        }
        assert kwargs["advanced_mode"] is True

    def test_error_status(self, fetcher, mock_confluence):
        mock_confluence.post.return_value = make_response(
            status_code=400, text="A page with this title already exists"
        )

        with pytest.raises(AtlassianApiError, match="Status: 400"):
            fetcher.create_page(MOCK_ACCESS_TOKEN, "98306", "Dup", "<p/>")
