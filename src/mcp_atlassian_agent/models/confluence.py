"""
Confluence page projections.
This module provides Pydantic models for CQL search results, page bodies
and newly created pages.
"""

import logging
from typing import Any

from pydantic import Field

from .base import ApiModel, as_text, get_path
from .constants import (
    CONFLUENCE_DEFAULT_ID,
    CONFLUENCE_DEFAULT_STATUS,
    CONFLUENCE_DEFAULT_TYPE,
    EMPTY_STRING,
)

logger = logging.getLogger(__name__)


class ConfluencePageSummary(ApiModel):
    """
    One hit from a CQL content search, flattened.
    """

    id: str = CONFLUENCE_DEFAULT_ID
    title: str = EMPTY_STRING
    type: str = CONFLUENCE_DEFAULT_TYPE
    status: str = CONFLUENCE_DEFAULT_STATUS
    space_key: str | None = None
    space_name: str | None = None
    url: str | None = None

    @classmethod
    def from_api_response(
        cls, data: dict[str, Any], **kwargs: Any
    ) -> "ConfluencePageSummary":
        """
        Create a ConfluencePageSummary from a content search result.

        Args:
            data: One entry of the ``results`` array
            **kwargs: Additional keyword arguments
                base_url: The ``_links.base`` of the enclosing response,
                    used to turn the relative ``webui`` link into a URL

        Returns:
            A ConfluencePageSummary instance
        """
        if not data:
            return cls()

        base_url = kwargs.get("base_url")
        webui = get_path(data, "_links", "webui")
        url = f"{base_url}{webui}" if base_url and webui else None

        return cls(
            id=as_text(data.get("id"), CONFLUENCE_DEFAULT_ID),
            title=as_text(data.get("title"), EMPTY_STRING),
            type=as_text(data.get("type"), CONFLUENCE_DEFAULT_TYPE),
            status=as_text(data.get("status"), CONFLUENCE_DEFAULT_STATUS),
            space_key=get_path(data, "space", "key"),
            space_name=get_path(data, "space", "name"),
            url=url,
        )


class ConfluenceSearchResult(ApiModel):
    """
    Model representing the page summaries of a CQL search response.
    """

    results: list[ConfluencePageSummary] = Field(default_factory=list)
    total_size: int = 0

    @classmethod
    def from_api_response(
        cls, data: dict[str, Any] | list[Any], **kwargs: Any
    ) -> "ConfluenceSearchResult":
        """
        Create a ConfluenceSearchResult from a ``content/search`` response.

        Accepts either the usual envelope (``{"results": [...], "_links":
        {...}}``) or a bare results array.
        """
        if not data:
            return cls()

        if isinstance(data, list):
            raw_results, base_url, total = data, None, len(data)
        else:
            raw_results = data.get("results") or []
            base_url = get_path(data, "_links", "base")
            total = data.get("totalSize", data.get("size", len(raw_results)))

        results = [
            ConfluencePageSummary.from_api_response(item, base_url=base_url)
            for item in raw_results
            if isinstance(item, dict)
        ]
        return cls(results=results, total_size=total or 0)


class ConfluencePageContent(ApiModel):
    """
    A page fetched with its storage-format body.

    ``raw_html`` holds the storage XHTML; ``content`` the summary text derived
    from it.
    """

    id: str = CONFLUENCE_DEFAULT_ID
    title: str = EMPTY_STRING
    space_id: str | None = None
    raw_html: str = EMPTY_STRING
    content: str = EMPTY_STRING

    @classmethod
    def from_api_response(
        cls, data: dict[str, Any], **kwargs: Any
    ) -> "ConfluencePageContent":
        """
        Create a ConfluencePageContent from a ``GET /api/v2/pages/{id}`` response.

        Args:
            data: The page data from the Confluence API
            **kwargs: Additional keyword arguments
                content_override: Summary text to store in ``content``

        Returns:
            A ConfluencePageContent instance
        """
        if not data:
            return cls()

        space_id = data.get("spaceId")
        return cls(
            id=as_text(data.get("id"), CONFLUENCE_DEFAULT_ID),
            title=as_text(data.get("title"), EMPTY_STRING),
            space_id=str(space_id) if space_id is not None else None,
            raw_html=as_text(get_path(data, "body", "storage", "value"), EMPTY_STRING),
            content=kwargs.get("content_override", EMPTY_STRING),
        )


class CreatedPage(ApiModel):
    """
    Model for the response of ``POST /api/v2/pages``.
    """

    id: str = EMPTY_STRING
    title: str = EMPTY_STRING
    base: str = EMPTY_STRING
    webui: str = EMPTY_STRING

    @property
    def link(self) -> str:
        """Browser link to the new page."""
        return f"{self.base}{self.webui}"

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "CreatedPage":
        if not data:
            return cls()
        return cls(
            id=as_text(data.get("id"), EMPTY_STRING),
            title=as_text(data.get("title"), EMPTY_STRING),
            base=as_text(get_path(data, "_links", "base"), EMPTY_STRING),
            webui=as_text(get_path(data, "_links", "webui"), EMPTY_STRING),
        )

    def to_simplified_dict(self) -> dict[str, Any]:
        return {"id": self.id, "title": self.title, "url": self.link}
