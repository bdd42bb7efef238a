"""Tenant (cloud site) model."""

from typing import Any

from .base import ApiModel, as_text


class Tenant(ApiModel):
    """
    A cloud site reachable with an access token.

    ``id`` is the cloud id used in ``/ex/jira/{id}`` and
    ``/ex/confluence/{id}`` gateway paths; ``url`` is the site base URL.
    """

    id: str
    url: str = ""
    name: str | None = None

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "Tenant":
        return cls(
            id=as_text(data.get("id"), ""),
            url=as_text(data.get("url"), ""),
            name=data.get("name"),
        )
