"""
Jira issue projections.

These models keep only the handful of fields an agent needs from the
(large) issue payloads returned by the Jira Cloud REST API.
"""

import logging
from typing import Any

from .base import ApiModel, as_text, get_path
from .constants import (
    EMPTY_STRING,
    JIRA_DEFAULT_ASSIGNEE,
    JIRA_DEFAULT_KEY,
    JIRA_DEFAULT_PRIORITY,
    JIRA_DEFAULT_STATUS,
    JIRA_NO_DESCRIPTION,
    JIRA_NO_SUMMARY,
)

logger = logging.getLogger(__name__)


def find_first_text(node: Any) -> str | None:
    """
    Return the first ``"text"`` string found anywhere in an ADF document tree.

    The tree is searched depth-first in document order, so for a description
    like ``paragraph -> [text "Hello", text "world"]`` the result is
    ``"Hello"``.

    Args:
        node: A JSON value (dict, list or scalar) from an Atlassian Document

    Returns:
        The first text value, or None if the tree holds none
    """
    if isinstance(node, dict):
        for key, value in node.items():
            if key == "text" and isinstance(value, str):
                return value
            found = find_first_text(value)
            if found is not None:
                return found
    elif isinstance(node, list):
        for item in node:
            found = find_first_text(item)
            if found is not None:
                return found
    return None


class JiraIssueSummary(ApiModel):
    """
    Compact view of a Jira issue.
    """

    key: str = JIRA_DEFAULT_KEY
    summary: str = JIRA_NO_SUMMARY
    status: str = JIRA_DEFAULT_STATUS
    priority: str = JIRA_DEFAULT_PRIORITY
    assignee: str = JIRA_DEFAULT_ASSIGNEE
    description: str = JIRA_NO_DESCRIPTION

    @classmethod
    def from_api_response(
        cls, data: dict[str, Any], **kwargs: Any
    ) -> "JiraIssueSummary":
        """
        Create a JiraIssueSummary from a ``GET /rest/api/3/issue`` response.

        Fields that are absent or null fall back to their placeholders.

        Args:
            data: The issue data from the Jira API

        Returns:
            A JiraIssueSummary instance
        """
        if not data:
            return cls()

        fields = data.get("fields") or {}
        description = find_first_text(get_path(fields, "description", "content"))

        return cls(
            key=as_text(data.get("key"), JIRA_DEFAULT_KEY),
            summary=as_text(fields.get("summary"), JIRA_NO_SUMMARY),
            status=as_text(get_path(fields, "status", "name"), JIRA_DEFAULT_STATUS),
            priority=as_text(
                get_path(fields, "priority", "name"), JIRA_DEFAULT_PRIORITY
            ),
            assignee=as_text(
                get_path(fields, "assignee", "displayName"), JIRA_DEFAULT_ASSIGNEE
            ),
            description=description
            if description is not None
            else JIRA_NO_DESCRIPTION,
        )

    def to_markdown(self) -> str:
        """Render the issue as the multi-line block handed back to agents."""
        return "\n".join(
            [
                f"**Issue:** {self.key}",
                f"**Summary:** {self.summary}",
                f"**Status:** {self.status}",
                f"**Priority:** {self.priority}",
                f"**Assignee:** {self.assignee}",
                f"**Description:** {self.description}",
            ]
        )


class CreatedIssue(ApiModel):
    """
    Identifiers returned by ``POST /rest/api/2/issue``.
    """

    id: str = EMPTY_STRING
    key: str = EMPTY_STRING
    self_url: str | None = None

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "CreatedIssue":
        if not data:
            return cls()
        return cls(
            id=as_text(data.get("id"), EMPTY_STRING),
            key=as_text(data.get("key"), EMPTY_STRING),
            self_url=data.get("self"),
        )
