"""Module for Jira issue operations."""

import logging
from typing import Any

from ..client import AtlassianClient
from ..models.jira import CreatedIssue, JiraIssueSummary

logger = logging.getLogger("mcp-atlassian-agent.jira.issues")


class IssuesMixin(AtlassianClient):
    """Mixin for Jira issue operations.

    Every method resolves the tenant for the given token once, then talks to
    ``/ex/jira/{cloudId}``. Failures propagate as exceptions.
    """

    def get_issue(self, access_token: str, issue_id: str) -> JiraIssueSummary:
        """
        Get a Jira issue and project it to its summary fields.

        Args:
            access_token: The caller's OAuth access token
            issue_id: The issue key or id (e.g. 'PROJ-123')

        Returns:
            JiraIssueSummary with placeholders for missing fields

        Raises:
            TenantResolutionError: If the token grants access to no site
            HTTPError: If Jira rejects the request
            ValueError: If the response is not a JSON object
        """
        tenant = self.resolve_tenant(access_token)
        jira = self.jira_api(tenant)

        issue = jira.get(
            f"rest/api/3/issue/{issue_id}", headers=self.auth_headers(access_token)
        )
        if not isinstance(issue, dict):
            msg = f"Unexpected response for issue {issue_id}: {type(issue).__name__}"
            raise ValueError(msg)

        return JiraIssueSummary.from_api_response(issue)

    def create_issue(
        self,
        access_token: str,
        project_key: str,
        summary: str,
        issue_type: str,
        description: str | None = None,
    ) -> CreatedIssue:
        """
        Create a new Jira issue.

        Only project, summary and issue type are sent. ``description`` is
        accepted for tool-signature compatibility but is not part of the
        payload.

        Args:
            access_token: The caller's OAuth access token
            project_key: The key of the project (e.g. 'PROJ')
            summary: The issue summary
            issue_type: The issue type name (e.g. 'Task', 'Bug')
            description: Ignored

        Returns:
            The key and id of the created issue

        Raises:
            TenantResolutionError: If the token grants access to no site
            HTTPError: If Jira rejects the request
            ValueError: If the response is not a JSON object
        """
        if description:
            logger.debug(
                f"Description supplied for new issue in {project_key} is not sent to Jira"
            )

        payload: dict[str, Any] = {
            "fields": {
                "project": {"key": project_key},
                "summary": summary,
                "issuetype": {"name": issue_type},
            }
        }

        tenant = self.resolve_tenant(access_token)
        jira = self.jira_api(tenant)
        result = jira.post(
            "rest/api/2/issue", data=payload, headers=self.auth_headers(access_token)
        )
        if not isinstance(result, dict):
            msg = f"Unexpected response when creating issue in {project_key}"
            raise ValueError(msg)

        created = CreatedIssue.from_api_response(result)
        logger.info(f"Created issue {created.key} ({created.id}) in {project_key}")
        return created

    def update_issue_summary(
        self, access_token: str, issue_key: str, new_summary: str
    ) -> None:
        """
        Replace the summary of an existing issue.

        Jira answers 204 No Content on success; any body it does send is
        ignored.

        Args:
            access_token: The caller's OAuth access token
            issue_key: The issue key (e.g. 'PROJ-123')
            new_summary: The new summary text

        Raises:
            TenantResolutionError: If the token grants access to no site
            HTTPError: If Jira rejects the update
        """
        tenant = self.resolve_tenant(access_token)
        jira = self.jira_api(tenant)
        jira.put(
            f"rest/api/3/issue/{issue_key}",
            data={"fields": {"summary": new_summary}},
            headers=self.auth_headers(access_token),
        )
        logger.info(f"Updated summary of issue {issue_key}")
