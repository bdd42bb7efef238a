"""
Pydantic models for Jira and Confluence API responses.
"""

from .base import ApiModel
from .confluence import (
    ConfluencePageContent,
    ConfluencePageSummary,
    ConfluenceSearchResult,
    CreatedPage,
)
from .jira import CreatedIssue, JiraIssueSummary
from .tenant import Tenant

__all__ = [
    "ApiModel",
    "ConfluencePageContent",
    "ConfluencePageSummary",
    "ConfluenceSearchResult",
    "CreatedIssue",
    "CreatedPage",
    "JiraIssueSummary",
    "Tenant",
]
