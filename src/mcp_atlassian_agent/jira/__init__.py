"""Jira operations."""

from .issues import IssuesMixin

__all__ = ["IssuesMixin"]
