"""Confluence operations."""

from .pages import PagesMixin
from .search import SearchMixin

__all__ = ["PagesMixin", "SearchMixin"]
