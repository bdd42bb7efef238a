"""Utility helpers for the Atlassian agent tools."""

from .io import is_read_only_mode
from .logging import mask_sensitive, setup_logging
from .oauth import OAuthConfig, OAuthTokens
from .ssl import configure_ssl_verification
from .tools import get_enabled_tools, should_include_tool

__all__ = [
    "OAuthConfig",
    "OAuthTokens",
    "configure_ssl_verification",
    "get_enabled_tools",
    "is_read_only_mode",
    "mask_sensitive",
    "setup_logging",
    "should_include_tool",
]
