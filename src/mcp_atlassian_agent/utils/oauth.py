"""OAuth 2.0 (3LO) utilities for Atlassian Cloud.

This module handles:
- OAuth app configuration (client credentials, redirect URI, scopes)
- Authorization URL construction
- Exchanging authorization codes and refresh tokens for access tokens

Where tokens are kept between runs is the job of
:class:`mcp_atlassian_agent.tokens.TokenManager`.
"""

import logging
import os
import time
import urllib.parse
from dataclasses import dataclass
from typing import Any, Optional

import requests

logger = logging.getLogger("mcp-atlassian-agent.oauth")

TOKEN_URL = "https://auth.atlassian.com/oauth/token"  # noqa: S105 - public endpoint URL, not a password
AUTHORIZE_URL = "https://auth.atlassian.com/authorize"
TOKEN_EXPIRY_MARGIN = 300  # 5 minutes in seconds


@dataclass
class OAuthTokens:
    """Access token material issued for one identity."""

    access_token: str
    refresh_token: str | None = None
    expires_at: float | None = None

    @property
    def is_expired(self) -> bool:
        """Check if the access token is expired or will expire within the margin.

        Tokens without an expiry (for example ones pasted in by hand) are
        treated as valid.
        """
        if not self.access_token:
            return True
        if self.expires_at is None:
            return False
        return time.time() + TOKEN_EXPIRY_MARGIN >= self.expires_at

    def to_dict(self) -> dict[str, Any]:
        return {
            "access_token": self.access_token,
            "refresh_token": self.refresh_token,
            "expires_at": self.expires_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Optional["OAuthTokens"]:
        if not data or not data.get("access_token"):
            return None
        return cls(
            access_token=data["access_token"],
            refresh_token=data.get("refresh_token"),
            expires_at=data.get("expires_at"),
        )

    @classmethod
    def from_token_response(
        cls, token_data: dict[str, Any], previous_refresh_token: str | None = None
    ) -> "OAuthTokens":
        """Build tokens from the body returned by the Atlassian token endpoint."""
        expires_in = token_data.get("expires_in")
        return cls(
            access_token=token_data["access_token"],
            # Refresh tokens rotate, but the endpoint may omit an unchanged one
            refresh_token=token_data.get("refresh_token", previous_refresh_token),
            expires_at=time.time() + expires_in if expires_in else None,
        )


@dataclass
class OAuthConfig:
    """OAuth 2.0 app configuration for Atlassian Cloud."""

    client_id: str
    client_secret: str
    redirect_uri: str
    scope: str

    def get_authorization_url(self, state: str) -> str:
        """Get the authorization URL for the OAuth 2.0 flow.

        Args:
            state: Random state string for CSRF protection

        Returns:
            The authorization URL to send the user to.
        """
        params = {
            "audience": "api.atlassian.com",
            "client_id": self.client_id,
            "scope": self.scope,
            "redirect_uri": self.redirect_uri,
            "response_type": "code",
            "prompt": "consent",
            "state": state,
        }
        return f"{AUTHORIZE_URL}?{urllib.parse.urlencode(params)}"

    def exchange_code_for_tokens(self, code: str) -> OAuthTokens | None:
        """Exchange an authorization code for access and refresh tokens.

        Args:
            code: The authorization code from the callback

        Returns:
            The issued tokens, or None if the exchange failed.
        """
        payload = {
            "grant_type": "authorization_code",
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "code": code,
            "redirect_uri": self.redirect_uri,
        }
        try:
            logger.debug("Exchanging code for tokens...")
            response = requests.post(TOKEN_URL, data=payload)
            response.raise_for_status()
            return OAuthTokens.from_token_response(response.json())
        except Exception as e:
            logger.error(f"Failed to exchange code for tokens: {e}")
            return None

    def refresh_access_token(self, refresh_token: str) -> OAuthTokens | None:
        """Use a refresh token to obtain a new access token.

        Args:
            refresh_token: The refresh token stored for the identity

        Returns:
            The refreshed tokens, or None if the refresh failed.
        """
        payload = {
            "grant_type": "refresh_token",
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "refresh_token": refresh_token,
        }
        try:
            logger.debug("Refreshing access token...")
            response = requests.post(TOKEN_URL, data=payload)
            response.raise_for_status()
            return OAuthTokens.from_token_response(
                response.json(), previous_refresh_token=refresh_token
            )
        except Exception as e:
            logger.error(f"Failed to refresh access token: {e}")
            return None

    @classmethod
    def from_env(cls) -> Optional["OAuthConfig"]:
        """Create an OAuth configuration from environment variables.

        Returns:
            OAuthConfig instance or None if any required variable is missing
        """
        client_id = os.getenv("ATLASSIAN_OAUTH_CLIENT_ID")
        client_secret = os.getenv("ATLASSIAN_OAUTH_CLIENT_SECRET")
        redirect_uri = os.getenv("ATLASSIAN_OAUTH_REDIRECT_URI")
        scope = os.getenv("ATLASSIAN_OAUTH_SCOPE")

        if not all([client_id, client_secret, redirect_uri, scope]):
            return None

        return cls(
            client_id=client_id,
            client_secret=client_secret,
            redirect_uri=redirect_uri,
            scope=scope,
        )
