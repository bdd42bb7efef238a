"""Identity to access-token resolution.

Operations never look up "the current user" themselves; they receive an
identity and ask a :class:`TokenProvider` for the matching Atlassian access
token.
"""

import json
import logging
import threading
from pathlib import Path
from typing import Protocol

import keyring

from .exceptions import MCPAtlassianAuthenticationError
from .utils.logging import mask_sensitive
from .utils.oauth import OAuthConfig, OAuthTokens

logger = logging.getLogger("mcp-atlassian-agent.tokens")

KEYRING_SERVICE_NAME = "mcp-atlassian-agent"
TOKEN_DIR = Path.home() / ".mcp-atlassian-agent"


class TokenProvider(Protocol):
    """Anything that can turn an identity into an access token."""

    def get_token(self, identity: str) -> str:
        """Return the access token for ``identity``.

        Raises:
            MCPAtlassianAuthenticationError: If no usable token exists.
        """
        ...


class StaticTokenProvider:
    """Serves one token regardless of identity.

    Used for HTTP requests that carry their own ``Authorization: Bearer``
    header.
    """

    def __init__(self, token: str) -> None:
        self._token = token

    def get_token(self, identity: str) -> str:
        if not self._token:
            raise MCPAtlassianAuthenticationError(
                f"Empty access token supplied for identity '{identity}'"
            )
        return self._token


class TokenManager:
    """Per-identity token store backed by the system keyring.

    Lookup order is: tokens registered in memory, the keyring, then a JSON
    file under ``~/.mcp-atlassian-agent`` for hosts without a keyring
    backend. Expired tokens are refreshed when a refresh token and an OAuth
    app are available.
    """

    def __init__(
        self,
        oauth_config: OAuthConfig | None = None,
        token_dir: Path = TOKEN_DIR,
    ) -> None:
        self.oauth_config = oauth_config
        self.token_dir = token_dir
        self._registered: dict[str, OAuthTokens] = {}
        self._lock = threading.Lock()

    def register(self, identity: str, access_token: str) -> None:
        """Register a token for ``identity`` for the lifetime of this process."""
        with self._lock:
            self._registered[identity] = OAuthTokens(access_token=access_token)
        logger.debug(
            f"Registered in-memory token for '{identity}': {mask_sensitive(access_token)}"
        )

    def get_token(self, identity: str) -> str:
        if not identity:
            raise MCPAtlassianAuthenticationError("No identity supplied")

        with self._lock:
            tokens = self._registered.get(identity)
        if tokens is None:
            tokens = self.load_tokens(identity)
        if tokens is None:
            raise MCPAtlassianAuthenticationError(
                f"No Atlassian access token stored for identity '{identity}'"
            )

        if tokens.is_expired:
            tokens = self._refresh(identity, tokens)
        return tokens.access_token

    def _refresh(self, identity: str, tokens: OAuthTokens) -> OAuthTokens:
        if not tokens.refresh_token or not self.oauth_config:
            raise MCPAtlassianAuthenticationError(
                f"Access token for identity '{identity}' has expired and cannot be refreshed"
            )
        refreshed = self.oauth_config.refresh_access_token(tokens.refresh_token)
        if refreshed is None:
            raise MCPAtlassianAuthenticationError(
                f"Failed to refresh access token for identity '{identity}'"
            )
        self.save_tokens(identity, refreshed)
        logger.info(f"Refreshed access token for identity '{identity}'")
        return refreshed

    def save_tokens(self, identity: str, tokens: OAuthTokens) -> None:
        """Persist tokens for ``identity`` in the keyring and the fallback file."""
        token_json = json.dumps(tokens.to_dict())
        try:
            keyring.set_password(KEYRING_SERVICE_NAME, identity, token_json)
            logger.debug(f"Saved OAuth tokens to keyring for {identity}")
        except Exception as e:
            logger.error(f"Failed to save tokens to keyring: {e}")
        self._save_tokens_to_file(identity, token_json)

    def load_tokens(self, identity: str) -> OAuthTokens | None:
        """Load stored tokens for ``identity``, or None if nothing is stored."""
        try:
            token_json = keyring.get_password(KEYRING_SERVICE_NAME, identity)
            if token_json:
                logger.debug(f"Loaded OAuth tokens from keyring for {identity}")
                return OAuthTokens.from_dict(json.loads(token_json))
        except Exception as e:
            logger.warning(
                f"Failed to load tokens from keyring: {e}. Trying file fallback."
            )
        return self._load_tokens_from_file(identity)

    def _token_path(self, identity: str) -> Path:
        return self.token_dir / f"{identity}.json"

    def _save_tokens_to_file(self, identity: str, token_json: str) -> None:
        try:
            self.token_dir.mkdir(parents=True, exist_ok=True)
            token_path = self._token_path(identity)
            token_path.write_text(token_json)
            token_path.chmod(0o600)
            logger.debug(f"Saved OAuth tokens to file {token_path}")
        except OSError as e:
            logger.error(f"Failed to save tokens to file: {e}")

    def _load_tokens_from_file(self, identity: str) -> OAuthTokens | None:
        token_path = self._token_path(identity)
        if not token_path.exists():
            return None
        try:
            tokens = OAuthTokens.from_dict(json.loads(token_path.read_text()))
            logger.debug(f"Loaded OAuth tokens from file {token_path}")
            return tokens
        except (OSError, ValueError) as e:
            logger.error(f"Failed to load tokens from file: {e}")
            return None
