"""
OAuth 2.0 authorization flow helper.

Runs the Atlassian 3LO flow for one identity:
1. Opens a browser at the authorization URL
2. Receives the callback with the authorization code on a local server
3. Exchanges the code for access and refresh tokens
4. Stores the tokens for the identity through the TokenManager
"""

import http.server
import logging
import os
import secrets
import socketserver
import threading
import urllib.parse
import webbrowser
from dataclasses import dataclass, field

from ..tokens import TokenManager
from .logging import mask_sensitive
from .oauth import OAuthConfig

logger = logging.getLogger("mcp-atlassian-agent.oauth-setup")

DEFAULT_REDIRECT_URI = "http://localhost:8080/callback"
DEFAULT_SCOPE = (
    "read:jira-work write:jira-work read:confluence-content.all "
    "write:confluence-content search:confluence offline_access"
)


@dataclass
class CallbackResult:
    """What the browser redirect delivered."""

    code: str | None = None
    state: str | None = None
    error: str | None = None
    received: threading.Event = field(default_factory=threading.Event)


def make_callback_handler(result: CallbackResult) -> type[http.server.BaseHTTPRequestHandler]:
    """Build a request handler class that records the callback into ``result``."""

    class CallbackHandler(http.server.BaseHTTPRequestHandler):
        def do_GET(self) -> None:  # noqa: N802
            params = urllib.parse.parse_qs(urllib.parse.urlparse(self.path).query)

            if "error" in params:
                result.error = params["error"][0]
                self._send_response(f"Authorization failed: {result.error}", 400)
                result.received.set()
            elif "code" in params:
                result.code = params["code"][0]
                result.state = params.get("state", [None])[0]
                self._send_response(
                    "Authorization successful! You can close this window now."
                )
                result.received.set()
            else:
                self._send_response(
                    "Invalid callback: Authorization code missing", 400
                )

        def _send_response(self, message: str, status: int = 200) -> None:
            self.send_response(status)
            self.send_header("Content-type", "text/html")
            self.end_headers()
            self.wfile.write(
                f"<html><body><h1>Atlassian OAuth</h1><p>{message}</p></body></html>".encode()
            )

        def log_message(self, format: str, *args: str) -> None:
            return

    return CallbackHandler


def parse_redirect_uri(redirect_uri: str) -> tuple[str | None, int]:
    """Parse the redirect URI to extract host and port."""
    parsed = urllib.parse.urlparse(redirect_uri)
    port = parsed.port or (443 if parsed.scheme == "https" else 80)
    return parsed.hostname, port


def run_oauth_flow(
    oauth_config: OAuthConfig,
    identity: str,
    token_manager: TokenManager,
    timeout: int = 300,
) -> bool:
    """Run the authorization flow and store the tokens for ``identity``.

    Returns:
        True if tokens were obtained and stored, False otherwise.
    """
    state = secrets.token_urlsafe(16)
    result = CallbackResult()

    hostname, port = parse_redirect_uri(oauth_config.redirect_uri)
    httpd: socketserver.TCPServer | None = None
    if hostname in ("localhost", "127.0.0.1"):
        logger.info(f"Starting local callback server on port {port}")
        try:
            httpd = socketserver.TCPServer(("", port), make_callback_handler(result))
        except OSError as e:
            logger.error(f"Failed to start callback server on port {port}: {e}")
            return False
        threading.Thread(target=httpd.serve_forever, daemon=True).start()

    try:
        auth_url = oauth_config.get_authorization_url(state=state)
        logger.info(f"Opening browser for authorization at {auth_url}")
        webbrowser.open(auth_url)

        if not result.received.wait(timeout):
            logger.error(
                f"Timed out waiting for authorization callback after {timeout} seconds"
            )
            return False
        if result.error:
            logger.error(f"Authorization error: {result.error}")
            return False
        if result.state != state:
            logger.error("State mismatch! Possible CSRF attack.")
            return False

        tokens = oauth_config.exchange_code_for_tokens(result.code)
        if tokens is None:
            logger.error("Failed to exchange authorization code for tokens")
            return False

        token_manager.save_tokens(identity, tokens)
        logger.info(
            f"Stored tokens for identity '{identity}' (access token {mask_sensitive(tokens.access_token)})"
        )
        return True
    finally:
        if httpd:
            httpd.shutdown()


def _prompt_for_input(prompt: str, env_var: str, default: str = "") -> str:
    value = os.getenv(env_var, "") or default
    suffix = f" [{value}]" if value else ""
    user_input = input(f"{prompt}{suffix}: ")
    return user_input or value


def run_oauth_setup(identity: str) -> int:
    """Run the OAuth 2.0 setup wizard interactively."""
    print("\n=== Atlassian OAuth 2.0 Setup ===")
    print("Create an OAuth 2.0 app at https://developer.atlassian.com/console/myapps/")
    print(f"Tokens will be stored for identity '{identity}'.\n")

    client_id = _prompt_for_input("OAuth Client ID", "ATLASSIAN_OAUTH_CLIENT_ID")
    client_secret = os.getenv("ATLASSIAN_OAUTH_CLIENT_SECRET") or input(
        "OAuth Client Secret: "
    )
    redirect_uri = _prompt_for_input(
        "OAuth Redirect URI", "ATLASSIAN_OAUTH_REDIRECT_URI", DEFAULT_REDIRECT_URI
    )
    scope = _prompt_for_input(
        "OAuth Scopes (space-separated)", "ATLASSIAN_OAUTH_SCOPE", DEFAULT_SCOPE
    )

    if not client_id or not client_secret:
        logger.error("OAuth Client ID and Client Secret are required")
        return 1

    oauth_config = OAuthConfig(
        client_id=client_id,
        client_secret=client_secret,
        redirect_uri=redirect_uri,
        scope=scope,
    )
    token_manager = TokenManager(oauth_config=oauth_config)
    return 0 if run_oauth_flow(oauth_config, identity, token_manager) else 1
