"""Configuration for Atlassian Cloud API access."""

import logging
import os
from dataclasses import dataclass

from .utils.io import is_env_truthy
from .utils.logging import log_config_param
from .utils.oauth import OAuthConfig

logger = logging.getLogger("mcp-atlassian-agent.config")

DEFAULT_API_URL = "https://api.atlassian.com"
DEFAULT_IDENTITY = "default"
DEFAULT_TIMEOUT = 75


@dataclass
class AtlassianConfig:
    """Atlassian Cloud gateway configuration.

    Every tool call goes through the api.atlassian.com gateway with a
    per-user OAuth access token; the tenant (cloud id) is discovered from the
    token on each call rather than configured here.
    """

    api_url: str = DEFAULT_API_URL  # Gateway base URL
    identity: str = DEFAULT_IDENTITY  # Identity used when a request carries no token
    access_token: str | None = None  # Static token registered for `identity`
    oauth_config: OAuthConfig | None = None  # OAuth app used to refresh stored tokens
    ssl_verify: bool = True  # Whether to verify SSL certificates
    timeout: int = DEFAULT_TIMEOUT  # Per-request timeout in seconds
    http_proxy: str | None = None  # HTTP proxy URL
    https_proxy: str | None = None  # HTTPS proxy URL
    no_proxy: str | None = None  # Comma-separated list of hosts to bypass proxy
    socks_proxy: str | None = None  # SOCKS proxy URL

    @property
    def proxies(self) -> dict[str, str]:
        """Proxy mapping in the shape requests expects."""
        proxies: dict[str, str] = {}
        # A SOCKS proxy (socks5://...) serves both schemes unless overridden
        if self.http_proxy or self.socks_proxy:
            proxies["http"] = self.http_proxy or self.socks_proxy
        if self.https_proxy or self.socks_proxy:
            proxies["https"] = self.https_proxy or self.socks_proxy
        if proxies and self.no_proxy:
            proxies["no_proxy"] = self.no_proxy
        return proxies

    @classmethod
    def from_env(cls) -> "AtlassianConfig":
        """Create configuration from environment variables.

        Returns:
            AtlassianConfig with values from environment variables

        Raises:
            ValueError: If ATLASSIAN_TIMEOUT is not a positive integer
        """
        timeout_env = os.getenv("ATLASSIAN_TIMEOUT", str(DEFAULT_TIMEOUT))
        if not timeout_env.isdigit() or int(timeout_env) <= 0:
            raise ValueError(
                f"ATLASSIAN_TIMEOUT must be a positive integer, got '{timeout_env}'"
            )

        config = cls(
            api_url=os.getenv("ATLASSIAN_API_URL", DEFAULT_API_URL).rstrip("/"),
            identity=os.getenv("ATLASSIAN_IDENTITY") or DEFAULT_IDENTITY,
            access_token=os.getenv("ATLASSIAN_ACCESS_TOKEN") or None,
            oauth_config=OAuthConfig.from_env(),
            ssl_verify=is_env_truthy("ATLASSIAN_SSL_VERIFY", "true"),
            timeout=int(timeout_env),
            http_proxy=os.getenv("ATLASSIAN_HTTP_PROXY", os.getenv("HTTP_PROXY")),
            https_proxy=os.getenv("ATLASSIAN_HTTPS_PROXY", os.getenv("HTTPS_PROXY")),
            no_proxy=os.getenv("ATLASSIAN_NO_PROXY", os.getenv("NO_PROXY")),
            socks_proxy=os.getenv("ATLASSIAN_SOCKS_PROXY", os.getenv("SOCKS_PROXY")),
        )
        config.log_summary()
        return config

    def log_summary(self) -> None:
        log_config_param(logger, "API URL", self.api_url)
        log_config_param(logger, "identity", self.identity)
        log_config_param(logger, "access token", self.access_token, sensitive=True)
        log_config_param(
            logger,
            "OAuth client id",
            self.oauth_config.client_id if self.oauth_config else None,
        )
        if not self.ssl_verify:
            logger.warning("Atlassian SSL verification is disabled")
