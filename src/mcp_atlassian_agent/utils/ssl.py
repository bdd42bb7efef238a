"""TLS configuration for the shared HTTP session."""

import logging
import ssl
from typing import Any
from urllib.parse import urlparse

from requests.adapters import HTTPAdapter
from requests.sessions import Session
from urllib3.poolmanager import PoolManager

logger = logging.getLogger("mcp-atlassian-agent.utils.ssl")


class SSLIgnoreAdapter(HTTPAdapter):
    """Transport adapter that skips certificate and hostname checks.

    Only mounted for the configured gateway host when verification is turned
    off, which is meant for TLS-intercepting corporate proxies.
    """

    def init_poolmanager(
        self, connections: int, maxsize: int, block: bool = False, **pool_kwargs: Any
    ) -> None:
        context = ssl.create_default_context()
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE

        self.poolmanager = PoolManager(
            num_pools=connections,
            maxsize=maxsize,
            block=block,
            ssl_context=context,
            **pool_kwargs,
        )

    def cert_verify(self, conn: Any, url: str, verify: bool, cert: Any) -> None:
        super().cert_verify(conn, url, verify=False, cert=cert)


def configure_ssl_verification(url: str, session: Session, ssl_verify: bool) -> None:
    """Disable certificate checks for ``url``'s host on ``session`` if requested.

    Args:
        url: The gateway URL whose host the adapter is mounted for
        session: The requests session to configure
        ssl_verify: Whether verification should stay on
    """
    if ssl_verify:
        return

    logger.warning(
        f"SSL verification disabled for {url}. This is insecure and should only be used in testing environments."
    )
    domain = urlparse(url).netloc
    adapter = SSLIgnoreAdapter()
    session.mount(f"https://{domain}", adapter)
    session.mount(f"http://{domain}", adapter)
