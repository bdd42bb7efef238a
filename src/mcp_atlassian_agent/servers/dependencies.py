"""Dependency providers for tool functions.

Tools never read ambient user state themselves: they ask these helpers for
an :class:`AtlassianService` and the caller's identity, then pass the
identity into the operation explicitly.
"""

from __future__ import annotations

import logging

from fastmcp import Context
from fastmcp.server.dependencies import get_http_request
from starlette.requests import Request

from mcp_atlassian_agent.service import AtlassianService
from mcp_atlassian_agent.servers.context import MainAppContext
from mcp_atlassian_agent.tokens import StaticTokenProvider, TokenProvider
from mcp_atlassian_agent.utils.logging import mask_sensitive

logger = logging.getLogger("mcp-atlassian-agent.servers.dependencies")

BEARER_IDENTITY = "bearer"


def get_app_context(ctx: Context) -> MainAppContext:
    """Return the MainAppContext stored by the server lifespan.

    Raises:
        ValueError: If the server lifespan did not provide a configured context.
    """
    lifespan_ctx_dict = ctx.request_context.lifespan_context
    app_lifespan_ctx: MainAppContext | None = (
        lifespan_ctx_dict.get("app_lifespan_context")
        if isinstance(lifespan_ctx_dict, dict)
        else None
    )
    if app_lifespan_ctx is None or app_lifespan_ctx.fetcher is None:
        raise ValueError(
            "Atlassian client not available. Ensure server is configured correctly."
        )
    return app_lifespan_ctx


def _get_request_token() -> str | None:
    """Return the bearer token attached by UserTokenMiddleware, if any."""
    try:
        request: Request = get_http_request()
    except RuntimeError:
        logger.debug("Not in an HTTP request context. Using server identity.")
        return None
    token = getattr(request.state, "user_atlassian_token", None)
    return token if isinstance(token, str) and token else None


async def get_atlassian_service(ctx: Context) -> AtlassianService:
    """Returns an AtlassianService appropriate for the current request.

    Requests that carried an ``Authorization: Bearer`` header are served with
    that token; everything else goes through the server's TokenManager.

    Args:
        ctx: The FastMCP context.

    Raises:
        ValueError: If the server is not configured.
    """
    app_ctx = get_app_context(ctx)
    token_provider: TokenProvider | None = app_ctx.token_manager

    user_token = _get_request_token()
    if user_token:
        logger.debug(
            f"get_atlassian_service: using request bearer token ...{mask_sensitive(user_token, 4)}"
        )
        token_provider = StaticTokenProvider(user_token)

    if token_provider is None:
        raise ValueError("No token provider configured for this server.")

    return AtlassianService(fetcher=app_ctx.fetcher, token_provider=token_provider)


async def get_identity(ctx: Context) -> str:
    """Return the identity of the caller of the current tool invocation."""
    if _get_request_token():
        return BEARER_IDENTITY
    app_ctx = get_app_context(ctx)
    return app_ctx.config.identity if app_ctx.config else ""
