"""Main FastMCP server setup for the Atlassian agent tools."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any, Literal, Optional

from fastmcp import FastMCP
from fastmcp.tools import Tool as FastMCPTool
from mcp.types import Tool as MCPTool
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse

from mcp_atlassian_agent.config import AtlassianConfig
from mcp_atlassian_agent.fetcher import AtlassianFetcher
from mcp_atlassian_agent.tokens import TokenManager
from mcp_atlassian_agent.utils.io import is_read_only_mode
from mcp_atlassian_agent.utils.logging import mask_sensitive
from mcp_atlassian_agent.utils.tools import get_enabled_tools, should_include_tool

from .confluence import confluence_mcp
from .context import MainAppContext
from .jira import jira_mcp

logger = logging.getLogger("mcp-atlassian-agent.server.main")


async def health_check(request: Request) -> JSONResponse:
    return JSONResponse({"status": "ok"})


def build_app_context(
    read_only: bool = False, enabled_tools: list[str] | None = None
) -> MainAppContext:
    """Load configuration and create the process-wide fetcher and token manager."""
    config = AtlassianConfig.from_env()
    token_manager = TokenManager(oauth_config=config.oauth_config)
    if config.access_token:
        token_manager.register(config.identity, config.access_token)
    return MainAppContext(
        config=config,
        fetcher=AtlassianFetcher(config=config),
        token_manager=token_manager,
        read_only=read_only,
        enabled_tools=enabled_tools,
    )


@asynccontextmanager
async def main_lifespan(app: FastMCP[MainAppContext]) -> AsyncIterator[dict]:
    logger.info("Main Atlassian MCP server lifespan starting...")
    read_only = is_read_only_mode()
    enabled_tools = get_enabled_tools()

    try:
        app_context = build_app_context(read_only=read_only, enabled_tools=enabled_tools)
    except Exception as e:
        logger.error(f"Failed to load Atlassian configuration: {e}", exc_info=True)
        app_context = MainAppContext(read_only=read_only, enabled_tools=enabled_tools)

    logger.info(f"Read-only mode: {'ENABLED' if read_only else 'DISABLED'}")
    logger.info(f"Enabled tools filter: {enabled_tools or 'All tools enabled'}")
    try:
        yield {"app_lifespan_context": app_context}
    finally:
        if app_context.fetcher is not None:
            app_context.fetcher.session.close()
        logger.info("Main Atlassian MCP server lifespan shutting down.")


class AtlassianMCP(FastMCP[MainAppContext]):
    """FastMCP server that filters tools by read-only mode and ENABLED_TOOLS."""

    async def _mcp_list_tools(self) -> list[MCPTool]:
        req_context = self._mcp_server.request_context
        if req_context is None or req_context.lifespan_context is None:
            logger.warning("Lifespan context not available during _mcp_list_tools call.")
            return []

        lifespan_ctx_dict = req_context.lifespan_context
        app_lifespan_state: MainAppContext | None = (
            lifespan_ctx_dict.get("app_lifespan_context")
            if isinstance(lifespan_ctx_dict, dict)
            else None
        )
        read_only = app_lifespan_state.read_only if app_lifespan_state else False
        enabled_tools_filter = (
            app_lifespan_state.enabled_tools if app_lifespan_state else None
        )

        all_tools: dict[str, FastMCPTool] = await self.get_tools()
        filtered_tools: list[MCPTool] = []
        for registered_name, tool_obj in all_tools.items():
            if not should_include_tool(registered_name, enabled_tools_filter):
                logger.debug(f"Excluding tool '{registered_name}' (not enabled)")
                continue
            if read_only and "write" in tool_obj.tags:
                logger.debug(
                    f"Excluding tool '{registered_name}' due to read-only mode and 'write' tag"
                )
                continue
            filtered_tools.append(tool_obj.to_mcp_tool(name=registered_name))

        logger.debug(f"_mcp_list_tools: {len(filtered_tools)} tools after filtering")
        return filtered_tools

    def http_app(
        self,
        path: str | None = None,
        middleware: list[Middleware] | None = None,
        transport: Literal["streamable-http", "sse"] = "streamable-http",
    ) -> "Starlette":
        user_token_mw = Middleware(UserTokenMiddleware, mcp_server_ref=self)
        final_middleware_list = [user_token_mw]
        if middleware:
            final_middleware_list.extend(middleware)
        return super().http_app(
            path=path, middleware=final_middleware_list, transport=transport
        )


class UserTokenMiddleware(BaseHTTPMiddleware):
    """Attaches a caller-supplied Atlassian OAuth token to the request state.

    Only ``Authorization: Bearer <token>`` is accepted. Requests without the
    header fall back to the server's configured identity.
    """

    def __init__(
        self, app: Any, mcp_server_ref: Optional["AtlassianMCP"] = None
    ) -> None:
        super().__init__(app)
        self.mcp_server_ref = mcp_server_ref

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> JSONResponse:
        mcp_server_instance = self.mcp_server_ref
        if mcp_server_instance is None:
            return await call_next(request)

        mcp_path = mcp_server_instance.settings.streamable_http_path.rstrip("/")
        request_path = request.url.path.rstrip("/")
        if request_path == mcp_path and request.method == "POST":
            auth_header = request.headers.get("Authorization")
            if auth_header and auth_header.startswith("Bearer "):
                token = auth_header.split(" ", 1)[1].strip()
                if not token:
                    return JSONResponse(
                        {"error": "Unauthorized: Empty Bearer token"},
                        status_code=401,
                    )
                logger.debug(
                    f"UserTokenMiddleware: Bearer token extracted (masked): {mask_sensitive(token)}"
                )
                request.state.user_atlassian_token = token
            elif auth_header:
                scheme = auth_header.split(" ", 1)[0] if " " in auth_header else "Unknown"
                logger.warning(
                    f"Unsupported Authorization type for {request.url.path}: {scheme}"
                )
                return JSONResponse(
                    {"error": "Unauthorized: Only 'Bearer <OAuthToken>' is supported."},
                    status_code=401,
                )
            else:
                logger.debug(
                    f"No Authorization header provided for {request.url.path}. Using server identity."
                )
        return await call_next(request)


main_mcp = AtlassianMCP(name="Atlassian Agent MCP", lifespan=main_lifespan)
main_mcp.mount("jira", jira_mcp)
main_mcp.mount("confluence", confluence_mcp)


@main_mcp.custom_route("/healthz", methods=["GET"], include_in_schema=False)
async def _health_check_route(request: Request) -> JSONResponse:
    return await health_check(request)
