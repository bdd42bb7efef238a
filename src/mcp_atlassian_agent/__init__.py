import asyncio
import logging
import os
import sys

import click
from dotenv import load_dotenv

from mcp_atlassian_agent.utils.logging import setup_logging

__version__ = "0.1.0"

logging_level = logging.WARNING
if os.getenv("MCP_VERBOSE", "").lower() in ("true", "1", "yes"):
    logging_level = logging.DEBUG

logger = setup_logging(logging_level)


@click.command()
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Increase verbosity (can be used multiple times)",
)
@click.option(
    "--env-file", type=click.Path(exists=True, dir_okay=False), help="Path to .env file"
)
@click.option(
    "--oauth-setup",
    is_flag=True,
    help="Run the OAuth 2.0 flow and store tokens for --identity",
)
@click.option(
    "--transport",
    type=click.Choice(["stdio", "sse", "streamable-http"]),
    default="stdio",
    help="Transport type (stdio, sse, or streamable-http)",
)
@click.option(
    "--port",
    default=8000,
    help="Port to listen on for SSE or Streamable HTTP transport",
)
@click.option(
    "--host",
    default="0.0.0.0",  # noqa: S104
    help="Host to bind to for SSE or Streamable HTTP transport (default: 0.0.0.0)",
)
@click.option(
    "--path",
    default="/mcp",
    help="Path for Streamable HTTP transport (e.g., /mcp).",
)
@click.option(
    "--api-url",
    help="Atlassian gateway URL (default: https://api.atlassian.com)",
)
@click.option(
    "--identity",
    help="Identity whose stored token serves requests without a bearer token",
)
@click.option("--access-token", help="Static Atlassian OAuth access token for --identity")
@click.option(
    "--ssl-verify/--no-ssl-verify",
    default=True,
    help="Verify SSL certificates (default: verify)",
)
@click.option(
    "--read-only",
    is_flag=True,
    help="Run in read-only mode (disables all write operations)",
)
@click.option(
    "--enabled-tools",
    help="Comma-separated list of tools to enable (enables all if not specified)",
)
@click.option("--oauth-client-id", help="OAuth 2.0 client ID for Atlassian Cloud")
@click.option("--oauth-client-secret", help="OAuth 2.0 client secret for Atlassian Cloud")
@click.option("--oauth-redirect-uri", help="OAuth 2.0 redirect URI for Atlassian Cloud")
@click.option("--oauth-scope", help="OAuth 2.0 scopes (space-separated)")
def main(
    verbose: int,
    env_file: str | None,
    oauth_setup: bool,
    transport: str,
    port: int,
    host: str,
    path: str | None,
    api_url: str | None,
    identity: str | None,
    access_token: str | None,
    ssl_verify: bool,
    read_only: bool,
    enabled_tools: str | None,
    oauth_client_id: str | None,
    oauth_client_secret: str | None,
    oauth_redirect_uri: str | None,
    oauth_scope: str | None,
) -> None:
    """MCP Atlassian Agent - Jira and Confluence Cloud tools for AI agents.

    Every tool call resolves the caller's OAuth access token, discovers the
    cloud site it grants access to, and talks to api.atlassian.com.
    """
    if verbose == 1:
        current_logging_level = logging.INFO
    elif verbose >= 2:
        current_logging_level = logging.DEBUG
    elif os.getenv("MCP_VERY_VERBOSE", "false").lower() in ("true", "1", "yes"):
        current_logging_level = logging.DEBUG
    elif os.getenv("MCP_VERBOSE", "false").lower() in ("true", "1", "yes"):
        current_logging_level = logging.INFO
    else:
        current_logging_level = logging.WARNING

    global logger
    logger = setup_logging(current_logging_level)
    logger.debug(f"Logging level set to: {logging.getLevelName(current_logging_level)}")

    def was_option_provided(ctx: click.Context, param_name: str) -> bool:
        return ctx.get_parameter_source(param_name) not in (
            click.core.ParameterSource.DEFAULT_MAP,
            click.core.ParameterSource.DEFAULT,
        )

    if env_file:
        logger.debug(f"Loading environment from file: {env_file}")
        load_dotenv(env_file, override=True)
    else:
        load_dotenv(override=True)

    click_ctx = click.get_current_context(silent=True)

    # CLI options override the environment for downstream config
    env_overrides = {
        "api_url": ("ATLASSIAN_API_URL", api_url),
        "identity": ("ATLASSIAN_IDENTITY", identity),
        "access_token": ("ATLASSIAN_ACCESS_TOKEN", access_token),
        "ssl_verify": ("ATLASSIAN_SSL_VERIFY", str(ssl_verify).lower()),
        "read_only": ("READ_ONLY_MODE", str(read_only).lower()),
        "enabled_tools": ("ENABLED_TOOLS", enabled_tools),
        "oauth_client_id": ("ATLASSIAN_OAUTH_CLIENT_ID", oauth_client_id),
        "oauth_client_secret": ("ATLASSIAN_OAUTH_CLIENT_SECRET", oauth_client_secret),
        "oauth_redirect_uri": ("ATLASSIAN_OAUTH_REDIRECT_URI", oauth_redirect_uri),
        "oauth_scope": ("ATLASSIAN_OAUTH_SCOPE", oauth_scope),
    }
    for param_name, (env_var, value) in env_overrides.items():
        if click_ctx and was_option_provided(click_ctx, param_name) and value is not None:
            os.environ[env_var] = value

    if oauth_setup:
        from .utils.oauth_setup import run_oauth_setup

        logger.info("Starting OAuth 2.0 setup wizard")
        sys.exit(run_oauth_setup(os.getenv("ATLASSIAN_IDENTITY") or "default"))

    final_transport = os.getenv("TRANSPORT", "stdio").lower()
    if click_ctx and was_option_provided(click_ctx, "transport"):
        final_transport = transport
    if final_transport not in ("stdio", "sse", "streamable-http"):
        logger.warning(
            f"Invalid transport '{final_transport}' from env/default, using 'stdio'."
        )
        final_transport = "stdio"

    final_port = 8000
    port_env = os.getenv("PORT")
    if port_env and port_env.isdigit():
        final_port = int(port_env)
    if click_ctx and was_option_provided(click_ctx, "port"):
        final_port = port

    final_host = os.getenv("HOST", "0.0.0.0")  # noqa: S104
    if click_ctx and was_option_provided(click_ctx, "host"):
        final_host = host

    final_path: str | None = os.getenv("STREAMABLE_HTTP_PATH", None)
    if click_ctx and was_option_provided(click_ctx, "path"):
        final_path = path

    from mcp_atlassian_agent.servers import main_mcp

    run_kwargs: dict = {"transport": final_transport}
    if final_transport == "stdio":
        logger.info("Starting server with STDIO transport.")
    else:
        run_kwargs["host"] = final_host
        run_kwargs["port"] = final_port
        run_kwargs["log_level"] = logging.getLevelName(current_logging_level).lower()
        if final_path is not None:
            run_kwargs["path"] = final_path
        logger.info(
            f"Starting server with {final_transport.upper()} transport on http://{final_host}:{final_port}{final_path or ''}"
        )

    asyncio.run(main_mcp.run_async(**run_kwargs))


__all__ = ["main", "__version__"]

if __name__ == "__main__":
    main()
