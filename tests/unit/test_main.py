"""Tests for the command line entry point."""

import os
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from mcp_atlassian_agent import main
from mcp_atlassian_agent.servers import main_mcp


@pytest.fixture
def run_server():
    """Capture the keyword arguments main() would start the server with."""
    with (
        patch.dict(os.environ, {}, clear=True),
        patch("mcp_atlassian_agent.load_dotenv"),
        patch.object(main_mcp, "run_async") as mock_run_async,
        patch("mcp_atlassian_agent.asyncio.run") as mock_asyncio_run,
    ):
        yield mock_run_async, mock_asyncio_run


def test_defaults_to_stdio(run_server):
    mock_run_async, mock_asyncio_run = run_server

    result = CliRunner().invoke(main, [])

    assert result.exit_code == 0, result.output
    mock_run_async.assert_called_once_with(transport="stdio")
    mock_asyncio_run.assert_called_once()


def test_streamable_http_options(run_server):
    mock_run_async, _ = run_server

    result = CliRunner().invoke(
        main, ["--transport", "streamable-http", "--port", "9000", "--host", "127.0.0.1"]
    )

    assert result.exit_code == 0, result.output
    kwargs = mock_run_async.call_args.kwargs
    assert kwargs["transport"] == "streamable-http"
    assert kwargs["port"] == 9000
    assert kwargs["host"] == "127.0.0.1"
    assert "path" not in kwargs


def test_transport_from_environment(run_server):
    mock_run_async, _ = run_server
    os.environ.update({"TRANSPORT": "sse", "PORT": "8123"})

    result = CliRunner().invoke(main, [])

    assert result.exit_code == 0, result.output
    kwargs = mock_run_async.call_args.kwargs
    assert kwargs["transport"] == "sse"
    assert kwargs["port"] == 8123


def test_invalid_transport_env_falls_back_to_stdio(run_server):
    mock_run_async, _ = run_server
    os.environ["TRANSPORT"] = "carrier-pigeon"

    result = CliRunner().invoke(main, [])

    assert result.exit_code == 0, result.output
    assert mock_run_async.call_args.kwargs == {"transport": "stdio"}


def test_options_are_exported_to_environment(run_server):
    result = CliRunner().invoke(
        main,
        [
            "--identity",
            "alice",
            "--access-token",
            "tok",
            "--read-only",
            "--enabled-tools",
            "jira_get_issue",
            "--no-ssl-verify",
        ],
    )

    assert result.exit_code == 0, result.output
    assert os.environ["ATLASSIAN_IDENTITY"] == "alice"
    assert os.environ["ATLASSIAN_ACCESS_TOKEN"] == "tok"
    assert os.environ["READ_ONLY_MODE"] == "true"
    assert os.environ["ENABLED_TOOLS"] == "jira_get_issue"
    assert os.environ["ATLASSIAN_SSL_VERIFY"] == "false"


def test_unset_options_leave_environment_alone(run_server):
    os.environ["ATLASSIAN_IDENTITY"] = "from-env"

    CliRunner().invoke(main, [])

    assert os.environ["ATLASSIAN_IDENTITY"] == "from-env"
    assert "READ_ONLY_MODE" not in os.environ


def test_oauth_setup(run_server):
    mock_run_async, _ = run_server

    with patch(
        "mcp_atlassian_agent.utils.oauth_setup.run_oauth_setup", return_value=0
    ) as mock_setup:
        result = CliRunner().invoke(main, ["--oauth-setup", "--identity", "bob"])

    assert result.exit_code == 0
    mock_setup.assert_called_once_with("bob")
    mock_run_async.assert_not_called()
