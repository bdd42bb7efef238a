"""Tests for the SSL helpers."""

from unittest.mock import MagicMock

from mcp_atlassian_agent.utils.ssl import SSLIgnoreAdapter, configure_ssl_verification


def test_verification_enabled_leaves_session_alone():
    session = MagicMock()

    configure_ssl_verification("https://api.atlassian.com", session, ssl_verify=True)

    session.mount.assert_not_called()


def test_verification_disabled_mounts_adapter_for_host():
    session = MagicMock()

    configure_ssl_verification("https://api.atlassian.com", session, ssl_verify=False)

    prefixes = [call.args[0] for call in session.mount.call_args_list]
    assert prefixes == ["https://api.atlassian.com", "http://api.atlassian.com"]
    assert all(
        isinstance(call.args[1], SSLIgnoreAdapter)
        for call in session.mount.call_args_list
    )


def test_adapter_pool_skips_certificate_checks():
    adapter = SSLIgnoreAdapter()

    context = adapter.poolmanager.connection_pool_kw["ssl_context"]
    assert context.check_hostname is False
    assert context.verify_mode.name == "CERT_NONE"
