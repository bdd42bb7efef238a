"""Tests for identity to token resolution."""

import json
import time
from unittest.mock import patch

import pytest

from mcp_atlassian_agent.exceptions import MCPAtlassianAuthenticationError
from mcp_atlassian_agent.tokens import (
    KEYRING_SERVICE_NAME,
    StaticTokenProvider,
    TokenManager,
)
from mcp_atlassian_agent.utils.oauth import OAuthConfig, OAuthTokens


@pytest.fixture
def mock_keyring():
    with patch("mcp_atlassian_agent.tokens.keyring") as mock:
        mock.get_password.return_value = None
        yield mock


@pytest.fixture
def oauth_config():
    return OAuthConfig(
        client_id="client",
        client_secret="secret",
        redirect_uri="http://localhost:8080/callback",
        scope="read:jira-work offline_access",
    )


@pytest.fixture
def token_manager(tmp_path, mock_keyring):
    return TokenManager(token_dir=tmp_path)


class TestStaticTokenProvider:
    def test_returns_token_for_any_identity(self):
        provider = StaticTokenProvider("tok")
        assert provider.get_token("alice") == "tok"
        assert provider.get_token("bob") == "tok"

    def test_empty_token(self):
        with pytest.raises(MCPAtlassianAuthenticationError):
            StaticTokenProvider("").get_token("alice")


class TestTokenManager:
    def test_registered_token(self, token_manager, mock_keyring):
        token_manager.register("alice", "tok-a")

        assert token_manager.get_token("alice") == "tok-a"
        mock_keyring.get_password.assert_not_called()

    def test_identities_are_isolated(self, token_manager):
        token_manager.register("alice", "tok-a")
        token_manager.register("bob", "tok-b")

        assert token_manager.get_token("alice") == "tok-a"
        assert token_manager.get_token("bob") == "tok-b"

    def test_empty_identity(self, token_manager):
        with pytest.raises(MCPAtlassianAuthenticationError):
            token_manager.get_token("")

    def test_unknown_identity(self, token_manager):
        with pytest.raises(MCPAtlassianAuthenticationError, match="carol"):
            token_manager.get_token("carol")

    def test_loads_from_keyring(self, token_manager, mock_keyring):
        mock_keyring.get_password.return_value = json.dumps(
            {"access_token": "kr-token", "refresh_token": None, "expires_at": None}
        )

        assert token_manager.get_token("alice") == "kr-token"
        mock_keyring.get_password.assert_called_once_with(KEYRING_SERVICE_NAME, "alice")

    def test_falls_back_to_file(self, token_manager, mock_keyring, tmp_path):
        mock_keyring.get_password.side_effect = RuntimeError("no backend")
        (tmp_path / "alice.json").write_text(json.dumps({"access_token": "file-token"}))

        assert token_manager.get_token("alice") == "file-token"

    def test_corrupt_file_is_ignored(self, token_manager, tmp_path):
        (tmp_path / "alice.json").write_text("{not json")

        with pytest.raises(MCPAtlassianAuthenticationError):
            token_manager.get_token("alice")

    def test_save_tokens(self, token_manager, mock_keyring, tmp_path):
        tokens = OAuthTokens(access_token="a", refresh_token="r", expires_at=123.0)

        token_manager.save_tokens("alice", tokens)

        mock_keyring.set_password.assert_called_once()
        service, username, payload = mock_keyring.set_password.call_args.args
        assert (service, username) == (KEYRING_SERVICE_NAME, "alice")
        assert json.loads(payload) == tokens.to_dict()
        token_file = tmp_path / "alice.json"
        assert json.loads(token_file.read_text()) == tokens.to_dict()
        assert token_file.stat().st_mode & 0o777 == 0o600

    def test_save_survives_keyring_failure(self, token_manager, mock_keyring, tmp_path):
        mock_keyring.set_password.side_effect = RuntimeError("locked")

        token_manager.save_tokens("alice", OAuthTokens(access_token="a"))

        assert (tmp_path / "alice.json").exists()

    def test_expired_token_is_refreshed(
        self, tmp_path, mock_keyring, oauth_config
    ):
        manager = TokenManager(oauth_config=oauth_config, token_dir=tmp_path)
        stale = OAuthTokens(
            access_token="old", refresh_token="r1", expires_at=time.time() - 10
        )
        mock_keyring.get_password.return_value = json.dumps(stale.to_dict())
        fresh = OAuthTokens(
            access_token="new", refresh_token="r2", expires_at=time.time() + 3600
        )

        with patch.object(
            OAuthConfig, "refresh_access_token", return_value=fresh
        ) as mock_refresh:
            assert manager.get_token("alice") == "new"

        mock_refresh.assert_called_once_with("r1")
        assert json.loads((tmp_path / "alice.json").read_text())["access_token"] == "new"

    def test_expired_without_refresh_token(self, token_manager, mock_keyring):
        mock_keyring.get_password.return_value = json.dumps(
            {"access_token": "old", "expires_at": time.time() - 10}
        )

        with pytest.raises(MCPAtlassianAuthenticationError, match="expired"):
            token_manager.get_token("alice")

    def test_refresh_failure(self, tmp_path, mock_keyring, oauth_config):
        manager = TokenManager(oauth_config=oauth_config, token_dir=tmp_path)
        mock_keyring.get_password.return_value = json.dumps(
            {"access_token": "old", "refresh_token": "r1", "expires_at": 1.0}
        )

        with patch.object(OAuthConfig, "refresh_access_token", return_value=None):
            with pytest.raises(MCPAtlassianAuthenticationError, match="refresh"):
                manager.get_token("alice")

    def test_token_resolved_on_every_call(self, token_manager, mock_keyring):
        mock_keyring.get_password.side_effect = [
            json.dumps({"access_token": "first"}),
            json.dumps({"access_token": "second"}),
        ]

        assert token_manager.get_token("alice") == "first"
        assert token_manager.get_token("alice") == "second"
