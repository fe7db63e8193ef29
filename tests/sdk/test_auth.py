"""Tests for SDK login (refresh token exchange)."""

import pytest
from unittest.mock import patch, Mock

from hawkin_cloud.sdk.auth import login
from hawkin_cloud.sdk.client import HawkinClient, Session
from hawkin_cloud.sdk.exceptions import AuthError, ConfigError, ServerError, ValidationError
from hawkin_cloud.sdk.types import Region


def token_response(status=200, access_token="new_token", expires_at=1900000000):
    return Mock(
        status_code=status,
        json=lambda: {"access_token": access_token, "expires_at": expires_at},
    )


class TestLogin:
    def test_success_stores_session(self):
        client = HawkinClient()
        with patch.object(client._http, "get") as mock_get:
            mock_get.return_value = token_response()
            session = login(client, "refresh")

        assert session.access_token == "new_token"
        assert session.expires_at == 1900000000
        assert session.base_url == "https://cloud.hawkindynamics.com/api/dev"
        assert client.session is session

    def test_sends_refresh_token_as_bearer(self):
        client = HawkinClient()
        with patch.object(client._http, "get") as mock_get:
            mock_get.return_value = token_response()
            login(client, "refresh")

            args, kwargs = mock_get.call_args
            assert args[0] == "https://cloud.hawkindynamics.com/api/token"
            assert kwargs["headers"]["Authorization"] == "Bearer refresh"

    @pytest.mark.parametrize("region, host", [
        ("Europe", "eu.cloud.hawkindynamics.com"),
        ("Asia/Pacific", "apac.cloud.hawkindynamics.com"),
        (Region.DEV, "cloud.dev.hawkindynamics.com"),
    ])
    def test_region_routing(self, region, host):
        client = HawkinClient()
        with patch.object(client._http, "get") as mock_get:
            mock_get.return_value = token_response()
            session = login(client, "refresh", region=region)

            assert mock_get.call_args[0][0] == f"https://{host}/api/token"
            assert session.base_url == f"https://{host}/api/dev"

    def test_unknown_region(self):
        client = HawkinClient()
        with patch.object(client._http, "get") as mock_get:
            with pytest.raises(ConfigError):
                login(client, "refresh", region="Mars")
            mock_get.assert_not_called()

    @pytest.mark.parametrize("token", ["", None, 42])
    def test_invalid_refresh_token(self, token):
        client = HawkinClient()
        with patch.object(client._http, "get") as mock_get:
            with pytest.raises(ValidationError):
                login(client, token)
            mock_get.assert_not_called()

    def test_401_leaves_session_unchanged(self):
        previous = Session("old", 1900000000, "https://cloud.hawkindynamics.com/api/dev")
        client = HawkinClient(session=previous)
        with patch.object(client._http, "get") as mock_get:
            mock_get.return_value = Mock(status_code=401)
            with pytest.raises(AuthError, match="Refresh token is invalid or expired"):
                login(client, "bad")
        assert client.session is previous

    def test_403(self):
        client = HawkinClient()
        with patch.object(client._http, "get") as mock_get:
            mock_get.return_value = Mock(status_code=403)
            with pytest.raises(AuthError, match="Refresh token is missing"):
                login(client, "bad")
        assert client.session is None

    def test_server_error(self):
        client = HawkinClient()
        with patch.object(client._http, "get") as mock_get:
            mock_get.return_value = Mock(status_code=500)
            with pytest.raises(ServerError, match="contact") as exc_info:
                login(client, "refresh")
        assert not isinstance(exc_info.value, AuthError)
        assert exc_info.value.status_code == 500
        assert client.session is None
