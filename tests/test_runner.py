"""Tests for the single refresh-and-retry cycle."""

from unittest.mock import MagicMock

import httpx
import pytest

from maximizer_connector.auth.hooks import build_session
from maximizer_connector.auth.oauth import MaximizerAuth
from maximizer_connector.errors import ApplicationError, AuthenticationError, RefreshRequested
from maximizer_connector.models.credentials import Credentials, TokenPair
from maximizer_connector.operations.custom import CustomSearch
from maximizer_connector.runner import AuthState, invoke

from conftest import RecordingTransport, api_response


def _plain_session(credentials: Credentials) -> httpx.Client:
    return httpx.Client(transport=RecordingTransport())


@pytest.fixture
def auth() -> MagicMock:
    """Auth stub that hands out a new pair."""
    mock = MagicMock(spec=MaximizerAuth)
    mock.refresh_token.return_value = TokenPair(access_token="new", refresh_token="rnew")
    return mock


class TestInvoke:
    """Tests for invoke with stubbed operations."""

    def test_success_without_refresh(self, credentials: Credentials, auth: MagicMock) -> None:
        """A successful call returns the stored credentials untouched."""
        perform = MagicMock(return_value=["ok"])
        invocation = invoke(perform, credentials, {"name": "x"}, auth=auth, session_factory=_plain_session)
        assert invocation.result == ["ok"]
        assert invocation.credentials is credentials
        assert invocation.state is AuthState.AUTHENTICATED
        assert not invocation.refreshed
        auth.refresh_token.assert_not_called()
        assert perform.call_args.args[1] == {"name": "x"}

    def test_refreshes_and_retries_once(self, credentials: Credentials, auth: MagicMock) -> None:
        """RefreshRequested triggers one refresh and one retry with the new token."""
        perform = MagicMock(side_effect=[RefreshRequested(), "ok"])
        invocation = invoke(perform, credentials, auth=auth, session_factory=_plain_session)
        assert invocation.result == "ok"
        assert invocation.refreshed
        assert invocation.state is AuthState.AUTHENTICATED
        assert invocation.credentials.access_token == "new"
        assert invocation.credentials.refresh_token == "rnew"
        auth.refresh_token.assert_called_once_with(credentials)
        assert perform.call_count == 2
        retry_api = perform.call_args_list[1].args[0]
        assert retry_api.credentials.access_token == "new"

    def test_refresh_failure_is_terminal(self, credentials: Credentials, auth: MagicMock) -> None:
        """A failing refresh raises AuthenticationError without retrying."""
        request = httpx.Request("POST", "https://crm.example.com/token")
        auth.refresh_token.side_effect = httpx.HTTPStatusError(
            "400", request=request, response=httpx.Response(400, request=request)
        )
        perform = MagicMock(side_effect=RefreshRequested())
        with pytest.raises(AuthenticationError, match="Unable to refresh"):
            invoke(perform, credentials, auth=auth, session_factory=_plain_session)
        assert perform.call_count == 1

    def test_second_rejection_does_not_loop(self, credentials: Credentials, auth: MagicMock) -> None:
        """A retry rejected again stops after one refresh."""
        perform = MagicMock(side_effect=RefreshRequested())
        with pytest.raises(AuthenticationError, match="refreshed access token was rejected"):
            invoke(perform, credentials, auth=auth, session_factory=_plain_session)
        assert perform.call_count == 2
        auth.refresh_token.assert_called_once()

    def test_application_error_not_refreshed(self, credentials: Credentials, auth: MagicMock) -> None:
        """Non-token failures surface directly."""
        perform = MagicMock(side_effect=ApplicationError("bad"))
        with pytest.raises(ApplicationError, match="bad"):
            invoke(perform, credentials, auth=auth, session_factory=_plain_session)
        auth.refresh_token.assert_not_called()

    def test_sessions_are_closed(self, credentials: Credentials, auth: MagicMock) -> None:
        """Every session opened for an attempt is closed afterwards."""
        sessions: list[httpx.Client] = []

        def factory(creds: Credentials) -> httpx.Client:
            sessions.append(_plain_session(creds))
            return sessions[-1]

        perform = MagicMock(side_effect=[RefreshRequested(), "ok"])
        invoke(perform, credentials, auth=auth, session_factory=factory)
        assert len(sessions) == 2
        assert all(session.is_closed for session in sessions)


class TestInvokeOverHttp:
    """Full cycle through hooks, token endpoint and data API."""

    def test_expired_token_cycle(self, credentials: Credentials, app_id: str) -> None:
        """Token failure -> refresh -> retry carrying the new bearer token."""
        data = RecordingTransport(
            api_response({"Code": -1, "Msg": ["Invalid token"]}),
            api_response({"Code": 0, "Custom": {"Data": [{"Key": "k1"}]}}),
        )
        tokens = RecordingTransport(api_response({"access_token": "A2", "refresh_token": "R2"}))
        invocation = invoke(
            CustomSearch().perform,
            credentials,
            {"name": "Acme%"},
            auth=MaximizerAuth(client=httpx.Client(transport=tokens)),
            session_factory=lambda c: build_session(c, transport=data),
        )
        assert invocation.result == [{"Key": "k1"}]
        assert invocation.credentials.access_token == "A2"
        assert [r.headers["Authorization"] for r in data.requests] == ["Bearer atoken", "Bearer A2"]
        assert len(tokens.requests) == 1
