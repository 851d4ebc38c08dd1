"""Pytest fixtures for maximizer-connector tests."""

import json
from typing import Any, Callable, Union

import httpx
import pytest

from maximizer_connector.client import MaximizerClient
from maximizer_connector.models.credentials import Credentials

SERVER = "https://crm.example.com"

Reply = Union[httpx.Response, Callable[[httpx.Request], httpx.Response]]


class RecordingTransport(httpx.MockTransport):
    """Mock transport that answers with queued responses and records requests."""

    def __init__(self, *responses: Reply):
        self.requests: list[httpx.Request] = []
        self._responses = list(responses)
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._responses:
            raise AssertionError(f"Unexpected request: {request.method} {request.url}")
        reply = self._responses.pop(0)
        if callable(reply):
            return reply(request)
        return reply

    def json_bodies(self) -> list[Any]:
        return [json.loads(r.content) for r in self.requests]


def api_response(body: Any, status: int = 200) -> httpx.Response:
    """JSON response as the Maximizer API sends it."""
    return httpx.Response(status, json=body)


@pytest.fixture
def credentials() -> Credentials:
    """Fully connected credentials."""
    return Credentials(
        base_url=SERVER,
        client_id="id",
        client_secret="secret",
        redirect_uri="https://hooks.example.com/oauth/callback",
        access_token="atoken",
        refresh_token="rtoken",
    )


@pytest.fixture
def app_id(monkeypatch: pytest.MonkeyPatch) -> str:
    """Fixed ApplicationId for request assertions."""
    monkeypatch.setenv("MAXIMIZER_APP_ID", "test-app")
    return "test-app"


@pytest.fixture
def api(credentials: Credentials) -> MaximizerClient:
    """Client whose transport fails the test if it is ever reached."""
    return MaximizerClient(credentials, client=httpx.Client(transport=RecordingTransport()))
