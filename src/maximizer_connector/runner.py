"""Run one operation with a single refresh-and-retry cycle.

Authenticated --(RefreshRequested)--> RefreshRequested
RefreshRequested --(refresh succeeds, retry once)--> Authenticated
RefreshRequested --(refresh fails, or retry rejected again)--> Unauthenticated
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

import httpx

from maximizer_connector.auth.hooks import build_session
from maximizer_connector.auth.oauth import MaximizerAuth
from maximizer_connector.client import MaximizerClient
from maximizer_connector.errors import (
    ApplicationError,
    AuthenticationError,
    RefreshRequested,
    ValidationError,
)
from maximizer_connector.models.credentials import Credentials

logger = logging.getLogger(__name__)

Perform = Callable[[MaximizerClient, dict[str, Any]], Any]
SessionFactory = Callable[[Credentials], httpx.Client]


class AuthState(str, Enum):
    AUTHENTICATED = "authenticated"
    REFRESH_REQUESTED = "refresh_requested"
    UNAUTHENTICATED = "unauthenticated"


@dataclass
class Invocation:
    """Outcome of one run: result plus the credentials to store afterwards."""

    result: Any
    credentials: Credentials
    state: AuthState
    refreshed: bool = False


def invoke(
    perform: Perform,
    credentials: Credentials,
    input_data: Optional[dict[str, Any]] = None,
    *,
    auth: Optional[MaximizerAuth] = None,
    session_factory: SessionFactory = build_session,
) -> Invocation:
    """
    Call perform(api, input_data). If the token is rejected, refresh it once
    and retry once with the new credentials. Never loops.
    """
    data = input_data or {}
    try:
        with session_factory(credentials) as http:
            result = perform(MaximizerClient(credentials, http), data)
        return Invocation(result=result, credentials=credentials, state=AuthState.AUTHENTICATED)
    except RefreshRequested:
        logger.info("Access token rejected; state=%s", AuthState.REFRESH_REQUESTED.value)

    auth = auth or MaximizerAuth()
    try:
        tokens = auth.refresh_token(credentials)
    except (httpx.HTTPError, ApplicationError, ValidationError) as e:
        logger.warning("Token refresh failed; state=%s: %s", AuthState.UNAUTHENTICATED.value, e)
        raise AuthenticationError(f"Unable to refresh the access token: {e}") from e

    refreshed = credentials.with_tokens(tokens)
    logger.info("Access token refreshed; retrying once")
    try:
        with session_factory(refreshed) as http:
            result = perform(MaximizerClient(refreshed, http), data)
    except RefreshRequested as e:
        logger.warning("Refreshed token rejected; state=%s", AuthState.UNAUTHENTICATED.value)
        raise AuthenticationError("The refreshed access token was rejected.") from e
    return Invocation(
        result=result,
        credentials=refreshed,
        state=AuthState.AUTHENTICATED,
        refreshed=True,
    )
