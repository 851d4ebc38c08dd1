"""OAuth2 authorization-code grant with refresh tokens.

Maximizer's authentication service lives beside the data API on the same
server:
1. Authorize: browser redirect to /MaximizerWebAuthentication/OAuth2/Authorize
2. Token: form POST to /MaximizerWebAuthentication/OAuth2/Token exchanging the
   authorization code (grant_type=authorization_code) or a refresh token
   (grant_type=refresh_token) for a new token pair
"""

import logging
from typing import Any, Optional

import httpx

from maximizer_connector.config import USER_AGENT, http_timeout
from maximizer_connector.endpoints import AUTHORIZE_PATH, TOKEN_PATH, server_url
from maximizer_connector.errors import ApplicationError, ValidationError
from maximizer_connector.models.credentials import Credentials, TokenPair

logger = logging.getLogger(__name__)


def _require(credentials: Credentials, *fields: str) -> None:
    """Raise ValidationError naming every empty field, by its host key."""
    model_fields = type(credentials).model_fields
    missing = [
        model_fields[name].alias or name
        for name in fields
        if not getattr(credentials, name)
    ]
    if missing:
        raise ValidationError(f"Missing OAuth2 parameters: {', '.join(missing)}")


class MaximizerAuth:
    """
    Token acquisition and refresh against a Maximizer server.
    Each call is a single POST; nothing is retried here.
    """

    FORM_HEADERS = {"content-type": "application/x-www-form-urlencoded"}

    def __init__(self, client: Optional[httpx.Client] = None):
        self._client = client or httpx.Client(
            timeout=http_timeout(),
            headers={"User-Agent": USER_AGENT},
        )

    def authorize_url(self, credentials: Credentials, state: Optional[str] = None) -> str:
        """URL the user's browser is sent to in order to grant access."""
        _require(credentials, "base_url", "client_id", "redirect_uri")
        params = {
            "client_id": credentials.client_id,
            "state": state or credentials.state or "",
            "redirect_uri": credentials.redirect_uri,
            "response_type": "code",
        }
        url = httpx.URL(server_url(credentials.base_url, AUTHORIZE_PATH), params=params)
        return str(url)

    def acquire_token(
        self,
        credentials: Credentials,
        input_data: Optional[dict[str, Any]] = None,
    ) -> TokenPair:
        """
        Exchange an authorization code for a token pair.
        Parameters come from input_data first, then from stored credentials.
        """
        creds = credentials.merged(input_data)
        _require(creds, "base_url", "client_id", "client_secret", "code", "redirect_uri")
        return self._request_token(
            creds.base_url,
            {
                "client_id": creds.client_id,
                "client_secret": creds.client_secret,
                "grant_type": "authorization_code",
                "code": creds.code,
                "redirect_uri": creds.redirect_uri,
            },
        )

    def refresh_token(self, credentials: Credentials) -> TokenPair:
        """Exchange the stored refresh token for a new pair. Never reads user input."""
        _require(credentials, "base_url", "client_id", "client_secret", "refresh_token", "redirect_uri")
        return self._request_token(
            credentials.base_url,
            {
                "client_id": credentials.client_id,
                "client_secret": credentials.client_secret,
                "grant_type": "refresh_token",
                "refresh_token": credentials.refresh_token,
                "redirect_uri": credentials.redirect_uri,
            },
        )

    def _request_token(self, base_url: str, form: dict[str, str]) -> TokenPair:
        url = server_url(base_url, TOKEN_PATH)
        resp = self._client.post(url, data=form, headers=self.FORM_HEADERS)
        resp.raise_for_status()

        body = resp.json()
        if not isinstance(body, dict) or not body.get("access_token"):
            logger.warning("Token endpoint returned no access_token (grant_type=%s)", form["grant_type"])
            raise ApplicationError("The token endpoint did not return an access_token.")
        logger.debug("Token issued (grant_type=%s)", form["grant_type"])
        return TokenPair(
            access_token=body["access_token"],
            refresh_token=body.get("refresh_token"),
        )
