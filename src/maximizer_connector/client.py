"""Client for the Maximizer.Web.Data JSON API.

Every data call is a POST of a JSON document to
{server}/MaximizerWebData/Data.svc/json/{endpoint}. The API reports its own
outcome in the Code field of the body rather than through HTTP status.
"""

import json
import logging
from typing import Any, Optional, Union

import httpx

from maximizer_connector.auth.hooks import build_session
from maximizer_connector.endpoints import data_api_base
from maximizer_connector.errors import ApplicationError, RefreshRequested, ValidationError
from maximizer_connector.models.api_result import ApiResult
from maximizer_connector.models.credentials import Credentials

logger = logging.getLogger(__name__)

RequestBody = Union[str, bytes, dict[str, Any], list[Any]]


class MaximizerClient:
    """
    Single entry point for data API calls.
    Sends one request per call and never retries; refresh-and-retry is the
    caller's job when RefreshRequested is raised.
    """

    DEFAULT_HEADERS = {"Content-Type": "application/json"}

    def __init__(self, credentials: Credentials, client: Optional[httpx.Client] = None):
        """
        Args:
            credentials: Stored connection details; base_url is required
            client: Optional httpx client. When omitted, one is built with the
                bearer and response-classification hooks installed.
        """
        if not credentials.base_url:
            raise ValidationError("The Maximizer URL is required.")
        self.credentials = credentials
        self.base_url = data_api_base(credentials.base_url)
        self.http = client or build_session(credentials)

    def _encode(self, request: RequestBody) -> Union[str, bytes]:
        """Raw strings and bytes go out as-is; anything else is JSON-encoded once."""
        if isinstance(request, (str, bytes)):
            return request
        return json.dumps(request)

    def send(
        self,
        endpoint: str,
        request: RequestBody,
        headers: Optional[dict[str, str]] = None,
    ) -> dict[str, Any]:
        """
        POST request to endpoint (e.g. "Create", "Read") and return the parsed body.
        Raises RefreshRequested when the token was rejected and ApplicationError
        for any other failure Code.
        """
        url = f"{self.base_url}/{endpoint}"
        response = self.http.post(
            url,
            content=self._encode(request),
            headers=headers or self.DEFAULT_HEADERS,
        )
        if response.status_code == 401:
            raise RefreshRequested()
        response.raise_for_status()

        payload = response.json() if response.content else None
        result = ApiResult.from_payload(payload)
        if result.succeeded:
            return payload

        message = result.message
        logger.warning("%s returned Code=%s: %s", endpoint, result.code, message)
        if result.mentions_token():
            logger.info("Authentication error calling %s", endpoint)
            raise RefreshRequested()

        raise ApplicationError(message or "The Maximizer.Web.Data API request failed.")
