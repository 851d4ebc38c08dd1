"""Request and response hooks run around every outbound call.

The Maximizer API answers HTTP 200 even when it rejects an access token, and
signals the failure through the Code field of the body. Hosts refresh tokens
on HTTP 401, so classify_response rewrites token failures to 401 and turns
every other failure Code into an ApplicationError.
"""

import json
import logging
from functools import partial
from typing import Any, Optional

import httpx

from maximizer_connector.config import USER_AGENT, http_timeout
from maximizer_connector.errors import ApplicationError
from maximizer_connector.models.api_result import ApiResult, compact_json
from maximizer_connector.models.credentials import Credentials

logger = logging.getLogger(__name__)


def decorate_request(request: httpx.Request, credentials: Optional[Credentials]) -> httpx.Request:
    """Set Authorization to the bearer access token, replacing any existing value."""
    if credentials is not None and credentials.access_token:
        request.headers["Authorization"] = f"Bearer {credentials.access_token}"
    return request


def _decoded_body(response: httpx.Response) -> Any:
    response.read()
    if not response.content:
        return None
    try:
        return response.json()
    except json.JSONDecodeError:
        return None


def classify_response(response: httpx.Response) -> httpx.Response:
    """
    Reinterpret soft failures carried in a 200 body.

    - 200 with a non-zero Code whose message mentions "token": status becomes 401
    - 200 with any other non-zero Code: ApplicationError with the full body as message
    - anything else (other statuses, Code 0 or absent, no body): unchanged
    """
    if response.status_code != 200:
        return response

    payload = _decoded_body(response)
    result = ApiResult.from_payload(payload)
    if not result.has_failure_code:
        return response

    if result.mentions_token():
        logger.info("Token rejected (Code=%s): %s", result.code, result.message)
        response.status_code = 401
        return response

    raise ApplicationError(compact_json(payload))


def build_session(credentials: Optional[Credentials], **client_kwargs: Any) -> httpx.Client:
    """
    httpx client with the bearer and response-classification hooks installed.
    Extra keyword arguments (transport, timeout, ...) go to httpx.Client.
    """
    client_kwargs.setdefault("timeout", http_timeout())
    client_kwargs.setdefault("headers", {"User-Agent": USER_AGENT})
    return httpx.Client(
        event_hooks={
            "request": [partial(decorate_request, credentials=credentials)],
            "response": [classify_response],
        },
        **client_kwargs,
    )
