"""Connection test run when a user connects an account."""

import json
from typing import Any, Optional

import httpx

from maximizer_connector.endpoints import data_api_url
from maximizer_connector.errors import ApplicationError, RefreshRequested, ValidationError
from maximizer_connector.models.api_result import ApiResult
from maximizer_connector.models.credentials import Credentials

SESSION_INFO_ENDPOINT = "GetSessionInfo"
SESSION_INFO_REQUEST = {
    "User": {"DisplayName": 1},
    "AddressBook": {"DisplayValue": 1},
}
CONNECTION_LABEL_TEMPLATE = "{{json.Data.AddressBook.DisplayValue}} - {{json.Data.User.DisplayName}}"


def verify_connection(
    client: httpx.Client,
    credentials: Credentials,
    input_data: Optional[dict[str, Any]] = None,
) -> httpx.Response:
    """
    Ask the server for the session's user and address book.
    Returns the raw response on Code 0 so the caller can build a label from it.
    """
    creds = credentials.merged(input_data)
    if not creds.base_url:
        raise ValidationError("The Maximizer URL is required.")

    response = client.post(
        data_api_url(creds.base_url, SESSION_INFO_ENDPOINT),
        content=json.dumps(SESSION_INFO_REQUEST),
        headers={"Content-Type": "application/json"},
    )
    if response.status_code == 401:
        raise RefreshRequested()
    response.raise_for_status()

    result = ApiResult.from_response(response)
    if result.succeeded:
        return response

    if result.mentions_token():
        raise RefreshRequested()
    raise ApplicationError(result.message or "Unable to verify authentication status.")


def connection_label(response: httpx.Response) -> str:
    """Human-readable account label: "<address book> - <user>"."""
    body = response.json()
    data = body.get("Data") or {}
    address_book = data.get("AddressBook") or {}
    user = data.get("User") or {}
    return f"{address_book.get('DisplayValue', '')} - {user.get('DisplayName', '')}"
