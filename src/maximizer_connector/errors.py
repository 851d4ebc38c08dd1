"""Error taxonomy shared by the auth layer, API client, and operations.

Transport failures are not wrapped: httpx raises its own exceptions
(``httpx.RequestError``, ``httpx.HTTPStatusError``) and they propagate as-is.
"""


class ConnectorError(Exception):
    """Base class for errors raised by this connector."""


class ValidationError(ConnectorError, ValueError):
    """Required user input is missing or malformed. Raised before any request."""


class RefreshRequested(ConnectorError):
    """The server rejected the access token; the host should refresh and retry once."""

    def __init__(self, message: str = "The access token is invalid or has expired."):
        super().__init__(message)


class ApplicationError(ConnectorError):
    """The API reported a failure Code, or returned a payload of the wrong shape."""


class AuthenticationError(ConnectorError):
    """A refresh-and-retry cycle failed; the user has to reconnect."""
