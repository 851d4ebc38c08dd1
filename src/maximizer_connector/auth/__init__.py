"""OAuth2 flow, request/response hooks, and connection test."""

from maximizer_connector.auth.hooks import build_session, classify_response, decorate_request
from maximizer_connector.auth.oauth import MaximizerAuth
from maximizer_connector.auth.session import connection_label, verify_connection

__all__ = [
    "MaximizerAuth",
    "build_session",
    "classify_response",
    "connection_label",
    "decorate_request",
    "verify_connection",
]
