"""Data models for credentials, API results, and Custom records."""

from maximizer_connector.models.api_result import ApiResult, ResourcePayload, compact_json
from maximizer_connector.models.credentials import Credentials, TokenPair
from maximizer_connector.models.record import CustomRecord

__all__ = [
    "ApiResult",
    "Credentials",
    "CustomRecord",
    "ResourcePayload",
    "TokenPair",
    "compact_json",
]
