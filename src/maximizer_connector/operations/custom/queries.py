"""Request builders and result helpers for Custom record calls."""

from typing import Any, Union

from .fields import RESOURCE, SCOPE_FIELDS


def _scope() -> dict[str, Any]:
    return {"Fields": {name: 1 for name in SCOPE_FIELDS}}


def build_create_request(record: dict[str, Any]) -> dict[str, Any]:
    """Create request for one record given in API field names."""
    return {RESOURCE: {"Data": record}}


def build_search_request(app_id: str, name: str) -> dict[str, Any]:
    """
    Read request for this connector's records whose Name matches name.
    name is passed to $LIKE unchanged, so callers may include % wildcards.
    """
    return {
        RESOURCE: {
            "Criteria": {
                "SearchQuery": {
                    "$AND": [
                        {"ApplicationId": {"$EQ": app_id}},
                        {"Name": {"$LIKE": name}},
                    ],
                },
            },
            "Scope": _scope(),
        },
    }


def build_poll_request(app_id: str) -> dict[str, Any]:
    """Read request for every record tagged with this connector's ApplicationId."""
    return {
        RESOURCE: {
            "Criteria": {
                "SearchQuery": {"ApplicationId": {"$EQ": app_id}},
            },
            "Scope": _scope(),
        },
    }


def records_from(data: Union[list[Any], dict[str, Any]]) -> list[dict[str, Any]]:
    """Read results as a list; a single object becomes a one-item list."""
    if isinstance(data, dict):
        return [data]
    return [r for r in data if isinstance(r, dict)]
