"""Runtime settings read from the environment."""

import os

DEFAULT_APP_ID = "maximizer-connector"
DEFAULT_HTTP_TIMEOUT = 30.0

USER_AGENT = "maximizer-connector/0.1 (Maximizer.Web.Data connector)"


def application_id() -> str:
    """
    ApplicationId written onto every Custom record this connector creates.
    Search and poll are scoped to records carrying the same value.
    """
    return (os.environ.get("MAXIMIZER_APP_ID") or "").strip() or DEFAULT_APP_ID


def http_timeout() -> float:
    """Timeout in seconds for outbound requests."""
    raw = os.environ.get("MAXIMIZER_HTTP_TIMEOUT")
    if not raw:
        return DEFAULT_HTTP_TIMEOUT
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"MAXIMIZER_HTTP_TIMEOUT must be a number, got {raw!r}")
