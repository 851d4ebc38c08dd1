"""URL layout of a Maximizer server."""

AUTHORIZE_PATH = "/MaximizerWebAuthentication/OAuth2/Authorize"
TOKEN_PATH = "/MaximizerWebAuthentication/OAuth2/Token"
DATA_API_PATH = "MaximizerWebData/Data.svc/json"


def server_url(base_url: str, path: str) -> str:
    """Join the user-supplied server URL and an absolute path."""
    return base_url.rstrip("/") + path


def data_api_base(base_url: str) -> str:
    """Root of the JSON data API; the server URL gets exactly one '/' before it."""
    return f"{base_url.rstrip('/')}/{DATA_API_PATH}"


def data_api_url(base_url: str, endpoint: str) -> str:
    """URL of one data API endpoint, e.g. Create, Read, GetSessionInfo."""
    return f"{data_api_base(base_url)}/{endpoint}"
