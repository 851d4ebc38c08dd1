"""OAuth2 credentials and token pairs."""

import os
from pathlib import Path
from typing import Any, Optional

try:
    import yaml
except ModuleNotFoundError as e:
    raise ModuleNotFoundError(
        "PyYAML is required for credential files. Run: poetry install"
    ) from e
from pydantic import BaseModel, ConfigDict, Field

# Environment variable -> field name, for Credentials.from_env()
_ENV_FIELDS = {
    "MAXIMIZER_URL": "base_url",
    "MAXIMIZER_CLIENT_ID": "client_id",
    "MAXIMIZER_CLIENT_SECRET": "client_secret",
    "MAXIMIZER_REDIRECT_URI": "redirect_uri",
    "MAXIMIZER_ACCESS_TOKEN": "access_token",
    "MAXIMIZER_REFRESH_TOKEN": "refresh_token",
}


class TokenPair(BaseModel):
    """Tokens returned by the OAuth2 token endpoint."""

    access_token: Optional[str] = None
    refresh_token: Optional[str] = None


class Credentials(BaseModel):
    """
    Connection details and tokens for one Maximizer server.

    The host owns storage. Field aliases match the host's auth field keys
    (maximizerurl, clientid, clientsecret) so stored auth data validates as-is.
    Instances are frozen: a refresh produces a new value via with_tokens().
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    base_url: Optional[str] = Field(default=None, alias="maximizerurl")
    client_id: Optional[str] = Field(default=None, alias="clientid")
    client_secret: Optional[str] = Field(default=None, alias="clientsecret")
    redirect_uri: Optional[str] = None
    state: Optional[str] = None
    code: Optional[str] = None
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None

    def merged(self, input_data: Optional[dict[str, Any]] = None) -> "Credentials":
        """Return credentials where non-empty request-time input overrides stored values."""
        data = input_data or {}
        overrides: dict[str, Any] = {}
        for name, field in type(self).model_fields.items():
            value = data.get(field.alias or name) or data.get(name)
            if value:
                overrides[name] = value
        return self.model_copy(update=overrides)

    def with_tokens(self, tokens: TokenPair) -> "Credentials":
        """
        Return credentials carrying a refreshed token pair.
        An empty refresh token in the pair keeps the stored one.
        """
        update: dict[str, Any] = {"access_token": tokens.access_token}
        if tokens.refresh_token:
            update["refresh_token"] = tokens.refresh_token
        return self.model_copy(update=update)

    @classmethod
    def from_env(cls) -> "Credentials":
        """Build credentials from MAXIMIZER_* environment variables."""
        values = {
            field: os.environ[var]
            for var, field in _ENV_FIELDS.items()
            if os.environ.get(var)
        }
        return cls.model_validate(values)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Credentials":
        """Load credentials from a YAML file. Missing file yields empty credentials."""
        path = Path(path)
        if not path.exists():
            return cls()
        data = yaml.safe_load(path.read_text()) or {}
        return cls.model_validate(data)

    def to_yaml(self, path: str | Path) -> None:
        """Write credentials to a YAML file using the host's field names."""
        data = self.model_dump(by_alias=True, exclude_none=True)
        Path(path).write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
