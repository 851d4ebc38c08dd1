"""Response envelope of the Maximizer.Web.Data API."""

import json
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

# Stands in for a Code the server sent that is not an integer.
UNKNOWN_CODE = -1


def compact_json(value: Any) -> str:
    """Serialize without whitespace, the form used in error messages."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=str)


class ResourcePayload(BaseModel):
    """Resource-namespaced part of a result, e.g. the value of "Custom"."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    data: Any = Field(default=None, alias="Data")


class ApiResult(BaseModel):
    """
    Parsed API body: {Code, Msg?, <Resource>?: {Data}}.

    The API answers HTTP 200 for application failures; Code carries the
    outcome instead. Code 0 means the resource payload can be read, any other
    value means Msg should be inspected. Resource payloads are kept as extra
    fields and read through resource().
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    code: Optional[int] = Field(default=None, alias="Code")
    msg: Any = Field(default=None, alias="Msg")

    @classmethod
    def from_payload(cls, payload: Any) -> "ApiResult":
        """
        Parse a decoded JSON body. Non-object bodies carry no Code; a Code that
        is not an integer counts as a failure Code.
        """
        if not isinstance(payload, dict):
            return cls()
        try:
            return cls.model_validate(payload)
        except PydanticValidationError:
            return cls.model_validate({**payload, "Code": UNKNOWN_CODE})

    @classmethod
    def from_response(cls, response: Any) -> "ApiResult":
        """Parse an HTTP response body; an empty body carries no Code."""
        if not response.content:
            return cls()
        return cls.from_payload(response.json())

    @property
    def succeeded(self) -> bool:
        return self.code == 0

    @property
    def has_failure_code(self) -> bool:
        """Code is present and non-zero."""
        return self.code is not None and self.code != 0

    @property
    def message(self) -> str:
        """Msg serialized as JSON text; empty when the body has no Msg (an explicit null is "null")."""
        if "msg" not in self.model_fields_set:
            return ""
        return compact_json(self.msg)

    def mentions_token(self) -> bool:
        """
        True when the failure message contains "token" in any case.
        The API has no structured code for an expired token, so any message
        containing the word is treated as one.
        """
        return "token" in self.message.lower()

    def resource(self, name: str) -> Optional[ResourcePayload]:
        """Return the payload namespaced under name, or None when absent."""
        raw = (self.model_extra or {}).get(name)
        if not isinstance(raw, dict):
            return None
        return ResourcePayload.model_validate(raw)
