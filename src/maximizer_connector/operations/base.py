"""Abstract base class for host-facing operations."""

from abc import ABC, abstractmethod
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from maximizer_connector.client import MaximizerClient
from maximizer_connector.errors import ValidationError


class FieldSpec(BaseModel):
    """One input or output field as the host displays it."""

    model_config = ConfigDict(populate_by_name=True)

    key: str
    label: str
    type: str = "string"
    required: Optional[bool] = None
    help_text: Optional[str] = Field(default=None, alias="helpText")

    def describe(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class BaseOperation(ABC):
    """
    Standard interface for triggers, searches, and creates.
    Subclasses declare their registration metadata as class attributes and
    implement perform().
    """

    kind: str = ""  # trigger | search | create
    key: str = ""
    noun: str = ""
    label: str = ""
    description: str = ""
    input_fields: list[FieldSpec] = []
    output_fields: list[FieldSpec] = []
    sample: dict[str, Any] = {}

    @abstractmethod
    def perform(self, api: MaximizerClient, input_data: dict[str, Any]) -> Any:
        """
        Run the operation with user input; returns the host-facing result.
        """
        pass

    def require(self, input_data: dict[str, Any], key: str) -> Any:
        """Return input_data[key], raising ValidationError when it is missing or empty."""
        value = input_data.get(key)
        if value is None or value == "":
            raise ValidationError(f"The {key} field is required.")
        return value

    def describe(self) -> dict[str, Any]:
        """Registration record: key, display metadata, field schemas, sample."""
        return {
            "key": self.key,
            "noun": self.noun,
            "display": {"label": self.label, "description": self.description},
            "operation": {
                "inputFields": [f.describe() for f in self.input_fields],
                "outputFields": [f.describe() for f in self.output_fields],
                "sample": dict(self.sample),
            },
        }

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}: {self.kind}/{self.key}>"
