"""Custom (CustomIndependent) record model."""

from datetime import datetime
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class CustomRecord(BaseModel):
    """A Maximizer Custom record. Key is null until the server assigns one."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    key: Optional[str] = Field(default=None, alias="Key")
    application_id: Optional[str] = Field(default=None, alias="ApplicationId")
    name: Optional[str] = Field(default=None, alias="Name")
    description: Optional[str] = Field(default=None, alias="Description")
    text1: Optional[str] = Field(default=None, alias="Text1")
    number1: Optional[int] = Field(default=None, alias="Number1")
    numeric1: Optional[float] = Field(default=None, alias="Numeric1")
    datetime1: Optional[Union[datetime, str]] = Field(default=None, alias="DateTime1")

    def to_payload(self) -> dict[str, Any]:
        """API field names; only fields that were explicitly set, dates as ISO-8601."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)
