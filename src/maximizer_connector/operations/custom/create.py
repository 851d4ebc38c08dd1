"""Create Custom Record action."""

import logging
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from maximizer_connector.client import MaximizerClient
from maximizer_connector.config import application_id
from maximizer_connector.errors import ApplicationError, ValidationError
from maximizer_connector.models.api_result import ApiResult
from maximizer_connector.models.record import CustomRecord
from maximizer_connector.operations.base import BaseOperation, FieldSpec

from .fields import NOUN, OPERATION_KEY, OPTIONAL_INPUT_KEYS, OUTPUT_FIELDS, RESOURCE, SAMPLE
from .queries import build_create_request

logger = logging.getLogger(__name__)


class CustomCreate(BaseOperation):
    """
    Creates one Custom record tagged with this connector's ApplicationId,
    so that the search and trigger only ever see records created here.
    """

    kind = "create"
    key = OPERATION_KEY
    noun = NOUN
    label = "Create Custom Record"
    description = "Creates a new Custom record in Maximizer (also known as a CustomIndependent record)."
    input_fields = [
        FieldSpec(key="name", label="Name", type="string", required=True,
                  help_text="The name of the Custom record to be saved."),
        FieldSpec(key="description", label="Description", type="text", required=False,
                  help_text="The description of the Custom record to be saved."),
        FieldSpec(key="text1", label="Text 1", type="text", required=False,
                  help_text="A text value to include with the Custom record to be saved."),
        FieldSpec(key="number1", label="Number1", type="integer", required=False,
                  help_text="An integer value to include with the Custom record to be saved."),
        FieldSpec(key="numeric1", label="Numeric1", type="number", required=False,
                  help_text="A numeric value to include with the Custom record to be saved."),
        FieldSpec(key="datetime1", label="DateTime1", type="datetime", required=False,
                  help_text="A date/time value to include with the Custom record to be saved."),
    ]
    output_fields = OUTPUT_FIELDS
    sample = SAMPLE

    def build_record(self, input_data: dict[str, Any]) -> CustomRecord:
        """Validate user input into a record; optional fields are copied only when supplied."""
        values: dict[str, Any] = {
            "key": None,
            "application_id": application_id(),
            "name": self.require(input_data, "name"),
        }
        for field in OPTIONAL_INPUT_KEYS:
            value = input_data.get(field)
            if value is not None and value != "":
                values[field] = value
        try:
            return CustomRecord(**values)
        except PydanticValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
            )
            raise ValidationError(f"Invalid Custom record input: {problems}") from e

    def perform(self, api: MaximizerClient, input_data: dict[str, Any]) -> dict[str, Any]:
        record = self.build_record(input_data)
        body = api.send("Create", build_create_request(record.to_payload()))

        payload = ApiResult.from_payload(body).resource(RESOURCE)
        if payload is None or payload.data is None:
            raise ApplicationError("Unable to create the Custom record.")
        logger.debug("Created Custom record %s", payload.data)
        return payload.data
