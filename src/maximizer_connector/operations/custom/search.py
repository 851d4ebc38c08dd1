"""Search Custom Records action."""

from typing import Any

from maximizer_connector.client import MaximizerClient
from maximizer_connector.config import application_id
from maximizer_connector.errors import ApplicationError
from maximizer_connector.models.api_result import ApiResult
from maximizer_connector.operations.base import BaseOperation, FieldSpec

from .fields import NOUN, OPERATION_KEY, OUTPUT_FIELDS, RESOURCE, SAMPLE
from .queries import build_search_request, records_from


class CustomSearch(BaseOperation):
    """Finds this connector's Custom records by Name (% wildcards allowed)."""

    kind = "search"
    key = OPERATION_KEY
    noun = NOUN
    label = "Search Custom Records"
    description = "Searches for Custom records in Maximizer (also known as CustomIndependent records)."
    input_fields = [
        FieldSpec(key="name", label="Name", type="string", required=True,
                  help_text="The Name of the Custom record to search for (may include % wildcard)."),
    ]
    output_fields = OUTPUT_FIELDS
    sample = SAMPLE

    def perform(self, api: MaximizerClient, input_data: dict[str, Any]) -> list[dict[str, Any]]:
        name = self.require(input_data, "name")
        body = api.send("Read", build_search_request(application_id(), name))

        # An empty result is still {"Custom": {"Data": []}}; a missing or scalar Data is a failure.
        payload = ApiResult.from_payload(body).resource(RESOURCE)
        if payload is None or not isinstance(payload.data, (list, dict)):
            raise ApplicationError("The search failed.")
        return records_from(payload.data)
