"""New Custom Record polling trigger."""

from typing import Any

from maximizer_connector.client import MaximizerClient
from maximizer_connector.config import application_id
from maximizer_connector.errors import ApplicationError
from maximizer_connector.models.api_result import ApiResult
from maximizer_connector.operations.base import BaseOperation

from .fields import NOUN, OPERATION_KEY, OUTPUT_FIELDS, RESOURCE, SAMPLE
from .queries import build_poll_request, records_from


class CustomTrigger(BaseOperation):
    """
    Polls for Custom records created by this connector.
    The host deduplicates polled items on "id", so every returned record
    carries id == Key and records without a Key are dropped.
    """

    kind = "trigger"
    key = OPERATION_KEY
    noun = NOUN
    label = "New Custom Record"
    description = (
        "Triggers when a new Custom record is created in Maximizer "
        "(also known as CustomIndependent records)."
    )
    input_fields = []
    output_fields = OUTPUT_FIELDS
    sample = SAMPLE

    def perform(self, api: MaximizerClient, input_data: dict[str, Any]) -> list[dict[str, Any]]:
        body = api.send("Read", build_poll_request(application_id()))

        payload = ApiResult.from_payload(body).resource(RESOURCE)
        if payload is None or not isinstance(payload.data, (list, dict)):
            raise ApplicationError("The search failed.")
        return with_dedupe_ids(records_from(payload.data))


def with_dedupe_ids(records: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Drop records without a Key; copy Key into id on the rest (inputs untouched)."""
    return [{**r, "id": r["Key"]} for r in records if r.get("Key")]
