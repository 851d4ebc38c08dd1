"""Tests for the Search Custom Records action."""

from unittest.mock import patch

import pytest

from maximizer_connector.client import MaximizerClient
from maximizer_connector.errors import ApplicationError, ValidationError
from maximizer_connector.operations.custom import CustomSearch
from maximizer_connector.operations.custom.queries import build_search_request

SCOPE = {
    "Fields": {
        "Key": 1,
        "Name": 1,
        "Description": 1,
        "Text1": 1,
        "Number1": 1,
        "Numeric1": 1,
        "DateTime1": 1,
    }
}


@pytest.fixture
def search() -> CustomSearch:
    """Shared operation instance."""
    return CustomSearch()


class TestBuildSearchRequest:
    """Tests for the Read request builder."""

    def test_and_of_application_id_and_name(self) -> None:
        """SearchQuery is ApplicationId $EQ AND Name $LIKE, with the wildcard kept."""
        assert build_search_request("test-app", "Acme%") == {
            "Custom": {
                "Criteria": {
                    "SearchQuery": {
                        "$AND": [
                            {"ApplicationId": {"$EQ": "test-app"}},
                            {"Name": {"$LIKE": "Acme%"}},
                        ]
                    }
                },
                "Scope": SCOPE,
            }
        }


class TestCustomSearchPerform:
    """Tests for perform."""

    @pytest.mark.parametrize("input_data", [{}, {"name": ""}])
    def test_name_required(self, search: CustomSearch, api: MaximizerClient, input_data: dict) -> None:
        """Missing name raises before any request."""
        with patch.object(MaximizerClient, "send") as mock_send:
            with pytest.raises(ValidationError, match="The name field is required."):
                search.perform(api, input_data)
        mock_send.assert_not_called()

    @patch.object(MaximizerClient, "send")
    def test_sends_read_request(self, mock_send, search: CustomSearch, api: MaximizerClient, app_id: str) -> None:
        """One Read call with the connector-scoped name query."""
        mock_send.return_value = {"Code": 0, "Custom": {"Data": []}}
        search.perform(api, {"name": "Acme%"})
        mock_send.assert_called_once_with("Read", build_search_request(app_id, "Acme%"))

    @patch.object(MaximizerClient, "send")
    def test_returns_records(self, mock_send, search: CustomSearch, api: MaximizerClient) -> None:
        """Records come back unchanged."""
        records = [{"Key": "k1", "Name": "Acme"}, {"Key": "k2", "Name": "Acme West"}]
        mock_send.return_value = {"Code": 0, "Custom": {"Data": records}}
        assert search.perform(api, {"name": "Acme%"}) == records

    @patch.object(MaximizerClient, "send")
    def test_empty_result_is_valid(self, mock_send, search: CustomSearch, api: MaximizerClient) -> None:
        """An empty Data list is a successful search with no matches."""
        mock_send.return_value = {"Code": 0, "Custom": {"Data": []}}
        assert search.perform(api, {"name": "Nobody"}) == []

    @patch.object(MaximizerClient, "send")
    def test_single_object_wrapped(self, mock_send, search: CustomSearch, api: MaximizerClient) -> None:
        """A single-object Data is returned as a one-item list."""
        mock_send.return_value = {"Code": 0, "Custom": {"Data": {"Key": "k1"}}}
        assert search.perform(api, {"name": "Acme"}) == [{"Key": "k1"}]

    @patch.object(MaximizerClient, "send")
    def test_missing_payload_raises(self, mock_send, search: CustomSearch, api: MaximizerClient) -> None:
        """No Custom.Data at all is a failed search."""
        mock_send.return_value = {"Code": 0}
        with pytest.raises(ApplicationError, match="The search failed."):
            search.perform(api, {"name": "Acme"})

    @pytest.mark.parametrize("data", [0, "", "text", True])
    @patch.object(MaximizerClient, "send")
    def test_scalar_data_raises(self, mock_send, data, search: CustomSearch, api: MaximizerClient) -> None:
        """Data that is neither a list nor an object is a failed search."""
        mock_send.return_value = {"Code": 0, "Custom": {"Data": data}}
        with pytest.raises(ApplicationError, match="The search failed."):
            search.perform(api, {"name": "Acme"})
