"""App definition handed to the automation host."""

from typing import Any, Optional

from maximizer_connector import __version__
from maximizer_connector.auth.hooks import build_session, classify_response, decorate_request
from maximizer_connector.auth.oauth import MaximizerAuth
from maximizer_connector.auth.session import CONNECTION_LABEL_TEMPLATE, verify_connection
from maximizer_connector.endpoints import AUTHORIZE_PATH
from maximizer_connector.models.credentials import Credentials
from maximizer_connector.operations.base import FieldSpec
from maximizer_connector.operations.registry import KINDS, OperationRegistry
from maximizer_connector.runner import Invocation, SessionFactory, invoke

# Operation kind -> section name in the registration record
SECTIONS = {"trigger": "triggers", "search": "searches", "create": "creates"}

AUTH_FIELDS = [
    FieldSpec(
        key="maximizerurl",
        type="string",
        label="Maximizer URL",
        help_text=(
            "The base URL where your Maximizer server is located (e.g. https://www.example.com). "
            "Do not include the trailing slash, or any subdirectories."
        ),
    ),
    FieldSpec(
        key="clientid",
        type="string",
        label="Client ID",
        help_text="The Client ID of the OAuth2 app profile in Maximizer.",
    ),
    FieldSpec(
        key="clientsecret",
        type="string",
        label="Client Secret",
        help_text="The Client Secret of the OAuth2 app profile in Maximizer.",
    ),
]


class MaximizerApp:
    """
    Everything the host registers: OAuth2 config, hooks, and operations.
    run() and test() stand in for the host when the connector is used directly.
    """

    before_request = [decorate_request]
    after_response = [classify_response]

    def __init__(
        self,
        auth: Optional[MaximizerAuth] = None,
        session_factory: SessionFactory = build_session,
    ):
        self._auth = auth
        self._session_factory = session_factory

    @property
    def auth(self) -> MaximizerAuth:
        if self._auth is None:
            self._auth = MaximizerAuth()
        return self._auth

    def authentication(self) -> dict[str, Any]:
        return {
            "type": "oauth2",
            "oauth2Config": {
                "authorizeUrl": {
                    "url": "{{bundle.inputData.maximizerurl}}" + AUTHORIZE_PATH,
                    "params": {
                        "client_id": "{{bundle.inputData.clientid}}",
                        "state": "{{bundle.inputData.state}}",
                        "redirect_uri": "{{bundle.inputData.redirect_uri}}",
                        "response_type": "code",
                    },
                },
                "autoRefresh": True,
            },
            "fields": [f.describe() for f in AUTH_FIELDS],
            "connectionLabel": CONNECTION_LABEL_TEMPLATE,
        }

    def definition(self) -> dict[str, Any]:
        """Full registration record: version, auth, hooks, triggers/searches/creates."""
        definition: dict[str, Any] = {
            "version": __version__,
            "authentication": self.authentication(),
            "beforeRequest": [hook.__name__ for hook in self.before_request],
            "afterResponse": [hook.__name__ for hook in self.after_response],
        }
        for kind in KINDS:
            definition[SECTIONS[kind]] = {
                key: OperationRegistry.get(kind, key).describe()
                for key in OperationRegistry.available(kind)
            }
        return definition

    def run(
        self,
        kind: str,
        key: str,
        credentials: Credentials,
        input_data: Optional[dict[str, Any]] = None,
    ) -> Invocation:
        """Run a registered operation with one refresh-and-retry cycle."""
        operation = OperationRegistry.get(kind, key)
        return invoke(
            operation.perform,
            credentials,
            input_data,
            auth=self.auth,
            session_factory=self._session_factory,
        )

    def test(
        self,
        credentials: Credentials,
        input_data: Optional[dict[str, Any]] = None,
    ) -> Invocation:
        """
        Run the connection test; the result is the raw session-info response.
        input_data only shapes the test request. A refresh always uses the
        stored credentials.
        """
        return invoke(
            lambda api, data: verify_connection(api.http, api.credentials, data),
            credentials,
            input_data,
            auth=self.auth,
            session_factory=self._session_factory,
        )
