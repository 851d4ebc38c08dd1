"""Custom record field schema shared by the create, search, and trigger."""

from maximizer_connector.operations.base import FieldSpec

OPERATION_KEY = "custom"
NOUN = "Custom"
RESOURCE = "Custom"

# API field names returned by Read
SCOPE_FIELDS = ("Key", "Name", "Description", "Text1", "Number1", "Numeric1", "DateTime1")

# Optional create inputs, in the order they are copied onto the record
OPTIONAL_INPUT_KEYS = ("description", "text1", "number1", "numeric1", "datetime1")

OUTPUT_FIELDS = [
    FieldSpec(key="Key", type="string", label="Custom Record Key"),
    FieldSpec(key="ApplicationId", type="string", label="Custom Record ApplicationId"),
    FieldSpec(key="Name", type="string", label="Custom Record Name"),
    FieldSpec(key="Description", type="text", label="Custom Record Description"),
    FieldSpec(key="Text1", type="text", label="Custom Record Text1"),
    FieldSpec(key="Number1", type="integer", label="Custom Record Number1"),
    FieldSpec(key="Numeric1", type="number", label="Custom Record Numeric1"),
    FieldSpec(key="DateTime1", type="datetime", label="Custom Record DateTime1"),
]

SAMPLE = {
    "Key": "example key",
    "ApplicationId": "example appid",
    "Name": "example name",
    "Description": "example description",
    "Text1": "example text",
    "Number1": 12345,
    "Numeric1": 123.45,
    "DateTime1": "2024-01-01T12:00:00Z",
}
