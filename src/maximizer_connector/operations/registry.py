"""Registry of host-facing operations, indexed by kind and key."""

from typing import Type

from maximizer_connector.operations.base import BaseOperation
from maximizer_connector.operations.custom import CustomCreate, CustomSearch, CustomTrigger

KINDS = ("trigger", "search", "create")


class OperationRegistry:
    """Discovers and provides operations."""

    _operations: dict[str, dict[str, Type[BaseOperation]]] = {
        "trigger": {CustomTrigger.key: CustomTrigger},
        "search": {CustomSearch.key: CustomSearch},
        "create": {CustomCreate.key: CustomCreate},
    }

    @classmethod
    def get(cls, kind: str, key: str) -> BaseOperation:
        """Get an operation instance, e.g. get("create", "custom")."""
        by_key = cls._operations.get(kind.lower())
        if by_key is None:
            raise ValueError(f"Unknown operation kind: {kind}. Available: {list(KINDS)}")
        operation_cls = by_key.get(key.lower())
        if not operation_cls:
            raise ValueError(f"Unknown {kind.lower()}: {key}. Available: {list(by_key.keys())}")
        return operation_cls()

    @classmethod
    def available(cls, kind: str) -> list[str]:
        """Return operation keys registered for kind."""
        return list(cls._operations.get(kind.lower(), {}).keys())
