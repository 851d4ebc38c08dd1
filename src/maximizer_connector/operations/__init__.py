"""Triggers, searches, and creates exposed to the automation host."""

from maximizer_connector.operations.base import BaseOperation, FieldSpec
from maximizer_connector.operations.registry import OperationRegistry

__all__ = ["BaseOperation", "FieldSpec", "OperationRegistry"]
