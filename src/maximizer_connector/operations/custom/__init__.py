"""Custom (CustomIndependent) record create, search, and trigger."""

from .create import CustomCreate
from .search import CustomSearch
from .trigger import CustomTrigger

__all__ = ["CustomCreate", "CustomSearch", "CustomTrigger"]
