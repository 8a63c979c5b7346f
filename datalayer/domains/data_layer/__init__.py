"""Data layer domain: the validating sink that fans records out to adapters."""

from datalayer.domains.data_layer.history import PushHistory
from datalayer.domains.data_layer.service import DataLayer
from datalayer.domains.data_layer.types import PushEntry

__all__ = ["DataLayer", "PushEntry", "PushHistory"]
