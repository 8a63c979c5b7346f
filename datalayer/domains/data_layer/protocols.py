"""Protocol for the data layer."""

from typing import Any, Mapping, Protocol

from datalayer.adapters.analytics.protocols import AnalyticsAdapterProtocol


class DataLayerProtocol(Protocol):
    """The validating sink applications push analytics records into."""

    def push(self, event_name: str, schema_name: str, record: Mapping[str, Any]) -> dict[str, Any]:
        """Validate ``record`` and forward it to every adapter.

        Raises:
            RecordValidationError: If the record does not conform. No adapter
                sees a rejected record.
        """
        ...

    def add_adapter(self, adapter: AnalyticsAdapterProtocol) -> None:
        """Append an adapter; it only receives pushes made after this call."""
        ...
