"""Protocol for analytics adapters."""

from typing import Any, Mapping, Protocol, runtime_checkable


@runtime_checkable
class AnalyticsAdapterProtocol(Protocol):
    """Fire-and-forget forwarding of resolved records.

    Adapter boundary between the data layer and an analytics vendor
    (PostHog, a tag manager, a log sink). The data layer calls ``push``
    once per accepted record, in adapter registration order.
    """

    def push(self, event_name: str, record: Mapping[str, Any]) -> Any:
        """Forward one resolved record.

        Implementations may return an awaitable to do their I/O
        asynchronously; the data layer schedules it and does not wait.
        Errors are logged by the data layer, never surfaced to the caller.
        """
        ...
