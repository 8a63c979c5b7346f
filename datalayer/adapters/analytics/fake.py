"""Fake analytics adapter for testing."""

from dataclasses import dataclass
from typing import Any, Dict, Mapping


@dataclass
class PushedRecord:
    """Single recorded adapter push."""

    event_name: str
    record: Dict[str, Any]


class FakeAnalyticsAdapter:
    """In-memory test double for AnalyticsAdapterProtocol.

    Records all pushes for assertions.

    Usage:
        adapter = FakeAnalyticsAdapter()
        data_layer.add_adapter(adapter)
        data_layer.push("ProductClick", "Product", {...})
        assert adapter.has("ProductClick")
    """

    def __init__(self, fail_with: Exception | None = None) -> None:
        """Initialize with an empty push list.

        Args:
            fail_with: If set, every push is recorded and then raises this.
        """
        self.pushes: list[PushedRecord] = []
        self._fail_with = fail_with

    def push(self, event_name: str, record: Mapping[str, Any]) -> None:
        """Record the push for later assertions."""
        self.pushes.append(PushedRecord(event_name=event_name, record=dict(record)))
        if self._fail_with is not None:
            raise self._fail_with

    def has(self, event_name: str) -> bool:
        """Return True if a record with the given event name was pushed."""
        return any(p.event_name == event_name for p in self.pushes)

    def get(self, event_name: str) -> PushedRecord:
        """Return the first push matching name, or raise AssertionError."""
        for p in self.pushes:
            if p.event_name == event_name:
                return p
        raise AssertionError(
            f"No push for event '{event_name}'. Pushed: {[p.event_name for p in self.pushes]}"
        )

    def get_all(self, event_name: str) -> list[PushedRecord]:
        """Return all pushes matching name."""
        return [p for p in self.pushes if p.event_name == event_name]

    def clear(self) -> None:
        """Reset recorded pushes."""
        self.pushes.clear()
