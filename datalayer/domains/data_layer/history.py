"""Bounded push history for debugging.

Keeps the most recent accepted pushes in a ring buffer. Adapters added
later never receive these entries; the history exists only for inspection.
"""

from collections import deque

from datalayer.domains.data_layer.types import PushEntry


class PushHistory:
    """Ring buffer of ``PushEntry`` objects.

    Args:
        max_entries: Maximum number of entries to retain.
    """

    def __init__(self, max_entries: int) -> None:
        """Initialize an empty buffer holding at most ``max_entries``."""
        if max_entries <= 0:
            raise ValueError(f"max_entries must be positive, got {max_entries}")
        self._entries: deque[PushEntry] = deque(maxlen=max_entries)

    @property
    def max_entries(self) -> int:
        """Capacity of the buffer."""
        return self._entries.maxlen or 0

    def append(self, entry: PushEntry) -> None:
        """Record an entry, evicting the oldest when full."""
        self._entries.append(entry)

    def recent(self, n: int = 20) -> list[PushEntry]:
        """Return the ``n`` most recent entries, oldest first."""
        if n <= 0:
            return []
        return list(self._entries)[-n:]

    def query(
        self,
        *,
        event_name: str | None = None,
        schema_name: str | None = None,
        limit: int = 100,
    ) -> list[PushEntry]:
        """Return matching entries, most recent first."""
        results: list[PushEntry] = []
        for entry in reversed(self._entries):
            if len(results) >= limit:
                break
            if event_name is not None and entry.event_name != event_name:
                continue
            if schema_name is not None and entry.schema_name != schema_name:
                continue
            results.append(entry)
        return results

    def clear(self) -> int:
        """Clear all entries and return how many were cleared."""
        count = len(self._entries)
        self._entries.clear()
        return count

    def __len__(self) -> int:
        return len(self._entries)
