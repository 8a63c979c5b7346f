"""Helpers for building state listeners."""

from typing import Any, Callable, Mapping

from datalayer.domains.dispatch.types import StateListener


def watch(
    selector: Callable[[Any], Any],
    on_change: Callable[[Any, Any], Any],
) -> StateListener:
    """Build a state listener that fires only when a selected slice changes.

    Args:
        selector: Extracts the slice of state to compare.
        on_change: Called with ``(before, after)`` slices when they differ.

    Returns:
        A listener suitable for ``add_state_listeners``.
    """

    def listener(previous: Any, current: Any) -> None:
        before = selector(previous)
        after = selector(current)
        if before != after:
            on_change(before, after)

    listener.__qualname__ = f"watch({getattr(on_change, '__qualname__', repr(on_change))})"
    return listener


def changed_keys(previous: Mapping[str, Any], current: Mapping[str, Any]) -> set[str]:
    """Top-level keys that were added, removed or whose values differ."""
    keys = set(previous) | set(current)
    return {
        key
        for key in keys
        if key not in previous or key not in current or previous[key] != current[key]
    }
