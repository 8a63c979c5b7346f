"""Protocols for the application store and the dispatch pipeline."""

from typing import Any, Iterable, Protocol, Union, runtime_checkable

from datalayer.domains.dispatch.types import (
    Action,
    ListenerRegistration,
    PostDispatchHandler,
    PreDispatchHandler,
    StateListener,
)


@runtime_checkable
class StoreProtocol(Protocol):
    """The application's state store, treated as opaque.

    Any object with ``get_state`` and ``dispatch`` works: the pipeline only
    reads state and forwards actions to the store's own dispatch.
    """

    def get_state(self) -> Any:
        """Return the current state."""
        ...

    def dispatch(self, action: Action) -> Any:
        """Apply an action, producing new state."""
        ...


class DispatchPipelineProtocol(Protocol):
    """Interception layer around a store's dispatch entry point."""

    def dispatch(self, action: Action) -> Action:
        """Run an action through pre-listeners, the store, post- and state listeners."""
        ...

    def add_pre_dispatch_listeners(
        self, match_keys: Union[str, Iterable[str]], handler: PreDispatchHandler
    ) -> ListenerRegistration:
        """Register a handler run before the store applies matching actions."""
        ...

    def add_post_dispatch_listeners(
        self, match_keys: Union[str, Iterable[str]], handler: PostDispatchHandler
    ) -> ListenerRegistration:
        """Register a handler run after the store applied matching actions."""
        ...

    def add_state_listeners(self, *handlers: StateListener) -> None:
        """Register handlers called with (previous, next) state after every action."""
        ...
