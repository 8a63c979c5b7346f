"""Dispatch pipeline.

Wraps a store's dispatch entry point so that every action passes through:

    1. pre-dispatch listeners matching the action type  (action, store)
    2. the store's own dispatch (state mutation)
    3. post-dispatch listeners matching the action type (action, store, location)
    4. state listeners, once per action                  (previous, next)

Listeners run in registration order. A listener that raises is logged,
reported, and skipped; the remaining listeners still run. An action
dispatched while another is in flight (for example from a listener) is
queued and processed after the current one settles, so each action sees
its own before/after state pair.
"""

from collections import deque
from typing import Any, Callable, Iterable, Optional, Union

from datalayer.core.logging import logger
from datalayer.domains.dispatch.exceptions import ListenerExecutionError
from datalayer.domains.dispatch.protocols import DispatchPipelineProtocol, StoreProtocol
from datalayer.domains.dispatch.types import (
    Action,
    DispatchPhase,
    DispatchStage,
    ListenerRegistration,
    PostDispatchHandler,
    PreDispatchHandler,
    StateListener,
    get_action_type,
    get_location,
    normalize_match_keys,
)

pipeline_logger = logger.with_prefix("DispatchPipeline: ").with_context(component="dispatch")

ErrorReporter = Callable[[ListenerExecutionError], Any]


def _handler_name(handler: Callable[..., Any]) -> str:
    return getattr(handler, "__qualname__", None) or type(handler).__name__


class PipelineStore:
    """Store view handed to listeners.

    Reads go to the wrapped store. Dispatches go back through the pipeline,
    so actions raised by listeners are queued rather than run re-entrantly.
    """

    def __init__(self, pipeline: "DispatchPipeline") -> None:
        """Bind the view to a pipeline."""
        self._pipeline = pipeline

    def get_state(self) -> Any:
        """Return the wrapped store's current state."""
        return self._pipeline.get_state()

    def dispatch(self, action: Action) -> Action:
        """Dispatch through the pipeline."""
        return self._pipeline.dispatch(action)


class DispatchPipeline(DispatchPipelineProtocol):
    """Interception layer around a store.

    Usage:
        pipeline = DispatchPipeline(store)
        pipeline.add_post_dispatch_listeners("ADD_TO_CART", on_add_to_cart)
        pipeline.add_state_listeners(watch(lambda s: s["cart"], on_cart_change))
        pipeline.dispatch({"type": "ADD_TO_CART", "payload": {...}})

    Args:
        store: The wrapped store. Only ``get_state`` and ``dispatch`` are used.
        on_error: Optional reporter called with every ListenerExecutionError.
    """

    def __init__(self, store: StoreProtocol, on_error: Optional[ErrorReporter] = None) -> None:
        """Initialize with a store and no listeners."""
        self._store = store
        self._on_error = on_error
        self._pre: list[ListenerRegistration] = []
        self._post: list[ListenerRegistration] = []
        self._state: list[StateListener] = []
        self._queue: deque[Action] = deque()
        self._dispatching = False
        self._stage = DispatchStage.IDLE
        self._view = PipelineStore(self)

    @property
    def store(self) -> StoreProtocol:
        """The wrapped store."""
        return self._store

    @property
    def view(self) -> PipelineStore:
        """The store view handed to listeners."""
        return self._view

    @property
    def stage(self) -> DispatchStage:
        """Stage of the action currently (or most recently) processed."""
        return self._stage

    @property
    def pending(self) -> int:
        """Number of actions queued behind the one in flight."""
        return len(self._queue)

    def get_state(self) -> Any:
        """Return the wrapped store's current state."""
        return self._store.get_state()

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def add_pre_dispatch_listeners(
        self, match_keys: Union[str, Iterable[str]], handler: PreDispatchHandler
    ) -> ListenerRegistration:
        """Run ``handler(action, store)`` before matching actions reach the store.

        Args:
            match_keys: One action type or several; matched exactly.
            handler: Sees the state as it was before the mutation.

        Raises:
            ValueError: If no action type is given.
        """
        return self._register(self._pre, DispatchPhase.PRE, match_keys, handler)

    def add_post_dispatch_listeners(
        self, match_keys: Union[str, Iterable[str]], handler: PostDispatchHandler
    ) -> ListenerRegistration:
        """Run ``handler(action, store, location)`` after matching actions were applied.

        ``location`` is the path stamped on the action, or None.

        Raises:
            ValueError: If no action type is given.
        """
        return self._register(self._post, DispatchPhase.POST, match_keys, handler)

    def add_state_listeners(self, *handlers: StateListener) -> None:
        """Run each ``handler(previous, next)`` exactly once after every action."""
        for handler in handlers:
            if not callable(handler):
                raise TypeError(f"State listener must be callable, got {handler!r}")
        self._state.extend(handlers)
        pipeline_logger.debug(f"Added {len(handlers)} state listener(s)")

    def _register(
        self,
        registrations: list[ListenerRegistration],
        phase: DispatchPhase,
        match_keys: Union[str, Iterable[str]],
        handler: Callable[..., Any],
    ) -> ListenerRegistration:
        if not callable(handler):
            raise TypeError(f"Listener must be callable, got {handler!r}")
        registration = ListenerRegistration(
            match_keys=normalize_match_keys(match_keys), phase=phase, handler=handler
        )
        registrations.append(registration)
        pipeline_logger.debug(
            f"Added {phase.value} listener {_handler_name(handler)} "
            f"for {sorted(registration.match_keys)}"
        )
        return registration

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def dispatch(self, action: Action) -> Action:
        """Run ``action`` through the pipeline.

        When called while another action is in flight, the action is queued
        and returned immediately; it is processed once the current action
        has settled.

        Returns:
            The action.

        Raises:
            InvalidActionError: If the action has no type.
            Exception: Whatever the store's dispatch raises. Actions queued
                behind the failing one are dropped.
        """
        get_action_type(action)
        self._queue.append(action)
        if self._dispatching:
            pipeline_logger.debug(
                f"Queued '{get_action_type(action)}' behind in-flight action "
                f"({len(self._queue)} pending)"
            )
            return action

        self._dispatching = True
        try:
            while self._queue:
                self._process(self._queue.popleft())
        except Exception:
            dropped = len(self._queue)
            self._queue.clear()
            self._stage = DispatchStage.IDLE
            if dropped:
                pipeline_logger.error(f"Store dispatch failed; dropped {dropped} queued action(s)")
            raise
        finally:
            self._dispatching = False
        return action

    def _process(self, action: Action) -> None:
        action_type = get_action_type(action)
        self._stage = DispatchStage.RECEIVED

        previous = self._store.get_state()

        self._stage = DispatchStage.PRE_LISTENERS
        for registration in list(self._pre):
            if registration.matches(action_type):
                self._call(registration.handler, DispatchPhase.PRE, action_type, action, self._view)

        self._store.dispatch(action)
        self._stage = DispatchStage.MUTATED
        current = self._store.get_state()

        self._stage = DispatchStage.POST_LISTENERS
        location = get_location(action)
        for registration in list(self._post):
            if registration.matches(action_type):
                self._call(
                    registration.handler,
                    DispatchPhase.POST,
                    action_type,
                    action,
                    self._view,
                    location,
                )

        self._stage = DispatchStage.STATE_DIFF
        for handler in list(self._state):
            self._call(handler, DispatchPhase.STATE, action_type, previous, current)

        self._stage = DispatchStage.SETTLED

    def _call(
        self,
        handler: Callable[..., Any],
        phase: DispatchPhase,
        action_type: str,
        *args: Any,
    ) -> None:
        try:
            handler(*args)
        except Exception as e:
            error = ListenerExecutionError(
                action_type=action_type,
                phase=phase.value,
                handler=_handler_name(handler),
                error=e,
            )
            pipeline_logger.error(error.message, exc_info=e)
            self._report(error)

    def _report(self, error: ListenerExecutionError) -> None:
        if self._on_error is None:
            return
        try:
            self._on_error(error)
        except Exception as e:
            pipeline_logger.error(f"Error reporter failed: {e}", exc_info=e)
