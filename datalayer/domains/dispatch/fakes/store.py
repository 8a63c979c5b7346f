"""Fake store for testing."""

from typing import Any, Callable, Optional

from datalayer.domains.dispatch.types import Action, get_action_type

Reducer = Callable[[Any, Action], Any]


def _identity(state: Any, action: Action) -> Any:
    return state


class FakeStore:
    """In-memory store driven by a reducer.

    Records every action it applies. ``fail_on`` makes ``dispatch`` raise for
    one action type, for exercising reducer failures.
    """

    def __init__(
        self,
        reducer: Reducer = _identity,
        initial_state: Any = None,
        fail_on: Optional[str] = None,
    ) -> None:
        self._reducer = reducer
        self._state = initial_state if initial_state is not None else {}
        self._fail_on = fail_on
        self.actions: list[Action] = []

    def get_state(self) -> Any:
        return self._state

    def dispatch(self, action: Action) -> Action:
        if self._fail_on is not None and get_action_type(action) == self._fail_on:
            raise RuntimeError(f"Reducer failed on '{self._fail_on}'")
        self.actions.append(action)
        self._state = self._reducer(self._state, action)
        return action

    # Test helpers

    def has(self, action_type: str) -> bool:
        return any(get_action_type(action) == action_type for action in self.actions)

    def get_all(self, action_type: str) -> list[Action]:
        return [action for action in self.actions if get_action_type(action) == action_type]

    def clear(self) -> None:
        self.actions.clear()
