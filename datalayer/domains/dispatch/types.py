"""Types for the dispatch domain.

Actions are mappings carrying a ``"type"`` key (objects exposing a ``type``
attribute are accepted too). A location stamp, when present, lives at
``action["meta"]["location"]``; absence of a stamp is represented by None.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Iterable, Mapping, Optional, Union

from datalayer.domains.dispatch.exceptions import InvalidActionError

if TYPE_CHECKING:
    from datalayer.domains.dispatch.pipeline import PipelineStore

ACTION_TYPE_KEY = "type"
META_KEY = "meta"
LOCATION_KEY = "location"

Action = Any

PreDispatchHandler = Callable[[Action, "PipelineStore"], Any]
PostDispatchHandler = Callable[[Action, "PipelineStore", Optional[str]], Any]
StateListener = Callable[[Any, Any], Any]


class DispatchPhase(str, Enum):
    """Where in the pipeline a listener runs."""

    PRE = "pre"
    POST = "post"
    STATE = "state"


class DispatchStage(str, Enum):
    """Progress of the action currently in the pipeline.

    RECEIVED -> PRE_LISTENERS -> MUTATED -> POST_LISTENERS -> STATE_DIFF -> SETTLED
    """

    IDLE = "idle"
    RECEIVED = "received"
    PRE_LISTENERS = "pre_listeners"
    MUTATED = "mutated"
    POST_LISTENERS = "post_listeners"
    STATE_DIFF = "state_diff"
    SETTLED = "settled"


@dataclass(frozen=True)
class ListenerRegistration:
    """A handler bound to a set of action types for one phase."""

    match_keys: frozenset[str]
    phase: DispatchPhase
    handler: Union[PreDispatchHandler, PostDispatchHandler]

    def matches(self, action_type: str) -> bool:
        """Exact membership test; no pattern matching."""
        return action_type in self.match_keys


def normalize_match_keys(match_keys: Union[str, Iterable[str]]) -> frozenset[str]:
    """Turn one action type or an iterable of them into a non-empty frozenset."""
    if isinstance(match_keys, str):
        keys = frozenset((match_keys,))
    else:
        keys = frozenset(match_keys)
    if not keys:
        raise ValueError("At least one action type is required")
    for key in keys:
        if not isinstance(key, str):
            raise TypeError(f"Action types must be strings, got {key!r}")
        if not key:
            raise ValueError("Action types must not be empty")
    return keys


# ---------------------------------------------------------------------------
# Action helpers
# ---------------------------------------------------------------------------


def get_action_type(action: Action) -> str:
    """Return the action's type identifier.

    Raises:
        InvalidActionError: If the action carries no string type.
    """
    if isinstance(action, Mapping):
        action_type = action.get(ACTION_TYPE_KEY)
    else:
        action_type = getattr(action, ACTION_TYPE_KEY, None)
    if isinstance(action_type, Enum):
        action_type = action_type.value
    if not isinstance(action_type, str) or not action_type:
        raise InvalidActionError(f"Action has no string '{ACTION_TYPE_KEY}': {action!r}")
    return action_type


def get_location(action: Action) -> Optional[str]:
    """Return the location path stamped on ``action``, or None."""
    if not isinstance(action, Mapping):
        return None
    meta = action.get(META_KEY)
    if not isinstance(meta, Mapping):
        return None
    return meta.get(LOCATION_KEY)


def with_location(action: Mapping[str, Any], path: str) -> dict[str, Any]:
    """Return a copy of ``action`` stamped with ``path``.

    Existing ``meta`` entries are kept; the original action is not modified.
    """
    if not isinstance(action, Mapping):
        raise InvalidActionError(f"Only mapping actions can carry a location: {action!r}")
    meta = action.get(META_KEY)
    meta = dict(meta) if isinstance(meta, Mapping) else {}
    meta[LOCATION_KEY] = path
    return {**action, META_KEY: meta}
