"""Dispatch domain: the interception pipeline around a store's dispatch."""

from datalayer.domains.dispatch.exceptions import (
    DispatchError,
    InvalidActionError,
    ListenerExecutionError,
)
from datalayer.domains.dispatch.observers import changed_keys, watch
from datalayer.domains.dispatch.pipeline import DispatchPipeline, PipelineStore
from datalayer.domains.dispatch.protocols import DispatchPipelineProtocol, StoreProtocol
from datalayer.domains.dispatch.types import (
    DispatchPhase,
    DispatchStage,
    ListenerRegistration,
    get_action_type,
    get_location,
    with_location,
)

__all__ = [
    "DispatchError",
    "DispatchPhase",
    "DispatchPipeline",
    "DispatchPipelineProtocol",
    "DispatchStage",
    "InvalidActionError",
    "ListenerExecutionError",
    "ListenerRegistration",
    "PipelineStore",
    "StoreProtocol",
    "changed_keys",
    "get_action_type",
    "get_location",
    "watch",
    "with_location",
]
