"""Location domain: where in the component tree an action came from."""

from datalayer.domains.dispatch.types import get_location, with_location
from datalayer.domains.location.tracker import (
    BoundActionCallback,
    bind_action,
    stamp_location,
    tag_location,
)
from datalayer.domains.location.types import (
    DEFAULT_SEPARATOR,
    ROOT_LOCATION,
    LocationContext,
    LocationNode,
)

__all__ = [
    "BoundActionCallback",
    "DEFAULT_SEPARATOR",
    "LocationContext",
    "LocationNode",
    "ROOT_LOCATION",
    "bind_action",
    "get_location",
    "stamp_location",
    "tag_location",
    "with_location",
]
