"""Location types.

A location is the chain of tagged components enclosing the point where an
action was created, outermost first. Contexts are immutable: a tagged
component pushes its node onto a copy and hands that copy to its children.
"""

from dataclasses import dataclass, replace
from typing import Optional

DEFAULT_SEPARATOR = " > "


@dataclass(frozen=True)
class LocationNode:
    """One tagged component in a location chain."""

    own_name: str
    override_name: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.own_name, str) or not self.own_name:
            raise ValueError("Location name must be a non-empty string")
        if self.override_name is not None and (
            not isinstance(self.override_name, str) or not self.override_name
        ):
            raise ValueError("Location override name must be a non-empty string or None")

    @property
    def name(self) -> str:
        """The usage-site override if given, else the component's own name."""
        return self.override_name if self.override_name is not None else self.own_name


@dataclass(frozen=True)
class LocationContext:
    """Ordered stack of enclosing location nodes."""

    nodes: tuple[LocationNode, ...] = ()
    separator: str = DEFAULT_SEPARATOR

    @classmethod
    def from_names(cls, *names: str, separator: str = DEFAULT_SEPARATOR) -> "LocationContext":
        """Build a context from plain names, outermost first."""
        return cls(nodes=tuple(LocationNode(name) for name in names), separator=separator)

    def push(self, node: LocationNode) -> "LocationContext":
        """Return a new context with ``node`` as the innermost entry."""
        return replace(self, nodes=self.nodes + (node,))

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(node.name for node in self.nodes)

    @property
    def path(self) -> Optional[str]:
        """The joined names, or None outside any tagged component."""
        if not self.nodes:
            return None
        return self.separator.join(self.names)

    @property
    def is_root(self) -> bool:
        return not self.nodes


ROOT_LOCATION = LocationContext()
