"""Location tracking for component trees.

Components are plain callables taking keyword props plus a ``location``
keyword holding the ambient ``LocationContext``. Decorating one with
``tag_location`` makes it push its own node, and re-stamps every bound
action callback it receives so that actions fired through it carry the
full path of tagged components down to it:

    @tag_location("Card")
    def card(*, location, on_click):
        ...

    @tag_location("Page")
    def page(*, location, on_click):
        return card(location=location, on_click=on_click, override_name="Special Card")

    page(on_click=bind_action(pipeline.dispatch, add_to_cart))
    # on_click(...) dispatches with meta.location == "Page > Special Card"

Untagged components just pass ``location`` through and contribute nothing.
"""

import functools
from dataclasses import dataclass, replace
from typing import Any, Callable, Mapping, Optional

from datalayer.domains.dispatch.types import Action, with_location
from datalayer.domains.location.types import ROOT_LOCATION, LocationContext, LocationNode

ActionCreator = Callable[..., Mapping[str, Any]]
Dispatch = Callable[[Action], Any]


@dataclass(frozen=True)
class BoundActionCallback:
    """An action creator bound to a dispatch function.

    Calling it builds the action, stamps it with ``location`` when one is
    set, and dispatches it.
    """

    dispatch: Dispatch
    creator: ActionCreator
    location: Optional[str] = None

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        action = self.creator(*args, **kwargs)
        if self.location is not None:
            action = with_location(action, self.location)
        return self.dispatch(action)


def bind_action(dispatch: Dispatch, creator: ActionCreator) -> BoundActionCallback:
    """Bind ``creator`` to ``dispatch``. The result carries no location yet."""
    if not callable(dispatch) or not callable(creator):
        raise TypeError("bind_action expects a dispatch callable and an action creator")
    return BoundActionCallback(dispatch=dispatch, creator=creator)


def stamp_location(callback: BoundActionCallback, path: Optional[str]) -> BoundActionCallback:
    """Return a copy of ``callback`` that stamps ``path`` on its actions.

    An inner component's stamp replaces the one applied by its ancestors.
    """
    if not isinstance(callback, BoundActionCallback):
        raise TypeError(f"Expected a BoundActionCallback, got {type(callback).__name__}")
    return replace(callback, location=path)


def tag_location(
    default_name: str, *, root: LocationContext = ROOT_LOCATION
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorate a component so it contributes ``default_name`` to location paths.

    The wrapped component accepts two extra keywords:

        location: The enclosing context (defaults to ``root``).
        override_name: Replaces ``default_name`` for this usage only.

    ``root`` only matters for outermost components. ``ROOT_LOCATION`` joins
    names with ``" > "``; pass ``container.root_location`` to use the
    configured ``LOCATION_SEPARATOR`` instead. Nested components inherit the
    separator of the context they are given.

    Raises:
        ValueError: If ``default_name`` is empty.
    """
    if not isinstance(default_name, str) or not default_name:
        raise ValueError("tag_location requires a non-empty name")

    def decorator(component: Callable[..., Any]) -> Callable[..., Any]:
        @functools.wraps(component)
        def tagged(
            *,
            location: Optional[LocationContext] = None,
            override_name: Optional[str] = None,
            **props: Any,
        ) -> Any:
            enclosing = location if location is not None else root
            context = enclosing.push(LocationNode(default_name, override_name))
            path = context.path
            stamped = {
                key: stamp_location(value, path) if isinstance(value, BoundActionCallback) else value
                for key, value in props.items()
            }
            return component(location=context, **stamped)

        tagged.location_name = default_name
        return tagged

    return decorator
