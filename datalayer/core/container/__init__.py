"""Dependency container module.

Usage:
------
    # Initialize at startup (call once)
    from datalayer.core.config import settings
    from datalayer.core.container import initialize_container
    initialize_container(settings)

    # Read the wiring afterwards
    from datalayer.core.container import get_container
    data_layer = get_container().data_layer

    # Wrap the application store
    pipeline = create_pipeline(store)

    # In tests (construct directly with fakes, don't use global)
    test_container = create_container(Settings(), adapters=[FakeAnalyticsAdapter()])

Module structure:
-----------------
    container/
    ├── __init__.py      # This file - exports public API
    ├── container.py     # Container dataclass (serves)
    └── factory.py       # create_container() (builds)
"""

from typing import TYPE_CHECKING, Iterable, Optional

from datalayer.core.container.container import Container
from datalayer.core.container.factory import create_container, create_pipeline
from datalayer.core.exceptions import NotInitializedException

if TYPE_CHECKING:
    from datalayer.adapters.analytics.protocols import AnalyticsAdapterProtocol
    from datalayer.core.config import Settings

__all__ = [
    "Container",
    "container",
    "create_container",
    "create_pipeline",
    "get_container",
    "initialize_container",
    "reset_container",
]


# ---------------------------------------------------------------------------
# Global container instance
# ---------------------------------------------------------------------------

container: Container | None = None
"""Global container instance.

Initialized via `initialize_container()` at application startup. Domain
code receives its collaborators as arguments and never imports this.
"""


def initialize_container(
    settings: "Settings",
    adapters: Optional[Iterable["AnalyticsAdapterProtocol"]] = None,
) -> Container:
    """Initialize the global container. Call once at startup.

    Args:
        settings: Application settings.
        adapters: Extra adapters to attach, e.g. vendor integrations.

    Returns:
        The new container.

    Raises:
        RuntimeError: If called more than once (container already initialized)
    """
    global container

    if container is not None:
        raise RuntimeError(
            "Container already initialized. "
            "initialize_container() should only be called once at startup."
        )

    container = create_container(settings, adapters=adapters)
    return container


def get_container() -> Container:
    """Return the global container.

    Raises:
        NotInitializedException: If initialize_container() was not called.
    """
    if container is None:
        raise NotInitializedException()
    return container


def reset_container() -> None:
    """Reset the global container to None. For testing only."""
    global container
    container = None
