"""Dependency container.

An immutable dataclass holding the process-wide data layer wiring. It has
no construction logic; that belongs in the factory.
"""

from dataclasses import dataclass, replace
from typing import Any

from datalayer.core.config import Settings
from datalayer.domains.data_layer.protocols import DataLayerProtocol
from datalayer.domains.location.types import LocationContext
from datalayer.domains.schemas.protocols import RecordValidatorProtocol, SchemaRegistryProtocol


@dataclass(frozen=True)
class Container:
    """Immutable container holding the data layer and its collaborators.

    Usage:
        # Production: use the global container built by the factory
        from datalayer.core.container import get_container
        get_container().data_layer.push("ProductClick", "Product", record)

        # Testing: construct directly with fakes
        test_container = Container(
            settings=Settings(),
            schema_registry=registry,
            validator=RecordValidator(registry),
            data_layer=DataLayer(validator),
            root_location=ROOT_LOCATION,
        )
    """

    settings: Settings

    # -----------------------------------------------------------------
    # Schemas
    # -----------------------------------------------------------------
    schema_registry: SchemaRegistryProtocol
    validator: RecordValidatorProtocol

    # -----------------------------------------------------------------
    # Sink
    # -----------------------------------------------------------------
    data_layer: DataLayerProtocol

    # Root of every component tree; carries the configured separator
    root_location: LocationContext

    def replace(self, **changes: Any) -> "Container":
        """Create a new container with some dependencies replaced.

        Args:
            **changes: Dependency name -> new implementation

        Returns:
            New Container with specified dependencies replaced
        """
        return replace(self, **changes)
