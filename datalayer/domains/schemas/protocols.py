"""Protocols for the schema registry and record validator."""

from typing import Any, Mapping, Protocol

from datalayer.domains.schemas.types import FieldSpec, Schema, SchemaDefinition


class SchemaRegistryProtocol(Protocol):
    """Named schemas with parent/child composition.

    Built during application initialization. ``resolve`` results are cached
    until the registry is mutated again.
    """

    def add_schema(
        self,
        definition: SchemaDefinition | Mapping[str, Any],
        parent: str | None = None,
    ) -> list[Schema]:
        """Register a schema tree and return the registered entries, root first."""
        ...

    def get(self, name: str) -> Schema:
        """Get a registered schema. Raises UnknownSchemaError if missing."""
        ...

    def resolve(self, name: str) -> Mapping[str, FieldSpec]:
        """Return the flattened field set of ``name`` (descendant fields win)."""
        ...

    def list_all(self) -> list[Schema]:
        """List all registered schemas in registration order."""
        ...


class RecordValidatorProtocol(Protocol):
    """Checks candidate records against resolved schemas."""

    def validate(self, schema_name: str, record: Mapping[str, Any]) -> dict[str, Any]:
        """Return the resolved record or raise a RecordValidationError."""
        ...
