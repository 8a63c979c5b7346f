"""In-memory schema registry built once at startup.

Schemas form an ownership tree: every registered schema points at its parent
by name. ``resolve`` walks the chain from the root down to the named schema
and merges the property maps, so a descendant's declaration of a field
replaces its ancestor's. Results are memoized and dropped whenever the
registry changes.
"""

from types import MappingProxyType
from typing import Any, Mapping

from pydantic import ValidationError

from datalayer.core.logging import logger
from datalayer.domains.schemas.exceptions import (
    CyclicSchemaError,
    DuplicateSchemaError,
    InvalidSchemaDefinitionError,
    UnknownSchemaError,
)
from datalayer.domains.schemas.protocols import SchemaRegistryProtocol
from datalayer.domains.schemas.types import FieldSpec, Schema, SchemaDefinition

registry_logger = logger.with_prefix("SchemaRegistry: ").with_context(component="schema_registry")


def coerce_definition(definition: SchemaDefinition | Mapping[str, Any]) -> SchemaDefinition:
    """Parse a plain mapping into a SchemaDefinition.

    Raises:
        InvalidSchemaDefinitionError: If the mapping is not a valid schema tree.
    """
    if isinstance(definition, SchemaDefinition):
        return definition
    if not isinstance(definition, Mapping):
        raise InvalidSchemaDefinitionError(
            f"Expected a mapping or SchemaDefinition, got {type(definition).__name__}"
        )
    try:
        return SchemaDefinition.model_validate(dict(definition))
    except ValidationError as e:
        raise InvalidSchemaDefinitionError(str(e)) from e


class SchemaRegistry(SchemaRegistryProtocol):
    """In-memory schema registry with memoized field resolution."""

    def __init__(self) -> None:
        """Initialize with no schemas."""
        self._schemas: dict[str, Schema] = {}
        self._children: dict[str, list[str]] = {}
        self._resolved: dict[str, Mapping[str, FieldSpec]] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._schemas

    def __len__(self) -> int:
        return len(self._schemas)

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def add_schema(
        self,
        definition: SchemaDefinition | Mapping[str, Any],
        parent: str | None = None,
    ) -> list[Schema]:
        """Register a schema tree.

        The root is registered under ``parent`` (if given) and every nested
        child definition under its declaring schema. Nothing is registered
        if any name in the tree clashes.

        Args:
            definition: The root definition, as a model or a plain mapping.
            parent: Optional already-registered schema to attach the root to.

        Returns:
            The registered entries, root first, depth-first.

        Raises:
            InvalidSchemaDefinitionError: If the definition is malformed.
            UnknownSchemaError: If ``parent`` is not registered.
            DuplicateSchemaError: If a name in the tree is already taken.
        """
        definition = coerce_definition(definition)
        if parent is not None and parent not in self._schemas:
            raise UnknownSchemaError(parent)

        entries: list[Schema] = []
        seen: set[str] = set()
        for node, node_parent in definition.walk(parent):
            if node.name in self._schemas or node.name in seen:
                raise DuplicateSchemaError(node.name)
            seen.add(node.name)
            entries.append(
                Schema(name=node.name, properties=dict(node.properties), parent=node_parent)
            )

        for entry in entries:
            self._schemas[entry.name] = entry
            self._children[entry.name] = []
            if entry.parent is not None:
                self._children[entry.parent].append(entry.name)

        self._invalidate()
        registry_logger.info(
            f"Registered {len(entries)} schema(s) from '{definition.name}'"
            + (f" under '{parent}'" if parent else "")
        )
        return entries

    def set_parent(self, name: str, parent: str | None) -> Schema:
        """Move a schema below another parent (or make it a root).

        Args:
            name: The schema to move.
            parent: The new parent, or None to detach.

        Returns:
            The updated entry.

        Raises:
            UnknownSchemaError: If either schema is not registered.
            CyclicSchemaError: If ``parent`` is ``name`` or one of its descendants.
                The registry is left unchanged.
        """
        current = self.get(name)
        if parent is not None:
            self.get(parent)
            chain = [name]
            cursor: str | None = parent
            while cursor is not None:
                chain.append(cursor)
                if cursor == name:
                    raise CyclicSchemaError(name, chain)
                cursor = self._schemas[cursor].parent

        if current.parent is not None:
            self._children[current.parent].remove(name)
        if parent is not None:
            self._children[parent].append(name)

        updated = current.model_copy(update={"parent": parent})
        self._schemas[name] = updated
        self._invalidate()
        registry_logger.info(f"Re-parented '{name}': '{current.parent}' -> '{parent}'")
        return updated

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def get(self, name: str) -> Schema:
        """Get a registered schema.

        Raises:
            UnknownSchemaError: If no schema with that name is registered.
        """
        try:
            return self._schemas[name]
        except KeyError:
            raise UnknownSchemaError(name) from None

    def list_all(self) -> list[Schema]:
        """List all registered schemas in registration order."""
        return list(self._schemas.values())

    def children(self, name: str) -> list[str]:
        """Names of the schemas directly below ``name``."""
        self.get(name)
        return list(self._children[name])

    def lineage(self, name: str) -> list[str]:
        """Names from the root ancestor down to ``name`` (inclusive).

        Raises:
            UnknownSchemaError: If ``name`` or an ancestor is not registered.
            CyclicSchemaError: If the chain loops back on itself.
        """
        chain: list[str] = []
        seen: set[str] = set()
        cursor: str | None = name
        while cursor is not None:
            if cursor in seen:
                raise CyclicSchemaError(name, [*reversed(chain), cursor])
            seen.add(cursor)
            chain.append(cursor)
            cursor = self.get(cursor).parent
        chain.reverse()
        return chain

    def ancestors(self, name: str) -> list[str]:
        """Names from the root ancestor down to the direct parent of ``name``."""
        return self.lineage(name)[:-1]

    def resolve(self, name: str) -> Mapping[str, FieldSpec]:
        """Return the flattened, read-only field set of ``name``.

        Fields are merged root first, so a descendant's declaration of a
        field overrides every ancestor's declaration of the same name.

        Raises:
            UnknownSchemaError: If ``name`` is not registered.
            CyclicSchemaError: If the ancestor chain loops.
        """
        cached = self._resolved.get(name)
        if cached is not None:
            return cached

        merged: dict[str, FieldSpec] = {}
        for ancestor in self.lineage(name):
            merged.update(self._schemas[ancestor].properties)

        resolved = MappingProxyType(merged)
        self._resolved[name] = resolved
        return resolved

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _invalidate(self) -> None:
        if self._resolved:
            registry_logger.debug(f"Dropped {len(self._resolved)} cached resolution(s)")
        self._resolved.clear()

