"""Load schema definitions from YAML or JSON files.

A file holds either a single definition or a list of definitions under a
top-level ``schemas`` key:

    schemas:
      - name: Page
        properties:
          pageHost: {type: text, required: true}
        childSchemas:
          - name: Product
            properties:
              productId: {type: integer, required: true}

JSON files use the same shape (JSON is a subset of YAML, so both go through
the YAML parser).
"""

from pathlib import Path
from typing import Iterable

import yaml

from datalayer.core.logging import logger
from datalayer.domains.schemas.exceptions import InvalidSchemaDefinitionError
from datalayer.domains.schemas.protocols import SchemaRegistryProtocol
from datalayer.domains.schemas.registry import coerce_definition
from datalayer.domains.schemas.types import Schema, SchemaDefinition

loader_logger = logger.with_prefix("SchemaLoader: ").with_context(component="schema_loader")

SUPPORTED_SUFFIXES = (".yml", ".yaml", ".json")


def load_schema_file(path: Path | str) -> list[SchemaDefinition]:
    """Parse a definition file into SchemaDefinition models.

    Raises:
        InvalidSchemaDefinitionError: If the file cannot be read or parsed, or
            does not hold valid definitions.
    """
    path = Path(path)
    if path.suffix.lower() not in SUPPORTED_SUFFIXES:
        raise InvalidSchemaDefinitionError(
            f"Unsupported file type (expected one of {', '.join(SUPPORTED_SUFFIXES)})",
            source=str(path),
        )

    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise InvalidSchemaDefinitionError(f"Failed to read: {e}", source=str(path)) from e

    if isinstance(data, dict) and "schemas" in data:
        raw_definitions = data["schemas"]
    else:
        raw_definitions = [data]

    if not isinstance(raw_definitions, list) or not raw_definitions:
        raise InvalidSchemaDefinitionError(
            "'schemas' must be a non-empty list", source=str(path)
        )

    definitions: list[SchemaDefinition] = []
    for raw in raw_definitions:
        try:
            definitions.append(coerce_definition(raw))
        except InvalidSchemaDefinitionError as e:
            raise InvalidSchemaDefinitionError(e.message, source=str(path)) from e
    return definitions


def load_schema_files(
    registry: SchemaRegistryProtocol, paths: Iterable[Path | str]
) -> list[Schema]:
    """Register every definition found in ``paths``, in order.

    Returns:
        All registered entries across the files.
    """
    registered: list[Schema] = []
    for path in paths:
        for definition in load_schema_file(path):
            registered.extend(registry.add_schema(definition))
        loader_logger.info(f"Loaded schema definitions from {path}")
    return registered
