"""Schema domain: composable record schemas and the validator enforcing them."""

from datalayer.domains.schemas.exceptions import (
    CyclicSchemaError,
    DuplicateSchemaError,
    InvalidEnumValueError,
    InvalidFieldTypeError,
    InvalidSchemaDefinitionError,
    MissingRequiredFieldError,
    RecordValidationError,
    SchemaError,
    UnknownFieldError,
    UnknownSchemaError,
    UnsatisfiedDependencyError,
)
from datalayer.domains.schemas.loader import load_schema_file, load_schema_files
from datalayer.domains.schemas.registry import SchemaRegistry
from datalayer.domains.schemas.types import (
    Dependency,
    FieldSpec,
    FieldType,
    Schema,
    SchemaDefinition,
)
from datalayer.domains.schemas.validator import RecordValidator

__all__ = [
    "CyclicSchemaError",
    "Dependency",
    "DuplicateSchemaError",
    "FieldSpec",
    "FieldType",
    "InvalidEnumValueError",
    "InvalidFieldTypeError",
    "InvalidSchemaDefinitionError",
    "MissingRequiredFieldError",
    "RecordValidationError",
    "RecordValidator",
    "Schema",
    "SchemaDefinition",
    "SchemaError",
    "SchemaRegistry",
    "UnknownFieldError",
    "UnknownSchemaError",
    "UnsatisfiedDependencyError",
    "load_schema_file",
    "load_schema_files",
]
