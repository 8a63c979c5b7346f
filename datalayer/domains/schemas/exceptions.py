"""Schema domain exceptions.

Registry errors (``SchemaError`` subclasses) are raised by ``add_schema``,
``set_parent`` and ``resolve``. Validation errors (``RecordValidationError``
subclasses) are raised by ``RecordValidator.validate`` and propagate through
``DataLayer.push``. Both are programmer errors: they are meant to surface
during development, not to be recovered from at runtime.
"""

from typing import Any, Iterable

from datalayer.core.exceptions import DataLayerException

# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class SchemaError(DataLayerException):
    """Base exception for schema registry errors."""

    def __init__(self, message: str = "Schema error", *, schema_name: str | None = None):
        """Initialize with message and the schema involved."""
        self.schema_name = schema_name
        super().__init__(message)


class DuplicateSchemaError(SchemaError):
    """A schema with this name is already registered."""

    def __init__(self, schema_name: str):
        """Initialize with the duplicated name."""
        super().__init__(f"Schema '{schema_name}' is already registered", schema_name=schema_name)


class CyclicSchemaError(SchemaError):
    """A schema would become its own ancestor."""

    def __init__(self, schema_name: str, chain: Iterable[str] = ()):
        """Initialize with the schema and the ancestor chain that loops back to it."""
        self.chain = tuple(chain)
        detail = " -> ".join(self.chain) if self.chain else schema_name
        super().__init__(
            f"Schema '{schema_name}' is its own ancestor: {detail}", schema_name=schema_name
        )


class UnknownSchemaError(SchemaError):
    """No schema with this name is registered."""

    def __init__(self, schema_name: str):
        """Initialize with the missing name."""
        super().__init__(f"Schema '{schema_name}' is not registered", schema_name=schema_name)


class InvalidSchemaDefinitionError(SchemaError):
    """A definition (or definition file) does not describe a valid schema tree."""

    def __init__(self, message: str = "Invalid schema definition", *, source: str | None = None):
        """Initialize with message and where the definition came from."""
        self.source = source
        if source:
            message = f"{source}: {message}"
        super().__init__(message)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class RecordValidationError(DataLayerException):
    """Base exception for records that do not conform to their schema."""

    def __init__(self, message: str, *, schema_name: str, field_name: str):
        """Initialize with message and the offending schema and field."""
        self.schema_name = schema_name
        self.field_name = field_name
        super().__init__(message)


class MissingRequiredFieldError(RecordValidationError):
    """A required field without a default is absent."""

    def __init__(self, field_name: str, *, schema_name: str):
        """Initialize with the missing field."""
        super().__init__(
            f"Schema '{schema_name}' requires field '{field_name}'",
            schema_name=schema_name,
            field_name=field_name,
        )


class InvalidEnumValueError(RecordValidationError):
    """An enum field holds a value outside its allowed values."""

    def __init__(self, field_name: str, value: Any, *, schema_name: str, allowed: Iterable[Any]):
        """Initialize with the field, the rejected value and the allowed set."""
        self.value = value
        self.allowed = tuple(allowed)
        super().__init__(
            f"Field '{field_name}' of schema '{schema_name}' got {value!r}, "
            f"expected one of {list(self.allowed)}",
            schema_name=schema_name,
            field_name=field_name,
        )


class InvalidFieldTypeError(RecordValidationError):
    """A field value does not match the field's declared type."""

    def __init__(self, field_name: str, value: Any, *, schema_name: str, expected: str):
        """Initialize with the field, the rejected value and the expected type."""
        self.value = value
        self.expected = expected
        super().__init__(
            f"Field '{field_name}' of schema '{schema_name}' expects {expected}, "
            f"got {type(value).__name__} {value!r}",
            schema_name=schema_name,
            field_name=field_name,
        )


class UnsatisfiedDependencyError(RecordValidationError):
    """A field was supplied but the field it depends on has the wrong value."""

    def __init__(
        self,
        field_name: str,
        *,
        schema_name: str,
        dependency: str,
        expected: Any,
        actual: Any,
    ):
        """Initialize with the dependent field and the failed condition."""
        self.dependency = dependency
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Field '{field_name}' of schema '{schema_name}' requires "
            f"'{dependency}' == {expected!r}, got {actual!r}",
            schema_name=schema_name,
            field_name=field_name,
        )


class UnknownFieldError(RecordValidationError):
    """A record carries a field its resolved schema does not declare."""

    def __init__(self, field_name: str, *, schema_name: str):
        """Initialize with the undeclared field."""
        super().__init__(
            f"Field '{field_name}' is not declared by schema '{schema_name}'",
            schema_name=schema_name,
            field_name=field_name,
        )
