"""Types for the schemas domain.

A schema definition is a nested document:

    {
        "name": "Page",
        "properties": {"pageHost": {"type": "text", "required": True}},
        "childSchemas": [
            {
                "name": "Product",
                "properties": {
                    "productId": {"type": "integer", "required": True},
                    "productCategory": {
                        "type": "enum",
                        "required": True,
                        "allowedValues": ["book", "mug", "canvas"],
                    },
                },
            },
        ],
    }

Definitions are parsed into ``SchemaDefinition`` models. Registration
flattens the tree into ``Schema`` entries that point at their parent by name.
"""

import math
from enum import Enum
from typing import Any, Callable, Iterator

from pydantic import BaseModel, ConfigDict, Field, model_validator

# ---------------------------------------------------------------------------
# Field specs
# ---------------------------------------------------------------------------


class FieldType(str, Enum):
    """Value types a field can declare."""

    TEXT = "text"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    ENUM = "enum"
    REFERENCE = "reference"


def _is_text(value: Any) -> bool:
    return isinstance(value, str)


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a number here
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_boolean(value: Any) -> bool:
    return isinstance(value, bool)


# Scalar types only; enum and reference values are checked by FieldSpec and the validator
SCALAR_TYPE_CHECKS: dict[FieldType, tuple[Callable[[Any], bool], str]] = {
    FieldType.TEXT: (_is_text, "text"),
    FieldType.NUMBER: (_is_number, "a finite number"),
    FieldType.INTEGER: (_is_integer, "an integer"),
    FieldType.BOOLEAN: (_is_boolean, "a boolean"),
}


class Dependency(BaseModel):
    """Condition ``record[field] == expected`` gating another field."""

    model_config = ConfigDict(frozen=True)

    field: str
    expected: Any


class FieldSpec(BaseModel):
    """Declaration of one record field.

    ``allowed_values`` is only meaningful for ``enum`` fields and ``schema``
    only for ``reference`` fields, which hold a nested record validated
    against the named schema. A declared ``default`` must itself be a valid
    value; reference fields cannot declare one.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    type: FieldType
    required: bool = False
    default: Any = None
    allowed_values: tuple[Any, ...] | None = Field(None, alias="allowedValues")
    depends_on: Dependency | None = Field(None, alias="dependsOn")
    schema_ref: str | None = Field(None, alias="schema")

    @model_validator(mode="before")
    @classmethod
    def _coerce_depends_on(cls, data: Any) -> Any:
        """Accept ``dependsOn`` written as a ``[field, expected]`` pair."""
        if not isinstance(data, dict):
            return data
        for key in ("dependsOn", "depends_on"):
            value = data.get(key)
            if isinstance(value, (list, tuple)):
                if len(value) != 2:
                    raise ValueError(f"{key} pair must be [field, expected], got {value!r}")
                data = {**data, key: {"field": value[0], "expected": value[1]}}
        return data

    @model_validator(mode="after")
    def _check_type_options(self) -> "FieldSpec":
        """Keep type-specific options on the types that use them."""
        if self.type == FieldType.ENUM:
            if not self.allowed_values:
                raise ValueError("enum fields require a non-empty allowed_values")
        elif self.allowed_values is not None:
            raise ValueError(f"allowed_values is only valid for enum fields, not {self.type.value}")

        if self.type == FieldType.REFERENCE:
            if not self.schema_ref:
                raise ValueError("reference fields require the referenced schema name")
        elif self.schema_ref is not None:
            raise ValueError(f"schema is only valid for reference fields, not {self.type.value}")

        if self.has_default:
            self._check_default()
        return self

    def _check_default(self) -> None:
        if self.type == FieldType.REFERENCE:
            raise ValueError("reference fields cannot declare a default")
        if self.type == FieldType.ENUM:
            if not self.allows(self.default):
                raise ValueError(
                    f"default {self.default!r} is not one of {list(self.allowed_values)}"
                )
            return
        check, expected = SCALAR_TYPE_CHECKS[self.type]
        if not check(self.default):
            raise ValueError(f"default {self.default!r} is not {expected}")

    def allows(self, value: Any) -> bool:
        """Enum membership. Values match only when their types match too, so True != 1."""
        return any(
            type(value) is type(allowed) and value == allowed
            for allowed in self.allowed_values or ()
        )

    @property
    def has_default(self) -> bool:
        """Whether a default was declared (``None`` means no default)."""
        return self.default is not None


# ---------------------------------------------------------------------------
# Schema definitions and registry entries
# ---------------------------------------------------------------------------


class SchemaDefinition(BaseModel):
    """A schema tree as written by the application, before registration."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    name: str = Field(..., min_length=1)
    properties: dict[str, FieldSpec] = Field(default_factory=dict)
    child_schemas: tuple["SchemaDefinition", ...] = Field((), alias="childSchemas")

    def walk(
        self, parent: str | None = None
    ) -> Iterator[tuple["SchemaDefinition", str | None]]:
        """Yield ``(definition, parent_name)`` for this node and every descendant."""
        yield self, parent
        for child in self.child_schemas:
            yield from child.walk(self.name)


class Schema(BaseModel):
    """A registered schema: own properties plus the parent's name."""

    model_config = ConfigDict(frozen=True)

    name: str
    properties: dict[str, FieldSpec]
    parent: str | None = None
