"""Record validator.

Checks a candidate record against a resolved schema and returns the
resolved record: supplied values plus applied defaults, in schema order.
Validation never touches the registry beyond reading it.

Order of checks:
    1. Undeclared fields           -> UnknownFieldError
    2. Supplied values             -> InvalidFieldTypeError / InvalidEnumValueError
                                      (reference fields are validated recursively)
    3. Defaults for absent fields
    4. depends_on conditions       -> UnsatisfiedDependencyError (REJECT policy)
                                      or the field is dropped (OMIT policy);
                                      a default whose condition fails is dropped
    5. Required fields             -> MissingRequiredFieldError
                                      (skipped when the field's condition fails)
"""

import copy
from typing import Any, Mapping

from datalayer.core.config.enums import DependencyPolicy
from datalayer.core.logging import logger
from datalayer.domains.schemas.exceptions import (
    InvalidEnumValueError,
    InvalidFieldTypeError,
    MissingRequiredFieldError,
    UnknownFieldError,
    UnsatisfiedDependencyError,
)
from datalayer.domains.schemas.protocols import RecordValidatorProtocol, SchemaRegistryProtocol
from datalayer.domains.schemas.types import SCALAR_TYPE_CHECKS, FieldSpec, FieldType

validator_logger = logger.with_prefix("RecordValidator: ").with_context(component="validator")


class RecordValidator(RecordValidatorProtocol):
    """Validates records against schemas held by a registry.

    Args:
        registry: Where schemas are resolved.
        dependency_policy: What to do with a supplied field whose
            ``depends_on`` condition fails. Defaults to rejecting the record.
    """

    def __init__(
        self,
        registry: SchemaRegistryProtocol,
        dependency_policy: DependencyPolicy = DependencyPolicy.REJECT,
    ) -> None:
        """Initialize with a registry and a dependency policy."""
        self._registry = registry
        self._dependency_policy = dependency_policy

    @property
    def dependency_policy(self) -> DependencyPolicy:
        """The active policy for unsatisfied ``depends_on`` conditions."""
        return self._dependency_policy

    def validate(self, schema_name: str, record: Mapping[str, Any]) -> dict[str, Any]:
        """Validate ``record`` against ``schema_name``.

        Args:
            schema_name: Name of a registered schema.
            record: Candidate field values.

        Returns:
            A new dict holding the supplied values and applied defaults, in the
            resolved schema's field order. Optional fields without a default
            that were not supplied are absent.

        Raises:
            UnknownSchemaError: If the schema (or a referenced one) is unknown.
            RecordValidationError: If the record does not conform.
        """
        fields = self._registry.resolve(schema_name)

        for field_name in record:
            if field_name not in fields:
                raise UnknownFieldError(field_name, schema_name=schema_name)

        resolved: dict[str, Any] = {}
        supplied: set[str] = set()
        for field_name, spec in fields.items():
            if field_name in record:
                resolved[field_name] = self._check_value(
                    schema_name, field_name, spec, record[field_name]
                )
                supplied.add(field_name)
            elif spec.has_default:
                resolved[field_name] = copy.deepcopy(spec.default)

        self._apply_dependencies(schema_name, fields, resolved, supplied)

        for field_name, spec in fields.items():
            if field_name in resolved or not spec.required or spec.has_default:
                continue
            if spec.depends_on is not None and not self._dependency_met(spec, resolved):
                continue
            raise MissingRequiredFieldError(field_name, schema_name=schema_name)

        return resolved

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _check_value(self, schema_name: str, field_name: str, spec: FieldSpec, value: Any) -> Any:
        if spec.type == FieldType.ENUM:
            if not spec.allows(value):
                raise InvalidEnumValueError(
                    field_name, value, schema_name=schema_name, allowed=spec.allowed_values
                )
            return value

        if spec.type == FieldType.REFERENCE:
            if not isinstance(value, Mapping):
                raise InvalidFieldTypeError(
                    field_name,
                    value,
                    schema_name=schema_name,
                    expected=f"a '{spec.schema_ref}' record",
                )
            return self.validate(spec.schema_ref, value)

        check, expected = SCALAR_TYPE_CHECKS[spec.type]
        if not check(value):
            raise InvalidFieldTypeError(
                field_name, value, schema_name=schema_name, expected=expected
            )
        return value

    @staticmethod
    def _dependency_met(spec: FieldSpec, resolved: Mapping[str, Any]) -> bool:
        dependency = spec.depends_on
        return dependency.field in resolved and resolved[dependency.field] == dependency.expected

    def _apply_dependencies(
        self,
        schema_name: str,
        fields: Mapping[str, FieldSpec],
        resolved: dict[str, Any],
        supplied: set[str],
    ) -> None:
        # Dropping a field can break a condition further down the chain,
        # so repeat until nothing changes.
        changed = True
        while changed:
            changed = False
            for field_name, spec in fields.items():
                if spec.depends_on is None or field_name not in resolved:
                    continue
                if self._dependency_met(spec, resolved):
                    continue

                if field_name in supplied and self._dependency_policy == DependencyPolicy.REJECT:
                    raise UnsatisfiedDependencyError(
                        field_name,
                        schema_name=schema_name,
                        dependency=spec.depends_on.field,
                        expected=spec.depends_on.expected,
                        actual=resolved.get(spec.depends_on.field),
                    )

                validator_logger.debug(
                    f"Dropped '{field_name}' from '{schema_name}': "
                    f"'{spec.depends_on.field}' != {spec.depends_on.expected!r}"
                )
                del resolved[field_name]
                changed = True
