"""Configuration enums for type-safe settings.

These enums provide type safety and IDE autocomplete for configuration values.
They inherit from str to maintain JSON serialization compatibility.
"""

from enum import Enum


class Environment(str, Enum):
    """Deployment environments.

    Controls environment-specific behavior like logging defaults and which
    adapters the container attaches.
    """

    LOCAL = "local"
    TEST = "test"
    DEV = "dev"
    PRD = "prd"


class DependencyPolicy(str, Enum):
    """What the validator does with a supplied field whose ``depends_on`` fails.

    REJECT raises ``UnsatisfiedDependencyError`` for the whole record.
    OMIT drops the field from the resolved record and keeps the rest.
    """

    REJECT = "reject"
    OMIT = "omit"
