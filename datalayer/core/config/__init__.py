"""Configuration module for datalayer.

Provides centralized configuration management with type-safe enums.

Usage:
    from datalayer.core.config import settings, DependencyPolicy

    if settings.DEPENDENCY_POLICY == DependencyPolicy.OMIT:
        ...
"""

from datalayer.core.config.enums import DependencyPolicy, Environment
from datalayer.core.config.settings import Settings

__all__ = [
    "DependencyPolicy",
    "Environment",
    "Settings",
    "settings",
]

# Singleton settings instance
settings = Settings()
