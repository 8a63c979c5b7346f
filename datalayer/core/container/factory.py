"""Container factory.

All wiring decisions live here: which schema files to load, which
validation policy to apply, and which adapters to attach, all read from
settings. Broken wiring (a bad schema file, a clashing name) fails at
startup.
"""

from typing import Iterable, Optional

from datalayer.adapters.analytics.log import LoggingAdapter
from datalayer.adapters.analytics.posthog import PostHogAdapter
from datalayer.adapters.analytics.protocols import AnalyticsAdapterProtocol
from datalayer.core.config import Settings
from datalayer.core.container.container import Container
from datalayer.core.logging import logger
from datalayer.domains.data_layer.service import DataLayer
from datalayer.domains.dispatch.pipeline import DispatchPipeline, ErrorReporter
from datalayer.domains.dispatch.protocols import StoreProtocol
from datalayer.domains.location.types import LocationContext
from datalayer.domains.schemas.loader import load_schema_files
from datalayer.domains.schemas.registry import SchemaRegistry
from datalayer.domains.schemas.validator import RecordValidator


def create_container(
    settings: Settings,
    adapters: Optional[Iterable[AnalyticsAdapterProtocol]] = None,
) -> Container:
    """Build the container from settings.

    Args:
        settings: Application settings.
        adapters: Extra adapters attached after the settings-driven ones,
            in the given order.

    Returns:
        Fully constructed Container ready for use.

    Raises:
        InvalidSchemaDefinitionError: If a schema file is malformed.
        SchemaError: If the loaded schemas clash or reference unknown parents.
    """
    # -----------------------------------------------------------------
    # Schemas
    # -----------------------------------------------------------------
    schema_registry = SchemaRegistry()
    if settings.SCHEMA_PATHS:
        load_schema_files(schema_registry, settings.SCHEMA_PATHS)

    validator = RecordValidator(schema_registry, dependency_policy=settings.DEPENDENCY_POLICY)

    # -----------------------------------------------------------------
    # Data layer with adapters
    # -----------------------------------------------------------------
    data_layer = DataLayer(validator, history_size=settings.HISTORY_SIZE)
    for adapter in _create_adapters(settings):
        data_layer.add_adapter(adapter)
    for adapter in adapters or ():
        data_layer.add_adapter(adapter)

    logger.info(
        f"Data layer ready: {len(schema_registry)} schema(s), "
        f"{len(data_layer.adapters)} adapter(s), policy={settings.DEPENDENCY_POLICY.value}"
    )

    return Container(
        settings=settings,
        schema_registry=schema_registry,
        validator=validator,
        data_layer=data_layer,
        root_location=LocationContext(separator=settings.LOCATION_SEPARATOR),
    )


def create_pipeline(
    store: StoreProtocol,
    on_error: Optional[ErrorReporter] = None,
) -> DispatchPipeline:
    """Wrap an application store in a dispatch pipeline.

    Listeners are registered on the returned pipeline by application code;
    they typically close over ``container.data_layer``.
    """
    return DispatchPipeline(store, on_error=on_error)


def _create_adapters(settings: Settings) -> list[AnalyticsAdapterProtocol]:
    """Adapters enabled by settings.

    - LoggingAdapter when LOG_PUSHES is set
    - PostHogAdapter when analytics is enabled outside local
    """
    adapters: list[AnalyticsAdapterProtocol] = []
    if settings.LOG_PUSHES:
        adapters.append(LoggingAdapter())
    if settings.posthog_enabled:
        adapters.append(PostHogAdapter(settings))
    elif settings.ANALYTICS_ENABLED:
        logger.warning(
            f"ANALYTICS_ENABLED is set but ENVIRONMENT={settings.ENVIRONMENT.value}; "
            "PostHog adapter not attached"
        )
    return adapters
