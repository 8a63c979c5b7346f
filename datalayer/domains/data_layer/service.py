"""Data layer service.

Every push goes through the validator first. A rejected record raises to the
caller and never reaches an adapter. An accepted record is handed to each
adapter in registration order; adapter failures are logged and isolated so
one broken vendor cannot block the others or the pushing code.

Adapters that return an awaitable are scheduled on the running event loop
and not waited on.
"""

import asyncio
import inspect
from typing import Any, Awaitable, Mapping

from datalayer.adapters.analytics.protocols import AnalyticsAdapterProtocol
from datalayer.core.logging import logger
from datalayer.domains.data_layer.history import PushHistory
from datalayer.domains.data_layer.protocols import DataLayerProtocol
from datalayer.domains.data_layer.types import PushEntry
from datalayer.domains.schemas.exceptions import RecordValidationError
from datalayer.domains.schemas.protocols import RecordValidatorProtocol

layer_logger = logger.with_prefix("DataLayer: ").with_context(component="data_layer")


def _adapter_name(adapter: AnalyticsAdapterProtocol) -> str:
    return type(adapter).__name__


class DataLayer(DataLayerProtocol):
    """Validating, adapter-fanning-out sink for analytics records.

    Usage:
        data_layer = DataLayer(RecordValidator(registry))
        data_layer.add_adapter(PostHogAdapter(settings))
        data_layer.push("ProductClick", "Product", {"pageHost": "/books", ...})

    Args:
        validator: Checks records before they are forwarded.
        history_size: Number of accepted pushes kept for debugging.
            0 disables the history.
    """

    def __init__(self, validator: RecordValidatorProtocol, history_size: int = 0) -> None:
        """Initialize with a validator and no adapters."""
        self._validator = validator
        self._adapters: list[AnalyticsAdapterProtocol] = []
        self._history = PushHistory(history_size) if history_size > 0 else None
        self._pending: set[asyncio.Future] = set()

    @property
    def adapters(self) -> tuple[AnalyticsAdapterProtocol, ...]:
        """Registered adapters, in call order."""
        return tuple(self._adapters)

    @property
    def history(self) -> PushHistory | None:
        """The push history, or None when disabled."""
        return self._history

    def add_adapter(self, adapter: AnalyticsAdapterProtocol) -> None:
        """Append an adapter to the fan-out sequence.

        Past pushes are not replayed to it.
        """
        self._adapters.append(adapter)
        layer_logger.debug(
            f"Added adapter {_adapter_name(adapter)} (position {len(self._adapters)})"
        )

    def push(self, event_name: str, schema_name: str, record: Mapping[str, Any]) -> dict[str, Any]:
        """Validate a record and forward it to every adapter.

        Args:
            event_name: Name of the analytics event (e.g. "ProductClick").
            schema_name: Schema the record must conform to.
            record: Field values.

        Returns:
            The resolved record (supplied values plus defaults).

        Raises:
            UnknownSchemaError: If ``schema_name`` is not registered.
            RecordValidationError: If the record does not conform.
        """
        try:
            resolved = self._validator.validate(schema_name, record)
        except RecordValidationError as e:
            layer_logger.debug(f"Rejected '{event_name}' against '{schema_name}': {e.message}")
            raise

        notified = self._fan_out(event_name, resolved)

        if self._history is not None:
            self._history.append(
                PushEntry(
                    event_name=event_name,
                    schema_name=schema_name,
                    record=dict(resolved),
                    adapters_notified=notified,
                )
            )
        return resolved

    # ------------------------------------------------------------------
    # Fan-out
    # ------------------------------------------------------------------

    def _fan_out(self, event_name: str, resolved: dict[str, Any]) -> int:
        """Call every adapter; return how many accepted the push without raising."""
        notified = 0
        for adapter in list(self._adapters):
            try:
                result = adapter.push(event_name, dict(resolved))
            except Exception as e:
                layer_logger.error(
                    f"Adapter {_adapter_name(adapter)} failed for '{event_name}': {e}",
                    exc_info=e,
                )
                continue

            notified += 1
            if inspect.isawaitable(result):
                self._schedule(adapter, event_name, result)
        return notified

    def _schedule(
        self, adapter: AnalyticsAdapterProtocol, event_name: str, pending: Awaitable[Any]
    ) -> None:
        name = _adapter_name(adapter)
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            layer_logger.warning(
                f"Adapter {name} returned an awaitable for '{event_name}' "
                "outside a running event loop; dropped"
            )
            if inspect.iscoroutine(pending):
                pending.close()
            return

        future = asyncio.ensure_future(pending)
        self._pending.add(future)

        def _done(done: asyncio.Future) -> None:
            self._pending.discard(done)
            if done.cancelled():
                return
            error = done.exception()
            if error is not None:
                layer_logger.error(
                    f"Adapter {name} failed asynchronously for '{event_name}': {error}",
                    exc_info=error,
                )

        future.add_done_callback(_done)

    async def drain(self) -> None:
        """Wait for scheduled adapter work to finish. Intended for shutdown and tests."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)
