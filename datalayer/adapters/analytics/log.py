"""Logging adapter: writes every accepted record to the package logger."""

import logging
from typing import Any, Mapping

from datalayer.core.logging import ContextualLogger, logger


class LoggingAdapter:
    """Logs each pushed record. Useful for local QA of tracking plans."""

    def __init__(self, log: ContextualLogger | None = None, level: int = logging.INFO) -> None:
        """Initialize with the logger to write to and the level to use."""
        self._log = log or logger.with_prefix("Push: ").with_context(component="logging_adapter")
        self._level = level

    def push(self, event_name: str, record: Mapping[str, Any]) -> None:
        """Log the event name and record."""
        self._log.log(self._level, f"'{event_name}' {dict(record)!r}")
