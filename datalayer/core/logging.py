"""Package logging.

``logger`` is a ``ContextualLogger`` wrapping the ``datalayer`` stdlib logger.
Components derive their own adapter once at import time:

    registry_logger = logger.with_prefix("SchemaRegistry: ").with_context(
        component="schema_registry"
    )
    registry_logger.info("Registered schema 'Product'")
    # SchemaRegistry: Registered schema 'Product' [component=schema_registry]

Context fields are also attached to each ``LogRecord`` (via ``extra``) so
structured handlers can pick them up.
"""

import logging
from typing import Any, MutableMapping

LOGGER_NAME = "datalayer"

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class ContextualLogger(logging.LoggerAdapter):
    """Logger adapter carrying a message prefix and key/value context."""

    def __init__(
        self,
        logger: logging.Logger,
        prefix: str = "",
        context: dict[str, Any] | None = None,
    ) -> None:
        """Wrap ``logger`` with an optional prefix and context."""
        super().__init__(logger, dict(context or {}))
        self.prefix = prefix

    def with_context(self, **fields: Any) -> "ContextualLogger":
        """Return a new adapter with ``fields`` merged into the context."""
        return ContextualLogger(self.logger, self.prefix, {**self.extra, **fields})

    def with_prefix(self, prefix: str) -> "ContextualLogger":
        """Return a new adapter whose messages start with ``prefix``."""
        return ContextualLogger(self.logger, self.prefix + prefix, dict(self.extra))

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> tuple[Any, MutableMapping[str, Any]]:
        """Prefix the message, append the context, and forward it as ``extra``."""
        if self.extra:
            rendered = " ".join(f"{key}={value}" for key, value in self.extra.items())
            msg = f"{self.prefix}{msg} [{rendered}]"
        else:
            msg = f"{self.prefix}{msg}"
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs


def configure_logging(level: str | int = "INFO") -> None:
    """Install a stream handler on the package logger. Safe to call repeatedly."""
    base = logging.getLogger(LOGGER_NAME)
    base.setLevel(level)
    if not base.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        base.addHandler(handler)


logger = ContextualLogger(logging.getLogger(LOGGER_NAME))
