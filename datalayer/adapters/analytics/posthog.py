"""PostHog analytics adapter."""

import logging
from typing import Any, Dict, Mapping

import posthog

from datalayer.core.config import Settings

logger = logging.getLogger(__name__)


class PostHogAdapter:
    """Forwards resolved records to PostHog as captured events.

    The record becomes the event's properties. The distinct_id is read from
    ``settings.POSTHOG_DISTINCT_ID_FIELD`` in the record, falling back to
    ``settings.POSTHOG_ANONYMOUS_ID``. The SDK queues and sends in the
    background, so ``push`` returns immediately.
    """

    def __init__(self, settings: Settings) -> None:
        """Configure PostHog SDK from application settings."""
        self._enabled = settings.posthog_enabled
        self._environment = settings.ENVIRONMENT.value
        self._distinct_id_field = settings.POSTHOG_DISTINCT_ID_FIELD
        self._anonymous_id = settings.POSTHOG_ANONYMOUS_ID

        if self._enabled:
            posthog.api_key = settings.POSTHOG_API_KEY
            posthog.host = settings.POSTHOG_HOST
            logger.info("PostHog adapter initialized (env=%s)", self._environment)
        else:
            logger.info("PostHog adapter disabled (env=%s)", self._environment)

    def _properties(self, record: Mapping[str, Any]) -> Dict[str, Any]:
        return {"environment": self._environment, **record}

    def push(self, event_name: str, record: Mapping[str, Any]) -> None:
        """Send the record to PostHog."""
        if not self._enabled:
            return

        distinct_id = record.get(self._distinct_id_field) or self._anonymous_id
        try:
            posthog.capture(
                distinct_id=str(distinct_id),
                event=event_name,
                properties=self._properties(record),
            )
        except Exception as e:
            logger.error("Failed to push analytics event '%s' to PostHog: %s", event_name, e)
