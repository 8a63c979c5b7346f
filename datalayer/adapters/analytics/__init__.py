"""Analytics adapters."""

from datalayer.adapters.analytics.fake import FakeAnalyticsAdapter, PushedRecord
from datalayer.adapters.analytics.log import LoggingAdapter
from datalayer.adapters.analytics.posthog import PostHogAdapter
from datalayer.adapters.analytics.protocols import AnalyticsAdapterProtocol

__all__ = [
    "AnalyticsAdapterProtocol",
    "FakeAnalyticsAdapter",
    "LoggingAdapter",
    "PostHogAdapter",
    "PushedRecord",
]
