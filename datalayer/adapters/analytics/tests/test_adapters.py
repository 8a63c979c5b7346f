"""Tests for the analytics adapters."""

import logging
from unittest.mock import MagicMock, patch

import pytest

from datalayer.adapters.analytics.fake import FakeAnalyticsAdapter
from datalayer.adapters.analytics.log import LoggingAdapter
from datalayer.adapters.analytics.posthog import PostHogAdapter
from datalayer.adapters.analytics.protocols import AnalyticsAdapterProtocol
from datalayer.core.config import Settings

_PATCH_POSTHOG = "datalayer.adapters.analytics.posthog.posthog"

RECORD = {"pageHost": "/books", "productId": 123, "userId": "u-1"}


def _settings(**overrides) -> Settings:
    values = {
        "ENVIRONMENT": "prd",
        "ANALYTICS_ENABLED": True,
        "POSTHOG_API_KEY": "phc_test",
    }
    values.update(overrides)
    return Settings(**values)


@pytest.mark.parametrize(
    "adapter",
    [FakeAnalyticsAdapter(), LoggingAdapter()],
    ids=["fake", "logging"],
)
def test_adapters_satisfy_protocol(adapter):
    assert isinstance(adapter, AnalyticsAdapterProtocol)


# ---------------------------------------------------------------------------
# FakeAnalyticsAdapter
# ---------------------------------------------------------------------------


def test_fake_records_and_queries():
    adapter = FakeAnalyticsAdapter()
    adapter.push("ProductView", RECORD)
    adapter.push("ProductClick", RECORD)
    adapter.push("ProductClick", {**RECORD, "productId": 7})

    assert adapter.has("ProductClick")
    assert adapter.get("ProductClick").record["productId"] == 123
    assert len(adapter.get_all("ProductClick")) == 2

    adapter.clear()
    assert not adapter.has("ProductView")


def test_fake_get_missing_raises():
    with pytest.raises(AssertionError, match="No push for event"):
        FakeAnalyticsAdapter().get("ProductClick")


def test_fake_fail_with_records_then_raises():
    adapter = FakeAnalyticsAdapter(fail_with=RuntimeError("down"))

    with pytest.raises(RuntimeError):
        adapter.push("ProductClick", RECORD)

    assert adapter.has("ProductClick")


# ---------------------------------------------------------------------------
# LoggingAdapter
# ---------------------------------------------------------------------------


def test_logging_adapter_writes_record(caplog):
    adapter = LoggingAdapter()

    with caplog.at_level(logging.INFO, logger="datalayer"):
        adapter.push("ProductClick", RECORD)

    assert "Push: 'ProductClick'" in caplog.text
    assert "'productId': 123" in caplog.text
    assert caplog.records[-1].component == "logging_adapter"


def test_logging_adapter_respects_level(caplog):
    adapter = LoggingAdapter(level=logging.DEBUG)

    with caplog.at_level(logging.INFO, logger="datalayer"):
        adapter.push("ProductClick", RECORD)

    assert caplog.text == ""


# ---------------------------------------------------------------------------
# PostHogAdapter
# ---------------------------------------------------------------------------


def test_posthog_capture_uses_record_as_properties():
    with patch(_PATCH_POSTHOG, MagicMock()) as mock_posthog:
        adapter = PostHogAdapter(_settings())
        adapter.push("ProductClick", RECORD)

    assert mock_posthog.api_key == "phc_test"
    mock_posthog.capture.assert_called_once_with(
        distinct_id="u-1",
        event="ProductClick",
        properties={"environment": "prd", **RECORD},
    )


def test_posthog_falls_back_to_anonymous_id():
    with patch(_PATCH_POSTHOG, MagicMock()) as mock_posthog:
        adapter = PostHogAdapter(_settings(POSTHOG_ANONYMOUS_ID="guest"))
        adapter.push("PageView", {"pageHost": "/"})

    assert mock_posthog.capture.call_args.kwargs["distinct_id"] == "guest"


def test_posthog_custom_distinct_id_field():
    with patch(_PATCH_POSTHOG, MagicMock()) as mock_posthog:
        adapter = PostHogAdapter(_settings(POSTHOG_DISTINCT_ID_FIELD="productId"))
        adapter.push("ProductClick", RECORD)

    assert mock_posthog.capture.call_args.kwargs["distinct_id"] == "123"


def test_posthog_disabled_in_local():
    with patch(_PATCH_POSTHOG, MagicMock()) as mock_posthog:
        adapter = PostHogAdapter(_settings(ENVIRONMENT="local"))
        adapter.push("ProductClick", RECORD)

    mock_posthog.capture.assert_not_called()


def test_posthog_capture_errors_are_logged(caplog):
    with patch(_PATCH_POSTHOG, MagicMock()) as mock_posthog:
        mock_posthog.capture.side_effect = ConnectionError("unreachable")
        adapter = PostHogAdapter(_settings())

        with caplog.at_level(logging.ERROR):
            adapter.push("ProductClick", RECORD)

    assert "Failed to push analytics event 'ProductClick'" in caplog.text
