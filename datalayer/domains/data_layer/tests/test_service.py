"""Unit tests for DataLayer.

Uses the real registry and validator with FakeAnalyticsAdapter instances.
"""

import asyncio
import logging

import pytest

from datalayer.adapters.analytics.fake import FakeAnalyticsAdapter
from datalayer.domains.data_layer.service import DataLayer
from datalayer.domains.schemas.exceptions import (
    MissingRequiredFieldError,
    UnknownSchemaError,
)

PRODUCT = {"pageHost": "/books", "productId": 123, "productCategory": "book"}


class AsyncAdapter:
    """Adapter doing its I/O in a coroutine."""

    def __init__(self, fail: bool = False) -> None:
        self.sent: list[tuple[str, dict]] = []
        self._fail = fail

    async def push(self, event_name, record):
        await asyncio.sleep(0)
        if self._fail:
            raise ConnectionError("vendor unreachable")
        self.sent.append((event_name, dict(record)))


# ---------------------------------------------------------------------------
# push
# ---------------------------------------------------------------------------


def test_push_forwards_resolved_record(data_layer, fake_adapter):
    resolved = data_layer.push("ProductClick", "Product", PRODUCT)

    assert resolved == PRODUCT
    assert fake_adapter.get("ProductClick").record == PRODUCT


def test_push_rejected_record_reaches_no_adapter(data_layer, fake_adapter):
    with pytest.raises(MissingRequiredFieldError) as exc_info:
        data_layer.push(
            "ProductClick", "Product", {"pageHost": "/books", "productCategory": "mug"}
        )

    assert exc_info.value.field_name == "productId"
    assert fake_adapter.pushes == []
    assert len(data_layer.history) == 0


def test_push_unknown_schema(data_layer, fake_adapter):
    with pytest.raises(UnknownSchemaError):
        data_layer.push("ProductClick", "Nope", {})

    assert fake_adapter.pushes == []


def test_push_calls_adapters_in_registration_order(validator):
    calls = []

    class Recording:
        def __init__(self, label):
            self.label = label

        def push(self, event_name, record):
            calls.append(self.label)

    layer = DataLayer(validator)
    for label in ("first", "second", "third"):
        layer.add_adapter(Recording(label))

    layer.push("ProductClick", "Product", PRODUCT)

    assert calls == ["first", "second", "third"]


def test_push_isolates_adapter_failures(validator, caplog):
    broken = FakeAnalyticsAdapter(fail_with=RuntimeError("vendor down"))
    healthy = FakeAnalyticsAdapter()
    layer = DataLayer(validator, history_size=5)
    layer.add_adapter(broken)
    layer.add_adapter(healthy)

    with caplog.at_level(logging.ERROR, logger="datalayer"):
        resolved = layer.push("ProductClick", "Product", PRODUCT)

    assert resolved == PRODUCT
    assert healthy.has("ProductClick")
    assert "FakeAnalyticsAdapter failed" in caplog.text
    assert layer.history.recent(1)[0].adapters_notified == 1


def test_adapters_get_independent_copies(validator):
    class Mutating:
        def push(self, event_name, record):
            record["pageHost"] = "tampered"

    after = FakeAnalyticsAdapter()
    layer = DataLayer(validator)
    layer.add_adapter(Mutating())
    layer.add_adapter(after)

    resolved = layer.push("ProductClick", "Product", PRODUCT)

    assert after.get("ProductClick").record["pageHost"] == "/books"
    assert resolved["pageHost"] == "/books"


def test_late_adapter_sees_only_later_pushes(data_layer):
    data_layer.push("ProductView", "Product", PRODUCT)
    late = FakeAnalyticsAdapter()
    data_layer.add_adapter(late)

    data_layer.push("ProductClick", "Product", PRODUCT)

    assert [p.event_name for p in late.pushes] == ["ProductClick"]
    assert len(data_layer.adapters) == 2


def test_push_with_no_adapters_still_validates(validator):
    layer = DataLayer(validator)

    assert layer.push("PageView", "Page", {"pageHost": "/"}) == {"pageHost": "/"}


# ---------------------------------------------------------------------------
# History
# ---------------------------------------------------------------------------


def test_history_disabled_by_default(validator):
    assert DataLayer(validator).history is None


def test_history_records_accepted_pushes(data_layer):
    data_layer.push("ProductView", "Product", PRODUCT)
    data_layer.push("PageView", "Page", {"pageHost": "/"})

    entries = data_layer.history.query(schema_name="Product")

    assert [e.event_name for e in entries] == ["ProductView"]
    assert entries[0].adapters_notified == 1


# ---------------------------------------------------------------------------
# Awaitable adapters
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
class TestAsyncAdapters:
    async def test_push_does_not_wait(self, validator):
        adapter = AsyncAdapter()
        layer = DataLayer(validator)
        layer.add_adapter(adapter)

        layer.push("ProductClick", "Product", PRODUCT)
        assert adapter.sent == []

        await layer.drain()
        assert adapter.sent == [("ProductClick", PRODUCT)]

    async def test_async_failure_is_logged(self, validator, caplog):
        healthy = FakeAnalyticsAdapter()
        layer = DataLayer(validator)
        layer.add_adapter(AsyncAdapter(fail=True))
        layer.add_adapter(healthy)

        with caplog.at_level(logging.ERROR, logger="datalayer"):
            layer.push("ProductClick", "Product", PRODUCT)
            await layer.drain()

        assert healthy.has("ProductClick")
        assert "failed asynchronously" in caplog.text


def test_awaitable_without_loop_is_dropped(validator, caplog):
    adapter = AsyncAdapter()
    layer = DataLayer(validator)
    layer.add_adapter(adapter)

    with caplog.at_level(logging.WARNING, logger="datalayer"):
        layer.push("ProductClick", "Product", PRODUCT)

    assert adapter.sent == []
    assert "outside a running event loop" in caplog.text
