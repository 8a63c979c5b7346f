"""Root conftest for pytest configuration and shared fixtures.

This conftest is loaded before both testpaths (tests/ and datalayer/),
making its fixtures available to centralized tests AND colocated domain tests.
"""

import copy
import os

import pytest

# Register pytest-asyncio plugin at the root level
pytest_plugins = ("pytest_asyncio",)

# ---------------------------------------------------------------------------
# Environment variables: must be set before any datalayer module import
# Uses setdefault so real env vars (CI) are never overridden.
# ---------------------------------------------------------------------------
os.environ.setdefault("DATALAYER_ENVIRONMENT", "test")
os.environ.setdefault("DATALAYER_ANALYTICS_ENABLED", "false")
os.environ.setdefault("DATALAYER_LOG_LEVEL", "DEBUG")


# ---------------------------------------------------------------------------
# Schema definitions shared by several test modules
# ---------------------------------------------------------------------------

_PAGE_DEFINITION = {
    "name": "Page",
    "properties": {"pageHost": {"type": "text", "required": True}},
    "childSchemas": [
        {
            "name": "Product",
            "properties": {
                "productId": {"type": "integer", "required": True},
                "productCategory": {
                    "type": "enum",
                    "required": True,
                    "allowedValues": ["book", "mug", "canvas"],
                },
            },
        },
    ],
}


# ---------------------------------------------------------------------------
# Shared fake fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def fake_adapter():
    """Fake analytics adapter that records pushes."""
    from datalayer.adapters.analytics.fake import FakeAnalyticsAdapter

    return FakeAnalyticsAdapter()


@pytest.fixture
def fake_store():
    """Fake store whose reducer merges an action's payload into state."""
    from datalayer.domains.dispatch.fakes.store import FakeStore

    def reducer(state, action):
        return {**state, **action.get("payload", {})}

    return FakeStore(reducer, initial_state={"cart": [], "page": "home"})


# ---------------------------------------------------------------------------
# Real domain objects wired with fakes
# ---------------------------------------------------------------------------


@pytest.fixture
def schema_registry():
    """Registry holding the Page > Product tree."""
    from datalayer.domains.schemas.registry import SchemaRegistry

    registry = SchemaRegistry()
    registry.add_schema(_PAGE_DEFINITION)
    return registry


@pytest.fixture
def validator(schema_registry):
    """Validator over the shared registry with the default policy."""
    from datalayer.domains.schemas.validator import RecordValidator

    return RecordValidator(schema_registry)


@pytest.fixture
def data_layer(validator, fake_adapter):
    """Data layer with one fake adapter attached."""
    from datalayer.domains.data_layer.service import DataLayer

    layer = DataLayer(validator, history_size=10)
    layer.add_adapter(fake_adapter)
    return layer


@pytest.fixture
def pipeline(fake_store):
    """Dispatch pipeline around the fake store."""
    from datalayer.domains.dispatch.pipeline import DispatchPipeline

    return DispatchPipeline(fake_store)


@pytest.fixture
def page_definition():
    """Fresh copy of the Page > Product definition."""
    return copy.deepcopy(_PAGE_DEFINITION)
