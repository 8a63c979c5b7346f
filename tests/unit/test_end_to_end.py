"""End-to-end: tagged component -> pipeline -> listener -> data layer -> adapter.

Wires the real registry, validator, data layer, dispatch pipeline and
location tracker the way an application would at startup.
"""

import pytest

from datalayer.adapters.analytics.fake import FakeAnalyticsAdapter
from datalayer.core.config import Settings
from datalayer.core.container import create_container, create_pipeline
from datalayer.domains.dispatch.fakes.store import FakeStore
from datalayer.domains.dispatch.observers import watch
from datalayer.domains.location.tracker import bind_action, tag_location
from datalayer.domains.schemas.exceptions import MissingRequiredFieldError

PRODUCTS = {
    123: {"productId": 123, "productCategory": "book"},
    7: {"productId": 7, "productCategory": "mug"},
}


def _reducer(state, action):
    if action["type"] == "ADD_TO_CART":
        return {**state, "cart": [*state["cart"], action["productId"]]}
    return state


def add_to_cart(product_id: int) -> dict:
    return {"type": "ADD_TO_CART", "productId": product_id}


@pytest.fixture
def app(page_definition):
    adapter = FakeAnalyticsAdapter()
    container = create_container(Settings(_env_file=None), adapters=[adapter])
    container.schema_registry.add_schema(page_definition)
    container.schema_registry.add_schema(
        {
            "name": "CartClick",
            "properties": {"location": {"type": "text"}},
        },
        parent="Product",
    )

    store = FakeStore(_reducer, initial_state={"cart": [], "pageHost": "/books"})
    pipeline = create_pipeline(store)
    data_layer = container.data_layer

    def track_add(action, view, location):
        record = {"pageHost": view.get_state()["pageHost"], **PRODUCTS[action["productId"]]}
        if location is not None:
            record["location"] = location
        data_layer.push("AddToCart", "CartClick", record)

    def track_cart_size(before, after):
        data_layer.push("CartChanged", "Page", {"pageHost": f"/cart/{len(after)}"})

    pipeline.add_post_dispatch_listeners("ADD_TO_CART", track_add)
    pipeline.add_state_listeners(watch(lambda state: state["cart"], track_cart_size))
    return container, pipeline, adapter


def test_product_click_example(app):
    container, _, adapter = app
    record = {"pageHost": "/books", "productId": 123, "productCategory": "book"}

    container.data_layer.push("ProductClick", "Product", record)

    assert adapter.get("ProductClick").record == record


def test_product_click_missing_field(app):
    container, _, adapter = app

    with pytest.raises(MissingRequiredFieldError) as exc_info:
        container.data_layer.push(
            "ProductClick", "Product", {"pageHost": "/books", "productCategory": "mug"}
        )

    assert exc_info.value.field_name == "productId"
    assert not adapter.has("ProductClick")


def test_tagged_click_flows_to_adapter(app):
    container, pipeline, adapter = app

    @tag_location("Card")
    def product_card(*, location, product_id, on_add):
        on_add(product_id)

    @tag_location("Page")
    def catalogue(*, location, on_add):
        product_card(location=location, product_id=123, on_add=on_add)
        product_card(location=location, product_id=7, on_add=on_add, override_name="Special Card")

    catalogue(location=container.root_location, on_add=bind_action(pipeline.dispatch, add_to_cart))

    adds = adapter.get_all("AddToCart")
    assert [p.record["location"] for p in adds] == ["Page > Card", "Page > Special Card"]
    assert adds[0].record == {
        "pageHost": "/books",
        "productId": 123,
        "productCategory": "book",
        "location": "Page > Card",
    }
    assert [p.record["pageHost"] for p in adapter.get_all("CartChanged")] == [
        "/cart/1",
        "/cart/2",
    ]
    assert [p.event_name for p in adapter.pushes] == [
        "AddToCart",
        "CartChanged",
        "AddToCart",
        "CartChanged",
    ]


def test_untagged_dispatch_has_no_location(app):
    _, pipeline, adapter = app

    bind_action(pipeline.dispatch, add_to_cart)(7)

    assert "location" not in adapter.get("AddToCart").record


def test_invalid_record_in_listener_is_isolated(app):
    container, pipeline, adapter = app
    reported = []
    failing = create_pipeline(pipeline.store, on_error=reported.append)

    def bad_listener(action, view, location):
        container.data_layer.push("AddToCart", "CartClick", {"productId": action["productId"]})

    failing.add_post_dispatch_listeners("ADD_TO_CART", bad_listener)
    failing.dispatch(add_to_cart(123))

    assert isinstance(reported[0].__cause__, MissingRequiredFieldError)
    assert not adapter.has("AddToCart")
