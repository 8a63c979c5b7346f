"""Unit tests for the YAML/JSON schema loader."""

import json

import pytest

from datalayer.domains.schemas.exceptions import (
    DuplicateSchemaError,
    InvalidSchemaDefinitionError,
)
from datalayer.domains.schemas.loader import load_schema_file, load_schema_files
from datalayer.domains.schemas.registry import SchemaRegistry

PAGE_YAML = """\
schemas:
  - name: Page
    properties:
      pageHost: {type: text, required: true}
    childSchemas:
      - name: Product
        properties:
          productId: {type: integer, required: true}
          productCategory:
            type: enum
            required: true
            allowedValues: [book, mug, canvas]
"""


def test_load_yaml_list(tmp_path):
    path = tmp_path / "page.yml"
    path.write_text(PAGE_YAML)

    definitions = load_schema_file(path)

    assert [d.name for d in definitions] == ["Page"]
    assert [c.name for c in definitions[0].child_schemas] == ["Product"]


def test_load_json_single_definition(tmp_path):
    path = tmp_path / "checkout.json"
    path.write_text(
        json.dumps(
            {
                "name": "Checkout",
                "properties": {"currency": {"type": "text", "default": "EUR"}},
            }
        )
    )

    (definition,) = load_schema_file(path)

    assert definition.name == "Checkout"
    assert definition.properties["currency"].default == "EUR"


def test_load_schema_files_registers_in_order(tmp_path):
    page = tmp_path / "page.yaml"
    page.write_text(PAGE_YAML)
    checkout = tmp_path / "checkout.json"
    checkout.write_text(json.dumps({"schemas": [{"name": "Checkout"}, {"name": "Cart"}]}))
    registry = SchemaRegistry()

    entries = load_schema_files(registry, [page, str(checkout)])

    assert [e.name for e in entries] == ["Page", "Product", "Checkout", "Cart"]
    assert registry.ancestors("Product") == ["Page"]


def test_load_schema_files_duplicate_across_files(tmp_path):
    first = tmp_path / "a.yml"
    first.write_text("name: Page\n")
    second = tmp_path / "b.yml"
    second.write_text("name: Page\n")

    with pytest.raises(DuplicateSchemaError):
        load_schema_files(SchemaRegistry(), [first, second])


@pytest.mark.parametrize(
    "filename, content",
    [
        ("schemas.txt", "name: Page\n"),
        ("broken.yml", "name: [Page\n"),
        ("empty.yml", ""),
        ("empty_list.yml", "schemas: []\n"),
        ("bad_field.yml", "name: Page\nproperties:\n  x: {type: colour}\n"),
    ],
    ids=["unsupported suffix", "yaml syntax", "empty file", "empty list", "bad field"],
)
def test_load_schema_file_invalid(tmp_path, filename, content):
    path = tmp_path / filename
    path.write_text(content)

    with pytest.raises(InvalidSchemaDefinitionError) as exc_info:
        load_schema_file(path)

    assert exc_info.value.source == str(path)
    assert str(path) in exc_info.value.message


def test_load_schema_file_missing(tmp_path):
    with pytest.raises(InvalidSchemaDefinitionError):
        load_schema_file(tmp_path / "missing.yml")
