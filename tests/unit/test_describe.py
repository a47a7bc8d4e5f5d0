from __future__ import annotations

from enum import Enum

from typedforms.describe import describe_form, describe_type
from typedforms.fields import field
from typedforms.forms import Form
from typedforms.requirements import UNIQUE_ITEMS
from typedforms.scopes import AccessScope
from typedforms.types import enum_of, form_of, integer, list_of, map_of, nullable, text

INTERNAL = AccessScope("internal")


class Level(Enum):
    LOW = "low"
    HIGH = "high"


class Node(Form):
    @classmethod
    def declare_fields(cls):
        return (
            field("name", text(), doc_name="Name", description="Node name", examples=("root",)),
            field("children", nullable(list_of(form_of(Node)))),
            field("level", enum_of(Level), default=Level.LOW),
            field("secret", nullable(text()), access_scope=INTERNAL, sensitive=True),
        )


def test_describe_form_lists_fields_in_order() -> None:
    description = describe_form(Node)

    assert description["form"] == "Node"
    assert [entry["id"] for entry in description["fields"]] == ["name", "children", "level", "secret"]


def test_field_description_contains_documentation() -> None:
    name = describe_form(Node)["fields"][0]

    assert name["name"] == "Name"
    assert name["description"] == "Node name"
    assert name["examples"] == ["root"]
    assert name["required"] is True
    assert name["default"] is None
    assert name["access_scope"] == "none"
    assert name["type"] == {"type_id": 4, "name": "Text", "nullable": False}


def test_recursive_forms_are_referenced() -> None:
    children = describe_form(Node)["fields"][1]

    assert children["required"] is False
    assert children["type"]["type_id"] == 17
    assert children["type"]["nullable"] is True
    assert children["type"]["element"]["form"] == {"form": "Node", "recursive": True}


def test_enum_values_and_defaults() -> None:
    level = describe_form(Node)["fields"][2]

    assert level["type"]["values"] == ["LOW", "HIGH"]
    assert level["default"] is Level.LOW


def test_hidden_fields_are_not_described() -> None:
    ids = [entry["id"] for entry in describe_form(Node, access_scope=AccessScope.NONE)["fields"]]

    assert "secret" not in ids


def test_describe_type_includes_requirements_and_nested_types() -> None:
    description = describe_type(map_of(text(), list_of(integer(), requirement=UNIQUE_ITEMS)))

    assert description["key"]["name"] == "Text"
    assert description["value"]["requirement"] == "unique items"
    assert description["value"]["element"]["type_id"] == 2
