"""Tests for specfields.parser.examples."""

from __future__ import annotations

from specfields.parser.examples import SchemaExample


def _extract(schema, components=None):
    document = {"components": {"schemas": components or {}}}
    return SchemaExample(document).extract_example(schema)


class TestExplicitValues:
    def test_example_wins(self) -> None:
        assert _extract({"type": "string", "example": "a", "default": "b"}) == "a"

    def test_falsy_example_is_kept(self) -> None:
        assert _extract({"type": "integer", "example": 0}) == 0
        assert _extract({"type": "boolean", "example": False}) is False

    def test_examples_list(self) -> None:
        assert _extract({"type": "string", "examples": ["first", "second"]}) == "first"

    def test_default(self) -> None:
        assert _extract({"type": "integer", "default": 20}) == 20

    def test_nothing(self) -> None:
        assert _extract({"type": "string"}) is None

    def test_non_dict_schema(self) -> None:
        assert _extract(None) is None
        assert _extract(True) is None


class TestComposedValues:
    def test_object_from_property_examples(self) -> None:
        schema = {
            "type": "object",
            "properties": {
                "name": {"type": "string", "example": "Rex"},
                "age": {"type": "integer"},
            },
        }
        assert _extract(schema) == {"name": "Rex"}

    def test_object_without_any_examples(self) -> None:
        schema = {"type": "object", "properties": {"age": {"type": "integer"}}}
        assert _extract(schema) is None

    def test_array_from_items(self) -> None:
        schema = {"type": "array", "items": {"type": "string", "example": "x"}}
        assert _extract(schema) == ["x"]

    def test_array_without_item_example(self) -> None:
        assert _extract({"type": "array", "items": {"type": "string"}}) is None

    def test_resolves_refs(self) -> None:
        components = {"Name": {"type": "string", "example": "Rex"}}
        schema = {"type": "object", "properties": {"name": {"$ref": "#/components/schemas/Name"}}}
        assert _extract(schema, components) == {"name": "Rex"}

    def test_self_reference_is_cut_off(self) -> None:
        components = {
            "Node": {
                "type": "object",
                "properties": {
                    "label": {"type": "string", "example": "root"},
                    "child": {"$ref": "#/components/schemas/Node"},
                },
            }
        }
        assert _extract({"$ref": "#/components/schemas/Node"}, components) == {"label": "root"}
