"""Tests for specfields.builder."""

from __future__ import annotations

import copy
import json
from typing import Any

import pytest

from specfields.builder import FieldsBuilder
from specfields.exceptions import ConfigError
from specfields.generator.collectors import OperationsCollector, ResourceCollector
from specfields.generator.parsers import DefaultResourceParser
from specfields.models import BuilderConfig, Override


class TestFieldsBuilder:
    def test_result_header(self, petstore: dict[str, Any]) -> None:
        result = FieldsBuilder(petstore).build()
        assert result.title == "Petstore API"
        assert result.version == "1.2.0"
        assert len(result.operations) == 6
        assert [r.value for r in result.resources] == ["pets", "store", "media", "default"]

    def test_missing_info(self, make_document) -> None:
        document = make_document(paths={})
        del document["info"]
        result = FieldsBuilder(document).build()
        assert result.title == "Untitled API"
        assert result.version == "0.0.0"
        assert result.operations == []

    def test_config_skip_deprecated(self, petstore: dict[str, Any]) -> None:
        result = FieldsBuilder(petstore, BuilderConfig(skip_deprecated=True)).build()
        assert result.find_operation("delete", "/pets/{petId}") is None
        assert len(result.operations) == 5

    def test_config_default_tag(self, petstore: dict[str, Any]) -> None:
        result = FieldsBuilder(petstore, BuilderConfig(default_tag="misc")).build()
        assert result.find_operation("post", "/store/inventory").resources == ["misc"]
        assert result.resources[-1].value == "misc"

    def test_custom_resource_parser(self, petstore: dict[str, Any]) -> None:
        class Upper(DefaultResourceParser):
            def name(self, tag):
                return tag["name"].upper()

        result = FieldsBuilder(petstore, resource_parser=Upper()).build()
        assert result.resources[0].name == "PETS"

    def test_document_untouched(self, petstore: dict[str, Any]) -> None:
        before = copy.deepcopy(petstore)
        FieldsBuilder(petstore).build()
        assert petstore == before

    def test_build_twice_is_stable(self, petstore: dict[str, Any]) -> None:
        builder = FieldsBuilder(petstore)
        assert builder.build().to_dict() == builder.build().to_dict()


class TestBuildResult:
    def test_find_operation_is_case_insensitive_on_method(
        self, petstore: dict[str, Any]
    ) -> None:
        result = FieldsBuilder(petstore).build()
        operation = result.find_operation("GET", "/pets/{petId}")
        assert operation is not None
        assert operation.name == "Get Pet"
        assert result.find_operation("patch", "/pets") is None

    def test_to_dict_is_json_ready(self, petstore: dict[str, Any]) -> None:
        data = FieldsBuilder(petstore).build().to_dict()
        assert json.loads(json.dumps(data)) == data
        upload = next(op for op in data["operations"] if op["operationId"] == "uploadPhoto")
        assert upload["method"] == "put"
        assert upload["resources"] == ["media"]
        assert [field["name"] for field in upload["fields"]] == ["petId", "binaryPropertyName"]
        assert upload["fields"][0] == {
            "displayName": "Pet Id",
            "name": "petId",
            "type": "number",
            "required": True,
        }

    def test_optional_keys_omitted(self, petstore: dict[str, Any]) -> None:
        data = FieldsBuilder(petstore).build().to_dict()
        get_pet = next(op for op in data["operations"] if op["operationId"] == "getPet")
        assert "description" not in get_pet
        assert get_pet["action"] == "Get Pet"


class TestOverrides:
    @staticmethod
    def _build(petstore: dict[str, Any], *overrides: Override):
        return FieldsBuilder(petstore, BuilderConfig(overrides=list(overrides))).build()

    @staticmethod
    def _field(operation, name: str):
        return next(field for field in operation.fields if field.name == name)

    def test_replace_applies_to_every_operation(self, petstore: dict[str, Any]) -> None:
        result = self._build(petstore, Override(find={"name": "limit"}, replace={"default": 50}))
        for method in ("get", "post"):
            operation = result.find_operation(method, "/pets")
            assert self._field(operation, "limit").default == 50

    def test_nested_find_matches_partially(self, petstore: dict[str, Any]) -> None:
        result = self._build(
            petstore,
            Override(
                find={"routing": {"request": {"headers": {"X-Request-Id": "={{ $value }}"}}}},
                replace={"description": "Generated when empty"},
            ),
        )
        field = self._field(result.find_operation("get", "/pets"), "X-Request-Id")
        assert field.description == "Generated when empty"
        assert field.routing.request.headers == {"X-Request-Id": "={{ $value }}"}

    def test_overrides_apply_in_order(self, petstore: dict[str, Any]) -> None:
        result = self._build(
            petstore,
            Override(find={"name": "limit"}, replace={"displayName": "Page Size"}),
            Override(find={"displayName": "Page Size"}, replace={"default": 10}),
        )
        field = self._field(result.find_operation("get", "/pets"), "limit")
        assert field.display_name == "Page Size"
        assert field.default == 10

    def test_replace_can_change_type_and_options(self, petstore: dict[str, Any]) -> None:
        result = self._build(
            petstore,
            Override(
                find={"name": "limit"},
                replace={
                    "type": "options",
                    "options": [{"name": "Ten", "value": 10}, {"name": "None", "value": None}],
                },
            ),
        )
        data = self._field(result.find_operation("get", "/pets"), "limit").to_dict()
        assert data["type"] == "options"
        assert data["options"] == [{"name": "Ten", "value": 10}, {"name": "None", "value": None}]

    def test_unmatched_fields_are_unchanged(self, petstore: dict[str, Any]) -> None:
        plain = FieldsBuilder(petstore).build().to_dict()
        result = self._build(petstore, Override(find={"name": "nope"}, replace={"default": 1}))
        assert result.to_dict() == plain

    def test_invalid_replacement(self, petstore: dict[str, Any]) -> None:
        with pytest.raises(ConfigError, match="invalid field 'limit'"):
            self._build(petstore, Override(find={"name": "limit"}, replace={"type": "bogus"}))


class TestCollectorClasses:
    def test_custom_operations_collector(self, petstore: dict[str, Any]) -> None:
        class GetOnly(OperationsCollector):
            def visit_operation(self, operation, context):
                if context.method.value == "get":
                    super().visit_operation(operation, context)

        result = FieldsBuilder(petstore, operations_collector=GetOnly).build()
        assert {operation.method.value for operation in result.operations} == {"get"}
        assert len(result.operations) == 2

    def test_custom_resource_collector(self, petstore: dict[str, Any]) -> None:
        class DeclaredOnly(ResourceCollector):
            def finish(self):
                pass

        result = FieldsBuilder(petstore, resource_collector=DeclaredOnly).build()
        assert [r.value for r in result.resources] == ["pets", "store"]

    def test_fresh_collectors_per_build(self, petstore: dict[str, Any]) -> None:
        created = []

        class Recording(OperationsCollector):
            def __init__(self, *args, **kwargs):
                super().__init__(*args, **kwargs)
                created.append(self)

        builder = FieldsBuilder(petstore, operations_collector=Recording)
        first = builder.build()
        second = builder.build()
        assert len(created) == 2
        assert len(first.operations) == len(second.operations) == 6
