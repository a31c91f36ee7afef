"""Tests for specfields.generator.naming."""

from __future__ import annotations

import pytest

from specfields.generator.naming import parameter_field_name, property_field_name, start_case


class TestStartCase:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("petId", "Pet Id"),
            ("listPets", "List Pets"),
            ("a_b", "A B"),
            ("sold_out", "Sold Out"),
            ("owner.email", "Owner Email"),
            ("X-Request-ID", "X Request ID"),
            ("HTTPServer", "HTTP Server"),
            ("page2size", "Page 2 Size"),
            ("  leading and trailing  ", "Leading And Trailing"),
            ("get /pets/{petId}", "Get Pets Pet Id"),
            ("already Title", "Already Title"),
        ],
    )
    def test_words(self, value: str, expected: str) -> None:
        assert start_case(value) == expected

    def test_non_string_literals(self) -> None:
        assert start_case(42) == "42"
        assert start_case(True) == "True"

    def test_empty(self) -> None:
        assert start_case("") == ""
        assert start_case(None) == ""
        assert start_case("__") == ""


class TestFieldNames:
    def test_property_name_replaces_dots(self) -> None:
        assert property_field_name("a.b.c") == "a-b-c"
        assert property_field_name("plain") == "plain"

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("limit", "limit"),
            ("filter.status", "filter-status"),
            ("ids[]", "ids%5B%5D"),
            ("a b", "a%20b"),
            ("x_y~z", "x_y~z"),
            ("it's(ok)!*", "it's(ok)!*"),
            ("a/b", "a%2Fb"),
        ],
    )
    def test_parameter_name_is_uri_component_encoded(self, name: str, expected: str) -> None:
        assert parameter_field_name(name) == expected
