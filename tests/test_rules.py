# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

import pytest

from edgytable import ConfigurationError, FilterValidationError
from edgytable.filters.rules import parse_rules, validate


def test_parse_rules_splits_pipes():
    assert parse_rules(["string|max:255", "in:red, blue"]) == [
        ("string", []),
        ("max", ["255"]),
        ("in", ["red", "blue"]),
    ]


def test_unsupported_rule():
    with pytest.raises(ConfigurationError):
        parse_rules(["regex:/^a/"])


def test_bound_rules_expect_numbers():
    with pytest.raises(ConfigurationError):
        validate({"name": "bob"}, {"name": ["max:five"]})

    with pytest.raises(ConfigurationError):
        validate({"name": "bob"}, {"name": ["between:1"]})


@pytest.mark.parametrize(
    "rules, value",
    [
        (["max:5"], "bob"),
        (["string|min:2"], "bo"),
        (["string|between:2,4"], "four"),
        (["numeric|max:5"], "5"),
        (["integer|min:1"], "3"),
        (["in:red,blue"], "red"),
        (["array|in:red,blue"], ["red", "blue"]),
        (["boolean"], "true"),
    ],
)
def test_valid_values(rules, value):
    assert list(validate({"key": value}, {"key": rules})) == ["key"]


@pytest.mark.parametrize(
    "rules, value",
    [
        (["max:5"], "joebob"),
        (["string|min:2"], "b"),
        (["string|between:2,4"], "fives"),
        (["numeric|max:5"], "6"),
        (["numeric"], "abc"),
        (["integer"], "1.5"),
        (["in:red,blue"], "green"),
        (["array|in:red,blue"], ["red", "green"]),
        (["array"], "red"),
    ],
)
def test_invalid_values(rules, value):
    with pytest.raises(FilterValidationError) as exc_info:
        validate({"key": value}, {"key": rules})

    assert list(exc_info.value.errors) == ["key"]
    assert exc_info.value.errors["key"]


def test_values_are_coerced():
    assert validate({"price": "4.5", "age": "7"}, {"price": ["numeric"], "age": ["integer"]}) == {
        "price": 4.5,
        "age": 7,
    }


def test_required_rejects_missing_and_blank():
    with pytest.raises(FilterValidationError) as exc_info:
        validate({"name": "  "}, {"name": ["required|string"], "email": ["required"]})

    assert set(exc_info.value.errors) == {"name", "email"}


def test_optional_values_may_be_missing_or_blank():
    assert validate({"name": ""}, {"name": ["string|max:3"], "email": ["string"]}) == {"name": None}


def test_keys_without_rules_are_ignored():
    assert validate({"name": "joebob"}, {}) == {}
    assert validate({"name": "joebob", "other": "x"}, {"name": ["string"]}) == {"name": "joebob"}


def test_error_details():
    with pytest.raises(FilterValidationError) as exc_info:
        validate({"title": "toolong"}, {"title": ["max:5"]})

    details = exc_info.value.to_error_details()

    assert [detail["loc"] for detail in details] == [("query", "filter", "title")]
    assert details[0]["input"] == "toolong"


@pytest.mark.parametrize("value", ["", "  ", None, []])
def test_bare_required_rejects_blank(value):
    with pytest.raises(FilterValidationError) as exc_info:
        validate({"name": value}, {"name": ["required"]})

    assert list(exc_info.value.errors) == ["name"]


def test_bare_required_nullable_accepts_blank():
    assert validate({"name": ""}, {"name": ["required|nullable"]}) == {"name": None}


def test_untyped_size_rules_count_list_items():
    assert validate({"colors": ["red", "blue"]}, {"colors": ["max:2"]}) == {"colors": ["red", "blue"]}
    assert validate({"name": "bo"}, {"name": ["between:1,2"]}) == {"name": "bo"}

    with pytest.raises(FilterValidationError):
        validate({"colors": ["red", "blue", "green"]}, {"colors": ["max:2"]})

    with pytest.raises(FilterValidationError):
        validate({"colors": ["red"]}, {"colors": ["min:2|in:red,blue"]})
