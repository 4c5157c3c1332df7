# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

import pytest

from pydantic import ValidationError
from starlette.requests import Request

from edgytable import RequestParameters
from edgytable.params import flatten_query, parse_nested_query, parse_query_key


@pytest.mark.parametrize(
    "key, expected",
    [
        ("sort", ["sort"]),
        ("search[name]", ["search", "name"]),
        ("filter[colors][]", ["filter", "colors", ""]),
        ("columns[]", ["columns", ""]),
        ("[odd]", ["[odd]"]),
    ],
)
def test_parse_query_key(key, expected):
    assert parse_query_key(key) == expected


def test_parse_nested_query():
    parsed = parse_nested_query([
        ("sort", "-name"),
        ("search[name]", "foo"),
        ("filter[colors][]", "red"),
        ("filter[colors][]", "blue"),
        ("columns[1]", "email"),
        ("columns[0]", "name"),
    ])

    assert parsed == {
        "sort": "-name",
        "search": {"name": "foo"},
        "filter": {"colors": ["red", "blue"]},
        "columns": ["name", "email"],
    }


def test_flatten_query():
    assert flatten_query({"sort": "name", "filter": {"colors": ["red", "blue"]}, "page": None}) == [
        ("sort", "name"),
        ("filter[colors][]", "red"),
        ("filter[colors][]", "blue"),
    ]


def test_from_query_items():
    params = RequestParameters.from_query([
        ("sort", "-name"),
        ("search[global]", "ada"),
        ("filter[colors][]", "red"),
        ("columns[]", "name"),
        ("columns[]", "email"),
        ("page", "3"),
        ("perPage", "50"),
    ])

    assert params.sort == "-name"
    assert params.search == {"global": "ada"}
    assert params.global_search == "ada"
    assert params.filter == {"colors": ["red"]}
    assert params.columns == ("name", "email")
    assert params.page == 3
    assert params.per_page == 50


def test_defaults():
    params = RequestParameters.from_query([])

    assert params.sort is None
    assert params.search == {}
    assert params.filter == {}
    assert params.columns is None
    assert params.page == 1
    assert params.per_page is None


@pytest.mark.parametrize("page", ["0", "-2", "abc", ""])
def test_invalid_page_falls_back_to_first(page):
    assert RequestParameters.from_query([("page", page)]).page == 1


def test_custom_page_name():
    params = RequestParameters.from_query([("users_page", "4"), ("page", "2")], page_name="users_page")

    assert params.page == 4


def test_columns_from_comma_list():
    assert RequestParameters.from_query({"columns": "name, email,"}).columns == ("name", "email")


def test_per_page_snake_case():
    assert RequestParameters.from_query({"per_page": "25"}).per_page == 25


def test_query_string_from_mapping():
    params = RequestParameters.from_query({"sort": "name", "search": {"name": "ada"}})

    assert params.query_string == "sort=name&search%5Bname%5D=ada"
    assert params.query("sort") == "name"
    assert params.query("missing", "x") == "x"
    assert params.has("search")


def test_parameters_are_read_only():
    params = RequestParameters.from_query({"sort": "name"})

    with pytest.raises(ValidationError):
        params.sort = "email"

    changed = params.with_sort("-email")

    assert changed.sort == "-email"
    assert params.sort == "name"


def test_from_request():
    request = Request({
        "type": "http",
        "method": "GET",
        "path": "/users",
        "query_string": b"sort=-name&search%5Bname%5D=foo&filter%5Bcolors%5D%5B%5D=red",
        "headers": [],
    })

    params = RequestParameters.from_request(request)

    assert params.path == "/users"
    assert params.sort == "-name"
    assert params.search == {"name": "foo"}
    assert params.filter == {"colors": ["red"]}
    assert params.query_string == "sort=-name&search%5Bname%5D=foo&filter%5Bcolors%5D%5B%5D=red"
