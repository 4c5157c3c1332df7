# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

import pytest

from edgytable import ConfigurationError, Field, FieldCollection
from edgytable.utils import headline

from tests.support import RecordingQueryBuilder


@pytest.mark.parametrize(
    "value, expected",
    [
        ("name", "Name"),
        ("first_name", "First Name"),
        ("createdAt", "Created At"),
        ("billing-address.city", "Billing Address City"),
    ],
)
def test_headline(value, expected):
    assert headline(value) == expected


def test_label_defaults_to_headline():
    assert Field("first_name").label == "First Name"
    assert Field("id", "ID").label == "ID"


def test_empty_attribute_is_rejected():
    with pytest.raises(ConfigurationError):
        Field("")


def test_builders_return_copies():
    field = Field("name")
    sortable = field.enable_sorting()
    searchable = sortable.enable_searching()

    assert not field.sortable and not field.searchable
    assert sortable.sortable and not sortable.searchable
    assert searchable.sortable and searchable.searchable
    assert field.hidden().visible is False
    assert field.visible is True


def test_default_sort_strategy_orders_by_attribute():
    query = RecordingQueryBuilder()

    Field("name").enable_sorting().sort(query, descending=False)
    Field("email").enable_sorting().sort(query, descending=True)

    assert query.orders == [("name", "asc"), ("email", "desc")]


def test_custom_sort_strategy():
    calls = []

    def by_last_name(query, descending, attribute):
        calls.append((descending, attribute))
        query.order_by("last_name", "desc" if descending else "asc")

    query = RecordingQueryBuilder()
    field = Field("name").enable_sorting(by_last_name)
    field.sort(query, descending=True)

    assert calls == [(True, "name")]
    assert query.orders == [("last_name", "desc")]


def test_collection_keeps_declaration_order():
    fields = FieldCollection([
        Field("id").enable_sorting(),
        Field("name").enable_searching(),
        Field("email").enable_sorting().enable_searching(),
    ])

    assert [field.attribute for field in fields] == ["id", "name", "email"]
    assert [field.attribute for field in fields.sortable()] == ["id", "email"]
    assert [field.attribute for field in fields.searchable()] == ["name", "email"]
    assert "name" in fields
    assert fields.get("missing") is None


def test_with_field_replaces_in_place():
    fields = FieldCollection([Field("id"), Field("name"), Field("email")])
    updated = fields.with_field(Field("name", "Full name"))

    assert [field.label for field in updated] == ["Id", "Full name", "Email"]
    assert fields["name"].label == "Name"


def test_key_by_is_read_only():
    fields = FieldCollection([Field("id"), Field("name")])
    by_label = fields.key_by("label")

    assert list(by_label) == ["Id", "Name"]

    with pytest.raises(TypeError):
        by_label["Other"] = Field("other")

    assert len(fields) == 2


def test_columns_skip_search_only_fields():
    fields = FieldCollection([Field("name"), Field("secret", searchable=True, listed=False)])

    assert [field.attribute for field in fields.columns()] == ["name"]
    assert [field.attribute for field in fields.searchable()] == ["secret"]
