# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Iterable, Iterator, Mapping

from edgytable.filters.base import Filter
from edgytable.filters.rules import validate
from edgytable.query.builder import QueryBuilder

if TYPE_CHECKING:
    from edgytable.params import RequestParameters


class FilterCollection:
    """Insertion-ordered set of filters keyed by filter key."""

    def __init__(self, filters: Iterable[Filter] = ()):
        self._filters: dict[str, Filter] = {}

        for filter_item in filters:
            self._filters[filter_item.key] = filter_item

    def __iter__(self) -> Iterator[Filter]:
        return iter(self._filters.values())

    def __len__(self) -> int:
        return len(self._filters)

    def __contains__(self, key: object) -> bool:
        return key in self._filters

    def __getitem__(self, key: str) -> Filter:
        return self._filters[key]

    def get(self, key: str) -> Filter | None:
        return self._filters.get(key)

    def with_filter(self, filter_item: Filter) -> "FilterCollection":
        """Copy of the collection with ``filter_item`` added, or replaced in place."""
        filters = dict(self._filters)
        filters[filter_item.key] = filter_item

        return FilterCollection(filters.values())

    def get_validation_rules(self, key_by: str = "field") -> dict[str, list[str]]:
        rules = {}

        for filter_item in self:
            filter_rules = filter_item.get_rules()

            if filter_rules:
                rules[getattr(filter_item, key_by)] = filter_rules

        return rules

    def validate_filter_input(self, inputs: Mapping[str, Any], key_by: str = "field") -> dict[str, Any]:
        return validate(inputs, self.get_validation_rules(key_by))

    def apply(
        self,
        params: "RequestParameters",
        query: QueryBuilder,
        values: Mapping[str, Any] | None = None,
    ) -> None:
        """Apply the filters present in the request, ``values`` overriding the raw request values."""
        values = {**params.filter, **(values or {})}

        for filter_item in self:
            if filter_item.key in values:
                filter_item.apply(params, query, values[filter_item.key])

    def key_by(self, attribute: str) -> Mapping[Any, Filter]:
        return MappingProxyType({getattr(filter_item, attribute): filter_item for filter_item in self})

    def bind(self, values: Mapping[str, Any]) -> "FilterCollection":
        """Copy of the collection with every accepted request value bound."""
        return FilterCollection(
            filter_item.bind(values[filter_item.key])
            if filter_item.key in values and filter_item.accepts(values[filter_item.key])
            else filter_item
            for filter_item in self
        )

    def describe(self, values: Mapping[str, Any] | None = None) -> dict[str, dict[str, Any]]:
        return {filter_item.key: filter_item.describe() for filter_item in self.bind(values or {})}


__all__ = [
    "FilterCollection",
]
