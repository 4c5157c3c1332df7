# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

from dataclasses import dataclass, replace
from typing import Callable

from edgytable.exceptions import ConfigurationError
from edgytable.query.builder import QueryBuilder
from edgytable.utils import headline


type SortStrategy = Callable[[QueryBuilder, bool, str], None]


def order_by_attribute(query: QueryBuilder, descending: bool, field_name: str) -> None:
    query.order_by(field_name, "desc" if descending else "asc")


@dataclass(frozen=True)
class Field:
    """
    A column exposed for display, sorting and/or searching.

    Attributes:
        attribute: Model attribute (and request key) of the column
        label: Display label, defaults to the headline of the attribute
        sortable: Whether ``sort=<attribute>`` is honored
        searchable: Whether ``search[<attribute>]`` is honored
        sort_strategy: Called with ``(query, descending, attribute)``
        visible: Default enabled flag of the column
        listed: False for search-only fields, which get no column
    """

    attribute: str
    label: str | None = None
    sortable: bool = False
    searchable: bool = False
    sort_strategy: SortStrategy = order_by_attribute
    visible: bool = True
    listed: bool = True

    def __post_init__(self):
        if not self.attribute:
            raise ConfigurationError("Field attribute cannot be empty")

        if self.label is None:
            object.__setattr__(self, "label", headline(self.attribute))

    def enable_sorting(self, strategy: SortStrategy | None = None) -> "Field":
        return replace(
            self,
            sortable=True,
            sort_strategy=strategy or self.sort_strategy,
        )

    def enable_searching(self) -> "Field":
        return replace(self, searchable=True)

    def hidden(self) -> "Field":
        return replace(self, visible=False)

    def sort(self, query: QueryBuilder, descending: bool) -> None:
        self.sort_strategy(query, descending, self.attribute)


__all__ = [
    "SortStrategy",
    "order_by_attribute",
    "Field",
]
