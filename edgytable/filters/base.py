# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

import logging

from abc import ABC, abstractmethod
from dataclasses import KW_ONLY, dataclass, replace
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, ClassVar, Mapping

from edgytable.exceptions import ConfigurationError
from edgytable.query.builder import QueryBuilder
from edgytable.utils import headline, is_blank

if TYPE_CHECKING:
    from edgytable.params import RequestParameters


logger = logging.getLogger("edgytable.filters")


@dataclass(frozen=True)
class Filter(ABC):
    """
    A named predicate generator bound to one field.

    Filters are immutable declarations: builder calls and request binding
    return modified copies.

    Attributes:
        field: Column the predicate applies to
        label: Display label, defaults to the headline of the field
        options: Allowed values mapped to their display labels
        key: Request key (``filter[<key>]``), defaults to the field
        validation_rules: Rule strings checked before the query is built
        value: Declared default, or the live request value once bound
    """

    type: ClassVar[str] = "filter"

    field: str
    label: str | None = None
    options: Mapping[Any, str] | None = None
    _: KW_ONLY
    key: str | None = None
    validation_rules: tuple[str, ...] = ()
    value: Any = None

    def __post_init__(self):
        if not self.field:
            raise ConfigurationError("Filter field cannot be empty")

        if self.label is None:
            object.__setattr__(self, "label", headline(self.field))

        if self.key is None:
            object.__setattr__(self, "key", self.field)

        if self.options is not None:
            object.__setattr__(self, "options", MappingProxyType(dict(self.options)))

        object.__setattr__(self, "validation_rules", tuple(self.validation_rules))

    def rules(self, *rules: str) -> "Filter":
        return replace(self, validation_rules=tuple(rules))

    def default(self, value: Any) -> "Filter":
        return replace(self, value=value)

    def bind(self, value: Any) -> "Filter":
        return replace(self, value=value)

    def get_rules(self, params: "RequestParameters | None" = None) -> list[str]:
        return list(self.validation_rules)

    def accepts(self, value: Any) -> bool:
        return not is_blank(value)

    def apply(self, params: "RequestParameters", query: QueryBuilder, value: Any) -> None:
        if is_blank(value):
            return

        if not self.accepts(value):
            logger.debug(f"Ignoring value {value!r} for filter '{self.key}'")
            return

        self.where_filter(query, value)

    @abstractmethod
    def where_filter(self, query: QueryBuilder, value: Any) -> None: ...

    def describe(self) -> dict[str, Any]:
        state: dict[str, Any] = {
            "key": self.key,
            "field": self.field,
            "label": self.label,
            "type": self.type,
            "value": list(self.value) if isinstance(self.value, (list, tuple)) else self.value,
            "rules": list(self.validation_rules),
        }

        if self.options is not None:
            state["options"] = dict(self.options)

        return state


__all__ = [
    "Filter",
]
