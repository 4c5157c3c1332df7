# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

from dataclasses import KW_ONLY, dataclass, replace
from typing import Any, ClassVar

from edgytable.filters.base import Filter
from edgytable.query.builder import QueryBuilder
from edgytable.utils import is_blank


@dataclass(frozen=True)
class SelectFilter(Filter):
    """
    Filter restricted to a set of options, single or multiple.

    Values outside the options disable the filter instead of failing the
    request. Without options any non-empty value is accepted.
    """

    type: ClassVar[str] = "select"

    _: KW_ONLY
    is_multiple: bool = False

    def multiple(self, enabled: bool = True) -> "SelectFilter":
        return replace(self, is_multiple=enabled)

    def accepts(self, value: Any) -> bool:
        if is_blank(value):
            return False

        if self.is_multiple:
            return all(self._is_option(item) for item in _as_list(value))

        if isinstance(value, (list, tuple, dict)):
            return False

        return self._is_option(value)

    def bind(self, value: Any) -> "SelectFilter":
        return replace(self, value=_as_list(value) if self.is_multiple else value)

    def where_filter(self, query: QueryBuilder, value: Any) -> None:
        if self.is_multiple:
            query.where_in(self.field, _as_list(value))
        else:
            query.where(self.field, "=", value)

    def describe(self) -> dict[str, Any]:
        return {
            **super().describe(),
            "multiple": self.is_multiple,
        }

    def _is_option(self, value: Any) -> bool:
        if not self.options:
            return True

        return any(str(option) == str(value) for option in self.options)


def _as_list(value: Any) -> list[Any]:
    if isinstance(value, (list, tuple)):
        return list(value)

    if isinstance(value, dict):
        return list(value.values())

    return [value]


__all__ = [
    "SelectFilter",
]
