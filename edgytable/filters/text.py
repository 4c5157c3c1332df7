# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

from dataclasses import KW_ONLY, dataclass, replace
from enum import Enum
from typing import Any, ClassVar

from edgytable.exceptions import ConfigurationError
from edgytable.filters.base import Filter
from edgytable.query.builder import QueryBuilder


class MatchMode(str, Enum):
    EXACT = "exact"
    STARTS_WITH = "starts_with"
    ENDS_WITH = "ends_with"
    FULL_SEARCH = "full_search"


LIKE_PATTERNS = {
    MatchMode.STARTS_WITH: "{}%",
    MatchMode.ENDS_WITH: "%{}",
    MatchMode.FULL_SEARCH: "%{}%",
}


@dataclass(frozen=True)
class TextFilter(Filter):
    """Free-text filter matching the field with one match mode."""

    type: ClassVar[str] = "text"

    _: KW_ONLY
    mode: MatchMode = MatchMode.FULL_SEARCH

    def __post_init__(self):
        super().__post_init__()

        try:
            object.__setattr__(self, "mode", MatchMode(self.mode))
        except ValueError:
            raise ConfigurationError(
                f"Invalid match mode {self.mode!r} for filter '{self.key}'"
            )

    def exact(self) -> "TextFilter":
        return replace(self, mode=MatchMode.EXACT)

    def starts_with(self) -> "TextFilter":
        return replace(self, mode=MatchMode.STARTS_WITH)

    def ends_with(self) -> "TextFilter":
        return replace(self, mode=MatchMode.ENDS_WITH)

    def full_search(self) -> "TextFilter":
        return replace(self, mode=MatchMode.FULL_SEARCH)

    @property
    def is_exact(self) -> bool:
        return self.mode == MatchMode.EXACT

    @property
    def is_starts_with(self) -> bool:
        return self.mode == MatchMode.STARTS_WITH

    @property
    def is_ends_with(self) -> bool:
        return self.mode == MatchMode.ENDS_WITH

    @property
    def is_full_search(self) -> bool:
        return self.mode == MatchMode.FULL_SEARCH

    def accepts(self, value: Any) -> bool:
        return super().accepts(value) and not isinstance(value, (list, tuple, dict))

    def where_filter(self, query: QueryBuilder, value: Any) -> None:
        if self.is_exact:
            query.where(self.field, "=", value)
        else:
            query.where(self.field, "like", LIKE_PATTERNS[self.mode].format(value))

    def describe(self) -> dict[str, Any]:
        return {
            **super().describe(),
            "exact": self.is_exact,
            "starts_with": self.is_starts_with,
            "ends_with": self.is_ends_with,
            "full_search": self.is_full_search,
        }


__all__ = [
    "MatchMode",
    "LIKE_PATTERNS",
    "TextFilter",
]
