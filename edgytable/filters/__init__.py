# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

from edgytable.filters.base import (
    Filter,
)

from edgytable.filters.text import (
    MatchMode,
    LIKE_PATTERNS,
    TextFilter,
)

from edgytable.filters.select import (
    SelectFilter,
)

from edgytable.filters.collection import (
    FilterCollection,
)

from edgytable.filters.rules import (
    RULE_TYPES,
    SUPPORTED_RULES,
    parse_rules,
    build_rule_field,
    validate,
)


__all__ = [
    # Base
    "Filter",
    # Text
    "MatchMode",
    "LIKE_PATTERNS",
    "TextFilter",
    # Select
    "SelectFilter",
    # Collection
    "FilterCollection",
    # Rules
    "RULE_TYPES",
    "SUPPORTED_RULES",
    "parse_rules",
    "build_rule_field",
    "validate",
]
