# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

from edgytable.query.operators import (
    QueryOperator,
    SortDirection,
    QUERY_OPERATORS_SQL,
    build_clause,
)

from edgytable.query.builder import (
    FieldRef,
    QueryBuilder,
)

from edgytable.query.edgy import (
    EdgyQueryBuilder,
)


__all__ = [
    # Operators
    "QueryOperator",
    "SortDirection",
    "QUERY_OPERATORS_SQL",
    "build_clause",
    # Builder
    "FieldRef",
    "QueryBuilder",
    # Edgy
    "EdgyQueryBuilder",
]
