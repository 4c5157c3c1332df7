# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

from typing import Any, Callable, Literal, get_args

from sqlalchemy.sql import ColumnElement

from edgytable.exceptions import ConfigurationError


QueryOperator = Literal["=", "!=", "like", "ilike", "in"]

SortDirection = Literal["asc", "desc"]


QUERY_OPERATORS_SQL: dict[str, Callable[[ColumnElement, Any], ColumnElement]] = {
    "=": lambda column, value: column == value,
    "!=": lambda column, value: column != value,
    "like": lambda column, value: column.like(value),
    "ilike": lambda column, value: column.ilike(value),
    "in": lambda column, value: column.in_(list(value)),
}


def build_clause(column: ColumnElement, operator: QueryOperator, value: Any) -> ColumnElement:
    """
    Build the SQLAlchemy clause for ``column <operator> value``.

    Raises:
        ConfigurationError: If the operator is not supported
    """
    if operator not in get_args(QueryOperator):
        raise ConfigurationError(f"Operator '{operator}' is not supported")

    return QUERY_OPERATORS_SQL[operator](column, value)


__all__ = [
    "QueryOperator",
    "SortDirection",
    "QUERY_OPERATORS_SQL",
    "build_clause",
]
