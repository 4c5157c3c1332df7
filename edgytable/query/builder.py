# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

from typing import Any, Protocol, Sequence, runtime_checkable

from sqlalchemy.sql import ColumnElement

from edgytable.query.operators import QueryOperator, SortDirection
from edgytable.schemas import Page


type FieldRef = str | ColumnElement


@runtime_checkable
class QueryBuilder(Protocol):
    """
    The query operations a resource is allowed to issue.

    ``field`` is either a column name or a SQLAlchemy column expression
    (e.g. ``func.lower(column("name"))``).
    """

    def column(self, field: FieldRef) -> ColumnElement: ...

    def where(self, field: FieldRef, operator: QueryOperator, value: Any) -> None: ...

    def where_in(self, field: FieldRef, values: Sequence[Any]) -> None: ...

    def order_by(self, field: str, direction: SortDirection = "asc") -> None: ...

    async def paginate(
        self,
        per_page: int,
        columns: Sequence[str] = ("*",),
        page_name: str = "page",
        page: int = 1,
    ) -> Page: ...

    def get_connection_driver_name(self) -> str: ...


__all__ = [
    "FieldRef",
    "QueryBuilder",
]
