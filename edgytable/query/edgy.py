# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

import logging
from typing import Any, Sequence

from edgy import QuerySet
from sqlalchemy.sql import ColumnElement

from edgytable.exceptions import ConfigurationError
from edgytable.query.builder import FieldRef
from edgytable.query.operators import QueryOperator, SortDirection, build_clause
from edgytable.schemas import Page


logger = logging.getLogger("edgytable.query")


class EdgyQueryBuilder:
    """Query builder backed by an edgy QuerySet."""

    def __init__(self, queryset: QuerySet):
        self.queryset = queryset
        self._ordering: list[str] = []

    @property
    def model_class(self) -> Any:
        return self.queryset.model_class

    def column(self, field: FieldRef) -> ColumnElement:
        if not isinstance(field, str):
            return field

        columns = self.model_class.table.columns

        if field not in columns:
            raise ConfigurationError(
                f"Field '{field}' not found in model {self.model_class.__name__}"
            )

        return columns[field]

    def where(self, field: FieldRef, operator: QueryOperator, value: Any) -> None:
        self.queryset = self.queryset.filter(build_clause(self.column(field), operator, value))

    def where_in(self, field: FieldRef, values: Sequence[Any]) -> None:
        self.where(field, "in", values)

    def order_by(self, field: str, direction: SortDirection = "asc") -> None:
        self._ordering.append(f"-{field}" if direction == "desc" else field)
        self.queryset = self.queryset.order_by(*self._ordering)

    async def paginate(
        self,
        per_page: int,
        columns: Sequence[str] = ("*",),
        page_name: str = "page",
        page: int = 1,
    ) -> Page:
        query = self.queryset

        if columns and "*" not in columns:
            query = query.only(*columns)

        total = await query.count()
        items = await query.limit(per_page).offset((page - 1) * per_page).all()

        logger.debug(f"Paginated {self.model_class.__name__}: page {page}, {len(items)}/{total} items")

        return Page(
            items=items,
            total=total,
            per_page=per_page,
            current_page=page,
            page_name=page_name,
        )

    def get_connection_driver_name(self) -> str:
        return self.queryset.database.url.dialect


__all__ = [
    "EdgyQueryBuilder",
]
