# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

from typing import Any, Sequence

from sqlalchemy import column

from edgytable import (
    Field,
    FieldCollection,
    FilterCollection,
    RequestParameters,
    Resource,
    SelectFilter,
    TextFilter,
    parameter_filter,
)
from edgytable.schemas import Page


class RecordingQueryBuilder:
    """In-memory query builder recording every call in order."""

    def __init__(self, driver: str = "sqlite", items: Sequence[Any] = ()):
        self.driver = driver
        self.items = list(items)
        self.wheres: list[tuple[Any, str, Any]] = []
        self.orders: list[tuple[str, str]] = []
        self.paginated_with: tuple | None = None

    def column(self, field):
        return column(field) if isinstance(field, str) else field

    def where(self, field, operator, value):
        self.wheres.append((field, operator, value))

    def where_in(self, field, values):
        self.wheres.append((field, "in", list(values)))

    def order_by(self, field, direction="asc"):
        self.orders.append((field, direction))

    async def paginate(self, per_page, columns=("*",), page_name="page", page=1):
        self.paginated_with = (per_page, list(columns), page_name, page)
        start = (page - 1) * per_page

        return Page(
            items=self.items[start:start + per_page],
            total=len(self.items),
            per_page=per_page,
            current_page=page,
            page_name=page_name,
        )

    def get_connection_driver_name(self):
        return self.driver


class UserResource(Resource):
    def fields(self):
        return FieldCollection([
            Field("id", "ID").enable_sorting(),
            Field("name").enable_sorting().enable_searching(),
            Field("email").enable_searching(),
            Field("created_at").hidden(),
        ])

    def filters(self):
        return FilterCollection([
            SelectFilter("color", options={"red": "Red", "blue": "Blue"}),
            TextFilter("title").starts_with().rules("string|max:5"),
        ])

    def global_filter(self, query, value):
        if value.isdigit():
            query.where("id", "=", int(value))

    @parameter_filter("site")
    def filter_site(self, query, value):
        if callable(value):
            value(query)
        else:
            query.where("site_id", "=", value)


def make_params(**query) -> RequestParameters:
    return RequestParameters.from_query(query, path="/users")
