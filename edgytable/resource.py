# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

import logging

from abc import ABC, abstractmethod
from types import MappingProxyType
from typing import Any, Callable, ClassVar, Mapping, Self, Sequence

from edgy import Model
from sqlalchemy import func

from edgytable.config import TableSettings, get_settings
from edgytable.exceptions import ConfigurationError
from edgytable.fields import FieldCollection
from edgytable.filters import FilterCollection
from edgytable.params import RequestParameters
from edgytable.query import EdgyQueryBuilder, QueryBuilder
from edgytable.schemas import Page, TableResponse
from edgytable.table import GLOBAL_SEARCH_KEY, Table
from edgytable.utils import is_blank


logger = logging.getLogger("edgytable.resource")


type ParameterFilter = Callable[[QueryBuilder, Any], None]


def parameter_filter(key: str) -> Callable:
    """
    Decorator to register a resource method as the filter of a route parameter.

    Example:
        ```python
        class PostResource(Resource):
            @parameter_filter("site")
            def filter_site(self, query: QueryBuilder, value: Any) -> None:
                query.where("site_id", "=", value)
        ```
    """

    def decorator(method: Callable) -> Callable:
        method.__parameter_filter__ = key
        return method

    return decorator


class Resource(ABC):
    """
    Translates request parameters into one query over a model.

    Subclasses declare ``model``, ``fields()`` and optionally ``filters()``,
    ``default_sort`` (attribute name, or a method receiving the query),
    ``global_filter(query, value)`` and parameter filters.

    The query is composed in a fixed order: filter validation, default sort,
    requested sort, global filter, parameter filters, field search, declared
    filters. Only filter validation raises, other anomalies are ignored.
    """

    model: ClassVar[type[Model] | None] = None
    default_sort: str | None = "id"
    global_filter: ParameterFilter | None = None
    driver: str | None = None
    per_page: ClassVar[int | None] = None
    page_name: ClassVar[str | None] = None
    downloadable: ClassVar[bool] = False
    parameter_filters: ClassVar[dict[str, str]] = {}

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        registered = {}

        for base in reversed(cls.__mro__):
            for name, attr in vars(base).items():
                key = getattr(attr, "__parameter_filter__", None)

                if isinstance(key, str):
                    registered[key] = name

        cls.parameter_filters = registered

    def __init__(
        self,
        params: RequestParameters,
        query: QueryBuilder | None = None,
        parameters: Mapping[str, Any] | None = None,
        settings: TableSettings | None = None,
    ):
        self.settings = settings or get_settings()
        self.params = params
        self.parameters: dict[str, Any] = dict(parameters or {})
        self._parameter_hooks: dict[str, ParameterFilter] = {
            key: getattr(self, name) for key, name in self.parameter_filters.items()
        }
        self._query_built = False
        self.query = query if query is not None else self.new_query()

        if self.driver is None:
            self.driver = self.query.get_connection_driver_name()

    @classmethod
    def make(cls, params: RequestParameters, **kwargs) -> Self:
        return cls(params, **kwargs)

    @abstractmethod
    def fields(self) -> FieldCollection: ...

    def filters(self) -> FilterCollection:
        return FilterCollection()

    def new_query(self) -> QueryBuilder:
        if self.model is None:
            raise ConfigurationError(f"{type(self).__name__} does not declare a model")

        return EdgyQueryBuilder(self.model.query)

    def get_page_name(self) -> str:
        return self.page_name or self.settings.page_name

    def add_parameter(self, key: str | Mapping[str, Any], value: Any = None) -> Self:
        """Add route parameters, as a key and value or as a mapping."""
        if isinstance(key, Mapping):
            self.parameters.update(key)
        else:
            self.parameters[key] = value

        return self

    def register_parameter_filter(self, key: str, hook: ParameterFilter) -> Self:
        self._parameter_hooks[key] = hook

        return self

    def parameter_filter_map(self) -> Mapping[str, ParameterFilter]:
        return MappingProxyType(self._parameter_hooks)

    def build_query(self) -> QueryBuilder:
        if self._query_built:
            return self.query

        filters = self.filters()

        validated = self.validate_filters(filters)
        self.apply_default_sort()
        self.apply_sort()
        self.apply_global_filter()
        self.apply_parameter_filters()
        self.apply_search()
        self.apply_filters(filters, validated)
        self._query_built = True

        return self.query

    def validate_filters(self, filters: FilterCollection | None = None) -> dict[str, Any]:
        filters = filters if filters is not None else self.filters()
        inputs = {key: value for key, value in self.params.filter.items() if key in filters}

        return filters.validate_filter_input(inputs, key_by="key")

    def apply_default_sort(self) -> None:
        if self.params.sort is not None:
            return

        if callable(self.default_sort):
            self.default_sort(self.query)
        elif self.default_sort:
            self.params = self.params.with_sort(self.default_sort)

    def apply_sort(self) -> None:
        sort = self.params.sort

        if not sort:
            return

        descending = sort.startswith("-")
        attribute = sort[1:] if descending else sort
        field = self.fields().get(attribute)

        if field is None or not field.sortable:
            logger.debug(f"Ignoring sort on '{attribute}' for {type(self).__name__}")
            return

        field.sort(self.query, descending)

    def apply_global_filter(self) -> None:
        if self.global_filter is None or GLOBAL_SEARCH_KEY not in self.params.search:
            return

        self.global_filter(self.query, self.params.search[GLOBAL_SEARCH_KEY])

    def apply_parameter_filters(self) -> None:
        for key, value in self.parameters.items():
            hook = self._parameter_hooks.get(key)

            if hook is not None:
                hook(self.query, value)

    def apply_search(self) -> None:
        search = self.params.search

        if not search:
            return

        for field in self.fields().searchable():
            value = search.get(field.attribute)

            if not is_blank(value):
                self.where_like(field.attribute, value)

    def apply_filters(
        self,
        filters: FilterCollection | None = None,
        values: Mapping[str, Any] | None = None,
    ) -> None:
        filters = filters if filters is not None else self.filters()
        filters.apply(self.params, self.query, values)

    def uses_native_ilike(self) -> bool:
        return (self.driver or "").lower() in self.settings.native_ilike_drivers

    def where_like(self, field: str, value: str) -> None:
        """Add a case-insensitive substring match on ``field``."""
        pattern = f"%{value.lower()}%"

        if self.uses_native_ilike():
            self.query.where(field, "ilike", pattern)
        else:
            self.query.where(func.lower(self.query.column(field)), "like", pattern)

    async def paginate(
        self,
        per_page: int | None = None,
        columns: Sequence[str] = ("*",),
        page_name: str | None = None,
        page: int | None = None,
    ) -> Page:
        self.build_query()

        per_page = per_page or self.params.per_page or self.per_page or self.settings.per_page
        per_page = min(per_page, self.settings.max_per_page)
        result = await self.query.paginate(
            per_page,
            columns,
            page_name or self.get_page_name(),
            page or self.params.page,
        )

        return result.with_query_string(self.params.path, self.params.query_string)

    async def to_response(self, table: Table | None = None) -> TableResponse:
        records = await self.paginate()
        table = table or Table(self.params)
        table.add_fields(self.fields()).add_filters(self.filters()).records(records)

        if self.global_filter is None:
            table.disable_global_search()

        if self.downloadable:
            table.downloadable()

        return table.to_response()

    def get_query(self) -> QueryBuilder:
        return self.query


__all__ = [
    "ParameterFilter",
    "parameter_filter",
    "Resource",
]
