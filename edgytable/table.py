# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

from dataclasses import replace
from typing import Any, Iterable, Mapping

from edgytable.exceptions import ConfigurationError
from edgytable.fields import Field, FieldCollection
from edgytable.filters import Filter, FilterCollection
from edgytable.params import RequestParameters
from edgytable.schemas import ColumnState, Page, SearchState, TableDescriptor, TableResponse


GLOBAL_SEARCH_KEY = "global"


def build_descriptor(
    fields: FieldCollection,
    filters: FilterCollection,
    params: RequestParameters,
    page: int | None = None,
    *,
    global_search: bool = True,
    downloadable: bool = False,
) -> TableDescriptor:
    """
    Describe the table controls for the current request.

    Args:
        fields: Declared columns and search rows
        filters: Declared filters
        params: Current request parameters
        page: Current page number, defaults to the requested page
        global_search: Whether the synthetic ``global`` search row is shown
        downloadable: Whether the table can be downloaded

    Returns:
        The descriptor, collections keyed and in declaration order
    """
    return TableDescriptor(
        sort=params.sort,
        page=page if page is not None else params.page,
        columns=transform_columns(fields, params),
        search=transform_search(fields, params, global_search),
        filters=filters.describe(params.filter),
        downloadable=downloadable,
    )


def transform_columns(fields: FieldCollection, params: RequestParameters) -> dict[str, ColumnState]:
    enabled_keys = params.columns
    columns = {}

    for field in fields.columns():
        enabled = field.visible if enabled_keys is None else field.attribute in enabled_keys
        columns[field.attribute] = ColumnState(key=field.attribute, label=field.label, enabled=enabled)

    return columns


def transform_search(
    fields: FieldCollection, params: RequestParameters, global_search: bool = True
) -> dict[str, SearchState]:
    rows = {}

    if global_search:
        rows[GLOBAL_SEARCH_KEY] = SearchState(key=GLOBAL_SEARCH_KEY, label=GLOBAL_SEARCH_KEY)

    for field in fields.searchable():
        rows[field.attribute] = SearchState(key=field.attribute, label=field.label)

    for key, value in params.search.items():
        if key in rows:
            rows[key] = rows[key].model_copy(update={"value": value, "enabled": True})

    return rows


class Table:
    """
    Fluent builder of the table payload.

    Example:
        ```python
        table = (
            Table(params)
            .column_and_searchable("name", "Name")
            .column("email", "Email", enabled=False)
            .filter(SelectFilter("status", options={"active": "Active"}))
            .downloadable()
        )
        payload = table.apply_to({"users": users})
        ```
    """

    def __init__(self, params: RequestParameters):
        self.params = params
        self._fields = FieldCollection()
        self._filters = FilterCollection()
        self._global_search = True
        self._downloadable = False
        self._records: Page | None = None

    @property
    def fields(self) -> FieldCollection:
        return self._fields

    @property
    def filters(self) -> FilterCollection:
        return self._filters

    def disable_global_search(self) -> "Table":
        self._global_search = False

        return self

    def downloadable(self, enabled: bool = True) -> "Table":
        self._downloadable = enabled

        return self

    def column(self, key: str, label: str | None = None, enabled: bool = True) -> "Table":
        existing = self._fields.get(key)

        if existing:
            field = replace(existing, label=label or existing.label, visible=enabled, listed=True)
        else:
            field = Field(key, label, visible=enabled)

        self._fields = self._fields.with_field(field)

        return self

    def add_columns(self, columns: Mapping[str, str | Mapping[str, Any]]) -> "Table":
        for key, value in columns.items():
            if isinstance(value, Mapping):
                self.column(key, value.get("label", value.get("value")), value.get("enabled", True))
            else:
                self.column(key, value)

        return self

    def add_fields(self, fields: Iterable[Field]) -> "Table":
        for field in fields:
            self._fields = self._fields.with_field(field)

        return self

    def searchable(self, key: str | Mapping[str, str], label: str | None = None) -> "Table":
        if isinstance(key, Mapping):
            for search_key, search_label in key.items():
                self.searchable(search_key, search_label)

            return self

        if key == GLOBAL_SEARCH_KEY:
            raise ConfigurationError(f"'{GLOBAL_SEARCH_KEY}' is reserved for the global search")

        existing = self._fields.get(key)
        field = existing.enable_searching() if existing else Field(key, label, searchable=True, listed=False)
        self._fields = self._fields.with_field(field)

        return self

    def column_and_searchable(self, key: str, label: str | None = None, enabled: bool = True) -> "Table":
        return self.column(key, label, enabled).searchable(key, label)

    def filter(self, filter_item: Filter) -> "Table":
        self._filters = self._filters.with_filter(filter_item)

        return self

    def add_filters(self, filters: Iterable[Filter]) -> "Table":
        for filter_item in filters:
            self.filter(filter_item)

        return self

    def records(self, page: Page) -> "Table":
        self._records = page

        return self

    def descriptor(self) -> TableDescriptor:
        return build_descriptor(
            self._fields,
            self._filters,
            self.params,
            page=self._records.current_page if self._records else None,
            global_search=self._global_search,
            downloadable=self._downloadable,
        )

    def to_response(self) -> TableResponse:
        if self._records is None:
            raise ConfigurationError("Table records are not set")

        return TableResponse(records=self._records, table=self.descriptor())

    def apply_to(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        """Add the descriptor to a response payload under ``queryBuilderProps``."""
        return {**payload, "queryBuilderProps": self.descriptor().model_dump()}


__all__ = [
    "GLOBAL_SEARCH_KEY",
    "build_descriptor",
    "transform_columns",
    "transform_search",
    "Table",
]
