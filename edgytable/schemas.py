# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

from typing import Any

from pydantic import BaseModel, ConfigDict, computed_field
from starlette.datastructures import URL


class Page[M = Any](BaseModel):
    """
    Generic schema for one page of records.

    Attributes:
        items (list[M]): The records of the current page.
        total (int): Total number of records across all pages.
        per_page (int): Number of records per page.
        current_page (int): The 1-based page number.
        page_name (str): Name of the query parameter carrying the page number.
        path (str): Path used to build page links.
        query_string (str): Query string of the current request, kept in page links.
    """

    items: list[M]
    total: int
    per_page: int
    current_page: int = 1
    page_name: str = "page"
    path: str = ""
    query_string: str = ""

    @computed_field
    @property
    def last_page(self) -> int:
        return max((self.total + self.per_page - 1) // self.per_page, 1)

    @computed_field
    @property
    def first_item(self) -> int | None:
        if not self.items:
            return None

        return (self.current_page - 1) * self.per_page + 1

    @computed_field
    @property
    def last_item(self) -> int | None:
        if not self.items:
            return None

        return (self.current_page - 1) * self.per_page + len(self.items)

    @computed_field
    @property
    def next_page_url(self) -> str | None:
        if self.current_page >= self.last_page:
            return None

        return self.url(self.current_page + 1)

    @computed_field
    @property
    def prev_page_url(self) -> str | None:
        if self.current_page <= 1:
            return None

        return self.url(self.current_page - 1)

    def url(self, page: int) -> str:
        """Build the link to ``page``, keeping every other query parameter."""
        base = f"{self.path}?{self.query_string}" if self.query_string else self.path

        return str(URL(base).include_query_params(**{self.page_name: max(page, 1)}))

    def with_query_string(self, path: str, query_string: str) -> "Page[M]":
        return self.model_copy(update={"path": path, "query_string": query_string})


class ColumnState(BaseModel):
    key: str
    label: str
    enabled: bool = True


class SearchState(BaseModel):
    key: str
    label: str
    value: Any | None = None
    enabled: bool = False


class TableDescriptor(BaseModel):
    """
    UI state of a table: columns, search rows and filters for the current request.

    Collections are keyed mappings and stay mappings when empty.
    """

    model_config = ConfigDict(frozen=True)

    sort: str | None = None
    page: int = 1
    columns: dict[str, ColumnState] = {}
    search: dict[str, SearchState] = {}
    filters: dict[str, dict[str, Any]] = {}
    downloadable: bool = False
    download: int = 0


class TableResponse[M = Any](BaseModel):
    records: Page[M]
    table: TableDescriptor


__all__ = [
    "Page",
    "ColumnState",
    "SearchState",
    "TableDescriptor",
    "TableResponse",
]
