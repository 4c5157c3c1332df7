# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

import re

from typing import Any, Iterable, Mapping
from urllib.parse import urlencode

from pydantic import BaseModel, ConfigDict
from starlette.requests import Request


_KEY_SEGMENT = re.compile(r"\[([^\[\]]*)\]")


class RequestParameters(BaseModel):
    """
    Read-only view over the query keys a table resource understands.

    Attributes:
        sort: Sorted attribute, prefixed with ``-`` for descending order
        search: Per-field search values, ``global`` for the whole-table search
        filter: Filter values (scalar or list) keyed by filter key
        columns: Enabled column keys, None when the request does not restrict them
        page: 1-based page number
        per_page: Requested page size, None to use the resource default
        path: Request path, used for page links
        query_string: Raw query string, kept in page links
        raw: Every parsed query key
    """

    model_config = ConfigDict(frozen=True)

    sort: str | None = None
    search: dict[str, str] = {}
    filter: dict[str, Any] = {}
    columns: tuple[str, ...] | None = None
    page: int = 1
    per_page: int | None = None
    path: str = ""
    query_string: str = ""
    raw: dict[str, Any] = {}

    @classmethod
    def from_query(
        cls,
        items: Iterable[tuple[str, str]] | Mapping[str, Any] = (),
        path: str = "",
        query_string: str | None = None,
        page_name: str = "page",
    ) -> "RequestParameters":
        """
        Build the parameters from query items or an already nested mapping.

        Example:
            ```python
            RequestParameters.from_query([("sort", "-name"), ("filter[colors][]", "red")])
            RequestParameters.from_query({"sort": "-name", "filter": {"colors": ["red"]}})
            ```
        """
        if isinstance(items, Mapping):
            raw = dict(items)
            pairs = flatten_query(raw)
        else:
            pairs = list(items)
            raw = parse_nested_query(pairs)

        if query_string is None:
            query_string = urlencode(pairs)

        return cls(
            sort=_parse_sort(raw.get("sort")),
            search=_parse_search(raw.get("search")),
            filter=_parse_mapping(raw.get("filter")),
            columns=_parse_columns(raw.get("columns")),
            page=_parse_positive_int(raw.get(page_name)) or 1,
            per_page=_parse_positive_int(raw.get("perPage", raw.get("per_page"))),
            path=path,
            query_string=query_string,
            raw=raw,
        )

    @classmethod
    def from_request(cls, request: Request, page_name: str = "page") -> "RequestParameters":
        return cls.from_query(
            request.query_params.multi_items(),
            path=request.url.path,
            query_string=request.url.query,
            page_name=page_name,
        )

    def query(self, key: str, default: Any = None) -> Any:
        return self.raw.get(key, default)

    def has(self, key: str) -> bool:
        return key in self.raw

    def with_sort(self, sort: str | None) -> "RequestParameters":
        return self.model_copy(update={"sort": sort})

    @property
    def global_search(self) -> str | None:
        return self.search.get("global")


def parse_query_key(key: str) -> list[str]:
    """Split ``filter[colors][]`` into ``["filter", "colors", ""]``."""
    head, bracket, rest = key.partition("[")

    if not bracket or not head:
        return [key]

    segments = _KEY_SEGMENT.findall(bracket + rest)

    if not segments:
        return [key]

    return [head, *segments]


def parse_nested_query(items: Iterable[tuple[str, str]]) -> dict[str, Any]:
    """
    Parse query items with bracket keys into nested dicts and lists.

    Empty brackets append to a list, dicts whose keys are all digits become
    lists ordered by index.
    """
    result: dict[str, Any] = {}

    for key, value in items:
        segments = parse_query_key(key)
        node: dict | list = result

        for segment, following in zip(segments, segments[1:]):
            node = _child_node(node, segment, following)

        if isinstance(node, list):
            node.append(value)
        else:
            node[segments[-1]] = value

    return {key: _listify(value) for key, value in result.items()}


def flatten_query(data: Mapping[str, Any], prefix: str = "") -> list[tuple[str, str]]:
    """Inverse of ``parse_nested_query``: nested mapping to bracket query items."""
    pairs = []

    for key, value in data.items():
        name = f"{prefix}[{key}]" if prefix else str(key)

        if isinstance(value, Mapping):
            pairs.extend(flatten_query(value, name))
        elif isinstance(value, (list, tuple)):
            for item in value:
                pairs.append((f"{name}[]", str(item)))
        elif value is not None:
            pairs.append((name, str(value)))

    return pairs


def _child_node(node: dict | list, segment: str, following: str) -> dict | list:
    container: dict | list = [] if following == "" else {}

    if isinstance(node, list):
        node.append(container)
        return container

    child = node.get(segment)

    if isinstance(child, list) and following != "":
        child = {str(index): item for index, item in enumerate(child)}
        node[segment] = child
    elif not isinstance(child, (dict, list)):
        child = container
        node[segment] = child

    return child


def _listify(value: Any) -> Any:
    if isinstance(value, list):
        return [_listify(item) for item in value]

    if isinstance(value, dict):
        items = {key: _listify(item) for key, item in value.items()}

        if items and all(key.isdigit() for key in items):
            return [items[key] for key in sorted(items, key=int)]

        return items

    return value


def _parse_sort(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()

    return None


def _parse_search(value: Any) -> dict[str, str]:
    if not isinstance(value, Mapping):
        return {}

    return {
        str(key): str(item)
        for key, item in value.items()
        if item is not None and not isinstance(item, (Mapping, list, tuple))
    }


def _parse_mapping(value: Any) -> dict[str, Any]:
    if not isinstance(value, Mapping):
        return {}

    return {str(key): item for key, item in value.items()}


def _parse_columns(value: Any) -> tuple[str, ...] | None:
    if isinstance(value, str):
        value = value.split(",")
    elif isinstance(value, Mapping):
        value = list(value.values())

    if not isinstance(value, (list, tuple)):
        return None

    columns = tuple(str(item).strip() for item in value if str(item).strip())

    return columns or None


def _parse_positive_int(value: Any) -> int | None:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return None

    return number if number > 0 else None


__all__ = [
    "RequestParameters",
    "parse_query_key",
    "parse_nested_query",
    "flatten_query",
]
