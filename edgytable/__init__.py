# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

from edgytable.exceptions import (
    EdgyTableError,
    ConfigurationError,
    FilterValidationError,
)

from edgytable.config import (
    TableSettings,
    init_settings,
    get_settings,
)

from edgytable.fields import (
    Field,
    FieldCollection,
)

from edgytable.filters import (
    Filter,
    FilterCollection,
    MatchMode,
    SelectFilter,
    TextFilter,
)

from edgytable.params import (
    RequestParameters,
)

from edgytable.query import (
    EdgyQueryBuilder,
    QueryBuilder,
)

from edgytable.schemas import (
    Page,
    TableDescriptor,
    TableResponse,
)

from edgytable.table import (
    Table,
    build_descriptor,
)

from edgytable.resource import (
    Resource,
    parameter_filter,
)

from edgytable.api import (
    register_table_route,
)


__all__ = [
    # Exceptions
    "EdgyTableError",
    "ConfigurationError",
    "FilterValidationError",
    # Config
    "TableSettings",
    "init_settings",
    "get_settings",
    # Fields
    "Field",
    "FieldCollection",
    # Filters
    "Filter",
    "FilterCollection",
    "MatchMode",
    "SelectFilter",
    "TextFilter",
    # Params
    "RequestParameters",
    # Query
    "EdgyQueryBuilder",
    "QueryBuilder",
    # Schemas
    "Page",
    "TableDescriptor",
    "TableResponse",
    # Table
    "Table",
    "build_descriptor",
    # Resource
    "Resource",
    "parameter_filter",
    # Api
    "register_table_route",
]
