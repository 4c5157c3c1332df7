# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

from edgytable.fields.field import (
    SortStrategy,
    order_by_attribute,
    Field,
)

from edgytable.fields.collection import (
    FieldCollection,
)


__all__ = [
    "SortStrategy",
    "order_by_attribute",
    "Field",
    "FieldCollection",
]
