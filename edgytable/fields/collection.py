# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping

from edgytable.fields.field import Field


class FieldCollection:
    """Insertion-ordered set of fields keyed by attribute."""

    def __init__(self, fields: Iterable[Field] = ()):
        self._fields: dict[str, Field] = {}

        for field in fields:
            self._fields[field.attribute] = field

    def __iter__(self) -> Iterator[Field]:
        return iter(self._fields.values())

    def __len__(self) -> int:
        return len(self._fields)

    def __contains__(self, attribute: object) -> bool:
        return attribute in self._fields

    def __getitem__(self, attribute: str) -> Field:
        return self._fields[attribute]

    def get(self, attribute: str) -> Field | None:
        return self._fields.get(attribute)

    def sortable(self) -> list[Field]:
        return [field for field in self if field.sortable]

    def searchable(self) -> list[Field]:
        return [field for field in self if field.searchable]

    def columns(self) -> list[Field]:
        return [field for field in self if field.listed]

    def with_field(self, field: Field) -> "FieldCollection":
        """Copy of the collection with ``field`` added, or replaced in place."""
        fields = dict(self._fields)
        fields[field.attribute] = field

        return FieldCollection(fields.values())

    def key_by(self, attribute: str) -> Mapping[Any, Field]:
        return MappingProxyType({getattr(field, attribute): field for field in self})


__all__ = [
    "FieldCollection",
]
