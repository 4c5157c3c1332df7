# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

from typing import Any

from pydantic_core import ErrorDetails


class EdgyTableError(Exception): ...


class ConfigurationError(EdgyTableError): ...


class FilterValidationError(EdgyTableError):
    """
    Raised when request filter values fail the declared validation rules.

    All failures are collected before raising, keyed by field (or filter key).

    Attributes:
        errors: Mapping of field name to the list of failure messages
    """

    def __init__(self, errors: dict[str, list[str]], inputs: dict[str, Any] | None = None):
        self.errors = errors
        self.inputs = inputs or {}
        fields = ", ".join(errors.keys())
        super().__init__(f"Invalid filter values for: {fields}")

    def to_error_details(self) -> list[ErrorDetails]:
        details = []

        for key, messages in self.errors.items():
            for message in messages:
                details.append(
                    ErrorDetails(
                        type="value_error",
                        loc=("query", "filter", key),
                        msg=message,
                        input=self.inputs.get(key),
                    )
                )

        return details


__all__ = [
    "EdgyTableError",
    "ConfigurationError",
    "FilterValidationError",
]
