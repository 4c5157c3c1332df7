# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

import re
from typing import Any


_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def headline(value: str) -> str:
    """Turn an attribute name into a label (``first_name`` -> ``First Name``)."""
    words = _CAMEL_BOUNDARY.sub(" ", value)
    words = re.sub(r"[_\-.\s]+", " ", words).strip()

    return " ".join(word[:1].upper() + word[1:] for word in words.split(" "))


def is_blank(value: Any) -> bool:
    if value is None:
        return True

    if isinstance(value, str):
        return value.strip() == ""

    if isinstance(value, (list, tuple, set, dict)):
        return len(value) == 0

    return False


__all__ = [
    "headline",
    "is_blank",
]
