# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

from typing import Annotated, Any, Callable, Iterable, Mapping, Optional, Sequence

from pydantic import AfterValidator, ConfigDict, Field, ValidationError, create_model

from edgytable.exceptions import ConfigurationError, FilterValidationError
from edgytable.utils import is_blank


RULE_TYPES: dict[str, Any] = {
    "array": list[Any],
    "integer": int,
    "numeric": float,
    "boolean": bool,
    "string": str,
}

SIZE_RULES = ("min", "max", "between")

FLAG_RULES = ("required", "nullable")

SUPPORTED_RULES = (*RULE_TYPES.keys(), *SIZE_RULES, *FLAG_RULES, "in")


type ParsedRule = tuple[str, list[str]]


def parse_rules(rules: Iterable[str]) -> list[ParsedRule]:
    """
    Split rule strings into ``(name, arguments)`` pairs.

    Each string may hold several pipe separated rules (``"string|max:255"``).
    """
    parsed = []

    for rule in rules:
        for part in rule.split("|"):
            part = part.strip()

            if not part:
                continue

            name, _, args = part.partition(":")
            name = name.strip().lower()

            if name not in SUPPORTED_RULES:
                raise ConfigurationError(f"Validation rule '{name}' is not supported")

            parsed.append((name, [arg.strip() for arg in args.split(",")] if args else []))

    return parsed


def build_rule_field(rules: Iterable[str]) -> tuple[Any, Any]:
    """Build the ``(annotation, default)`` pair of a pydantic field from rule strings."""
    parsed = parse_rules(rules)
    names = [name for name, _ in parsed]

    annotation: Any = Any
    untyped = True

    for type_name, rule_type in RULE_TYPES.items():
        if type_name in names:
            annotation = rule_type
            untyped = False
            break
    else:
        if any(name in SIZE_RULES for name in names):
            annotation = str | list[Any]

    numeric = annotation in (int, float)
    required = "required" in names
    nullable = "nullable" in names
    constraints: dict[str, Any] = {}
    validators: list[Any] = []

    for name, args in parsed:
        if name in SIZE_RULES:
            if annotation is bool:
                raise ConfigurationError(f"Rule '{name}' cannot be used on a boolean value")

            lower, upper = _parse_bounds(name, args, annotation)

            if untyped:
                validators.append(AfterValidator(_length_between(lower, upper)))
                continue

            if lower is not None:
                constraints["ge" if numeric else "min_length"] = lower

            if upper is not None:
                constraints["le" if numeric else "max_length"] = upper
        elif name == "in":
            validators.append(AfterValidator(_one_of(args)))

    if required and not nullable and untyped:
        validators.insert(0, AfterValidator(_present))

    metadata = [Field(**constraints)] if constraints else []
    metadata.extend(validators)

    if metadata:
        annotation = Annotated[annotation, *metadata]

    if not required or nullable:
        annotation = Optional[annotation]

    return annotation, (... if required else None)


def validate(inputs: Mapping[str, Any], rules: Mapping[str, Sequence[str]]) -> dict[str, Any]:
    """
    Validate ``inputs`` against ``rules`` keyed by the same names.

    Blank values count as missing. Keys without rules are ignored.

    Returns:
        The validated values of the keys present in ``inputs``

    Raises:
        FilterValidationError: With every failing key and its messages
    """
    if not rules:
        return {}

    definitions: dict[str, Any] = {}
    names: dict[str, str] = {}

    for index, (key, key_rules) in enumerate(rules.items()):
        name = f"field_{index}"
        annotation, default = build_rule_field(key_rules)
        definitions[name] = (annotation, Field(default, alias=key))
        names[name] = key

    model = create_model(
        "FilterInput",
        __config__=ConfigDict(extra="ignore"),
        **definitions,
    )
    data = {key: None if is_blank(value) else value for key, value in inputs.items()}

    try:
        validated = model.model_validate(data)
    except ValidationError as e:
        errors: dict[str, list[str]] = {}

        for error in e.errors():
            key = str(error["loc"][0]) if error["loc"] else "__root__"
            errors.setdefault(key, []).append(error["msg"])

        raise FilterValidationError(errors, dict(inputs)) from e

    return {
        key: getattr(validated, name)
        for name, key in names.items()
        if key in inputs
    }


def _parse_bounds(name: str, args: list[str], annotation: Any) -> tuple[Any, Any]:
    cast = float if annotation is float else int

    try:
        values = [cast(arg) for arg in args]
    except ValueError:
        raise ConfigurationError(f"Rule '{name}' expects numeric arguments, got {args}")

    if name == "between":
        if len(values) != 2:
            raise ConfigurationError("Rule 'between' expects 2 arguments")

        return values[0], values[1]

    if len(values) != 1:
        raise ConfigurationError(f"Rule '{name}' expects 1 argument")

    return (values[0], None) if name == "min" else (None, values[0])


def _present(value: Any) -> Any:
    if value is None:
        raise ValueError("Field required")

    return value


def _length_between(lower: int | None, upper: int | None) -> Callable[[Any], Any]:
    def check(value: Any) -> Any:
        size = len(value)

        if lower is not None and size < lower:
            raise ValueError(f"Value should have at least {lower} items or characters")

        if upper is not None and size > upper:
            raise ValueError(f"Value should have at most {upper} items or characters")

        return value

    return check


def _one_of(allowed: list[str]) -> Callable[[Any], Any]:
    def check(value: Any) -> Any:
        values = value if isinstance(value, list) else [value]

        for item in values:
            if str(item) not in allowed:
                raise ValueError(f"Value must be one of: {', '.join(allowed)}")

        return value

    return check


__all__ = [
    "RULE_TYPES",
    "SUPPORTED_RULES",
    "ParsedRule",
    "parse_rules",
    "build_rule_field",
    "validate",
]
