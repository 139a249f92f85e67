"""Validates structured data against stage schemas."""

from typing import Any

from app.schema.exceptions import SchemaValidationError
from app.schema.models import Field, Schema

_PYTHON_TYPES: dict[str, tuple[type, ...]] = {
    "string": (str,),
    "boolean": (bool,),
    "number": (int, float),
    "integer": (int,),
    "array": (list,),
    "object": (dict,),
}


def validate(data: Any, schema: Schema) -> dict[str, Any]:
    """Check data against schema and return a normalized copy.

    The copy holds the declared fields (missing optional ones set to None)
    plus, when the schema allows it, any extra keys.

    Raises:
        SchemaValidationError: listing every violation found.
    """
    if not isinstance(data, dict):
        raise SchemaValidationError(
            schema.name, [f"expected an object, got {_type_name(data)}"]
        )

    violations: list[str] = []
    normalized: dict[str, Any] = {}
    for f in schema.fields:
        value = data.get(f.name)
        if value is None:
            if f.required:
                violations.append(f"'{f.name}' is required")
            normalized[f.name] = None
            continue
        violations.extend(_check_field(f, value))
        normalized[f.name] = value

    if violations:
        raise SchemaValidationError(schema.name, violations)

    if schema.allow_extra:
        for key, value in data.items():
            normalized.setdefault(key, value)
    return normalized


def _check_field(f: Field, value: Any) -> list[str]:
    if not _is_type(value, f.type):
        return [f"'{f.name}' must be of type {f.type}, got {_type_name(value)}"]
    if f.type == "array" and f.items is not None:
        return [
            f"'{f.name}[{i}]' must be of type {f.items}, got {_type_name(item)}"
            for i, item in enumerate(value)
            if not _is_type(item, f.items)
        ]
    return []


def _is_type(value: Any, type_name: str) -> bool:
    expected = _PYTHON_TYPES.get(type_name)
    if expected is None:
        raise ValueError(f"Unsupported schema type: {type_name!r}")
    # bool is an int subclass; it only satisfies "boolean"
    if isinstance(value, bool) and type_name != "boolean":
        return False
    return isinstance(value, expected)


def _type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    for name, types in _PYTHON_TYPES.items():
        if isinstance(value, types):
            return name
    return type(value).__name__
