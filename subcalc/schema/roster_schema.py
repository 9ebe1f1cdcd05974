"""JSON Schema for roster documents (JSON or YAML on disk)."""

from __future__ import annotations

from typing import Any, Dict, Mapping

from jsonschema import Draft202012Validator

from .errors import ValidationError

_NUMBER_OR_NUMERIC_STRING: Dict[str, Any] = {
    "anyOf": [
        {"type": "number"},
        {"type": "string", "pattern": r"^\s*-?[0-9][0-9,]*(\.[0-9]*)?\s*$"},
    ]
}

_SEED_COMPONENT: Dict[str, Any] = {
    "anyOf": [
        {"type": "number"},
        {"type": "string"},
        {"type": "null"},
    ]
}

_SUBCAUCUS: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "id": {"type": "integer", "minimum": 1},
        "name": {"type": "string"},
        "count": _NUMBER_OR_NUMERIC_STRING,
        # computed values are accepted and ignored
        "delegates": {"type": "number"},
    },
    "required": ["count"],
}

ROSTER_SCHEMA: Dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "subcalc roster",
    "type": "object",
    "properties": {
        "name": {"type": "string"},
        "revision": {"type": "string"},
        "allowed": _NUMBER_OR_NUMERIC_STRING,
        "seed": {
            "anyOf": [
                _SEED_COMPONENT,
                {"type": "array", "items": _SEED_COMPONENT, "minItems": 1, "maxItems": 2},
            ]
        },
        "subcaucuses": {
            "anyOf": [
                {
                    "type": "object",
                    "patternProperties": {r"^[1-9][0-9]*$": _SUBCAUCUS},
                    "additionalProperties": False,
                },
                {"type": "array", "items": _SUBCAUCUS},
            ]
        },
    },
    "required": ["allowed", "subcaucuses"],
}


def validate_roster_document(data: Mapping[str, Any]) -> None:
    if not isinstance(data, Mapping):
        raise ValidationError("roster document is not a mapping", path="<root>")
    validator = Draft202012Validator(ROSTER_SCHEMA)
    errors = sorted(validator.iter_errors(dict(data)), key=lambda item: [str(p) for p in item.path])
    if not errors:
        return
    first = errors[0]
    path = ".".join(str(item) for item in first.path) or "<root>"
    raise ValidationError(first.message, path=path)
