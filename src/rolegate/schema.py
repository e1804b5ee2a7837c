from __future__ import annotations

from typing import Any, Dict, List

_ID = {"type": "string", "minLength": 1}
_ID_LIST = {"type": "array", "items": _ID}
_RULE_TABLE = {
    "type": "object",
    "additionalProperties": {
        "type": "object",
        "additionalProperties": {"oneOf": [_ID, {"type": "array", "items": _ID, "minItems": 1}]},
    },
}

CONFIG_SCHEMA: Dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "rolegate access configuration",
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "default": {"enum": ["allow", "deny", "ALLOW", "DENY"]},
        "roles": {"type": "object", "additionalProperties": _ID_LIST},
        "resources": {"type": "object", "additionalProperties": _ID_LIST},
        "allow": _RULE_TABLE,
        "deny": _RULE_TABLE,
    },
}


def _validator_cls():
    try:
        from jsonschema import Draft202012Validator  # type: ignore[import-untyped]
    except ImportError as e:
        raise RuntimeError("Install rolegate[validate] to enable schema validation") from e
    return Draft202012Validator


def validate_config(doc: Dict[str, Any]) -> None:
    """Raise jsonschema.ValidationError if *doc* does not match the schema."""
    _validator_cls()(CONFIG_SCHEMA).validate(doc)


def iter_schema_errors(doc: Dict[str, Any]) -> List[Dict[str, Any]]:
    """All schema errors as ``{"message", "path"}`` dicts, in document order."""
    validator = _validator_cls()(CONFIG_SCHEMA)
    errors = sorted(validator.iter_errors(doc), key=lambda e: [str(p) for p in e.absolute_path])
    return [
        {"message": e.message, "path": "/".join(str(p) for p in e.absolute_path)} for e in errors
    ]


__all__ = ["CONFIG_SCHEMA", "validate_config", "iter_schema_errors"]
