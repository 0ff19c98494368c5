"""Schema validation for outline data structures.

Validates raw outline dicts against their JSON Schema definition before
they are turned into typed models. All validation is deterministic.
"""

import json
from functools import lru_cache
from pathlib import Path

from jsonschema import Draft202012Validator, ValidationError

from config.settings import OUTLINE_SCHEMA


@lru_cache(maxsize=None)
def _load_schema_text(path: str) -> str:
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def load_schema(schema_path: str | Path) -> dict:
    """Load a JSON Schema file.

    Args:
        schema_path: Path to the schema file.

    Returns:
        The schema dictionary.

    Raises:
        FileNotFoundError: If the schema file does not exist.
    """
    return json.loads(_load_schema_text(str(schema_path)))


def get_validation_errors(data: object, schema_path: str | Path) -> list[str]:
    """Return all validation errors for a data structure.

    Args:
        data: The data to validate.
        schema_path: Path to the JSON Schema file.

    Returns:
        List of human-readable error messages. Empty if valid.
    """
    schema = load_schema(schema_path)
    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.path])
    return [
        f"{'.'.join(str(p) for p in error.absolute_path) or 'root'}: {error.message}"
        for error in errors
    ]


def get_outline_validation_errors(data: object) -> list[str]:
    """Return all validation errors for a raw outline dict."""
    return get_validation_errors(data, OUTLINE_SCHEMA)


def is_valid_outline(data: object) -> bool:
    """Check if a raw outline is valid without raising exceptions."""
    schema = load_schema(OUTLINE_SCHEMA)
    try:
        Draft202012Validator(schema).validate(data)
        return True
    except ValidationError:
        return False
