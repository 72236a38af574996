"""JSON schema loading and validation for intermediate documents.

WHY: Documents are hand-edited. A typo in a field name or a negative
frame number must be caught before any bytes are laid out, with a
message pointing at the offending element.

HOW: Schemas ship next to this module as *.schema.json files, loaded
once and cached. validate_document() runs jsonschema's Draft 7 validator
and converts the most relevant error into a DocumentValidationError.

RULES:
- Schema errors abort the pack for that file (DocumentValidationError)
- Malformed JSON is reported the same way, with path "$"
- Semantic warnings (duplicates, hash mismatches) are NOT handled here;
  the document mappers log those and continue
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema
from jsonschema.exceptions import best_match

from foxtext_converter.core.errors import DocumentValidationError

_SCHEMA_DIR = Path(__file__).resolve().parent / "schemas"

_CACHED_SCHEMAS: dict[str, dict[str, Any]] = {}


def _load_schema(name: str) -> dict[str, Any]:
    with open(_SCHEMA_DIR / "{}_document.schema.json".format(name), encoding="utf-8") as f:
        return json.load(f)


def get_schema(name: str) -> dict[str, Any]:
    """Return the cached schema for document format ``name`` ("subp" or "lang")."""
    if name not in _CACHED_SCHEMAS:
        _CACHED_SCHEMAS[name] = _load_schema(name)
    return _CACHED_SCHEMAS[name]


def _json_path(error: jsonschema.ValidationError) -> str:
    path = "$"
    for part in error.absolute_path:
        if isinstance(part, int):
            path += "[{}]".format(part)
        else:
            path += ".{}".format(part)
    return path


def validate_document(document: Any, name: str) -> None:
    """Validate ``document`` against the ``name`` schema.

    Raises:
        DocumentValidationError: On the most relevant schema violation.
    """
    validator = jsonschema.Draft7Validator(get_schema(name))
    error = best_match(validator.iter_errors(document))
    if error is not None:
        raise DocumentValidationError(error.message, _json_path(error))


def parse_document(text: str) -> Any:
    """Parse document text, reporting JSON syntax errors as validation errors."""
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise DocumentValidationError(
            "Malformed JSON at line {} column {}: {}".format(e.lineno, e.colno, e.msg)
        ) from e


def dump_document(document: dict[str, Any]) -> str:
    return json.dumps(document, indent=2, ensure_ascii=False) + "\n"
