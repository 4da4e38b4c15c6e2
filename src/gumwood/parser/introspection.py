"""Introspection response parser.

Turns the JSON body of a GraphQL introspection query into a Schema.
"""

import json
import logging

from pydantic import ValidationError

from gumwood.errors import SchemaParseError
from gumwood.parser.base import TYPE_KINDS, Schema

DISCRIMINATOR_ERRORS = {"union_tag_not_found", "union_tag_invalid"}

logger = logging.getLogger(__name__)


def build_schema(raw_json: bytes | str) -> Schema:
    """Parse an introspection response into a Schema.

    Accepts ``{"data": {"__schema": ...}}`` as returned by a server, or a
    bare ``{"__schema": ...}``.

    Raises:
        SchemaParseError: the payload is not JSON or does not have the
            introspection shape. ``path`` names the offending location.
    """
    try:
        document = json.loads(raw_json)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise SchemaParseError("$", f"invalid JSON: {exc}") from exc

    raw_schema = _extract_schema(document)

    try:
        schema = Schema.model_validate(raw_schema)
    except ValidationError as exc:
        error = exc.errors()[0]
        raise SchemaParseError(_format_loc(error), error["msg"]) from exc

    _check_unique_names(schema)
    logger.debug(
        "Parsed schema with %d types and %d directives",
        len(schema.types),
        len(schema.directives),
    )
    return schema


def _extract_schema(document) -> dict:
    if not isinstance(document, dict):
        raise SchemaParseError("$", "response is not a JSON object")

    if "__schema" in document:
        container = document
    else:
        data = document.get("data")
        if not isinstance(data, dict):
            errors = document.get("errors")
            if errors:
                messages = "; ".join(_error_message(e) for e in errors)
                raise SchemaParseError("data", f"server returned errors: {messages}")
            raise SchemaParseError("data", "response has no data object")
        container = data

    raw_schema = container.get("__schema")
    if not isinstance(raw_schema, dict):
        raise SchemaParseError("__schema", "schema not in response")
    return raw_schema


def _error_message(error) -> str:
    if isinstance(error, dict):
        return str(error.get("message", error))
    return str(error)


def _format_loc(error: dict) -> str:
    # Discriminated unions insert the tag (e.g. "OBJECT") into the location,
    # and report a missing or unknown tag at the union itself.
    parts = [str(part) for part in error["loc"] if part not in TYPE_KINDS]
    if error["type"] in DISCRIMINATOR_ERRORS:
        parts.append("kind")
    return ".".join(parts) or "$"


def _check_unique_names(schema: Schema) -> None:
    seen: set[str] = set()
    for index, typedef in enumerate(schema.types):
        if typedef.name in seen:
            raise SchemaParseError(f"types.{index}.name", f"duplicate type name {typedef.name!r}")
        seen.add(typedef.name)
