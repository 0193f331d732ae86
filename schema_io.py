import json
import logging

import jsonschema

from schema_errors import MalformedJsonError, SchemaStructureError
from schema_inference import infer_schema
from schema_types import check_node

logger = logging.getLogger(__name__)

IMPORT_MODES = ("json", "json-schema")


def _format_location(root, path):
    path_str = root
    for p in path:
        if isinstance(p, str):
            p_ = "\"" + p + "\""
        else:
            p_ = str(p)
        path_str += "[" + p_ + "]"
    return path_str


def parse_json(text):
    if text is None or not text.strip():
        raise MalformedJsonError("Please enter JSON data to import.")
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedJsonError(f"The imported content is not in JSON format: {e}") from e


def validate_schema(schema):
    try:
        jsonschema.Draft7Validator.check_schema(schema)
    except jsonschema.exceptions.SchemaError as e:
        error_message = "Schema is invalid:\n"
        error_message += f"At {_format_location('schema', e.absolute_path)}, {e.message}.\n"
        return False, error_message
    else:
        return True, "Schema is valid."


def validate_data(schema, instance):
    """Messages for every way ``instance`` fails ``schema``, ordered by location."""
    validator = jsonschema.Draft7Validator(schema)
    # locations mix names and indices, so order them as text
    errors = sorted(
        validator.iter_errors(instance),
        key=lambda e: [str(p) for p in e.absolute_path],
    )
    return [f"At {_format_location('$', e.absolute_path)}, {e.message}." for e in errors]


def import_document(text, mode="json"):
    """Build a whole new document from JSON text.

    ``mode`` "json" infers a schema from an example value; "json-schema"
    takes the text as a schema document and checks it first.
    """
    if mode not in IMPORT_MODES:
        raise ValueError(f"Import mode \"{mode}\" is not one of {', '.join(IMPORT_MODES)}.")
    value = parse_json(text)
    match mode:
        case "json":
            return infer_schema(value)
        case "json-schema":
            if not isinstance(value, dict):
                raise SchemaStructureError("A JSON schema must be a JSON object.")
            is_valid, message = validate_schema(value)
            if not is_valid:
                logger.warning("Rejected imported schema: %s", message.strip())
                raise SchemaStructureError(message.strip())
            check_node(value)
            return value


def dumps_document(schema, indent=4):
    return json.dumps(schema, indent=indent, ensure_ascii=False)
