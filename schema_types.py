import re

from schema_errors import InvalidTypeError, SchemaStructureError

SCHEMA_TYPES = ("object", "array", "string", "number", "integer", "boolean", "null")

# Fixed declaration order, used to enumerate the keys of a node for addressing
KEY_ORDER = (
    "type",
    "description",
    "default",
    "enum",
    "properties",
    "required",
    "items",
    "uniqueItems",
    "minItems",
    "maxItems",
    "minLength",
    "maxLength",
    "pattern",
    "format",
    "minimum",
    "maximum",
    "exclusiveMinimum",
    "exclusiveMaximum",
)

COMMON_KEYS = ("type", "description", "default", "enum")

_NUMERIC_KEYS = ("minimum", "maximum", "exclusiveMinimum", "exclusiveMaximum")
TYPE_KEYS = {
    "object": ("properties", "required"),
    "array": ("items", "uniqueItems", "minItems", "maxItems"),
    "string": ("minLength", "maxLength", "pattern", "format"),
    "number": _NUMERIC_KEYS,
    "integer": _NUMERIC_KEYS,
    "boolean": (),
    "null": (),
}

STRING_FORMATS = (
    "date-time",
    "date",
    "time",
    "email",
    "idn-email",
    "hostname",
    "idn-hostname",
    "ipv4",
    "ipv6",
    "uri",
    "uri-reference",
    "iri",
    "iri-reference",
    "uri-template",
    "json-pointer",
    "relative-json-pointer",
    "regex",
)

_LENGTH_KEYS = ("minLength", "maxLength", "minItems", "maxItems")

_VALUE_TYPES = {
    "object": dict,
    "array": list,
    "string": str,
    "boolean": bool,
}


def check_type(type_):
    if not isinstance(type_, str) or type_ not in SCHEMA_TYPES:
        raise InvalidTypeError(f"Type \"{type_}\" is not one of {', '.join(SCHEMA_TYPES)}.")
    return type_


def legal_keys(type_) -> tuple:
    check_type(type_)
    return COMMON_KEYS + TYPE_KEYS[type_]


def is_modelled_key(key) -> bool:
    return key in KEY_ORDER


def is_schema_node(value) -> bool:
    return isinstance(value, dict)


def is_type(actual_type, expected_type) -> bool:
    if actual_type is None:
        return False
    elif isinstance(actual_type, str):
        return actual_type == expected_type
    elif isinstance(actual_type, list):
        return expected_type in actual_type
    else:
        raise InvalidTypeError(
            f"JSON schema is invalid: field type \"{actual_type}\" is invalid.")


def display_type(type_) -> str:
    if type_ is None:
        return ""
    elif isinstance(type_, str):
        return type_
    elif isinstance(type_, list):
        return " | ".join(type_)
    else:
        raise InvalidTypeError(f"JSON schema is invalid: field type \"{type_}\" is invalid.")


def matches_type(value, type_) -> bool:
    """Whether the JSON value ``value`` is an instance of ``type_``."""
    if type_ == "null":
        return value is None
    if type_ in _VALUE_TYPES:
        return isinstance(value, _VALUE_TYPES[type_])
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    if type_ == "integer":
        return isinstance(value, int) or value.is_integer()
    return True


def strip_illegal(node):
    """Copy of ``node`` without modelled attributes its type does not allow.

    Keys outside the model (``$schema``, ``title``, ...) are kept.
    """
    allowed = legal_keys(node.get("type"))
    return {k: v for k, v in node.items() if k in allowed or not is_modelled_key(k)}


def check_node(node, location="schema"):
    """Raise if ``node`` or any node below it breaks a structural invariant."""
    if not is_schema_node(node):
        raise SchemaStructureError(f"At {location}, a schema node must be an object.")
    type_ = node.get("type")
    if type_ is None:
        raise SchemaStructureError(f"At {location}, \"type\" is missing.")
    check_type(type_)
    allowed = legal_keys(type_)
    for key in node:
        if is_modelled_key(key) and key not in allowed:
            raise SchemaStructureError(
                f"At {location}, \"{key}\" is not allowed for type \"{type_}\".")
    for key in _LENGTH_KEYS:
        if key in node:
            value = node[key]
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise SchemaStructureError(
                    f"At {location}, \"{key}\" must be a non-negative integer.")
    if "description" in node and not isinstance(node["description"], str):
        raise SchemaStructureError(f"At {location}, \"description\" must be a string.")
    if "default" in node and not matches_type(node["default"], type_):
        raise SchemaStructureError(
            f"At {location}, \"default\" is not a value of type \"{type_}\".")
    if "enum" in node:
        if not isinstance(node["enum"], list):
            raise SchemaStructureError(f"At {location}, \"enum\" must be a list.")
        for value in node["enum"]:
            if not matches_type(value, type_):
                raise SchemaStructureError(
                    f"At {location}, enum value {value!r} is not of type \"{type_}\".")
    for key in _NUMERIC_KEYS:
        if key in node and not matches_type(node[key], "number"):
            raise SchemaStructureError(f"At {location}, \"{key}\" must be a number.")
    if "uniqueItems" in node and not isinstance(node["uniqueItems"], bool):
        raise SchemaStructureError(f"At {location}, \"uniqueItems\" must be true or false.")
    if "format" in node and node["format"] not in STRING_FORMATS:
        raise SchemaStructureError(
            f"At {location}, format \"{node['format']}\" is not one of "
            f"{', '.join(STRING_FORMATS)}.")
    if "pattern" in node:
        if not isinstance(node["pattern"], str):
            raise SchemaStructureError(f"At {location}, \"pattern\" must be a string.")
        try:
            re.compile(node["pattern"])
        except re.error as e:
            raise SchemaStructureError(
                f"At {location}, pattern is not a regular expression: {e}.") from e

    if type_ == "object":
        properties = node.get("properties", {})
        if not isinstance(properties, dict):
            raise SchemaStructureError(f"At {location}, \"properties\" must be an object.")
        required = node.get("required", [])
        if not isinstance(required, list):
            raise SchemaStructureError(f"At {location}, \"required\" must be a list.")
        if len(set(required)) != len(required):
            raise SchemaStructureError(f"At {location}, \"required\" has duplicate names.")
        for name in required:
            if name not in properties:
                raise SchemaStructureError(
                    f"At {location}, required field \"{name}\" is not a property.")
        for name, child in properties.items():
            if not name:
                raise SchemaStructureError(f"At {location}, property name cannot be empty.")
            check_node(child, f"{location}[\"properties\"][\"{name}\"]")
    elif type_ == "array":
        if "items" not in node:
            raise SchemaStructureError(f"At {location}, array has no \"items\".")
        check_node(node["items"], f"{location}[\"items\"]")
