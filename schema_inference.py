from schema_defaults import default_for
from schema_errors import InvalidTypeError


def infer_schema(value):
    """Schema describing ``value``, a parsed JSON value.

    Every key of an observed object is treated as required. An empty array
    carries no evidence about its elements, so its items default to string.
    """
    if value is None:
        return {"type": "null"}
    # bool before numbers: True is an int
    if isinstance(value, bool):
        return {"type": "boolean"}
    if isinstance(value, int):
        return {"type": "integer"}
    if isinstance(value, float):
        if value.is_integer():
            return {"type": "integer"}
        return {"type": "number"}
    if isinstance(value, str):
        return {"type": "string"}
    if isinstance(value, (list, tuple)):
        if value:
            items = infer_schema(value[0])
        else:
            items = default_for("string")
        return {"type": "array", "items": items}
    if isinstance(value, dict):
        return {
            "type": "object",
            "properties": {key: infer_schema(sub_value) for key, sub_value in value.items()},
            "required": list(value.keys()),
        }
    raise InvalidTypeError(f"Value of type \"{type(value).__name__}\" is not JSON.")
