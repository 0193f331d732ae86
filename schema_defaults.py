from schema_types import check_type

DRAFT_07_URI = "http://json-schema.org/draft-07/schema#"


def default_for(type_):
    check_type(type_)
    match type_:
        case "object":
            return {"type": "object", "properties": {}, "required": []}
        case "array":
            return {"type": "array", "items": default_for("string")}
        case _:
            return {"type": type_}


def new_document(schema_uri=DRAFT_07_URI):
    document = default_for("object")
    if schema_uri:
        document["$schema"] = schema_uri
    return document
