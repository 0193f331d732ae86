import pytest

from schema_errors import InvalidTypeError
from schema_inference import infer_schema
from schema_types import check_node


def shape(node):
    """Type and tree shape of a node, without constraints."""
    if node["type"] == "object":
        return ("object", tuple((k, shape(v)) for k, v in node["properties"].items()))
    if node["type"] == "array":
        return ("array", shape(node["items"]))
    return node["type"]


def example_of(node):
    """A JSON value conforming to ``node``."""
    match node["type"]:
        case "object":
            return {k: example_of(v) for k, v in node["properties"].items()}
        case "array":
            return [example_of(node["items"])]
        case "string":
            return "s"
        case "integer":
            return 1
        case "number":
            return 1.5
        case "boolean":
            return True
        case "null":
            return None


class TestInferSchema:
    def test_object_with_mixed_values(self):
        schema = infer_schema({"x": 1, "y": [1, 2], "z": "s"})
        assert schema == {
            "type": "object",
            "required": ["x", "y", "z"],
            "properties": {
                "x": {"type": "integer"},
                "y": {"type": "array", "items": {"type": "integer"}},
                "z": {"type": "string"},
            },
        }

    def test_key_order_is_preserved(self):
        schema = infer_schema({"b": 1, "a": 2, "c": 3})
        assert list(schema["properties"]) == ["b", "a", "c"]
        assert schema["required"] == ["b", "a", "c"]

    @pytest.mark.parametrize("value, type_", [
        (None, "null"),
        (True, "boolean"),
        (False, "boolean"),
        (0, "integer"),
        (-7, "integer"),
        (2.0, "integer"),
        (2.5, "number"),
        ("", "string"),
    ])
    def test_scalars(self, value, type_):
        assert infer_schema(value) == {"type": type_}

    def test_empty_array_items_default_to_string(self):
        assert infer_schema([]) == {"type": "array", "items": {"type": "string"}}

    def test_array_uses_first_element(self):
        schema = infer_schema([{"a": None}, "ignored"])
        assert schema["items"] == {
            "type": "object",
            "properties": {"a": {"type": "null"}},
            "required": ["a"],
        }

    def test_empty_object(self):
        assert infer_schema({}) == {"type": "object", "properties": {}, "required": []}

    def test_non_json_value_raises(self):
        with pytest.raises(InvalidTypeError):
            infer_schema({1, 2})

    @pytest.mark.parametrize("value", [
        {"user": {"id": 3, "emails": ["a@b.c"], "score": 9.5, "active": False}},
        [[[]]],
        {"nested": [{"deep": [{"deeper": None}]}]},
    ])
    def test_inferred_schema_is_valid_and_stable(self, value):
        schema = infer_schema(value)
        check_node(schema)
        assert shape(infer_schema(example_of(schema))) == shape(schema)
