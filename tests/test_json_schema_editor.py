import json

import pytest

from editor_config import EditorConfig
from json_schema_editor import SchemaEditor
from schema_errors import (
    DuplicateNameError,
    MalformedJsonError,
    SchemaStructureError,
    UnsupportedContainerError,
)
from schema_path import property_path


@pytest.fixture
def editor(tmp_path):
    return SchemaEditor(config=EditorConfig(base_dir=str(tmp_path)))


class TestSchemaEditor:
    def test_new_document(self, editor):
        assert editor.schema["type"] == "object"
        assert editor.schema["$schema"] == "http://json-schema.org/draft-07/schema#"
        assert editor.validate_schema() == (True, "Schema is valid.")

    def test_invalid_initial_schema(self, tmp_path):
        with pytest.raises(SchemaStructureError):
            SchemaEditor({"type": "array"}, EditorConfig(base_dir=str(tmp_path)))

    def test_edit_session(self, editor):
        editor.add_property((), True)
        editor.add_property((), True)
        editor.rename_property(property_path(editor.schema, (), "field"), "id")
        # the path is recomputed from the current document before each edit
        editor.rename_property(property_path(editor.schema, (), "field1"), "name")
        views = {v.name: v for v in editor.walk() if v.name}
        editor.set_required(views["id"], True)
        assert editor.schema["properties"] == {
            "id": {"type": "string"},
            "name": {"type": "string"},
        }
        assert editor.schema["required"] == ["id"]

        views = {v.name: v for v in editor.walk() if v.name}
        assert views["id"].required
        editor.set_required(views["id"], False)
        assert editor.schema["required"] == []

    def test_failed_edit_keeps_document(self, editor):
        editor.add_property((), True)
        editor.add_property((), True)
        before = editor.schema
        with pytest.raises(DuplicateNameError):
            editor.rename_property(property_path(before, (), "field1"), "field")
        assert editor.schema is before

    def test_set_required_on_root(self, editor):
        root = next(iter(editor.walk()))
        with pytest.raises(UnsupportedContainerError):
            editor.set_required(root, True)

    def test_new_field_name_from_config(self, tmp_path):
        config = EditorConfig(base_dir=str(tmp_path))
        config["new_field_name"] = "column"
        editor = SchemaEditor(config=config)
        editor.add_property((), True)
        assert list(editor.schema["properties"]) == ["column"]

    def test_import_json(self, editor):
        editor.import_text('{"a": [true]}', "json")
        assert editor.schema == {
            "type": "object",
            "properties": {"a": {"type": "array", "items": {"type": "boolean"}}},
            "required": ["a"],
        }

    def test_import_malformed_keeps_document(self, editor):
        before = editor.schema
        with pytest.raises(MalformedJsonError):
            editor.import_text("{", "json-schema")
        assert editor.schema is before

    def test_validate_data(self, editor):
        editor.import_text('{"a": 1}')
        assert editor.validate_data({"a": 2}) == []
        assert editor.validate_data({}) == ["At $, 'a' is a required property."]

    def test_dumps_uses_configured_indent(self, editor):
        editor.config["indent"] = 2
        assert json.loads(editor.dumps()) == editor.schema
        assert editor.dumps().startswith('{\n  "')

    def test_text_buffer_merges_parsed_text(self, editor, clock):
        buffer = editor.text_buffer(
            lambda value: editor.change_schema((), value, "root"), clock=clock)
        buffer.feed('{"description": "draft')
        clock.now = 2.0
        buffer.poll()
        assert "description" not in editor.schema
        buffer.feed('{"description": "Orders"}')
        clock.now = 4.0
        assert buffer.poll()
        assert editor.schema["description"] == "Orders"
        assert editor.schema["properties"] == {}
