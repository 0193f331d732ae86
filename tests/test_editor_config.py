import json

from editor_config import EditorConfig
from schema_defaults import DRAFT_07_URI


def test_defaults_without_file(tmp_path):
    config = EditorConfig(base_dir=str(tmp_path))
    assert config["debounce_wait"] == 0.3
    assert config["debounce_max_wait"] == 1.0
    assert config["new_field_name"] == "field"
    assert config["schema_uri"] == DRAFT_07_URI


def test_file_overrides_defaults(tmp_path):
    (tmp_path / "raw").mkdir()
    (tmp_path / "raw" / "config.json").write_text(json.dumps({"new_field_name": "column"}))
    config = EditorConfig(base_dir=str(tmp_path))
    assert config["new_field_name"] == "column"
    assert config["indent"] == 4


def test_broken_file_is_ignored(tmp_path):
    (tmp_path / "raw").mkdir()
    (tmp_path / "raw" / "config.json").write_text("{oops")
    assert EditorConfig(base_dir=str(tmp_path))["new_field_name"] == "field"


def test_dump_and_reload(tmp_path):
    config = EditorConfig(base_dir=str(tmp_path))
    config["indent"] = 2
    config.dump()
    assert EditorConfig(base_dir=str(tmp_path))["indent"] == 2
