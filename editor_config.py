import json
import logging
import os
import sys

from schema_defaults import DRAFT_07_URI

logger = logging.getLogger(__name__)


class EditorConfig(dict):
    def __init__(self, *args, base_dir=None, **kwargs):
        super().__init__(*args, **kwargs)
        if base_dir is None:
            if hasattr(sys, '_MEIPASS'):  # pyinstaller
                base_dir = sys._MEIPASS
            else:
                base_dir = os.path.abspath(".")
        self.config_path = os.path.join(base_dir, "raw", "config.json")

        # schema
        self.setdefault('debounce_wait', 0.3)
        self.setdefault('debounce_max_wait', 1.0)
        self.setdefault('new_field_name', "field")
        self.setdefault('schema_uri', DRAFT_07_URI)
        self.setdefault('indent', 4)

        # load from file
        self.load()

    def dump(self):
        os.makedirs(os.path.dirname(self.config_path), exist_ok=True)
        with open(self.config_path, "w") as g:
            json.dump(self, g, indent=4)

    def load(self):
        try:
            with open(self.config_path, "r") as f:
                config_ = json.load(f)
        except (FileNotFoundError, json.JSONDecodeError):
            return
        if not isinstance(config_, dict):
            logger.warning("Ignored %s: not a JSON object.", self.config_path)
            return
        self.update(config_)
