import copy
import logging

from debounce import Debouncer, JsonTextBuffer
from editor_config import EditorConfig
from schema_defaults import new_document
from schema_errors import UnsupportedContainerError
from schema_io import dumps_document, import_document, validate_data, validate_schema
from schema_mutations import (
    add_property,
    change_schema,
    remove_property,
    rename_property,
    update_required_property,
)
from schema_path import ancestor_object_path, walk
from schema_types import check_node

logger = logging.getLogger(__name__)


class SchemaEditor:
    """The single writer of one schema document.

    Each edit builds a new document; ``schema`` is only replaced when the
    edit succeeds, so a failed edit leaves the previous document in place.
    """

    def __init__(self, schema=None, config=None):
        self.config = config if config is not None else EditorConfig()
        if schema is None:
            self.schema = new_document(self.config["schema_uri"])
        else:
            check_node(schema)
            self.schema = copy.deepcopy(schema)

    def _commit(self, schema):
        self.schema = schema
        return schema

    def walk(self):
        return walk(self.schema)

    def change_schema(self, path, value, attribute_name):
        return self._commit(change_schema(self.schema, path, value, attribute_name))

    def rename_property(self, path, new_name):
        return self._commit(rename_property(self.schema, path, new_name))

    def remove_property(self, path):
        return self._commit(remove_property(self.schema, path))

    def add_property(self, path, is_child):
        return self._commit(
            add_property(self.schema, path, is_child, self.config["new_field_name"]))

    def update_required_property(self, ancestor_path, property_name, removed):
        return self._commit(
            update_required_property(self.schema, ancestor_path, property_name, removed))

    def set_required(self, view, required):
        """Toggle the required flag of the property shown by ``view``."""
        if view.parent_depth is None:
            raise UnsupportedContainerError("Only object properties can be required.")
        return self.update_required_property(
            ancestor_object_path(view.path, view.parent_depth), view.name, not required)

    def import_text(self, text, mode="json"):
        schema = import_document(text, mode)
        logger.info("Imported %s document, root type %s", mode, schema.get("type"))
        return self._commit(schema)

    def validate_schema(self):
        return validate_schema(self.schema)

    def validate_data(self, instance):
        return validate_data(self.schema, instance)

    def dumps(self):
        return dumps_document(self.schema, indent=self.config["indent"])

    def text_buffer(self, on_value, clock=None):
        kwargs = {} if clock is None else {"clock": clock}
        debouncer = Debouncer(
            wait=self.config["debounce_wait"],
            max_wait=self.config["debounce_max_wait"],
            **kwargs,
        )
        return JsonTextBuffer(on_value, debouncer)
