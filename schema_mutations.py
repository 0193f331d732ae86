"""Edits of a schema document addressed by positional paths.

Every function returns a new document and leaves its input untouched.
"""
import copy
import logging

from schema_errors import (
    DuplicateNameError,
    EmptyNameError,
    IllegalAttributeError,
    IllegalRemovalError,
    InvalidTypeError,
    KeyNotPresentError,
    PathResolutionError,
    SchemaStructureError,
    UnsupportedContainerError,
)
from schema_defaults import default_for
from schema_path import check_path, locate, path_to_dict_pointer
from schema_types import (
    SCHEMA_TYPES,
    check_node,
    check_type,
    is_modelled_key,
    is_schema_node,
    is_type,
    legal_keys,
    strip_illegal,
)

logger = logging.getLogger(__name__)


def _replace_at(document, keys, value):
    if not keys:
        return value
    parent = path_to_dict_pointer(document, keys[:-1])
    parent[keys[-1]] = value
    return document


def _property_location(document, path):
    location = locate(document, path)
    if location.role != "property":
        raise PathResolutionError(f"Path {list(path)} does not address an object property.")
    return location


def unique_property_name(properties, base_name="field"):
    if base_name not in properties:
        return base_name
    n = 1
    while f"{base_name}{n}" in properties:
        n += 1
    return f"{base_name}{n}"


def _is_bulk_edit(node, value, attribute_name):
    """Whether ``value`` is a whole node to merge rather than one attribute.

    Bulk edits arrive labelled "root" or with the property's own name, which
    may collide with an attribute name.
    """
    if attribute_name == "root":
        return True
    if not is_schema_node(value):
        return False
    type_ = node.get("type")
    if attribute_name in legal_keys(type_):
        # items holds a node of its own
        return attribute_name != "items" and value.get("type") in SCHEMA_TYPES
    return "type" in value or (is_type(type_, "object") and not is_modelled_key(attribute_name))


def change_schema(document, path, value, attribute_name):
    """Set ``attribute_name`` of the node at ``path`` to ``value``.

    "type" replaces the whole node with ``value`` (only "description" is
    carried over). "root", or a whole node given under any other name (the
    property's own name in a bulk edit), is merged into the node.
    ``None`` clears an attribute.
    """
    path = check_path(path)
    location = locate(document, path)
    node = location.node
    doc = copy.deepcopy(document)

    if attribute_name == "type":
        if not is_schema_node(value):
            raise InvalidTypeError("A type change needs a replacement schema node.")
        check_type(value.get("type"))
        new_node = copy.deepcopy(value)
        if "description" in node and "description" not in new_node:
            new_node["description"] = node["description"]
        check_node(new_node)
        logger.debug("Retype %s: %s -> %s", list(path), node.get("type"), new_node["type"])
        return _replace_at(doc, location.keys, new_node)

    if _is_bulk_edit(node, value, attribute_name):
        if not is_schema_node(value):
            raise SchemaStructureError("Only a schema node can be merged into a node.")
        merged = {**node, **copy.deepcopy(value)}
        check_type(merged.get("type"))
        merged = strip_illegal(merged)
        if merged["type"] == "object":
            merged.setdefault("properties", {})
            merged.setdefault("required", [])
        elif merged["type"] == "array":
            merged.setdefault("items", default_for("string"))
        check_node(merged)
        logger.debug("Merge into %s: %s", list(path), sorted(value))
        return _replace_at(doc, location.keys, merged)

    type_ = node.get("type")
    if attribute_name not in legal_keys(type_):
        raise IllegalAttributeError(
            f"\"{attribute_name}\" is not an attribute of type \"{type_}\".")
    new_node = path_to_dict_pointer(doc, location.keys)
    if value is None:
        new_node.pop(attribute_name, None)
    else:
        new_node[attribute_name] = copy.deepcopy(value)
    check_node(new_node)
    logger.debug("Set %s on %s", attribute_name, list(path))
    return doc


def rename_property(document, path, new_name):
    if not isinstance(new_name, str) or not new_name:
        raise EmptyNameError("Field name cannot be empty.")
    path = check_path(path)
    location = _property_location(document, path)
    old_name = location.keys[-1]
    doc = copy.deepcopy(document)
    if new_name == old_name:
        return doc
    p2 = path_to_dict_pointer(doc, location.keys[:-2])
    p1 = p2["properties"]
    if new_name in p1:
        raise DuplicateNameError(f"Field name \"{new_name}\" is occupied by a sibling item.")
    p2["properties"] = {
        (new_name if name == old_name else name): property_
        for name, property_ in p1.items()
    }
    if "required" in p2:
        p2["required"] = [new_name if name == old_name else name for name in p2["required"]]
    logger.debug("Rename %s: %s -> %s", list(path), old_name, new_name)
    return doc


def remove_property(document, path):
    path = check_path(path)
    location = locate(document, path)
    if location.role == "root":
        raise IllegalRemovalError("Cannot delete the root.")
    if location.role == "items":
        raise IllegalRemovalError(
            "Cannot delete the items of an array; change the array's type instead.")
    doc = copy.deepcopy(document)
    p2 = path_to_dict_pointer(doc, location.keys[:-2])
    field_name = location.keys[-1]
    required = p2.get("required", [])
    if field_name in required:
        p2["required"] = [name for name in required if name != field_name]
    del p2["properties"][field_name]
    logger.debug("Remove %s: %s", list(path), field_name)
    return doc


def add_property(document, path, is_child, base_name="field"):
    """Add a string property under the node at ``path`` or right after it."""
    path = check_path(path)
    location = locate(document, path)
    doc = copy.deepcopy(document)
    self_ = path_to_dict_pointer(doc, location.keys)

    if is_child:
        if is_type(self_.get("type"), "object"):
            target = self_
        elif is_type(self_.get("type"), "array") and is_type(
                self_.get("items", {}).get("type"), "object"):
            target = self_["items"]
        else:
            raise UnsupportedContainerError(
                "Cannot add child item to an item whose type is not \"object\" or "
                "an \"array\" of objects.")
        properties = target.setdefault("properties", {})
        name = unique_property_name(properties, base_name)
        properties[name] = default_for("string")
        logger.debug("Add child %s under %s", name, list(path))
        return doc

    if location.role != "property":
        raise UnsupportedContainerError(
            f"The {location.role} node has no siblings; add a child instead.")
    p2 = path_to_dict_pointer(doc, location.keys[:-2])
    anchor = location.keys[-1]
    name = unique_property_name(p2["properties"], base_name)
    properties = {}
    for field_name, property_ in p2["properties"].items():
        properties[field_name] = property_
        if field_name == anchor:
            properties[name] = default_for("string")
    p2["properties"] = properties
    logger.debug("Add sibling %s after %s", name, anchor)
    return doc


def update_required_property(document, ancestor_path, property_name, removed):
    ancestor_path = check_path(ancestor_path)
    location = locate(document, ancestor_path)
    if not is_type(location.node.get("type"), "object"):
        raise UnsupportedContainerError(
            f"Node at {list(ancestor_path)} is not an object and has no required list.")
    doc = copy.deepcopy(document)
    p2 = path_to_dict_pointer(doc, location.keys)
    required = list(p2.get("required", []))
    if removed:
        required = [name for name in required if name != property_name]
    else:
        if property_name not in p2.get("properties", {}):
            raise KeyNotPresentError(f"Property \"{property_name}\" does not exist.")
        if property_name not in required:
            required.append(property_name)
    p2["required"] = required
    logger.debug(
        "%s required %s at %s", "Drop" if removed else "Mark",
        property_name, list(ancestor_path))
    return doc
