"""Positional addressing of nodes inside a schema document.

A path is a tuple of ordinals. From a schema node a segment selects one of
its present keys, enumerated in ``KEY_ORDER`` (then any extra keys in
insertion order); from a ``properties`` mapping it selects a property in
insertion order. Paths depend on which keys are present, so they must be
recomputed from the current document after every edit.
"""
from collections import namedtuple

from schema_errors import KeyNotPresentError, PathResolutionError
from schema_types import KEY_ORDER, display_type, is_schema_node, is_type

NodeView = namedtuple(
    "NodeView",
    ["path", "name", "node", "parent_depth", "is_array_items", "required"],
)

Location = namedtuple("Location", ["keys", "node", "role"])

_NODE = "node"
_PROPERTIES = "properties"
_ATTRIBUTE = "attribute"


def node_keys(node):
    present = [key for key in KEY_ORDER if key in node]
    present += [key for key in node if key not in KEY_ORDER]
    return present


def ordinal_of(node, key) -> int:
    if not is_schema_node(node):
        raise KeyNotPresentError(f"\"{key}\" is not present: value is not a schema node.")
    keys = node_keys(node)
    if key not in keys:
        type_ = display_type(node.get("type")) or "untyped"
        raise KeyNotPresentError(f"\"{key}\" is not present on this {type_} node.")
    return keys.index(key)


def check_path(path) -> tuple:
    if path is None:
        raise PathResolutionError("Path is missing.")
    segments = tuple(path)
    for segment in segments:
        if isinstance(segment, bool) or not isinstance(segment, int) or segment < 0:
            raise PathResolutionError(
                f"Path segment {segment!r} is not a non-negative integer.")
    return segments


def path_to_dict_pointer(dict_, path):
    p = dict_
    for l in path:
        p = p[l]
    return p


def _descend(document, path):
    path = check_path(path)
    if not is_schema_node(document):
        raise PathResolutionError("Document root is not a schema node.")
    keys = []
    target = document
    kind = _NODE
    role = "root"
    for segment in path:
        if kind == _NODE:
            ordered = node_keys(target)
        elif kind == _PROPERTIES:
            ordered = list(target)
        else:
            raise PathResolutionError(
                f"Path {list(path)} continues below the attribute \"{keys[-1]}\".")
        if segment >= len(ordered):
            raise PathResolutionError(
                f"Path {list(path)} does not resolve: segment {segment} is out of range.")
        key = ordered[segment]
        value = target[key]
        if kind == _PROPERTIES:
            if not is_schema_node(value):
                raise PathResolutionError(f"Property \"{key}\" is not a schema node.")
            kind, role = _NODE, "property"
        elif key == "properties" and isinstance(value, dict):
            kind, role = _PROPERTIES, None
        elif key == "items" and is_schema_node(value):
            kind, role = _NODE, "items"
        else:
            kind, role = _ATTRIBUTE, None
        keys.append(key)
        target = value
    return keys, target, kind, role


def to_key_path(document, path):
    keys, _, _, _ = _descend(document, path)
    return keys


def resolve(document, path):
    _, target, _, _ = _descend(document, path)
    return target


def locate(document, path) -> Location:
    """Key path, node and role ("root", "property" or "items") of a node path."""
    keys, target, kind, role = _descend(document, path)
    if kind != _NODE:
        raise PathResolutionError(f"Path {list(path)} does not address a schema node.")
    return Location(keys, target, role)


def resolve_node(document, path):
    return locate(document, path).node


def path_of(document, key_path) -> tuple:
    """Positional path of ``key_path`` in the current document."""
    path = []
    target = document
    kind = _NODE
    for key in key_path:
        if kind == _NODE:
            if not is_schema_node(target):
                raise PathResolutionError(f"Key path {list(key_path)} does not resolve.")
            try:
                path.append(ordinal_of(target, key))
            except KeyNotPresentError as e:
                raise PathResolutionError(str(e)) from e
            value = target[key]
            if key == "properties" and isinstance(value, dict):
                kind = _PROPERTIES
            elif key == "items" and is_schema_node(value):
                kind = _NODE
            else:
                kind = _ATTRIBUTE
        elif kind == _PROPERTIES:
            names = list(target)
            if key not in names:
                raise PathResolutionError(f"Property \"{key}\" does not exist.")
            path.append(names.index(key))
            value = target[key]
            kind = _NODE
        else:
            raise PathResolutionError(f"Key path {list(key_path)} continues below an attribute.")
        target = value
    return tuple(path)


def property_path(document, object_path, name) -> tuple:
    object_path = check_path(object_path)
    node = resolve_node(document, object_path)
    properties_index = ordinal_of(node, "properties")
    names = list(node["properties"])
    if name not in names:
        raise KeyNotPresentError(f"Property \"{name}\" does not exist.")
    return object_path + (properties_index, names.index(name))


def items_path(document, array_path) -> tuple:
    array_path = check_path(array_path)
    node = resolve_node(document, array_path)
    return array_path + (ordinal_of(node, "items"),)


def ancestor_object_path(path, parent_depth) -> tuple:
    """Address of the object whose "required" list owns the property at ``path``.

    ``parent_depth`` is the length of that object's path, as threaded by
    ``walk``; ``items`` hops between the object and the property are part of
    the prefix, not boundaries.
    """
    path = check_path(path)
    if isinstance(parent_depth, bool) or not isinstance(parent_depth, int) \
            or not 0 <= parent_depth <= len(path):
        raise PathResolutionError(
            f"Depth {parent_depth!r} is outside path {list(path)}.")
    return path[:parent_depth]


def walk(document):
    """Yield a ``NodeView`` for every node, depth first, root first."""
    if not is_schema_node(document):
        raise PathResolutionError("Document root is not a schema node.")
    yield from _walk(document, (), None, None, False, False)


def _walk(node, path, name, parent_depth, is_array_items, required):
    yield NodeView(path, name, node, parent_depth, is_array_items, required)
    type_ = node.get("type")
    if is_type(type_, "object") and isinstance(node.get("properties"), dict):
        properties_index = ordinal_of(node, "properties")
        required_names = node.get("required", [])
        for index, (sub_name, sub_node) in enumerate(node["properties"].items()):
            if not is_schema_node(sub_node):
                continue
            yield from _walk(
                sub_node,
                path + (properties_index, index),
                sub_name,
                len(path),
                False,
                sub_name in required_names,
            )
    elif is_type(type_, "array") and is_schema_node(node.get("items")):
        # items is not a property, so it has no owning "required" list
        yield from _walk(
            node["items"],
            path + (ordinal_of(node, "items"),),
            None,
            None,
            True,
            False,
        )
