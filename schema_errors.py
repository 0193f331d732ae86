class SchemaEditorError(Exception):
    """Base of every recoverable error raised while editing a schema."""


class InvalidTypeError(SchemaEditorError, ValueError):
    pass


class KeyNotPresentError(SchemaEditorError, KeyError):
    def __str__(self):
        # KeyError quotes its argument
        return str(self.args[0]) if self.args else ""


class PathResolutionError(SchemaEditorError, LookupError):
    pass


class EmptyNameError(SchemaEditorError, ValueError):
    pass


class DuplicateNameError(SchemaEditorError, ValueError):
    pass


class IllegalRemovalError(SchemaEditorError):
    pass


class IllegalAttributeError(SchemaEditorError):
    pass


class UnsupportedContainerError(SchemaEditorError):
    pass


class SchemaStructureError(SchemaEditorError, ValueError):
    pass


class MalformedJsonError(SchemaEditorError, ValueError):
    pass
