"""Error types raised by gumwood.

Every failure the package reports is one of these, so callers can branch on
the class instead of matching message text.
"""


class GumwoodError(Exception):
    """Base class for all gumwood errors."""


class SourceError(GumwoodError):
    """The schema source could not be reached, read, or was empty."""


class ConfigurationError(GumwoodError):
    """Options or a config file are invalid."""


class UnsupportedSourceError(ConfigurationError):
    """The requested kind of source is recognised but not implemented."""


class SchemaParseError(GumwoodError):
    """An introspection payload is malformed.

    ``path`` names the offending location, e.g. ``types`` or
    ``types.3.fields.0.name``.
    """

    def __init__(self, path: str, message: str):
        self.path = path
        self.message = message
        super().__init__(f"{path}: {message}")


class FormatError(GumwoodError):
    """A markdown fragment was assembled from inconsistent parts."""
