"""errors.py - Exception hierarchy for record expansion.

Every error is fatal for the template being expanded: the core raises and
never catches, and the CLI reports the error and skips writing that output.

``ConfigError`` covers the ``@record(...)`` option list, ``ShapeError`` the
class it decorates.
"""

from __future__ import annotations


class RecordgenError(Exception):
    """Base class for all expansion failures.

    ``line`` is the 1-based template line the error points at, when known.
    """

    def __init__(self, message: str, line: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.line = line

    def located(self, path: str) -> str:
        """Format as ``path:line: error: message`` (line omitted when unknown)."""
        if self.line is None:
            return f"{path}: error: {self.message}"
        return f"{path}:{self.line}: error: {self.message}"


class ConfigError(RecordgenError):
    """The option list of a ``@record`` tag is invalid."""


class UnknownOptionError(ConfigError):
    def __init__(self, name: str, line: int | None = None) -> None:
        super().__init__(f"Unknown option: {name}", line)
        self.name = name


class InvalidValueError(ConfigError):
    def __init__(self, name: str, line: int | None = None) -> None:
        super().__init__(f"Expected boolean value (True or False) for option {name}", line)
        self.name = name


class InvalidSyntaxError(ConfigError):
    def __init__(self, line: int | None = None) -> None:
        super().__init__("Expected name = value pair", line)


class ShapeError(RecordgenError):
    """The tagged definition cannot be expanded into a record."""


class UnsupportedKindError(ShapeError):
    """Only classes with named, annotated fields can be records."""


class SourceParseError(RecordgenError):
    """The template itself is not valid Python."""
