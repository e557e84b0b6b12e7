"""Exceptions raised while building and resolving documentation."""

from pathlib import Path


class DocBuilderError(Exception):
    """Base class for documentation builder failures."""


class SymbolSourceError(DocBuilderError):
    """Raised when a symbol description file cannot be interpreted."""


class ConfigError(DocBuilderError):
    """Raised when a configuration file cannot be used."""


class MalformedDocCommentError(DocBuilderError):
    """Raised when a doc-comment element lacks a required attribute."""


class RemoteLookupError(DocBuilderError):
    """Raised when the remote xref service fails for one Xref.

    Covers transport errors, timeouts, HTTP error statuses and response
    bodies that are not the expected list of candidates.
    """

    def __init__(self, message: str, original_error: Exception | None = None) -> None:
        """Initialize the error with the underlying cause, if any."""
        super().__init__(message)
        self.original_error = original_error


class CacheCorruptionError(DocBuilderError):
    """Raised when a persistent cache record is missing a required line."""

    def __init__(self, path: Path) -> None:
        """Initialize the error with the offending record path."""
        super().__init__(f"Bad cache record: {path}")
        self.path = path
