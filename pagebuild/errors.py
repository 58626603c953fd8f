"""Error types raised by the pagebuild pipeline.

Every error derives from :class:`PageBuildError` so the CLI can report any
pipeline failure uniformly. Each error keeps the offending path, field, or
option on an attribute for callers that want more than the message.
"""

from __future__ import annotations


class PageBuildError(Exception):
    """Base class for errors raised while building a site."""


class MalformedFrontMatterError(PageBuildError):
    """Raised when a source file's front matter block cannot be parsed."""

    def __init__(self, source_path: str, reason: str | None = None) -> None:
        self.source_path = source_path
        msg = f"Malformed front matter in '{source_path}'"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


class FieldParseError(PageBuildError):
    """Raised when a custom field parser fails for ``field``."""

    def __init__(self, field: str, reason: str | None = None) -> None:
        self.field = field
        msg = f"Cannot parse field '{field}'"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


class ConfigLoadError(PageBuildError):
    """Raised when a YAML config file cannot be read or parsed."""

    def __init__(self, path: object, reason: str | None = None) -> None:
        self.path = path
        msg = f"Cannot load config file '{path}'"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


class ConfigurationError(PageBuildError, ValueError):
    """Raised when a required option is missing or invalid."""

    def __init__(self, option: str, message: str | None = None) -> None:
        self.option = option
        super().__init__(message or f'"{option}" not specified.')


class MissingLayoutError(PageBuildError):
    """Raised when a document has no ``layout`` to render it with."""

    def __init__(self, source_path: str | None) -> None:
        self.source_path = source_path
        msg = (
            f"Layout not specified for '{source_path}'. "
            'Add a "layout" front matter field.'
        )
        super().__init__(msg)


class OutputPathError(PageBuildError):
    """Raised when a page cannot be written to its output path."""

    def __init__(self, page_path: str, reason: str) -> None:
        self.page_path = page_path
        super().__init__(f"Cannot write page '{page_path}': {reason}")


__all__ = [
    "ConfigLoadError",
    "ConfigurationError",
    "FieldParseError",
    "MalformedFrontMatterError",
    "MissingLayoutError",
    "OutputPathError",
    "PageBuildError",
]
