"""Exception hierarchy for the exporter."""

from __future__ import annotations


class WizExportError(Exception):
    """Base exception for all export operations."""


class AuthError(WizExportError):
    """Raised when logging in to the note service fails."""


class FetchError(WizExportError):
    """Raised on a transport failure or a non-200 HTTP status."""

    def __init__(self, message: str, url: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class ParseError(WizExportError):
    """Raised when a response body is not a valid result envelope."""


class ApiError(WizExportError):
    """Raised when a well-formed envelope carries a non-200 return code."""

    def __init__(self, return_code: int, message: str):
        super().__init__(message)
        self.return_code = return_code
        self.message = message


class ConvertError(WizExportError):
    """Raised when HTML to Markdown conversion fails."""


class WriteError(WizExportError):
    """Raised when an exported file cannot be written."""


class DirectoryError(WizExportError):
    """Raised when a folder's output directories cannot be created."""
