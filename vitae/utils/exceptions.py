"""Exceptions raised across vitae contexts."""

from typing import Optional


class VitaeError(Exception):
    """Base class for all unrecoverable build errors."""


class InputError(VitaeError, ValueError):
    """
    Raised when the structured person record is malformed.

    Attributes:
        message: Error description
        field: Dotted path of the offending field, if known
    """

    def __init__(self, message: str, field: Optional[str] = None):
        self.message = message
        self.field = field
        if field:
            message = f"{message} (at '{field}')"
        super().__init__(message)


class ConfigError(VitaeError, ValueError):
    """Raised for malformed directive values or date ranges."""


class NetworkError(VitaeError):
    """
    Raised when a fetch collaborator fails.

    Attributes:
        url: The URL being fetched
        original_error: Underlying transport exception
    """

    def __init__(self, message: str, url: Optional[str] = None, original_error: Optional[Exception] = None):
        self.message = message
        self.url = url
        self.original_error = original_error

        parts = [message]
        if url:
            parts.append(f"URL: {url}")
        if original_error:
            parts.append(f"Original error: {original_error}")

        super().__init__("\n".join(parts))


class FormatError(VitaeError):
    """Raised for malformed BibTeX, malformed CSL-JSON or a non-numeric year."""
