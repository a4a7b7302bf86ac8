"""Domain-specific errors for bturl."""

from __future__ import annotations


class BturlError(Exception):
    """Base error for bturl."""


class MalformedURLError(BturlError, ValueError):
    """Raised when text or components do not form a valid Bluetooth URL."""

    def __init__(self, url: str, *, reason: str | None = None) -> None:
        self.url = url
        self.reason = reason
        message = f"Invalid URL: {url}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class AliasLoadError(BturlError):
    """Raised when reading alias sources fails."""


class AliasValidationError(BturlError):
    """Raised when an alias file does not conform to schema or semantics."""


class AliasResolutionError(BturlError):
    """Raised when an alias reference cannot be found."""
