"""Exceptions shared by the Wirescout layers."""
from __future__ import annotations


class WirescoutError(Exception):
    """Base class for every error raised by Wirescout."""


class ConfigurationError(WirescoutError, ValueError):
    """Raised at startup when the configuration cannot drive a run."""


class InvalidSelectorError(WirescoutError, ValueError):
    """Raised when a selector cannot be interpreted by the document parser."""


class FetchError(WirescoutError, RuntimeError):
    """Raised when a page cannot be retrieved."""

    def __init__(self, url: str, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class NotificationError(WirescoutError, RuntimeError):
    """Raised when the notification sink fails to deliver a batch."""


__all__ = [
    "ConfigurationError",
    "FetchError",
    "InvalidSelectorError",
    "NotificationError",
    "WirescoutError",
]
