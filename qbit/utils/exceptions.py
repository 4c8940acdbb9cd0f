"""Exception hierarchy for qbit.

Provides the error kinds raised by the metainfo core, the daemon client
and the configuration layer.
"""

from __future__ import annotations

from typing import Any


class QbitError(Exception):
    """Base exception for all qbit errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """Initialize qbit error."""
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message} (Details: {self.details})"
        return self.message


class ValidationError(QbitError):
    """Malformed or inconsistent input data."""


class ConfigurationError(ValidationError):
    """Configuration validation errors."""


class EncodingError(QbitError):
    """Value cannot be represented in canonical bencode."""


class NetworkError(QbitError):
    """Transport errors talking to the daemon."""


class DaemonError(NetworkError):
    """The daemon answered with an error status."""

    def __init__(
        self,
        message: str,
        status: int | None = None,
        details: dict[str, Any] | None = None,
    ):
        """Initialize daemon error with the HTTP status it answered."""
        super().__init__(message, details)
        self.status = status


class AuthenticationError(DaemonError):
    """Login rejected or session no longer authenticated."""


class TorrentNotFoundError(DaemonError):
    """The daemon does not know the requested torrent hash."""
