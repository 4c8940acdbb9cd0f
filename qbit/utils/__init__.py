"""Shared utilities and infrastructure.

This module contains common utilities used throughout the application.
"""

from __future__ import annotations

from qbit.utils.exceptions import (
    AuthenticationError,
    ConfigurationError,
    DaemonError,
    EncodingError,
    NetworkError,
    QbitError,
    TorrentNotFoundError,
    ValidationError,
)
from qbit.utils.logging_config import get_logger, setup_logging

__all__ = [
    # Exceptions
    "AuthenticationError",
    "ConfigurationError",
    "DaemonError",
    "EncodingError",
    "NetworkError",
    "QbitError",
    "TorrentNotFoundError",
    "ValidationError",
    # Logging
    "get_logger",
    "setup_logging",
]
