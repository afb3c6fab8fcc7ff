"""Application-level exception types for fourleaf."""

from __future__ import annotations


class FourleafError(Exception):
    """Base exception for fourleaf."""


class ConfigurationError(FourleafError):
    """Base exception for configuration and startup validation errors."""


class InvalidEndpointError(ConfigurationError):
    """Raised when the chat endpoint base URL is not an http(s) URL with a host."""


class ClientIdStorageError(ConfigurationError):
    """Raised when the client identifier cannot be read or persisted."""
