"""
Custom exception classes for the automation server.

These provide a hierarchy of typed exceptions for better error handling.
"""


class ServerError(Exception):
    """Base exception for server-related errors."""

    pass


class ConfigError(ServerError):
    """Exception raised for configuration-related errors."""

    pass


class ProductionGuardrailError(ConfigError):
    """Raised when a production startup check fails."""

    pass
