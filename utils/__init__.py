"""
Utilities Package

Common utilities and helper functions for the automation server.
"""

from .errors import ConfigError, ProductionGuardrailError, ServerError
from .logging import get_logger, setup_logging

__all__ = [
    "ConfigError",
    "ProductionGuardrailError",
    "ServerError",
    "get_logger",
    "setup_logging",
]
