"""
Test Factories Module

Factory functions for building environment mappings in tests.
"""

from .config_factories import (
    make_environ,
    make_production_environ,
)

__all__ = [
    "make_environ",
    "make_production_environ",
]
