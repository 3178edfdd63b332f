"""Introspectors for concrete object models."""

from .python import PythonIntrospector

__all__ = [
    'PythonIntrospector',
]
