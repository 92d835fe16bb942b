"""Configuration management for fluent_dml.

Usage:
    >>> from fluent_dml.config import get_settings
    >>> settings = get_settings()
    >>> settings.dialect
"""

from fluent_dml.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
