"""
Settings package for tileset_packer.

This package provides type-safe persistent preferences using Qt's
QSettings for cross-platform storage.

Usage:
    from tileset_packer.settings import AppSettings, ValidationResult

    settings = AppSettings()
    result = settings.validate()
"""

from .core import AppSettings
from .types import ConfigVersion, ConfigError, ValidationResult
from .logging import LoggingSettings
from .builder import BuilderSettings

__all__ = [
    "AppSettings",
    "ConfigVersion",
    "ConfigError",
    "ValidationResult",
    "LoggingSettings",
    "BuilderSettings",
]
