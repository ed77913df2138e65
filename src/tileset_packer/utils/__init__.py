"""
Utility helpers for tileset_packer.
"""

from .logging_config import (
    ColoredFormatter, CSVFormatter, LoggingOverrides, setup_logging
)

__all__ = [
    'ColoredFormatter',
    'CSVFormatter',
    'LoggingOverrides',
    'setup_logging',
]
