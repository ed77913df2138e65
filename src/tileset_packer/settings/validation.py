"""
Settings validation system for tileset_packer.
"""

import logging
from pathlib import Path
from typing import List, TYPE_CHECKING

from .types import ValidationResult
from .logging import VALID_LEVELS

if TYPE_CHECKING:
    from .core import AppSettings

logger = logging.getLogger(__name__)


class SettingsValidator:
    """Validates configuration settings."""

    def __init__(self, settings: "AppSettings"):
        self.settings = settings

    def validate(self) -> ValidationResult:
        """Validate current configuration."""
        errors: List[str] = []
        warnings: List[str] = []

        level = self.settings.console_log_level
        if level.upper() not in VALID_LEVELS:
            errors.append(f"Unknown console log level: {level}")

        if self.settings.border_width < 0:
            errors.append(f"Border width must not be negative: {self.settings.border_width}")
        elif self.settings.border_width == 0:
            warnings.append("Border width is 0, tiles will not be padded")

        compress_level = self.settings.png_compress_level
        if not 0 <= compress_level <= 9:
            errors.append(f"PNG compress level out of range 0-9: {compress_level}")

        if self.settings.file_logging:
            log_dir = Path(self.settings.log_file_path).parent
            if log_dir.exists() and not log_dir.is_dir():
                errors.append(f"Log file directory is not a directory: {log_dir}")

        if not self.settings.console_logging and not self.settings.file_logging:
            warnings.append("Both console and file logging are disabled")

        return ValidationResult(
            is_valid=len(errors) == 0, errors=errors, warnings=warnings
        )
