"""
Atlas builder settings for tileset_packer.
"""

import logging
from typing import TYPE_CHECKING

from ..atlas.models import BORDER_WIDTH

if TYPE_CHECKING:
    from PySide6.QtCore import QSettings

logger = logging.getLogger(__name__)

DEFAULT_PNG_COMPRESS_LEVEL = 6


class BuilderSettings:
    """Defaults applied to tileset jobs that do not override them."""

    def __init__(self, settings: "QSettings"):
        self.settings = settings

    def _get_int(self, key: str, default: int = 0) -> int:
        """Type-safe integer retrieval from settings."""
        value = self.settings.value(key, default)
        try:
            return int(str(value)) if value is not None else default
        except (ValueError, TypeError):
            return default

    @property
    def border_width(self) -> int:
        """Gutter width in pixels around every tile."""
        return self._get_int("builder/border_width", BORDER_WIDTH)

    @border_width.setter
    def border_width(self, value: int) -> None:
        if value >= 0:
            self.settings.setValue("builder/border_width", value)
            self.settings.sync()
        else:
            logger.warning(
                f"Invalid border width: {value}, keeping current: {self.border_width}"
            )

    @property
    def png_compress_level(self) -> int:
        """zlib level used when writing atlases (0-9)."""
        return self._get_int("builder/png_compress_level", DEFAULT_PNG_COMPRESS_LEVEL)

    @png_compress_level.setter
    def png_compress_level(self, value: int) -> None:
        if 0 <= value <= 9:
            self.settings.setValue("builder/png_compress_level", value)
            self.settings.sync()
        else:
            logger.warning(
                f"Invalid PNG compress level: {value}, keeping current: {self.png_compress_level}"
            )
