"""Font selection for the source editors."""

import logging
import platform

from PySide6.QtGui import QFont
from PySide6.QtGui import QFontDatabase

logger = logging.getLogger(__name__)


def get_platform_font_multiplier() -> float:
    """Get font size multiplier based on platform.

    macOS renders fonts smaller than Windows/Linux at the same point size,
    so we need to scale up on macOS for consistent appearance.

    Returns:
        Font size multiplier (1.0 = no scaling)
    """
    if platform.system() == "Darwin":
        return 1.3
    return 1.0


def get_mono_font(size: int) -> QFont:
    """Get the system monospace font for source code.

    Args:
        size: Font size in points (will be scaled for platform)

    Returns:
        QFont configured for monospace content
    """
    font = QFontDatabase.systemFont(QFontDatabase.SystemFont.FixedFont)
    font.setPointSize(int(size * get_platform_font_multiplier()))
    font.setStyleHint(QFont.StyleHint.Monospace)
    logger.debug(f"Editor font: {font.family()} {font.pointSize()}pt")
    return font
