"""Decoration manager - owns the single live log statement style."""

import logging
import math
from dataclasses import dataclass
from typing import Callable

from logdimmer.editor import DecorationHandle
from logdimmer.editor import EditorHost
from logdimmer.settings import DEFAULT_COLOR_SENTINEL
from logdimmer.settings import Settings

logger = logging.getLogger(__name__)

ITALIC = "italic"


def convert_opacity_to_hex(opacity: float) -> str:
    """Convert an opacity percentage to a two digit alpha hex string.

    Args:
        opacity: Opacity between 0 and 100

    Returns:
        Uppercase alpha channel, "00" to "FF"
    """
    alpha = math.floor(opacity / 100 * 255 + 0.5)
    return f"{min(max(alpha, 0), 255):02X}"


@dataclass(frozen=True)
class DecorationStyle:
    """Rendering options of the log statement style.

    Attributes:
        color: "#RRGGBBAA" text color, None to keep the document's color
        opacity: Alpha multiplier between 0.0 and 1.0 applied to the
            document's text color, None when a color is set
        font_style: Font style of the decorated text ("italic")
    """

    color: str | None = None
    opacity: float | None = None
    font_style: str | None = None

    @classmethod
    def opacity_only(cls, opacity: float) -> "DecorationStyle":
        """Style dimming the document's own text color.

        Args:
            opacity: Opacity between 0 and 100
        """
        return cls(opacity=opacity / 100, font_style=ITALIC)

    @classmethod
    def colored(cls, color: str, opacity: float) -> "DecorationStyle":
        """Style replacing the text color with a translucent color.

        Args:
            color: "#RRGGBB" hex color
            opacity: Opacity between 0 and 100, used as the alpha channel
        """
        return cls(color=f"{color}{convert_opacity_to_hex(opacity)}", font_style=ITALIC)

    def rgba(self) -> tuple[int, int, int, int] | None:
        """Split ``color`` into its channels.

        Returns:
            (red, green, blue, alpha) or None if no color is set
        """
        if self.color is None:
            return None
        value = self.color.lstrip("#")
        return (
            int(value[0:2], 16),
            int(value[2:4], 16),
            int(value[4:6], 16),
            int(value[6:8], 16) if len(value) >= 8 else 255,
        )


class DecorationManager:
    """Owns the single live decoration style.

    The manager is either without a style or holds exactly one handle
    registered with the editor host. Creating a style always disposes the
    previous handle first.
    """

    def __init__(self, host: EditorHost, settings: Settings) -> None:
        """Initialize the decoration manager.

        Args:
            host: Editor host registering the styles
            settings: Persisted dimming settings
        """
        self._host = host
        self._settings = settings
        self._decoration: DecorationHandle | None = None
        self._style: DecorationStyle | None = None

        # Callbacks
        self._on_recreated_callback: Callable[[], None] | None = None

    @property
    def decoration(self) -> DecorationHandle | None:
        """Handle of the live style, None if there is none."""
        return self._decoration

    @property
    def style(self) -> DecorationStyle | None:
        """Options of the live style, None if there is none."""
        return self._style

    def set_recreated_callback(self, callback: Callable[[], None]) -> None:
        """Set callback re-decorating editors after a successful recreate.

        Args:
            callback: Function to call once the new style is live
        """
        self._on_recreated_callback = callback

    def build_style(self) -> DecorationStyle:
        """Build the style described by the current settings."""
        opacity = self._settings.get_opacity()
        color = self._settings.get_color()

        if color == DEFAULT_COLOR_SENTINEL:
            return DecorationStyle.opacity_only(opacity)
        return DecorationStyle.colored(color, opacity)

    def create(self) -> DecorationHandle:
        """Create the style from the settings, replacing any live one.

        Returns:
            Handle of the new style
        """
        self.dispose()

        style = self.build_style()
        self._decoration = self._host.create_text_editor_decoration_type(style)
        self._style = style
        logger.info(f"Created log decoration: {style}")
        return self._decoration

    def dispose(self) -> None:
        """Dispose the live style if there is one."""
        if self._decoration is None:
            return

        decoration = self._decoration
        self._decoration = None
        self._style = None
        decoration.dispose()
        logger.debug("Disposed log decoration")

    def recreate(self) -> None:
        """Rebuild the style after a settings change.

        When dimming is toggled off the manager is left without a style.
        """
        self.dispose()

        if not self._settings.get_toggle():
            logger.info("Log dimming is disabled, no decoration created")
            return

        self.create()
        if self._on_recreated_callback:
            self._on_recreated_callback()
