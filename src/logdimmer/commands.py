"""Commands changing how log statements are dimmed."""

import logging
import re

from logdimmer.decoration import DecorationManager
from logdimmer.decoration_updater import DecorationUpdater
from logdimmer.editor import Prompter
from logdimmer.editor import QuickPickItem
from logdimmer.settings import Settings

logger = logging.getLogger(__name__)

OPACITY_RANGE_MESSAGE = "Please enter a number between 0 and 100"
OPACITY_FORMAT_MESSAGE = "Please don't include special characters or letters"
OPACITY_PROMPT = "Enter opacity value (0 = invisible, 100 = normal)"
COLOR_PLACEHOLDER = "Select a color for logs"
TOGGLED_OFF_MESSAGE = "Please toggle on the extension before changing color."

COLOR_OPTIONS: list[QuickPickItem] = [
    QuickPickItem("🎨 Default", "default"),
    QuickPickItem("⬛ Grey", "#808080"),
    QuickPickItem("🟥 Red", "#FF0000"),
    QuickPickItem("🟩 Green", "#00FF00"),
    QuickPickItem("🟦 Blue", "#0000FF"),
    QuickPickItem("🟨 Yellow", "#FFFF00"),
    QuickPickItem("🟪 Purple", "#9B59B6"),
    QuickPickItem("🟧 Orange", "#FFA500"),
    QuickPickItem("🟫 Brown", "#8B4513"),
    QuickPickItem("🟦 Cyan", "#00FFFF"),
    QuickPickItem("🟪 Pink", "#FF69B4"),
    QuickPickItem("🟥 Crimson", "#DC143C"),
    QuickPickItem("🟩 Lime", "#32CD32"),
    QuickPickItem("🟦 Navy", "#000080"),
    QuickPickItem("🟨 Gold", "#FFD700"),
    QuickPickItem("🟪 Magenta", "#FF00FF"),
    QuickPickItem("🟧 Coral", "#FF7F50"),
    QuickPickItem("🟫 Chocolate", "#D2691E"),
    QuickPickItem("⬛ Silver", "#C0C0C0"),
    QuickPickItem("🟦 Teal", "#008080"),
    QuickPickItem("🟪 Lavender", "#E6E6FA"),
    QuickPickItem("🟥 Maroon", "#800000"),
    QuickPickItem("🟩 Olive", "#808000"),
    QuickPickItem("🟦 Indigo", "#4B0082"),
    QuickPickItem("🟨 Khaki", "#F0E68C"),
    QuickPickItem("🟪 Plum", "#DDA0DD"),
    QuickPickItem("🟧 Peach", "#FFDAB9"),
    QuickPickItem("🟫 Tan", "#D2B48C"),
    QuickPickItem("⬛ Charcoal", "#36454F"),
    QuickPickItem("🟦 Turquoise", "#40E0D0"),
    QuickPickItem("🟪 Orchid", "#DA70D6"),
]

# Leading number of a string, like "12" in "12abc"
_LEADING_NUMBER_RE = re.compile(
    r"\s*([+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))"
)
_OPACITY_FORMAT_RE = re.compile(r"-?\d+(?:\.\d+)?")


def _parse_leading_number(value: str) -> float | None:
    match = _LEADING_NUMBER_RE.match(value)
    if match is None:
        return None
    return float(match.group(1))


def validate_opacity_input(value: str) -> str | None:
    """Validate an opacity typed by the user.

    Range errors are reported before format errors, and the range check
    uses the leading number of the input ("150abc" is out of range).

    Args:
        value: Raw user input

    Returns:
        An error message if the input is invalid, or None if valid
    """
    number = _parse_leading_number(value)
    if value == "" or (number is not None and not 0 <= number <= 100):
        return OPACITY_RANGE_MESSAGE

    if _OPACITY_FORMAT_RE.fullmatch(value.strip()) is None:
        return OPACITY_FORMAT_MESSAGE

    return None


def format_opacity(opacity: float) -> str:
    """Format an opacity the way it was typed ("50", "33.5")."""
    if isinstance(opacity, float) and opacity.is_integer():
        return str(int(opacity))
    return str(opacity)


def color_label(hex_code: str) -> str:
    """Get the display label of a color, or the color itself if unknown."""
    for option in COLOR_OPTIONS:
        if option.value == hex_code:
            return option.label
    return hex_code


class LogCommands:
    """Handlers of the user commands.

    Each handler persists the setting first, then rebuilds the style,
    re-decorates and finally confirms to the user. Settings write errors
    propagate to the caller.
    """

    def __init__(
        self,
        settings: Settings,
        manager: DecorationManager,
        updater: DecorationUpdater,
        prompter: Prompter,
    ) -> None:
        """Initialize the command handlers.

        Args:
            settings: Persisted dimming settings
            manager: Owner of the live style
            updater: Decoration updater
            prompter: User prompts
        """
        self._settings = settings
        self._manager = manager
        self._updater = updater
        self._prompter = prompter

    def change_opacity(self) -> None:
        """Ask for a new opacity and apply it."""
        current_opacity = self._settings.get_opacity()
        value = self._prompter.show_input_box(
            OPACITY_PROMPT,
            format_opacity(current_opacity),
            validate_opacity_input,
        )
        if not value:
            return

        opacity = float(value)
        self._settings.save_opacity(opacity)
        self._manager.recreate()
        self._updater.update_all()
        self._prompter.show_information_message(
            f"Logs opacity set to {format_opacity(opacity)}%"
        )
        logger.info(f"Changed log opacity to {opacity}")

    def change_color(self) -> None:
        """Ask for a new color and apply it."""
        if not self._settings.get_toggle():
            self._prompter.show_information_message(TOGGLED_OFF_MESSAGE)
            return

        selected = self._prompter.show_quick_pick(COLOR_OPTIONS, COLOR_PLACEHOLDER)
        if selected is None or not selected.value:
            return

        self._settings.save_color(selected.value)
        self._manager.recreate()
        self._prompter.show_information_message(
            f"Log color set to {color_label(selected.value)}"
        )
        logger.info(f"Changed log color to {selected.value}")

    def toggle(self) -> None:
        """Turn log dimming on or off."""
        enabled = not self._settings.get_toggle()
        self._settings.save_toggle(enabled)
        self._manager.recreate()
        state = "enabled" if enabled else "disabled"
        self._prompter.show_information_message(f"Logs dimming {state}")
        logger.info(f"Log dimming {state}")
