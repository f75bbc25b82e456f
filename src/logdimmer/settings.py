"""Settings management for persisting the dimming preferences."""

import json
import logging
import re
from pathlib import Path
from typing import Any
from typing import Callable

from logdimmer.exceptions import InvalidColorError
from logdimmer.exceptions import SettingsPersistenceError

logger = logging.getLogger(__name__)

SECTION = "logdimmer"

OPACITY_KEY = "opacity"
COLOR_KEY = "color"
ENABLED_KEY = "enabled"

DEFAULT_OPACITY = 50
DEFAULT_COLOR = "#808080"
DEFAULT_ENABLED = True

# Sentinel color: dim with opacity only, keep the document's text color
DEFAULT_COLOR_SENTINEL = "default"

HEX_COLOR_RE = re.compile(r"#[0-9a-fA-F]{6}")


def is_valid_color(color: object) -> bool:
    """Check that a value is "#RRGGBB" or the "default" sentinel."""
    if not isinstance(color, str):
        return False
    return color == DEFAULT_COLOR_SENTINEL or HEX_COLOR_RE.fullmatch(color) is not None


class ConfigurationChange:
    """Describes which settings changed in one save."""

    def __init__(self, keys: list[str]) -> None:
        """Initialize the change event.

        Args:
            keys: Changed keys without the section prefix
        """
        self.keys = [f"{SECTION}.{key}" for key in keys]

    def affects_configuration(self, section: str) -> bool:
        """Check whether a section or key is affected by this change.

        Args:
            section: A section ("logdimmer") or full key ("logdimmer.opacity")

        Returns:
            True if the key or one of its parents changed
        """
        return any(key == section or key.startswith(f"{section}.") for key in self.keys)

    def __repr__(self) -> str:
        return f"ConfigurationChange({self.keys!r})"


ChangeListener = Callable[[ConfigurationChange], None]


class Settings:
    """Manages persistence of the dimming settings.

    Settings are stored in a JSON file in the user's home directory.
    """

    def __init__(self) -> None:
        """Initialize settings manager."""
        self.settings_dir = Path.home() / ".logdimmer"
        self.settings_file = self.settings_dir / "settings.json"
        self._data: dict[str, Any] = {}
        self._listeners: list[ChangeListener] = []
        self._load()

    def _load(self) -> None:
        """Load settings from disk."""
        if not self.settings_file.exists():
            logger.info(f"No settings file at {self.settings_file}, using defaults")
            self._data = {}
            return

        try:
            with open(self.settings_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to load settings: {e}")
            self._data = {}
            return

        if not isinstance(data, dict):
            logger.error(f"Ignoring malformed settings file: {self.settings_file}")
            data = {}
        self._data = data
        logger.info(f"Loaded settings from: {self.settings_file}")

    def _save(self, key: str, value: Any) -> None:
        """Write one value to disk and notify listeners.

        Args:
            key: Setting key without the section prefix
            value: New value

        Raises:
            SettingsPersistenceError: If the file cannot be written
        """
        data = {**self._data, key: value}
        try:
            self.settings_dir.mkdir(parents=True, exist_ok=True)
            with open(self.settings_file, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
        except OSError as e:
            raise SettingsPersistenceError(
                f"Failed to save '{key}' to {self.settings_file}: {e}"
            ) from e

        self._data = data
        logger.info(f"Saved setting {SECTION}.{key} = {value!r}")
        self._notify(ConfigurationChange([key]))

    def _notify(self, change: ConfigurationChange) -> None:
        for listener in list(self._listeners):
            listener(change)

    def add_change_listener(self, listener: ChangeListener) -> None:
        """Register a callback invoked after every successful save.

        Args:
            listener: Callback receiving the change description
        """
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_change_listener(self, listener: ChangeListener) -> None:
        """Unregister a change callback.

        Args:
            listener: Previously registered callback
        """
        if listener in self._listeners:
            self._listeners.remove(listener)

    def get_opacity(self) -> float:
        """Get the opacity of log statements.

        Returns:
            Opacity between 0 (invisible) and 100 (normal)
        """
        opacity = self._data.get(OPACITY_KEY, DEFAULT_OPACITY)
        if isinstance(opacity, bool) or not isinstance(opacity, (int, float)):
            logger.warning(f"Ignoring invalid opacity setting: {opacity!r}")
            return DEFAULT_OPACITY
        if not 0 <= opacity <= 100:
            logger.warning(f"Ignoring out of range opacity setting: {opacity!r}")
            return DEFAULT_OPACITY
        return opacity

    def save_opacity(self, opacity: float) -> None:
        """Save the opacity of log statements.

        Args:
            opacity: Opacity between 0 and 100
        """
        self._save(OPACITY_KEY, opacity)

    def get_color(self) -> str:
        """Get the color of log statements.

        Returns:
            "#RRGGBB" hex color or "default"
        """
        color = self._data.get(COLOR_KEY, DEFAULT_COLOR)
        if not is_valid_color(color):
            logger.warning(f"Ignoring invalid color setting: {color!r}")
            return DEFAULT_COLOR
        return color

    def save_color(self, color: str) -> None:
        """Save the color of log statements.

        Args:
            color: "#RRGGBB" hex color or "default"

        Raises:
            InvalidColorError: If the color is malformed
        """
        if not is_valid_color(color):
            raise InvalidColorError(f"Invalid color: {color!r}")
        self._save(COLOR_KEY, color)

    def get_toggle(self) -> bool:
        """Get whether log dimming is enabled.

        Returns:
            True if enabled
        """
        enabled = self._data.get(ENABLED_KEY, DEFAULT_ENABLED)
        if not isinstance(enabled, bool):
            logger.warning(f"Ignoring invalid enabled setting: {enabled!r}")
            return DEFAULT_ENABLED
        return enabled

    def save_toggle(self, enabled: bool) -> None:
        """Enable or disable log dimming.

        Args:
            enabled: Whether dimming should be applied
        """
        self._save(ENABLED_KEY, enabled)
