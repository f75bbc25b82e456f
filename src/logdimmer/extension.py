"""Activation of log dimming inside an editor host."""

import logging

from logdimmer.commands import LogCommands
from logdimmer.decoration import DecorationManager
from logdimmer.decoration_updater import DecorationUpdater
from logdimmer.editor import EditorHost
from logdimmer.editor import Prompter
from logdimmer.event_listeners import EventWiring
from logdimmer.event_listeners import register_event_listeners
from logdimmer.settings import Settings

logger = logging.getLogger(__name__)


class LogDimmer:
    """Log dimming activated in one editor host."""

    def __init__(
        self,
        host: EditorHost,
        settings: Settings,
        prompter: Prompter,
    ) -> None:
        """Build the decoration components.

        Args:
            host: Editor host
            settings: Persisted dimming settings
            prompter: User prompts for the commands
        """
        self.settings = settings
        self.manager = DecorationManager(host, settings)
        self.updater = DecorationUpdater(host, self.manager)
        self.manager.set_recreated_callback(self.updater.update_all)
        self.commands = LogCommands(settings, self.manager, self.updater, prompter)
        self._host = host
        self._wiring: EventWiring | None = None

    @property
    def wiring(self) -> EventWiring | None:
        """Subscribed event handlers, None before activation."""
        return self._wiring

    def activate(self) -> None:
        """Create the style, decorate the active editor and subscribe to events."""
        if self._wiring is not None:
            logger.warning("Log dimming already activated")
            return

        if self.settings.get_toggle():
            self.manager.create()
        self.updater.initialize()
        self._wiring = register_event_listeners(
            self._host, self.settings, self.manager, self.updater
        )
        logger.info("Log dimming activated")

    def deactivate(self) -> None:
        """Stop listening to editor and settings changes and remove the style."""
        if self._wiring is not None:
            self._wiring.dispose()
            self._wiring = None
        self.manager.dispose()
        logger.info("Log dimming deactivated")
