"""Event listeners keeping decorations in sync with the editor."""

import logging

from logdimmer.decoration import DecorationManager
from logdimmer.decoration_updater import DecorationUpdater
from logdimmer.editor import Disposable
from logdimmer.editor import EditorHost
from logdimmer.editor import Subscription
from logdimmer.editor import TextDocument
from logdimmer.editor import TextEditor
from logdimmer.settings import OPACITY_KEY
from logdimmer.settings import SECTION
from logdimmer.settings import ConfigurationChange
from logdimmer.settings import Settings

logger = logging.getLogger(__name__)

OPACITY_SETTING = f"{SECTION}.{OPACITY_KEY}"


class EventWiring:
    """Handlers for the editor and settings notifications.

    The hosting shell delivers the notifications, one at a time, to the
    ``on_*`` methods.
    """

    def __init__(
        self,
        host: EditorHost,
        manager: DecorationManager,
        updater: DecorationUpdater,
    ) -> None:
        """Initialize the handlers.

        Args:
            host: Editor host
            manager: Owner of the live style
            updater: Decoration updater
        """
        self._host = host
        self._manager = manager
        self._updater = updater
        self._subscriptions: list[Disposable] = []

    def add_subscription(self, subscription: Disposable) -> None:
        self._subscriptions.append(subscription)

    def dispose(self) -> None:
        """Unsubscribe every handler from the host and the settings."""
        subscriptions, self._subscriptions = self._subscriptions, []
        for subscription in subscriptions:
            subscription.dispose()
        if subscriptions:
            logger.info("Unregistered event listeners")

    def on_active_editor_changed(self, editor: TextEditor | None) -> None:
        """Decorate the newly active editor."""
        self._updater.update_one(editor)

    def on_document_changed(self, document: TextDocument) -> None:
        """Re-decorate the active editor when its document changed.

        Changes of documents not shown in the active editor are ignored.
        """
        editor = self._host.active_text_editor
        if editor is not None and editor.document is document:
            self._updater.update_one(editor)

    def on_configuration_changed(self, change: ConfigurationChange) -> None:
        """Rebuild the style when the opacity setting changed.

        Color changes are applied by the change color command instead.
        """
        if not change.affects_configuration(OPACITY_SETTING):
            return

        logger.debug(f"Opacity setting changed: {change}")
        self._manager.recreate()
        self._updater.update_all()


def register_event_listeners(
    host: EditorHost,
    settings: Settings,
    manager: DecorationManager,
    updater: DecorationUpdater,
) -> EventWiring:
    """Subscribe the event handlers to the host and the settings.

    Args:
        host: Editor host delivering editor notifications
        settings: Settings delivering configuration changes
        manager: Owner of the live style
        updater: Decoration updater

    Returns:
        The subscribed handlers
    """
    wiring = EventWiring(host, manager, updater)
    wiring.add_subscription(
        host.on_did_change_active_text_editor(wiring.on_active_editor_changed)
    )
    wiring.add_subscription(host.on_did_change_text_document(wiring.on_document_changed))

    listener = wiring.on_configuration_changed
    settings.add_change_listener(listener)
    wiring.add_subscription(Subscription(lambda: settings.remove_change_listener(listener)))
    logger.info("Registered event listeners")
    return wiring
