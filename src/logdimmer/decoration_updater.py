"""Decoration updater - applies the live style to detected log statements."""

import logging

from logdimmer.decoration import DecorationManager
from logdimmer.editor import EditorHost
from logdimmer.editor import TextEditor
from logdimmer.log_detector import find_log_statements

logger = logging.getLogger(__name__)


class DecorationUpdater:
    """Runs the detector on editors and applies the live style."""

    def __init__(self, host: EditorHost, manager: DecorationManager) -> None:
        """Initialize the updater.

        Args:
            host: Editor host providing the editors
            manager: Owner of the live style
        """
        self._host = host
        self._manager = manager

    def update_one(self, editor: TextEditor | None) -> None:
        """Decorate the log statements of one editor.

        Ranges applied earlier under the same style are replaced.

        Args:
            editor: Editor to decorate, None is ignored
        """
        if editor is None:
            return

        decoration = self._manager.decoration
        if decoration is None:
            return

        document = editor.document
        ranges = find_log_statements(document.get_text(), document.language_id)
        editor.set_decorations(decoration, ranges)

    def update_all(self) -> None:
        """Decorate every visible editor."""
        editors = self._host.visible_text_editors
        logger.debug(f"Updating decorations of {len(editors)} visible editors")
        for editor in editors:
            self.update_one(editor)

    def initialize(self) -> None:
        """Decorate the active editor at startup."""
        editor = self._host.active_text_editor
        if editor is not None:
            self.update_one(editor)
