"""Qt implementation of the editor protocols."""

import itertools
import logging
from typing import Callable

from PySide6.QtCore import QObject
from PySide6.QtCore import Signal
from PySide6.QtGui import QColor
from PySide6.QtGui import QPalette
from PySide6.QtGui import QTextCharFormat
from PySide6.QtGui import QTextCursor
from PySide6.QtGui import QTextDocument
from PySide6.QtWidgets import QInputDialog
from PySide6.QtWidgets import QLineEdit
from PySide6.QtWidgets import QMessageBox
from PySide6.QtWidgets import QPlainTextEdit
from PySide6.QtWidgets import QStatusBar
from PySide6.QtWidgets import QTextEdit
from PySide6.QtWidgets import QWidget

from logdimmer.config import get_config
from logdimmer.decoration import ITALIC
from logdimmer.decoration import DecorationStyle
from logdimmer.editor import QuickPickItem
from logdimmer.editor import Subscription
from logdimmer.log_detector import DisplayRange
from logdimmer.log_detector import Position

logger = logging.getLogger(__name__)

_decoration_keys = itertools.count(1)


def build_text_format(style: DecorationStyle, text_color: QColor) -> QTextCharFormat:
    """Build the character format rendering a decoration style.

    Args:
        style: Decoration style
        text_color: Normal text color of the editor, dimmed by opacity-only styles

    Returns:
        Character format for the decorated ranges
    """
    text_format = QTextCharFormat()
    if style.font_style == ITALIC:
        text_format.setFontItalic(True)

    rgba = style.rgba()
    if rgba is not None:
        text_format.setForeground(QColor(*rgba))
    elif style.opacity is not None:
        color = QColor(text_color)
        color.setAlphaF(min(max(style.opacity, 0.0), 1.0))
        text_format.setForeground(color)

    return text_format


class QtTextDocument:
    """A QTextDocument together with its language id."""

    def __init__(self, document: QTextDocument, language_id: str, path: str = "") -> None:
        """Initialize the document wrapper.

        Args:
            document: Qt document holding the text
            language_id: Language id used to pick the log patterns
            path: File path the text was loaded from
        """
        self._document = document
        self._language_id = language_id
        self.path = path

    @property
    def language_id(self) -> str:
        return self._language_id

    @property
    def qt_document(self) -> QTextDocument:
        return self._document

    def get_text(self) -> str:
        return self._document.toPlainText()


class QtDecorationType:
    """A decoration style registered with a ``QtEditorHost``."""

    def __init__(self, host: "QtEditorHost", style: DecorationStyle) -> None:
        self.key = f"log-decoration-{next(_decoration_keys)}"
        self.style = style
        self._host = host
        self._disposed = False

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        """Remove this style from every editor. Safe to call repeatedly."""
        if self._disposed:
            return
        self._disposed = True
        self._host.release_decoration(self)


class QtTextEditor:
    """A QPlainTextEdit showing a ``QtTextDocument``.

    Decorations are rendered as extra selections, one group per style.
    """

    def __init__(self, widget: QPlainTextEdit, document: QtTextDocument) -> None:
        """Initialize the editor wrapper.

        Args:
            widget: Text edit widget
            document: Document shown by the widget
        """
        self._widget = widget
        self._document = document
        self._selections: dict[str, list[QTextEdit.ExtraSelection]] = {}

    @property
    def document(self) -> QtTextDocument:
        return self._document

    @property
    def widget(self) -> QPlainTextEdit:
        return self._widget

    def set_decorations(
        self, decoration: QtDecorationType, ranges: list[DisplayRange]
    ) -> None:
        """Apply a style to ranges, replacing earlier ranges of that style.

        Args:
            decoration: Style handle
            ranges: Ranges to style
        """
        if decoration.is_disposed:
            logger.debug(f"Ignoring disposed decoration {decoration.key}")
            return

        text_color = self._widget.palette().color(QPalette.ColorRole.Text)
        text_format = build_text_format(decoration.style, text_color)

        selections = []
        for display_range in ranges:
            cursor = QTextCursor(self._widget.document())
            cursor.setPosition(self._to_qt_position(display_range.start))
            cursor.setPosition(
                self._to_qt_position(display_range.end),
                QTextCursor.MoveMode.KeepAnchor,
            )
            selection = QTextEdit.ExtraSelection()
            selection.cursor = cursor
            selection.format = text_format
            selections.append(selection)

        self._selections[decoration.key] = selections
        self._apply_selections()

    def clear_decorations(self, decoration: QtDecorationType) -> None:
        """Remove every range of a style."""
        if self._selections.pop(decoration.key, None) is not None:
            self._apply_selections()

    def decorated_spans(self, decoration: QtDecorationType) -> list[tuple[int, int]]:
        """Get the Qt (start, end) positions decorated with a style."""
        return [
            (selection.cursor.selectionStart(), selection.cursor.selectionEnd())
            for selection in self._selections.get(decoration.key, [])
        ]

    def _to_qt_position(self, position: Position) -> int:
        qt_document = self._widget.document()
        block = qt_document.findBlockByNumber(position.line)
        if not block.isValid():
            return max(qt_document.characterCount() - 1, 0)

        # Qt positions count UTF-16 code units
        prefix = block.text()[: position.character]
        return block.position() + len(prefix.encode("utf-16-le")) // 2

    def _apply_selections(self) -> None:
        self._widget.setExtraSelections(
            [selection for group in self._selections.values() for selection in group]
        )


class QtEditorHost(QObject):
    """Tracks the open editors and relays their notifications.

    Signals:
        active_editor_changed: Emitted with the new active editor (or None)
        document_changed: Emitted with the document whose text changed
    """

    active_editor_changed = Signal(object)
    document_changed = Signal(object)

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._editors: list[QtTextEditor] = []
        self._active_editor: QtTextEditor | None = None
        self._decorations: dict[str, QtDecorationType] = {}

    @property
    def editors(self) -> list[QtTextEditor]:
        return list(self._editors)

    @property
    def active_text_editor(self) -> QtTextEditor | None:
        return self._active_editor

    @property
    def visible_text_editors(self) -> list[QtTextEditor]:
        return [editor for editor in self._editors if editor.widget.isVisible()]

    def add_editor(self, editor: QtTextEditor) -> None:
        """Start tracking an editor.

        Args:
            editor: Editor to track
        """
        if editor in self._editors:
            return
        self._editors.append(editor)
        editor.widget.document().contentsChanged.connect(
            lambda: self.document_changed.emit(editor.document)
        )
        logger.debug(f"Tracking editor for {editor.document.path or 'untitled'}")

    def remove_editor(self, editor: QtTextEditor) -> None:
        """Stop tracking an editor.

        Args:
            editor: Editor to forget
        """
        if editor not in self._editors:
            return
        self._editors.remove(editor)
        if editor is self._active_editor:
            self.set_active_editor(None)

    def set_active_editor(self, editor: QtTextEditor | None) -> None:
        """Make an editor the active one and notify subscribers.

        Args:
            editor: Newly focused editor, or None
        """
        if editor is self._active_editor:
            return
        self._active_editor = editor
        self.active_editor_changed.emit(editor)

    def create_text_editor_decoration_type(
        self, style: DecorationStyle
    ) -> QtDecorationType:
        decoration = QtDecorationType(self, style)
        self._decorations[decoration.key] = decoration
        return decoration

    def release_decoration(self, decoration: QtDecorationType) -> None:
        """Forget a style and clear its ranges from every editor."""
        self._decorations.pop(decoration.key, None)
        for editor in self._editors:
            editor.clear_decorations(decoration)

    @property
    def live_decorations(self) -> list[QtDecorationType]:
        return list(self._decorations.values())

    def on_did_change_active_text_editor(
        self, callback: Callable[[QtTextEditor | None], None]
    ) -> Subscription:
        self.active_editor_changed.connect(callback)
        return Subscription(lambda: self.active_editor_changed.disconnect(callback))

    def on_did_change_text_document(
        self, callback: Callable[[QtTextDocument], None]
    ) -> Subscription:
        self.document_changed.connect(callback)
        return Subscription(lambda: self.document_changed.disconnect(callback))


class QtPrompter:
    """Prompts implemented with Qt dialogs."""

    def __init__(
        self, parent: QWidget | None = None, status_bar: QStatusBar | None = None
    ) -> None:
        """Initialize the prompter.

        Args:
            parent: Parent widget of the dialogs
            status_bar: Status bar used for notifications, message boxes if None
        """
        self._parent = parent
        self._status_bar = status_bar

    def show_input_box(
        self,
        prompt: str,
        value: str,
        validate_input: Callable[[str], str | None],
    ) -> str | None:
        while True:
            text, ok = QInputDialog.getText(
                self._parent, "Log Opacity", prompt, QLineEdit.EchoMode.Normal, value
            )
            if not ok:
                return None

            error = validate_input(text)
            if error is None:
                return text

            QMessageBox.warning(self._parent, "Invalid Value", error)
            value = text

    def show_quick_pick(
        self, items: list[QuickPickItem], placeholder: str
    ) -> QuickPickItem | None:
        labels = [item.label for item in items]
        label, ok = QInputDialog.getItem(
            self._parent, "Log Color", placeholder, labels, 0, False
        )
        if not ok:
            return None
        return next((item for item in items if item.label == label), None)

    def show_information_message(self, message: str) -> None:
        if self._status_bar is not None:
            self._status_bar.showMessage(message, get_config().notification_timeout_ms)
        else:
            QMessageBox.information(self._parent, "LogDimmer", message)
