"""Main window - tabbed source viewer with dimmed log statements."""

import logging
from pathlib import Path

from PySide6.QtGui import QAction
from PySide6.QtGui import QCloseEvent
from PySide6.QtGui import QKeySequence
from PySide6.QtWidgets import QFileDialog
from PySide6.QtWidgets import QMainWindow
from PySide6.QtWidgets import QMessageBox
from PySide6.QtWidgets import QPlainTextEdit
from PySide6.QtWidgets import QTabWidget

from logdimmer.config import get_config
from logdimmer.extension import LogDimmer
from logdimmer.fonts import get_mono_font
from logdimmer.qt_host import QtEditorHost
from logdimmer.qt_host import QtPrompter
from logdimmer.qt_host import QtTextDocument
from logdimmer.qt_host import QtTextEditor
from logdimmer.settings import Settings

logger = logging.getLogger(__name__)

LANGUAGE_IDS_BY_SUFFIX: dict[str, str] = {
    ".ts": "typescript",
    ".tsx": "typescriptreact",
    ".js": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".jsx": "javascriptreact",
    ".go": "go",
    ".cpp": "cpp",
    ".cc": "cpp",
    ".cxx": "cpp",
    ".hpp": "cpp",
    ".hh": "cpp",
    ".h": "cpp",
}

PLAINTEXT = "plaintext"


def language_id_for_path(path: Path) -> str:
    """Guess the language id of a file from its suffix.

    Args:
        path: File path

    Returns:
        Language id, "plaintext" if the suffix is unknown
    """
    return LANGUAGE_IDS_BY_SUFFIX.get(path.suffix.lower(), PLAINTEXT)


class MainWindow(QMainWindow):
    """Main application window.

    Shows one editor tab per opened file. The Logs menu exposes the dimming
    commands.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize the main window.

        Args:
            settings: Dimming settings, loaded from the home directory if None
        """
        super().__init__()
        config = get_config()

        self._font_size = config.default_font_size
        self._host = QtEditorHost(self)
        self._editors_by_widget: dict[QPlainTextEdit, QtTextEditor] = {}

        self._setup_ui()
        self.resize(config.default_window_width, config.default_window_height)

        prompter = QtPrompter(self, self.statusBar())
        self._dimmer = LogDimmer(self._host, settings or Settings(), prompter)
        self._dimmer.activate()

    @property
    def host(self) -> QtEditorHost:
        return self._host

    @property
    def dimmer(self) -> LogDimmer:
        return self._dimmer

    def _setup_ui(self) -> None:
        """Set up the user interface."""
        self.setWindowTitle("LogDimmer")

        self.tabs = QTabWidget()
        self.tabs.setTabsClosable(True)
        self.tabs.setDocumentMode(True)
        self.tabs.currentChanged.connect(self._on_current_tab_changed)
        self.tabs.tabCloseRequested.connect(self._on_close_tab)
        self.setCentralWidget(self.tabs)

        file_menu = self.menuBar().addMenu("&File")

        open_action = QAction("&Open...", self)
        open_action.setShortcut(QKeySequence.StandardKey.Open)
        open_action.triggered.connect(self._on_open)
        file_menu.addAction(open_action)

        close_action = QAction("&Close Tab", self)
        close_action.setShortcut(QKeySequence.StandardKey.Close)
        close_action.triggered.connect(lambda: self._on_close_tab(self.tabs.currentIndex()))
        file_menu.addAction(close_action)

        file_menu.addSeparator()

        quit_action = QAction("&Quit", self)
        quit_action.setShortcut(QKeySequence.StandardKey.Quit)
        quit_action.triggered.connect(self.close)
        file_menu.addAction(quit_action)

        logs_menu = self.menuBar().addMenu("&Logs")

        opacity_action = QAction("Change &Opacity...", self)
        opacity_action.triggered.connect(lambda: self._dimmer.commands.change_opacity())
        logs_menu.addAction(opacity_action)

        color_action = QAction("Change &Color...", self)
        color_action.triggered.connect(lambda: self._dimmer.commands.change_color())
        logs_menu.addAction(color_action)

        toggle_action = QAction("&Toggle Dimming", self)
        toggle_action.triggered.connect(lambda: self._dimmer.commands.toggle())
        logs_menu.addAction(toggle_action)

        self.statusBar().showMessage("Open a source file to dim its log statements")

    def open_file(self, path: Path) -> QtTextEditor | None:
        """Open a source file in a new tab.

        Args:
            path: File to open

        Returns:
            The new editor, or None if the file could not be read
        """
        try:
            text = path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            logger.error(f"Failed to open {path}: {e}")
            QMessageBox.critical(self, "Error", f"Failed to open {path}:\n{e}")
            return None

        return self.open_text(text, language_id_for_path(path), str(path))

    def open_text(self, text: str, language_id: str, title: str) -> QtTextEditor:
        """Show text in a new editor tab.

        Args:
            text: Source code
            language_id: Language id of the source
            title: Tab title or file path

        Returns:
            The new editor
        """
        widget = QPlainTextEdit()
        widget.setLineWrapMode(QPlainTextEdit.LineWrapMode.NoWrap)
        widget.setFont(get_mono_font(self._font_size))
        widget.setPlainText(text)

        editor = QtTextEditor(widget, QtTextDocument(widget.document(), language_id, title))
        self._editors_by_widget[widget] = editor
        self._host.add_editor(editor)

        index = self.tabs.addTab(widget, Path(title).name or title)
        self.tabs.setTabToolTip(index, f"{title} ({language_id})")
        self.tabs.setCurrentIndex(index)
        logger.info(f"Opened {title} as {language_id}")
        return editor

    def _on_open(self) -> None:
        """Handle File > Open."""
        paths, _ = QFileDialog.getOpenFileNames(self, "Open Source Files")
        for path in paths:
            self.open_file(Path(path))

    def _on_current_tab_changed(self, index: int) -> None:
        widget = self.tabs.widget(index)
        self._host.set_active_editor(self._editors_by_widget.get(widget))

    def _on_close_tab(self, index: int) -> None:
        widget = self.tabs.widget(index)
        if widget is None:
            return

        editor = self._editors_by_widget.pop(widget, None)
        self.tabs.removeTab(index)
        if editor is not None:
            self._host.remove_editor(editor)
        widget.deleteLater()

    def closeEvent(self, event: QCloseEvent) -> None:
        """Dispose the decoration when the window closes."""
        self._dimmer.deactivate()
        super().closeEvent(event)
