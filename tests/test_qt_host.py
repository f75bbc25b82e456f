"""Tests for the Qt editor host and main window."""

from pathlib import Path

import pytest
from PySide6.QtGui import QColor
from PySide6.QtWidgets import QPlainTextEdit

from logdimmer.decoration import DecorationStyle
from logdimmer.log_detector import DisplayRange
from logdimmer.log_detector import Position
from logdimmer.log_detector import find_log_statements
from logdimmer.main_window import MainWindow
from logdimmer.main_window import language_id_for_path
from logdimmer.qt_host import QtEditorHost
from logdimmer.qt_host import QtTextDocument
from logdimmer.qt_host import QtTextEditor
from logdimmer.qt_host import build_text_format
from logdimmer.settings import Settings


@pytest.fixture
def qt_host(qtbot) -> QtEditorHost:
    return QtEditorHost()


@pytest.fixture
def make_qt_editor(qtbot, qt_host):
    """Provide a factory for tracked editors."""

    def _make(text: str, language_id: str = "typescript") -> QtTextEditor:
        widget = QPlainTextEdit()
        qtbot.addWidget(widget)
        widget.setPlainText(text)
        editor = QtTextEditor(widget, QtTextDocument(widget.document(), language_id))
        qt_host.add_editor(editor)
        return editor

    return _make


def test_build_text_format_colored(qtbot) -> None:
    """Test that colored styles set a translucent foreground."""
    text_format = build_text_format(DecorationStyle.colored("#808080", 75), QColor("black"))

    assert text_format.fontItalic()
    assert text_format.foreground().color() == QColor(128, 128, 128, 191)


def test_build_text_format_opacity_only(qtbot) -> None:
    """Test that opacity-only styles dim the editor's text color."""
    text_format = build_text_format(DecorationStyle.opacity_only(40), QColor(255, 0, 0))

    color = text_format.foreground().color()
    assert (color.red(), color.green(), color.blue()) == (255, 0, 0)
    assert color.alphaF() == pytest.approx(0.4, abs=0.01)


def test_set_decorations(qt_host, make_qt_editor) -> None:
    """Test that ranges become extra selections."""
    editor = make_qt_editor("a();\nconsole.log(x);")
    decoration = qt_host.create_text_editor_decoration_type(DecorationStyle.opacity_only(50))

    editor.set_decorations(decoration, [DisplayRange(Position(1, 0), Position(1, 15))])

    assert editor.decorated_spans(decoration) == [(5, 20)]
    assert len(editor.widget.extraSelections()) == 1


def test_set_decorations_replaces(qt_host, make_qt_editor) -> None:
    """Test that applying a style again replaces its ranges."""
    editor = make_qt_editor("console.log(1);\nconsole.log(2);")
    decoration = qt_host.create_text_editor_decoration_type(DecorationStyle.opacity_only(50))

    editor.set_decorations(decoration, find_log_statements(editor.document.get_text(), "typescript"))
    editor.set_decorations(decoration, [])

    assert editor.decorated_spans(decoration) == []
    assert editor.widget.extraSelections() == []


def test_utf16_positions(qt_host, make_qt_editor) -> None:
    """Test that characters outside the BMP are counted as two Qt positions."""
    editor = make_qt_editor("😀 console.log(x);")
    decoration = qt_host.create_text_editor_decoration_type(DecorationStyle.opacity_only(50))

    editor.set_decorations(decoration, find_log_statements(editor.document.get_text(), "typescript"))

    assert editor.decorated_spans(decoration) == [(3, 18)]


def test_dispose_clears_editors(qt_host, make_qt_editor) -> None:
    """Test that disposing a style removes its ranges everywhere."""
    first = make_qt_editor("console.log(1);")
    second = make_qt_editor("console.log(2);")
    decoration = qt_host.create_text_editor_decoration_type(DecorationStyle.opacity_only(50))
    for editor in (first, second):
        editor.set_decorations(decoration, find_log_statements(editor.document.get_text(), "typescript"))

    decoration.dispose()
    decoration.dispose()
    first.set_decorations(decoration, [DisplayRange(Position(0, 0), Position(0, 1))])

    assert qt_host.live_decorations == []
    assert first.widget.extraSelections() == []
    assert second.widget.extraSelections() == []


def test_document_changed_signal(qtbot, qt_host, make_qt_editor) -> None:
    """Test that text edits are relayed with the edited document."""
    editor = make_qt_editor("const a = 1;")

    with qtbot.waitSignal(qt_host.document_changed) as blocker:
        editor.widget.appendPlainText("console.log(a);")

    assert blocker.args == [editor.document]


def test_active_editor_signal(qtbot, qt_host, make_qt_editor) -> None:
    """Test that focus changes are relayed once."""
    editor = make_qt_editor("console.log(1);")

    with qtbot.waitSignal(qt_host.active_editor_changed) as blocker:
        qt_host.set_active_editor(editor)
    with qtbot.assertNotEmitted(qt_host.active_editor_changed):
        qt_host.set_active_editor(editor)

    assert blocker.args == [editor]
    assert qt_host.active_text_editor is editor


def test_remove_active_editor(qtbot, qt_host, make_qt_editor) -> None:
    """Test that removing the active editor leaves no active editor."""
    editor = make_qt_editor("console.log(1);")
    qt_host.set_active_editor(editor)

    with qtbot.waitSignal(qt_host.active_editor_changed) as blocker:
        qt_host.remove_editor(editor)

    assert blocker.args == [None]
    assert qt_host.editors == []


def test_visible_text_editors(qt_host, make_qt_editor) -> None:
    """Test that only shown widgets count as visible."""
    shown = make_qt_editor("console.log(1);")
    make_qt_editor("console.log(2);")

    shown.widget.show()

    assert qt_host.visible_text_editors == [shown]


@pytest.mark.parametrize(
    ("name", "language_id"),
    [("app.ts", "typescript"), ("main.GO", "go"), ("io.hpp", "cpp"), ("notes.txt", "plaintext")],
)
def test_language_id_for_path(name: str, language_id: str) -> None:
    """Test language detection from file suffixes."""
    assert language_id_for_path(Path(name)) == language_id


@pytest.fixture
def main_window(qtbot, mock_settings):
    """Create a MainWindow instance for testing."""
    window = MainWindow(Settings())
    qtbot.addWidget(window)
    return window


def test_main_window_dims_opened_text(main_window) -> None:
    """Test that opening text decorates it and edits re-decorate it."""
    editor = main_window.open_text("x();\nconsole.log(1);", "typescript", "app.ts")
    decoration = main_window.dimmer.manager.decoration

    assert main_window.host.active_text_editor is editor
    assert editor.decorated_spans(decoration) == [(5, 20)]

    editor.widget.appendPlainText("console.log(2);")

    assert editor.decorated_spans(decoration) == [(5, 20), (21, 36)]


def test_main_window_open_file(main_window, tmp_path: Path) -> None:
    """Test that files are opened with the language of their suffix."""
    path = tmp_path / "main.go"
    path.write_text('logger.Info("started")\n', encoding="utf-8")

    editor = main_window.open_file(path)

    assert editor.document.language_id == "go"
    assert editor.document.path == str(path)
    assert editor.decorated_spans(main_window.dimmer.manager.decoration) == [(0, 22)]
    assert main_window.tabs.count() == 1


def test_main_window_toggle_clears_decorations(main_window) -> None:
    """Test that toggling dimming off removes the ranges."""
    editor = main_window.open_text("console.log(1);", "javascript", "app.js")

    main_window.dimmer.commands.toggle()

    assert main_window.dimmer.manager.decoration is None
    assert editor.widget.extraSelections() == []
    assert main_window.statusBar().currentMessage() == "Logs dimming disabled"


def test_main_window_close_disposes(main_window) -> None:
    """Test that closing the window disposes the style."""
    main_window.open_text("console.log(1);", "typescript", "app.ts")
    main_window.show()

    main_window.close()

    assert main_window.host.live_decorations == []


def test_subscriptions_disconnect(qt_host, make_qt_editor) -> None:
    """Test that disposed subscriptions stop receiving signals."""
    editor = make_qt_editor("const a = 1;")
    active_changes = []
    document_changes = []

    def on_active_changed(changed_editor) -> None:
        active_changes.append(changed_editor)

    def on_document_changed(document) -> None:
        document_changes.append(document)

    active_subscription = qt_host.on_did_change_active_text_editor(on_active_changed)
    document_subscription = qt_host.on_did_change_text_document(on_document_changed)
    qt_host.set_active_editor(editor)
    editor.widget.appendPlainText("console.log(a);")

    seen_documents = len(document_changes)

    active_subscription.dispose()
    document_subscription.dispose()
    active_subscription.dispose()
    qt_host.set_active_editor(None)
    editor.widget.appendPlainText("console.log(b);")

    assert active_changes == [editor]
    assert seen_documents >= 1
    assert len(document_changes) == seen_documents
