"""Pytest configuration and shared fixtures for LogDimmer tests."""

import os
from pathlib import Path
from typing import Callable

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from logdimmer.decoration import DecorationStyle  # noqa: E402
from logdimmer.editor import Subscription  # noqa: E402
from logdimmer.log_detector import DisplayRange  # noqa: E402


class FakeDocument:
    """In-memory document."""

    def __init__(self, text: str, language_id: str = "typescript") -> None:
        self.text = text
        self.language_id = language_id

    def get_text(self) -> str:
        return self.text


class FakeDecoration:
    """Decoration handle counting its disposals."""

    def __init__(self, style: DecorationStyle) -> None:
        self.style = style
        self.dispose_count = 0

    def dispose(self) -> None:
        self.dispose_count += 1


class FakeEditor:
    """Editor recording the ranges applied per decoration."""

    def __init__(self, document: FakeDocument) -> None:
        self.document = document
        self.decorations: dict[FakeDecoration, list[DisplayRange]] = {}
        self.set_decorations_calls = 0

    def set_decorations(self, decoration: FakeDecoration, ranges: list[DisplayRange]) -> None:
        self.set_decorations_calls += 1
        self.decorations[decoration] = list(ranges)


class FakeHost:
    """Editor host with explicit editors and callback lists."""

    def __init__(self) -> None:
        self.active_text_editor: FakeEditor | None = None
        self.visible_text_editors: list[FakeEditor] = []
        self.created: list[FakeDecoration] = []
        self.active_editor_callbacks: list[Callable] = []
        self.document_callbacks: list[Callable] = []

    def create_text_editor_decoration_type(self, style: DecorationStyle) -> FakeDecoration:
        decoration = FakeDecoration(style)
        self.created.append(decoration)
        return decoration

    def on_did_change_active_text_editor(self, callback: Callable) -> Subscription:
        self.active_editor_callbacks.append(callback)
        return Subscription(lambda: self.active_editor_callbacks.remove(callback))

    def on_did_change_text_document(self, callback: Callable) -> Subscription:
        self.document_callbacks.append(callback)
        return Subscription(lambda: self.document_callbacks.remove(callback))

    def fire_active_editor_changed(self, editor: FakeEditor | None) -> None:
        self.active_text_editor = editor
        for callback in self.active_editor_callbacks:
            callback(editor)

    def fire_document_changed(self, document: FakeDocument) -> None:
        for callback in self.document_callbacks:
            callback(document)

    @property
    def live_decorations(self) -> list[FakeDecoration]:
        return [decoration for decoration in self.created if decoration.dispose_count == 0]


class FakePrompter:
    """Prompter returning canned answers and recording messages."""

    def __init__(self) -> None:
        self.input_value: str | None = None
        self.picked = None
        self.messages: list[str] = []
        self.input_calls: list[tuple[str, str]] = []

    def show_input_box(self, prompt: str, value: str, validate_input: Callable) -> str | None:
        self.input_calls.append((prompt, value))
        return self.input_value

    def show_quick_pick(self, items: list, placeholder: str):
        return self.picked

    def show_information_message(self, message: str) -> None:
        self.messages.append(message)


@pytest.fixture
def mock_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Mock the home directory so settings are written to a temp dir.

    Args:
        tmp_path: Pytest's temporary path fixture
        monkeypatch: Pytest's monkeypatch fixture

    Returns:
        Path to the mocked settings directory.
    """
    monkeypatch.setattr(Path, "home", lambda: tmp_path)
    return tmp_path / ".logdimmer"


@pytest.fixture
def host() -> FakeHost:
    """Provide an editor host without editors."""
    return FakeHost()


@pytest.fixture
def prompter() -> FakePrompter:
    """Provide a prompter with no answers."""
    return FakePrompter()


@pytest.fixture
def make_editor() -> Callable[..., FakeEditor]:
    """Provide a factory for editors over in-memory documents."""

    def _make(text: str, language_id: str = "typescript") -> FakeEditor:
        return FakeEditor(FakeDocument(text, language_id))

    return _make
