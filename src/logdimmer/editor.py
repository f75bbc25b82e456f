"""Editor protocols - what the dimming core needs from a hosting editor.

The detection and decoration core only talks to these protocols. The
desktop shell implements them with Qt (see ``logdimmer.qt_host``) and tests
implement them with plain fakes.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING
from typing import Callable
from typing import Protocol

if TYPE_CHECKING:
    from logdimmer.decoration import DecorationStyle
    from logdimmer.log_detector import DisplayRange


class TextDocument(Protocol):
    """A document open in the editor."""

    @property
    def language_id(self) -> str:
        """Language id of the document (e.g. "typescript")."""
        ...

    def get_text(self) -> str:
        """Get the current full text of the document."""
        ...


class Disposable(Protocol):
    """Something that can be released."""

    def dispose(self) -> None:
        """Release it. Calling this again does nothing."""
        ...


class Subscription:
    """Handle of an event subscription.

    Disposing it runs the unsubscribe function once.
    """

    def __init__(self, unsubscribe: Callable[[], None]) -> None:
        self._unsubscribe: Callable[[], None] | None = unsubscribe

    def dispose(self) -> None:
        if self._unsubscribe is None:
            return
        unsubscribe = self._unsubscribe
        self._unsubscribe = None
        unsubscribe()


class DecorationHandle(Protocol):
    """Handle of a style registered with the editor host."""

    def dispose(self) -> None:
        """Release the style and remove it from every editor."""
        ...


class TextEditor(Protocol):
    """An editor showing a document."""

    @property
    def document(self) -> TextDocument:
        """Document shown by this editor."""
        ...

    def set_decorations(
        self, decoration: DecorationHandle, ranges: "list[DisplayRange]"
    ) -> None:
        """Apply a style to ranges, replacing earlier ranges of that style.

        Args:
            decoration: Style handle
            ranges: Ranges to style
        """
        ...


class EditorHost(Protocol):
    """The editor window hosting the dimming core."""

    @property
    def active_text_editor(self) -> TextEditor | None:
        """Editor that currently has focus, if any."""
        ...

    @property
    def visible_text_editors(self) -> list[TextEditor]:
        """Editors currently shown on screen."""
        ...

    def create_text_editor_decoration_type(
        self, style: "DecorationStyle"
    ) -> DecorationHandle:
        """Register a style and return its handle."""
        ...

    def on_did_change_active_text_editor(
        self, callback: Callable[[TextEditor | None], None]
    ) -> Disposable:
        """Subscribe to active editor changes until the result is disposed."""
        ...

    def on_did_change_text_document(
        self, callback: Callable[[TextDocument], None]
    ) -> Disposable:
        """Subscribe to document content changes until the result is disposed."""
        ...


@dataclass(frozen=True)
class QuickPickItem:
    """An entry of a pick list."""

    label: str
    value: str


class Prompter(Protocol):
    """User prompts used by the commands."""

    def show_input_box(
        self,
        prompt: str,
        value: str,
        validate_input: Callable[[str], str | None],
    ) -> str | None:
        """Ask for a line of text.

        Args:
            prompt: Prompt text
            value: Pre-filled value
            validate_input: Returns an error message for invalid input

        Returns:
            The accepted text, or None if cancelled
        """
        ...

    def show_quick_pick(
        self, items: list[QuickPickItem], placeholder: str
    ) -> QuickPickItem | None:
        """Ask the user to pick one item, None if cancelled."""
        ...

    def show_information_message(self, message: str) -> None:
        """Show a short notification."""
        ...
