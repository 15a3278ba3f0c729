"""QtDocumentAdapter — IDocumentAdapter over a PyQt5 QPlainTextEdit.

Offsets are QTextDocument positions (UTF-16 code units), which equal
character offsets for BMP text.  Key events are matched by evdev keycode,
derived from the X11/Wayland native scan code (evdev code + 8).
"""

from __future__ import annotations

import logging
from typing import Callable

from PyQt5.QtCore import QEvent, QObject, Qt
from PyQt5.QtGui import QTextCursor

import modeless.log  # registers TRACE level and logger.trace()
from modeless.input.key_bindings import KeyBinding, KeyEvent
from modeless.platform.document_adapter import IDocumentAdapter, KeyHandler

logger = logging.getLogger(__name__)

# X11 keycodes are evdev keycodes shifted by 8
NATIVE_SCANCODE_OFFSET = 8

_QT_MODIFIERS = (
    (Qt.ControlModifier, "ctrl"),
    (Qt.ShiftModifier, "shift"),
    (Qt.AltModifier, "alt"),
    (Qt.MetaModifier, "meta"),
)


def key_event_from_qt(event) -> KeyEvent:
    """Translate a ``QKeyEvent`` into a :class:`KeyEvent`."""
    mods = event.modifiers()
    modifiers = frozenset(name for flag, name in _QT_MODIFIERS if mods & flag)
    code = event.nativeScanCode() - NATIVE_SCANCODE_OFFSET
    return KeyEvent(code=code, modifiers=modifiers, text=event.text())


class _KeyFilter(QObject):
    """Event filter that routes bound key presses to handlers."""

    def __init__(self, lookup: Callable[[KeyEvent], KeyHandler | None], parent=None):
        super().__init__(parent)
        self._lookup = lookup

    def eventFilter(self, obj, event):  # noqa: N802 (Qt API)
        if event.type() != QEvent.KeyPress:
            return False
        key_event = key_event_from_qt(event)
        handler = self._lookup(key_event)
        if handler is None:
            return False
        logger.trace("Qt key %s handled", key_event)  # type: ignore[attr-defined]
        handler(key_event)
        return True


class QtDocumentAdapter(IDocumentAdapter):
    """Wraps a ``QPlainTextEdit``; messages go to *status_bar* if given."""

    MESSAGE_TIMEOUT_MS = 3000

    def __init__(self, editor, status_bar=None):
        self.editor = editor
        self.status_bar = status_bar
        self._handlers: dict[KeyBinding, KeyHandler] = {}
        self._filter = _KeyFilter(self._find_handler, parent=editor)
        editor.installEventFilter(self._filter)

    def _find_handler(self, event: KeyEvent) -> KeyHandler | None:
        for binding, handler in self._handlers.items():
            if binding.matches(event):
                return handler
        return None

    def _cursor_at(self, pos: int) -> QTextCursor:
        cursor = QTextCursor(self.editor.document())
        cursor.setPosition(pos)
        return cursor

    # -- IDocumentAdapter -----------------------------------------------

    def cursor_position(self) -> int:
        return self.editor.textCursor().position()

    def line_prefix(self, pos: int) -> str:
        block = self.editor.document().findBlock(pos)
        return block.text()[:pos - block.position()]

    def delete_range(self, start: int, end: int) -> None:
        cursor = self._cursor_at(start)
        cursor.setPosition(end, QTextCursor.KeepAnchor)
        cursor.removeSelectedText()

    def insert_text(self, pos: int, text: str) -> None:
        self._cursor_at(pos).insertText(text)

    def register_key_handler(self, binding: KeyBinding, handler: KeyHandler) -> None:
        self._handlers[binding] = handler

    def unregister_key_handler(self, binding: KeyBinding) -> None:
        self._handlers.pop(binding, None)

    def show_message(self, text: str) -> None:
        logger.info("Message: %s", text)
        if self.status_bar is not None:
            self.status_bar.showMessage(text, self.MESSAGE_TIMEOUT_MS)
