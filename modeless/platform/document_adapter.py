"""IDocumentAdapter interface and the in-memory BufferDocument."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Callable

import modeless.log  # registers TRACE level and logger.trace()
from modeless.input.key_bindings import KeyBinding, KeyEvent

logger = logging.getLogger(__name__)

KeyHandler = Callable[[KeyEvent], None]


class IDocumentAdapter(ABC):
    """What the controller and engines need from the host editor.

    Offsets count characters from the start of the document.  Inserting at
    or before the cursor moves the cursor along with the text; deleting a
    range that contains or precedes the cursor pulls it back.
    """

    @abstractmethod
    def cursor_position(self) -> int: ...

    @abstractmethod
    def line_prefix(self, pos: int) -> str:
        """Text from the start of the line containing *pos* up to *pos*."""

    @abstractmethod
    def delete_range(self, start: int, end: int) -> None: ...

    @abstractmethod
    def insert_text(self, pos: int, text: str) -> None: ...

    @abstractmethod
    def register_key_handler(self, binding: KeyBinding, handler: KeyHandler) -> None: ...

    @abstractmethod
    def unregister_key_handler(self, binding: KeyBinding) -> None: ...

    @abstractmethod
    def show_message(self, text: str) -> None: ...


# ---------------------------------------------------------------------------
# BufferDocument: concrete in-memory implementation
# ---------------------------------------------------------------------------

class BufferDocument(IDocumentAdapter):
    """Plain string buffer with a cursor.

    Used by the CLI and tests.  :meth:`press` routes a key event to the
    registered handler for it; unbound keys with text are inserted at the
    cursor like ordinary typing.
    """

    def __init__(self, text: str = "", cursor: int | None = None):
        self.text = text
        self._cursor = len(text) if cursor is None else cursor
        if not 0 <= self._cursor <= len(text):
            raise ValueError(f"Cursor {self._cursor} outside document of length {len(text)}")
        self._handlers: dict[KeyBinding, KeyHandler] = {}
        self.messages: list[str] = []

    def cursor_position(self) -> int:
        return self._cursor

    def set_cursor_position(self, pos: int) -> None:
        self._cursor = max(0, min(pos, len(self.text)))

    def line_prefix(self, pos: int) -> str:
        line_start = self.text.rfind("\n", 0, pos) + 1
        return self.text[line_start:pos]

    def delete_range(self, start: int, end: int) -> None:
        if not 0 <= start <= end <= len(self.text):
            raise ValueError(f"Invalid range {start}..{end} for document of length {len(self.text)}")
        self.text = self.text[:start] + self.text[end:]
        if self._cursor >= end:
            self._cursor -= end - start
        elif self._cursor > start:
            self._cursor = start

    def insert_text(self, pos: int, text: str) -> None:
        if not 0 <= pos <= len(self.text):
            raise ValueError(f"Invalid position {pos} for document of length {len(self.text)}")
        self.text = self.text[:pos] + text + self.text[pos:]
        if self._cursor >= pos:
            self._cursor += len(text)

    def register_key_handler(self, binding: KeyBinding, handler: KeyHandler) -> None:
        self._handlers[binding] = handler

    def unregister_key_handler(self, binding: KeyBinding) -> None:
        self._handlers.pop(binding, None)

    def show_message(self, text: str) -> None:
        logger.info("Message: %s", text)
        self.messages.append(text)

    def press(self, event: KeyEvent) -> bool:
        """Dispatch *event*; returns True if a registered handler consumed it."""
        for binding, handler in list(self._handlers.items()):
            if binding.matches(event):
                logger.trace("BufferDocument: %s → handler", binding)  # type: ignore[attr-defined]
                handler(event)
                return True
        if event.text:
            self.insert_text(self._cursor, event.text)
        return False
