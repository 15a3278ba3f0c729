"""State definitions and the per-document Session."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class State(Enum):
    IDLE = auto()
    CONVERTING = auto()


@dataclass
class Session:
    """Bookkeeping for one in-progress conversion.

    ``anchor`` and ``original_text`` only mean something while ``active``
    is True; they are written by :meth:`begin` and wiped by :meth:`clear`
    together with the flag.
    """

    active: bool = False
    _anchor: int = 0
    _original_text: str = ""

    def begin(self, anchor: int, original_text: str) -> None:
        if self.active:
            raise RuntimeError("Session already active")
        self._anchor = anchor
        self._original_text = original_text
        self.active = True

    def clear(self) -> None:
        self.active = False
        self._anchor = 0
        self._original_text = ""

    @property
    def anchor(self) -> int:
        if not self.active:
            raise RuntimeError("No active session: anchor is undefined")
        return self._anchor

    @property
    def original_text(self) -> str:
        if not self.active:
            raise RuntimeError("No active session: original_text is undefined")
        return self._original_text
