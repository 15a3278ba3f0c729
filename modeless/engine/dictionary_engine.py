"""DictionaryEngine — reference conversion engine backed by a kana dictionary."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import modeless.log  # registers TRACE level and logger.trace()
from modeless.core.errors import EngineRejectedSeed
from modeless.engine.dictionary import load_dictionary
from modeless.engine.kana import romaji_to_hiragana, to_katakana
from modeless.input.key_bindings import KeyBinding, KeyEvent, matches_any, parse_bindings
from modeless.platform.engine_adapter import IConversionEngine, StateListener

if TYPE_CHECKING:
    from modeless.platform.document_adapter import IDocumentAdapter

logger = logging.getLogger(__name__)


class DictionaryEngine(IConversionEngine):
    """Converts a romaji seed to kana and offers dictionary candidates.

    The current candidate is shown as preedit text at the cursor.  While a
    conversion is open the engine owns its next/previous/commit keys in the
    document.  Fed events other than previous/commit keys (including the
    forwarded trigger) advance to the next candidate.  Listeners are
    notified after every change.
    """

    def __init__(
        self,
        document: "IDocumentAdapter",
        dictionary: dict[str, list[str]] | None = None,
        next_keys=("KEY_SPACE", "KEY_DOWN"),
        previous_keys=("KEY_UP",),
        commit_keys=("KEY_ENTER",),
        debug: bool = False,
    ):
        self.document = document
        self.dictionary = dictionary if dictionary is not None else load_dictionary()
        self.next_keys: list[KeyBinding] = parse_bindings(list(next_keys))
        self.previous_keys: list[KeyBinding] = parse_bindings(list(previous_keys))
        self.commit_keys: list[KeyBinding] = parse_bindings(list(commit_keys))
        self.debug = debug

        self._listeners: list[StateListener] = []
        self._converting = False
        self._candidates: list[str] = []
        self._index = 0
        self._preedit_start = 0
        self._preedit_len = 0
        self.last_committed: str = ""

    # -- candidates -----------------------------------------------------

    def candidates_for(self, seed: str) -> list[str]:
        """Return candidates for *seed* or raise :class:`EngineRejectedSeed`."""
        if not seed:
            raise EngineRejectedSeed(seed, "empty text")
        kana, rest = romaji_to_hiragana(seed)
        if rest:
            raise EngineRejectedSeed(seed, f"cannot transliterate {rest!r}")
        found = self.dictionary.get(kana, [])
        return list(dict.fromkeys(found + [kana, to_katakana(kana)]))

    @property
    def candidates(self) -> list[str]:
        return list(self._candidates)

    @property
    def current(self) -> str:
        return self._candidates[self._index] if self._candidates else ""

    # -- IConversionEngine ------------------------------------------------

    def begin(self, seed: str) -> None:
        if self._converting:
            raise RuntimeError(f"DictionaryEngine: conversion of {self.current!r} is still open")
        candidates = self.candidates_for(seed)
        self._candidates = candidates
        self._index = 0
        self._preedit_start = self.document.cursor_position()
        self._preedit_len = 0
        self._converting = True
        for binding in self._owned_keys():
            self.document.register_key_handler(binding, self.feed)
        self._show(self.current)
        logger.debug("DictionaryEngine: %r → %s", seed, self._candidates)
        self._notify()

    def feed(self, event: KeyEvent) -> None:
        if not self._converting:
            logger.trace("DictionaryEngine: ignoring %s, nothing open", event)  # type: ignore[attr-defined]
            return
        if matches_any(self.commit_keys, event):
            self.commit()
            return
        step = -1 if matches_any(self.previous_keys, event) else 1
        self._index = (self._index + step) % len(self._candidates)
        self._show(self.current)
        self._notify()

    def is_converting(self) -> bool:
        return self._converting

    def abort(self) -> None:
        if not self._converting:
            return
        self._show("")
        self._close()

    def commit(self) -> None:
        """Leave the current candidate in the document and close."""
        if not self._converting:
            return
        self.last_committed = self.current
        logger.debug("DictionaryEngine: committed %r", self.last_committed)
        self._close()

    def subscribe(self, listener: StateListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: StateListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # -- internal ---------------------------------------------------------

    def _show(self, text: str) -> None:
        """Replace the preedit region with *text*."""
        if self._preedit_len:
            self.document.delete_range(self._preedit_start, self._preedit_start + self._preedit_len)
        if text:
            self.document.insert_text(self._preedit_start, text)
        self._preedit_len = len(text)

    def _owned_keys(self) -> list[KeyBinding]:
        return self.next_keys + self.previous_keys + self.commit_keys

    def _close(self) -> None:
        for binding in self._owned_keys():
            self.document.unregister_key_handler(binding)
        self._converting = False
        self._candidates = []
        self._index = 0
        self._preedit_len = 0
        self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()
