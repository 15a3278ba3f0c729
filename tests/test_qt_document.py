"""Tests for QtDocumentAdapter (offscreen Qt)."""

from __future__ import annotations

import os
from unittest.mock import MagicMock

import pytest

pytest.importorskip("PyQt5.QtWidgets")

os.environ.setdefault('QT_QPA_PLATFORM', 'offscreen')

from evdev import ecodes  # noqa: E402
from PyQt5.QtCore import QEvent, Qt  # noqa: E402
from PyQt5.QtGui import QKeyEvent  # noqa: E402
from PyQt5.QtWidgets import QApplication, QPlainTextEdit  # noqa: E402

from modeless.core.controller import ConversionController  # noqa: E402
from modeless.core.states import State  # noqa: E402
from modeless.engine.dictionary_engine import DictionaryEngine  # noqa: E402
from modeless.i18n import I18n  # noqa: E402
from modeless.input.key_bindings import KeyBinding  # noqa: E402
from modeless.platform.qt_document import (  # noqa: E402
    NATIVE_SCANCODE_OFFSET,
    QtDocumentAdapter,
    key_event_from_qt,
)


@pytest.fixture(scope="module")
def qapp():
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def editor(qapp):
    widget = QPlainTextEdit()
    yield widget
    widget.deleteLater()


def _set_text(editor, text, cursor=None):
    editor.setPlainText(text)
    tc = editor.textCursor()
    tc.setPosition(len(text) if cursor is None else cursor)
    editor.setTextCursor(tc)


def _key(code, modifiers=Qt.NoModifier, qt_key=0, text=""):
    return QKeyEvent(QEvent.KeyPress, qt_key, modifiers,
                     code + NATIVE_SCANCODE_OFFSET, 0, 0, text)


def test_read_and_edit(editor):
    _set_text(editor, "one\nhello konna")
    doc = QtDocumentAdapter(editor)
    assert doc.cursor_position() == 15
    assert doc.line_prefix(15) == "hello konna"
    doc.delete_range(10, 15)
    assert editor.toPlainText() == "one\nhello "
    assert doc.cursor_position() == 10
    doc.insert_text(10, "こんな")
    assert editor.toPlainText() == "one\nhello こんな"
    assert doc.cursor_position() == 13


def test_key_event_translation(qapp):
    event = _key(ecodes.KEY_J, Qt.ControlModifier | Qt.ShiftModifier, Qt.Key_J, "J")
    key = key_event_from_qt(event)
    assert key.code == ecodes.KEY_J
    assert key.modifiers == frozenset({"ctrl", "shift"})
    assert key.text == "J"


def test_filter_routes_bound_keys(editor):
    doc = QtDocumentAdapter(editor)
    handler = MagicMock()
    doc.register_key_handler(KeyBinding.parse("Ctrl+KEY_J"), handler)
    assert doc._filter.eventFilter(editor, _key(ecodes.KEY_J, Qt.ControlModifier, Qt.Key_J)) is True
    handler.assert_called_once()
    assert doc._filter.eventFilter(editor, _key(ecodes.KEY_K, Qt.ControlModifier, Qt.Key_K)) is False


def test_show_message_uses_status_bar(editor):
    status = MagicMock()
    QtDocumentAdapter(editor, status_bar=status).show_message("hi")
    status.showMessage.assert_called_once_with("hi", QtDocumentAdapter.MESSAGE_TIMEOUT_MS)


def test_full_round_trip_in_editor(editor):
    _set_text(editor, "hello world konna")
    doc = QtDocumentAdapter(editor)
    ctl = ConversionController(doc, DictionaryEngine(doc), i18n=I18n("en"))
    ctl.enable()
    doc._filter.eventFilter(editor, _key(ecodes.KEY_J, Qt.ControlModifier, Qt.Key_J))
    assert ctl.state is State.CONVERTING
    assert editor.toPlainText() == "hello world こんな"
    doc._filter.eventFilter(editor, _key(ecodes.KEY_G, Qt.ControlModifier, Qt.Key_G))
    assert ctl.state is State.IDLE
    assert editor.toPlainText() == "hello world konna"
    assert editor.textCursor().position() == 17
