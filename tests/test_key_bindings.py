"""Tests for key binding parsing and matching."""

from __future__ import annotations

import pytest
from evdev import ecodes

from modeless.input.key_bindings import KeyBinding, KeyEvent, key_name, matches_any, parse_bindings


class TestParse:
    def test_modifier_and_key(self):
        b = KeyBinding.parse("Ctrl+KEY_J")
        assert b.code == ecodes.KEY_J
        assert b.modifiers == frozenset({"ctrl"})

    def test_short_key_names(self):
        assert KeyBinding.parse("j").code == ecodes.KEY_J
        assert KeyBinding.parse("space").code == ecodes.KEY_SPACE
        assert KeyBinding.parse("shift+Enter") == KeyBinding(ecodes.KEY_ENTER, frozenset({"shift"}))

    def test_modifier_aliases(self):
        assert KeyBinding.parse("Control+Super+a").modifiers == frozenset({"ctrl", "meta"})

    @pytest.mark.parametrize("spec", ["", "   ", "Ctrl+", "Hyper+KEY_J", "KEY_NOPE", "Ctrl++J", None])
    def test_invalid_specs(self, spec):
        with pytest.raises(ValueError):
            KeyBinding.parse(spec)

    def test_str_round_trips_through_parse(self):
        b = KeyBinding.parse("shift+ctrl+KEY_J")
        assert str(b) == "Ctrl+Shift+KEY_J"
        assert KeyBinding.parse(str(b)) == b


class TestMatch:
    def test_exact_modifiers_required(self):
        b = KeyBinding.parse("Ctrl+KEY_J")
        assert b.matches(KeyEvent(ecodes.KEY_J, frozenset({"ctrl"})))
        assert not b.matches(KeyEvent(ecodes.KEY_J))
        assert not b.matches(KeyEvent(ecodes.KEY_J, frozenset({"ctrl", "shift"})))
        assert not b.matches(KeyEvent(ecodes.KEY_K, frozenset({"ctrl"})))

    def test_matches_any(self):
        bindings = parse_bindings(["KEY_SPACE", "KEY_DOWN"])
        assert matches_any(bindings, KeyEvent(ecodes.KEY_DOWN))
        assert not matches_any(bindings, KeyEvent(ecodes.KEY_UP))

    def test_parse_bindings_accepts_single_string(self):
        assert parse_bindings("KEY_UP") == [KeyBinding(ecodes.KEY_UP)]


def test_key_name_unknown_code():
    assert key_name(ecodes.KEY_ENTER) == "KEY_ENTER"
    assert key_name(99999) == "99999"
