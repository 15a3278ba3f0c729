"""Tests for Session bookkeeping and the transition table."""

from __future__ import annotations

import pytest

from modeless.core.states import Session, State
from modeless.core.transitions import TRANSITIONS, can_transition, next_state


class TestSession:
    def test_initially_inactive(self):
        s = Session()
        assert s.active is False

    def test_begin_sets_fields_together(self):
        s = Session()
        s.begin(12, "konna")
        assert s.active is True
        assert s.anchor == 12
        assert s.original_text == "konna"

    def test_clear_resets_everything(self):
        s = Session()
        s.begin(3, "abc")
        s.clear()
        assert s.active is False
        with pytest.raises(RuntimeError):
            _ = s.anchor
        with pytest.raises(RuntimeError):
            _ = s.original_text

    def test_fields_unreadable_when_inactive(self):
        with pytest.raises(RuntimeError):
            _ = Session().anchor

    def test_cannot_begin_twice(self):
        s = Session()
        s.begin(0, "a")
        with pytest.raises(RuntimeError):
            s.begin(1, "b")
        assert s.anchor == 0


class TestTransitions:
    def test_only_two_states(self):
        assert set(TRANSITIONS) == {State.IDLE, State.CONVERTING}

    def test_trigger_found_enters_converting(self):
        assert next_state(State.IDLE, "trigger_found") is State.CONVERTING

    def test_every_converting_exit_returns_idle(self):
        for event in ("finished", "cancel", "seed_rejected", "disable"):
            assert next_state(State.CONVERTING, event) is State.IDLE

    def test_trigger_while_converting_stays(self):
        assert next_state(State.CONVERTING, "trigger") is State.CONVERTING

    def test_finished_not_allowed_from_idle(self):
        assert not can_transition(State.IDLE, "finished")
        with pytest.raises(ValueError):
            next_state(State.IDLE, "finished")
