"""State transition rules for the conversion controller."""

from __future__ import annotations

from modeless.core.states import State


# Allowed transitions: {from_state: {event_name: to_state}}
TRANSITIONS: dict[State, dict[str, State]] = {
    State.IDLE: {
        "trigger_found": State.CONVERTING,
        "trigger_missing": State.IDLE,
        "cancel": State.IDLE,
    },
    State.CONVERTING: {
        "trigger": State.CONVERTING,
        "finished": State.IDLE,
        "cancel": State.IDLE,
        "seed_rejected": State.IDLE,
        "disable": State.IDLE,
    },
}


def can_transition(from_state: State, event_name: str) -> bool:
    return event_name in TRANSITIONS.get(from_state, {})


def next_state(from_state: State, event_name: str) -> State:
    try:
        return TRANSITIONS[from_state][event_name]
    except KeyError:
        raise ValueError(f"No transition from {from_state!r} on event {event_name!r}")
