"""Typed event definitions (dataclasses)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any


class EventType(Enum):
    # Conversion lifecycle
    CONVERSION_START = auto()
    CONVERSION_COMMIT = auto()
    CONVERSION_CANCELLED = auto()
    # Recoverable failures
    NO_CANDIDATE = auto()
    SEED_REJECTED = auto()
    # Controller lifecycle
    CONTROLLER_ENABLED = auto()
    CONTROLLER_DISABLED = auto()


@dataclass
class Event:
    type: EventType
    data: Any
    timestamp: float


@dataclass
class ConversionEventData:
    anchor: int
    original: str
    reason: str = ""    # "cancel" | "disable" | "rejected" | ""
    error: Exception | None = None
