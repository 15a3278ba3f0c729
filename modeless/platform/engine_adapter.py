"""IConversionEngine interface — what the controller needs from an engine."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

from modeless.input.key_bindings import KeyEvent

StateListener = Callable[[], None]


class IConversionEngine(ABC):
    """A conversion engine owns its own sub-session (candidates, paging, commit).

    The controller starts it, forwards trigger presses, commits or aborts it
    when the session is ended from outside, and listens for "state changed"
    notifications to learn when it is done.
    """

    @abstractmethod
    def begin(self, seed: str) -> None:
        """Open a conversion seeded with *seed*.

        Raises :class:`modeless.core.errors.EngineRejectedSeed` if the seed
        cannot be converted.
        """

    @abstractmethod
    def feed(self, event: KeyEvent) -> None:
        """Deliver a raw input event to the open conversion."""

    @abstractmethod
    def is_converting(self) -> bool: ...

    @abstractmethod
    def abort(self) -> None:
        """Drop the open conversion, removing anything it put in the document."""

    @abstractmethod
    def commit(self) -> None:
        """Accept what the open conversion shows and close it.

        Must release everything the conversion holds (key handlers included)
        and notify listeners.  A no-op when nothing is open.
        """

    @abstractmethod
    def subscribe(self, listener: StateListener) -> None: ...

    @abstractmethod
    def unsubscribe(self, listener: StateListener) -> None: ...
