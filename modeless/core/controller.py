"""ConversionController — modeless conversion of the token before the cursor."""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import TYPE_CHECKING

import modeless.log  # registers TRACE level and logger.trace()
from modeless.core.errors import EngineRejectedSeed, NoCandidateFound
from modeless.core.events import ConversionEventData, Event, EventType
from modeless.core.states import Session, State
from modeless.core.token_detector import DEFAULT_PATTERN, compile_pattern, find_token
from modeless.core.transitions import can_transition, next_state
from modeless.i18n import I18n
from modeless.input.key_bindings import KeyBinding, KeyEvent

if TYPE_CHECKING:
    from modeless.core.event_bus import EventBus
    from modeless.platform.document_adapter import IDocumentAdapter
    from modeless.platform.engine_adapter import IConversionEngine

logger = logging.getLogger(__name__)

DISABLE_POLICIES = ("commit", "restore")


class ConversionController:
    """Drives one document's conversion session.

    Idle: a trigger removes the token before the cursor and hands it to the
    engine.  Converting: triggers go to the engine unchanged; the session
    ends when the engine reports it is no longer converting (commit) or on
    :meth:`cancel`, which puts the original token back.

    Engine notifications that arrive while a transition is running are
    deferred and re-checked once it completes, so transitions never nest.
    """

    def __init__(
        self,
        document: "IDocumentAdapter",
        engine: "IConversionEngine",
        pattern=DEFAULT_PATTERN,
        convert_key: KeyBinding | str = "Ctrl+KEY_J",
        cancel_key: KeyBinding | str = "Ctrl+KEY_G",
        disable_policy: str = "commit",
        event_bus: "EventBus | None" = None,
        i18n: I18n | None = None,
        debug: bool = False,
    ):
        if disable_policy not in DISABLE_POLICIES:
            raise ValueError(f"Invalid disable_policy {disable_policy!r}; expected one of {DISABLE_POLICIES}")
        compile_pattern(pattern)  # fail early on a bad regex

        self.document = document
        self.engine = engine
        self.pattern = pattern
        self.convert_binding = KeyBinding.parse(convert_key) if isinstance(convert_key, str) else convert_key
        self.cancel_binding = KeyBinding.parse(cancel_key) if isinstance(cancel_key, str) else cancel_key
        self.disable_policy = disable_policy
        self.bus = event_bus
        self.i18n = i18n or I18n()
        self.debug = debug

        self.session = Session()
        self._state = State.IDLE
        self._enabled = False
        self._busy = False
        self._pending_check = False

    @property
    def state(self) -> State:
        return self._state

    @property
    def enabled(self) -> bool:
        return self._enabled

    # ------------------------------------------------------------------
    # Enable / disable
    # ------------------------------------------------------------------

    def enable(self) -> None:
        """Bind the convert and cancel keys in the document."""
        if self._enabled:
            return
        self.document.register_key_handler(self.convert_binding, self.trigger)
        self.document.register_key_handler(self.cancel_binding, self.cancel)
        self._enabled = True
        logger.debug("Controller enabled (convert=%s, cancel=%s)", self.convert_binding, self.cancel_binding)
        self._publish(EventType.CONTROLLER_ENABLED, None)

    def disable(self) -> None:
        """Unbind keys; an active session ends according to ``disable_policy``.

        ``"commit"`` tells the engine to commit whatever it shows and drops
        the session; ``"restore"`` behaves like :meth:`cancel`.  Either way
        the engine is closed and releases its keys.
        """
        if not self._enabled:
            return
        data = None
        if self.session.active:
            data = ConversionEventData(self.session.anchor, self.session.original_text, reason="disable")
            with self._guard():
                if self.disable_policy == "restore":
                    if self.engine.is_converting():
                        self.engine.abort()
                    self._restore()
                elif self.engine.is_converting():
                    self.engine.commit()
                self._finish("disable")
            logger.info("Conversion abandoned by disable (policy=%s)", self.disable_policy)
        self.document.unregister_key_handler(self.convert_binding)
        self.document.unregister_key_handler(self.cancel_binding)
        self._enabled = False
        self._publish(EventType.CONTROLLER_DISABLED, data)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def trigger(self, event: KeyEvent | None = None) -> bool:
        """Handle the ``convert`` command.

        Returns True if a conversion was started or the event was forwarded.
        """
        if self._busy:
            logger.trace("Ignoring nested trigger during a transition")  # type: ignore[attr-defined]
            return False
        if event is None:
            event = KeyEvent(code=self.convert_binding.code, modifiers=self.convert_binding.modifiers)

        if self._state is State.CONVERTING:
            with self._guard():
                self._transition("trigger")
                logger.trace("Forwarding %s to engine", event)  # type: ignore[attr-defined]
                self.engine.feed(event)
            return True

        with self._guard():
            return self._start()

    def cancel(self, event: KeyEvent | None = None) -> bool:
        """Handle the ``cancel`` command; a no-op when nothing is converting."""
        if self._busy:
            logger.trace("Ignoring nested cancel during a transition")  # type: ignore[attr-defined]
            return False
        if not self.session.active:
            logger.trace("Cancel with no session, ignored")  # type: ignore[attr-defined]
            self._transition("cancel")
            return False

        data = ConversionEventData(self.session.anchor, self.session.original_text, reason="cancel")
        with self._guard():
            if self.engine.is_converting():
                self.engine.abort()
            self._restore()
            self._finish("cancel")
        self.document.show_message(self.i18n.t("conversion_cancelled"))
        logger.info("Conversion of %r cancelled", data.original)
        self._publish(EventType.CONVERSION_CANCELLED, data)
        return True

    def finish(self) -> bool:
        """Commit cleanup: drop the session without touching the document.

        Safe to call repeatedly; returns False when there was nothing to do.
        """
        if not self.session.active:
            logger.trace("finish() with no session, ignored")  # type: ignore[attr-defined]
            return False
        data = ConversionEventData(self.session.anchor, self.session.original_text)
        with self._guard():
            self._finish("finished")
        logger.info("Conversion of %r committed", data.original)
        self._publish(EventType.CONVERSION_COMMIT, data)
        return True

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _start(self) -> bool:
        token = find_token(self.document, self.pattern)
        if token is None:
            self._transition("trigger_missing")
            cursor = self.document.cursor_position()
            logger.debug("No token before cursor at %d", cursor)
            self.document.show_message(self.i18n.t("no_candidate"))
            self._publish(EventType.NO_CANDIDATE, NoCandidateFound(cursor))
            return False

        logger.debug("Token %r at %d", token.text, token.start)
        self.document.delete_range(token.start, token.end)
        self.session.begin(token.start, token.text)
        self._transition("trigger_found")
        self.engine.subscribe(self._on_engine_state_changed)
        try:
            self.engine.begin(token.text)
        except EngineRejectedSeed as exc:
            logger.warning("Engine rejected %r: %s", token.text, exc)
            self._undo_start(token, exc, "rejected", exc.reason or str(exc))
            return False
        except Exception as exc:
            logger.exception("Engine failed to start on %r", token.text)
            self._undo_start(token, exc, "engine_error", f"{type(exc).__name__}: {exc}")
            return False

        logger.info("Converting %r at %d", token.text, token.start)
        self._publish(EventType.CONVERSION_START, ConversionEventData(token.start, token.text))
        return True

    def _undo_start(self, token, exc: Exception, reason: str, detail: str) -> None:
        """Put the token back after ``engine.begin`` failed and report it."""
        self._restore()
        self._finish("seed_rejected")
        self.document.show_message(self.i18n.t("seed_rejected", text=token.text, reason=detail))
        self._publish(
            EventType.SEED_REJECTED,
            ConversionEventData(token.start, token.text, reason=reason, error=exc),
        )

    def _restore(self) -> None:
        self.document.insert_text(self.session.anchor, self.session.original_text)

    def _finish(self, event_name: str) -> None:
        """Single cleanup path shared by commit, cancel, rejection and disable."""
        self.engine.unsubscribe(self._on_engine_state_changed)
        self.session.clear()
        self._pending_check = False
        self._transition(event_name)

    def _on_engine_state_changed(self) -> None:
        if self._busy:
            logger.trace("Engine notification deferred")  # type: ignore[attr-defined]
            self._pending_check = True
            return
        self._check_engine()

    def _check_engine(self) -> None:
        if self._state is not State.CONVERTING:
            return
        if self.engine.is_converting():
            return
        self.finish()

    @contextmanager
    def _guard(self):
        self._busy = True
        try:
            yield
        finally:
            self._busy = False
        if self._pending_check:
            self._pending_check = False
            self._check_engine()

    def _transition(self, event_name: str) -> bool:
        if not can_transition(self._state, event_name):
            logger.trace("Ignored transition %r from %s", event_name, self._state)  # type: ignore[attr-defined]
            return False
        new_state = next_state(self._state, event_name)
        if self.debug and new_state is not self._state:
            logger.debug("State: %s → %s (on %r)", self._state, new_state, event_name)
        self._state = new_state
        return True

    def _publish(self, event_type: EventType, data) -> None:
        if self.bus is not None:
            self.bus.publish(Event(event_type, data, time.time()))
